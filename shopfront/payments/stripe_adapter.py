"""Stripe adapter (Charges API)."""

from uuid import uuid4

import stripe

from shopfront.payments.port import Charge, PaymentDeclined, PaymentGateway, PaymentOutcomeUnknown
from shopfront.utils.logging import get_logger

logger = get_logger(__name__)


class StripeGateway(PaymentGateway):
    def __init__(self, api_key: str, timeout: int) -> None:
        self.client = stripe.StripeClient(
            api_key,
            http_client=stripe.RequestsClient(timeout=timeout),
            # zero automatycznych ponowien: ponowiony charge moze obciazyc dwa razy
            max_network_retries=0,
        )

    def charge(self, amount: int, currency: str, source: str) -> Charge:
        try:
            result = self.client.v1.charges.create(
                params={
                    "amount": amount,
                    "currency": currency.lower(),
                    "source": source,
                },
                options={"idempotency_key": uuid4().hex},
            )
        except stripe.APIConnectionError as e:
            # nie wiadomo czy request dotarl do stripe
            logger.warning(f"Stripe connection error: {e.user_message or e}")
            raise PaymentOutcomeUnknown(str(e)) from e
        except stripe.APIError as e:
            # 5xx po stronie stripe: wynik nieustalony, charge mogl przejsc
            logger.warning(f"Stripe server error ({e.http_status}): {e.user_message or e}")
            raise PaymentOutcomeUnknown(str(e)) from e
        except stripe.StripeError as e:
            logger.warning(f"Stripe rejected charge: {e.user_message or e}")
            raise PaymentDeclined(e.user_message or "The payment could not be processed.") from e

        return Charge(id=result.id, amount=result.amount)
