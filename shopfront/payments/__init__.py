"""Payment gateway factory.

get_gateway() / set_gateway() swap implementations:
- StripeGateway in production (PAYMENT_GATEWAY=stripe)
- FakeGateway for development and tests (PAYMENT_GATEWAY=fake)
"""

from shopfront.payments.port import Charge, PaymentDeclined, PaymentGateway, PaymentOutcomeUnknown
from shopfront.utils.settings import PAYMENT_GATEWAY, STRIPE_SECRET_KEY, PAYMENT_TIMEOUT_SECONDS

_current_gateway: PaymentGateway | None = None


def _build_gateway() -> PaymentGateway:
    if PAYMENT_GATEWAY == "fake":
        from shopfront.payments.fake_adapter import FakeGateway

        return FakeGateway()

    from shopfront.payments.stripe_adapter import StripeGateway

    return StripeGateway(api_key=STRIPE_SECRET_KEY, timeout=PAYMENT_TIMEOUT_SECONDS)


def get_gateway() -> PaymentGateway:
    global _current_gateway
    if _current_gateway is None:
        _current_gateway = _build_gateway()
    return _current_gateway


def set_gateway(gateway: PaymentGateway) -> None:
    global _current_gateway
    _current_gateway = gateway


def reset_gateway() -> None:
    global _current_gateway
    _current_gateway = None


__all__ = [
    "Charge",
    "PaymentDeclined",
    "PaymentGateway",
    "PaymentOutcomeUnknown",
    "get_gateway",
    "set_gateway",
    "reset_gateway",
]
