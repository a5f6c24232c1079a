"""Payment gateway port.

Checkout depends only on this contract, so the Stripe adapter and the fake
adapter are interchangeable.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class Charge:
    """A captured charge as reported by the gateway."""

    id: str
    amount: int


class PaymentDeclined(Exception):
    """The gateway refused the charge, or could not be reached before it was sent.

    No money moved.
    """


class PaymentOutcomeUnknown(Exception):
    """The request reached the gateway but no usable answer came back
    (timeout, dropped connection, gateway-side 5xx).

    The charge may or may not have been captured.
    """


class PaymentGateway(ABC):
    @abstractmethod
    def charge(self, amount: int, currency: str, source: str) -> Charge:
        """Capture ``amount`` minor units from ``source``.

        Raises PaymentDeclined or PaymentOutcomeUnknown.
        """
        ...
