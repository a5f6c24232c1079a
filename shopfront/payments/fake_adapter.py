"""Configurable fake payment gateway for development and testing."""

from uuid import uuid4

from shopfront.payments.port import Charge, PaymentDeclined, PaymentGateway, PaymentOutcomeUnknown


class FakeGateway(PaymentGateway):
    def __init__(self) -> None:
        self.mode: str = "succeed"
        self.failure_reason: str = "Your card was declined."
        self.captured_amount: int | None = None
        self.calls: list[dict] = []

    def configure(
        self,
        mode: str = "succeed",
        failure_reason: str = "Your card was declined.",
        captured_amount: int | None = None,
    ) -> None:
        """mode: "succeed", "decline" or "timeout"."""
        self.mode = mode
        self.failure_reason = failure_reason
        self.captured_amount = captured_amount

    def charge(self, amount: int, currency: str, source: str) -> Charge:
        self.calls.append({"amount": amount, "currency": currency, "source": source})

        if self.mode == "decline":
            raise PaymentDeclined(self.failure_reason)
        if self.mode == "timeout":
            raise PaymentOutcomeUnknown("Timed out waiting for the gateway")
        captured = amount if self.captured_amount is None else self.captured_amount
        return Charge(id=f"fake_ch_{uuid4().hex[:16]}", amount=captured)
