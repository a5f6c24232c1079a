# shopfront/domain/errors.py
"""Bledy domenowe. Kazdy ma status HTTP i bezpieczny komunikat dla klienta."""


class ShopError(Exception):
    status_code = 400
    kind = "ShopError"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class Unauthenticated(ShopError):
    status_code = 401
    kind = "Unauthenticated"


class Unauthorized(ShopError):
    status_code = 403
    kind = "Unauthorized"


class Forbidden(ShopError):
    status_code = 403
    kind = "Forbidden"


class NotFound(ShopError):
    status_code = 404
    kind = "NotFound"


class InvalidCredential(ShopError):
    status_code = 401
    kind = "InvalidCredential"


class Mismatch(ShopError):
    status_code = 400
    kind = "Mismatch"


class InvalidOrExpiredToken(ShopError):
    status_code = 400
    kind = "InvalidOrExpiredToken"


class InvalidOperation(ShopError):
    status_code = 400
    kind = "InvalidOperation"


class EmailTaken(InvalidOperation):
    status_code = 409


class CheckoutInProgress(InvalidOperation):
    status_code = 409


class GatewayFailure(ShopError):
    status_code = 402
    kind = "GatewayFailure"


class PartialCommit(ShopError):
    """
    Bramka pobrala (albo mogla pobrac) pieniadze, ale zamowienie nie zostalo zapisane.
    Nie ponawiac - wymaga recznej rekonsyliacji po charge_id.
    """

    status_code = 502
    kind = "PartialCommit"
    retriable = False

    def __init__(self, message: str, charge_id: str | None = None, amount: int | None = None):
        super().__init__(message)
        self.charge_id = charge_id
        self.amount = amount
