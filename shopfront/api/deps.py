# shopfront/api/deps.py
from fastapi import Cookie, Depends, Response
from sqlalchemy.orm import Session

from shopfront.data.database import get_db
from shopfront.domain.session import SessionContext
from shopfront.payments import PaymentGateway, get_gateway
from shopfront.repos.user_repo import UserRepo
from shopfront.services.lock_service import LockService
from shopfront.services.notification_service import NotificationService
from shopfront.services.security import verify_token
from shopfront.utils.settings import SESSION_COOKIE_NAME, SESSION_COOKIE_MAX_AGE

_lock_service: LockService | None = None


def get_session_context(
    token: str | None = Cookie(default=None, alias=SESSION_COOKIE_NAME),
    db: Session = Depends(get_db),
) -> SessionContext:
    #brak/niepoprawny token -> anonimowa sesja, decyzja nalezy do operacji
    claims = verify_token(token)
    if not claims or "userId" not in claims:
        return SessionContext.anonymous()

    user = UserRepo(db).get_user(claims["userId"])
    if not user:
        return SessionContext.anonymous()
    return SessionContext.for_user(user)


def get_payment_gateway() -> PaymentGateway:
    return get_gateway()


def get_lock_service() -> LockService:
    global _lock_service
    if _lock_service is None:
        _lock_service = LockService()
    return _lock_service


def get_notifier() -> NotificationService:
    return NotificationService()


def set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=SESSION_COOKIE_NAME,
        value=token,
        max_age=SESSION_COOKIE_MAX_AGE,
        httponly=True,
        samesite="lax",
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(key=SESSION_COOKIE_NAME, httponly=True, samesite="lax")
