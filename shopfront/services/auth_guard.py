# shopfront/services/auth_guard.py
from typing import Iterable

from shopfront.domain.errors import Unauthenticated, Unauthorized
from shopfront.domain.permissions import Permission
from shopfront.domain.session import SessionContext
from shopfront.utils.logging import get_logger

logger = get_logger(__name__)


def require_authenticated(ctx: SessionContext, message: str = "You must be logged in to do that!") -> None:
    if not ctx.is_authenticated:
        raise Unauthenticated(message)


def has_permission(ctx: SessionContext, required: Iterable[Permission]) -> bool:
    #brak ukrytego ADMIN - licza sie tylko wymienione uprawnienia
    return bool(ctx.permissions & frozenset(required))


def require_permission(ctx: SessionContext, required: Iterable[Permission]) -> None:
    required = frozenset(required)
    require_authenticated(ctx)
    if not has_permission(ctx, required):
        logger.info(f"Uzytkownik {ctx.caller_id} bez uprawnien {sorted(p.value for p in required)}")
        raise Unauthorized(
            "You do not have sufficient permissions: "
            f"{', '.join(sorted(p.value for p in required))}. "
            f"You have: {', '.join(sorted(p.value for p in ctx.permissions)) or 'none'}"
        )
