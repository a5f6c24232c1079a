# shopfront/domain/session.py
from dataclasses import dataclass, field
from typing import Any

from shopfront.domain.permissions import Permission


@dataclass(frozen=True)
class SessionContext:
    """Tozsamosc wywolujacego dla jednego requestu. Tylko do odczytu."""

    caller_id: int | None = None
    caller: Any = None
    permissions: frozenset[Permission] = field(default_factory=frozenset)

    @property
    def is_authenticated(self) -> bool:
        return self.caller_id is not None

    @classmethod
    def anonymous(cls) -> "SessionContext":
        return cls()

    @classmethod
    def for_user(cls, user) -> "SessionContext":
        return cls(caller_id=user.id, caller=user, permissions=user.permission_set)
