from datetime import datetime, timezone, timedelta

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from shopfront.data.models.user import UserModel
from shopfront.domain.errors import (
    EmailTaken,
    InvalidCredential,
    InvalidOrExpiredToken,
    Mismatch,
    NotFound,
)
from shopfront.domain.permissions import DEFAULT_PERMISSIONS, Permission, normalize_permissions
from shopfront.domain.session import SessionContext
from shopfront.repos.user_repo import UserRepo
from shopfront.services.auth_guard import require_authenticated, require_permission
from shopfront.services.notification_service import NotificationService
from shopfront.services.security import (
    generate_reset_token,
    hash_password,
    issue_token,
    verify_password,
)
from shopfront.utils.settings import RESET_TOKEN_TTL_SECONDS
from shopfront.utils.logging import get_logger

logger = get_logger(__name__)

PERMISSION_ADMINS = (Permission.ADMIN, Permission.PERMISSIONUPDATE)


def _session_token(user: UserModel) -> str:
    return issue_token({"userId": user.id})


class CredentialService:
    """Rejestracja, logowanie, reset hasla i zmiana uprawnien."""

    def __init__(self, db: Session, notifier: NotificationService | None = None):
        self.repo = UserRepo(db)
        self.notifier = notifier or NotificationService()

    def signup(self, name: str, email: str, password: str) -> tuple[UserModel, str]:
        email = email.lower()
        if self.repo.get_user_by_email(email):
            raise EmailTaken("An account with that email already exists")

        user = UserModel(
            name=name,
            email=email,
            password=hash_password(password),
            # tylko USER - bez domyslnego ADMIN
            permissions=[p.value for p in DEFAULT_PERMISSIONS],
        )
        try:
            created = self.repo.create_user(user)
        except IntegrityError as e:
            self.repo.rollback()
            raise EmailTaken("An account with that email already exists") from e

        logger.info(f"Utworzono uzytkownika {created.id}")
        return created, _session_token(created)

    def signin(self, email: str, password: str) -> tuple[UserModel, str]:
        user = self.repo.get_user_by_email(email.lower())

        # weryfikacja hasha w obu sciezkach - ten sam koszt czasowy
        valid = verify_password(password, user.password if user else None)
        if not user:
            raise NotFound(f"No such user found for email {email}")
        if not valid:
            raise InvalidCredential("Invalid password!")

        return user, _session_token(user)

    def signout(self) -> dict:
        return {"message": "Goodbye!"}

    def request_reset(self, email: str) -> dict:
        ack = {"message": "Thanks!"}
        user = self.repo.get_user_by_email(email.lower())
        if not user:
            # ta sama odpowiedz - nie zdradzamy czy konto istnieje
            logger.info("Password reset requested for an unknown email")
            return ack

        user.reset_token = generate_reset_token()
        user.reset_token_expiry = datetime.now(timezone.utc) + timedelta(seconds=RESET_TOKEN_TTL_SECONDS)
        self.repo.save(user)

        try:
            self.notifier.send_reset_token(user.email, user.reset_token)
        except Exception as e:
            logger.error(f"Failed to dispatch reset email for user {user.id}: {e}")

        return ack

    def reset_password(self, reset_token: str, password: str, confirm_password: str) -> tuple[UserModel, str]:
        if password != confirm_password:
            raise Mismatch("Your passwords don't match!")

        not_before = datetime.now(timezone.utc) - timedelta(seconds=RESET_TOKEN_TTL_SECONDS)
        user = self.repo.get_user_by_reset_token(reset_token, not_before)
        if not user:
            raise InvalidOrExpiredToken("This token is either invalid or expired!")

        # haslo i oba pola resetu w jednym commicie
        user.password = hash_password(password)
        user.reset_token = None
        user.reset_token_expiry = None
        updated = self.repo.save(user)

        logger.info(f"Haslo uzytkownika {updated.id} zresetowane")
        return updated, _session_token(updated)

    def update_permissions(self, ctx: SessionContext, target_user_id: int, permissions) -> UserModel:
        require_authenticated(ctx, "You must be logged in!")
        require_permission(ctx, PERMISSION_ADMINS)

        target = self.repo.get_user(target_user_id)
        if not target:
            raise NotFound(f"No user found for id {target_user_id}")

        # pelna podmiana, nie merge
        target.permissions = [p.value for p in normalize_permissions(permissions)]
        updated = self.repo.save(target)

        logger.info(f"Uzytkownik {ctx.caller_id} zmienil uprawnienia uzytkownika {target_user_id}")
        return updated

    def me(self, ctx: SessionContext) -> UserModel | None:
        if not ctx.is_authenticated:
            return None
        return self.repo.get_user_with_cart(ctx.caller_id)

    def list_users(self, ctx: SessionContext) -> list[UserModel]:
        require_permission(ctx, PERMISSION_ADMINS)
        return self.repo.list_users()
