# shopfront/tasks/reset_tokens.py
from datetime import datetime, timezone, timedelta

from shopfront.celery_worker import celery_app
from shopfront.data.database import SessionLocal
from shopfront.repos.user_repo import UserRepo
from shopfront.utils.settings import RESET_TOKEN_TTL_SECONDS
from shopfront.utils.logging import get_logger

logger = get_logger(__name__)


def clear_expired_reset_tokens(db, now: datetime | None = None) -> int:
    """
    Czysci token i expiry razem (oba null) dla tokenow, ktore i tak nie przejda
    juz sprawdzenia w reset_password.
    """
    now = now or datetime.now(timezone.utc)
    cleared = UserRepo(db).clear_expired_reset_tokens(
        older_than=now - timedelta(seconds=RESET_TOKEN_TTL_SECONDS)
    )
    logger.info(f"Cleared {cleared} expired reset tokens")
    return cleared


@celery_app.task(name="shopfront.tasks.reset_tokens.clear_expired_reset_tokens_task")
def clear_expired_reset_tokens_task():
    logger.info("Clear expired reset tokens task started")

    db = SessionLocal()
    try:
        return clear_expired_reset_tokens(db)
    finally:
        db.close()
