# shopfront/celery_worker.py
from celery import Celery
from celery.signals import setup_logging

from shopfront.utils.logging import configure_logging
from shopfront.utils.settings import CELERY_BROKER_URL, CELERY_RESULT_BACKEND

celery_app = Celery(
    "shopfront",
    broker=CELERY_BROKER_URL,
    backend=CELERY_RESULT_BACKEND,
)

# WAŻNE: Explicite importuj taski, żeby Celery je zarejestrował
celery_app.conf.imports = (
    "shopfront.tasks.reset_tokens",
    "shopfront.services.notification_service",
)

# Konfiguracja beat schedule
celery_app.conf.beat_schedule = {
    "clear-expired-reset-tokens": {
        "task": "shopfront.tasks.reset_tokens.clear_expired_reset_tokens_task",
        "schedule": 600.0,  # co 10 minut
    },
}

celery_app.conf.timezone = "UTC"


@setup_logging.connect
def configure_worker_logging(**kwargs):
    # podpiety receiver => celery nie przejmuje root loggera, worker loguje jak aplikacja
    configure_logging()
