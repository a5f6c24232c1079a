# shopfront/services/notification_service.py
from shopfront.celery_worker import celery_app
from shopfront.services.mailer import Mailer, make_a_nice_email
from shopfront.utils.settings import FRONTEND_URL
from shopfront.utils.logging import get_logger

logger = get_logger(__name__)


class NotificationService:
    """
    Serwis do wysyłania powiadomień.
    Używa Celery do asynchronicznego przetwarzania.
    """

    @staticmethod
    def send_reset_token(email: str, reset_token: str):
        """
        Kolejkuje maila z tokenem resetu hasla. Bledy brokera leca do wywolujacego,
        to on decyduje czy je pokazac.
        """
        send_reset_email_task.delay(email, reset_token)


def reset_email_body(reset_token: str) -> str:
    return make_a_nice_email(
        "Your password reset token is here!"
        "<br/><br/>"
        f'<a href="{FRONTEND_URL}/reset?resetToken={reset_token}">Click here to reset</a>'
    )


@celery_app.task(name="shopfront.services.notification_service.send_reset_email_task")
def send_reset_email_task(email: str, reset_token: str):
    Mailer().send(
        to=email,
        subject="Your password reset token",
        html=reset_email_body(reset_token),
    )
    logger.info(f"[NOTIFICATION] Reset token sent to {email}")
    return {"email": email, "status": "sent"}
