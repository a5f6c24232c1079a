# shopfront/services/mailer.py
import smtplib
from email.message import EmailMessage

from shopfront.utils.settings import MAIL_HOST, MAIL_PORT, MAIL_USER, MAIL_PASS, MAIL_FROM


def make_a_nice_email(text: str) -> str:
    return f"""
    <div className="email" style="
        border: 1px solid black;
        padding: 20px;
        font-family: sans-serif;
        line-height: 2;
        font-size: 20px;
    ">
        <h2>Hello There!</h2>
        <p>{text}</p>
        <p>Shopfront</p>
    </div>
    """


class Mailer:
    """Kanal powiadomien: send(to, subject, html) przez SMTP."""

    def __init__(self, host: str = MAIL_HOST, port: int = MAIL_PORT, timeout: int = 10):
        self.host = host
        self.port = port
        self.timeout = timeout

    def send(self, to: str, subject: str, html: str) -> None:
        msg = EmailMessage()
        msg["From"] = MAIL_FROM
        msg["To"] = to
        msg["Subject"] = subject
        msg.set_content("This message requires an HTML capable mail client.")
        msg.add_alternative(html, subtype="html")

        with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as smtp:
            if MAIL_USER:
                smtp.login(MAIL_USER, MAIL_PASS)
            smtp.send_message(msg)
