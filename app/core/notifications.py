"""Mail notifications sent after catalog changes."""
import logging
import smtplib
from email.mime.text import MIMEText
from typing import List, Optional

from app.config import Settings

logger = logging.getLogger(__name__)


class LocalMailService:
    """Writes mails to the application log instead of sending them."""

    def __init__(self, mail_from: str, mail_to: str):
        self.mail_from = mail_from
        self.mail_to = mail_to

    def send(self, subject: str, message: str) -> None:
        logger.info(
            f"Mail from {self.mail_from} to {self.mail_to}, "
            f"with {self.__class__.__name__}. Subject: {subject}. Message: {message}"
        )


class SmtpMailService:
    """Sends mails through an SMTP relay."""

    def __init__(
        self,
        host: str,
        port: int,
        mail_from: str,
        mail_to: List[str],
        username: Optional[str] = None,
        password: Optional[str] = None,
    ):
        self.host = host
        self.port = port
        self.mail_from = mail_from
        self.mail_to = mail_to
        self.username = username
        self.password = password

    def send(self, subject: str, message: str) -> None:
        msg = MIMEText(message, "plain")
        msg["Subject"] = subject
        msg["From"] = self.mail_from
        msg["To"] = ", ".join(self.mail_to)

        with smtplib.SMTP(self.host, self.port) as server:
            server.starttls()
            if self.username and self.password:
                server.login(self.username, self.password)
            server.send_message(msg)

        logger.info(f"Mail sent to {len(self.mail_to)} recipients: {subject}")


def build_mail_service(settings: Settings):
    """Pick SMTP delivery when a relay is configured, local logging otherwise."""
    recipients = [email.strip() for email in settings.MAIL_TO.split(",") if email.strip()]
    if settings.SMTP_HOST and recipients:
        return SmtpMailService(
            host=settings.SMTP_HOST,
            port=settings.SMTP_PORT,
            mail_from=settings.MAIL_FROM,
            mail_to=recipients,
            username=settings.SMTP_USERNAME,
            password=settings.SMTP_PASSWORD,
        )
    logger.info("SMTP not configured, mails are written to the log")
    return LocalMailService(settings.MAIL_FROM, settings.MAIL_TO)
