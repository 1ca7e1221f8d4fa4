"""Mail service interface for outbound notifications."""
from typing import Protocol


class MailService(Protocol):
    def send(self, subject: str, message: str) -> None:
        """Deliver a notification; implementations may raise on transport errors."""
