"""Outbound notification port."""

from abc import ABC, abstractmethod


class NotificationSender(ABC):
    """Sends notifications (emails) to users.

    Implementations raise NotificationError when delivery fails.
    """

    @abstractmethod
    async def send_email(self, to_address: str, subject: str, html_body: str) -> None:
        """Send an HTML email to a single recipient."""
