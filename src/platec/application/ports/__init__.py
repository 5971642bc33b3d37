from platec.application.exceptions import NotificationError
from platec.application.ports.notification_sender import NotificationSender

__all__ = ["NotificationError", "NotificationSender"]
