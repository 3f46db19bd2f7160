"""
User notifications (toasts).

Every success, error and informational message meant for the user flows
through a 'Notifier'. The session manager never talks to a UI directly; a
front end subscribes by implementing 'notify'.
"""

from abc import ABC, abstractmethod
from enum import StrEnum

from loguru import logger
from pydantic import BaseModel

from ai_notebook.utils.time import get_current_timestamp


class NotificationType(StrEnum):
    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"


class Notification(BaseModel):
    id: int
    message: str
    type: NotificationType = NotificationType.INFO


class Notifier(ABC):
    @abstractmethod
    def notify(self, message: str, type: NotificationType = NotificationType.INFO) -> Notification:
        pass


class InMemoryNotifier(Notifier):
    """Collects notifications in arrival order until they are dismissed."""

    def __init__(self) -> None:
        self.notifications: list[Notification] = []
        self._last_id = 0

    def notify(self, message: str, type: NotificationType = NotificationType.INFO) -> Notification:
        self._last_id = max(self._last_id + 1, get_current_timestamp())
        notification = Notification(id=self._last_id, message=message, type=type)
        self.notifications.append(notification)
        logger.debug(f"Notification ({type}): {message}")
        return notification

    def dismiss(self, notification_id: int) -> None:
        self.notifications = [n for n in self.notifications if n.id != notification_id]
