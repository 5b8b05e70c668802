"""
Transient user notifications (toasts).

Every surfaced failure and every confirmed action produces exactly one
notification. Front ends subscribe to render them; they are also logged.
"""

import logging
from collections import deque
from enum import Enum
from typing import Callable, Optional

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class NotificationVariant(str, Enum):
    DEFAULT = "default"
    DESTRUCTIVE = "destructive"


class Notification(BaseModel):
    """A single transient message shown to the user."""

    title: str = Field(..., description="Short headline")
    description: Optional[str] = Field(None, description="Optional detail line")
    variant: NotificationVariant = Field(default=NotificationVariant.DEFAULT)

    model_config = {"frozen": True}

    @property
    def is_error(self) -> bool:
        return self.variant == NotificationVariant.DESTRUCTIVE


NotificationListener = Callable[[Notification], None]


class Notifier:
    """
    Dispatches notifications to listeners and keeps a short history.

    The history is bounded so a long-running session does not grow it
    without limit.
    """

    def __init__(self, history_size: int = 50):
        self._history: deque[Notification] = deque(maxlen=history_size)
        self._listeners: list[NotificationListener] = []

    @property
    def history(self) -> list[Notification]:
        return list(self._history)

    def subscribe(self, listener: NotificationListener) -> Callable[[], None]:
        """
        Register a listener.

        Returns:
            A callable that removes the listener again
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def notify(
        self,
        title: str,
        description: Optional[str] = None,
        variant: NotificationVariant = NotificationVariant.DEFAULT,
    ) -> Notification:
        notification = Notification(title=title, description=description, variant=variant)
        self._history.append(notification)

        suffix = f": {description}" if description else ""
        if notification.is_error:
            logger.warning(f"{title}{suffix}")
        else:
            logger.info(f"{title}{suffix}")

        for listener in list(self._listeners):
            listener(notification)
        return notification

    def success(self, title: str, description: Optional[str] = None) -> Notification:
        return self.notify(title, description)

    def error(self, title: str, description: Optional[str] = None) -> Notification:
        return self.notify(title, description, NotificationVariant.DESTRUCTIVE)

    def clear(self) -> None:
        self._history.clear()
