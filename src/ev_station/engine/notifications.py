"""User notifications — fire-and-forget, no delivery guarantee."""

from __future__ import annotations

import logging
from typing import Protocol

from ev_station.models.records import Notification

logger = logging.getLogger(__name__)


class NotificationSink(Protocol):
    def notify(self, user_id: int, message: str, value: float | None = None) -> None: ...


class NotificationOutbox:
    """Default sink: keeps every notification in memory and logs it."""

    def __init__(self) -> None:
        self._messages: list[Notification] = []

    def notify(self, user_id: int, message: str, value: float | None = None) -> None:
        self._messages.append(Notification(user_id=user_id, message=message, value=value))
        if value is None:
            logger.info("[Notification for User ID: %d] %s", user_id, message)
        else:
            logger.info("[Notification for User ID: %d] %s %s", user_id, message, value)

    @property
    def messages(self) -> list[Notification]:
        return list(self._messages)

    def for_user(self, user_id: int) -> list[Notification]:
        return [n for n in self._messages if n.user_id == user_id]
