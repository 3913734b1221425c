"""Notification repository stub implementation."""

from __future__ import annotations

from uuid import UUID

from src.application.ports.notification_repository import (
    NotificationRepositoryProtocol,
)
from src.domain.errors import ReviewNotFoundError
from src.domain.models.notification import ApplicationNotification


class NotificationRepositoryStub(NotificationRepositoryProtocol):
    """In-memory stub implementation of NotificationRepositoryProtocol.

    Set ``fail_saves`` to simulate an unreachable store.
    """

    def __init__(self) -> None:
        self._notifications: dict[UUID, ApplicationNotification] = {}
        self.fail_saves = False

    async def save(self, notification: ApplicationNotification) -> None:
        if self.fail_saves:
            raise ConnectionError("notification store unavailable")
        self._notifications[notification.id] = notification

    async def get(self, notification_id: UUID) -> ApplicationNotification | None:
        return self._notifications.get(notification_id)

    async def update(self, notification: ApplicationNotification) -> ApplicationNotification:
        if notification.id not in self._notifications:
            raise ReviewNotFoundError("Notification", notification.id)
        self._notifications[notification.id] = notification
        return notification

    async def list_for_recipient(
        self,
        recipient_id: str,
        unread_only: bool = False,
    ) -> list[ApplicationNotification]:
        return sorted(
            (
                n
                for n in self._notifications.values()
                if n.recipient_id == recipient_id and not (unread_only and n.is_read)
            ),
            key=lambda n: n.created_date,
            reverse=True,
        )

    # Test helper methods

    def all(self) -> list[ApplicationNotification]:
        """Every stored notification, oldest first."""
        return sorted(self._notifications.values(), key=lambda n: n.created_date)

    def for_recipient(self, recipient_id: str) -> list[ApplicationNotification]:
        return [n for n in self.all() if n.recipient_id == recipient_id]

    def clear(self) -> None:
        self._notifications.clear()
