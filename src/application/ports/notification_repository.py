"""Application notification repository port."""

from __future__ import annotations

from typing import Protocol
from uuid import UUID

from src.domain.models.notification import ApplicationNotification


class NotificationRepositoryProtocol(Protocol):
    """Protocol for notification record storage."""

    async def save(self, notification: ApplicationNotification) -> None:
        """Store a new notification record."""
        ...

    async def get(self, notification_id: UUID) -> ApplicationNotification | None:
        """Retrieve a notification by ID, or None."""
        ...

    async def update(self, notification: ApplicationNotification) -> ApplicationNotification:
        """Replace a stored notification.

        Raises:
            ReviewNotFoundError: If the notification doesn't exist.
        """
        ...

    async def list_for_recipient(
        self,
        recipient_id: str,
        unread_only: bool = False,
    ) -> list[ApplicationNotification]:
        """List a recipient's notifications, newest first."""
        ...
