"""Notification dispatcher port.

The review services call into the dispatcher after a successful
mutation. The dispatcher owns persistence, read tracking and email
forwarding; its failures are logged and never propagate into the
calling workflow operation.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol
from uuid import UUID

from src.domain.models.notification import NotificationType


class NotificationDispatcherProtocol(Protocol):
    """Protocol for emitting review notifications."""

    async def send(
        self,
        recipient_id: str,
        notification_type: NotificationType,
        title: str,
        message: str,
        application_id: UUID | None = None,
        action_url: str | None = None,
        send_email: bool = False,
    ) -> bool:
        """Deliver a notification to one recipient.

        Returns:
            True if the notification record was delivered. Never raises.
        """
        ...

    async def send_bulk(
        self,
        recipient_ids: Iterable[str],
        notification_type: NotificationType,
        title: str,
        message: str,
        application_id: UUID | None = None,
        action_url: str | None = None,
        send_email: bool = False,
    ) -> int:
        """Deliver the same notification to several recipients.

        Returns:
            Number of recipients the notification was delivered to.
        """
        ...
