"""Notification dispatcher service.

Persists notification records for review events and forwards them to
the external email sender on a best-effort basis.

Delivery Rules:
- The record is written first and marked sent; that write is what
  "delivered" means.
- Email is attempted only when requested and when the recipient has a
  known address. Email failures are logged and never turn a delivered
  notification into a failure.
- Nothing here raises into the calling workflow operation.
"""

from __future__ import annotations

from collections.abc import Iterable
from uuid import UUID

from src.application.ports.board_directory import BoardDirectoryProtocol
from src.application.ports.email_sender import EmailSenderProtocol
from src.application.ports.notification_repository import (
    NotificationRepositoryProtocol,
)
from src.application.ports.time_authority import TimeAuthorityProtocol
from src.application.services.base import LoggingMixin
from src.domain.models.notification import ApplicationNotification, NotificationType


class NotificationDispatcherService(LoggingMixin):
    """Delivers review notifications and tracks their read state.

    Example:
        >>> dispatcher = NotificationDispatcherService(
        ...     notification_repo=notification_repo,
        ...     board_directory=board_directory,
        ...     time_authority=time_authority,
        ...     email_sender=email_sender,
        ... )
        >>> await dispatcher.send(
        ...     applicant_id,
        ...     NotificationType.APPLICATION_SUBMITTED,
        ...     "Application Submitted",
        ...     "Your application is pending review.",
        ...     application_id=application.id,
        ...     send_email=True,
        ... )
        True
    """

    def __init__(
        self,
        notification_repo: NotificationRepositoryProtocol,
        board_directory: BoardDirectoryProtocol,
        time_authority: TimeAuthorityProtocol,
        email_sender: EmailSenderProtocol | None = None,
    ) -> None:
        """Initialize the dispatcher.

        Args:
            notification_repo: Storage for notification records.
            board_directory: Used to resolve recipient email addresses.
            time_authority: Clock for sent/read timestamps.
            email_sender: Optional outbound email transport. When absent,
                notifications are recorded but never emailed.
        """
        self._notification_repo = notification_repo
        self._board_directory = board_directory
        self._time = time_authority
        self._email_sender = email_sender
        self._init_logger(component="notifications")

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
        """Persist a notification and optionally email it.

        Returns:
            True if the record was stored, False if storage failed.
        """
        log = self._log_operation(
            "send_notification",
            recipient_id=recipient_id,
            notification_type=notification_type.value,
            application_id=str(application_id) if application_id else None,
        )
        now = self._time.utcnow()
        notification = ApplicationNotification(
            recipient_id=recipient_id,
            type=notification_type,
            title=title,
            message=message,
            application_id=application_id,
            action_url=action_url,
            created_date=now,
        ).marked_sent(now)

        try:
            await self._notification_repo.save(notification)
        except Exception as exc:
            log.error("notification_store_failed", exc_info=exc)
            return False

        if send_email:
            await self._send_email(notification)

        log.info("notification_sent", notification_id=str(notification.id))
        return True

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
        """Send the same notification to several recipients.

        Returns:
            Number of recipients whose notification was stored.
        """
        delivered = 0
        for recipient_id in recipient_ids:
            if await self.send(
                recipient_id,
                notification_type,
                title,
                message,
                application_id=application_id,
                action_url=action_url,
                send_email=send_email,
            ):
                delivered += 1
        return delivered

    async def _send_email(self, notification: ApplicationNotification) -> None:
        if self._email_sender is None:
            return
        bound = self._log_operation(
            "send_notification_email",
            notification_id=str(notification.id),
            recipient_id=notification.recipient_id,
        )
        try:
            address = await self._board_directory.get_email(notification.recipient_id)
            if not address:
                bound.info("notification_email_skipped", reason="no_address")
                return
            sent = await self._email_sender.send_email(
                address, notification.title, notification.message
            )
            if not sent:
                bound.warning("notification_email_failed")
                return
            await self._notification_repo.update(
                notification.marked_emailed(self._time.utcnow())
            )
        except Exception as exc:
            bound.error("notification_email_failed", exc_info=exc)

    async def get_unread(self, user_id: str) -> list[ApplicationNotification]:
        """List a user's unread, unexpired notifications, newest first."""
        now = self._time.utcnow()
        notifications = await self._notification_repo.list_for_recipient(
            user_id, unread_only=True
        )
        return [n for n in notifications if not n.is_expired(now)]

    async def unread_count(self, user_id: str) -> int:
        return len(await self.get_unread(user_id))

    async def mark_as_read(self, notification_id: UUID, user_id: str) -> bool:
        """Mark one of the user's notifications as read.

        Returns:
            True if the notification changed state. Notifications owned by
            another user are left untouched.
        """
        notification = await self._notification_repo.get(notification_id)
        if notification is None or notification.recipient_id != user_id:
            return False
        if notification.is_read:
            return False
        await self._notification_repo.update(
            notification.marked_read(self._time.utcnow())
        )
        return True

    async def mark_all_as_read(self, user_id: str) -> int:
        """Mark every unread notification of a user as read.

        Returns:
            Number of notifications marked.
        """
        now = self._time.utcnow()
        unread = await self._notification_repo.list_for_recipient(
            user_id, unread_only=True
        )
        for notification in unread:
            await self._notification_repo.update(notification.marked_read(now))
        self._log_operation("mark_all_as_read", user_id=user_id).info(
            "notifications_marked_read", count=len(unread)
        )
        return len(unread)
