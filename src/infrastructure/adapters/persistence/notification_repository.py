"""PostgreSQL notification repository."""

from __future__ import annotations

from uuid import UUID

from sqlalchemy import false, select, update
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from src.application.ports.notification_repository import (
    NotificationRepositoryProtocol,
)
from src.domain.errors import ReviewNotFoundError
from src.domain.models.notification import ApplicationNotification
from src.infrastructure.adapters.persistence.errors import store_errors
from src.infrastructure.adapters.persistence.mapping import (
    notification_from_row,
    to_row_values,
)
from src.infrastructure.adapters.persistence.models import ApplicationNotificationRow

_notifications = ApplicationNotificationRow.__table__


class PostgresNotificationRepository(NotificationRepositoryProtocol):
    """PostgreSQL-backed notification store."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def save(self, notification: ApplicationNotification) -> None:
        with store_errors("save_notification"):
            async with self._session_factory() as session:
                await session.execute(
                    _notifications.insert().values(**to_row_values(notification))
                )
                await session.commit()

    async def get(self, notification_id: UUID) -> ApplicationNotification | None:
        with store_errors("get_notification"):
            async with self._session_factory() as session:
                result = await session.execute(
                    select(_notifications).where(_notifications.c.id == notification_id)
                )
                row = result.mappings().one_or_none()
        return notification_from_row(row) if row is not None else None

    async def update(self, notification: ApplicationNotification) -> ApplicationNotification:
        values = to_row_values(notification)
        values.pop("id")
        with store_errors("update_notification"):
            async with self._session_factory() as session:
                result = await session.execute(
                    update(_notifications)
                    .where(_notifications.c.id == notification.id)
                    .values(**values)
                    .returning(*_notifications.c)
                )
                row = result.mappings().one_or_none()
                if row is None:
                    raise ReviewNotFoundError("Notification", notification.id)
                await session.commit()
        return notification_from_row(row)

    async def list_for_recipient(
        self,
        recipient_id: str,
        unread_only: bool = False,
    ) -> list[ApplicationNotification]:
        statement = select(_notifications).where(
            _notifications.c.recipient_id == recipient_id
        )
        if unread_only:
            statement = statement.where(_notifications.c.is_read == false())
        with store_errors("list_notifications"):
            async with self._session_factory() as session:
                result = await session.execute(
                    statement.order_by(_notifications.c.created_date.desc())
                )
                rows = result.mappings().all()
        return [notification_from_row(row) for row in rows]
