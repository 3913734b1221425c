"""PostgreSQL comment repository."""

from __future__ import annotations

from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from src.application.ports.comment_repository import CommentRepositoryProtocol
from src.domain.errors import ReviewNotFoundError
from src.domain.models.comment import ApplicationComment
from src.infrastructure.adapters.persistence.errors import store_errors
from src.infrastructure.adapters.persistence.mapping import (
    comment_from_row,
    to_row_values,
)
from src.infrastructure.adapters.persistence.models import ApplicationCommentRow

_comments = ApplicationCommentRow.__table__


class PostgresCommentRepository(CommentRepositoryProtocol):
    """PostgreSQL-backed comment store. Rows are never deleted."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def save(self, comment: ApplicationComment) -> None:
        with store_errors("save_comment"):
            async with self._session_factory() as session:
                try:
                    await session.execute(
                        _comments.insert().values(**to_row_values(comment))
                    )
                    await session.commit()
                except IntegrityError as exc:
                    await session.rollback()
                    raise ValueError(f"Comment already exists: {comment.id}") from exc

    async def get(self, comment_id: UUID) -> ApplicationComment | None:
        with store_errors("get_comment"):
            async with self._session_factory() as session:
                result = await session.execute(
                    select(_comments).where(_comments.c.id == comment_id)
                )
                row = result.mappings().one_or_none()
        return comment_from_row(row) if row is not None else None

    async def update(self, comment: ApplicationComment) -> ApplicationComment:
        values = to_row_values(comment)
        values.pop("id")
        with store_errors("update_comment"):
            async with self._session_factory() as session:
                result = await session.execute(
                    update(_comments)
                    .where(_comments.c.id == comment.id)
                    .values(**values)
                    .returning(*_comments.c)
                )
                row = result.mappings().one_or_none()
                if row is None:
                    raise ReviewNotFoundError("Comment", comment.id)
                await session.commit()
        return comment_from_row(row)

    async def list_for_application(self, application_id: UUID) -> list[ApplicationComment]:
        with store_errors("list_comments"):
            async with self._session_factory() as session:
                result = await session.execute(
                    select(_comments)
                    .where(_comments.c.application_id == application_id)
                    .order_by(_comments.c.created_date)
                )
                rows = result.mappings().all()
        return [comment_from_row(row) for row in rows]
