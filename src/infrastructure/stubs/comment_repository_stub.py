"""Comment repository stub implementation."""

from __future__ import annotations

from uuid import UUID

from src.application.ports.comment_repository import CommentRepositoryProtocol
from src.domain.errors import ReviewNotFoundError
from src.domain.models.comment import ApplicationComment


class CommentRepositoryStub(CommentRepositoryProtocol):
    """In-memory stub implementation of CommentRepositoryProtocol.

    NOT suitable for production use.
    """

    def __init__(self) -> None:
        self._comments: dict[UUID, ApplicationComment] = {}

    async def save(self, comment: ApplicationComment) -> None:
        """Store a new comment.

        Raises:
            ValueError: If comment.id already exists.
        """
        if comment.id in self._comments:
            raise ValueError(f"Comment already exists: {comment.id}")
        self._comments[comment.id] = comment

    async def get(self, comment_id: UUID) -> ApplicationComment | None:
        return self._comments.get(comment_id)

    async def update(self, comment: ApplicationComment) -> ApplicationComment:
        if comment.id not in self._comments:
            raise ReviewNotFoundError("Comment", comment.id)
        self._comments[comment.id] = comment
        return comment

    async def list_for_application(self, application_id: UUID) -> list[ApplicationComment]:
        return sorted(
            (c for c in self._comments.values() if c.application_id == application_id),
            key=lambda c: c.created_date,
        )

    # Test helper methods

    def clear(self) -> None:
        self._comments.clear()
