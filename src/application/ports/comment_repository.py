"""Application comment repository port."""

from __future__ import annotations

from typing import Protocol
from uuid import UUID

from src.domain.models.comment import ApplicationComment


class CommentRepositoryProtocol(Protocol):
    """Protocol for discussion comment storage.

    Comments are never removed from storage; soft deletion is an update.
    """

    async def save(self, comment: ApplicationComment) -> None:
        """Store a new comment.

        Raises:
            ValueError: If comment.id already exists.
        """
        ...

    async def get(self, comment_id: UUID) -> ApplicationComment | None:
        """Retrieve a comment by ID (deleted ones included), or None."""
        ...

    async def update(self, comment: ApplicationComment) -> ApplicationComment:
        """Replace a stored comment.

        Raises:
            ReviewNotFoundError: If the comment doesn't exist.
        """
        ...

    async def list_for_application(self, application_id: UUID) -> list[ApplicationComment]:
        """List every comment on an application, deleted ones included.

        Returns:
            Comments ordered by created_date ascending.
        """
        ...
