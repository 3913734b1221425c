"""Application discussion comment domain model.

Comments form a tree per application through parent_comment_id. They
are soft-deleted only, so the discussion stays available for audit.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from uuid import UUID, uuid4


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True, eq=True)
class ApplicationComment:
    """A node in an application's discussion thread.

    Attributes:
        application_id: The application discussed.
        author_id: The user who wrote the comment.
        content: Comment text.
        is_private: True keeps the comment board-only; False may be
            surfaced to the applicant.
        is_information_request: Marks a formal request for more
            applicant data.
        has_response: Set on a parent once a reply is added.
        parent_comment_id: Parent node, None for top-level comments.
        is_edited: Set when the author changed the content.
        is_deleted: Soft-delete flag; comments are never removed.
    """

    application_id: UUID
    author_id: str
    content: str
    id: UUID = field(default_factory=uuid4)
    is_private: bool = True
    is_information_request: bool = False
    has_response: bool = False
    parent_comment_id: UUID | None = None
    created_date: datetime = field(default_factory=_utc_now)
    modified_date: datetime | None = None
    is_edited: bool = False
    is_deleted: bool = False

    @property
    def is_top_level(self) -> bool:
        return self.parent_comment_id is None

    def with_response(self) -> ApplicationComment:
        return replace(self, has_response=True)

    def edited(self, new_content: str, modified_at: datetime) -> ApplicationComment:
        return replace(
            self, content=new_content, modified_date=modified_at, is_edited=True
        )

    def soft_deleted(self, modified_at: datetime) -> ApplicationComment:
        return replace(self, is_deleted=True, modified_date=modified_at)
