"""Discussion comment service.

Board discussion threads on an application. Comments are private to the
board by default; public comments and information requests are visible
to the applicant. Replies reference a parent comment on the same
application and mark it as answered.

Comments are never removed from storage: delete_comment is a soft
delete, and deleted comments are hidden from every listing.
"""

from __future__ import annotations

from uuid import UUID

import structlog

from src.application.dtos.operation_result import CommentResult, OperationResult
from src.application.ports.application_repository import (
    ApplicationRepositoryProtocol,
)
from src.application.ports.board_directory import BoardDirectoryProtocol
from src.application.ports.comment_repository import CommentRepositoryProtocol
from src.application.ports.notification_dispatcher import (
    NotificationDispatcherProtocol,
)
from src.application.ports.time_authority import TimeAuthorityProtocol
from src.application.services.base import LoggingMixin
from src.config.review_config import (
    DEFAULT_REVIEW_WORKFLOW_CONFIG,
    ReviewWorkflowConfig,
)
from src.domain.errors import (
    ReviewAuthorizationError,
    ReviewNotFoundError,
    ReviewStateError,
    ReviewValidationError,
)
from src.domain.models.comment import ApplicationComment
from src.domain.models.notification import NotificationType


def _require_content(content: str) -> str:
    text = (content or "").strip()
    if not text:
        raise ReviewValidationError.single("content", "Comment content is required")
    return text


class CommentService(LoggingMixin):
    """Adds, edits, soft-deletes and lists application comments."""

    def __init__(
        self,
        application_repo: ApplicationRepositoryProtocol,
        comment_repo: CommentRepositoryProtocol,
        board_directory: BoardDirectoryProtocol,
        notification_dispatcher: NotificationDispatcherProtocol,
        time_authority: TimeAuthorityProtocol,
        config: ReviewWorkflowConfig = DEFAULT_REVIEW_WORKFLOW_CONFIG,
    ) -> None:
        self._application_repo = application_repo
        self._comment_repo = comment_repo
        self._board_directory = board_directory
        self._notifications = notification_dispatcher
        self._time = time_authority
        self._config = config
        self._init_logger(component="comments")

    async def add_comment(
        self,
        application_id: UUID,
        author_id: str,
        content: str,
        is_private: bool = True,
        is_information_request: bool = False,
        parent_comment_id: UUID | None = None,
    ) -> CommentResult:
        """Add a comment or a reply to an application's discussion.

        Args:
            application_id: Application being discussed.
            author_id: User writing the comment.
            content: Comment text; must not be blank.
            is_private: Visible to board members only.
            is_information_request: Marks the comment as a question the
                applicant must answer.
            parent_comment_id: Comment being replied to, if any.

        Returns:
            CommentResult carrying the stored comment on success.
        """
        log = self._log_operation(
            "add_comment",
            application_id=str(application_id),
            author_id=author_id,
            is_private=is_private,
            is_reply=parent_comment_id is not None,
        )
        try:
            text = _require_content(content)
            if await self._application_repo.get(application_id) is None:
                raise ReviewNotFoundError("Application", application_id)

            parent: ApplicationComment | None = None
            if parent_comment_id is not None:
                parent = await self._comment_repo.get(parent_comment_id)
                if parent is None:
                    raise ReviewNotFoundError("Parent comment", parent_comment_id)
                if parent.is_deleted:
                    raise ReviewStateError("Cannot reply to a deleted comment")
                if parent.application_id != application_id:
                    raise ReviewValidationError.single(
                        "parent_comment_id",
                        "Parent comment belongs to a different application",
                    )

            comment = ApplicationComment(
                application_id=application_id,
                author_id=author_id,
                content=text,
                is_private=is_private,
                is_information_request=is_information_request,
                parent_comment_id=parent_comment_id,
                created_date=self._time.utcnow(),
            )
            await self._comment_repo.save(comment)
            if parent is not None and not parent.has_response:
                await self._comment_repo.update(parent.with_response())
        except Exception as exc:
            return self._failure(log, exc, CommentResult)

        log.info("comment_added", comment_id=str(comment.id))
        if not is_private or is_information_request:
            await self._notify_board(comment, log)
        return CommentResult(succeeded=True, comment=comment)

    async def update_comment(
        self,
        comment_id: UUID,
        author_id: str,
        new_content: str,
    ) -> OperationResult:
        """Edit a comment; only its author may do so."""
        log = self._log_operation(
            "update_comment", comment_id=str(comment_id), author_id=author_id
        )
        try:
            text = _require_content(new_content)
            comment = await self._load_owned(comment_id, author_id)
            if comment.is_deleted:
                raise ReviewStateError("Deleted comments cannot be edited")
            await self._comment_repo.update(comment.edited(text, self._time.utcnow()))
        except Exception as exc:
            return self._failure(log, exc)

        log.info("comment_updated")
        return OperationResult.success()

    async def delete_comment(self, comment_id: UUID, author_id: str) -> OperationResult:
        """Soft-delete a comment; only its author may do so."""
        log = self._log_operation(
            "delete_comment", comment_id=str(comment_id), author_id=author_id
        )
        try:
            comment = await self._load_owned(comment_id, author_id)
            if not comment.is_deleted:
                await self._comment_repo.update(
                    comment.soft_deleted(self._time.utcnow())
                )
        except Exception as exc:
            return self._failure(log, exc)

        log.info("comment_deleted")
        return OperationResult.success()

    async def list_comments(
        self,
        application_id: UUID,
        include_private: bool = True,
        include_replies: bool = True,
    ) -> list[ApplicationComment]:
        """List the visible comments of an application, oldest first.

        Args:
            application_id: Application whose discussion to list.
            include_private: False for applicant-facing views.
            include_replies: False to return top-level comments only.
        """
        comments = await self._comment_repo.list_for_application(application_id)
        return [
            c
            for c in comments
            if not c.is_deleted
            and (include_private or not c.is_private)
            and (include_replies or c.is_top_level)
        ]

    async def mark_information_request_responded(
        self, comment_id: UUID
    ) -> OperationResult:
        """Flag an information request as answered."""
        log = self._log_operation(
            "mark_information_request_responded", comment_id=str(comment_id)
        )
        try:
            comment = await self._comment_repo.get(comment_id)
            if comment is None or comment.is_deleted:
                raise ReviewNotFoundError("Comment", comment_id)
            if not comment.is_information_request:
                raise ReviewStateError("Comment is not an information request")
            if not comment.has_response:
                await self._comment_repo.update(comment.with_response())
        except Exception as exc:
            return self._failure(log, exc)

        log.info("information_request_responded")
        return OperationResult.success()

    async def _load_owned(self, comment_id: UUID, author_id: str) -> ApplicationComment:
        comment = await self._comment_repo.get(comment_id)
        if comment is None:
            raise ReviewNotFoundError("Comment", comment_id)
        if comment.author_id != author_id:
            raise ReviewAuthorizationError()
        return comment

    async def _notify_board(
        self, comment: ApplicationComment, log: structlog.BoundLogger
    ) -> None:
        try:
            board_member_ids = await self._board_directory.list_active_board_member_ids()
        except Exception as exc:
            log.error("board_directory_unavailable", exc_info=exc)
            return
        await self._notifications.send_bulk(
            [member_id for member_id in board_member_ids if member_id != comment.author_id],
            NotificationType.DISCUSSION_COMMENT_ADDED,
            "New Comment Added",
            "A new comment was added to an application under review.",
            application_id=comment.application_id,
            action_url=self._config.review_action_url(comment.application_id),
        )
