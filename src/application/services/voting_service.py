"""Board member voting service.

Records one vote per board member per application and computes the
voting summary used by admins to decide.

Voting Rules:
- Votes are accepted only while the application is UnderReview or
  InDiscussion.
- A member may change an unlocked vote any number of times; the store's
  atomic upsert keeps exactly one row per (application, member).
- Votes are locked when the application is approved or rejected and
  can no longer change.
- The first vote on an UnderReview application opens the discussion
  (UnderReview -> InDiscussion).
"""

from __future__ import annotations

from uuid import UUID

import structlog

from src.application.dtos.operation_result import OperationResult
from src.application.ports.application_repository import (
    ApplicationRepositoryProtocol,
)
from src.application.ports.board_directory import BoardDirectoryProtocol
from src.application.ports.notification_dispatcher import (
    NotificationDispatcherProtocol,
)
from src.application.ports.time_authority import TimeAuthorityProtocol
from src.application.ports.vote_repository import VoteRepositoryProtocol
from src.application.services.base import LoggingMixin
from src.config.review_config import (
    DEFAULT_REVIEW_WORKFLOW_CONFIG,
    ReviewWorkflowConfig,
)
from src.domain.errors import (
    ConcurrentDecisionError,
    ReviewNotFoundError,
    ReviewStateError,
    ReviewValidationError,
)
from src.domain.models.application import ClientApplication
from src.domain.models.application_status import (
    ApplicationStatus,
    ReviewTransition,
    check_transition,
)
from src.domain.models.notification import NotificationType
from src.domain.models.review_statistics import VotingSummary
from src.domain.models.vote import ApplicationVote, VoteDecision
from src.domain.services.voting_tally import tally_votes


class VotingService(LoggingMixin):
    """Casts, reads and summarizes board member votes.

    Example:
        >>> voting = VotingService(
        ...     application_repo=application_repo,
        ...     vote_repo=vote_repo,
        ...     board_directory=board_directory,
        ...     notification_dispatcher=dispatcher,
        ...     time_authority=time_authority,
        ... )
        >>> result = await voting.cast_vote(
        ...     application.id, "board-1", VoteDecision.APPROVE, "Strong fit", 4
        ... )
        >>> result.succeeded
        True
    """

    def __init__(
        self,
        application_repo: ApplicationRepositoryProtocol,
        vote_repo: VoteRepositoryProtocol,
        board_directory: BoardDirectoryProtocol,
        notification_dispatcher: NotificationDispatcherProtocol,
        time_authority: TimeAuthorityProtocol,
        config: ReviewWorkflowConfig = DEFAULT_REVIEW_WORKFLOW_CONFIG,
    ) -> None:
        self._application_repo = application_repo
        self._vote_repo = vote_repo
        self._board_directory = board_directory
        self._notifications = notification_dispatcher
        self._time = time_authority
        self._config = config
        self._init_logger(component="voting")

    async def cast_vote(
        self,
        application_id: UUID,
        voter_id: str,
        decision: VoteDecision,
        reasoning: str,
        confidence_level: int | None = None,
    ) -> OperationResult:
        """Record or change a board member's vote.

        Args:
            application_id: Application being voted on.
            voter_id: Board member casting the vote.
            decision: Approve, Reject, NeedsMoreInfo or Abstain.
            reasoning: Free-text justification; must not be blank.
            confidence_level: 1-5; the configured default when omitted.

        Returns:
            OperationResult; failure messages name the violated rule.
        """
        confidence = (
            confidence_level
            if confidence_level is not None
            else self._config.default_confidence_level
        )
        log = self._log_operation(
            "cast_vote",
            application_id=str(application_id),
            voter_id=voter_id,
            decision=decision.value,
            confidence_level=confidence,
        )
        try:
            self._validate_vote(reasoning, confidence)

            application = await self._application_repo.get(application_id)
            if application is None:
                raise ReviewNotFoundError("Application", application_id)
            if not application.is_in_reviewable_state:
                raise ReviewStateError(
                    "Application is not open for voting",
                    current_status=application.status,
                )

            now = self._time.utcnow()
            existing = await self._vote_repo.get(application_id, voter_id)
            if existing is not None and existing.is_locked:
                raise ReviewStateError("Vote is already finalized and cannot be changed")

            if existing is None:
                vote = ApplicationVote(
                    application_id=application_id,
                    voter_id=voter_id,
                    decision=decision,
                    reasoning=reasoning.strip(),
                    confidence_level=confidence,
                    voted_date=now,
                )
            else:
                vote = existing.revised(decision, reasoning.strip(), confidence, now)
            stored = await self._vote_repo.upsert(vote)
        except Exception as exc:
            return self._failure(log, exc)

        log.info(
            "vote_recorded",
            vote_id=str(stored.id),
            changed=existing is not None,
        )
        if application.status is ApplicationStatus.UNDER_REVIEW:
            application = await self._open_discussion(application, log)
        await self._announce_quorum(application, log)
        return OperationResult.success()

    async def get_vote(self, application_id: UUID, voter_id: str) -> ApplicationVote | None:
        return await self._vote_repo.get(application_id, voter_id)

    async def list_votes(self, application_id: UUID) -> list[ApplicationVote]:
        """List all votes on an application, oldest first."""
        return await self._vote_repo.list_for_application(application_id)

    async def has_voted(self, application_id: UUID, voter_id: str) -> bool:
        return await self._vote_repo.get(application_id, voter_id) is not None

    async def voting_summary(self, application_id: UUID) -> VotingSummary | None:
        """Compute the voting summary of an application.

        Returns:
            VotingSummary, or None if the application doesn't exist.
        """
        application = await self._application_repo.get(application_id)
        if application is None:
            return None
        return await self._summarize(application)

    async def lock_votes(self, application_id: UUID) -> int:
        """Lock every vote on an application.

        Returns:
            Number of votes locked.
        """
        locked = await self._vote_repo.lock_for_application(application_id)
        self._log_operation("lock_votes", application_id=str(application_id)).info(
            "votes_locked", count=locked
        )
        return locked

    def _validate_vote(self, reasoning: str, confidence: int) -> None:
        errors: dict[str, str] = {}
        text = (reasoning or "").strip()
        if not text:
            errors["reasoning"] = "Vote reasoning is required"
        elif len(text) < self._config.min_vote_reasoning_length:
            errors["reasoning"] = (
                "Vote reasoning must be at least "
                f"{self._config.min_vote_reasoning_length} characters"
            )
        if not (
            self._config.min_confidence_level
            <= confidence
            <= self._config.max_confidence_level
        ):
            errors["confidence_level"] = (
                f"confidence_level must be between {self._config.min_confidence_level} "
                f"and {self._config.max_confidence_level}"
            )
        if errors:
            raise ReviewValidationError(errors)

    async def _summarize(
        self,
        application: ClientApplication,
        board_member_ids: list[str] | None = None,
    ) -> VotingSummary:
        votes = await self._vote_repo.list_for_application(application.id)
        if board_member_ids is None:
            board_member_ids = await self._board_directory.list_active_board_member_ids()
        return tally_votes(application, votes, board_member_ids)

    async def _open_discussion(
        self, application: ClientApplication, log: structlog.BoundLogger
    ) -> ClientApplication:
        check = check_transition(application.status, ReviewTransition.OPEN_DISCUSSION)
        if not check.allowed:
            return application
        try:
            moved = await self._application_repo.update_if_status(
                application.with_changes(
                    status=check.target_status, modified_date=self._time.utcnow()
                ),
                application.status,
            )
        except ConcurrentDecisionError as exc:
            # Another writer moved the application first.
            log.info("discussion_already_opened", actual_status=exc.actual_status.value)
            return application
        except Exception as exc:
            log.error("open_discussion_failed", exc_info=exc)
            return application
        log.info("discussion_opened")
        return moved

    async def _announce_quorum(
        self, application: ClientApplication, log: structlog.BoundLogger
    ) -> None:
        try:
            board_member_ids = await self._board_directory.list_active_board_member_ids()
            summary = await self._summarize(application, board_member_ids)
        except Exception as exc:
            log.error("voting_summary_failed", exc_info=exc)
            return
        if not summary.has_sufficient_votes:
            return
        await self._notifications.send_bulk(
            board_member_ids,
            NotificationType.QUORUM_REACHED,
            "Quorum Reached",
            f"Application from {application.full_name} has received all required votes.",
            application_id=application.id,
            action_url=self._config.review_action_url(application.id),
        )
        log.info("quorum_reached", total_votes_cast=summary.total_votes_cast)
