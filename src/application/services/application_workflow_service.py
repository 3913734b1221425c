"""Application workflow service.

Owns every status change of a client application, from draft through
review, decision and the post-approval program.

Transition Rules:
- The stored status is re-read immediately before each transition and
  checked against the pure transition table in
  src.domain.models.application_status. A caller-supplied status is
  never trusted.
- Every write after creation is a compare-and-swap on the stored status
  (ApplicationRepositoryProtocol.update_if_status). Two admins deciding
  the same application concurrently get exactly one success; the other
  receives "Application already decided or modified concurrently".
- The quorum snapshot (votes_required) is written once, when review
  first starts, and never recalculated.
- The status CAS is the commit point of a transition. Follow-up writes
  (vote locks, information-request comments) and notifications run after
  it; their failures are logged and never turn a committed transition
  into a failure.
"""

from __future__ import annotations

import calendar
from collections.abc import Mapping
from datetime import date, timedelta
from decimal import Decimal
from typing import Any
from uuid import UUID

import structlog

from src.application.dtos.operation_result import (
    DecisionResult,
    DraftResult,
    OperationResult,
)
from src.application.ports.application_repository import (
    ApplicationRepositoryProtocol,
)
from src.application.ports.board_directory import BoardDirectoryProtocol
from src.application.ports.comment_repository import CommentRepositoryProtocol
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
    ReviewAuthorizationError,
    ReviewNotFoundError,
    ReviewStateError,
    ReviewValidationError,
)
from src.domain.models.application import (
    EDITABLE_CONTENT_FIELDS,
    ClientApplication,
    DecisionOutcome,
    FundingType,
)
from src.domain.models.application_status import (
    REVIEWABLE_STATUSES,
    ApplicationStatus,
    ReviewTransition,
    check_transition,
)
from src.domain.models.comment import ApplicationComment
from src.domain.models.notification import NotificationType
from src.domain.models.review_statistics import VotingSummary
from src.domain.services.submission_validator import validate_for_submission
from src.domain.services.voting_tally import tally_votes

EDITABLE_STATUSES: frozenset[ApplicationStatus] = frozenset(
    {ApplicationStatus.DRAFT, ApplicationStatus.NEEDS_INFORMATION}
)


def add_months(start: date, months: int) -> date:
    """Add calendar months, clamping the day to the target month's length.

    >>> add_months(date(2024, 1, 31), 1)
    datetime.date(2024, 2, 29)
    """
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    day = min(start.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def _parse_funding_types(items: Any) -> tuple[FundingType, ...]:
    try:
        return tuple(FundingType(item) for item in items)
    except ValueError as exc:
        raise ReviewValidationError.single(
            "funding_types_requested", "Unknown funding type selected"
        ) from exc


def _decision_from_summary(
    summary: VotingSummary,
) -> tuple[DecisionOutcome, ReviewTransition | None]:
    # A single rejection vetoes any number of approvals
    if summary.has_any_rejection:
        return DecisionOutcome.REJECTED, ReviewTransition.REJECT
    if summary.is_approved:
        return DecisionOutcome.APPROVED, ReviewTransition.APPROVE
    if summary.needs_info_votes > 0:
        return (
            DecisionOutcome.NEEDS_MORE_INFORMATION,
            ReviewTransition.REQUEST_INFORMATION,
        )
    return DecisionOutcome.DEFERRED, None


class ApplicationWorkflowService(LoggingMixin):
    """Drives client applications through the review lifecycle.

    All mutating operations return an OperationResult (or subclass) and
    never raise; failures carry human-readable messages. Lookups return
    None or an empty list for absence.

    Example:
        >>> service = ApplicationWorkflowService(
        ...     application_repo=application_repo,
        ...     vote_repo=vote_repo,
        ...     comment_repo=comment_repo,
        ...     board_directory=board_directory,
        ...     notification_dispatcher=dispatcher,
        ...     time_authority=time_authority,
        ... )
        >>> succeeded, errors = await service.submit(application.id, "applicant-1")
    """

    def __init__(
        self,
        application_repo: ApplicationRepositoryProtocol,
        vote_repo: VoteRepositoryProtocol,
        comment_repo: CommentRepositoryProtocol,
        board_directory: BoardDirectoryProtocol,
        notification_dispatcher: NotificationDispatcherProtocol,
        time_authority: TimeAuthorityProtocol,
        config: ReviewWorkflowConfig = DEFAULT_REVIEW_WORKFLOW_CONFIG,
    ) -> None:
        """Initialize the workflow service.

        Args:
            application_repo: Application store with CAS updates.
            vote_repo: Vote store, used to lock votes on a decision.
            comment_repo: Comment store, used for information requests.
            board_directory: Source of the active board roster.
            notification_dispatcher: Delivers review notifications.
            time_authority: Clock for every recorded timestamp.
            config: Workflow rules.
        """
        self._application_repo = application_repo
        self._vote_repo = vote_repo
        self._comment_repo = comment_repo
        self._board_directory = board_directory
        self._notifications = notification_dispatcher
        self._time = time_authority
        self._config = config
        self._init_logger(component="review")

    # ------------------------------------------------------------------
    # Drafts
    # ------------------------------------------------------------------

    async def create_draft(self, application: ClientApplication) -> DraftResult:
        """Store a new application in Draft status."""
        log = self._log_operation(
            "create_draft",
            application_id=str(application.id),
            applicant_id=application.applicant_id,
        )
        now = self._time.utcnow()
        draft = application.with_changes(
            status=ApplicationStatus.DRAFT,
            votes_required=None,
            created_date=now,
            modified_date=now,
            submitted_date=None,
            review_started_date=None,
            decision_date=None,
            final_decision=None,
            decision_message=None,
            decision_made_by_id=None,
        )
        try:
            await self._application_repo.save(draft)
        except Exception as exc:
            return self._failure(log, exc, DraftResult)

        log.info("draft_created")
        return DraftResult(succeeded=True, application=draft)

    async def update_draft(
        self,
        application_id: UUID,
        applicant_id: str,
        changes: Mapping[str, Any],
    ) -> DraftResult:
        """Edit content fields while the application is Draft or NeedsInformation.

        Args:
            application_id: Application to edit.
            applicant_id: Must be the owner.
            changes: Field name to new value. Only content fields are
                accepted; status, dates and decision fields are not.

        Returns:
            DraftResult carrying the stored application on success.
        """
        log = self._log_operation(
            "update_draft",
            application_id=str(application_id),
            applicant_id=applicant_id,
            fields=sorted(changes),
        )
        try:
            rejected = sorted(set(changes) - EDITABLE_CONTENT_FIELDS)
            if rejected:
                raise ReviewValidationError(
                    {name: f"Field '{name}' cannot be edited" for name in rejected}
                )

            application = await self._load(application_id)
            self._require_owner(application, applicant_id)
            if application.status not in EDITABLE_STATUSES:
                raise ReviewStateError(
                    "Application can only be edited in Draft or NeedsInformation "
                    f"status (current status: {application.status.value})",
                    current_status=application.status,
                )

            values = dict(changes)
            if "funding_types_requested" in values:
                values["funding_types_requested"] = _parse_funding_types(
                    values["funding_types_requested"]
                )
            updated = application.with_changes(
                modified_date=self._time.utcnow(), **values
            )
            stored = await self._application_repo.update_if_status(
                updated, application.status
            )
        except Exception as exc:
            return self._failure(log, exc, DraftResult)

        log.info("draft_updated")
        return DraftResult(succeeded=True, application=stored)

    # ------------------------------------------------------------------
    # Submission
    # ------------------------------------------------------------------

    async def submit(self, application_id: UUID, applicant_id: str) -> OperationResult:
        """Submit a complete draft for review (Draft -> Submitted)."""
        log = self._log_operation(
            "submit", application_id=str(application_id), applicant_id=applicant_id
        )
        try:
            application = await self._load(application_id)
            self._require_owner(application, applicant_id)
            self._require_transition(application, ReviewTransition.SUBMIT)
            self._require_complete(application)

            now = self._time.utcnow()
            stored = await self._apply(
                application,
                ReviewTransition.SUBMIT,
                submitted_date=now,
                signed_date=now,
            )
        except Exception as exc:
            return self._failure(log, exc)

        await self._notifications.send(
            stored.applicant_id,
            NotificationType.APPLICATION_SUBMITTED,
            "Application Submitted",
            "Your application has been successfully submitted and is pending review.",
            application_id=stored.id,
            send_email=True,
        )
        log.info("application_submitted")
        return OperationResult.success()

    async def resubmit(self, application_id: UUID, applicant_id: str) -> OperationResult:
        """Resubmit after an information request (NeedsInformation -> Submitted).

        Open information-request comments are marked as responded. The
        quorum snapshot from the first review is kept.
        """
        log = self._log_operation(
            "resubmit", application_id=str(application_id), applicant_id=applicant_id
        )
        try:
            application = await self._load(application_id)
            self._require_owner(application, applicant_id)
            self._require_transition(application, ReviewTransition.RESUBMIT)
            self._require_complete(application)

            now = self._time.utcnow()
            stored = await self._apply(
                application,
                ReviewTransition.RESUBMIT,
                submitted_date=now,
                signed_date=now,
            )
        except Exception as exc:
            return self._failure(log, exc)

        responded = await self._mark_information_requests_responded(log, stored.id)
        await self._notifications.send(
            stored.applicant_id,
            NotificationType.APPLICATION_SUBMITTED,
            "Application Resubmitted",
            "Your updated application has been resubmitted and is pending review.",
            application_id=stored.id,
            send_email=True,
        )
        log.info("application_resubmitted", information_requests_responded=responded)
        return OperationResult.success()

    # ------------------------------------------------------------------
    # Review
    # ------------------------------------------------------------------

    async def start_review(
        self, application_id: UUID, started_by_id: str
    ) -> OperationResult:
        """Open an application for board review (Submitted -> UnderReview).

        Snapshots the number of active board members as votes_required
        the first time review starts.
        """
        log = self._log_operation(
            "start_review",
            application_id=str(application_id),
            started_by_id=started_by_id,
        )
        try:
            application = await self._load(application_id)
            self._require_transition(application, ReviewTransition.START_REVIEW)

            board_member_ids = await self._board_directory.list_active_board_member_ids()
            stored = await self._apply(
                application.with_votes_required(len(board_member_ids)),
                ReviewTransition.START_REVIEW,
                review_started_date=self._time.utcnow(),
            )
        except Exception as exc:
            return self._failure(log, exc)

        await self._notifications.send(
            stored.applicant_id,
            NotificationType.APPLICATION_UNDER_REVIEW,
            "Application Under Review",
            "Your application is now being reviewed by our board members.",
            application_id=stored.id,
            send_email=True,
        )
        await self._notifications.send_bulk(
            board_member_ids,
            NotificationType.NEW_APPLICATION_RECEIVED,
            "New Application Received",
            f"A new application from {stored.full_name} is ready for review.",
            application_id=stored.id,
            action_url=self._config.review_action_url(stored.id),
            send_email=True,
        )
        log.info("review_started", votes_required=stored.votes_required)
        return OperationResult.success()

    async def request_information(
        self,
        application_id: UUID,
        requester_id: str,
        request_details: str,
    ) -> OperationResult:
        """Ask the applicant for more detail (-> NeedsInformation).

        The request is recorded as a public information-request comment.
        """
        log = self._log_operation(
            "request_information",
            application_id=str(application_id),
            requester_id=requester_id,
        )
        try:
            if not request_details or not request_details.strip():
                raise ReviewValidationError.single(
                    "request_details", "Request details are required"
                )
            application = await self._load(application_id)
            stored = await self._apply(application, ReviewTransition.REQUEST_INFORMATION)
        except Exception as exc:
            return self._failure(log, exc)

        recorded = await self._record_information_request(
            log, stored, requester_id, request_details.strip()
        )
        await self._notify_information_requested(stored)
        log.info("information_requested", request_recorded=recorded)
        return OperationResult.success()

    # ------------------------------------------------------------------
    # Decisions
    # ------------------------------------------------------------------

    async def approve(
        self,
        application_id: UUID,
        approver_id: str,
        approved_monthly_amount: Decimal | None = None,
        sponsor_id: str | None = None,
        decision_message: str | None = None,
    ) -> OperationResult:
        """Approve an application under review and lock its votes."""
        log = self._log_operation(
            "approve",
            application_id=str(application_id),
            approver_id=approver_id,
            sponsor_id=sponsor_id,
        )
        try:
            if approved_monthly_amount is not None and approved_monthly_amount < 0:
                raise ReviewValidationError.single(
                    "approved_monthly_amount",
                    "Approved monthly amount must not be negative",
                )
            application = await self._load(application_id)
            message = (
                decision_message.strip()
                if decision_message and decision_message.strip()
                else self._config.default_approval_message
            )
            stored = await self._apply(
                application,
                ReviewTransition.APPROVE,
                final_decision=DecisionOutcome.APPROVED,
                decision_date=self._time.utcnow(),
                decision_made_by_id=approver_id,
                decision_message=message,
                approved_monthly_amount=approved_monthly_amount,
                assigned_sponsor_id=sponsor_id or None,
            )
        except Exception as exc:
            return self._failure(log, exc)

        locked = await self._lock_votes(log, stored.id)
        await self._notify_approved(stored)
        log.info("application_approved", votes_locked=locked)
        return OperationResult.success()

    async def reject(
        self,
        application_id: UUID,
        rejector_id: str,
        rejection_reason: str,
    ) -> OperationResult:
        """Reject an application under review and lock its votes."""
        log = self._log_operation(
            "reject", application_id=str(application_id), rejector_id=rejector_id
        )
        try:
            if not rejection_reason or not rejection_reason.strip():
                raise ReviewValidationError.single(
                    "rejection_reason", "Rejection reason is required"
                )
            application = await self._load(application_id)
            stored = await self._apply(
                application,
                ReviewTransition.REJECT,
                final_decision=DecisionOutcome.REJECTED,
                decision_date=self._time.utcnow(),
                decision_made_by_id=rejector_id,
                decision_message=rejection_reason.strip(),
            )
        except Exception as exc:
            return self._failure(log, exc)

        locked = await self._lock_votes(log, stored.id)
        await self._notify_rejected(stored)
        log.info("application_rejected", votes_locked=locked)
        return OperationResult.success()

    async def process_decision(
        self, application_id: UUID, decision_maker_id: str
    ) -> DecisionResult:
        """Record the decision the board's votes support.

        Invoked by an administrator once quorum is reached; votes never
        decide an application on their own. The outcome is taken from a
        single voting summary:

        - any Reject vote: Rejected (veto)
        - approvals meet quorum: Approved
        - any NeedsMoreInfo vote: NeedsMoreInformation, the application
          moves to NeedsInformation
        - otherwise: Deferred, the application stays in review

        Returns:
            DecisionResult carrying the recorded outcome on success.
        """
        log = self._log_operation(
            "process_decision",
            application_id=str(application_id),
            decision_maker_id=decision_maker_id,
        )
        try:
            application = await self._load(application_id)
            self._require_transition(application, ReviewTransition.APPROVE)
            summary = await self._summarize(application)
            if not summary.has_sufficient_votes:
                raise ReviewStateError(
                    "Not all board members have voted yet",
                    current_status=application.status,
                )

            outcome, transition = _decision_from_summary(summary)
            decided = {
                "final_decision": outcome,
                "decision_date": self._time.utcnow(),
                "decision_made_by_id": decision_maker_id,
            }
            if outcome is DecisionOutcome.APPROVED:
                decided["decision_message"] = self._config.default_approval_message
            if transition is None:
                stored = await self._application_repo.update_if_status(
                    application.with_changes(
                        modified_date=self._time.utcnow(), **decided
                    ),
                    application.status,
                )
            else:
                stored = await self._apply(application, transition, **decided)
        except Exception as exc:
            return self._failure(log, exc, DecisionResult)

        locked: int | None = 0
        if outcome is DecisionOutcome.APPROVED:
            locked = await self._lock_votes(log, stored.id)
            await self._notify_approved(stored)
        elif outcome is DecisionOutcome.REJECTED:
            locked = await self._lock_votes(log, stored.id)
            await self._notify_rejected(stored)
        elif outcome is DecisionOutcome.NEEDS_MORE_INFORMATION:
            await self._notify_information_requested(stored)
        log.info(
            "decision_processed",
            outcome=outcome.value,
            approval_votes=summary.approval_votes,
            rejection_votes=summary.rejection_votes,
            votes_locked=locked,
        )
        return DecisionResult(succeeded=True, decision=outcome)

    async def withdraw(
        self,
        application_id: UUID,
        applicant_id: str,
        reason: str | None = None,
    ) -> OperationResult:
        """Withdraw a submitted application at the applicant's request."""
        log = self._log_operation(
            "withdraw", application_id=str(application_id), applicant_id=applicant_id
        )
        try:
            application = await self._load(application_id)
            self._require_owner(application, applicant_id)
            reason_text = (
                reason.strip()
                if reason and reason.strip()
                else self._config.default_withdraw_reason
            )
            stored = await self._apply(
                application,
                ReviewTransition.WITHDRAW,
                decision_message=f"Withdrawn by applicant: {reason_text}",
                decision_date=self._time.utcnow(),
            )
        except Exception as exc:
            return self._failure(log, exc)

        if stored.review_started_date is not None:
            await self._notify_board(
                log,
                NotificationType.APPLICATION_WITHDRAWN,
                "Application Withdrawn",
                f"The application from {stored.full_name} has been withdrawn.",
                stored,
            )
        log.info("application_withdrawn")
        return OperationResult.success()

    # ------------------------------------------------------------------
    # Program lifecycle
    # ------------------------------------------------------------------

    async def start_program(
        self,
        application_id: UUID,
        start_date: date,
        duration_months: int | None = None,
    ) -> OperationResult:
        """Start the funded program of an approved application (-> Active)."""
        months = (
            duration_months
            if duration_months is not None
            else self._config.default_program_duration_months
        )
        log = self._log_operation(
            "start_program",
            application_id=str(application_id),
            start_date=start_date.isoformat(),
            duration_months=months,
        )
        try:
            if months < 1:
                raise ReviewValidationError.single(
                    "duration_months", "Program duration must be at least one month"
                )
            application = await self._load(application_id)
            stored = await self._apply(
                application,
                ReviewTransition.START_PROGRAM,
                program_start_date=start_date,
                program_end_date=add_months(start_date, months),
            )
        except Exception as exc:
            return self._failure(log, exc)

        await self._notifications.send(
            stored.applicant_id,
            NotificationType.PROGRAM_STARTING,
            "Program Starting",
            f"Your program will start on {start_date:%B %d, %Y}.",
            application_id=stored.id,
            send_email=True,
        )
        log.info("program_started", program_end_date=str(stored.program_end_date))
        return OperationResult.success()

    async def complete_program(self, application_id: UUID) -> OperationResult:
        """Mark an active program as completed (Active -> Completed)."""
        log = self._log_operation("complete_program", application_id=str(application_id))
        try:
            application = await self._load(application_id)
            stored = await self._apply(application, ReviewTransition.COMPLETE_PROGRAM)
        except Exception as exc:
            return self._failure(log, exc)

        await self._notifications.send(
            stored.applicant_id,
            NotificationType.PROGRAM_COMPLETED,
            "Program Completed",
            "Congratulations on completing your program!",
            application_id=stored.id,
            send_email=True,
        )
        log.info("program_completed")
        return OperationResult.success()

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def get_by_id(self, application_id: UUID) -> ClientApplication | None:
        return await self._application_repo.get(application_id)

    async def get_by_applicant(self, applicant_id: str) -> list[ClientApplication]:
        return await self._application_repo.list_by_applicant(applicant_id)

    async def get_by_status(self, status: ApplicationStatus) -> list[ClientApplication]:
        return await self._application_repo.list_by_status({status})

    async def list_applications(
        self, status: ApplicationStatus | None = None
    ) -> list[ClientApplication]:
        """List all applications, optionally filtered to one status."""
        if status is None:
            return await self._application_repo.list_all()
        return await self._application_repo.list_by_status({status})

    async def list_needing_review(self, board_member_id: str) -> list[ClientApplication]:
        """List reviewable applications the board member has not voted on.

        Returns:
            Applications ordered by submission date, oldest first.
        """
        reviewable = await self._application_repo.list_by_status(REVIEWABLE_STATUSES)
        voted = {
            vote.application_id
            for vote in await self._vote_repo.list_by_voter(board_member_id)
        }
        return [app for app in reviewable if app.id not in voted]

    async def list_expiring_soon(
        self, days_threshold: int | None = None
    ) -> list[ClientApplication]:
        """List reviewable applications submitted at least days_threshold days ago."""
        days = (
            days_threshold
            if days_threshold is not None
            else self._config.expiring_soon_threshold_days
        )
        cutoff = self._time.utcnow() - timedelta(days=days)
        reviewable = await self._application_repo.list_by_status(REVIEWABLE_STATUSES)
        return [
            app
            for app in reviewable
            if app.submitted_date is not None and app.submitted_date <= cutoff
        ]

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _load(self, application_id: UUID) -> ClientApplication:
        application = await self._application_repo.get(application_id)
        if application is None:
            raise ReviewNotFoundError("Application", application_id)
        return application

    @staticmethod
    def _require_owner(application: ClientApplication, applicant_id: str) -> None:
        if application.applicant_id != applicant_id:
            raise ReviewAuthorizationError()

    @staticmethod
    def _require_transition(
        application: ClientApplication, transition: ReviewTransition
    ) -> ApplicationStatus:
        check = check_transition(application.status, transition)
        if not check.allowed or check.target_status is None:
            raise ReviewStateError(
                check.reason or "Transition not allowed",
                current_status=application.status,
            )
        return check.target_status

    def _require_complete(self, application: ClientApplication) -> None:
        errors = validate_for_submission(application, self._config.min_statement_length)
        if errors:
            raise ReviewValidationError(errors)

    async def _apply(
        self,
        application: ClientApplication,
        transition: ReviewTransition,
        **changes: Any,
    ) -> ClientApplication:
        """Check a transition and write it with a CAS on the read status."""
        target = self._require_transition(application, transition)
        updated = application.with_changes(
            status=target, modified_date=self._time.utcnow(), **changes
        )
        return await self._application_repo.update_if_status(updated, application.status)

    async def _summarize(self, application: ClientApplication) -> VotingSummary:
        votes = await self._vote_repo.list_for_application(application.id)
        board_member_ids = await self._board_directory.list_active_board_member_ids()
        return tally_votes(application, votes, board_member_ids)

    # Follow-up writes run after the status CAS committed the transition.
    # They log failures and report them through their return value.

    async def _lock_votes(
        self, log: structlog.BoundLogger, application_id: UUID
    ) -> int | None:
        try:
            return await self._vote_repo.lock_for_application(application_id)
        except Exception as exc:
            log.error(
                "vote_lock_failed",
                exc_info=exc,
                message="Decision stored; votes were left unlocked",
            )
            return None

    async def _record_information_request(
        self,
        log: structlog.BoundLogger,
        application: ClientApplication,
        requester_id: str,
        request_details: str,
    ) -> bool:
        try:
            await self._comment_repo.save(
                ApplicationComment(
                    application_id=application.id,
                    author_id=requester_id,
                    content=request_details,
                    is_private=False,
                    is_information_request=True,
                    created_date=self._time.utcnow(),
                )
            )
        except Exception as exc:
            log.error(
                "information_request_comment_failed",
                exc_info=exc,
                message="Status changed; request comment was not recorded",
            )
            return False
        return True

    async def _mark_information_requests_responded(
        self, log: structlog.BoundLogger, application_id: UUID
    ) -> int:
        responded = 0
        try:
            for comment in await self._comment_repo.list_for_application(application_id):
                if (
                    comment.is_information_request
                    and not comment.has_response
                    and not comment.is_deleted
                ):
                    await self._comment_repo.update(comment.with_response())
                    responded += 1
        except Exception as exc:
            log.error(
                "information_request_marking_failed",
                exc_info=exc,
                responded=responded,
            )
        return responded

    async def _notify_approved(self, application: ClientApplication) -> None:
        await self._notifications.send(
            application.applicant_id,
            NotificationType.APPLICATION_APPROVED,
            "Application Approved!",
            application.decision_message or self._config.default_approval_message,
            application_id=application.id,
            send_email=True,
        )
        if application.assigned_sponsor_id:
            await self._notifications.send(
                application.assigned_sponsor_id,
                NotificationType.SPONSOR_ASSIGNED,
                "New Client Assigned",
                f"You have been assigned to support {application.full_name}.",
                application_id=application.id,
                send_email=True,
            )

    async def _notify_rejected(self, application: ClientApplication) -> None:
        await self._notifications.send(
            application.applicant_id,
            NotificationType.APPLICATION_REJECTED,
            "Application Decision",
            "We regret to inform you that your application was not approved at this time.",
            application_id=application.id,
            send_email=True,
        )

    async def _notify_information_requested(self, application: ClientApplication) -> None:
        await self._notifications.send(
            application.applicant_id,
            NotificationType.INFORMATION_REQUESTED,
            "Additional Information Requested",
            "The board has requested additional information regarding your application.",
            application_id=application.id,
            send_email=True,
        )

    async def _notify_board(
        self,
        log: structlog.BoundLogger,
        notification_type: NotificationType,
        title: str,
        message: str,
        application: ClientApplication,
    ) -> int:
        try:
            board_member_ids = await self._board_directory.list_active_board_member_ids()
        except Exception as exc:
            log.error("board_directory_unavailable", exc_info=exc)
            return 0
        return await self._notifications.send_bulk(
            board_member_ids,
            notification_type,
            title,
            message,
            application_id=application.id,
            action_url=self._config.review_action_url(application.id),
        )
