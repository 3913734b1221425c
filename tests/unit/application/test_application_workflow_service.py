"""Unit tests for ApplicationWorkflowService.

Exercises the full review lifecycle against the in-memory stubs:
submission, review start with the quorum snapshot, information
requests, decisions under concurrency, withdrawal and the program
lifecycle.
"""

import asyncio
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from src.application.services.application_workflow_service import (
    ApplicationWorkflowService,
    add_months,
)
from src.application.services.base import GENERIC_FAILURE_MESSAGE
from src.domain.errors import StoreUnavailableError
from src.domain.models.application import DecisionOutcome, FundingType
from src.domain.models.application_status import ApplicationStatus
from src.domain.models.notification import NotificationType
from src.domain.models.vote import VoteDecision
from tests.helpers.review_factories import (
    ADMIN_ID,
    APPLICANT_ID,
    BOARD_MEMBER_IDS,
    make_application,
    make_reviewable_application,
    make_vote,
)

NOW = datetime(2026, 1, 15, 10, 0, tzinfo=timezone.utc)


class TestCreateAndEditDraft:
    """Tests for create_draft and update_draft."""

    @pytest.mark.asyncio
    async def test_create_draft_forces_draft_status(
        self, workflow_service, application_repo
    ) -> None:
        """Test a new application is stored as a clean draft."""
        app = make_application(status=ApplicationStatus.APPROVED, votes_required=5)

        result = await workflow_service.create_draft(app)

        assert result.succeeded is True
        stored = await application_repo.get(app.id)
        assert stored.status is ApplicationStatus.DRAFT
        assert stored.votes_required is None
        assert stored.created_date == NOW

    @pytest.mark.asyncio
    async def test_update_draft_changes_content(
        self, workflow_service, application_repo
    ) -> None:
        """Test the owner can edit content fields of a draft."""
        app = make_application()
        await application_repo.save(app)

        result = await workflow_service.update_draft(
            app.id,
            APPLICANT_ID,
            {"city": "Springfield", "funding_types_requested": ["GroupClasses"]},
        )

        assert result.succeeded is True
        assert result.application.city == "Springfield"
        assert result.application.funding_types_requested == (FundingType.GROUP_CLASSES,)
        assert (await application_repo.get(app.id)).modified_date == NOW

    @pytest.mark.asyncio
    async def test_update_draft_refuses_workflow_fields(
        self, workflow_service, application_repo
    ) -> None:
        """Test status and decision fields cannot be edited directly."""
        app = make_application()
        await application_repo.save(app)

        succeeded, errors = await workflow_service.update_draft(
            app.id, APPLICANT_ID, {"status": ApplicationStatus.APPROVED}
        )

        assert succeeded is False
        assert errors == ["Field 'status' cannot be edited"]

    @pytest.mark.asyncio
    async def test_update_draft_refuses_unknown_funding_type(
        self, workflow_service, application_repo
    ) -> None:
        """Test funding types must come from the closed set."""
        app = make_application()
        await application_repo.save(app)

        succeeded, errors = await workflow_service.update_draft(
            app.id, APPLICANT_ID, {"funding_types_requested": ["Yacht"]}
        )

        assert succeeded is False
        assert errors == ["Unknown funding type selected"]

    @pytest.mark.asyncio
    async def test_update_draft_refused_after_submission(
        self, workflow_service, application_repo
    ) -> None:
        """Test a submitted application is no longer editable."""
        app = make_reviewable_application(status=ApplicationStatus.SUBMITTED)
        await application_repo.save(app)

        succeeded, errors = await workflow_service.update_draft(
            app.id, APPLICANT_ID, {"city": "Elsewhere"}
        )

        assert succeeded is False
        assert errors == [
            "Application can only be edited in Draft or NeedsInformation status "
            "(current status: Submitted)"
        ]


class TestSubmit:
    """Tests for submit."""

    @pytest.mark.asyncio
    async def test_submit_complete_draft(
        self, workflow_service, application_repo, notification_repo, email_sender
    ) -> None:
        """Test a complete draft moves to Submitted and notifies the applicant."""
        app = make_application()
        await application_repo.save(app)

        succeeded, errors = await workflow_service.submit(app.id, APPLICANT_ID)

        assert succeeded is True
        assert errors == []
        stored = await application_repo.get(app.id)
        assert stored.status is ApplicationStatus.SUBMITTED
        assert stored.submitted_date == NOW
        assert stored.signed_date == NOW

        notifications = notification_repo.for_recipient(APPLICANT_ID)
        assert [n.type for n in notifications] == [NotificationType.APPLICATION_SUBMITTED]
        assert notifications[0].is_sent is True
        assert notifications[0].email_sent is True
        assert email_sender.sent[0].to_address == "jordan@example.org"

    @pytest.mark.asyncio
    async def test_submit_incomplete_lists_every_problem(
        self, workflow_service, application_repo, notification_repo
    ) -> None:
        """Test validation failures leave the draft untouched."""
        app = make_application(personal_statement="Too short", signature=None)
        await application_repo.save(app)

        succeeded, errors = await workflow_service.submit(app.id, APPLICANT_ID)

        assert succeeded is False
        assert errors == [
            "Please provide a detailed personal statement (minimum 50 characters)",
            "Signature is required",
        ]
        assert (await application_repo.get(app.id)).status is ApplicationStatus.DRAFT
        assert notification_repo.all() == []

    @pytest.mark.asyncio
    async def test_submit_by_other_user_unauthorized(
        self, workflow_service, application_repo
    ) -> None:
        """Test only the owner can submit."""
        app = make_application()
        await application_repo.save(app)

        succeeded, errors = await workflow_service.submit(app.id, "someone-else")

        assert succeeded is False
        assert errors == ["Unauthorized"]

    @pytest.mark.asyncio
    async def test_submit_twice(self, workflow_service, application_repo) -> None:
        """Test a second submit reports the application as already submitted."""
        app = make_application()
        await application_repo.save(app)
        await workflow_service.submit(app.id, APPLICANT_ID)

        succeeded, errors = await workflow_service.submit(app.id, APPLICANT_ID)

        assert succeeded is False
        assert errors == [
            "Application has already been submitted (current status: Submitted)"
        ]

    @pytest.mark.asyncio
    async def test_submit_unknown_application(self, workflow_service) -> None:
        """Test a missing application is reported as not found."""
        result = await workflow_service.submit(uuid4(), APPLICANT_ID)

        assert result.succeeded is False
        assert result.errors == ("Application not found",)

    @pytest.mark.asyncio
    async def test_notification_store_failure_does_not_fail_submit(
        self, workflow_service, application_repo, notification_repo
    ) -> None:
        """Test a broken notification store never undoes a transition."""
        app = make_application()
        await application_repo.save(app)
        notification_repo.fail_saves = True

        result = await workflow_service.submit(app.id, APPLICANT_ID)

        assert result.succeeded is True
        assert (await application_repo.get(app.id)).status is ApplicationStatus.SUBMITTED


class TestStartReview:
    """Tests for start_review."""

    @pytest.mark.asyncio
    async def test_start_review_snapshots_quorum(
        self, workflow_service, application_repo, notification_repo, email_sender
    ) -> None:
        """Test votes_required is the active board size when review starts."""
        app = make_reviewable_application(
            status=ApplicationStatus.SUBMITTED,
            votes_required=None,
            review_started_date=None,
        )
        await application_repo.save(app)

        result = await workflow_service.start_review(app.id, ADMIN_ID)

        assert result.succeeded is True
        stored = await application_repo.get(app.id)
        assert stored.status is ApplicationStatus.UNDER_REVIEW
        assert stored.votes_required == 3
        assert stored.review_started_date == NOW

        board_notices = [
            n
            for n in notification_repo.all()
            if n.type is NotificationType.NEW_APPLICATION_RECEIVED
        ]
        assert sorted(n.recipient_id for n in board_notices) == BOARD_MEMBER_IDS
        assert board_notices[0].action_url == f"/Admin/Applications/Review/{app.id}"
        assert len(email_sender.sent) == 4

    @pytest.mark.asyncio
    async def test_start_review_requires_submitted(
        self, workflow_service, application_repo
    ) -> None:
        """Test a draft cannot enter review."""
        app = make_application()
        await application_repo.save(app)

        succeeded, errors = await workflow_service.start_review(app.id, ADMIN_ID)

        assert succeeded is False
        assert errors == [
            "Application must be in Submitted status to start review "
            "(current status: Draft)"
        ]

    @pytest.mark.asyncio
    async def test_board_directory_failure_fails_start_review(
        self, workflow_service, application_repo, board_directory, monkeypatch
    ) -> None:
        """Test the quorum snapshot cannot be taken without a roster."""
        app = make_reviewable_application(
            status=ApplicationStatus.SUBMITTED, votes_required=None
        )
        await application_repo.save(app)
        monkeypatch.setattr(
            board_directory,
            "list_active_board_member_ids",
            AsyncMock(side_effect=StoreUnavailableError("list_board_members")),
        )

        result = await workflow_service.start_review(app.id, ADMIN_ID)

        assert result.succeeded is False
        assert result.errors == (GENERIC_FAILURE_MESSAGE,)
        assert (await application_repo.get(app.id)).status is ApplicationStatus.SUBMITTED


class TestInformationRequests:
    """Tests for request_information and resubmit."""

    @pytest.mark.asyncio
    async def test_request_information_records_public_comment(
        self, workflow_service, application_repo, comment_repo, notification_repo
    ) -> None:
        """Test the request becomes a public information-request comment."""
        app = make_reviewable_application()
        await application_repo.save(app)

        result = await workflow_service.request_information(
            app.id, "board-1", "Please attach a doctor's note."
        )

        assert result.succeeded is True
        assert (
            await application_repo.get(app.id)
        ).status is ApplicationStatus.NEEDS_INFORMATION
        [comment] = await comment_repo.list_for_application(app.id)
        assert comment.is_information_request is True
        assert comment.is_private is False
        assert comment.content == "Please attach a doctor's note."
        assert notification_repo.for_recipient(APPLICANT_ID)[0].type is (
            NotificationType.INFORMATION_REQUESTED
        )

    @pytest.mark.asyncio
    async def test_request_information_requires_details(
        self, workflow_service, application_repo
    ) -> None:
        """Test an empty request is refused."""
        app = make_reviewable_application()
        await application_repo.save(app)

        succeeded, errors = await workflow_service.request_information(
            app.id, "board-1", "   "
        )

        assert succeeded is False
        assert errors == ["Request details are required"]

    @pytest.mark.asyncio
    async def test_resubmit_answers_requests_and_keeps_snapshot(
        self, workflow_service, application_repo, comment_repo, board_directory
    ) -> None:
        """Test resubmission answers open requests and keeps votes_required."""
        app = make_reviewable_application()
        await application_repo.save(app)
        await workflow_service.request_information(app.id, "board-1", "More detail please")
        board_directory.add_board_member("board-4")

        result = await workflow_service.resubmit(app.id, APPLICANT_ID)

        assert result.succeeded is True
        stored = await application_repo.get(app.id)
        assert stored.status is ApplicationStatus.SUBMITTED
        assert stored.votes_required == 3
        [comment] = await comment_repo.list_for_application(app.id)
        assert comment.has_response is True

    @pytest.mark.asyncio
    async def test_resubmit_requires_needs_information(
        self, workflow_service, application_repo
    ) -> None:
        """Test resubmit is only legal after an information request."""
        app = make_application()
        await application_repo.save(app)

        succeeded, _ = await workflow_service.resubmit(app.id, APPLICANT_ID)

        assert succeeded is False


class TestDecisions:
    """Tests for approve and reject."""

    @pytest.mark.asyncio
    async def test_approve_records_decision_and_locks_votes(
        self, workflow_service, application_repo, vote_repo, notification_repo
    ) -> None:
        """Test approval sets decision fields, locks votes and notifies."""
        app = make_reviewable_application(status=ApplicationStatus.IN_DISCUSSION)
        await application_repo.save(app)
        for member in BOARD_MEMBER_IDS:
            await vote_repo.upsert(make_vote(app.id, member))

        result = await workflow_service.approve(
            app.id,
            ADMIN_ID,
            approved_monthly_amount=Decimal("150.00"),
            sponsor_id="sponsor-1",
        )

        assert result.succeeded is True
        stored = await application_repo.get(app.id)
        assert stored.status is ApplicationStatus.APPROVED
        assert stored.final_decision is DecisionOutcome.APPROVED
        assert stored.decision_date == NOW
        assert stored.decision_made_by_id == ADMIN_ID
        assert stored.decision_message == "Your application has been approved!"
        assert stored.approved_monthly_amount == Decimal("150.00")
        assert stored.assigned_sponsor_id == "sponsor-1"
        assert all(v.is_locked for v in await vote_repo.list_for_application(app.id))

        assert notification_repo.for_recipient(APPLICANT_ID)[0].title == (
            "Application Approved!"
        )
        assert notification_repo.for_recipient("sponsor-1")[0].type is (
            NotificationType.SPONSOR_ASSIGNED
        )

    @pytest.mark.asyncio
    async def test_approve_before_review_refused(
        self, workflow_service, application_repo
    ) -> None:
        """Test approving a merely submitted application is refused."""
        app = make_reviewable_application(status=ApplicationStatus.SUBMITTED)
        await application_repo.save(app)

        succeeded, errors = await workflow_service.approve(app.id, ADMIN_ID)

        assert succeeded is False
        assert errors == [
            "Application must be in InDiscussion or UnderReview status to be approved "
            "(current status: Submitted)"
        ]

    @pytest.mark.asyncio
    async def test_approve_negative_amount_refused(
        self, workflow_service, application_repo
    ) -> None:
        """Test the monthly amount cannot be negative."""
        app = make_reviewable_application()
        await application_repo.save(app)

        succeeded, errors = await workflow_service.approve(
            app.id, ADMIN_ID, approved_monthly_amount=Decimal("-1")
        )

        assert succeeded is False
        assert errors == ["Approved monthly amount must not be negative"]

    @pytest.mark.asyncio
    async def test_reject_requires_reason(self, workflow_service, application_repo) -> None:
        """Test a rejection needs a reason."""
        app = make_reviewable_application()
        await application_repo.save(app)

        succeeded, errors = await workflow_service.reject(app.id, ADMIN_ID, "")

        assert succeeded is False
        assert errors == ["Rejection reason is required"]

    @pytest.mark.asyncio
    async def test_reject_records_reason_and_locks_votes(
        self, workflow_service, application_repo, vote_repo
    ) -> None:
        """Test rejection stores the reason as the decision message."""
        app = make_reviewable_application()
        await application_repo.save(app)
        await vote_repo.upsert(make_vote(app.id, "board-1", VoteDecision.REJECT))

        result = await workflow_service.reject(app.id, ADMIN_ID, "  Outside our criteria ")

        assert result.succeeded is True
        stored = await application_repo.get(app.id)
        assert stored.status is ApplicationStatus.REJECTED
        assert stored.final_decision is DecisionOutcome.REJECTED
        assert stored.decision_message == "Outside our criteria"
        assert (await vote_repo.get(app.id, "board-1")).is_locked is True

    @pytest.mark.asyncio
    async def test_concurrent_decisions_exactly_one_wins(
        self, workflow_service, application_repo
    ) -> None:
        """Test racing approve and reject produce exactly one decision."""
        app = make_reviewable_application()
        await application_repo.save(app)

        approve_result, reject_result = await asyncio.gather(
            workflow_service.approve(app.id, ADMIN_ID),
            workflow_service.reject(app.id, "admin-2", "Insufficient need"),
        )

        results = [approve_result, reject_result]
        assert sum(r.succeeded for r in results) == 1
        [loser] = [r for r in results if not r.succeeded]
        assert "already decided" in loser.errors[0]

        stored = await application_repo.get(app.id)
        winner_status = (
            ApplicationStatus.APPROVED
            if approve_result.succeeded
            else ApplicationStatus.REJECTED
        )
        assert stored.status is winner_status

    @pytest.mark.asyncio
    async def test_second_decision_refused(self, workflow_service, application_repo) -> None:
        """Test a decided application cannot be decided again."""
        app = make_reviewable_application()
        await application_repo.save(app)
        await workflow_service.approve(app.id, ADMIN_ID)

        succeeded, errors = await workflow_service.reject(app.id, ADMIN_ID, "Too late")

        assert succeeded is False
        assert errors == ["Application already decided (current status: Approved)"]

    @pytest.mark.asyncio
    async def test_store_unavailable_returns_generic_message(
        self, vote_repo, comment_repo, board_directory, dispatcher, fake_time_authority
    ) -> None:
        """Test infrastructure failures never leak internals."""
        failing_repo = AsyncMock()
        failing_repo.get.side_effect = StoreUnavailableError("get_application")
        service = ApplicationWorkflowService(
            application_repo=failing_repo,
            vote_repo=vote_repo,
            comment_repo=comment_repo,
            board_directory=board_directory,
            notification_dispatcher=dispatcher,
            time_authority=fake_time_authority,
        )

        succeeded, errors = await service.approve(uuid4(), ADMIN_ID)

        assert succeeded is False
        assert errors == [GENERIC_FAILURE_MESSAGE]


class TestFollowUpWritesAfterCommit:
    """Tests that a committed transition is reported as committed."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("decide", "expected_status", "expected_type"),
        [
            (
                lambda service, app_id: service.approve(app_id, ADMIN_ID),
                ApplicationStatus.APPROVED,
                NotificationType.APPLICATION_APPROVED,
            ),
            (
                lambda service, app_id: service.reject(app_id, ADMIN_ID, "Outside criteria"),
                ApplicationStatus.REJECTED,
                NotificationType.APPLICATION_REJECTED,
            ),
        ],
    )
    async def test_vote_lock_failure_keeps_decision_successful(
        self,
        workflow_service,
        application_repo,
        vote_repo,
        notification_repo,
        monkeypatch,
        decide,
        expected_status,
        expected_type,
    ) -> None:
        """Test a failed vote lock neither hides the decision nor the notification."""
        app = make_reviewable_application()
        await application_repo.save(app)
        await vote_repo.upsert(make_vote(app.id, "board-1"))
        monkeypatch.setattr(
            vote_repo,
            "lock_for_application",
            AsyncMock(side_effect=StoreUnavailableError("lock_votes")),
        )

        result = await decide(workflow_service, app.id)

        assert result.succeeded is True
        assert result.errors == ()
        assert (await application_repo.get(app.id)).status is expected_status
        assert [n.type for n in notification_repo.for_recipient(APPLICANT_ID)] == [
            expected_type
        ]

    @pytest.mark.asyncio
    async def test_request_comment_failure_keeps_request_successful(
        self,
        workflow_service,
        application_repo,
        comment_repo,
        notification_repo,
        monkeypatch,
    ) -> None:
        """Test the applicant is still told when the request comment is not saved."""
        app = make_reviewable_application()
        await application_repo.save(app)
        monkeypatch.setattr(
            comment_repo,
            "save",
            AsyncMock(side_effect=StoreUnavailableError("save_comment")),
        )

        result = await workflow_service.request_information(
            app.id, ADMIN_ID, "Please share your current schedule."
        )

        assert result.succeeded is True
        stored = await application_repo.get(app.id)
        assert stored.status is ApplicationStatus.NEEDS_INFORMATION
        assert [n.type for n in notification_repo.for_recipient(APPLICANT_ID)] == [
            NotificationType.INFORMATION_REQUESTED
        ]

    @pytest.mark.asyncio
    async def test_resubmit_succeeds_when_comment_marking_fails(
        self, workflow_service, application_repo, comment_repo, monkeypatch
    ) -> None:
        """Test resubmission stands even if open requests cannot be marked."""
        app = make_reviewable_application(status=ApplicationStatus.NEEDS_INFORMATION)
        await application_repo.save(app)
        monkeypatch.setattr(
            comment_repo,
            "list_for_application",
            AsyncMock(side_effect=StoreUnavailableError("list_comments")),
        )

        result = await workflow_service.resubmit(app.id, APPLICANT_ID)

        assert result.succeeded is True
        assert (await application_repo.get(app.id)).status is ApplicationStatus.SUBMITTED


class TestProcessDecision:
    """Tests for process_decision."""

    @pytest.fixture
    async def quorum_of_two(self, application_repo):
        app = make_reviewable_application(
            status=ApplicationStatus.IN_DISCUSSION, votes_required=2
        )
        await application_repo.save(app)
        return app

    @pytest.mark.asyncio
    async def test_rejection_vetoes_approvals(
        self, workflow_service, application_repo, vote_repo, quorum_of_two
    ) -> None:
        """Test one Reject vote decides the application as Rejected."""
        app = quorum_of_two
        await vote_repo.upsert(make_vote(app.id, "board-1", VoteDecision.APPROVE))
        await vote_repo.upsert(make_vote(app.id, "board-2", VoteDecision.APPROVE))
        await vote_repo.upsert(make_vote(app.id, "board-3", VoteDecision.REJECT))

        result = await workflow_service.process_decision(app.id, ADMIN_ID)

        assert result.succeeded is True
        assert result.decision is DecisionOutcome.REJECTED
        stored = await application_repo.get(app.id)
        assert stored.status is ApplicationStatus.REJECTED
        assert stored.final_decision is DecisionOutcome.REJECTED
        assert stored.decision_made_by_id == ADMIN_ID
        assert stored.decision_date == NOW
        assert all(v.is_locked for v in await vote_repo.list_for_application(app.id))

    @pytest.mark.asyncio
    async def test_approvals_meeting_quorum_approve(
        self, workflow_service, application_repo, vote_repo, notification_repo, quorum_of_two
    ) -> None:
        """Test enough approvals without a veto decide the application as Approved."""
        app = quorum_of_two
        await vote_repo.upsert(make_vote(app.id, "board-1", VoteDecision.APPROVE))
        await vote_repo.upsert(make_vote(app.id, "board-2", VoteDecision.APPROVE))

        result = await workflow_service.process_decision(app.id, ADMIN_ID)

        assert result.decision is DecisionOutcome.APPROVED
        stored = await application_repo.get(app.id)
        assert stored.status is ApplicationStatus.APPROVED
        assert stored.decision_message == "Your application has been approved!"
        assert all(v.is_locked for v in await vote_repo.list_for_application(app.id))
        assert notification_repo.for_recipient(APPLICANT_ID)[0].type is (
            NotificationType.APPLICATION_APPROVED
        )

    @pytest.mark.asyncio
    async def test_needs_more_info_vote_requests_information(
        self, workflow_service, application_repo, vote_repo, notification_repo, quorum_of_two
    ) -> None:
        """Test a NeedsMoreInfo vote sends the application back to the applicant."""
        app = quorum_of_two
        await vote_repo.upsert(make_vote(app.id, "board-1", VoteDecision.APPROVE))
        await vote_repo.upsert(make_vote(app.id, "board-2", VoteDecision.NEEDS_MORE_INFO))

        result = await workflow_service.process_decision(app.id, ADMIN_ID)

        assert result.decision is DecisionOutcome.NEEDS_MORE_INFORMATION
        stored = await application_repo.get(app.id)
        assert stored.status is ApplicationStatus.NEEDS_INFORMATION
        assert stored.final_decision is DecisionOutcome.NEEDS_MORE_INFORMATION
        assert not any(v.is_locked for v in await vote_repo.list_for_application(app.id))
        assert notification_repo.for_recipient(APPLICANT_ID)[0].type is (
            NotificationType.INFORMATION_REQUESTED
        )

    @pytest.mark.asyncio
    async def test_without_quorum_snapshot_decision_is_deferred(
        self, workflow_service, application_repo, vote_repo, notification_repo
    ) -> None:
        """Test a review with no quorum snapshot is deferred and stays open."""
        app = make_reviewable_application(votes_required=None)
        await application_repo.save(app)
        await vote_repo.upsert(make_vote(app.id, "board-1", VoteDecision.APPROVE))

        result = await workflow_service.process_decision(app.id, ADMIN_ID)

        assert result.succeeded is True
        assert result.decision is DecisionOutcome.DEFERRED
        stored = await application_repo.get(app.id)
        assert stored.status is ApplicationStatus.UNDER_REVIEW
        assert stored.final_decision is DecisionOutcome.DEFERRED
        assert stored.decision_made_by_id == ADMIN_ID
        assert notification_repo.all() == []

    @pytest.mark.asyncio
    async def test_refused_without_quorum(
        self, workflow_service, application_repo, vote_repo, quorum_of_two
    ) -> None:
        """Test a decision needs enough non-abstain votes."""
        app = quorum_of_two
        await vote_repo.upsert(make_vote(app.id, "board-1", VoteDecision.APPROVE))
        await vote_repo.upsert(make_vote(app.id, "board-2", VoteDecision.ABSTAIN))

        result = await workflow_service.process_decision(app.id, ADMIN_ID)

        assert result.succeeded is False
        assert result.decision is None
        assert result.errors == ("Not all board members have voted yet",)
        assert (await application_repo.get(app.id)).status is (
            ApplicationStatus.IN_DISCUSSION
        )

    @pytest.mark.asyncio
    async def test_decided_application_refused(
        self, workflow_service, application_repo
    ) -> None:
        """Test an already decided application cannot be decided by votes."""
        app = make_reviewable_application(status=ApplicationStatus.APPROVED)
        await application_repo.save(app)

        result = await workflow_service.process_decision(app.id, ADMIN_ID)

        assert result.succeeded is False
        assert result.errors == ("Application already decided (current status: Approved)",)

    @pytest.mark.asyncio
    async def test_missing_application(self, workflow_service) -> None:
        """Test an unknown id is reported as not found."""
        result = await workflow_service.process_decision(uuid4(), ADMIN_ID)

        assert result.succeeded is False
        assert result.errors == ("Application not found",)


class TestWithdraw:
    """Tests for withdraw."""

    @pytest.mark.asyncio
    async def test_withdraw_under_review_notifies_board(
        self, workflow_service, application_repo, notification_repo
    ) -> None:
        """Test withdrawing during review records the reason and tells the board."""
        app = make_reviewable_application()
        await application_repo.save(app)

        result = await workflow_service.withdraw(app.id, APPLICANT_ID, "Moving away")

        assert result.succeeded is True
        stored = await application_repo.get(app.id)
        assert stored.status is ApplicationStatus.WITHDRAWN
        assert stored.decision_message == "Withdrawn by applicant: Moving away"
        assert stored.final_decision is None
        withdrawn = [
            n
            for n in notification_repo.all()
            if n.type is NotificationType.APPLICATION_WITHDRAWN
        ]
        assert len(withdrawn) == 3

    @pytest.mark.asyncio
    async def test_withdraw_submitted_without_reason(
        self, workflow_service, application_repo, notification_repo
    ) -> None:
        """Test the default reason is used and the board is not notified."""
        app = make_reviewable_application(
            status=ApplicationStatus.SUBMITTED, review_started_date=None
        )
        await application_repo.save(app)

        result = await workflow_service.withdraw(app.id, APPLICANT_ID)

        assert result.succeeded is True
        stored = await application_repo.get(app.id)
        assert stored.decision_message == "Withdrawn by applicant: No reason given"
        assert notification_repo.all() == []

    @pytest.mark.asyncio
    async def test_withdraw_in_discussion(
        self, workflow_service, application_repo, notification_repo
    ) -> None:
        """Test an application can be withdrawn while the board discusses it."""
        app = make_reviewable_application(status=ApplicationStatus.IN_DISCUSSION)
        await application_repo.save(app)

        result = await workflow_service.withdraw(app.id, APPLICANT_ID, "Found other support")

        assert result.succeeded is True
        stored = await application_repo.get(app.id)
        assert stored.status is ApplicationStatus.WITHDRAWN
        assert stored.decision_date == NOW
        assert stored.decision_message == "Withdrawn by applicant: Found other support"
        assert len(notification_repo.all()) == 3

    @pytest.mark.asyncio
    async def test_withdraw_draft_refused(self, workflow_service, application_repo) -> None:
        """Test a draft that was never submitted cannot be withdrawn."""
        app = make_application()
        await application_repo.save(app)

        succeeded, errors = await workflow_service.withdraw(app.id, APPLICANT_ID)

        assert succeeded is False
        assert errors == [
            "Application must be in InDiscussion, Submitted or UnderReview status "
            "to be withdrawn (current status: Draft)"
        ]
        assert (await application_repo.get(app.id)).status is ApplicationStatus.DRAFT

    @pytest.mark.asyncio
    async def test_withdraw_after_approval_refused(
        self, workflow_service, application_repo
    ) -> None:
        """Test a decided application cannot be withdrawn."""
        app = make_reviewable_application(status=ApplicationStatus.APPROVED)
        await application_repo.save(app)

        succeeded, errors = await workflow_service.withdraw(app.id, APPLICANT_ID)

        assert succeeded is False
        assert "current status: Approved" in errors[0]
        assert (await application_repo.get(app.id)).status is ApplicationStatus.APPROVED

    @pytest.mark.asyncio
    async def test_withdraw_by_other_user_unauthorized(
        self, workflow_service, application_repo
    ) -> None:
        """Test only the applicant can withdraw."""
        app = make_reviewable_application()
        await application_repo.save(app)

        succeeded, errors = await workflow_service.withdraw(app.id, "board-1")

        assert succeeded is False
        assert errors == ["Unauthorized"]


class TestProgramLifecycle:
    """Tests for start_program and complete_program."""

    @pytest.mark.asyncio
    async def test_start_program_sets_dates(
        self, workflow_service, application_repo, notification_repo
    ) -> None:
        """Test the end date is start plus the default duration."""
        app = make_reviewable_application(status=ApplicationStatus.APPROVED)
        await application_repo.save(app)

        result = await workflow_service.start_program(app.id, date(2026, 2, 1))

        assert result.succeeded is True
        stored = await application_repo.get(app.id)
        assert stored.status is ApplicationStatus.ACTIVE
        assert stored.program_start_date == date(2026, 2, 1)
        assert stored.program_end_date == date(2027, 2, 1)
        [notice] = notification_repo.for_recipient(APPLICANT_ID)
        assert notice.message == "Your program will start on February 01, 2026."

    @pytest.mark.asyncio
    async def test_start_program_requires_approval(
        self, workflow_service, application_repo
    ) -> None:
        """Test only approved applications start a program."""
        app = make_reviewable_application()
        await application_repo.save(app)

        succeeded, _ = await workflow_service.start_program(app.id, date(2026, 2, 1))

        assert succeeded is False

    @pytest.mark.asyncio
    async def test_start_program_rejects_zero_duration(
        self, workflow_service, application_repo
    ) -> None:
        """Test the program lasts at least a month."""
        app = make_reviewable_application(status=ApplicationStatus.APPROVED)
        await application_repo.save(app)

        succeeded, errors = await workflow_service.start_program(
            app.id, date(2026, 2, 1), duration_months=0
        )

        assert succeeded is False
        assert errors == ["Program duration must be at least one month"]

    @pytest.mark.asyncio
    async def test_complete_program(self, workflow_service, application_repo) -> None:
        """Test an active program can be completed."""
        app = make_reviewable_application(status=ApplicationStatus.ACTIVE)
        await application_repo.save(app)

        result = await workflow_service.complete_program(app.id)

        assert result.succeeded is True
        assert (await application_repo.get(app.id)).status is ApplicationStatus.COMPLETED

    @pytest.mark.parametrize(
        ("start", "months", "expected"),
        [
            (date(2024, 1, 31), 1, date(2024, 2, 29)),
            (date(2025, 1, 31), 1, date(2025, 2, 28)),
            (date(2025, 11, 15), 3, date(2026, 2, 15)),
            (date(2025, 3, 1), 12, date(2026, 3, 1)),
        ],
    )
    def test_add_months(self, start: date, months: int, expected: date) -> None:
        """Test month arithmetic clamps to the target month's length."""
        assert add_months(start, months) == expected


class TestQueries:
    """Tests for the read operations."""

    @pytest.mark.asyncio
    async def test_list_needing_review_excludes_voted(
        self, workflow_service, application_repo, vote_repo
    ) -> None:
        """Test a board member only sees applications they have not voted on."""
        voted = make_reviewable_application()
        pending = make_reviewable_application(status=ApplicationStatus.IN_DISCUSSION)
        closed = make_reviewable_application(status=ApplicationStatus.APPROVED)
        for app in (voted, pending, closed):
            await application_repo.save(app)
        await vote_repo.upsert(make_vote(voted.id, "board-1"))

        needing = await workflow_service.list_needing_review("board-1")

        assert [app.id for app in needing] == [pending.id]

    @pytest.mark.asyncio
    async def test_list_expiring_soon(self, workflow_service, application_repo) -> None:
        """Test only stale open reviews are reported."""
        stale = make_reviewable_application()
        fresh = make_reviewable_application(submitted_date=NOW - timedelta(days=2))
        await application_repo.save(stale)
        await application_repo.save(fresh)

        expiring = await workflow_service.list_expiring_soon()

        assert [app.id for app in expiring] == [stale.id]
        assert len(await workflow_service.list_expiring_soon(days_threshold=1)) == 2

    @pytest.mark.asyncio
    async def test_list_applications_by_status(
        self, workflow_service, application_repo
    ) -> None:
        """Test filtering by status and listing by applicant."""
        draft = make_application()
        submitted = make_reviewable_application(status=ApplicationStatus.SUBMITTED)
        await application_repo.save(draft)
        await application_repo.save(submitted)

        assert len(await workflow_service.list_applications()) == 2
        assert [
            a.id for a in await workflow_service.list_applications(ApplicationStatus.DRAFT)
        ] == [draft.id]
        assert len(await workflow_service.get_by_applicant(APPLICANT_ID)) == 2
        assert await workflow_service.get_by_id(uuid4()) is None
