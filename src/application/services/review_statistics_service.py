"""Review statistics service.

Read-only aggregates over applications and votes for the admin and
board dashboards.

Definitions:
- approval_rate = approved / (approved + rejected), 0.0 when nothing
  has been decided.
- average_review_days averages (decision_date - submitted_date) over
  applications whose final decision is Approved or Rejected. Open and
  withdrawn applications are excluded from the denominator.
- participation_rate = votes cast / applications whose review ever
  started, capped at 1.0.
"""

from __future__ import annotations

from src.application.ports.application_repository import (
    ApplicationRepositoryProtocol,
)
from src.application.ports.vote_repository import VoteRepositoryProtocol
from src.application.services.base import LoggingMixin
from src.domain.models.application import ClientApplication, DecisionOutcome
from src.domain.models.application_status import (
    REVIEWABLE_STATUSES,
    ApplicationStatus,
)
from src.domain.models.review_statistics import (
    ApplicationStatistics,
    BoardMemberStatistics,
)

_SECONDS_PER_DAY = 86400.0

_DECIDED_OUTCOMES = frozenset({DecisionOutcome.APPROVED, DecisionOutcome.REJECTED})


def _review_days(application: ClientApplication) -> float | None:
    if (
        application.final_decision not in _DECIDED_OUTCOMES
        or application.submitted_date is None
        or application.decision_date is None
    ):
        return None
    elapsed = application.decision_date - application.submitted_date
    return elapsed.total_seconds() / _SECONDS_PER_DAY


class ReviewStatisticsService(LoggingMixin):
    """Computes application and board member statistics."""

    def __init__(
        self,
        application_repo: ApplicationRepositoryProtocol,
        vote_repo: VoteRepositoryProtocol,
    ) -> None:
        self._application_repo = application_repo
        self._vote_repo = vote_repo
        self._init_logger(component="statistics")

    async def application_statistics(self) -> ApplicationStatistics:
        """Count applications per status bucket and derive decision metrics."""
        applications = await self._application_repo.list_all()
        counts = {status: 0 for status in ApplicationStatus}
        for application in applications:
            counts[application.status] += 1

        approved = counts[ApplicationStatus.APPROVED]
        rejected = counts[ApplicationStatus.REJECTED]
        decided = approved + rejected

        review_days = [
            days for days in map(_review_days, applications) if days is not None
        ]

        stats = ApplicationStatistics(
            total_applications=len(applications),
            pending_review=counts[ApplicationStatus.SUBMITTED],
            under_review=sum(counts[status] for status in REVIEWABLE_STATUSES),
            approved=approved,
            rejected=rejected,
            active=counts[ApplicationStatus.ACTIVE],
            completed=counts[ApplicationStatus.COMPLETED],
            approval_rate=approved / decided if decided else 0.0,
            average_review_days=(
                sum(review_days) / len(review_days) if review_days else 0.0
            ),
        )
        self._log_operation("application_statistics").debug(
            "statistics_computed", total_applications=stats.total_applications
        )
        return stats

    async def board_member_statistics(self, voter_id: str) -> BoardMemberStatistics:
        """Summarize one board member's voting activity.

        Args:
            voter_id: The board member.

        Returns:
            BoardMemberStatistics; all zeros for a member with no votes.
        """
        votes = await self._vote_repo.list_by_voter(voter_id)
        applications = await self._application_repo.list_all()

        voted_ids = {vote.application_id for vote in votes}
        pending = sum(
            1
            for app in applications
            if app.status in REVIEWABLE_STATUSES and app.id not in voted_ids
        )
        needed_review = sum(
            1 for app in applications if app.review_started_date is not None
        )

        total = len(votes)
        return BoardMemberStatistics(
            voter_id=voter_id,
            total_votes_cast=total,
            approvals_given=sum(1 for vote in votes if vote.is_approval),
            rejections_given=sum(1 for vote in votes if vote.is_rejection),
            pending_votes=pending,
            participation_rate=(
                min(1.0, total / needed_review) if needed_review else 0.0
            ),
            average_confidence_level=(
                sum(vote.confidence_level for vote in votes) / total if total else 0.0
            ),
        )
