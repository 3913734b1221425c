"""Derived (never persisted) review aggregates.

These value objects are recomputed from stored votes and applications
on every request.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from uuid import UUID


@dataclass(frozen=True)
class VotingSummary:
    """Tally of the votes on one application.

    Advisory input to the deciding admin. Never applied as a transition
    trigger by itself.

    Attributes:
        application_id: The application tallied.
        total_votes_cast: Votes whose decision is not Abstain.
        approval_votes: Approve votes.
        rejection_votes: Reject votes.
        needs_info_votes: NeedsMoreInfo votes.
        abstain_votes: Abstain votes.
        votes_required: The application's quorum snapshot (0 if unset).
        has_sufficient_votes: Quorum met AND application reviewable.
        has_any_rejection: At least one Reject vote.
        is_approved: Approvals meet quorum and nobody rejected (veto rule).
        pending_voter_ids: Active board members who have not voted yet.
    """

    application_id: UUID
    total_votes_cast: int = 0
    approval_votes: int = 0
    rejection_votes: int = 0
    needs_info_votes: int = 0
    abstain_votes: int = 0
    votes_required: int = 0
    has_sufficient_votes: bool = False
    has_any_rejection: bool = False
    is_approved: bool = False
    pending_voter_ids: tuple[str, ...] = field(default=())


@dataclass(frozen=True)
class ApplicationStatistics:
    """Foundation-wide application counts and rates."""

    total_applications: int = 0
    pending_review: int = 0
    under_review: int = 0
    approved: int = 0
    rejected: int = 0
    active: int = 0
    completed: int = 0
    approval_rate: float = 0.0
    average_review_days: float = 0.0


@dataclass(frozen=True)
class BoardMemberStatistics:
    """Participation metrics for a single board member."""

    voter_id: str
    total_votes_cast: int = 0
    approvals_given: int = 0
    rejections_given: int = 0
    pending_votes: int = 0
    participation_rate: float = 0.0
    average_confidence_level: float = 0.0
