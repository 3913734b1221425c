"""Board member vote domain model.

Exactly one ApplicationVote exists per (application, voter) pair. The
pair is a hard uniqueness invariant enforced by the vote repository;
a repeated vote by the same member updates the existing row.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from uuid import UUID, uuid4

MIN_CONFIDENCE_LEVEL: int = 1
MAX_CONFIDENCE_LEVEL: int = 5


class VoteDecision(Enum):
    """A board member's recommendation on an application."""

    APPROVE = "Approve"
    REJECT = "Reject"
    NEEDS_MORE_INFO = "NeedsMoreInfo"
    ABSTAIN = "Abstain"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True, eq=True)
class ApplicationVote:
    """A single board member's vote on an application.

    Attributes:
        application_id: The application voted on.
        voter_id: The board member who voted.
        decision: Approve, Reject, NeedsMoreInfo or Abstain.
        reasoning: Required justification text.
        confidence_level: Voter confidence, 1 (low) to 5 (high).
        is_locked: True once a final decision froze the vote for audit.
        voted_date: When the vote was first cast.
        modified_date: When the vote was last changed, if ever.
    """

    application_id: UUID
    voter_id: str
    decision: VoteDecision
    reasoning: str
    confidence_level: int = 3
    id: UUID = field(default_factory=uuid4)
    is_locked: bool = False
    voted_date: datetime = field(default_factory=_utc_now)
    modified_date: datetime | None = None

    def __post_init__(self) -> None:
        """Validate vote fields."""
        if not self.reasoning or not self.reasoning.strip():
            raise ValueError("Vote reasoning must not be empty")
        if not MIN_CONFIDENCE_LEVEL <= self.confidence_level <= MAX_CONFIDENCE_LEVEL:
            raise ValueError(
                f"confidence_level must be between {MIN_CONFIDENCE_LEVEL} and "
                f"{MAX_CONFIDENCE_LEVEL}, got {self.confidence_level}"
            )

    @property
    def is_approval(self) -> bool:
        return self.decision is VoteDecision.APPROVE

    @property
    def is_rejection(self) -> bool:
        return self.decision is VoteDecision.REJECT

    def revised(
        self,
        decision: VoteDecision,
        reasoning: str,
        confidence_level: int,
        modified_at: datetime,
    ) -> ApplicationVote:
        """Return this vote with a new decision, keeping identity and voted_date."""
        return replace(
            self,
            decision=decision,
            reasoning=reasoning,
            confidence_level=confidence_level,
            modified_date=modified_at,
        )

    def locked(self) -> ApplicationVote:
        return replace(self, is_locked=True)
