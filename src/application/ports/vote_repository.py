"""Board member vote repository port.

Constraints:
- (application_id, voter_id) is unique; the store enforces it.
- upsert() is atomic: two near-simultaneous votes by the same member
  leave exactly one row holding the later decision. A uniqueness clash
  is resolved as an update, never surfaced as an error.
- A locked vote is never overwritten.
"""

from __future__ import annotations

from typing import Protocol
from uuid import UUID

from src.domain.models.vote import ApplicationVote


class VoteRepositoryProtocol(Protocol):
    """Protocol for vote storage operations."""

    async def upsert(self, vote: ApplicationVote) -> ApplicationVote:
        """Insert a vote or update the member's existing vote.

        On conflict only decision, reasoning, confidence_level and
        modified_date are overwritten; id and voted_date are kept.

        Args:
            vote: The vote to record.

        Returns:
            The stored vote.

        Raises:
            ReviewStateError: If the existing vote is locked.
        """
        ...

    async def get(self, application_id: UUID, voter_id: str) -> ApplicationVote | None:
        """Retrieve a member's vote on an application, or None."""
        ...

    async def list_for_application(self, application_id: UUID) -> list[ApplicationVote]:
        """List every vote on an application in one consistent read.

        Returns:
            Votes ordered by voted_date ascending.
        """
        ...

    async def list_by_voter(self, voter_id: str) -> list[ApplicationVote]:
        """List every vote cast by a board member."""
        ...

    async def lock_for_application(self, application_id: UUID) -> int:
        """Lock every vote on an application.

        Returns:
            Number of votes locked by this call.
        """
        ...
