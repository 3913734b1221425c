"""Vote repository stub implementation.

In-memory VoteRepositoryProtocol keyed on (application_id, voter_id),
mirroring the unique constraint of the PostgreSQL table. upsert() runs
under a lock so two racing votes by the same member leave one entry.
"""

from __future__ import annotations

import asyncio
from dataclasses import replace
from uuid import UUID

from src.application.ports.vote_repository import VoteRepositoryProtocol
from src.domain.errors import ReviewStateError
from src.domain.models.vote import ApplicationVote


class VoteRepositoryStub(VoteRepositoryProtocol):
    """In-memory stub implementation of VoteRepositoryProtocol.

    NOT suitable for production use.
    """

    def __init__(self) -> None:
        self._votes: dict[tuple[UUID, str], ApplicationVote] = {}
        self._lock = asyncio.Lock()

    async def upsert(self, vote: ApplicationVote) -> ApplicationVote:
        """Insert the vote, or update the member's existing one.

        Raises:
            ReviewStateError: If the existing vote is locked.
        """
        key = (vote.application_id, vote.voter_id)
        async with self._lock:
            existing = self._votes.get(key)
            if existing is None:
                stored = vote
            elif existing.is_locked:
                raise ReviewStateError("Vote is already finalized and cannot be changed")
            else:
                stored = replace(
                    existing,
                    decision=vote.decision,
                    reasoning=vote.reasoning,
                    confidence_level=vote.confidence_level,
                    modified_date=vote.modified_date or vote.voted_date,
                )
            self._votes[key] = stored
            return stored

    async def get(self, application_id: UUID, voter_id: str) -> ApplicationVote | None:
        return self._votes.get((application_id, voter_id))

    async def list_for_application(self, application_id: UUID) -> list[ApplicationVote]:
        async with self._lock:
            votes = [v for v in self._votes.values() if v.application_id == application_id]
        return sorted(votes, key=lambda v: v.voted_date)

    async def list_by_voter(self, voter_id: str) -> list[ApplicationVote]:
        return sorted(
            (v for v in self._votes.values() if v.voter_id == voter_id),
            key=lambda v: v.voted_date,
        )

    async def lock_for_application(self, application_id: UUID) -> int:
        locked = 0
        async with self._lock:
            for key, vote in self._votes.items():
                if vote.application_id == application_id and not vote.is_locked:
                    self._votes[key] = vote.locked()
                    locked += 1
        return locked

    # Test helper methods

    def clear(self) -> None:
        self._votes.clear()

    def count(self) -> int:
        return len(self._votes)
