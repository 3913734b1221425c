"""PostgreSQL vote repository.

upsert() is INSERT ... ON CONFLICT (application_id, voter_id) DO UPDATE
... WHERE NOT is_locked RETURNING *. Two racing votes by the same member
collapse into one row holding the later decision; a locked vote matches
the conflict but not the WHERE clause, so nothing is returned and the
caller learns the vote is final.
"""

from __future__ import annotations

from uuid import UUID

from sqlalchemy import false, func, select, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from structlog import get_logger

from src.application.ports.vote_repository import VoteRepositoryProtocol
from src.domain.errors import ReviewStateError
from src.domain.models.vote import ApplicationVote
from src.infrastructure.adapters.persistence.errors import store_errors
from src.infrastructure.adapters.persistence.mapping import (
    to_row_values,
    vote_from_row,
)
from src.infrastructure.adapters.persistence.models import ApplicationVoteRow

logger = get_logger()

_votes = ApplicationVoteRow.__table__


class PostgresVoteRepository(VoteRepositoryProtocol):
    """PostgreSQL-backed vote store."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory
        self._log = logger.bind(component="vote_repository")

    async def upsert(self, vote: ApplicationVote) -> ApplicationVote:
        stmt = pg_insert(_votes).values(**to_row_values(vote))
        stmt = stmt.on_conflict_do_update(
            index_elements=[_votes.c.application_id, _votes.c.voter_id],
            set_={
                "decision": stmt.excluded.decision,
                "reasoning": stmt.excluded.reasoning,
                "confidence_level": stmt.excluded.confidence_level,
                "modified_date": func.coalesce(
                    stmt.excluded.modified_date, stmt.excluded.voted_date
                ),
            },
            where=_votes.c.is_locked == false(),
        ).returning(*_votes.c)

        with store_errors("upsert_vote"):
            async with self._session_factory() as session:
                result = await session.execute(stmt)
                row = result.mappings().one_or_none()
                if row is None:
                    await session.rollback()
                    raise ReviewStateError(
                        "Vote is already finalized and cannot be changed"
                    )
                await session.commit()
        return vote_from_row(row)

    async def get(self, application_id: UUID, voter_id: str) -> ApplicationVote | None:
        with store_errors("get_vote"):
            async with self._session_factory() as session:
                result = await session.execute(
                    select(_votes).where(
                        _votes.c.application_id == application_id,
                        _votes.c.voter_id == voter_id,
                    )
                )
                row = result.mappings().one_or_none()
        return vote_from_row(row) if row is not None else None

    async def list_for_application(self, application_id: UUID) -> list[ApplicationVote]:
        with store_errors("list_votes_for_application"):
            async with self._session_factory() as session:
                result = await session.execute(
                    select(_votes)
                    .where(_votes.c.application_id == application_id)
                    .order_by(_votes.c.voted_date)
                )
                rows = result.mappings().all()
        return [vote_from_row(row) for row in rows]

    async def list_by_voter(self, voter_id: str) -> list[ApplicationVote]:
        with store_errors("list_votes_by_voter"):
            async with self._session_factory() as session:
                result = await session.execute(
                    select(_votes)
                    .where(_votes.c.voter_id == voter_id)
                    .order_by(_votes.c.voted_date)
                )
                rows = result.mappings().all()
        return [vote_from_row(row) for row in rows]

    async def lock_for_application(self, application_id: UUID) -> int:
        with store_errors("lock_votes"):
            async with self._session_factory() as session:
                result = await session.execute(
                    update(_votes)
                    .where(
                        _votes.c.application_id == application_id,
                        _votes.c.is_locked == false(),
                    )
                    .values(is_locked=True)
                    .returning(_votes.c.id)
                )
                locked = len(result.all())
                await session.commit()
        self._log.info(
            "votes_locked", application_id=str(application_id), count=locked
        )
        return locked
