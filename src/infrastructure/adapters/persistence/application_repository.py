"""PostgreSQL client application repository.

Production implementation of ApplicationRepositoryProtocol.

Concurrency:
- update_if_status() is a single UPDATE ... WHERE id = :id AND
  status = :expected RETURNING *. PostgreSQL row locking makes the
  check and the write atomic, so of two racing decisions exactly one
  row update succeeds.
- Zero updated rows means the record vanished or another writer moved
  it first; the current row is re-read to report which.
"""

from __future__ import annotations

from collections.abc import Collection
from uuid import UUID

from sqlalchemy import Select, desc, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from structlog import get_logger

from src.application.ports.application_repository import (
    ApplicationRepositoryProtocol,
)
from src.domain.errors import ConcurrentDecisionError, ReviewNotFoundError
from src.domain.models.application import ClientApplication
from src.domain.models.application_status import ApplicationStatus
from src.infrastructure.adapters.persistence.errors import store_errors
from src.infrastructure.adapters.persistence.mapping import (
    application_from_row,
    to_row_values,
)
from src.infrastructure.adapters.persistence.models import ClientApplicationRow

logger = get_logger()

_applications = ClientApplicationRow.__table__
_submission_order = func.coalesce(
    _applications.c.submitted_date, _applications.c.created_date
)


class PostgresApplicationRepository(ApplicationRepositoryProtocol):
    """PostgreSQL-backed application store.

    Attributes:
        _session_factory: Async session factory from src.bootstrap.database.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory
        self._log = logger.bind(component="application_repository")

    async def save(self, application: ClientApplication) -> None:
        with store_errors("save_application"):
            async with self._session_factory() as session:
                try:
                    await session.execute(
                        _applications.insert().values(**to_row_values(application))
                    )
                    await session.commit()
                except IntegrityError as exc:
                    await session.rollback()
                    raise ValueError(
                        f"Application already exists: {application.id}"
                    ) from exc
        self._log.debug("application_saved", application_id=str(application.id))

    async def get(self, application_id: UUID) -> ClientApplication | None:
        with store_errors("get_application"):
            async with self._session_factory() as session:
                result = await session.execute(
                    select(_applications).where(_applications.c.id == application_id)
                )
                row = result.mappings().one_or_none()
        return application_from_row(row) if row is not None else None

    async def list_all(self) -> list[ClientApplication]:
        return await self._list(
            "list_applications", select(_applications).order_by(desc(_submission_order))
        )

    async def list_by_applicant(self, applicant_id: str) -> list[ClientApplication]:
        return await self._list(
            "list_applications_by_applicant",
            select(_applications)
            .where(_applications.c.applicant_id == applicant_id)
            .order_by(desc(_submission_order)),
        )

    async def list_by_status(
        self,
        statuses: Collection[ApplicationStatus],
    ) -> list[ClientApplication]:
        if not statuses:
            return []
        return await self._list(
            "list_applications_by_status",
            select(_applications)
            .where(_applications.c.status.in_([s.value for s in statuses]))
            .order_by(_submission_order),
        )

    async def update_if_status(
        self,
        application: ClientApplication,
        expected_status: ApplicationStatus,
    ) -> ClientApplication:
        values = to_row_values(application)
        values.pop("id")
        with store_errors("update_application"):
            async with self._session_factory() as session:
                result = await session.execute(
                    update(_applications)
                    .where(
                        _applications.c.id == application.id,
                        _applications.c.status == expected_status.value,
                    )
                    .values(**values)
                    .returning(*_applications.c)
                )
                row = result.mappings().one_or_none()
                if row is None:
                    await session.rollback()
                    current = await session.execute(
                        select(_applications.c.status).where(
                            _applications.c.id == application.id
                        )
                    )
                    actual = current.scalar_one_or_none()
                    if actual is None:
                        raise ReviewNotFoundError("Application", application.id)
                    self._log.warning(
                        "application_cas_conflict",
                        application_id=str(application.id),
                        expected_status=expected_status.value,
                        actual_status=actual,
                    )
                    raise ConcurrentDecisionError(
                        application_id=application.id,
                        expected_status=expected_status,
                        actual_status=ApplicationStatus(actual),
                    )
                await session.commit()
        return application_from_row(row)

    async def _list(self, operation: str, statement: Select) -> list[ClientApplication]:
        with store_errors(operation):
            async with self._session_factory() as session:
                result = await session.execute(statement)
                rows = result.mappings().all()
        return [application_from_row(row) for row in rows]
