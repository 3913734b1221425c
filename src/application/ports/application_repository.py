"""Client application repository port.

This module defines the abstract interface for application storage.

Concurrency Contract:
- Every write after creation goes through update_if_status(), an atomic
  compare-and-swap keyed on the stored status. Two admins deciding the
  same application concurrently therefore produce exactly one outcome;
  the second writer receives ConcurrentDecisionError.
- Repositories raise on errors; services translate to result values.
"""

from __future__ import annotations

from collections.abc import Collection
from typing import Protocol
from uuid import UUID

from src.domain.models.application import ClientApplication
from src.domain.models.application_status import ApplicationStatus


class ApplicationRepositoryProtocol(Protocol):
    """Protocol for client application storage operations.

    Implementations may use PostgreSQL, in-memory storage, or other
    backends.
    """

    async def save(self, application: ClientApplication) -> None:
        """Store a new application.

        Raises:
            ValueError: If application.id already exists.
        """
        ...

    async def get(self, application_id: UUID) -> ClientApplication | None:
        """Retrieve an application by ID, or None if absent."""
        ...

    async def list_all(self) -> list[ClientApplication]:
        """List every application, newest submission (or creation) first."""
        ...

    async def list_by_applicant(self, applicant_id: str) -> list[ClientApplication]:
        """List an applicant's applications, newest submission (or creation) first."""
        ...

    async def list_by_status(
        self,
        statuses: Collection[ApplicationStatus],
    ) -> list[ClientApplication]:
        """List applications whose status is in statuses, oldest submission first."""
        ...

    async def update_if_status(
        self,
        application: ClientApplication,
        expected_status: ApplicationStatus,
    ) -> ClientApplication:
        """Atomically replace the stored record if its status is unchanged.

        The stored status is compared with expected_status immediately
        before writing (UPDATE ... WHERE status = expected RETURNING *).

        Args:
            application: The new version of the record.
            expected_status: Status the caller read before deciding to write.

        Returns:
            The stored application.

        Raises:
            ReviewNotFoundError: If the application doesn't exist.
            ConcurrentDecisionError: If the stored status no longer matches.
        """
        ...
