"""Client application repository stub implementation.

This module provides an in-memory stub implementation of
ApplicationRepositoryProtocol for development and testing purposes.

The compare-and-swap in update_if_status() is serialized with an
asyncio.Lock so concurrent decisions behave as they do against
PostgreSQL: exactly one writer wins.
"""

from __future__ import annotations

import asyncio
from collections.abc import Collection
from datetime import datetime
from uuid import UUID

from src.application.ports.application_repository import (
    ApplicationRepositoryProtocol,
)
from src.domain.errors import ConcurrentDecisionError, ReviewNotFoundError
from src.domain.models.application import ClientApplication
from src.domain.models.application_status import ApplicationStatus


def _submission_key(application: ClientApplication) -> datetime:
    return application.submitted_date or application.created_date


class ApplicationRepositoryStub(ApplicationRepositoryProtocol):
    """In-memory stub implementation of ApplicationRepositoryProtocol.

    This stub stores applications in memory for development and testing.
    It is NOT suitable for production use.

    Attributes:
        _applications: Dictionary mapping application.id to ClientApplication.
    """

    def __init__(self) -> None:
        """Initialize the stub with empty storage."""
        self._applications: dict[UUID, ClientApplication] = {}
        # Lock for simulating the atomic status CAS
        self._cas_lock = asyncio.Lock()

    async def save(self, application: ClientApplication) -> None:
        """Save a new application.

        Raises:
            ValueError: If application.id already exists.
        """
        if application.id in self._applications:
            raise ValueError(f"Application already exists: {application.id}")
        self._applications[application.id] = application

    async def get(self, application_id: UUID) -> ClientApplication | None:
        return self._applications.get(application_id)

    async def list_all(self) -> list[ClientApplication]:
        return sorted(self._applications.values(), key=_submission_key, reverse=True)

    async def list_by_applicant(self, applicant_id: str) -> list[ClientApplication]:
        return sorted(
            (a for a in self._applications.values() if a.applicant_id == applicant_id),
            key=_submission_key,
            reverse=True,
        )

    async def list_by_status(
        self,
        statuses: Collection[ApplicationStatus],
    ) -> list[ClientApplication]:
        wanted = set(statuses)
        return sorted(
            (a for a in self._applications.values() if a.status in wanted),
            key=_submission_key,
        )

    async def update_if_status(
        self,
        application: ClientApplication,
        expected_status: ApplicationStatus,
    ) -> ClientApplication:
        """Replace the stored record if its status still equals expected_status.

        Raises:
            ReviewNotFoundError: If the application doesn't exist.
            ConcurrentDecisionError: If another writer changed the status.
        """
        async with self._cas_lock:
            current = self._applications.get(application.id)
            if current is None:
                raise ReviewNotFoundError("Application", application.id)
            if current.status != expected_status:
                raise ConcurrentDecisionError(
                    application_id=application.id,
                    expected_status=expected_status,
                    actual_status=current.status,
                )
            self._applications[application.id] = application
            return application

    # Test helper methods

    def clear(self) -> None:
        """Clear all stored applications (for testing)."""
        self._applications.clear()

    def count(self) -> int:
        return len(self._applications)
