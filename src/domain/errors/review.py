"""Review workflow domain errors.

This module defines the failure taxonomy of the application review
workflow. Services raise these internally and translate them into
failed OperationResult values at their boundary; none of them escape
to callers.

Taxonomy:
- ReviewValidationError: caller input breaks a structural rule
- ReviewStateError: operation not legal for the current status
- ReviewNotFoundError: referenced id does not resolve
- ConcurrentDecisionError: a status write lost a race to another writer
- StoreUnavailableError: the backing store failed (infrastructure)
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID

from src.domain.exceptions import ReviewWorkflowError

if TYPE_CHECKING:
    from src.domain.models.application import ApplicationStatus


class ReviewValidationError(ReviewWorkflowError):
    """Raised when caller input fails one or more structural rules.

    Carries one message per offending field so the caller can correct
    every problem in a single retry.

    Attributes:
        field_errors: Mapping of field name to human-readable message.
    """

    def __init__(self, field_errors: dict[str, str]) -> None:
        """Initialize validation error.

        Args:
            field_errors: Mapping of field name to message. Must not be empty.
        """
        if not field_errors:
            raise ValueError("field_errors must name at least one field")
        self.field_errors = dict(field_errors)
        super().__init__("; ".join(self.field_errors.values()))

    @property
    def messages(self) -> list[str]:
        return list(self.field_errors.values())

    @classmethod
    def single(cls, field: str, message: str) -> ReviewValidationError:
        """Build an error for a single offending field."""
        return cls({field: message})


class ReviewStateError(ReviewWorkflowError):
    """Raised when an operation is not legal for the application's status.

    Attributes:
        current_status: The authoritative stored status, when known.
    """

    def __init__(
        self,
        message: str,
        current_status: ApplicationStatus | None = None,
    ) -> None:
        self.current_status = current_status
        super().__init__(message)


class ReviewNotFoundError(ReviewWorkflowError):
    """Raised when a referenced application, comment or vote does not exist.

    Attributes:
        entity: Kind of entity that was looked up ("Application", "Comment").
        entity_id: The identifier that did not resolve.
    """

    def __init__(self, entity: str, entity_id: UUID | str) -> None:
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} not found")


class ReviewAuthorizationError(ReviewWorkflowError):
    """Raised when the acting user does not own the targeted record."""

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message)


class ConcurrentDecisionError(ReviewWorkflowError):
    """Raised when a compare-and-swap status write loses a race.

    The store re-checked the status immediately before writing and found
    that another writer had already moved the application. The losing
    caller must not overwrite the winner's outcome.

    Attributes:
        application_id: The application being transitioned.
        expected_status: Status the caller read before writing.
        actual_status: Status found in the store at write time.
    """

    def __init__(
        self,
        application_id: UUID,
        expected_status: ApplicationStatus,
        actual_status: ApplicationStatus,
    ) -> None:
        self.application_id = application_id
        self.expected_status = expected_status
        self.actual_status = actual_status
        super().__init__(
            f"Application already decided or modified concurrently "
            f"(expected status: {expected_status.value}, "
            f"current status: {actual_status.value})"
        )


class StoreUnavailableError(ReviewWorkflowError):
    """Raised by adapters when the backing store cannot be reached.

    Wraps driver-level exceptions so the application layer never depends
    on a specific database library.
    """

    def __init__(self, operation: str, cause: BaseException | None = None) -> None:
        self.operation = operation
        self.cause = cause
        super().__init__(f"Store unavailable during {operation}")
