"""Operation result DTOs for the review services.

Every mutating review operation returns one of these values instead of
raising. A failed result carries human-readable messages; success
carries an empty error list.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from src.domain.models.application import ClientApplication, DecisionOutcome
from src.domain.models.comment import ApplicationComment


@dataclass(frozen=True)
class OperationResult:
    """Outcome of a mutating operation.

    Attributes:
        succeeded: Whether the operation took effect.
        errors: Human-readable failure reasons; empty on success.
    """

    succeeded: bool
    errors: tuple[str, ...] = field(default=())

    @classmethod
    def success(cls) -> OperationResult:
        return cls(succeeded=True)

    @classmethod
    def failure(cls, errors: Iterable[str]) -> OperationResult:
        return cls(succeeded=False, errors=tuple(errors))

    def __iter__(self):
        # Allows ``succeeded, errors = result``
        yield self.succeeded
        yield list(self.errors)


@dataclass(frozen=True)
class DraftResult(OperationResult):
    """Result of creating or editing a draft application."""

    application: ClientApplication | None = None


@dataclass(frozen=True)
class CommentResult(OperationResult):
    """Result of adding a comment."""

    comment: ApplicationComment | None = None


@dataclass(frozen=True)
class DecisionResult(OperationResult):
    """Result of processing a vote-backed decision."""

    decision: DecisionOutcome | None = None
