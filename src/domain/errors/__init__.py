"""Domain errors for the review workflow.

All exceptions inherit from ReviewWorkflowError.
"""

from src.domain.errors.review import (
    ConcurrentDecisionError,
    ReviewAuthorizationError,
    ReviewNotFoundError,
    ReviewStateError,
    ReviewValidationError,
    StoreUnavailableError,
)

__all__: list[str] = [
    "ConcurrentDecisionError",
    "ReviewAuthorizationError",
    "ReviewNotFoundError",
    "ReviewStateError",
    "ReviewValidationError",
    "StoreUnavailableError",
]
