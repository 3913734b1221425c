"""Base exception classes for the review workflow domain layer."""


class ReviewWorkflowError(Exception):
    """Base exception for all domain errors.

    All domain-specific exceptions MUST inherit from this class so the
    service boundary can tell business-rule failures apart from
    infrastructure failures.
    """

    def __init__(self, message: str = "") -> None:
        """Initialize the exception with an optional message.

        Args:
            message: Human-readable error description.
        """
        super().__init__(message)

    @property
    def messages(self) -> list[str]:
        """Human-readable messages surfaced to the caller."""
        return [str(self)]
