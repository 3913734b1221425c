"""Submission completeness rules for client applications.

Applied on first submission and on resubmission after an information
request. Collects every problem at once so the applicant can fix all of
them in a single pass.
"""

from __future__ import annotations

from src.domain.models.application import ClientApplication

DEFAULT_MIN_STATEMENT_LENGTH: int = 50

# (field, message fragment) for each statement that must be substantive
_STATEMENTS: tuple[tuple[str, str], ...] = (
    ("personal_statement", "Please provide a detailed personal statement"),
    ("expected_benefits", "Please explain how you will benefit"),
    ("commitment_statement", "Please explain your commitment"),
)


def validate_for_submission(
    application: ClientApplication,
    min_statement_length: int = DEFAULT_MIN_STATEMENT_LENGTH,
) -> dict[str, str]:
    """Check that an application is complete enough to submit.

    Args:
        application: The application as currently stored.
        min_statement_length: Minimum characters per statement, counted
            after trimming surrounding whitespace.

    Returns:
        Mapping of offending field name to message. Empty when valid.
    """
    errors: dict[str, str] = {}

    if not application.funding_types_requested:
        errors["funding_types_requested"] = "Please select at least one funding type"

    for field_name, prompt in _STATEMENTS:
        value: str = getattr(application, field_name) or ""
        if len(value.strip()) < min_statement_length:
            errors[field_name] = (
                f"{prompt} (minimum {min_statement_length} characters)"
            )

    if not application.understands_commitment:
        errors["understands_commitment"] = "You must acknowledge the 12-month commitment"

    if not application.signature or not application.signature.strip():
        errors["signature"] = "Signature is required"

    return errors
