"""Review workflow configuration.

This module defines configuration for the application review workflow
and outbound email, with environment variable overrides for
production tuning.

Environment Variables (Review):
- REVIEW_MIN_STATEMENT_LENGTH: Minimum characters per statement (default: 50)
- REVIEW_MIN_VOTE_REASONING_LENGTH: Minimum vote reasoning characters (default: 1)
- REVIEW_DEFAULT_CONFIDENCE_LEVEL: Confidence used when none given (default: 3)
- REVIEW_PROGRAM_DURATION_MONTHS: Default program length (default: 12)
- REVIEW_EXPIRING_SOON_DAYS: Age at which a review counts as stale (default: 30)
- REVIEW_ACTION_URL_TEMPLATE: Link sent to board members (default:
  /Admin/Applications/Review/{application_id})

Environment Variables (Email):
- SMTP_HOST, SMTP_PORT (default: 587), SMTP_USER, SMTP_PASSWORD
- SMTP_USE_TLS (default: true)
- EMAIL_FROM_ADDRESS (default: noreply@ellishope.org)
- EMAIL_FROM_NAME (default: Ellis Hope Foundation)
"""

from __future__ import annotations

import os
from dataclasses import dataclass


def _get_int_env(key: str, default: int) -> int:
    """Get integer environment variable with default.

    Args:
        key: Environment variable name.
        default: Default value if not set or invalid.

    Returns:
        Parsed integer value or default.
    """
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_str_env(key: str, default: str) -> str:
    value = os.environ.get(key)
    if value is None or not value.strip():
        return default
    return value


def _get_bool_env(key: str, default: bool) -> bool:
    value = os.environ.get(key)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class ReviewWorkflowConfig:
    """Configuration for the review workflow rules.

    Attributes:
        min_statement_length: Minimum length of the personal, expected
            benefit and commitment statements on submission.
        min_vote_reasoning_length: Minimum vote reasoning length. The core
            only insists on non-blank text; the presentation layer asks
            for 20 characters.
        min_confidence_level: Lowest accepted vote confidence.
        max_confidence_level: Highest accepted vote confidence.
        default_confidence_level: Confidence used when none is supplied.
        default_program_duration_months: Program length when starting a
            program without an explicit duration.
        expiring_soon_threshold_days: Days since submission after which a
            still-open review is reported as expiring soon.
        default_withdraw_reason: Reason recorded when the applicant gives none.
        default_approval_message: Decision message when the approver gives none.
        review_action_url_template: Link included in review notifications.
    """

    min_statement_length: int = 50
    min_vote_reasoning_length: int = 1
    min_confidence_level: int = 1
    max_confidence_level: int = 5
    default_confidence_level: int = 3
    default_program_duration_months: int = 12
    expiring_soon_threshold_days: int = 30
    default_withdraw_reason: str = "No reason given"
    default_approval_message: str = "Your application has been approved!"
    review_action_url_template: str = "/Admin/Applications/Review/{application_id}"

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if self.min_statement_length < 1:
            raise ValueError(
                f"min_statement_length must be positive, got {self.min_statement_length}"
            )
        if self.min_vote_reasoning_length < 1:
            raise ValueError(
                "min_vote_reasoning_length must be at least 1, "
                f"got {self.min_vote_reasoning_length}"
            )
        if self.min_confidence_level > self.max_confidence_level:
            raise ValueError(
                f"min_confidence_level ({self.min_confidence_level}) must not exceed "
                f"max_confidence_level ({self.max_confidence_level})"
            )
        if not (
            self.min_confidence_level
            <= self.default_confidence_level
            <= self.max_confidence_level
        ):
            raise ValueError(
                f"default_confidence_level must be between {self.min_confidence_level} "
                f"and {self.max_confidence_level}, got {self.default_confidence_level}"
            )
        if self.default_program_duration_months < 1:
            raise ValueError(
                "default_program_duration_months must be positive, "
                f"got {self.default_program_duration_months}"
            )
        if self.expiring_soon_threshold_days < 0:
            raise ValueError(
                "expiring_soon_threshold_days must be non-negative, "
                f"got {self.expiring_soon_threshold_days}"
            )
        if "{application_id}" not in self.review_action_url_template:
            raise ValueError(
                "review_action_url_template must contain an {application_id} placeholder"
            )

    def review_action_url(self, application_id: object) -> str:
        return self.review_action_url_template.format(application_id=application_id)

    @classmethod
    def from_environment(cls) -> ReviewWorkflowConfig:
        """Create config from environment variables with defaults.

        Returns:
            ReviewWorkflowConfig with values from environment or defaults.
        """
        return cls(
            min_statement_length=_get_int_env("REVIEW_MIN_STATEMENT_LENGTH", 50),
            min_vote_reasoning_length=_get_int_env(
                "REVIEW_MIN_VOTE_REASONING_LENGTH", 1
            ),
            default_confidence_level=_get_int_env("REVIEW_DEFAULT_CONFIDENCE_LEVEL", 3),
            default_program_duration_months=_get_int_env(
                "REVIEW_PROGRAM_DURATION_MONTHS", 12
            ),
            expiring_soon_threshold_days=_get_int_env("REVIEW_EXPIRING_SOON_DAYS", 30),
            review_action_url_template=_get_str_env(
                "REVIEW_ACTION_URL_TEMPLATE",
                "/Admin/Applications/Review/{application_id}",
            ),
        )


@dataclass(frozen=True)
class EmailConfig:
    """Configuration for the outbound SMTP email sender.

    When no SMTP host is configured the sender logs messages instead of
    delivering them.
    """

    smtp_host: str | None = None
    smtp_port: int = 587
    smtp_user: str | None = None
    smtp_password: str | None = None
    use_tls: bool = True
    from_address: str = "noreply@ellishope.org"
    from_name: str = "Ellis Hope Foundation"
    timeout_seconds: int = 30

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if not 0 < self.smtp_port < 65536:
            raise ValueError(f"smtp_port must be a valid port, got {self.smtp_port}")
        if self.timeout_seconds < 1:
            raise ValueError(
                f"timeout_seconds must be at least 1, got {self.timeout_seconds}"
            )

    @property
    def is_configured(self) -> bool:
        return bool(self.smtp_host)

    @classmethod
    def from_environment(cls) -> EmailConfig:
        """Create config from environment variables with defaults."""
        return cls(
            smtp_host=os.environ.get("SMTP_HOST") or None,
            smtp_port=_get_int_env("SMTP_PORT", 587),
            smtp_user=os.environ.get("SMTP_USER") or None,
            smtp_password=os.environ.get("SMTP_PASSWORD") or None,
            use_tls=_get_bool_env("SMTP_USE_TLS", True),
            from_address=_get_str_env("EMAIL_FROM_ADDRESS", "noreply@ellishope.org"),
            from_name=_get_str_env("EMAIL_FROM_NAME", "Ellis Hope Foundation"),
        )


# Default production config
DEFAULT_REVIEW_WORKFLOW_CONFIG = ReviewWorkflowConfig()

# Testing config with short statements so fixtures stay readable
TEST_REVIEW_WORKFLOW_CONFIG = ReviewWorkflowConfig(
    min_statement_length=10,
    expiring_soon_threshold_days=7,
)
