"""Configuration module for the review workflow.

Available Configurations:
- ReviewWorkflowConfig: Submission, voting and program rules
- EmailConfig: Outbound SMTP settings
"""

from src.config.review_config import (
    DEFAULT_REVIEW_WORKFLOW_CONFIG,
    TEST_REVIEW_WORKFLOW_CONFIG,
    EmailConfig,
    ReviewWorkflowConfig,
)

__all__ = [
    "ReviewWorkflowConfig",
    "EmailConfig",
    "DEFAULT_REVIEW_WORKFLOW_CONFIG",
    "TEST_REVIEW_WORKFLOW_CONFIG",
]
