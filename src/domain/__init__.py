"""
Domain layer - Pure business logic for the review workflow.

This layer contains:
- Domain models (applications, votes, comments, notifications)
- The application status transition table
- The voting tally
- Domain exceptions

CRITICAL: This layer must NOT import from application or infrastructure.
Only stdlib and typing imports are allowed.
"""

from src.domain.exceptions import ReviewWorkflowError

__all__: list[str] = ["ReviewWorkflowError"]
