"""Application services - Use case orchestration.

This module contains the review services that orchestrate domain
operations and coordinate with infrastructure adapters.

Available services:
- ApplicationWorkflowService: Draft, submission, review, decision and program lifecycle
- VotingService: Board member votes and voting summaries
- CommentService: Discussion comments and information requests
- ReviewStatisticsService: Dashboard aggregates
- NotificationDispatcherService: Notification records, read tracking and email
"""

from src.application.services.application_workflow_service import (
    ApplicationWorkflowService,
)
from src.application.services.base import GENERIC_FAILURE_MESSAGE, LoggingMixin
from src.application.services.comment_service import CommentService
from src.application.services.notification_dispatcher_service import (
    NotificationDispatcherService,
)
from src.application.services.review_statistics_service import (
    ReviewStatisticsService,
)
from src.application.services.voting_service import VotingService

__all__ = [
    "GENERIC_FAILURE_MESSAGE",
    "ApplicationWorkflowService",
    "CommentService",
    "LoggingMixin",
    "NotificationDispatcherService",
    "ReviewStatisticsService",
    "VotingService",
]
