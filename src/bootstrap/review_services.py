"""Bootstrap wiring for the review services.

Builds the five review services over one shared set of repositories.
PostgreSQL repositories are used when DATABASE_URL is configured,
otherwise in-memory stubs for development and testing.

The board directory belongs to the host application's user management;
callers pass their own implementation. Without one, an empty in-memory
directory is used and every quorum snapshot is zero.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from structlog import get_logger

from src.application.ports.application_repository import (
    ApplicationRepositoryProtocol,
)
from src.application.ports.board_directory import BoardDirectoryProtocol
from src.application.ports.comment_repository import CommentRepositoryProtocol
from src.application.ports.email_sender import EmailSenderProtocol
from src.application.ports.notification_repository import (
    NotificationRepositoryProtocol,
)
from src.application.ports.time_authority import TimeAuthorityProtocol
from src.application.ports.vote_repository import VoteRepositoryProtocol
from src.application.services.application_workflow_service import (
    ApplicationWorkflowService,
)
from src.application.services.comment_service import CommentService
from src.application.services.notification_dispatcher_service import (
    NotificationDispatcherService,
)
from src.application.services.review_statistics_service import (
    ReviewStatisticsService,
)
from src.application.services.voting_service import VotingService
from src.config.review_config import EmailConfig, ReviewWorkflowConfig
from src.infrastructure.adapters.mail.smtp_email_sender import SmtpEmailSender
from src.infrastructure.adapters.time.system_time_authority import (
    SystemTimeAuthority,
)
from src.infrastructure.stubs.application_repository_stub import (
    ApplicationRepositoryStub,
)
from src.infrastructure.stubs.board_directory_stub import BoardDirectoryStub
from src.infrastructure.stubs.comment_repository_stub import CommentRepositoryStub
from src.infrastructure.stubs.notification_repository_stub import (
    NotificationRepositoryStub,
)
from src.infrastructure.stubs.vote_repository_stub import VoteRepositoryStub

logger = get_logger()


@dataclass(frozen=True)
class ReviewRepositories:
    """The four stores behind the review services."""

    applications: ApplicationRepositoryProtocol
    votes: VoteRepositoryProtocol
    comments: CommentRepositoryProtocol
    notifications: NotificationRepositoryProtocol


@dataclass(frozen=True)
class ReviewServices:
    """Fully wired review services sharing one set of repositories."""

    workflow: ApplicationWorkflowService
    voting: VotingService
    comments: CommentService
    statistics: ReviewStatisticsService
    notifications: NotificationDispatcherService
    repositories: ReviewRepositories


def create_stub_repositories() -> ReviewRepositories:
    return ReviewRepositories(
        applications=ApplicationRepositoryStub(),
        votes=VoteRepositoryStub(),
        comments=CommentRepositoryStub(),
        notifications=NotificationRepositoryStub(),
    )


def create_repositories() -> ReviewRepositories:
    """Select PostgreSQL or in-memory repositories.

    Returns PostgreSQL repositories if DATABASE_URL is configured,
    otherwise falls back to in-memory stubs.
    """
    if not os.environ.get("DATABASE_URL"):
        logger.warning(
            "review_repositories_initialized",
            repository_type="in-memory",
            message="DATABASE_URL not set, using in-memory stubs",
        )
        return create_stub_repositories()

    try:
        from src.bootstrap.database import get_session_factory
        from src.infrastructure.adapters.persistence import (
            PostgresApplicationRepository,
            PostgresCommentRepository,
            PostgresNotificationRepository,
            PostgresVoteRepository,
        )

        session_factory = get_session_factory()
        repositories = ReviewRepositories(
            applications=PostgresApplicationRepository(session_factory),
            votes=PostgresVoteRepository(session_factory),
            comments=PostgresCommentRepository(session_factory),
            notifications=PostgresNotificationRepository(session_factory),
        )
    except Exception as e:
        logger.error(
            "postgres_repository_init_failed",
            error=str(e),
            message="Falling back to in-memory stubs",
        )
        return create_stub_repositories()

    logger.info("review_repositories_initialized", repository_type="PostgreSQL")
    return repositories


def build_review_services(
    repositories: ReviewRepositories,
    board_directory: BoardDirectoryProtocol,
    time_authority: TimeAuthorityProtocol,
    email_sender: EmailSenderProtocol | None = None,
    config: ReviewWorkflowConfig | None = None,
) -> ReviewServices:
    """Wire the review services over the given collaborators."""
    review_config = config or ReviewWorkflowConfig()
    dispatcher = NotificationDispatcherService(
        notification_repo=repositories.notifications,
        board_directory=board_directory,
        time_authority=time_authority,
        email_sender=email_sender,
    )
    return ReviewServices(
        workflow=ApplicationWorkflowService(
            application_repo=repositories.applications,
            vote_repo=repositories.votes,
            comment_repo=repositories.comments,
            board_directory=board_directory,
            notification_dispatcher=dispatcher,
            time_authority=time_authority,
            config=review_config,
        ),
        voting=VotingService(
            application_repo=repositories.applications,
            vote_repo=repositories.votes,
            board_directory=board_directory,
            notification_dispatcher=dispatcher,
            time_authority=time_authority,
            config=review_config,
        ),
        comments=CommentService(
            application_repo=repositories.applications,
            comment_repo=repositories.comments,
            board_directory=board_directory,
            notification_dispatcher=dispatcher,
            time_authority=time_authority,
            config=review_config,
        ),
        statistics=ReviewStatisticsService(
            application_repo=repositories.applications,
            vote_repo=repositories.votes,
        ),
        notifications=dispatcher,
        repositories=repositories,
    )


_review_services: ReviewServices | None = None


def get_review_services(
    board_directory: BoardDirectoryProtocol | None = None,
) -> ReviewServices:
    """Get the process-wide review services, building them on first call.

    Configuration comes from the environment (REVIEW_*, SMTP_*,
    DATABASE_URL).
    """
    global _review_services
    if _review_services is None:
        if board_directory is None:
            logger.warning(
                "board_directory_not_provided",
                message="Using empty in-memory board directory",
            )
            board_directory = BoardDirectoryStub()
        _review_services = build_review_services(
            repositories=create_repositories(),
            board_directory=board_directory,
            time_authority=SystemTimeAuthority(),
            email_sender=SmtpEmailSender(EmailConfig.from_environment()),
            config=ReviewWorkflowConfig.from_environment(),
        )
    return _review_services


def reset_review_services() -> None:
    """Reset the singleton for testing."""
    global _review_services
    _review_services = None
