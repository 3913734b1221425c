"""
Pytest configuration and shared fixtures for the review workflow tests.

Testing Standards:
- All async tests use pytest.mark.asyncio (auto mode enabled in pyproject.toml)
- Use AsyncMock for async collaborator assertions
- Unit tests go in tests/unit/
- Integration tests go in tests/integration/
"""

from datetime import datetime, timezone

import pytest

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
from src.config.review_config import DEFAULT_REVIEW_WORKFLOW_CONFIG
from src.infrastructure.stubs import (
    ApplicationRepositoryStub,
    BoardDirectoryStub,
    CommentRepositoryStub,
    EmailSenderStub,
    NotificationRepositoryStub,
    VoteRepositoryStub,
)
from tests.helpers.fake_time_authority import FakeTimeAuthority
from tests.helpers.review_factories import APPLICANT_ID, BOARD_MEMBER_IDS


@pytest.fixture
def anyio_backend() -> str:
    """Use asyncio as the async backend."""
    return "asyncio"


@pytest.fixture
def project_version() -> str:
    """Provide the current project version for tests."""
    from src import __version__

    return __version__


@pytest.fixture
def fake_time_authority() -> FakeTimeAuthority:
    return FakeTimeAuthority(frozen_at=datetime(2026, 1, 15, 10, 0, 0, tzinfo=timezone.utc))


@pytest.fixture
def application_repo() -> ApplicationRepositoryStub:
    return ApplicationRepositoryStub()


@pytest.fixture
def vote_repo() -> VoteRepositoryStub:
    return VoteRepositoryStub()


@pytest.fixture
def comment_repo() -> CommentRepositoryStub:
    return CommentRepositoryStub()


@pytest.fixture
def notification_repo() -> NotificationRepositoryStub:
    return NotificationRepositoryStub()


@pytest.fixture
def email_sender() -> EmailSenderStub:
    return EmailSenderStub()


@pytest.fixture
def board_directory() -> BoardDirectoryStub:
    """Three active board members plus a known applicant address."""
    directory = BoardDirectoryStub(list(BOARD_MEMBER_IDS))
    for member_id in BOARD_MEMBER_IDS:
        directory.set_email(member_id, f"{member_id}@ellishope.org")
    directory.set_email(APPLICANT_ID, "jordan@example.org")
    return directory


@pytest.fixture
def dispatcher(
    notification_repo: NotificationRepositoryStub,
    board_directory: BoardDirectoryStub,
    fake_time_authority: FakeTimeAuthority,
    email_sender: EmailSenderStub,
) -> NotificationDispatcherService:
    return NotificationDispatcherService(
        notification_repo=notification_repo,
        board_directory=board_directory,
        time_authority=fake_time_authority,
        email_sender=email_sender,
    )


@pytest.fixture
def workflow_service(
    application_repo: ApplicationRepositoryStub,
    vote_repo: VoteRepositoryStub,
    comment_repo: CommentRepositoryStub,
    board_directory: BoardDirectoryStub,
    dispatcher: NotificationDispatcherService,
    fake_time_authority: FakeTimeAuthority,
) -> ApplicationWorkflowService:
    return ApplicationWorkflowService(
        application_repo=application_repo,
        vote_repo=vote_repo,
        comment_repo=comment_repo,
        board_directory=board_directory,
        notification_dispatcher=dispatcher,
        time_authority=fake_time_authority,
        config=DEFAULT_REVIEW_WORKFLOW_CONFIG,
    )


@pytest.fixture
def voting_service(
    application_repo: ApplicationRepositoryStub,
    vote_repo: VoteRepositoryStub,
    board_directory: BoardDirectoryStub,
    dispatcher: NotificationDispatcherService,
    fake_time_authority: FakeTimeAuthority,
) -> VotingService:
    return VotingService(
        application_repo=application_repo,
        vote_repo=vote_repo,
        board_directory=board_directory,
        notification_dispatcher=dispatcher,
        time_authority=fake_time_authority,
    )


@pytest.fixture
def comment_service(
    application_repo: ApplicationRepositoryStub,
    comment_repo: CommentRepositoryStub,
    board_directory: BoardDirectoryStub,
    dispatcher: NotificationDispatcherService,
    fake_time_authority: FakeTimeAuthority,
) -> CommentService:
    return CommentService(
        application_repo=application_repo,
        comment_repo=comment_repo,
        board_directory=board_directory,
        notification_dispatcher=dispatcher,
        time_authority=fake_time_authority,
    )


@pytest.fixture
def statistics_service(
    application_repo: ApplicationRepositoryStub,
    vote_repo: VoteRepositoryStub,
) -> ReviewStatisticsService:
    return ReviewStatisticsService(application_repo=application_repo, vote_repo=vote_repo)
