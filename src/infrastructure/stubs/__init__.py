"""In-memory stub implementations of the review ports.

Used by the test suite and for local development without PostgreSQL.
NOT suitable for production use.
"""

from src.infrastructure.stubs.application_repository_stub import (
    ApplicationRepositoryStub,
)
from src.infrastructure.stubs.board_directory_stub import BoardDirectoryStub
from src.infrastructure.stubs.comment_repository_stub import CommentRepositoryStub
from src.infrastructure.stubs.email_sender_stub import EmailSenderStub, SentEmail
from src.infrastructure.stubs.notification_repository_stub import (
    NotificationRepositoryStub,
)
from src.infrastructure.stubs.vote_repository_stub import VoteRepositoryStub

__all__ = [
    "ApplicationRepositoryStub",
    "BoardDirectoryStub",
    "CommentRepositoryStub",
    "EmailSenderStub",
    "NotificationRepositoryStub",
    "SentEmail",
    "VoteRepositoryStub",
]
