"""Application ports - Abstract interfaces for infrastructure adapters.

This module defines the contracts that infrastructure adapters must implement.
Ports enable dependency inversion and make the application layer testable.

Available ports:
- ApplicationRepositoryProtocol: Application storage with status CAS
- VoteRepositoryProtocol: Vote storage with atomic upsert
- CommentRepositoryProtocol: Discussion comment storage
- NotificationRepositoryProtocol: Notification record storage
- BoardDirectoryProtocol: Active board roster and email lookup
- EmailSenderProtocol: Outbound email
- NotificationDispatcherProtocol: Notification emission
- TimeAuthorityProtocol: Injected clock
"""

from src.application.ports.application_repository import (
    ApplicationRepositoryProtocol,
)
from src.application.ports.board_directory import BoardDirectoryProtocol
from src.application.ports.comment_repository import CommentRepositoryProtocol
from src.application.ports.email_sender import EmailSenderProtocol
from src.application.ports.notification_dispatcher import (
    NotificationDispatcherProtocol,
)
from src.application.ports.notification_repository import (
    NotificationRepositoryProtocol,
)
from src.application.ports.time_authority import TimeAuthorityProtocol
from src.application.ports.vote_repository import VoteRepositoryProtocol

__all__: list[str] = [
    "ApplicationRepositoryProtocol",
    "BoardDirectoryProtocol",
    "CommentRepositoryProtocol",
    "EmailSenderProtocol",
    "NotificationDispatcherProtocol",
    "NotificationRepositoryProtocol",
    "TimeAuthorityProtocol",
    "VoteRepositoryProtocol",
]
