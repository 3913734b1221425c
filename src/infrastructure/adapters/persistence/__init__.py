"""PostgreSQL persistence adapters (SQLAlchemy 2.x async + asyncpg)."""

from src.infrastructure.adapters.persistence.application_repository import (
    PostgresApplicationRepository,
)
from src.infrastructure.adapters.persistence.comment_repository import (
    PostgresCommentRepository,
)
from src.infrastructure.adapters.persistence.models import Base
from src.infrastructure.adapters.persistence.notification_repository import (
    PostgresNotificationRepository,
)
from src.infrastructure.adapters.persistence.vote_repository import (
    PostgresVoteRepository,
)

__all__ = [
    "Base",
    "PostgresApplicationRepository",
    "PostgresCommentRepository",
    "PostgresNotificationRepository",
    "PostgresVoteRepository",
]
