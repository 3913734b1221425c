"""Domain models for the review workflow.

Immutable dataclasses and enums with no infrastructure dependencies.
"""

from src.domain.models.application import (
    EDITABLE_CONTENT_FIELDS,
    ClientApplication,
    DecisionOutcome,
    FitnessLevel,
    FundingType,
)
from src.domain.models.application_status import (
    REVIEWABLE_STATUSES,
    TERMINAL_STATUSES,
    TRANSITION_TABLE,
    ApplicationStatus,
    ReviewTransition,
    TransitionCheck,
    allowed_transitions,
    check_transition,
)
from src.domain.models.comment import ApplicationComment
from src.domain.models.notification import ApplicationNotification, NotificationType
from src.domain.models.review_statistics import (
    ApplicationStatistics,
    BoardMemberStatistics,
    VotingSummary,
)
from src.domain.models.vote import (
    MAX_CONFIDENCE_LEVEL,
    MIN_CONFIDENCE_LEVEL,
    ApplicationVote,
    VoteDecision,
)

__all__: list[str] = [
    "EDITABLE_CONTENT_FIELDS",
    "MAX_CONFIDENCE_LEVEL",
    "MIN_CONFIDENCE_LEVEL",
    "REVIEWABLE_STATUSES",
    "TERMINAL_STATUSES",
    "TRANSITION_TABLE",
    "ApplicationComment",
    "ApplicationNotification",
    "ApplicationStatistics",
    "ApplicationStatus",
    "ApplicationVote",
    "BoardMemberStatistics",
    "ClientApplication",
    "DecisionOutcome",
    "FitnessLevel",
    "FundingType",
    "NotificationType",
    "ReviewTransition",
    "TransitionCheck",
    "VoteDecision",
    "VotingSummary",
    "allowed_transitions",
    "check_transition",
]
