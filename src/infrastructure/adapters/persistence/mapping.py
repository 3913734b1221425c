"""Conversion between domain dataclasses and table rows.

Column names equal dataclass field names, so conversion is
field-for-field; only enum values need translating.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import fields
from enum import Enum
from typing import Any

from src.domain.models.application import (
    ClientApplication,
    DecisionOutcome,
    FitnessLevel,
    FundingType,
)
from src.domain.models.application_status import ApplicationStatus
from src.domain.models.comment import ApplicationComment
from src.domain.models.notification import ApplicationNotification, NotificationType
from src.domain.models.vote import ApplicationVote, VoteDecision


def _plain(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, tuple):
        return [_plain(item) for item in value]
    return value


def to_row_values(entity: Any) -> dict[str, Any]:
    """Flatten a domain dataclass into column values."""
    return {f.name: _plain(getattr(entity, f.name)) for f in fields(entity)}


def application_from_row(row: Mapping[str, Any]) -> ClientApplication:
    values = dict(row)
    values["status"] = ApplicationStatus(values["status"])
    values["current_fitness_level"] = FitnessLevel(values["current_fitness_level"])
    values["funding_types_requested"] = tuple(
        FundingType(item) for item in values["funding_types_requested"] or ()
    )
    if values["final_decision"] is not None:
        values["final_decision"] = DecisionOutcome(values["final_decision"])
    return ClientApplication(**values)


def vote_from_row(row: Mapping[str, Any]) -> ApplicationVote:
    values = dict(row)
    values["decision"] = VoteDecision(values["decision"])
    return ApplicationVote(**values)


def comment_from_row(row: Mapping[str, Any]) -> ApplicationComment:
    return ApplicationComment(**dict(row))


def notification_from_row(row: Mapping[str, Any]) -> ApplicationNotification:
    values = dict(row)
    values["type"] = NotificationType(values["type"])
    return ApplicationNotification(**values)
