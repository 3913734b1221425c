"""Client application domain model.

One ClientApplication exists per assistance request. The record is
created in Draft by the applicant, edited by the applicant until it is
submitted, and afterwards mutated only by the review services. It is
never deleted; it ends in a terminal status instead.

Votes and comments are NOT embedded here. They reference the
application by id and are fetched through their own repositories, so no
decision-relevant flag on this entity depends on what happened to be
loaded.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any
from uuid import UUID, uuid4

from src.domain.models.application_status import (
    REVIEWABLE_STATUSES,
    ApplicationStatus,
)


class DecisionOutcome(Enum):
    """Final decision recorded on an application."""

    APPROVED = "Approved"
    REJECTED = "Rejected"
    NEEDS_MORE_INFORMATION = "NeedsMoreInformation"
    DEFERRED = "Deferred"


class FundingType(Enum):
    """Kinds of support an applicant may request."""

    GYM_MEMBERSHIP = "GymMembership"
    PERSONAL_TRAINING = "PersonalTraining"
    NUTRITIONIST_CONSULTATION = "NutritionistConsultation"
    FITNESS_APPAREL = "FitnessApparel"
    FITNESS_EQUIPMENT = "FitnessEquipment"
    NUTRITION_SUPPLEMENTS = "NutritionSupplements"
    GROUP_CLASSES = "GroupClasses"
    ONLINE_PROGRAMS = "OnlinePrograms"
    OTHER = "Other"


class FitnessLevel(Enum):
    """Self-reported fitness level."""

    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"


def _utc_now() -> datetime:
    """Return current UTC time with timezone info."""
    return datetime.now(timezone.utc)


# Fields an applicant may edit while the record is Draft or NeedsInformation
EDITABLE_CONTENT_FIELDS: frozenset[str] = frozenset(
    {
        "first_name",
        "last_name",
        "email",
        "phone_number",
        "address",
        "city",
        "state",
        "zip_code",
        "occupation",
        "date_of_birth",
        "emergency_contact_name",
        "emergency_contact_phone",
        "funding_types_requested",
        "estimated_monthly_cost",
        "program_duration_months",
        "funding_details",
        "personal_statement",
        "expected_benefits",
        "commitment_statement",
        "concerns_obstacles",
        "medical_conditions",
        "current_medications",
        "fitness_goals",
        "current_fitness_level",
        "agrees_to_nutritionist",
        "agrees_to_personal_trainer",
        "agrees_to_weekly_check_ins",
        "agrees_to_progress_reports",
        "understands_commitment",
        "signature",
    }
)


@dataclass(frozen=True, eq=True)
class ClientApplication:
    """An assistance application moving through board review.

    Attributes:
        id: Unique identifier.
        applicant_id: Reference to the applicant user.
        status: Current lifecycle status; never None.
        votes_required: Quorum snapshot taken once when review starts.
            None until then; never recalculated afterwards.
        final_decision: Outcome recorded by the deciding admin.
        decision_made_by_id: Admin who approved or rejected.
        approved_monthly_amount: Monthly support granted on approval.
        assigned_sponsor_id: Sponsor assigned on approval.
    """

    applicant_id: str
    id: UUID = field(default_factory=uuid4)
    status: ApplicationStatus = field(default=ApplicationStatus.DRAFT)

    # Personal information
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone_number: str = ""
    address: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    occupation: str | None = None
    date_of_birth: date | None = None
    emergency_contact_name: str | None = None
    emergency_contact_phone: str | None = None

    # Program interest & funding
    funding_types_requested: tuple[FundingType, ...] = ()
    estimated_monthly_cost: Decimal | None = None
    program_duration_months: int = 12
    funding_details: str | None = None

    # Motivation & commitment
    personal_statement: str = ""
    expected_benefits: str = ""
    commitment_statement: str = ""
    concerns_obstacles: str | None = None

    # Health & fitness
    medical_conditions: str | None = None
    current_medications: str | None = None
    fitness_goals: str | None = None
    current_fitness_level: FitnessLevel = FitnessLevel.BEGINNER

    # Program requirement agreements
    agrees_to_nutritionist: bool = False
    agrees_to_personal_trainer: bool = False
    agrees_to_weekly_check_ins: bool = False
    agrees_to_progress_reports: bool = False
    understands_commitment: bool = False

    # Signature
    signature: str | None = None
    signed_date: datetime | None = None

    # Review & decision
    votes_required: int | None = None
    created_date: datetime = field(default_factory=_utc_now)
    modified_date: datetime = field(default_factory=_utc_now)
    submitted_date: datetime | None = None
    review_started_date: datetime | None = None
    decision_date: datetime | None = None
    final_decision: DecisionOutcome | None = None
    decision_message: str | None = None
    decision_made_by_id: str | None = None
    approved_monthly_amount: Decimal | None = None

    # Post-approval
    assigned_sponsor_id: str | None = None
    program_start_date: date | None = None
    program_end_date: date | None = None

    def __post_init__(self) -> None:
        """Validate invariant fields."""
        if not isinstance(self.status, ApplicationStatus):
            raise ValueError("status must be an ApplicationStatus")
        if not self.applicant_id:
            raise ValueError("applicant_id is required")
        if self.votes_required is not None and self.votes_required < 0:
            raise ValueError(
                f"votes_required must be non-negative, got {self.votes_required}"
            )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def is_in_reviewable_state(self) -> bool:
        return self.status in REVIEWABLE_STATUSES

    def days_since_submission(self, now: datetime) -> int | None:
        """Whole days elapsed since submission, or None if never submitted."""
        if self.submitted_date is None:
            return None
        return (now - self.submitted_date).days

    def with_changes(self, **changes: Any) -> ClientApplication:
        """Create a copy with the given fields replaced.

        Since ClientApplication is frozen, returns a new instance.
        """
        return replace(self, **changes)

    def with_votes_required(self, votes_required: int) -> ClientApplication:
        """Set the quorum snapshot exactly once.

        Returns the application unchanged when a snapshot already exists,
        so the rules of an ongoing review never shift.

        Args:
            votes_required: Number of active board members right now.

        Returns:
            Application with the snapshot set.
        """
        if self.votes_required is not None:
            return self
        return replace(self, votes_required=votes_required)
