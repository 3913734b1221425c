"""ORM models for the review tables (PostgreSQL).

Tables
------
- client_applications        (one row per assistance application)
- application_votes          (one row per board member per application)
- application_comments       (discussion threads, soft-deleted in place)
- application_notifications  (notification records and read state)

Column names match the domain dataclass field names so rows convert
field-for-field. Enum values are stored as their string values.
"""

from __future__ import annotations

import uuid
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import (
    Boolean,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import ARRAY, UUID
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

__all__ = [
    "ApplicationCommentRow",
    "ApplicationNotificationRow",
    "ApplicationVoteRow",
    "Base",
    "ClientApplicationRow",
]


class Base(DeclarativeBase):
    pass


# ═══════════════════════════════════════════════════════════════════════════
# client_applications
# ═══════════════════════════════════════════════════════════════════════════


class ClientApplicationRow(Base):
    """An assistance application and its review outcome."""

    __tablename__ = "client_applications"
    __table_args__ = (
        Index("ix_client_applications_status", "status"),
        Index("ix_client_applications_applicant_id", "applicant_id"),
    )

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True)
    applicant_id: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[str] = mapped_column(Text, nullable=False)

    # Personal information
    first_name: Mapped[str] = mapped_column(Text, nullable=False, default="")
    last_name: Mapped[str] = mapped_column(Text, nullable=False, default="")
    email: Mapped[str] = mapped_column(Text, nullable=False, default="")
    phone_number: Mapped[str] = mapped_column(Text, nullable=False, default="")
    address: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    city: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    state: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    zip_code: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    occupation: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    date_of_birth: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    emergency_contact_name: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    emergency_contact_phone: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Program interest & funding
    funding_types_requested: Mapped[list[str]] = mapped_column(
        ARRAY(Text), nullable=False, default=list
    )
    estimated_monthly_cost: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(10, 2), nullable=True
    )
    program_duration_months: Mapped[int] = mapped_column(
        Integer, nullable=False, default=12
    )
    funding_details: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Motivation & commitment
    personal_statement: Mapped[str] = mapped_column(Text, nullable=False, default="")
    expected_benefits: Mapped[str] = mapped_column(Text, nullable=False, default="")
    commitment_statement: Mapped[str] = mapped_column(Text, nullable=False, default="")
    concerns_obstacles: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Health & fitness
    medical_conditions: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    current_medications: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    fitness_goals: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    current_fitness_level: Mapped[str] = mapped_column(
        Text, nullable=False, default="Beginner"
    )

    # Agreements
    agrees_to_nutritionist: Mapped[bool] = mapped_column(Boolean, default=False)
    agrees_to_personal_trainer: Mapped[bool] = mapped_column(Boolean, default=False)
    agrees_to_weekly_check_ins: Mapped[bool] = mapped_column(Boolean, default=False)
    agrees_to_progress_reports: Mapped[bool] = mapped_column(Boolean, default=False)
    understands_commitment: Mapped[bool] = mapped_column(Boolean, default=False)

    signature: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    signed_date: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    # Review & decision
    votes_required: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    created_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )
    modified_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )
    submitted_date: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    review_started_date: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    decision_date: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    final_decision: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    decision_message: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    decision_made_by_id: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    approved_monthly_amount: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(10, 2), nullable=True
    )

    # Post-approval
    assigned_sponsor_id: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    program_start_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    program_end_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)


# ═══════════════════════════════════════════════════════════════════════════
# application_votes
# ═══════════════════════════════════════════════════════════════════════════


class ApplicationVoteRow(Base):
    """A board member's vote. One row per (application, voter)."""

    __tablename__ = "application_votes"
    __table_args__ = (
        UniqueConstraint(
            "application_id", "voter_id", name="uq_application_votes_application_voter"
        ),
        Index("ix_application_votes_voter_id", "voter_id"),
    )

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True)
    application_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("client_applications.id", ondelete="CASCADE"),
        nullable=False,
    )
    voter_id: Mapped[str] = mapped_column(Text, nullable=False)
    decision: Mapped[str] = mapped_column(Text, nullable=False)
    reasoning: Mapped[str] = mapped_column(Text, nullable=False)
    confidence_level: Mapped[int] = mapped_column(Integer, nullable=False, default=3)
    is_locked: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    voted_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    modified_date: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )


# ═══════════════════════════════════════════════════════════════════════════
# application_comments
# ═══════════════════════════════════════════════════════════════════════════


class ApplicationCommentRow(Base):
    """A discussion comment; replies point at their parent."""

    __tablename__ = "application_comments"
    __table_args__ = (
        Index("ix_application_comments_application_id", "application_id"),
    )

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True)
    application_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("client_applications.id", ondelete="CASCADE"),
        nullable=False,
    )
    author_id: Mapped[str] = mapped_column(Text, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    is_private: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    is_information_request: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False
    )
    has_response: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    parent_comment_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        UUID(as_uuid=True), ForeignKey("application_comments.id"), nullable=True
    )
    created_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )
    modified_date: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    is_edited: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_deleted: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)


# ═══════════════════════════════════════════════════════════════════════════
# application_notifications
# ═══════════════════════════════════════════════════════════════════════════


class ApplicationNotificationRow(Base):
    """A notification record addressed to one user."""

    __tablename__ = "application_notifications"
    __table_args__ = (
        Index("ix_application_notifications_recipient_id", "recipient_id"),
    )

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True)
    recipient_id: Mapped[str] = mapped_column(Text, nullable=False)
    application_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        UUID(as_uuid=True), nullable=True
    )
    type: Mapped[str] = mapped_column(Text, nullable=False)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    action_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    is_read: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    read_date: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    is_sent: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    sent_date: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    email_sent: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    email_sent_date: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    created_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )
    expires_date: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
