"""Application notification domain model.

Notifications are fire-and-forget records addressed to a single
recipient. Delivery bookkeeping (sent, emailed, read) lives on the
record itself.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from uuid import UUID, uuid4


class NotificationType(Enum):
    """Closed set of notification kinds."""

    # Applicant notifications
    APPLICATION_SUBMITTED = "ApplicationSubmitted"
    APPLICATION_UNDER_REVIEW = "ApplicationUnderReview"
    INFORMATION_REQUESTED = "InformationRequested"
    APPLICATION_APPROVED = "ApplicationApproved"
    APPLICATION_REJECTED = "ApplicationRejected"
    APPLICATION_WITHDRAWN = "ApplicationWithdrawn"
    SPONSOR_ASSIGNED = "SponsorAssigned"
    PROGRAM_STARTING = "ProgramStarting"
    PROGRAM_COMPLETED = "ProgramCompleted"

    # Board / admin notifications
    NEW_APPLICATION_RECEIVED = "NewApplicationReceived"
    VOTE_REQUIRED = "VoteRequired"
    QUORUM_REACHED = "QuorumReached"
    DISCUSSION_COMMENT_ADDED = "DiscussionCommentAdded"
    APPLICATION_EXPIRING_SOON = "ApplicationExpiringSoon"

    # General
    SYSTEM_ANNOUNCEMENT = "SystemAnnouncement"
    MESSAGE_RECEIVED = "MessageReceived"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True, eq=True)
class ApplicationNotification:
    """A notification delivered to one recipient.

    Attributes:
        recipient_id: User the notification is addressed to.
        type: Notification kind.
        title: Short headline.
        message: Body text.
        application_id: Related application, if any.
        action_url: Link the recipient should follow, if any.
        expires_date: After this moment the notification is hidden from
            unread views.
    """

    recipient_id: str
    type: NotificationType
    title: str
    message: str
    application_id: UUID | None = None
    action_url: str | None = None
    id: UUID = field(default_factory=uuid4)
    is_read: bool = False
    read_date: datetime | None = None
    is_sent: bool = False
    sent_date: datetime | None = None
    email_sent: bool = False
    email_sent_date: datetime | None = None
    created_date: datetime = field(default_factory=_utc_now)
    expires_date: datetime | None = None

    def is_expired(self, now: datetime) -> bool:
        return self.expires_date is not None and self.expires_date < now

    def marked_sent(self, sent_at: datetime) -> ApplicationNotification:
        return replace(self, is_sent=True, sent_date=sent_at)

    def marked_emailed(self, sent_at: datetime) -> ApplicationNotification:
        return replace(self, email_sent=True, email_sent_date=sent_at)

    def marked_read(self, read_at: datetime) -> ApplicationNotification:
        return replace(self, is_read=True, read_date=read_at)
