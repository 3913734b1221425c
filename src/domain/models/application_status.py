"""Application status state machine.

This module is the single authoritative transition table for client
applications. Every mutating workflow operation consults
check_transition() against the status re-read from the store; no
handler carries its own copy of a status check.

State Machine:
    Draft -> Submitted                       (submit)
    NeedsInformation -> Submitted            (resubmit)
    Submitted -> UnderReview                 (start review)
    UnderReview -> InDiscussion              (first vote opens discussion)
    UnderReview/InDiscussion -> NeedsInformation (request information)
    UnderReview/InDiscussion -> Approved     (approve)
    UnderReview/InDiscussion -> Rejected     (reject)
    Submitted/UnderReview/InDiscussion -> Withdrawn (withdraw)
    Approved -> Active -> Completed          (program lifecycle)

Terminal States:
    Approved, Rejected, Withdrawn, Expired, Completed accept no review
    transitions. Approved only continues into the program lifecycle.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ApplicationStatus(Enum):
    """Lifecycle status of a client application."""

    DRAFT = "Draft"
    SUBMITTED = "Submitted"
    UNDER_REVIEW = "UnderReview"
    NEEDS_INFORMATION = "NeedsInformation"
    IN_DISCUSSION = "InDiscussion"
    APPROVED = "Approved"
    REJECTED = "Rejected"
    ACTIVE = "Active"
    COMPLETED = "Completed"
    WITHDRAWN = "Withdrawn"
    EXPIRED = "Expired"

    def is_terminal(self) -> bool:
        """Check if no further review transitions are accepted."""
        return self in TERMINAL_STATUSES

    def is_reviewable(self) -> bool:
        """Check if voting and a final decision are legal in this status."""
        return self in REVIEWABLE_STATUSES


class ReviewTransition(Enum):
    """Named transitions a caller may request."""

    SUBMIT = "submit"
    RESUBMIT = "resubmit"
    START_REVIEW = "start_review"
    OPEN_DISCUSSION = "open_discussion"
    REQUEST_INFORMATION = "request_information"
    APPROVE = "approve"
    REJECT = "reject"
    WITHDRAW = "withdraw"
    START_PROGRAM = "start_program"
    COMPLETE_PROGRAM = "complete_program"


REVIEWABLE_STATUSES: frozenset[ApplicationStatus] = frozenset(
    {ApplicationStatus.UNDER_REVIEW, ApplicationStatus.IN_DISCUSSION}
)

TERMINAL_STATUSES: frozenset[ApplicationStatus] = frozenset(
    {
        ApplicationStatus.APPROVED,
        ApplicationStatus.REJECTED,
        ApplicationStatus.WITHDRAWN,
        ApplicationStatus.EXPIRED,
        ApplicationStatus.COMPLETED,
    }
)

# Maps each transition to (allowed source statuses, target status)
TRANSITION_TABLE: dict[
    ReviewTransition, tuple[frozenset[ApplicationStatus], ApplicationStatus]
] = {
    ReviewTransition.SUBMIT: (
        frozenset({ApplicationStatus.DRAFT}),
        ApplicationStatus.SUBMITTED,
    ),
    ReviewTransition.RESUBMIT: (
        frozenset({ApplicationStatus.NEEDS_INFORMATION}),
        ApplicationStatus.SUBMITTED,
    ),
    ReviewTransition.START_REVIEW: (
        frozenset({ApplicationStatus.SUBMITTED}),
        ApplicationStatus.UNDER_REVIEW,
    ),
    ReviewTransition.OPEN_DISCUSSION: (
        frozenset({ApplicationStatus.UNDER_REVIEW}),
        ApplicationStatus.IN_DISCUSSION,
    ),
    ReviewTransition.REQUEST_INFORMATION: (
        REVIEWABLE_STATUSES,
        ApplicationStatus.NEEDS_INFORMATION,
    ),
    ReviewTransition.APPROVE: (REVIEWABLE_STATUSES, ApplicationStatus.APPROVED),
    ReviewTransition.REJECT: (REVIEWABLE_STATUSES, ApplicationStatus.REJECTED),
    ReviewTransition.WITHDRAW: (
        frozenset(
            {
                ApplicationStatus.SUBMITTED,
                ApplicationStatus.UNDER_REVIEW,
                ApplicationStatus.IN_DISCUSSION,
            }
        ),
        ApplicationStatus.WITHDRAWN,
    ),
    ReviewTransition.START_PROGRAM: (
        frozenset({ApplicationStatus.APPROVED}),
        ApplicationStatus.ACTIVE,
    ),
    ReviewTransition.COMPLETE_PROGRAM: (
        frozenset({ApplicationStatus.ACTIVE}),
        ApplicationStatus.COMPLETED,
    ),
}

# Verb phrases used when naming the failed precondition
_TRANSITION_VERBS: dict[ReviewTransition, str] = {
    ReviewTransition.SUBMIT: "be submitted",
    ReviewTransition.RESUBMIT: "be resubmitted",
    ReviewTransition.START_REVIEW: "start review",
    ReviewTransition.OPEN_DISCUSSION: "open discussion",
    ReviewTransition.REQUEST_INFORMATION: "request additional information",
    ReviewTransition.APPROVE: "be approved",
    ReviewTransition.REJECT: "be rejected",
    ReviewTransition.WITHDRAW: "be withdrawn",
    ReviewTransition.START_PROGRAM: "start the program",
    ReviewTransition.COMPLETE_PROGRAM: "complete the program",
}

_DECISION_TRANSITIONS: frozenset[ReviewTransition] = frozenset(
    {ReviewTransition.APPROVE, ReviewTransition.REJECT}
)

_DECIDED_STATUSES: frozenset[ApplicationStatus] = frozenset(
    {
        ApplicationStatus.APPROVED,
        ApplicationStatus.REJECTED,
        ApplicationStatus.ACTIVE,
        ApplicationStatus.COMPLETED,
    }
)


@dataclass(frozen=True)
class TransitionCheck:
    """Outcome of consulting the transition table.

    Attributes:
        allowed: Whether the transition may be executed.
        target_status: Status the application moves to when allowed.
        reason: Message naming the failed precondition when not allowed.
    """

    allowed: bool
    target_status: ApplicationStatus | None = None
    reason: str | None = None


def _describe(statuses: frozenset[ApplicationStatus]) -> str:
    names = sorted(s.value for s in statuses)
    if len(names) == 1:
        return names[0]
    return ", ".join(names[:-1]) + f" or {names[-1]}"


def check_transition(
    current_status: ApplicationStatus,
    transition: ReviewTransition,
) -> TransitionCheck:
    """Decide whether a transition is legal from the current status.

    Pure function with no side effects. The status passed in must be the
    authoritative stored status, never a caller-supplied one.

    Args:
        current_status: Status re-read from the store.
        transition: The requested transition.

    Returns:
        TransitionCheck with the target status, or the rejection reason.
    """
    sources, target = TRANSITION_TABLE[transition]
    if current_status in sources:
        return TransitionCheck(allowed=True, target_status=target)

    if transition in _DECISION_TRANSITIONS and current_status in _DECIDED_STATUSES:
        reason = f"Application already decided (current status: {current_status.value})"
    elif transition is ReviewTransition.SUBMIT and current_status is not ApplicationStatus.DRAFT:
        reason = (
            "Application has already been submitted "
            f"(current status: {current_status.value})"
        )
    else:
        reason = (
            f"Application must be in {_describe(sources)} status to "
            f"{_TRANSITION_VERBS[transition]} (current status: {current_status.value})"
        )
    return TransitionCheck(allowed=False, reason=reason)


def allowed_transitions(current_status: ApplicationStatus) -> frozenset[ReviewTransition]:
    """List every transition the table accepts from a status."""
    return frozenset(
        transition
        for transition, (sources, _) in TRANSITION_TABLE.items()
        if current_status in sources
    )
