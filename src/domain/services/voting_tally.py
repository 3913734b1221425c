"""Voting tally computation.

Pure function over one consistent snapshot of an application's votes.
The voting service fetches the full vote set in a single read and hands
it here; nothing in this module touches storage.

Rules:
- Abstain votes do not count toward the quorum.
- has_sufficient_votes also requires a reviewable status, so stray votes
  on a Draft or decided application never report a met quorum.
- Veto: any single Reject vote makes is_approved False, regardless of
  how many approvals exist.
- Before the quorum snapshot exists (review never started) nothing is
  approved by votes.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from src.domain.models.application import ClientApplication
from src.domain.models.review_statistics import VotingSummary
from src.domain.models.vote import ApplicationVote, VoteDecision


def tally_votes(
    application: ClientApplication,
    votes: Sequence[ApplicationVote],
    active_board_member_ids: Iterable[str] = (),
) -> VotingSummary:
    """Compute the voting summary for an application.

    Args:
        application: The application, as currently stored.
        votes: Every vote recorded for the application.
        active_board_member_ids: Current roster, used only to list who
            has not voted yet.

    Returns:
        VotingSummary for the application.

    Raises:
        ValueError: If a vote belongs to a different application.
    """
    for vote in votes:
        if vote.application_id != application.id:
            raise ValueError(
                f"Vote {vote.id} belongs to application {vote.application_id}, "
                f"not {application.id}"
            )

    counts = {decision: 0 for decision in VoteDecision}
    for vote in votes:
        counts[vote.decision] += 1

    approval_votes = counts[VoteDecision.APPROVE]
    rejection_votes = counts[VoteDecision.REJECT]
    total_votes_cast = len(votes) - counts[VoteDecision.ABSTAIN]
    votes_required = application.votes_required or 0
    has_any_rejection = rejection_votes > 0

    voted = {vote.voter_id for vote in votes}
    pending = tuple(
        member_id for member_id in active_board_member_ids if member_id not in voted
    )

    return VotingSummary(
        application_id=application.id,
        total_votes_cast=total_votes_cast,
        approval_votes=approval_votes,
        rejection_votes=rejection_votes,
        needs_info_votes=counts[VoteDecision.NEEDS_MORE_INFO],
        abstain_votes=counts[VoteDecision.ABSTAIN],
        votes_required=votes_required,
        has_sufficient_votes=(
            application.is_in_reviewable_state and total_votes_cast >= votes_required
        ),
        has_any_rejection=has_any_rejection,
        is_approved=(
            application.votes_required is not None
            and approval_votes >= votes_required
            and not has_any_rejection
        ),
        pending_voter_ids=pending,
    )
