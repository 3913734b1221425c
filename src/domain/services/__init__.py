"""Domain services - pure computations over domain models."""

from src.domain.services.submission_validator import validate_for_submission
from src.domain.services.voting_tally import tally_votes

__all__: list[str] = ["tally_votes", "validate_for_submission"]
