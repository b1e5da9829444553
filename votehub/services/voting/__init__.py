from votehub.services.voting.ballot import submit_ballot
from votehub.services.voting.errors import BallotError
from votehub.services.voting.results import candidate_percentage, get_results, get_status

__all__ = [
    "BallotError",
    "candidate_percentage",
    "get_results",
    "get_status",
    "submit_ballot",
]
