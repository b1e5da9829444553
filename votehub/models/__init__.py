from votehub.models.candidate import Candidate
from votehub.models.vote import Vote

__all__ = [
    "Candidate",
    "Vote",
]
