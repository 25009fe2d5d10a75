"""
Ranking Engine Exceptions
"""


class RankingError(Exception):
    """Base class for all ranking engine errors"""


class InvalidCandidateError(RankingError, ValueError):
    """A candidate is missing data the engine cannot rank without"""

    def __init__(self, candidate_id: str, message: str):
        self.candidate_id = candidate_id
        super().__init__(f"Candidate {candidate_id!r}: {message}")


class InvalidPreferencesError(RankingError, ValueError):
    """A preference payload field is present but invalid"""
