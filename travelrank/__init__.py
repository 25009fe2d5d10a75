# travelrank/__init__.py
"""
Travel Option Ranking Engine

Deterministic, preference-driven ranking for normalized travel options:
- Hard constraints (direct only, max stops, red-eyes, layovers, avoided
  airlines; hotel stars and strict budgets) split candidates into
  in-preference and out-of-preference buckets
- Soft preferences add to a baseline score of 50
- In-preference options are ordered by score, out-of-preference by price
"""

__version__ = "1.0.0"

# Package structure:
# travelrank/
# ├── __init__.py           <- This file
# ├── config.py             <- Configuration settings + logging setup
# ├── exceptions.py         <- Engine errors
# │
# ├── schemas/              <- Pydantic Models
# │   ├── preferences.py    <- PreferenceProfile + default builder
# │   └── candidates.py     <- Flight/hotel candidates, scored output
# │
# └── algorithms/           <- Ranking algorithms
#     ├── temporal.py       <- Duration parsing, local hours, layovers
#     ├── amenities.py      <- Hotel amenity matching
#     ├── constraint_evaluator.py <- Hard preferences
#     ├── scoring_model.py  <- Soft preferences
#     └── categorizer.py    <- Bucketing, sorting, RankingEngine

from .algorithms import (
    RankingEngine,
    rank_flight_payloads,
    rank_flights,
    rank_hotel_payloads,
    rank_hotels,
)
from .exceptions import InvalidCandidateError, InvalidPreferencesError, RankingError
from .schemas import (
    FlightCandidate,
    HotelCandidate,
    PreferenceProfile,
    RankingResult,
    ScoredCandidate,
    build_preference_profile,
    default_preferences,
)

__all__ = [
    "RankingEngine",
    "rank_flights",
    "rank_hotels",
    "rank_flight_payloads",
    "rank_hotel_payloads",
    "RankingError",
    "InvalidCandidateError",
    "InvalidPreferencesError",
    "FlightCandidate",
    "HotelCandidate",
    "PreferenceProfile",
    "RankingResult",
    "ScoredCandidate",
    "build_preference_profile",
    "default_preferences",
]
