"""
Ranking Algorithms Module
Constraint evaluation, scoring and categorization of travel candidates
"""

from .temporal import parse_duration, local_hour, layover_hours
from .constraint_evaluator import (
    ConstraintVerdict,
    evaluate_flight_constraints,
    evaluate_hotel_constraints,
)
from .scoring_model import ScoreBreakdown, score_flight, score_hotel
from .categorizer import (
    RankingEngine,
    RankingStrategy,
    FlightRankingStrategy,
    HotelRankingStrategy,
    sort_in_preference,
    sort_out_of_preference,
    rank_flights,
    rank_hotels,
    rank_flight_payloads,
    rank_hotel_payloads,
)

__all__ = [
    "parse_duration",
    "local_hour",
    "layover_hours",
    "ConstraintVerdict",
    "evaluate_flight_constraints",
    "evaluate_hotel_constraints",
    "ScoreBreakdown",
    "score_flight",
    "score_hotel",
    "RankingEngine",
    "RankingStrategy",
    "FlightRankingStrategy",
    "HotelRankingStrategy",
    "sort_in_preference",
    "sort_out_of_preference",
    "rank_flights",
    "rank_hotels",
    "rank_flight_payloads",
    "rank_hotel_payloads",
]
