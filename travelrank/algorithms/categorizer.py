"""
Candidate Categorizer & Ranking Engine
Splits candidates into in-preference and out-of-preference buckets

Pipeline per ranking call:
1. Categorize - run the domain's constraint evaluator and scoring model
   on every candidate (fanned out over a thread pool for large lists)
2. Sort       - in-preference by score (desc), out-of-preference by
   total price (asc); both sorts are stable

The pipeline is domain-agnostic. Flights and hotels plug in through a
RankingStrategy.
"""

from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, Iterable, List, Optional, Sequence, Type

from loguru import logger
from pydantic import BaseModel, ValidationError

from ..config import settings
from ..exceptions import InvalidCandidateError
from ..schemas.candidates import (
    FlightCandidate,
    HotelCandidate,
    RankingResult,
    ScoredCandidate,
)
from ..schemas.preferences import (
    PreferenceProfile,
    build_preference_profile,
    default_preferences,
)
from .constraint_evaluator import (
    ConstraintVerdict,
    evaluate_flight_constraints,
    evaluate_hotel_constraints,
)
from .scoring_model import ScoreBreakdown, score_flight, score_hotel


# ============================================
# Strategies
# ============================================

class RankingStrategy(ABC):
    """
    Domain plug-in: one constraint evaluator plus one scoring model
    """
    domain: str = ""
    candidate_model: Type[BaseModel]

    @abstractmethod
    def evaluate_constraints(self, candidate, profile: PreferenceProfile) -> ConstraintVerdict:
        ...

    @abstractmethod
    def score(self, candidate, profile: PreferenceProfile) -> ScoreBreakdown:
        ...


class FlightRankingStrategy(RankingStrategy):
    domain = "flight"
    candidate_model = FlightCandidate

    def evaluate_constraints(self, candidate, profile):
        return evaluate_flight_constraints(candidate, profile)

    def score(self, candidate, profile):
        return score_flight(candidate, profile)


class HotelRankingStrategy(RankingStrategy):
    domain = "hotel"
    candidate_model = HotelCandidate

    def evaluate_constraints(self, candidate, profile):
        return evaluate_hotel_constraints(candidate, profile)

    def score(self, candidate, profile):
        return score_hotel(candidate, profile)


# ============================================
# Sorting
# ============================================

def sort_in_preference(scored: Iterable[ScoredCandidate]) -> List[ScoredCandidate]:
    """Best score first; ties keep input order"""
    return sorted(scored, key=lambda s: -s.score)


def sort_out_of_preference(scored: Iterable[ScoredCandidate]) -> List[ScoredCandidate]:
    """Cheapest total price first; ties keep input order"""
    return sorted(scored, key=lambda s: s.total_price)


# ============================================
# Engine
# ============================================

class RankingEngine:
    """
    Generic categorizer and sorter

    Usage:
        engine = RankingEngine(FlightRankingStrategy())
        result = engine.rank(flights, profile)
        best = result.in_preference[0]
    """

    def __init__(
        self,
        strategy: RankingStrategy,
        max_workers: Optional[int] = None,
        parallel_threshold: Optional[int] = None
    ):
        """
        Initialize Ranking Engine

        Args:
            strategy: Domain strategy (flights or hotels)
            max_workers: Thread pool size (default: settings.MAX_WORKERS);
                1 or less evaluates on the calling thread
            parallel_threshold: Minimum candidate count for the thread pool
                (default: settings.PARALLEL_THRESHOLD)
        """
        self.strategy = strategy
        self.max_workers = settings.MAX_WORKERS if max_workers is None else max_workers
        self.parallel_threshold = (
            settings.PARALLEL_THRESHOLD if parallel_threshold is None else parallel_threshold
        )

    def evaluate(self, candidate, profile: PreferenceProfile) -> ScoredCandidate:
        """Constraint verdict and score for one candidate, merged"""
        verdict = self.strategy.evaluate_constraints(candidate, profile)
        breakdown = self.strategy.score(candidate, profile)
        return ScoredCandidate(
            candidate=candidate,
            score=breakdown.score,
            match_reasons=breakdown.reasons,
            out_of_preference=verdict.out_of_preference,
            out_of_preference_reasons=verdict.reasons,
        )

    def categorize(
        self,
        candidates: Sequence,
        profile: PreferenceProfile
    ) -> List[ScoredCandidate]:
        """
        Evaluate every candidate

        Returns:
            List[ScoredCandidate]: one record per candidate, in input order
        """
        candidates = list(candidates)
        if self.max_workers <= 1 or len(candidates) < self.parallel_threshold:
            return [self.evaluate(c, profile) for c in candidates]

        logger.debug(
            f"Evaluating {len(candidates)} {self.strategy.domain}s "
            f"on {self.max_workers} workers"
        )
        with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
            # map() yields in submission order and re-raises worker errors
            return list(pool.map(lambda c: self.evaluate(c, profile), candidates))

    def rank(
        self,
        candidates: Sequence,
        profile: Optional[PreferenceProfile] = None
    ) -> RankingResult:
        """
        Categorize and sort candidates

        Args:
            candidates: Normalized candidates of the strategy's domain
            profile: Preference profile (default: default_preferences())

        Returns:
            RankingResult: in-preference best first, out-of-preference cheapest first

        Raises:
            InvalidCandidateError: a candidate cannot be ranked
        """
        if profile is None:
            profile = default_preferences()

        scored = self.categorize(candidates, profile)
        in_preference = sort_in_preference(s for s in scored if not s.out_of_preference)
        out_of_preference = sort_out_of_preference(s for s in scored if s.out_of_preference)

        logger.info(
            f"Found {len(in_preference)} matching {self.strategy.domain}s, "
            f"{len(out_of_preference)} out of preference"
        )

        return RankingResult(
            domain=self.strategy.domain,
            in_preference=tuple(in_preference),
            out_of_preference=tuple(out_of_preference),
        )


# ============================================
# Convenience Functions
# ============================================

def rank_flights(
    flights: Sequence[FlightCandidate],
    profile: Optional[PreferenceProfile] = None
) -> RankingResult:
    """Rank flight candidates against a profile (default profile if None)"""
    return RankingEngine(FlightRankingStrategy()).rank(flights, profile)


def rank_hotels(
    hotels: Sequence[HotelCandidate],
    profile: Optional[PreferenceProfile] = None
) -> RankingResult:
    """Rank hotel candidates against a profile (default profile if None)"""
    return RankingEngine(HotelRankingStrategy()).rank(hotels, profile)


def _parse_candidates(
    model: Type[BaseModel],
    raw_candidates: Sequence[Dict[str, Any]]
) -> List[Any]:
    parsed = []
    for index, raw in enumerate(raw_candidates):
        try:
            parsed.append(model.model_validate(raw))
        except ValidationError as e:
            candidate_id = raw.get("id") if isinstance(raw, dict) else None
            raise InvalidCandidateError(
                str(candidate_id or f"#{index}"), f"invalid payload: {e}"
            ) from e
    return parsed


def rank_flight_payloads(
    raw_flights: Sequence[Dict[str, Any]],
    raw_preferences: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    """
    Rank raw flight dicts and return the response payload

    Args:
        raw_flights: Normalized flight dicts (camelCase keys)
        raw_preferences: Stored preference dict, or None for defaults

    Returns:
        dict: {"flights": [...], "outOfPreference": [...]}, each flight
            carrying matchScore, matchReasons, outOfPreference and
            outOfPreferenceReasons

    Raises:
        InvalidCandidateError: a flight dict does not validate
        InvalidPreferencesError: the preference dict does not validate
    """
    profile = build_preference_profile(raw_preferences)
    flights = _parse_candidates(FlightCandidate, raw_flights)
    return rank_flights(flights, profile).to_response()


def rank_hotel_payloads(
    raw_hotels: Sequence[Dict[str, Any]],
    raw_preferences: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    """
    Rank raw hotel dicts and return the response payload

    Returns:
        dict: {"hotels": [...], "outOfPreference": [...]}
    """
    profile = build_preference_profile(raw_preferences)
    hotels = _parse_candidates(HotelCandidate, raw_hotels)
    return rank_hotels(hotels, profile).to_response()


# ============================================
# Example Usage
# ============================================

if __name__ == "__main__":
    from ..config import configure_logging

    configure_logging("DEBUG")

    def _flight(flight_id, stops, price, departure, arrival):
        return {
            "id": flight_id,
            "slices": [{
                "origin": "JFK",
                "destination": "LHR",
                "departureTime": departure,
                "arrivalTime": arrival,
                "duration": "PT7H",
                "stops": stops,
                "segments": [],
            }],
            "pricing": {"totalAmount": price * 2, "currency": "USD", "perPassenger": price},
            "cabinClass": "economy",
            "airlines": [{"code": "BA", "name": "British Airways"}],
            "restrictions": {"refundable": True, "changeable": True},
            "baggageAllowance": {"carryOn": True, "checkedBags": 1},
        }

    response = rank_flight_payloads(
        [
            _flight("off_direct", 0, 640, "2025-06-01T09:30:00", "2025-06-01T21:30:00"),
            _flight("off_redeye", 0, 410, "2025-06-01T22:45:00", "2025-06-02T10:40:00"),
            _flight("off_onestop", 1, 520, "2025-06-01T13:10:00", "2025-06-02T07:20:00"),
        ],
        {"flightPreferences": {"preferredAirlines": ["BA"]}},
    )

    for flight in response["flights"]:
        print(f"{flight['id']}: {flight['matchScore']} {flight['matchReasons']}")
    for flight in response["outOfPreference"]:
        print(f"{flight['id']} (out): {flight['outOfPreferenceReasons']}")
