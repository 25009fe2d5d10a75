"""
Scoring Model
Additive desirability score for a candidate (baseline 50)

Soft preferences only ever add points; violations are reported by the
constraint evaluator instead. Scoring runs for out-of-preference
candidates too, so a caller can still order them by desirability.

Flight bonuses:
- Direct outbound                  +20  "Direct flight"
- 1..max_stops stops               +5
- Preferred airline on board       +15  airline display name
- Per-passenger price < 500        +10  "Great value"
- Per-passenger price 500-999      +5
- Refundable                       +5   "Refundable"
- Changeable                       +3
- Outbound under 5 hours           +5
- Checked bags included            +5   "N checked bag(s) included"
- Cabin class matches              +5
- Departure 07:00-14:59            +3   "Morning departure" for 09:00-12:59

Hotel bonuses: see score_hotel.
"""

from typing import List, NamedTuple, Tuple

from loguru import logger

from ..schemas.candidates import BoardType, FlightCandidate, HotelCandidate
from ..schemas.preferences import BudgetFlexibility, PreferenceProfile
from .amenities import has_amenity
from .constraint_evaluator import outbound_slice
from .temporal import local_hour, parse_duration, round_half_up

BASE_SCORE = 50

# Flight thresholds
GREAT_VALUE_PRICE = 500
FAIR_VALUE_PRICE = 1000
SHORT_FLIGHT_MINUTES = 300


class ScoreBreakdown(NamedTuple):
    """
    Score with the bonuses that produced it, for transparency
    """
    score: int
    reasons: Tuple[str, ...]
    bonuses: Tuple[Tuple[str, int], ...]

    def __repr__(self) -> str:
        parts = ", ".join(f"{name}=+{points}" for name, points in self.bonuses)
        return f"Score(total={self.score}, {parts or 'baseline'})"


class _Tally:
    """Accumulates bonuses and reasons in evaluation order"""

    def __init__(self):
        self.score = BASE_SCORE
        self.reasons: List[str] = []
        self.bonuses: List[Tuple[str, int]] = []

    def add(self, name: str, points: int, reason: str = None) -> None:
        self.score += points
        self.bonuses.append((name, points))
        if reason:
            self.reasons.append(reason)

    def breakdown(self) -> ScoreBreakdown:
        return ScoreBreakdown(
            score=self.score,
            reasons=tuple(self.reasons),
            bonuses=tuple(self.bonuses),
        )


# ============================================
# Flights
# ============================================

def score_flight(flight: FlightCandidate, profile: PreferenceProfile) -> ScoreBreakdown:
    """
    Calculate the soft-preference score of a flight

    Args:
        flight: Normalized flight candidate
        profile: Preference profile

    Returns:
        ScoreBreakdown: score >= 50 with positive reasons in evaluation order

    Raises:
        InvalidCandidateError: the flight has no slices

    Example:
        >>> # direct, $450pp, refundable, cabin match
        >>> score_flight(flight, profile).score
        90
    """
    prefs = profile.flight_preferences
    outbound = outbound_slice(flight)
    stops = outbound.stops
    tally = _Tally()

    # Stops (no stop bonus when a direct-only traveler gets a connection)
    if not (prefs.direct_only and stops > 0):
        if stops == 0:
            tally.add("direct", 20, "Direct flight")
        elif stops <= prefs.max_stops:
            tally.add("stops", 5)

    # Preferred airlines
    if prefs.preferred_airlines:
        preferred = set(prefs.preferred_airlines)
        airline = next(
            (a for a in flight.airlines if a.code.upper() in preferred), None
        )
        if airline is not None:
            tally.add("preferred_airline", 15, airline.name or "Preferred airline")

    # Price per passenger
    price = flight.pricing.per_passenger
    if price < GREAT_VALUE_PRICE:
        tally.add("price", 10, "Great value")
    elif price < FAIR_VALUE_PRICE:
        tally.add("price", 5)

    # Flexibility
    if flight.restrictions.refundable:
        tally.add("refundable", 5, "Refundable")
    if flight.restrictions.changeable:
        tally.add("changeable", 3)

    # Outbound duration
    minutes = parse_duration(outbound.duration)
    if minutes is None:
        logger.debug(f"Flight {flight.id}: unknown duration {outbound.duration!r}, skipping")
    elif minutes and minutes < SHORT_FLIGHT_MINUTES:
        tally.add("duration", 5)

    # Baggage
    bags = flight.baggage_allowance.checked_bags if flight.baggage_allowance else None
    if bags:
        tally.add("baggage", 5, f"{bags} checked bag{'s' if bags > 1 else ''} included")

    # Cabin
    if flight.cabin_class and flight.cabin_class.lower() == prefs.cabin_class.value:
        tally.add("cabin", 5)

    # Time of day
    dep_hour = local_hour(outbound.departure_time)
    if dep_hour is not None and 7 <= dep_hour <= 14:
        tally.add("departure_time", 3, "Morning departure" if 9 <= dep_hour <= 12 else None)

    breakdown = tally.breakdown()
    logger.debug(f"Flight {flight.id} scored: {breakdown}")
    return breakdown


# ============================================
# Hotels
# ============================================

def score_hotel(hotel: HotelCandidate, profile: PreferenceProfile) -> ScoreBreakdown:
    """
    Calculate the soft-preference score of a hotel

    Bonuses:
    - Review score (0-10)             + rounded score, "Excellent reviews" at 8.5+
    - Stars at or above minimum       +5, +2 more on an exact match
    - Price vs. hotel budget          depends on budget flexibility:
        splurge_ok: + min(stars * 2, 10)
        strict:     +5 under 30% ("Great value"), +3 under 50%
        flexible:   +4 under 40% ("Great value")
    - Each must-have amenity          +3  "Has <amenity>"
    - Each nice-to-have amenity       +1
    - Refundable                      +2  "Refundable"
    - Review count > 500 / > 100      +2 / +1
    - Any meals included              +2  "Breakfast included" / "Meals included"

    Args:
        hotel: Normalized hotel candidate
        profile: Preference profile

    Returns:
        ScoreBreakdown
    """
    accommodation = profile.accommodation
    budget = profile.budget
    tally = _Tally()

    if hotel.review_score is not None:
        tally.add(
            "reviews",
            round_half_up(hotel.review_score),
            "Excellent reviews" if hotel.review_score >= 8.5 else None,
        )

    if hotel.stars is not None and hotel.stars >= accommodation.min_stars:
        tally.add("stars", 5)
        if hotel.stars == accommodation.min_stars:
            tally.add("stars_exact", 2)

    budget_ratio = hotel.total_price / budget.hotel_budget
    if budget.flexibility == BudgetFlexibility.SPLURGE_OK:
        if hotel.stars:
            tally.add("price", min(hotel.stars * 2, 10))
    elif budget.flexibility == BudgetFlexibility.STRICT:
        if budget_ratio < 0.3:
            tally.add("price", 5, "Great value")
        elif budget_ratio < 0.5:
            tally.add("price", 3)
    elif budget_ratio < 0.4:
        tally.add("price", 4, "Great value")

    for amenity in accommodation.must_have_amenities:
        if has_amenity(hotel.amenities, amenity):
            tally.add(f"must_have:{amenity}", 3, f"Has {amenity}")

    for amenity in accommodation.nice_to_have_amenities:
        if has_amenity(hotel.amenities, amenity):
            tally.add(f"nice_to_have:{amenity}", 1)

    if hotel.refundable:
        tally.add("refundable", 2, "Refundable")

    if hotel.review_count is not None:
        if hotel.review_count > 500:
            tally.add("review_count", 2)
        elif hotel.review_count > 100:
            tally.add("review_count", 1)

    if hotel.board_type is not None and hotel.board_type != BoardType.ROOM_ONLY:
        tally.add(
            "board",
            2,
            "Breakfast included" if hotel.board_type == BoardType.BREAKFAST else "Meals included",
        )

    breakdown = tally.breakdown()
    logger.debug(f"Hotel {hotel.id} scored: {breakdown}")
    return breakdown
