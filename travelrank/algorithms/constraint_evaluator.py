"""
Constraint Evaluator
Decides whether a candidate violates any hard preference

Flight rules, evaluated in this order:
1. Direct only      - outbound has stops while the traveler wants direct
2. Max stops        - outbound stops above the limit (skipped if rule 1 fired)
3. Red-eye          - departure at/after 22:00 or arrival before 06:00, local
4. Max layover      - first connection gap above the limit
5. Avoided airlines - any carrier on the avoid list

Hotel rules:
1. Min stars        - known star rating below the minimum
2. Strict budget    - price above half the trip budget when flexibility is strict

Every rule that fires contributes one reason, in rule order.
"""

from typing import List, NamedTuple, Tuple

from loguru import logger

from ..exceptions import InvalidCandidateError
from ..schemas.candidates import FlightCandidate, FlightSlice, HotelCandidate
from ..schemas.preferences import BudgetFlexibility, PreferenceProfile
from .temporal import layover_hours, local_hour, round_half_up

RED_EYE_DEPARTURE_HOUR = 22  # departures at or after this hour
RED_EYE_ARRIVAL_HOUR = 6     # arrivals before this hour


class ConstraintVerdict(NamedTuple):
    """
    Result of the hard-constraint pass for one candidate
    """
    out_of_preference: bool
    reasons: Tuple[str, ...]

    def __repr__(self) -> str:
        return (
            f"ConstraintVerdict(out_of_preference={self.out_of_preference}, "
            f"reasons={list(self.reasons)})"
        )


def outbound_slice(flight: FlightCandidate) -> FlightSlice:
    """
    First slice of a flight

    Raises:
        InvalidCandidateError: the flight has no slices
    """
    if not flight.slices:
        raise InvalidCandidateError(flight.id, "flight has no slices")
    return flight.slices[0]


def _plural_stops(stops: int) -> str:
    return f"{stops} stop{'s' if stops != 1 else ''}"


# ============================================
# Flights
# ============================================

def evaluate_flight_constraints(
    flight: FlightCandidate,
    profile: PreferenceProfile
) -> ConstraintVerdict:
    """
    Evaluate the hard flight rules against one candidate

    Args:
        flight: Normalized flight candidate
        profile: Preference profile

    Returns:
        ConstraintVerdict: out_of_preference flag and reasons in rule order

    Raises:
        InvalidCandidateError: the flight has no slices

    Example:
        >>> verdict = evaluate_flight_constraints(one_stop_flight, direct_only_profile)
        >>> verdict.reasons
        ('1 stop (you prefer direct)',)
    """
    prefs = profile.flight_preferences
    outbound = outbound_slice(flight)
    stops = outbound.stops
    reasons: List[str] = []

    # 1-2. Stops
    if prefs.direct_only and stops > 0:
        reasons.append(f"{_plural_stops(stops)} (you prefer direct)")
    elif stops > prefs.max_stops:
        reasons.append(f"{_plural_stops(stops)} (max {prefs.max_stops})")

    # 3. Red-eye
    if not prefs.red_eye_ok and _is_red_eye(flight.id, outbound):
        reasons.append("Red-eye flight")

    # 4. Layovers (first violation only)
    if stops > 0 and len(outbound.segments) > 1:
        violation = _first_long_layover(outbound, prefs.max_layover_hours)
        if violation is not None:
            reasons.append(
                f"{round_half_up(violation)}h layover (max {prefs.max_layover_hours:g}h)"
            )

    # 5. Avoided airlines
    if prefs.avoid_airlines:
        on_flight = set(flight.airline_codes)
        avoided = [code for code in prefs.avoid_airlines if code in on_flight]
        if avoided:
            reasons.append(f"Includes {', '.join(avoided)} (avoided)")

    verdict = ConstraintVerdict(out_of_preference=bool(reasons), reasons=tuple(reasons))
    logger.debug(f"Flight {flight.id} constraints: {verdict}")
    return verdict


def _is_red_eye(flight_id: str, outbound: FlightSlice) -> bool:
    dep_hour = local_hour(outbound.departure_time)
    arr_hour = local_hour(outbound.arrival_time)

    if dep_hour is None or arr_hour is None:
        logger.debug(f"Flight {flight_id}: outbound times incomplete, red-eye check partial")

    if dep_hour is not None and dep_hour >= RED_EYE_DEPARTURE_HOUR:
        return True
    if arr_hour is not None and arr_hour < RED_EYE_ARRIVAL_HOUR:
        return True
    return False


def _first_long_layover(outbound: FlightSlice, max_hours: float):
    """Gap (hours) of the first connection longer than max_hours, else None"""
    segments = outbound.segments
    for current, following in zip(segments, segments[1:]):
        gap = layover_hours(current.arrival_time, following.departure_time)
        if gap > max_hours:
            return gap
    return None


# ============================================
# Hotels
# ============================================

def evaluate_hotel_constraints(
    hotel: HotelCandidate,
    profile: PreferenceProfile
) -> ConstraintVerdict:
    """
    Evaluate the hard hotel rules against one candidate

    Args:
        hotel: Normalized hotel candidate
        profile: Preference profile

    Returns:
        ConstraintVerdict: out_of_preference flag and reasons in rule order
    """
    min_stars = profile.accommodation.min_stars
    budget = profile.budget
    reasons: List[str] = []

    # 1. Stars (unknown rating never fails)
    if hotel.stars is not None and hotel.stars < min_stars:
        reasons.append(f"{hotel.stars}★ (min {min_stars}★)")

    # 2. Strict budget
    if (
        budget.flexibility == BudgetFlexibility.STRICT
        and hotel.total_price > budget.hotel_budget
    ):
        reasons.append(f"Over hotel budget (max {budget.hotel_budget:g})")

    verdict = ConstraintVerdict(out_of_preference=bool(reasons), reasons=tuple(reasons))
    logger.debug(f"Hotel {hotel.id} constraints: {verdict}")
    return verdict
