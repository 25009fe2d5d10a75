import pytest

from travelrank.algorithms.constraint_evaluator import (
    evaluate_flight_constraints,
    evaluate_hotel_constraints,
)
from travelrank.exceptions import InvalidCandidateError
from travelrank.schemas.candidates import FlightCandidate, Pricing
from travelrank.schemas.preferences import build_preference_profile, default_preferences

from tests.builders import make_flight, make_hotel, make_segment


def _profile(**flight_prefs):
    return build_preference_profile({"flightPreferences": flight_prefs})


def test_direct_flight_passes_defaults():
    verdict = evaluate_flight_constraints(make_flight(), default_preferences())
    assert verdict.out_of_preference is False
    assert verdict.reasons == ()


def test_direct_only_rejects_one_stop():
    verdict = evaluate_flight_constraints(make_flight(stops=1), _profile(directOnly=True))
    assert verdict.out_of_preference is True
    assert verdict.reasons == ("1 stop (you prefer direct)",)


def test_direct_only_pluralizes_stops():
    verdict = evaluate_flight_constraints(make_flight(stops=2), _profile(directOnly=True))
    assert verdict.reasons == ("2 stops (you prefer direct)",)


def test_direct_only_suppresses_max_stops_reason():
    verdict = evaluate_flight_constraints(
        make_flight(stops=3), _profile(directOnly=True, maxStops=1)
    )
    assert verdict.reasons == ("3 stops (you prefer direct)",)


def test_max_stops_exceeded():
    verdict = evaluate_flight_constraints(make_flight(stops=2), _profile(maxStops=1))
    assert verdict.out_of_preference is True
    assert verdict.reasons == ("2 stops (max 1)",)


def test_max_stops_zero():
    verdict = evaluate_flight_constraints(make_flight(stops=1), _profile(maxStops=0))
    assert verdict.reasons == ("1 stop (max 0)",)


def test_stops_within_limit_is_not_a_violation():
    verdict = evaluate_flight_constraints(make_flight(stops=1), _profile(maxStops=1))
    assert verdict.out_of_preference is False


def test_late_departure_is_red_eye():
    flight = make_flight(departure="2025-06-01T22:00:00", arrival="2025-06-02T10:00:00")
    verdict = evaluate_flight_constraints(flight, default_preferences())
    assert verdict.reasons == ("Red-eye flight",)


def test_early_arrival_is_red_eye():
    flight = make_flight(departure="2025-06-01T18:00:00", arrival="2025-06-02T05:59:00")
    verdict = evaluate_flight_constraints(flight, default_preferences())
    assert verdict.reasons == ("Red-eye flight",)


def test_red_eye_allowed():
    flight = make_flight(departure="2025-06-01T23:30:00", arrival="2025-06-02T04:00:00")
    verdict = evaluate_flight_constraints(flight, _profile(redEyeOk=True))
    assert verdict.out_of_preference is False


def test_red_eye_uses_timestamp_offset():
    # 21:30 in New York is 01:30 UTC: not a red-eye where it departs
    flight = make_flight(
        departure="2025-06-01T21:30:00-04:00",
        arrival="2025-06-02T09:45:00+01:00",
    )
    verdict = evaluate_flight_constraints(flight, default_preferences())
    assert verdict.out_of_preference is False

    # 23:15 in Paris is 21:15 UTC: still a red-eye where it departs
    flight = make_flight(
        departure="2025-06-01T23:15:00+02:00",
        arrival="2025-06-02T08:00:00+02:00",
    )
    verdict = evaluate_flight_constraints(flight, default_preferences())
    assert verdict.reasons == ("Red-eye flight",)


def test_missing_slice_times_skip_red_eye_check():
    flight = make_flight(departure=None, arrival=None)
    verdict = evaluate_flight_constraints(flight, default_preferences())
    assert verdict.out_of_preference is False


def test_slice_times_fall_back_to_segments():
    segments = [
        make_segment("2025-06-01T22:40:00", "2025-06-02T01:00:00"),
        make_segment("2025-06-02T02:00:00", "2025-06-02T07:00:00"),
    ]
    flight = make_flight(stops=None, segments=segments, departure=None, arrival=None)
    assert flight.outbound.stops == 1
    verdict = evaluate_flight_constraints(flight, default_preferences())
    assert verdict.reasons == ("Red-eye flight",)


def test_long_layover_reports_rounded_gap():
    segments = [
        make_segment("2025-06-01T08:00:00", "2025-06-01T10:00:00"),
        make_segment("2025-06-01T15:12:00", "2025-06-01T18:00:00"),
    ]
    flight = make_flight(
        stops=1, segments=segments,
        departure="2025-06-01T08:00:00", arrival="2025-06-01T18:00:00",
    )
    verdict = evaluate_flight_constraints(flight, _profile(maxLayoverHours=4))
    assert verdict.out_of_preference is True
    assert len(verdict.reasons) == 1
    assert "5h layover (max 4h)" in verdict.reasons[0]


def test_only_first_long_layover_is_reported():
    segments = [
        make_segment("2025-06-01T08:00:00", "2025-06-01T09:00:00"),
        make_segment("2025-06-01T15:00:00", "2025-06-01T16:00:00"),
        make_segment("2025-06-01T23:00:00", "2025-06-02T07:00:00"),
    ]
    flight = make_flight(
        stops=2, segments=segments,
        departure="2025-06-01T08:00:00", arrival="2025-06-02T07:00:00",
    )
    verdict = evaluate_flight_constraints(flight, _profile(maxStops=2, maxLayoverHours=2.5))
    assert verdict.reasons == ("6h layover (max 2.5h)",)


def test_layover_at_limit_is_allowed():
    segments = [
        make_segment("2025-06-01T08:00:00", "2025-06-01T10:00:00"),
        make_segment("2025-06-01T14:00:00", "2025-06-01T18:00:00"),
    ]
    flight = make_flight(
        stops=1, segments=segments,
        departure="2025-06-01T08:00:00", arrival="2025-06-01T18:00:00",
    )
    verdict = evaluate_flight_constraints(flight, default_preferences())
    assert verdict.out_of_preference is False


def test_avoided_airlines_listed_in_profile_order():
    flight = make_flight(airlines=(("UA", "United"), ("DL", "Delta"), ("AA", "American")))
    verdict = evaluate_flight_constraints(flight, _profile(avoidAirlines=["DL", "BA", "UA"]))
    assert verdict.reasons == ("Includes DL, UA (avoided)",)


def test_all_violations_collected_in_rule_order():
    segments = [
        make_segment("2025-06-01T22:30:00", "2025-06-02T00:30:00", code="UA"),
        make_segment("2025-06-02T07:00:00", "2025-06-02T11:00:00", code="UA"),
    ]
    flight = make_flight(
        stops=1, segments=segments,
        departure="2025-06-01T22:30:00", arrival="2025-06-02T11:00:00",
        airlines=(("UA", "United"),),
    )
    verdict = evaluate_flight_constraints(
        flight, _profile(directOnly=True, avoidAirlines=["UA"])
    )
    assert verdict.reasons == (
        "1 stop (you prefer direct)",
        "Red-eye flight",
        "7h layover (max 4h)",
        "Includes UA (avoided)",
    )


def test_flight_without_slices_is_rejected():
    flight = FlightCandidate(
        id="off_empty", pricing=Pricing(total_amount=100, per_passenger=100)
    )
    with pytest.raises(InvalidCandidateError, match="off_empty"):
        evaluate_flight_constraints(flight, default_preferences())


def test_hotel_meeting_minimum_stars_passes():
    verdict = evaluate_hotel_constraints(make_hotel(stars=3), default_preferences())
    assert verdict.out_of_preference is False


def test_hotel_below_minimum_stars():
    verdict = evaluate_hotel_constraints(make_hotel(stars=2), default_preferences())
    assert verdict.reasons == ("2★ (min 3★)",)


def test_hotel_unknown_stars_never_fails():
    verdict = evaluate_hotel_constraints(make_hotel(stars=None), default_preferences())
    assert verdict.out_of_preference is False


def test_hotel_over_strict_budget():
    profile = build_preference_profile({"budget": {"perTripMax": 2000, "flexibility": "strict"}})
    verdict = evaluate_hotel_constraints(make_hotel(stars=2, total=1200), profile)
    assert verdict.reasons == ("2★ (min 3★)", "Over hotel budget (max 1000)")


def test_hotel_budget_ignored_when_flexible():
    profile = build_preference_profile({"budget": {"perTripMax": 2000}})
    verdict = evaluate_hotel_constraints(make_hotel(total=1200), profile)
    assert verdict.out_of_preference is False
