# schemas/__init__.py
"""
Pydantic Schemas Package

Contains the Pydantic v2 models for:
- Preference profiles (input configuration)
- Flight and hotel candidates (input)
- Scored candidates and ranking results (output)
"""

from .preferences import (
    # Enums
    CabinClass, TravelerType, BudgetFlexibility,
    # Profile
    ChildTraveler, TravelerConfig, HomeBase, BudgetConfig,
    FlightPreferences, AccommodationPreferences, PreferenceProfile,
    default_preferences, build_preference_profile,
)
from .candidates import (
    # Flights
    Airport, Airline, FlightSegment, FlightSlice, Pricing, Restrictions,
    BaggageAllowance, FlightCandidate,
    # Hotels
    BoardType, HotelPricing, HotelCandidate,
    # Output
    ScoredCandidate, RankingResult,
)

__all__ = [
    # Enums
    "CabinClass", "TravelerType", "BudgetFlexibility", "BoardType",
    # Profile
    "ChildTraveler", "TravelerConfig", "HomeBase", "BudgetConfig",
    "FlightPreferences", "AccommodationPreferences", "PreferenceProfile",
    "default_preferences", "build_preference_profile",
    # Flights
    "Airport", "Airline", "FlightSegment", "FlightSlice", "Pricing",
    "Restrictions", "BaggageAllowance", "FlightCandidate",
    # Hotels
    "HotelPricing", "HotelCandidate",
    # Output
    "ScoredCandidate", "RankingResult",
]
