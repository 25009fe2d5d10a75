# schemas/preferences.py
"""
Preference Profile Schemas - Pydantic v2 Models

The profile is the configuration consumed by the constraint evaluators and
scoring models. Every field is optional on input and carries a documented
default, so a partial payload from the preference store validates into a
complete, immutable profile.
"""

from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from ..config import settings
from ..exceptions import InvalidPreferencesError


# ============================================
# Enums
# ============================================

class CabinClass(str, Enum):
    ECONOMY = "economy"
    PREMIUM_ECONOMY = "premium_economy"
    BUSINESS = "business"
    FIRST = "first"


class TravelerType(str, Enum):
    SOLO = "solo"
    COUPLE = "couple"
    FAMILY = "family"
    GROUP = "group"


class BudgetFlexibility(str, Enum):
    STRICT = "strict"
    FLEXIBLE = "flexible"
    SPLURGE_OK = "splurge_ok"


class _ProfileModel(BaseModel):
    """Frozen model accepting both camelCase and snake_case keys"""
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


# ============================================
# Sub-profiles
# ============================================

class ChildTraveler(_ProfileModel):
    age: int = Field(..., ge=0, le=17)


class TravelerConfig(_ProfileModel):
    """Who is travelling"""
    type: TravelerType = TravelerType.COUPLE
    adults: int = Field(default=2, ge=1)
    children: Tuple[ChildTraveler, ...] = ()
    infants: int = Field(default=0, ge=0)

    @property
    def passenger_count(self) -> int:
        return self.adults + len(self.children) + self.infants


class HomeBase(_ProfileModel):
    airport_code: str
    city: str = ""
    country: str = ""


class BudgetConfig(_ProfileModel):
    """Per-trip budget; the hotel variant reads it, flights ignore it"""
    per_trip_min: float = Field(default=1000, ge=0)
    per_trip_max: float = Field(default=5000, gt=0)
    currency: str = Field(default_factory=lambda: settings.DEFAULT_CURRENCY)
    flexibility: BudgetFlexibility = BudgetFlexibility.FLEXIBLE

    @property
    def hotel_budget(self) -> float:
        """Share of the trip budget a hotel may take"""
        return self.per_trip_max * 0.5


class FlightPreferences(_ProfileModel):
    """
    Flight rules

    Hard: direct_only, max_stops, max_layover_hours, red_eye_ok, avoid_airlines
    Soft: cabin_class, preferred_airlines
    """
    cabin_class: CabinClass = CabinClass.ECONOMY
    direct_only: bool = False
    max_stops: int = Field(default=1, ge=0)
    max_layover_hours: float = Field(default=4, gt=0)
    red_eye_ok: bool = False
    avoid_airlines: Tuple[str, ...] = ()
    preferred_airlines: Tuple[str, ...] = ()

    @field_validator("avoid_airlines", "preferred_airlines", mode="before")
    @classmethod
    def _normalize_codes(cls, value: Any) -> Tuple[str, ...]:
        # Ordered and de-duplicated; reason strings list codes in this order
        if value is None:
            return ()
        if isinstance(value, str):
            value = [value]
        codes: List[str] = []
        for code in value:
            code = str(code).strip().upper()
            if code and code not in codes:
                codes.append(code)
        return tuple(codes)


class AccommodationPreferences(_ProfileModel):
    """Hotel rules: min_stars is hard, amenities are soft"""
    min_stars: int = Field(default=3, ge=0, le=5)
    must_have_amenities: Tuple[str, ...] = ("wifi",)
    nice_to_have_amenities: Tuple[str, ...] = ("pool", "gym")
    room_preferences: Tuple[str, ...] = ()


# ============================================
# Profile
# ============================================

class PreferenceProfile(_ProfileModel):
    """Immutable preference profile supplied per ranking call"""
    travelers: TravelerConfig = Field(default_factory=TravelerConfig)
    home_base: Optional[HomeBase] = None
    budget: BudgetConfig = Field(default_factory=BudgetConfig)
    flight_preferences: FlightPreferences = Field(default_factory=FlightPreferences)
    accommodation: AccommodationPreferences = Field(default_factory=AccommodationPreferences)
    profile_completed: bool = False


def default_preferences() -> PreferenceProfile:
    """
    Canonical profile used whenever the caller has none

    Returns:
        PreferenceProfile: economy, up to 1 stop, 4h max layover, no red-eyes
    """
    return PreferenceProfile()


def _drop_nulls(value: Any) -> Any:
    if isinstance(value, dict):
        return {k: _drop_nulls(v) for k, v in value.items() if v is not None}
    if isinstance(value, list):
        return [_drop_nulls(v) for v in value if v is not None]
    return value


def build_preference_profile(
    payload: Optional[Dict[str, Any]] = None
) -> PreferenceProfile:
    """
    Build a profile from the loose payload stored by the preference service

    Absent fields and explicit nulls take their defaults. Present fields
    are validated.

    Args:
        payload: camelCase (or snake_case) preference dict, or None

    Returns:
        PreferenceProfile

    Raises:
        InvalidPreferencesError: a present field has a bad type or value

    Example:
        >>> profile = build_preference_profile(
        ...     {"flightPreferences": {"directOnly": True, "maxStops": None}}
        ... )
        >>> profile.flight_preferences.direct_only, profile.flight_preferences.max_stops
        (True, 1)
    """
    if payload is None:
        return default_preferences()
    if isinstance(payload, PreferenceProfile):
        return payload

    try:
        return PreferenceProfile.model_validate(_drop_nulls(payload))
    except ValidationError as e:
        logger.warning(f"Rejected preference payload: {e.error_count()} invalid field(s)")
        raise InvalidPreferencesError(str(e)) from e
