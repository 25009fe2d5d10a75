# schemas/candidates.py
"""
Candidate Schemas - Pydantic v2 Models

Normalized travel options (flights and hotels) as handed over by the
supplier integrations, and the annotated records the engine returns.
Candidates are frozen: the engine never mutates its input.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional, Tuple, Union

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


class _CandidateModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


# ============================================
# Flight Models
# ============================================

class Airport(_CandidateModel):
    code: str
    name: str = ""
    city: str = ""


class Airline(_CandidateModel):
    code: str
    name: Optional[str] = None
    logo_url: Optional[str] = None


class FlightSegment(_CandidateModel):
    """A single flown leg"""
    departure_airport: Optional[Airport] = None
    arrival_airport: Optional[Airport] = None
    departure_time: datetime
    arrival_time: datetime
    duration: Optional[str] = None  # ISO 8601, e.g. "PT2H30M"
    flight_number: Optional[str] = None
    airline: Optional[Airline] = None
    aircraft: Optional[str] = None
    cabin_class: Optional[str] = None


class FlightSlice(_CandidateModel):
    """One direction of travel (outbound or return)"""
    origin: str = ""
    destination: str = ""
    departure_time: Optional[datetime] = None
    arrival_time: Optional[datetime] = None
    duration: Optional[str] = None  # ISO 8601, e.g. "PT8H30M"
    segments: Tuple[FlightSegment, ...] = ()
    stops: Optional[int] = Field(default=None, ge=0)

    @model_validator(mode="after")
    def _fill_from_segments(self) -> "FlightSlice":
        # Frozen model: fill derived fields through __dict__
        if self.stops is None:
            self.__dict__["stops"] = max(len(self.segments) - 1, 0)
        if self.segments:
            if self.departure_time is None:
                self.__dict__["departure_time"] = self.segments[0].departure_time
            if self.arrival_time is None:
                self.__dict__["arrival_time"] = self.segments[-1].arrival_time
        return self


class Pricing(_CandidateModel):
    total_amount: float = Field(..., ge=0)
    currency: str = "USD"
    per_passenger: float = Field(..., ge=0)


class Restrictions(_CandidateModel):
    refundable: Optional[bool] = None
    changeable: Optional[bool] = None
    changes_fee: Optional[float] = None
    cancellation_fee: Optional[float] = None


class BaggageAllowance(_CandidateModel):
    carry_on: Optional[bool] = None
    checked_bags: Optional[int] = Field(default=None, ge=0)
    checked_bag_weight_kg: Optional[float] = None


class FlightCandidate(_CandidateModel):
    """Normalized flight offer"""
    id: str
    offer_id: Optional[str] = None
    slices: Tuple[FlightSlice, ...] = ()
    pricing: Pricing
    cabin_class: Optional[str] = None
    airlines: Tuple[Airline, ...] = ()
    restrictions: Restrictions = Field(default_factory=Restrictions)
    baggage_allowance: Optional[BaggageAllowance] = None
    total_emissions_kg: Optional[float] = None
    expires_at: Optional[datetime] = None

    @property
    def outbound(self) -> FlightSlice:
        return self.slices[0]

    @property
    def return_slice(self) -> Optional[FlightSlice]:
        return self.slices[1] if len(self.slices) > 1 else None

    @property
    def airline_codes(self) -> Tuple[str, ...]:
        return tuple(a.code.upper() for a in self.airlines)

    @property
    def total_price(self) -> float:
        return self.pricing.total_amount


# ============================================
# Hotel Models
# ============================================

class BoardType(str, Enum):
    ROOM_ONLY = "room_only"
    BREAKFAST = "breakfast"
    HALF_BOARD = "half_board"
    FULL_BOARD = "full_board"
    ALL_INCLUSIVE = "all_inclusive"


# Supplier board codes
BOARD_CODES = {
    "RO": BoardType.ROOM_ONLY,
    "BB": BoardType.BREAKFAST,
    "HB": BoardType.HALF_BOARD,
    "FB": BoardType.FULL_BOARD,
    "AI": BoardType.ALL_INCLUSIVE,
}


class HotelPricing(_CandidateModel):
    total_amount: float = Field(..., ge=0)
    currency: str = "USD"
    nightly_rate: Optional[float] = None


class HotelCandidate(_CandidateModel):
    """Normalized hotel offer (best rate already selected)"""
    id: str
    name: str = ""
    stars: Optional[int] = Field(default=None, ge=0, le=5)
    review_score: Optional[float] = Field(default=None, ge=0, le=10)
    review_count: Optional[int] = Field(default=None, ge=0)
    amenities: Tuple[str, ...] = ()
    pricing: HotelPricing
    refundable: Optional[bool] = None
    board_type: Optional[BoardType] = None
    room_name: Optional[str] = None

    @field_validator("board_type", mode="before")
    @classmethod
    def _map_board_code(cls, value: Any) -> Any:
        if value is None or isinstance(value, BoardType):
            return value
        text = str(value).strip()
        if text.upper() in BOARD_CODES:
            return BOARD_CODES[text.upper()]
        if text.lower() in BoardType._value2member_map_:
            return text.lower()
        logger.debug(f"Unknown board type {text!r}, treating as unknown")
        return None

    @property
    def total_price(self) -> float:
        return self.pricing.total_amount


Candidate = Union[FlightCandidate, HotelCandidate]


# ============================================
# Engine Output
# ============================================

class ScoredCandidate(BaseModel):
    """
    A candidate annotated with its score and preference verdict

    score starts at 50 and only ever increases. out_of_preference is set
    by the hard constraints alone and does not depend on score.
    """
    model_config = ConfigDict(frozen=True)

    candidate: Candidate
    score: int = Field(..., ge=0)
    match_reasons: Tuple[str, ...] = ()
    out_of_preference: bool = False
    out_of_preference_reasons: Tuple[str, ...] = ()

    @property
    def total_price(self) -> float:
        return self.candidate.total_price

    def to_response(self) -> Dict[str, Any]:
        """Candidate fields (camelCase) with the scoring annotations merged in"""
        payload = self.candidate.model_dump(mode="json", by_alias=True)
        payload.update({
            "matchScore": self.score,
            "matchReasons": list(self.match_reasons),
            "outOfPreference": self.out_of_preference,
            "outOfPreferenceReasons": list(self.out_of_preference_reasons),
        })
        return payload


class RankingResult(BaseModel):
    """Both buckets of one ranking pass, each already sorted"""
    model_config = ConfigDict(frozen=True)

    domain: str
    in_preference: Tuple[ScoredCandidate, ...] = ()
    out_of_preference: Tuple[ScoredCandidate, ...] = ()

    @property
    def total(self) -> int:
        return len(self.in_preference) + len(self.out_of_preference)

    def to_response(self) -> Dict[str, Any]:
        """
        Response shape: {"flights": [...], "outOfPreference": [...]}
        (or "hotels" for the hotel domain)
        """
        return {
            f"{self.domain}s": [s.to_response() for s in self.in_preference],
            "outOfPreference": [s.to_response() for s in self.out_of_preference],
        }
