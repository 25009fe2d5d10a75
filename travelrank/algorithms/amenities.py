"""
Amenity Matching
Maps preference amenity keys to the facility names suppliers use
"""

from typing import Iterable

AMENITY_ALIASES = {
    "pool": ["Swimming pool", "Indoor pool", "Outdoor pool", "Heated pool"],
    "wifi": ["Free WiFi", "WiFi", "Free wired internet", "Internet access"],
    "gym": ["Fitness", "Gym", "Fitness facilities", "Fitness center"],
    "spa": ["Spa", "Spa/wellness", "Massage services", "Sauna"],
    "restaurant": ["Restaurant", "On-site restaurant"],
    "parking": ["Parking", "Free parking", "Self parking", "Valet parking"],
    "ac": ["Air conditioning"],
    "breakfast": ["Breakfast", "Breakfast buffet", "Continental breakfast"],
    "room-service": ["Room service", "24-hour room service"],
    "pet-friendly": ["Pets allowed", "Pet friendly"],
    "wheelchair": ["Wheelchair accessible", "Facilities for disabled"],
    "family": ["Family rooms", "Kid meals", "Cribs"],
}


def has_amenity(hotel_amenities: Iterable[str], amenity: str) -> bool:
    """
    Check if a hotel offers an amenity

    Case-insensitive substring match against the amenity's aliases; an
    amenity with no alias entry is matched by its own name.

    Example:
        >>> has_amenity(["Free WiFi", "Outdoor pool"], "wifi")
        True
    """
    terms = [t.lower() for t in AMENITY_ALIASES.get(amenity.lower(), [amenity])]
    return any(
        term in facility.lower()
        for facility in hotel_amenities
        for term in terms
    )
