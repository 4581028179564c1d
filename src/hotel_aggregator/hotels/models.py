"""Dataclasses for the canonical, supplier-independent hotel record."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List


@dataclass(slots=True)
class Location:
    """Geographic position and postal address of a property."""

    lat: float = 0.0
    lng: float = 0.0
    address: str = ""
    city: str = ""
    country: str = ""

    def to_dict(self) -> dict[str, object]:
        return {
            "lat": self.lat,
            "lng": self.lng,
            "address": self.address,
            "city": self.city,
            "country": self.country,
        }


@dataclass(slots=True)
class Amenities:
    """Amenity names split into hotel-wide and in-room buckets."""

    general: List[str] = field(default_factory=list)
    room: List[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, object]:
        return {"general": list(self.general), "room": list(self.room)}


@dataclass(frozen=True, slots=True)
class Image:
    link: str
    description: str = ""

    def to_dict(self) -> dict[str, str]:
        return {"link": self.link, "description": self.description}


@dataclass(slots=True)
class Images:
    """Image galleries grouped by what they depict."""

    rooms: List[Image] = field(default_factory=list)
    site: List[Image] = field(default_factory=list)
    amenities: List[Image] = field(default_factory=list)

    def to_dict(self) -> dict[str, object]:
        return {
            "rooms": [image.to_dict() for image in self.rooms],
            "site": [image.to_dict() for image in self.site],
            "amenities": [image.to_dict() for image in self.amenities],
        }


@dataclass(slots=True)
class Hotel:
    """Normalised hotel, possibly merged from several suppliers.

    ``destination_id`` of ``0`` means the destination is unknown.
    """

    id: str
    destination_id: int = 0
    name: str = ""
    description: str = ""
    location: Location = field(default_factory=Location)
    amenities: Amenities = field(default_factory=Amenities)
    images: Images = field(default_factory=Images)
    booking_conditions: List[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, object]:
        return {
            "id": self.id,
            "destination_id": self.destination_id,
            "name": self.name,
            "location": self.location.to_dict(),
            "description": self.description,
            "amenities": self.amenities.to_dict(),
            "images": self.images.to_dict(),
            "booking_conditions": list(self.booking_conditions),
        }


@dataclass(slots=True)
class AvailableIds:
    """Every hotel and destination identifier seen in one fetch cycle."""

    hotel_ids: List[str] = field(default_factory=list)
    destination_ids: List[int] = field(default_factory=list)

    def to_dict(self) -> dict[str, object]:
        return {
            "hotel_ids": list(self.hotel_ids),
            "destination_ids": list(self.destination_ids),
        }
