"""Utilities to transform raw supplier payloads into canonical hotel records."""
from __future__ import annotations

import logging
import math
from typing import Any, Dict, Iterable, List, Mapping, Optional

from hotel_aggregator.config.suppliers import FALLBACK_FIELD_MAPPING, FieldMapping, SupplierConfig

from .models import Amenities, Hotel, Image, Images, Location
from .paths import MISSING, extract_field, is_empty

logger = logging.getLogger(__name__)

_GENERAL_AMENITY_KEYS = ("general", "hotel")
_ROOM_AMENITY_KEYS = ("room", "rooms")
_IMAGE_LINK_KEYS = ("link", "url")
_IMAGE_DESCRIPTION_KEYS = ("description", "caption")


def mapping_for(supplier: Optional[SupplierConfig]) -> FieldMapping:
    return supplier.field_mapping if supplier is not None else FALLBACK_FIELD_MAPPING


def _to_id(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        return value.strip() or None
    if isinstance(value, int):
        return str(value)
    return None


def _to_int(value: Any) -> int:
    if value is MISSING or value is None or isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else 0
    if isinstance(value, str):
        text = value.strip()
        try:
            return int(text)
        except ValueError:
            try:
                number = float(text)
            except ValueError:
                return 0
            return int(number) if number.is_integer() else 0
    return 0


def _to_float(value: Any) -> float:
    if value is MISSING or value is None or isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def _to_text(value: Any) -> str:
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return ""


def extract_hotel_id(record: Mapping[str, Any], mapping: FieldMapping) -> Optional[str]:
    return _to_id(extract_field(record, mapping.hotel_id))


def extract_destination_id(record: Mapping[str, Any], mapping: FieldMapping) -> int:
    return _to_int(extract_field(record, mapping.destination_id))


def normalize_amenity_list(entries: Any) -> List[str]:
    """Lower-case, trim, drop noise and de-duplicate amenity names; result is sorted."""
    if not isinstance(entries, list):
        return []
    cleaned = set()
    for entry in entries:
        if not isinstance(entry, str):
            continue
        name = entry.strip().lower()
        if len(name) <= 1 or not any(ch.isalpha() for ch in name):
            continue
        cleaned.add(name)
    return sorted(cleaned)


def _first_bucket(data: Mapping[str, Any], keys: Iterable[str]) -> Any:
    for key in keys:
        value = data.get(key)
        if not is_empty(value):
            return value
    return None


def _extract_amenities(record: Mapping[str, Any], mapping: FieldMapping) -> Amenities:
    raw = extract_field(record, mapping.amenities)
    if isinstance(raw, list):
        return Amenities(general=[], room=normalize_amenity_list(raw))
    if isinstance(raw, Mapping):
        return Amenities(
            general=normalize_amenity_list(_first_bucket(raw, _GENERAL_AMENITY_KEYS)),
            room=normalize_amenity_list(_first_bucket(raw, _ROOM_AMENITY_KEYS)),
        )
    return Amenities()


def _image_from_entry(entry: Any) -> Optional[Image]:
    if isinstance(entry, str):
        link = entry.strip()
        return Image(link=link) if link else None
    if not isinstance(entry, Mapping):
        return None
    link = _to_text(_first_bucket(entry, _IMAGE_LINK_KEYS))
    if not link:
        return None
    return Image(link=link, description=_to_text(_first_bucket(entry, _IMAGE_DESCRIPTION_KEYS)))


def normalize_image_list(entries: Any) -> List[Image]:
    """Build ``Image`` values from strings or objects; the first occurrence of a link wins."""
    if not isinstance(entries, list):
        return []
    images: List[Image] = []
    seen: set[str] = set()
    for entry in entries:
        image = _image_from_entry(entry)
        if image is None or image.link in seen:
            continue
        seen.add(image.link)
        images.append(image)
    return images


def _extract_images(record: Mapping[str, Any], mapping: FieldMapping) -> Images:
    return Images(
        rooms=normalize_image_list(extract_field(record, mapping.images.rooms)),
        site=normalize_image_list(extract_field(record, mapping.images.site)),
        amenities=normalize_image_list(extract_field(record, mapping.images.amenities)),
    )


def _extract_location(record: Mapping[str, Any], mapping: FieldMapping) -> Location:
    location = mapping.location
    return Location(
        lat=_to_float(extract_field(record, location.lat)),
        lng=_to_float(extract_field(record, location.lng)),
        address=_to_text(extract_field(record, location.address)),
        city=_to_text(extract_field(record, location.city)),
        country=_to_text(extract_field(record, location.country)),
    )


def _extract_booking_conditions(record: Mapping[str, Any], mapping: FieldMapping) -> List[str]:
    conditions = extract_field(record, mapping.booking_conditions)
    if not isinstance(conditions, list):
        return []
    return [item.strip() for item in conditions if isinstance(item, str) and item.strip()]


def normalize_hotel(record: Mapping[str, Any], supplier: Optional[SupplierConfig] = None) -> Optional[Hotel]:
    """Build a :class:`Hotel` from one raw supplier record.

    Records without a resolvable id are discarded and ``None`` is returned.
    Without ``supplier`` the conventional fallback key names are used.
    """
    mapping = mapping_for(supplier)
    hotel_id = extract_hotel_id(record, mapping)
    if hotel_id is None:
        logger.warning(
            "Skipping hotel with missing ID from %s",
            supplier.name if supplier is not None else "unconfigured supplier",
        )
        return None

    return Hotel(
        id=hotel_id,
        destination_id=extract_destination_id(record, mapping),
        name=_to_text(extract_field(record, mapping.name)),
        description=_to_text(extract_field(record, mapping.description)),
        location=_extract_location(record, mapping),
        amenities=_extract_amenities(record, mapping),
        images=_extract_images(record, mapping),
        booking_conditions=_extract_booking_conditions(record, mapping),
    )


def normalize_hotels(records: Iterable[Dict[str, Any]], supplier: Optional[SupplierConfig] = None) -> List[Hotel]:
    hotels: List[Hotel] = []
    for record in records:
        hotel = normalize_hotel(record, supplier)
        if hotel is not None:
            hotels.append(hotel)
    return hotels
