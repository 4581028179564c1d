"""Fold normalised hotels from several suppliers into one catalogue."""
from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, TypeVar

from hotel_aggregator.config.suppliers import SupplierConfig

from .models import Amenities, AvailableIds, Hotel, Image, Images, Location
from .normalizer import extract_destination_id, extract_hotel_id, mapping_for, normalize_hotel

logger = logging.getLogger(__name__)

T = TypeVar("T")

SupplierData = Mapping[str, Sequence[Mapping[str, Any]]]


def choose_longest(existing: str, incoming: str) -> str:
    """Prefer the longer string; ties keep ``existing``."""
    if not existing:
        return incoming
    if not incoming:
        return existing
    return existing if len(existing) >= len(incoming) else incoming


def _first_nonzero(existing: T, incoming: T) -> T:
    # 0 marks an unknown id or coordinate.
    return existing if existing != 0 else incoming


def merge_unique(existing: Iterable[T], incoming: Iterable[T]) -> List[T]:
    merged: List[T] = []
    seen: set = set()
    for item in (*existing, *incoming):
        if item in seen:
            continue
        seen.add(item)
        merged.append(item)
    return merged


def merge_images(existing: Iterable[Image], incoming: Iterable[Image]) -> List[Image]:
    merged = list(existing)
    links = {image.link for image in merged}
    for image in incoming:
        if image.link in links:
            continue
        links.add(image.link)
        merged.append(image)
    return merged


def merge_hotel(existing: Hotel, incoming: Hotel) -> Hotel:
    """Combine two records of the same hotel; ``existing`` wins ties."""
    return Hotel(
        id=existing.id,
        destination_id=_first_nonzero(existing.destination_id, incoming.destination_id),
        name=choose_longest(existing.name, incoming.name),
        description=choose_longest(existing.description, incoming.description),
        location=Location(
            lat=_first_nonzero(existing.location.lat, incoming.location.lat),
            lng=_first_nonzero(existing.location.lng, incoming.location.lng),
            address=choose_longest(existing.location.address, incoming.location.address),
            city=choose_longest(existing.location.city, incoming.location.city),
            country=choose_longest(existing.location.country, incoming.location.country),
        ),
        amenities=Amenities(
            general=merge_unique(existing.amenities.general, incoming.amenities.general),
            room=merge_unique(existing.amenities.room, incoming.amenities.room),
        ),
        images=Images(
            rooms=merge_images(existing.images.rooms, incoming.images.rooms),
            site=merge_images(existing.images.site, incoming.images.site),
            amenities=merge_images(existing.images.amenities, incoming.images.amenities),
        ),
        booking_conditions=merge_unique(existing.booking_conditions, incoming.booking_conditions),
    )


def _supplier_for(name: str, suppliers: Mapping[str, SupplierConfig]) -> Optional[SupplierConfig]:
    supplier = suppliers.get(name)
    if supplier is None:
        logger.debug("No configuration for supplier %s; using fallback field names", name)
    return supplier


def merge_hotels(supplier_data: SupplierData, suppliers: Mapping[str, SupplierConfig]) -> List[Hotel]:
    """Normalise every record and merge those sharing an id.

    Suppliers are processed in mapping order; output follows the order in which
    each id was first seen.
    """
    merged: Dict[str, Hotel] = {}

    for supplier_name, records in supplier_data.items():
        logger.info("Processing %s hotels from %s", len(records), supplier_name)
        supplier = _supplier_for(supplier_name, suppliers)
        for record in records:
            try:
                hotel = normalize_hotel(record, supplier)
                if hotel is None:
                    continue
                current = merged.get(hotel.id)
                merged[hotel.id] = hotel if current is None else merge_hotel(current, hotel)
            except Exception:
                logger.exception("Failed to merge a hotel record from %s", supplier_name)

    hotels = list(merged.values())
    logger.info("Merged data resulted in %s unique hotels", len(hotels))
    return hotels


def extract_available_ids(supplier_data: SupplierData, suppliers: Mapping[str, SupplierConfig]) -> AvailableIds:
    """Collect every resolvable hotel id and non-zero destination id."""
    hotel_ids: set[str] = set()
    destination_ids: set[int] = set()

    for supplier_name, records in supplier_data.items():
        logger.info("Extracting IDs from %s hotels from %s", len(records), supplier_name)
        mapping = mapping_for(_supplier_for(supplier_name, suppliers))
        for record in records:
            hotel_id = extract_hotel_id(record, mapping)
            if hotel_id is not None:
                hotel_ids.add(hotel_id)
            destination_id = extract_destination_id(record, mapping)
            if destination_id != 0:
                destination_ids.add(destination_id)

    result = AvailableIds(hotel_ids=sorted(hotel_ids), destination_ids=sorted(destination_ids))
    logger.info(
        "Extracted %s unique hotel IDs and %s unique destination IDs",
        len(result.hotel_ids),
        len(result.destination_ids),
    )
    return result
