"""Hotel domain models, normalisation and merge helpers."""

from .merge import extract_available_ids, merge_hotel, merge_hotels
from .models import (
    Amenities,
    AvailableIds,
    Hotel,
    Image,
    Images,
    Location,
)
from .normalizer import normalize_hotel, normalize_hotels
from .paths import MISSING, extract_field, resolve_path
from .query import HotelQuery

__all__ = [
    "Amenities",
    "AvailableIds",
    "Hotel",
    "HotelQuery",
    "Image",
    "Images",
    "Location",
    "MISSING",
    "extract_available_ids",
    "extract_field",
    "merge_hotel",
    "merge_hotels",
    "normalize_hotel",
    "normalize_hotels",
    "resolve_path",
]
