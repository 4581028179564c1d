"""Filtering and paging over a merged hotel list."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import FrozenSet, List, Optional, Sequence

from .models import Hotel

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 10


def _split(value: Optional[str]) -> List[str]:
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]


def _parse_int(value: Optional[str]) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        return int(str(value).strip())
    except ValueError:
        return None


@dataclass(frozen=True)
class HotelQuery:
    """Filters by hotel/destination ids followed by optional paging."""

    hotel_ids: FrozenSet[str] = frozenset()
    destination_ids: FrozenSet[int] = frozenset()
    items_per_page: Optional[int] = None
    page_number: Optional[int] = None

    @classmethod
    def from_params(
        cls,
        *,
        hotel_ids: Optional[str] = None,
        destination_ids: Optional[str] = None,
        items_per_page: Optional[str] = None,
        page_number: Optional[str] = None,
    ) -> "HotelQuery":
        """Parse comma-separated query-string style values; invalid numbers are ignored."""
        parsed_destinations = (_parse_int(part) for part in _split(destination_ids))
        return cls(
            hotel_ids=frozenset(part.lower() for part in _split(hotel_ids)),
            destination_ids=frozenset(value for value in parsed_destinations if value is not None),
            items_per_page=_parse_int(items_per_page),
            page_number=_parse_int(page_number),
        )

    def apply(self, hotels: Sequence[Hotel]) -> List[Hotel]:
        result = list(hotels)

        if self.hotel_ids:
            result = [hotel for hotel in result if hotel.id.lower() in self.hotel_ids]
            logger.info("Filtered by hotel IDs: %s", ", ".join(sorted(self.hotel_ids)))

        if self.destination_ids:
            result = [hotel for hotel in result if hotel.destination_id in self.destination_ids]
            logger.info("Filtered by destination IDs: %s", ", ".join(str(i) for i in sorted(self.destination_ids)))

        if self.page_number is None:
            if self.items_per_page is not None and self.items_per_page > 0:
                result = result[: self.items_per_page]
                logger.info("Returning first %s hotels", self.items_per_page)
            return result

        if self.page_number <= 0:
            logger.warning("Invalid page number: %s", self.page_number)
            return result

        page_size = self.items_per_page if self.items_per_page and self.items_per_page > 0 else DEFAULT_PAGE_SIZE
        start = (self.page_number - 1) * page_size
        logger.info("Returning hotels for page %s with %s items per page", self.page_number, page_size)
        return result[start : start + page_size]
