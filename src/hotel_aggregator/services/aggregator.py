"""High-level hotel aggregation: fetch, merge and query in one place."""
from __future__ import annotations

import logging
from typing import List, Optional

from hotel_aggregator.config.suppliers import SupplierRegistry
from hotel_aggregator.hotels import AvailableIds, Hotel, HotelQuery, extract_available_ids, merge_hotels

from .supplier_client import SupplierClient, SupplierDataMap

logger = logging.getLogger(__name__)


class HotelAggregator:
    def __init__(self, registry: SupplierRegistry, client: SupplierClient) -> None:
        self.registry = registry
        self.client = client

    async def fetch(self) -> SupplierDataMap:
        return await self.client.fetch_all(self.registry.configs())

    async def hotels(self, query: Optional[HotelQuery] = None) -> List[Hotel]:
        logger.info("Fetching hotels from all suppliers")
        merged = merge_hotels(await self.fetch(), self.registry)
        hotels = query.apply(merged) if query is not None else merged
        logger.info("Returning %s hotels", len(hotels))
        return hotels

    async def available_ids(self) -> AvailableIds:
        logger.info("Fetching available hotel and destination IDs")
        return extract_available_ids(await self.fetch(), self.registry)

    def suppliers(self) -> List[dict[str, object]]:
        return [supplier.to_dict() for supplier in self.registry.configs()]
