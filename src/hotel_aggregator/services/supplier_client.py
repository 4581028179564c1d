"""Concurrent retrieval of raw hotel payloads from supplier endpoints."""
from __future__ import annotations

import asyncio
import logging
from functools import partial
from typing import Any, Dict, List, Optional, Sequence

import httpx

from hotel_aggregator.config.suppliers import SupplierConfig

from .retry import RetryPolicy, Sleep, is_retryable_http_error, retry_async

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_S = 10.0

SupplierDataMap = Dict[str, List[Dict[str, Any]]]


class SupplierFetchError(RuntimeError):
    """Raised when a supplier's payload cannot be used."""

    def __init__(self, supplier: str, message: str) -> None:
        super().__init__(f"{supplier}: {message}")
        self.supplier = supplier


def _records_from_payload(supplier: str, payload: Any) -> List[Dict[str, Any]]:
    if payload is None:
        return []
    if not isinstance(payload, list):
        logger.warning("Supplier %s returned %s instead of a list; ignoring payload", supplier, type(payload).__name__)
        return []
    records = [entry for entry in payload if isinstance(entry, dict)]
    dropped = len(payload) - len(records)
    if dropped:
        logger.warning("Dropped %s non-object entries from %s", dropped, supplier)
    return records


class SupplierClient:
    """Fetches every configured supplier concurrently, each with its own retry loop."""

    def __init__(
        self,
        *,
        timeout: float = DEFAULT_TIMEOUT_S,
        retry_policy: Optional[RetryPolicy] = None,
        client: Optional[httpx.AsyncClient] = None,
        headers: Optional[Dict[str, str]] = None,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        default_headers = {
            "Accept": "application/json",
            "User-Agent": "hotel-aggregator/0.1.0",
        }
        if headers:
            default_headers.update(headers)
        self._headers = default_headers
        self._timeout = timeout
        self._client = client
        self._sleep = sleep
        self.retry_policy = retry_policy or RetryPolicy()

    def _open_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self._timeout, headers=self._headers, follow_redirects=True)

    async def _get_records(self, client: httpx.AsyncClient, supplier: SupplierConfig) -> List[Dict[str, Any]]:
        response = await client.get(supplier.url, timeout=self._timeout)
        response.raise_for_status()
        if not response.content.strip():
            return []
        try:
            payload = response.json()
        except ValueError as exc:
            raise SupplierFetchError(supplier.name, f"invalid JSON body ({exc})") from exc
        return _records_from_payload(supplier.name, payload)

    async def _fetch_with(self, client: httpx.AsyncClient, supplier: SupplierConfig) -> List[Dict[str, Any]]:
        logger.info("Fetching hotels from supplier: %s", supplier.name)
        try:
            records = await retry_async(
                partial(self._get_records, client, supplier),
                policy=self.retry_policy,
                is_retryable=partial(is_retryable_http_error, policy=self.retry_policy),
                sleep=self._sleep,
                label=f"Fetch from {supplier.name}",
            )
        except (httpx.HTTPError, SupplierFetchError) as exc:
            logger.error("Failed to fetch hotels from %s: %s", supplier.name, exc)
            return []
        logger.info("Successfully fetched %s hotels from %s", len(records), supplier.name)
        return records

    async def fetch_supplier(self, supplier: SupplierConfig) -> List[Dict[str, Any]]:
        """Fetch one supplier; failures resolve to an empty list."""
        if self._client is not None:
            return await self._fetch_with(self._client, supplier)
        async with self._open_client() as client:
            return await self._fetch_with(client, supplier)

    async def fetch_all(self, suppliers: Sequence[SupplierConfig]) -> SupplierDataMap:
        """Fetch all suppliers concurrently and key the results by supplier name."""
        if self._client is not None:
            results = await self._gather(self._client, suppliers)
        else:
            async with self._open_client() as client:
                results = await self._gather(client, suppliers)

        data: SupplierDataMap = {}
        for supplier, result in zip(suppliers, results):
            if isinstance(result, BaseException):
                if not isinstance(result, Exception):
                    raise result
                logger.error("Unexpected failure fetching %s", supplier.name, exc_info=result)
                result = []
            data[supplier.name] = result
        logger.info("Completed fetching from %s suppliers", len(suppliers))
        return data

    async def _gather(self, client: httpx.AsyncClient, suppliers: Sequence[SupplierConfig]) -> list:
        return await asyncio.gather(
            *(self._fetch_with(client, supplier) for supplier in suppliers),
            return_exceptions=True,
        )
