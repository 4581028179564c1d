"""Run one aggregation cycle across all configured suppliers."""
from __future__ import annotations

import argparse
import asyncio
import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from hotel_aggregator.config.settings import Settings
from hotel_aggregator.core.logging import configure_logging
from hotel_aggregator.hotels import HotelQuery
from hotel_aggregator.services import HotelAggregator, SupplierClient
from hotel_aggregator.storage import JsonStore

logger = logging.getLogger("aggregate_hotels")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Fetch, normalise and merge hotel data from suppliers")
    parser.add_argument("--suppliers", type=Path, help="JSON supplier table overriding the built-in one")
    parser.add_argument("--only", help="Comma-separated supplier names to fetch")
    parser.add_argument("--hotel-ids", help="Comma-separated hotel ids (case-insensitive)")
    parser.add_argument("--destination-ids", help="Comma-separated destination ids")
    parser.add_argument("--items-per-page")
    parser.add_argument("--page-number")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--ids", action="store_true", help="List available hotel and destination ids")
    mode.add_argument("--list-suppliers", action="store_true", help="Print the supplier table and exit")
    parser.add_argument("--output", type=Path, help="Write a JSON snapshot here instead of printing")
    parser.add_argument("--log-level")
    return parser


def _emit(payload: object, output: Optional[Path]) -> None:
    if output is None:
        print(json.dumps(payload, indent=2, ensure_ascii=False))
        return
    store = JsonStore(output.parent)
    data = {"items": payload} if isinstance(payload, list) else payload
    path = store.write(data, filename=output.name)
    logger.info("Wrote snapshot to %s", path)


async def run(args: argparse.Namespace, settings: Settings) -> None:
    registry = settings.supplier_registry()
    client = SupplierClient(timeout=settings.supplier_timeout_s, retry_policy=settings.retry_policy())
    aggregator = HotelAggregator(registry, client)

    if args.list_suppliers:
        _emit({"suppliers": aggregator.suppliers()}, args.output)
        return

    if args.ids:
        ids = await aggregator.available_ids()
        _emit(ids.to_dict(), args.output)
        return

    query = HotelQuery.from_params(
        hotel_ids=args.hotel_ids,
        destination_ids=args.destination_ids,
        items_per_page=args.items_per_page,
        page_number=args.page_number,
    )
    started = datetime.now()
    hotels = await aggregator.hotels(query)
    logger.info("Aggregation finished in %.2fs", (datetime.now() - started).total_seconds())
    _emit([hotel.to_dict() for hotel in hotels], args.output)


def main() -> None:
    args = _build_parser().parse_args()
    overrides: dict[str, object] = {}
    if args.suppliers:
        overrides["suppliers_path"] = args.suppliers
    if args.only:
        overrides["supplier_names"] = args.only
    if args.log_level:
        overrides["log_level"] = args.log_level
    settings = Settings(**overrides)
    configure_logging(settings.log_level, settings.log_dir)
    asyncio.run(run(args, settings))


if __name__ == "__main__":
    main()
