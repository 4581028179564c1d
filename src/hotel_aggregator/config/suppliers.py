"""Supplier endpoints and the field mappings used to read their payloads."""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple

Paths = Tuple[str, ...]


def _paths(value: object, *, attribute: str) -> Paths:
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,)
    if isinstance(value, (list, tuple)):
        return tuple(str(item) for item in value if str(item))
    raise ValueError(f"Field mapping '{attribute}' must be a path or a list of paths")


@dataclass(frozen=True)
class LocationMapping:
    lat: Paths = ()
    lng: Paths = ()
    address: Paths = ()
    city: Paths = ()
    country: Paths = ()


@dataclass(frozen=True)
class ImageMapping:
    rooms: Paths = ()
    site: Paths = ()
    amenities: Paths = ()


@dataclass(frozen=True)
class FieldMapping:
    """Ordered candidate paths for each canonical hotel attribute."""

    hotel_id: Paths = ()
    destination_id: Paths = ()
    name: Paths = ()
    description: Paths = ()
    amenities: Paths = ()
    location: LocationMapping = field(default_factory=LocationMapping)
    images: ImageMapping = field(default_factory=ImageMapping)
    booking_conditions: Paths = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "FieldMapping":
        location = data.get("location") or {}
        images = data.get("images") or {}
        return cls(
            hotel_id=_paths(data.get("hotel_id"), attribute="hotel_id"),
            destination_id=_paths(data.get("destination_id"), attribute="destination_id"),
            name=_paths(data.get("name"), attribute="name"),
            description=_paths(data.get("description"), attribute="description"),
            amenities=_paths(data.get("amenities"), attribute="amenities"),
            location=LocationMapping(
                **{key: _paths(location.get(key), attribute=f"location.{key}") for key in ("lat", "lng", "address", "city", "country")}
            ),
            images=ImageMapping(
                **{key: _paths(images.get(key), attribute=f"images.{key}") for key in ("rooms", "site", "amenities")}
            ),
            booking_conditions=_paths(data.get("booking_conditions"), attribute="booking_conditions"),
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "hotel_id": list(self.hotel_id),
            "destination_id": list(self.destination_id),
            "name": list(self.name),
            "description": list(self.description),
            "amenities": list(self.amenities),
            "location": {
                "lat": list(self.location.lat),
                "lng": list(self.location.lng),
                "address": list(self.location.address),
                "city": list(self.location.city),
                "country": list(self.location.country),
            },
            "images": {
                "rooms": list(self.images.rooms),
                "site": list(self.images.site),
                "amenities": list(self.images.amenities),
            },
            "booking_conditions": list(self.booking_conditions),
        }


@dataclass(frozen=True)
class SupplierConfig:
    """A supplier endpoint together with the mapping for its payload shape."""

    name: str
    url: str
    field_mapping: FieldMapping

    def to_dict(self) -> dict[str, object]:
        return {"name": self.name, "url": self.url, "field_mapping": self.field_mapping.to_dict()}


# Conventional key names tried when a record comes from an unconfigured supplier.
FALLBACK_FIELD_MAPPING = FieldMapping(
    hotel_id=("id", "Id", "hotel_id"),
    destination_id=("destination_id", "destination", "DestinationId"),
    name=("name", "hotel_name", "Name"),
    description=("description", "details", "info", "Description"),
    amenities=("amenities", "facilities", "Facilities"),
    location=LocationMapping(
        lat=("location.lat", "location.latitude", "address.lat", "address.latitude", "lat", "Latitude"),
        lng=("location.lng", "location.longitude", "address.lng", "address.longitude", "lng", "Longitude"),
        address=("location.address", "location.street_address", "address.address", "address.street_address", "Address"),
        city=("location.city", "address.city", "City"),
        country=("location.country", "address.country", "Country"),
    ),
    images=ImageMapping(
        rooms=("images.rooms", "images.room", "pictures.rooms", "pictures.room"),
        site=("images.site", "images.exterior", "pictures.site", "pictures.exterior"),
        amenities=("images.amenities", "images.facilities", "pictures.amenities", "pictures.facilities"),
    ),
    booking_conditions=("booking_conditions", "terms"),
)

_MOCK_API = "https://5f2be0b4ffc88500167b85a0.mockapi.io/suppliers"

DEFAULT_SUPPLIERS: Tuple[SupplierConfig, ...] = (
    SupplierConfig(
        name="acme",
        url=f"{_MOCK_API}/acme",
        field_mapping=FieldMapping(
            hotel_id=("Id",),
            destination_id=("DestinationId",),
            name=("Name",),
            description=("Description",),
            amenities=("Facilities",),
            location=LocationMapping(
                lat=("Latitude",),
                lng=("Longitude",),
                address=("Address",),
                city=("City",),
                country=("Country",),
            ),
        ),
    ),
    SupplierConfig(
        name="patagonia",
        url=f"{_MOCK_API}/patagonia",
        field_mapping=FieldMapping(
            hotel_id=("id",),
            destination_id=("destination",),
            name=("name",),
            description=("info",),
            amenities=("amenities",),
            location=LocationMapping(lat=("lat",), lng=("lng",), address=("address",)),
            images=ImageMapping(rooms=("images.rooms",), site=("images.site",), amenities=("images.amenities",)),
        ),
    ),
    SupplierConfig(
        name="paperflies",
        url=f"{_MOCK_API}/paperflies",
        field_mapping=FieldMapping(
            hotel_id=("hotel_id",),
            destination_id=("destination_id",),
            name=("hotel_name",),
            description=("details",),
            amenities=("amenities",),
            location=LocationMapping(address=("location.address",), country=("location.country",)),
            images=ImageMapping(rooms=("images.rooms",), site=("images.site",), amenities=("images.amenities",)),
            booking_conditions=("booking_conditions",),
        ),
    ),
)


class SupplierRegistry(Mapping[str, SupplierConfig]):
    """Read-only, ordered lookup of supplier configuration by name."""

    def __init__(self, suppliers: Iterable[SupplierConfig], *, source: Optional[Path] = None) -> None:
        entries: dict[str, SupplierConfig] = {}
        for supplier in suppliers:
            if supplier.name in entries:
                raise ValueError(f"Duplicate supplier name '{supplier.name}'")
            entries[supplier.name] = supplier
        self._suppliers = entries
        self._source = source

    @property
    def source(self) -> Optional[Path]:
        return self._source

    def __getitem__(self, name: str) -> SupplierConfig:
        try:
            return self._suppliers[name]
        except KeyError as exc:
            known = ", ".join(self._suppliers)
            raise KeyError(f"Supplier '{name}' is not configured. Known suppliers: {known}") from exc

    def __iter__(self) -> Iterator[str]:
        return iter(self._suppliers)

    def __len__(self) -> int:
        return len(self._suppliers)

    def configs(self) -> List[SupplierConfig]:
        return list(self._suppliers.values())

    def select(self, names: Sequence[str]) -> "SupplierRegistry":
        return SupplierRegistry((self[name] for name in names), source=self._source)

    @classmethod
    def default(cls) -> "SupplierRegistry":
        return cls(DEFAULT_SUPPLIERS)

    @classmethod
    def load(cls, path: Path) -> "SupplierRegistry":
        if not path.exists():
            raise FileNotFoundError(f"Supplier table not found at {path}")
        data = json.loads(path.read_text())
        suppliers: list[SupplierConfig] = []
        for entry in data.get("suppliers", []):
            try:
                name = entry["name"]
                url = entry["url"]
            except KeyError as exc:
                raise ValueError(f"Supplier entry in {path} is missing {exc.args[0]!r}") from exc
            suppliers.append(
                SupplierConfig(
                    name=name,
                    url=url,
                    field_mapping=FieldMapping.from_dict(entry.get("field_mapping") or {}),
                )
            )
        return cls(suppliers, source=path)

    def dump(self, path: Path) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps({"suppliers": [supplier.to_dict() for supplier in self.configs()]}, indent=2))
        return path
