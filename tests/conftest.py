from __future__ import annotations

from typing import Any

import pytest

from hotel_aggregator.config.suppliers import SupplierRegistry


@pytest.fixture
def registry() -> SupplierRegistry:
    return SupplierRegistry.default()


@pytest.fixture
def supplier_payloads() -> dict[str, list[dict[str, Any]]]:
    return {
        "acme": [
            {
                "Id": "iJhz",
                "DestinationId": 5432,
                "Name": "Beach Villas Singapore",
                "Latitude": 1.264751,
                "Longitude": 103.824006,
                "Address": " 8 Sentosa Gateway, Beach Villas ",
                "City": "Singapore",
                "Country": "SG",
                "PostalCode": "098269",
                "Description": "  This 5 star hotel is located on the coastline of Singapore.",
                "Facilities": ["Pool", "BusinessCenter", "WiFi ", "DryCleaning", " Breakfast"],
            },
            {
                "Id": "f8c9",
                "DestinationId": 1122,
                "Name": "Hilton Shinjuku",
                "Latitude": 35.6926,
                "Longitude": 139.690965,
                "Address": "160-0023, SHINJUKU-KU, 6-6-2 NISHI-SHINJUKU, JAPAN",
                "City": "Tokyo",
                "Country": "JP",
                "Description": "Hilton Tokyo is located in Shinjuku.",
                "Facilities": ["Pool", "WiFi", "BathTub", "1", "a"],
            },
        ],
        "patagonia": [
            {
                "id": "iJhz",
                "destination": 5432,
                "name": "Beach Villas Singapore",
                "lat": 1.264751,
                "lng": 103.824006,
                "address": "8 Sentosa Gateway, Beach Villas",
                "info": "Located at the western tip of Resorts World Sentosa, guests at the Beach Villas are guaranteed privacy.",
                "amenities": ["Aircon", "Tv", "Coffee machine", "Kettle", "Hair dryer", "Iron", "Tub"],
                "images": {
                    "rooms": [
                        {"url": "https://d2ey9sqrvkqdfs.cloudfront.net/0qZF/2.jpg", "description": "Double room"},
                        {"url": "https://d2ey9sqrvkqdfs.cloudfront.net/0qZF/3.jpg", "description": "Double room"},
                    ],
                    "amenities": [
                        {"url": "https://d2ey9sqrvkqdfs.cloudfront.net/0qZF/0.jpg", "description": "RWS"},
                    ],
                },
            },
        ],
        "paperflies": [
            {
                "hotel_id": "iJhz",
                "destination_id": 5432,
                "hotel_name": "Beach Villas Singapore",
                "location": {"address": "8 Sentosa Gateway, Beach Villas, 098269", "country": "Singapore"},
                "details": "Surrounded by tropical gardens, these upscale villas in elegant Colonial-style buildings are part of the Resorts World Sentosa complex.",
                "amenities": {
                    "general": ["outdoor pool", "indoor pool", "business center", "childcare"],
                    "room": ["tv", "coffee machine", "kettle", "hair dryer", "iron"],
                },
                "images": {
                    "rooms": [
                        {"link": "https://d2ey9sqrvkqdfs.cloudfront.net/0qZF/2.jpg", "caption": "Double room (alt)"},
                        {"link": "https://d2ey9sqrvkqdfs.cloudfront.net/0qZF/4.jpg", "caption": "Bathroom"},
                    ],
                    "site": [
                        {"link": "https://d2ey9sqrvkqdfs.cloudfront.net/0qZF/1.jpg", "caption": "Front"},
                    ],
                },
                "booking_conditions": [
                    "All children are welcome.",
                    "Pets are not allowed.",
                ],
            },
            {
                "hotel_id": "SjyX",
                "destination_id": 5432,
                "hotel_name": "InterContinental",
                "location": {"address": "1 Nanson Road, Singapore 238909", "country": "Singapore"},
                "details": "Enjoy sophisticated waterfront living at the new InterContinental Singapore Robertson Quay.",
                "amenities": {"general": ["outdoor pool", "business center"], "room": ["aircon", "minibar"]},
                "images": {"rooms": [], "site": []},
                "booking_conditions": ["Pets are not allowed."],
            },
        ],
    }
