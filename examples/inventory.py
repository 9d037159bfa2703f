"""
Vehicle Inventory Example
=========================

Demonstrates:
- Tagged records with automatic describe/from_payload
- Subtype dispatch through independent registry entries
- Core additions for dates and decimals
- JSON round trip and the lenient unknown-tag policy
"""

from datetime import date
from decimal import Decimal
from typing import Any

from tagcodec import (
    CodecConfig,
    TypeRegistry,
    UnknownTagPolicy,
    add_core_types,
    from_json,
    register_records,
    tagged,
    to_json,
)


# ============================================================================
# Define Records
# ============================================================================

@tagged("Car")
class Car:
    """A car with a model year."""
    wheels: int
    year: int


@tagged("Bike")
class Bike:
    """A bike with a country of manufacture."""
    wheels: int
    country: str


@tagged("Listing")
class Listing:
    """A vehicle offered for sale."""
    vehicle: Car | Bike
    price: Decimal
    listed_on: date


# ============================================================================
# Build the Registry
# ============================================================================

def build_registry() -> TypeRegistry:
    """Registry with the inventory records and the types they use."""
    registry = add_core_types(TypeRegistry(), date, Decimal)
    return register_records(registry, Car, Bike, Listing).freeze()


def sample_listings() -> list[Any]:
    return [
        Listing(Car(4, 2023), Decimal("18999.00"), date(2024, 3, 1)),
        Listing(Bike(2, "Japan"), Decimal("450.50"), date(2024, 3, 9)),
    ]


# ============================================================================
# Usage
# ============================================================================

if __name__ == "__main__":
    registry = build_registry()

    text = to_json(sample_listings(), registry)
    print(text)

    restored = from_json(text, registry)
    assert restored == sample_listings()
    for listing in restored:
        print(f"{type(listing.vehicle).__name__}: {listing.price} since {listing.listed_on}")

    # Documents from newer producers may carry tags this registry lacks
    lenient = CodecConfig(unknown_tags=UnknownTagPolicy.LENIENT)
    mixed = '[{"json_class": "Truck", "data": {"wheels": 18}}]'
    print(from_json(mixed, registry, lenient))
