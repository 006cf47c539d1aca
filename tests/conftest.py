# This project was developed with assistance from AI tools.
"""Shared fixtures: a small in-memory property catalog."""

import pytest

from seller_finance.schemas.property import Property


def _unit(property_id: str, price: float, delivery: str) -> Property:
    return Property(
        id=property_id,
        project_name="Gaziantep Park",
        city="Gaziantep",
        district="Sehitkamil",
        room_layout="3+1",
        area_sqm=120,
        delivery_duration=delivery,
        cash_price=price,
    )


@pytest.fixture
def main_property() -> Property:
    return _unit("GZP-H04-001", 1_000_000, "18 months")


@pytest.fixture
def catalog(main_property) -> list[Property]:
    """With 2 % monthly, no down payment and 24 installments the unit prices
    give installments of roughly 52,871 / 40,182 / 39,653 / 37,010 / 105,742."""
    return [
        main_property,
        _unit("GZP-H04-002", 760_000, "12 months"),
        _unit("GZP-H05-003", 750_000, "24 months"),
        _unit("GZP-H06-004", 700_000, "6 ay"),
        _unit("GZP-H07-005", 2_000_000, "36 months"),
    ]
