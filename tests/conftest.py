from __future__ import annotations

from decimal import Decimal

import pytest

from picopos.ledger import Ledger
from picopos.models import MenuItem, StoreProfile, Table


def make_item(item_id: str, price: str = "3.50", stock: int = 10, cost: str = "1.00", category: str = "coffee") -> MenuItem:
    return MenuItem(
        item_id=item_id,
        name=f"Item {item_id}",
        category=category,
        price=Decimal(price),
        cost=Decimal(cost),
        stock=stock,
    )


@pytest.fixture
def profile() -> StoreProfile:
    return StoreProfile(
        name="Pico Cafe",
        location="Global Branch",
        currency="USD",
        tax_rate=Decimal("8"),
        pan_number="987-654-321",
    )


@pytest.fixture
def menu() -> list[MenuItem]:
    return [
        make_item("1", price="3.50", stock=2, cost="0.80"),
        make_item("2", price="4.50", stock=5, cost="1.20"),
        make_item("3", price="7.00", stock=0, cost="2.50", category="dessert"),
    ]


@pytest.fixture
def ledger(profile: StoreProfile, menu: list[MenuItem]) -> Ledger:
    tables = [Table(table_id=1, label="T-1", x=5, y=5), Table(table_id=2, label="T-2", x=25, y=5)]
    return Ledger(profile, menu=menu, tables=tables)
