from __future__ import annotations

from decimal import Decimal

from picopos.constant import CATEGORY_LABELS
from picopos.data import category_label, profile_for_login, seed_menu, seed_tables


def test_seed_menu_is_well_formed():
    menu = seed_menu()
    assert len({item.item_id for item in menu}) == len(menu)
    assert all(item.category in CATEGORY_LABELS for item in menu)
    assert all(item.price >= 0 and item.cost >= 0 and item.stock >= 0 for item in menu)
    assert menu[0].price == Decimal("3.50")


def test_seed_lists_are_fresh_copies():
    tables = seed_tables()
    tables[0].status = "occupied"
    assert seed_tables()[0].status == "empty"


def test_profile_for_login():
    demo = profile_for_login("owner+demo@cafe.test")
    assert demo.name == "Blue Bottle Demo"
    assert demo.currency == "KRW"
    assert demo.tax_rate == Decimal("10")

    default = profile_for_login("someone@cafe.test")
    assert default.name == "Pico Cafe"
    assert default.tax_rate == Decimal("8")


def test_category_label():
    assert category_label("dessert") == "Dessert"
    assert category_label("brunch") == "Brunch"
