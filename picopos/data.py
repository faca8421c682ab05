"""Seed menu, floor plan and profile data wrapped into domain models."""

from __future__ import annotations

from picopos.constant import CATEGORY_LABELS, MENU_SEED, PROFILE_PRESETS, TABLE_SEED
from picopos.models import MenuItem, StoreProfile, Table, to_money


def category_label(category: str) -> str:
    """Get the display label for a category key."""
    return CATEGORY_LABELS.get(category, category.title())


def seed_menu() -> list[MenuItem]:
    """Build a fresh copy of the starting catalog."""
    return [
        MenuItem(
            item_id=str(raw["id"]),
            name=str(raw["name"]),
            category=str(raw["category"]),
            price=to_money(raw["price"]),
            cost=to_money(raw["cost"]),
            stock=int(raw["stock"]),
            color=str(raw["color"]),
            image=str(raw["image"]),
        )
        for raw in MENU_SEED
    ]


def seed_tables() -> list[Table]:
    """Build a fresh copy of the starting floor plan, all tables empty."""
    return [Table(table_id=table_id, label=label, x=x, y=y) for table_id, label, x, y in TABLE_SEED]


def profile_for_login(email: str) -> StoreProfile:
    """Pick the store profile for a login address; `demo` accounts get the demo store."""
    preset = PROFILE_PRESETS["demo" if "demo" in email else "default"]
    return StoreProfile(
        name=str(preset["name"]),
        location=str(preset["location"]),
        currency=str(preset["currency"]),
        tax_rate=to_money(preset["tax_rate"]),
        pan_number=str(preset["pan_number"]),
        settlement_account=str(preset["settlement_account"]),
        logo_icon=str(preset["logo_icon"]),
        theme_color=str(preset["theme_color"]),
    )
