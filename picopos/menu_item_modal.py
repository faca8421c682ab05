"""Create/edit form for a menu item."""

from __future__ import annotations

from typing import Any

from textual.app import ComposeResult
from textual.containers import Container
from textual.screen import ModalScreen
from textual.widgets import Input, Static

from picopos.constant import CATEGORY_LABELS
from picopos.models import MenuItem

_FIELDS = ("name", "category", "price", "cost", "stock")


class MenuItemModal(ModalScreen[dict[str, Any] | None]):
    """Collect menu item fields; Enter on the last field saves, Esc cancels."""

    BINDINGS = [("escape", "cancel", "Cancel")]

    CSS = """
    MenuItemModal {
        align: center middle;
        background: $background 60%;
    }

    #item-dialog {
        width: 60;
        height: auto;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #item-title {
        text-style: bold;
        margin-bottom: 1;
    }

    #item-help {
        color: #dddddd;
    }
    """

    def __init__(self, item: MenuItem | None = None) -> None:
        super().__init__()
        self.item = item

    def compose(self) -> ComposeResult:
        item = self.item
        with Container(id="item-dialog"):
            yield Static("Edit item" if item else "New item", id="item-title")
            yield Input(value=item.name if item else "", placeholder="Name", id="item-name")
            yield Input(
                value=item.category if item else "coffee",
                placeholder=" / ".join(CATEGORY_LABELS),
                id="item-category",
            )
            yield Input(value=str(item.price) if item else "", placeholder="Price", id="item-price")
            yield Input(value=str(item.cost) if item else "", placeholder="Cost", id="item-cost")
            yield Input(value=str(item.stock) if item else "", placeholder="Stock", id="item-stock")
            yield Static("Enter next/save, Esc cancel", id="item-help")

    def on_input_submitted(self, event: Input.Submitted) -> None:
        field_name = (event.input.id or "").removeprefix("item-")
        if field_name not in _FIELDS:
            return
        if field_name != _FIELDS[-1]:
            self.query_one(f"#item-{_FIELDS[_FIELDS.index(field_name) + 1]}", Input).focus()
            return
        self.dismiss(self.values())

    def values(self) -> dict[str, Any]:
        raw = {name: self.query_one(f"#item-{name}", Input).value.strip() for name in _FIELDS}
        return {
            "item_id": self.item.item_id if self.item else None,
            "name": raw["name"],
            "category": raw["category"] or None,
            "price": raw["price"] or None,
            "cost": raw["cost"] or None,
            "stock": raw["stock"] or None,
        }

    def action_cancel(self) -> None:
        self.dismiss(None)
