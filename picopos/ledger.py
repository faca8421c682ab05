"""In-memory owner of the menu, floor plan, open cart and order log."""

from __future__ import annotations

import logging
import threading
from dataclasses import fields, replace
from datetime import datetime
from decimal import Decimal
from uuid import uuid4

from picopos import cart as cart_ops
from picopos.constant import CATEGORY_LABELS, CURRENCIES, DEFAULT_ITEM_COLOR, DEFAULT_ITEM_IMAGE, LOGO_ICONS
from picopos.data import seed_menu, seed_tables
from picopos.models import (
    TABLE_EMPTY,
    TABLE_OCCUPIED,
    CartLine,
    MenuItem,
    Order,
    SalesSummary,
    StoreProfile,
    Table,
    to_money,
)
from picopos.reporting import completed_orders, summarize

logger = logging.getLogger(__name__)

FLOOR_MIN_PCT = 0.0
FLOOR_MAX_PCT = 90.0


def _to_stock(value: int | str) -> int:
    try:
        count = int(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Not a valid stock count: {value!r}") from exc
    if count < 0:
        raise ValueError("Stock must be non-negative")
    return count


class Ledger:
    """
    Single owner of all till state for one logged-in session.

    Each mutating operation runs to completion under one lock, so a reader on
    another thread sees either none or all of a checkout's effects.
    Operations that cannot apply are silent no-ops that report ``False`` or
    ``None``.
    """

    def __init__(
        self,
        profile: StoreProfile,
        menu: list[MenuItem] | None = None,
        tables: list[Table] | None = None,
    ) -> None:
        self.profile = profile
        self.menu: list[MenuItem] = list(seed_menu() if menu is None else menu)
        self.tables: list[Table] = list(seed_tables() if tables is None else tables)
        self.orders: list[Order] = []
        self.cart: list[CartLine] = []
        self.active_table_id: int | None = None
        self._lock = threading.RLock()

    # -- lookups -----------------------------------------------------------

    def menu_item(self, item_id: str) -> MenuItem | None:
        return cart_ops.find_menu_item(self.menu, item_id)

    def table(self, table_id: int | None) -> Table | None:
        if table_id is None:
            return None
        for table in self.tables:
            if table.table_id == table_id:
                return table
        return None

    def order(self, order_id: str) -> Order | None:
        for order in self.orders:
            if order.order_id == order_id:
                return order
        return None

    def menu_for_category(self, category: str | None) -> list[MenuItem]:
        if category is None:
            return list(self.menu)
        return [item for item in self.menu if item.category == category]

    # -- table session -----------------------------------------------------

    def open_table(self, table_id: int) -> bool:
        """Start serving a table. Any cart left open for another table is abandoned."""
        with self._lock:
            table = self.table(table_id)
            if table is None:
                return False
            if self.active_table_id is not None and self.active_table_id != table_id:
                self._release_active_table()
            self.cart = []
            self.active_table_id = table_id
            table.status = TABLE_OCCUPIED
            logger.debug("open_table table_id=%s", table_id)
            return True

    def close_table(self) -> None:
        """Leave the active table without checking out."""
        with self._lock:
            self._release_active_table()
            self.cart = []

    def _release_active_table(self) -> None:
        table = self.table(self.active_table_id)
        if table is not None:
            table.status = TABLE_EMPTY
        self.active_table_id = None

    # -- cart --------------------------------------------------------------

    def add_item(self, item_id: str) -> bool:
        with self._lock:
            if self.active_table_id is None:
                return False
            return cart_ops.add_item(self.menu, self.cart, item_id)

    def set_quantity(self, item_id: str, delta: int) -> bool:
        with self._lock:
            if self.active_table_id is None:
                return False
            return cart_ops.set_quantity(self.menu, self.cart, item_id, delta)

    def set_note(self, item_id: str, text: str) -> bool:
        with self._lock:
            return cart_ops.set_note(self.cart, item_id, text)

    def cart_total(self) -> Decimal:
        return cart_ops.cart_total(self.cart)

    # -- checkout / refund -------------------------------------------------

    def checkout(self) -> Order | None:
        """Commit the open cart for the active table."""
        with self._lock:
            table_id = self.active_table_id
            if table_id is None or not self.cart:
                return None

            lines = tuple(line.frozen() for line in self.cart)
            order = Order(
                order_id=uuid4().hex,
                table_id=table_id,
                lines=lines,
                total=cart_ops.cart_total(lines),
                created_at=datetime.now(),
            )
            sold: dict[str, int] = {}
            for line in lines:
                sold[line.item_id] = sold.get(line.item_id, 0) + line.quantity

            self.orders.append(order)
            self.menu = [
                item.with_stock(item.stock - sold[item.item_id]) if item.item_id in sold else item
                for item in self.menu
            ]
            self._release_active_table()
            self.cart = []

        logger.info("checkout order_id=%s table_id=%s total=%s lines=%d", order.order_id, table_id, order.total, len(lines))
        return order

    def refund(self, order_id: str) -> bool:
        """Mark a completed order refunded. Stock is not returned to the catalog."""
        with self._lock:
            for idx, order in enumerate(self.orders):
                if order.order_id != order_id:
                    continue
                if not order.is_completed:
                    return False
                self.orders[idx] = order.refunded()
                logger.info("refund order_id=%s total=%s", order_id, order.total)
                return True
            return False

    # -- reporting ---------------------------------------------------------

    def summary(self) -> SalesSummary:
        with self._lock:
            return summarize(self.orders, self.menu)

    def completed_orders(self) -> list[Order]:
        with self._lock:
            return completed_orders(self.orders)

    # -- settings: profile -------------------------------------------------

    def update_profile(self, **changes: object) -> StoreProfile:
        known = {f.name for f in fields(StoreProfile)}
        unknown = set(changes) - known
        if unknown:
            raise ValueError(f"Unknown profile fields: {', '.join(sorted(unknown))}")
        if "tax_rate" in changes:
            changes["tax_rate"] = to_money(changes["tax_rate"])  # type: ignore[arg-type]
            if changes["tax_rate"] < 0:
                raise ValueError("Tax rate must be a non-negative number")
        if "currency" in changes and changes["currency"] not in CURRENCIES:
            raise ValueError(f"Unsupported currency: {changes['currency']}")
        if "logo_icon" in changes and changes["logo_icon"] not in LOGO_ICONS:
            raise ValueError(f"Unsupported logo: {changes['logo_icon']}")

        with self._lock:
            self.profile = replace(self.profile, **changes)  # type: ignore[arg-type]
        logger.info("profile_updated fields=%s", sorted(changes))
        return self.profile

    # -- settings: menu ----------------------------------------------------

    def save_menu_item(
        self,
        name: str,
        price: Decimal | int | float | str | None,
        item_id: str | None = None,
        category: str | None = None,
        cost: Decimal | int | float | str | None = None,
        stock: int | str | None = None,
        image: str | None = None,
    ) -> MenuItem | None:
        """Create a menu item, or update the one with ``item_id``."""
        if not name or price is None or price == "":
            return None
        if category is not None and category not in CATEGORY_LABELS:
            raise ValueError(f"Unknown category: {category}")
        price_value = to_money(price)
        if price_value == 0:
            return None
        if price_value < 0 or (cost is not None and to_money(cost) < 0):
            raise ValueError("Price and cost must be non-negative")
        stock_value = _to_stock(stock) if stock is not None else None

        with self._lock:
            existing = self.menu_item(item_id) if item_id else None
            if existing is not None:
                updated = replace(
                    existing,
                    name=name,
                    price=price_value,
                    category=category or existing.category,
                    cost=to_money(cost) if cost is not None else existing.cost,
                    stock=stock_value if stock_value is not None else existing.stock,
                    image=image or existing.image,
                )
                self.menu = [updated if item.item_id == existing.item_id else item for item in self.menu]
                logger.info("menu_item_updated item_id=%s", updated.item_id)
                return updated

            created = MenuItem(
                item_id=uuid4().hex,
                name=name,
                category=category or "coffee",
                price=price_value,
                cost=to_money(cost) if cost else Decimal("0"),
                stock=stock_value or 0,
                color=DEFAULT_ITEM_COLOR,
                image=image or DEFAULT_ITEM_IMAGE,
            )
            self.menu.append(created)
            logger.info("menu_item_created item_id=%s name=%r", created.item_id, created.name)
            return created

    def delete_menu_item(self, item_id: str) -> bool:
        with self._lock:
            before = len(self.menu)
            self.menu = [item for item in self.menu if item.item_id != item_id]
            removed = len(self.menu) != before
        if removed:
            logger.info("menu_item_deleted item_id=%s", item_id)
        return removed

    def restock(self, item_id: str, delta: int) -> MenuItem | None:
        """Adjust stock from the settings editor; never below zero."""
        with self._lock:
            item = self.menu_item(item_id)
            if item is None:
                return None
            updated = item.with_stock(item.stock + delta)
            self.menu = [updated if entry.item_id == item_id else entry for entry in self.menu]
            return updated

    # -- settings: floor plan ----------------------------------------------

    def add_table(self) -> Table:
        with self._lock:
            new_id = max((table.table_id for table in self.tables), default=0) + 1
            table = Table(table_id=new_id, label=f"T-{new_id}", x=10, y=10)
            self.tables.append(table)
        logger.info("table_added table_id=%s", new_id)
        return table

    def remove_table(self, table_id: int) -> bool:
        with self._lock:
            if self.table(table_id) is None:
                return False
            if self.active_table_id == table_id:
                self.active_table_id = None
                self.cart = []
            self.tables = [table for table in self.tables if table.table_id != table_id]
        logger.info("table_removed table_id=%s", table_id)
        return True

    def move_table(self, table_id: int, x: float, y: float) -> Table | None:
        with self._lock:
            table = self.table(table_id)
            if table is None:
                return None
            table.x = min(FLOOR_MAX_PCT, max(FLOOR_MIN_PCT, x))
            table.y = min(FLOOR_MAX_PCT, max(FLOOR_MIN_PCT, y))
            return table
