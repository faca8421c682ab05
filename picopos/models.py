"""Domain models for the café ledger."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from decimal import Decimal, InvalidOperation

COMPLETED = "completed"
REFUNDED = "refunded"

TABLE_EMPTY = "empty"
TABLE_OCCUPIED = "occupied"


def to_money(value: Decimal | int | float | str) -> Decimal:
    """Coerce a price-like value to Decimal without float artifacts."""
    try:
        result = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except InvalidOperation as exc:
        raise ValueError(f"Not a valid amount: {value!r}") from exc
    if not result.is_finite():
        raise ValueError(f"Not a valid amount: {value!r}")
    return result


@dataclass(frozen=True)
class MenuItem:
    """A catalog entry. Edits replace the entry rather than mutating it."""

    item_id: str
    name: str
    category: str
    price: Decimal
    cost: Decimal = Decimal("0")
    stock: int = 0
    color: str = ""
    image: str = ""

    def with_stock(self, stock: int) -> MenuItem:
        return replace(self, stock=max(0, stock))


@dataclass
class CartLine:
    """A menu item snapshot with the requested quantity and a free-text note."""

    item: MenuItem
    quantity: int = 1
    note: str = ""

    @property
    def item_id(self) -> str:
        return self.item.item_id

    @property
    def amount(self) -> Decimal:
        return self.item.price * self.quantity

    def frozen(self) -> OrderLine:
        return OrderLine(item=self.item, quantity=self.quantity, note=self.note)


@dataclass(frozen=True)
class OrderLine:
    """A committed line; fixed once the order is written."""

    item: MenuItem
    quantity: int
    note: str = ""

    @property
    def item_id(self) -> str:
        return self.item.item_id

    @property
    def amount(self) -> Decimal:
        return self.item.price * self.quantity


@dataclass(frozen=True)
class Order:
    """A committed order. Only the status may change, and only once."""

    order_id: str
    table_id: int
    lines: tuple[OrderLine, ...]
    total: Decimal
    created_at: datetime
    status: str = COMPLETED

    @property
    def is_completed(self) -> bool:
        return self.status == COMPLETED

    def refunded(self) -> Order:
        return replace(self, status=REFUNDED)


@dataclass
class Table:
    """A floor-plan table."""

    table_id: int
    label: str
    x: float = 10
    y: float = 10
    status: str = TABLE_EMPTY

    @property
    def is_occupied(self) -> bool:
        return self.status == TABLE_OCCUPIED


@dataclass
class StoreProfile:
    """Store configuration shown on receipts and used for pricing display."""

    name: str
    location: str = ""
    currency: str = "USD"
    tax_rate: Decimal = Decimal("0")
    pan_number: str = ""
    settlement_account: str = ""
    logo_icon: str = "coffee"
    theme_color: str = ""


@dataclass(frozen=True)
class SalesSummary:
    """Aggregates over completed orders."""

    revenue: Decimal = Decimal("0")
    cost: Decimal = Decimal("0")
    profit: Decimal = Decimal("0")
    count: int = 0
    avg_value: int = 0
    best_sellers: tuple[tuple[str, int], ...] = field(default_factory=tuple)

    @property
    def margin_percent(self) -> Decimal:
        if self.revenue <= 0:
            return Decimal("0")
        return (self.profit / self.revenue * 100).quantize(Decimal("0.1"))


@dataclass(frozen=True)
class ForecastPoint:
    """One day of projected revenue."""

    day: str
    revenue: float
