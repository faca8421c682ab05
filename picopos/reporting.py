"""Read-only summaries derived from the order log."""

from __future__ import annotations

from decimal import Decimal
from typing import Iterable

from picopos.models import MenuItem, Order, SalesSummary


def completed_orders(orders: Iterable[Order]) -> list[Order]:
    return [order for order in orders if order.is_completed]


def best_sellers(orders: Iterable[Order]) -> list[tuple[str, int]]:
    """Quantity sold per item name, highest first, ties in first-sold order."""
    counts: dict[str, int] = {}
    for order in orders:
        for line in order.lines:
            counts[line.item.name] = counts.get(line.item.name, 0) + line.quantity
    return sorted(counts.items(), key=lambda pair: -pair[1])


def summarize(orders: Iterable[Order], menu: Iterable[MenuItem]) -> SalesSummary:
    """
    Aggregate revenue, cost and profit over completed orders.

    Cost uses the current catalog cost of each item, not a snapshot taken at
    order time. Items no longer on the menu contribute no cost.
    """
    valid = completed_orders(orders)
    cost_by_id = {item.item_id: item.cost for item in menu}

    revenue = Decimal("0")
    cost = Decimal("0")
    for order in valid:
        revenue += order.total
        for line in order.lines:
            cost += cost_by_id.get(line.item_id, Decimal("0")) * line.quantity

    count = len(valid)
    avg_value = int(revenue // count) if count else 0
    return SalesSummary(
        revenue=revenue,
        cost=cost,
        profit=revenue - cost,
        count=count,
        avg_value=avg_value,
        best_sellers=tuple(best_sellers(valid)),
    )
