"""Rich text rendering helpers for the terminal views."""

from __future__ import annotations

from decimal import Decimal

from rich.text import Text

from picopos.data import category_label
from picopos.models import CartLine, ForecastPoint, MenuItem, Order, SalesSummary, StoreProfile, Table
from picopos.receipt import REFUNDED_BANNER, format_money, preview_tax_split, receipt_lines


def badge_style(category: str) -> str:
    """Return a consistent badge style for category tags."""
    if category == "coffee":
        return "bold #ffffff on #7a4a2a"
    if category == "beverage":
        return "bold #0b1f0f on #5fbf72"
    if category == "dessert":
        return "bold #ffffff on #b23a48"
    return "bold #ffffff on #2f6db5"


def format_menu_label(item: MenuItem, profile: StoreProfile) -> Text:
    """Render a menu entry with its category tag, price and stock."""
    text = Text()
    text.append(category_label(item.category)[0], style=badge_style(item.category))
    text.append(f" {item.name}  {format_money(profile, item.price)}")
    if item.stock <= 0:
        text.append("  SOLD OUT", style="bold red")
    else:
        text.append(f"  stock {item.stock}", style="dim")
    return text


def format_cart_line(line: CartLine, profile: StoreProfile) -> Text:
    text = Text()
    text.append(f"{line.item.name} x{line.quantity}")
    text.append(f"  {format_money(profile, line.amount)}", style="bold")
    if line.note:
        text.append(f"\n      - {line.note}", style="italic")
    return text


def format_cart_totals(total: Decimal, profile: StoreProfile) -> Text:
    split = preview_tax_split(total)
    text = Text()
    text.append(f"Subtotal   {format_money(profile, split.taxable)}\n", style="dim")
    text.append(f"VAT (13%)  {format_money(profile, split.tax)}\n", style="dim")
    text.append(f"Total      {format_money(profile, total)}", style="bold")
    return text


def format_table_label(table: Table) -> Text:
    """Render a table with its floor position and occupancy."""
    text = Text()
    if table.is_occupied:
        text.append(f"{table.label:<7}", style="bold #ffffff on #d97706")
        text.append(" occupied", style="#d97706")
    else:
        text.append(f"{table.label:<7}", style="bold")
        text.append(" empty", style="dim")
    text.append(f"  ({table.x:.0f}%, {table.y:.0f}%)", style="dim")
    return text


def format_order_row(order: Order, profile: StoreProfile, table: Table | None) -> Text:
    text = Text()
    label = table.label if table is not None else f"#{order.table_id}"
    text.append(f"{order.order_id[:8]}  {order.created_at:%H:%M}  {label:<6} ")
    text.append(format_money(profile, order.total))
    if order.is_completed:
        text.append("  completed", style="green")
    else:
        text.append("  refunded", style="bold red")
    return text


def format_summary(summary: SalesSummary, profile: StoreProfile) -> Text:
    text = Text()
    text.append(f"Revenue  {format_money(profile, summary.revenue)}\n", style="bold")
    text.append(f"Cost     {format_money(profile, summary.cost)}\n")
    text.append(f"Profit   {format_money(profile, summary.profit)}  ({summary.margin_percent}% Margin)\n")
    text.append(f"Orders   {summary.count}   Avg {format_money(profile, summary.avg_value)}")
    if summary.best_sellers:
        text.append("\n\nBest sellers\n", style="bold")
        for name, quantity in summary.best_sellers[:5]:
            text.append(f"  {name} x{quantity}\n")
    return text


def format_forecast(points: list[ForecastPoint]) -> Text:
    """Render a forecast as a small horizontal bar chart."""
    text = Text()
    if not points:
        text.append("No forecast available", style="dim")
        return text
    peak = max(point.revenue for point in points) or 1
    for idx, point in enumerate(points):
        if idx > 0:
            text.append("\n")
        bar = "█" * max(1, int(point.revenue / peak * 20))
        text.append(f"{point.day:<4} ")
        text.append(bar, style="#6366f1")
        text.append(f" {point.revenue:,.0f}", style="dim")
    return text


def format_receipt(order: Order, profile: StoreProfile) -> Text:
    text = Text()
    for idx, line in enumerate(receipt_lines(order, profile)):
        if idx > 0:
            text.append("\n")
        text.append(line, style="bold red" if line == REFUNDED_BANNER else "")
    return text
