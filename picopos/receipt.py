"""Receipt text and tax decomposition for carts and committed orders."""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import Decimal

from picopos.config import (
    PREVIEW_SUBTOTAL_SHARE,
    PREVIEW_TAX_SHARE,
    RECEIPT_DEFAULT_PAN,
    RECEIPT_FOOTER_LINES,
    RECEIPT_TAXABLE_SHARE,
)
from picopos.models import Order, StoreProfile

RECEIPT_WIDTH_CHARS = 32
REFUNDED_BANNER = "REFUNDED RECEIPT"


@dataclass(frozen=True)
class TaxSplit:
    """Presentation-only decomposition of a tax-inclusive total."""

    taxable: int
    tax: int


def preview_tax_split(total: Decimal) -> TaxSplit:
    """Fixed 87/13 split shown under the open cart."""
    return TaxSplit(
        taxable=math.floor(total * PREVIEW_SUBTOTAL_SHARE),
        tax=math.floor(total * PREVIEW_TAX_SHARE),
    )


def receipt_tax_split(total: Decimal, profile: StoreProfile) -> TaxSplit:
    """Receipt split: 87% taxable, VAT from the profile rate. Need not sum to total."""
    return TaxSplit(
        taxable=math.floor(total * RECEIPT_TAXABLE_SHARE),
        tax=math.floor(total * profile.tax_rate / 100),
    )


def format_amount(amount: Decimal | int) -> str:
    """Thousands-separated amount, dropping trailing zero cents like the till display."""
    if isinstance(amount, int) or amount == amount.to_integral_value():
        return f"{int(amount):,}"
    return f"{amount.normalize():,f}"


def format_money(profile: StoreProfile, amount: Decimal | int) -> str:
    return f"{profile.currency} {format_amount(amount)}"


def format_timestamp(order: Order) -> str:
    """en-US style local timestamp, e.g. ``10/19/2026, 3:04:05 PM``."""
    stamp = order.created_at
    hour = stamp.hour % 12 or 12
    return f"{stamp.month}/{stamp.day}/{stamp.year}, {hour}:{stamp:%M:%S} {stamp:%p}"


def _two_column(left: str, right: str, width: int = RECEIPT_WIDTH_CHARS) -> str:
    gap = max(1, width - len(left) - len(right))
    return f"{left}{' ' * gap}{right}"


def receipt_lines(order: Order, profile: StoreProfile) -> list[str]:
    """Build the printable receipt for a completed or refunded order."""
    rule = "-" * RECEIPT_WIDTH_CHARS
    lines = [
        profile.name,
        profile.location,
        f"PAN: {profile.pan_number or RECEIPT_DEFAULT_PAN}",
        f"ORDER #{order.order_id[:8]}",
        format_timestamp(order),
        rule,
        _two_column("ITEM", "AMT"),
    ]
    for line in order.lines:
        lines.append(_two_column(f"{line.item.name} x{line.quantity}", format_amount(line.amount)))
        if line.note:
            lines.append(f" - {line.note}")

    split = receipt_tax_split(order.total, profile)
    lines.extend(
        [
            rule,
            _two_column("TOTAL", format_money(profile, order.total)),
            _two_column("Taxable Amt", format_money(profile, split.taxable)),
            _two_column(f"VAT ({format_amount(profile.tax_rate)}%)", format_money(profile, split.tax)),
            rule,
            *RECEIPT_FOOTER_LINES,
        ]
    )
    if not order.is_completed:
        lines.append(REFUNDED_BANNER)
    return lines
