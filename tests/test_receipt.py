from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from picopos.models import Order, OrderLine
from picopos.receipt import (
    REFUNDED_BANNER,
    format_amount,
    preview_tax_split,
    receipt_lines,
    receipt_tax_split,
)

from tests.conftest import make_item


def sample_order(status: str = "completed") -> Order:
    latte = make_item("1", price="3.50")
    sandwich = make_item("2", price="12.00")
    lines = (OrderLine(latte, 2, note="Less Ice"), OrderLine(sandwich, 1))
    return Order(
        order_id="0123456789abcdef",
        table_id=3,
        lines=lines,
        total=Decimal("19.00"),
        created_at=datetime(2026, 10, 19, 15, 4, 5),
        status=status,
    )


def test_preview_split_is_fixed_87_13():
    split = preview_tax_split(Decimal("10"))
    assert (split.taxable, split.tax) == (8, 1)


def test_receipt_split_uses_profile_rate(profile):
    split = receipt_tax_split(Decimal("25.00"), profile)
    assert split.taxable == 21
    assert split.tax == 2


def test_splits_are_independent(profile):
    total = Decimal("100")
    assert preview_tax_split(total).tax == 13
    assert receipt_tax_split(total, profile).tax == 8


def test_format_amount():
    assert format_amount(Decimal("7.00")) == "7"
    assert format_amount(Decimal("3.50")) == "3.5"
    assert format_amount(Decimal("1234.50")) == "1,234.5"
    assert format_amount(12000) == "12,000"


def test_receipt_lines_content(profile):
    lines = receipt_lines(sample_order(), profile)
    text = "\n".join(lines)
    assert lines[0] == "Pico Cafe"
    assert "PAN: 987-654-321" in lines
    assert "ORDER #01234567" in lines
    assert "10/19/2026, 3:04:05 PM" in lines
    assert any(line.startswith("Item 1 x2") and line.endswith("7") for line in lines)
    assert " - Less Ice" in lines
    assert any(line.startswith("TOTAL") and line.endswith("USD 19") for line in lines)
    assert any(line.startswith("Taxable Amt") and line.endswith("USD 16") for line in lines)
    assert any(line.startswith("VAT (8%)") and line.endswith("USD 1") for line in lines)
    assert REFUNDED_BANNER not in text


def test_receipt_uses_default_pan(profile):
    profile.pan_number = ""
    assert "PAN: 123456789" in receipt_lines(sample_order(), profile)


def test_refunded_receipt_is_marked(profile):
    lines = receipt_lines(sample_order(status="refunded"), profile)
    assert lines[-1] == REFUNDED_BANNER
