from __future__ import annotations

from datetime import datetime
from decimal import Decimal

import pytest
from escpos.printer import Dummy
from PIL import ImageFont

from picopos import printer as printer_mod
from picopos.config import PRINTER_TAIL_SPACER_PX, PRINTER_WIDTH_PX
from picopos.models import Order, OrderLine

from tests.conftest import make_item


@pytest.fixture
def font():
    return ImageFont.load_default()


@pytest.fixture
def order() -> Order:
    line = OrderLine(make_item("1", price="3.50"), 2)
    return Order(
        order_id="feedfacecafebeef",
        table_id=1,
        lines=(line,),
        total=Decimal("7.00"),
        created_at=datetime(2026, 10, 19, 8, 0, 0),
    )


def test_render_line_spans_paper_width(font):
    img = printer_mod.render_line("TOTAL    USD 7", font)
    assert img.mode == "1"
    assert img.width == PRINTER_WIDTH_PX


def test_render_line_trims_overlong_text(font):
    text = printer_mod._fit_text_to_px("x" * 400, font, 100)
    assert text.endswith("...")
    assert len(text) < 400


def test_render_receipt_adds_tail_spacer(font):
    images = printer_mod.render_receipt(["Pico Cafe", "Global Branch", "ITEM  AMT"], font)
    assert len(images) == 4
    assert images[-1].height == PRINTER_TAIL_SPACER_PX


def test_print_receipt_sends_image_and_cut(order, profile, font):
    dummy = Dummy()
    printer_mod.print_receipt(order, profile, printer=dummy, font=font)
    assert dummy.output
    # GS V: paper cut command.
    assert b"\x1dV" in dummy.output


def test_resolve_font_prefers_env_override(tmp_path, monkeypatch):
    font_file = tmp_path / "receipt.ttf"
    font_file.write_bytes(b"")
    monkeypatch.setenv("PICOPOS_PRINTER_FONT_PATH", str(font_file))
    assert printer_mod.resolve_printer_font_path() == str(font_file)


def test_resolve_font_reports_candidates(monkeypatch):
    monkeypatch.setenv("PICOPOS_PRINTER_FONT_PATH", "/nonexistent/font.ttf")
    monkeypatch.setattr(printer_mod, "PRINTER_FONT_PATH", "/nonexistent/other.ttf")
    monkeypatch.setattr(printer_mod, "_LINUX_FONT_FALLBACKS", ())
    with pytest.raises(RuntimeError, match="No usable printer font"):
        printer_mod.resolve_printer_font_path()


def test_card_reader_is_stubbed():
    connected, message = printer_mod.card_reader_status()
    assert not connected
    assert "not connected" in message
