"""Thermal receipt printing: receipt text rasterized with Pillow, sent over ESC/POS."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from picopos.config import (
    PRINTER_FONT_ENV,
    PRINTER_FONT_PATH,
    PRINTER_FONT_SIZE,
    PRINTER_LEFT_INDENT_PX,
    PRINTER_TAIL_SPACER_PX,
    PRINTER_USB_PRODUCT_ID,
    PRINTER_USB_VENDOR_ID,
    PRINTER_WIDTH_PX,
)
from picopos.models import Order, StoreProfile
from picopos.receipt import REFUNDED_BANNER, receipt_lines

logger = logging.getLogger(__name__)

# Extra vertical headroom so descenders are not clipped on thermal output.
_LINE_EXTRA_PX = 10
_CENTERED_HEADER_LINES = 2
_LINUX_FONT_FALLBACKS = (
    "/usr/share/fonts/TTF/DejaVuSansMono.ttf",
    "/usr/share/fonts/truetype/dejavu/DejaVuSansMono.ttf",
    "/usr/share/fonts/dejavu/DejaVuSansMono.ttf",
    "/usr/share/fonts/liberation/LiberationMono-Regular.ttf",
)


def resolve_printer_font_path() -> str:
    """
    Resolve a printer font path.

    Resolution order:
    1. PICOPOS_PRINTER_FONT_PATH (if set)
    2. PRINTER_FONT_PATH
    3. Known Linux fallbacks
    """
    env_override = os.environ.get(PRINTER_FONT_ENV, "").strip()
    candidates: list[str] = []
    if env_override:
        candidates.append(env_override)
    candidates.append(PRINTER_FONT_PATH)
    candidates.extend(_LINUX_FONT_FALLBACKS)

    seen: set[str] = set()
    for candidate in candidates:
        if not candidate or candidate in seen:
            continue
        seen.add(candidate)
        if Path(candidate).is_file():
            return candidate

    raise RuntimeError(
        f"No usable printer font found. Set {PRINTER_FONT_ENV} to a valid .ttf/.otf file. "
        f"Tried: {', '.join(seen)}"
    )


def check_printer_dependencies() -> tuple[bool, str]:
    """Check whether printer libraries and a font are usable."""
    try:
        from escpos.printer import Usb  # noqa: F401
        from PIL import ImageFont

        ImageFont.truetype(resolve_printer_font_path(), PRINTER_FONT_SIZE)
    except Exception as exc:
        return (False, f"Printer deps unavailable: {exc}")
    return (True, "Printer ready")


def card_reader_status() -> tuple[bool, str]:
    """Card payments are not wired up; the reader always reports disconnected."""
    return (False, "Card reader not connected")


def _fit_text_to_px(text: str, font: object, max_width_px: int) -> str:
    from PIL import Image, ImageDraw

    scratch = Image.new("1", (1, 1), color=1)
    draw = ImageDraw.Draw(scratch)
    if draw.textbbox((0, 0), text, font=font)[2] <= max_width_px:
        return text
    ellipsis = "..."
    trimmed = text
    while trimmed:
        candidate = f"{trimmed}{ellipsis}"
        if draw.textbbox((0, 0), candidate, font=font)[2] <= max_width_px:
            return candidate
        trimmed = trimmed[:-1]
    return ellipsis


def render_line(text: str, font: object, centered: bool = False) -> object:
    """Render one receipt line as a 1-bit image the width of the paper."""
    from PIL import Image, ImageDraw

    max_width = PRINTER_WIDTH_PX - (PRINTER_LEFT_INDENT_PX * 2)
    text = _fit_text_to_px(text, font, max_width)

    scratch = Image.new("1", (1, 1), color=1)
    bbox = ImageDraw.Draw(scratch).textbbox((0, 0), text or " ", font=font)
    text_width = bbox[2] - bbox[0]
    text_height = bbox[3] - bbox[1]
    canvas_height = max(12, text_height + _LINE_EXTRA_PX)

    img = Image.new("1", (PRINTER_WIDTH_PX, canvas_height), color=1)
    draw = ImageDraw.Draw(img)
    x = (PRINTER_WIDTH_PX - text_width) // 2 if centered else PRINTER_LEFT_INDENT_PX
    # Offset by bbox top so descenders (g, y, p, etc.) are not clipped.
    y = (canvas_height - text_height) // 2 - bbox[1]
    draw.text((x, y), text, font=font, fill=0)
    return img


def render_spacer(height_px: int) -> object:
    from PIL import Image

    return Image.new("1", (PRINTER_WIDTH_PX, max(1, height_px)), color=1)


def render_receipt(lines: list[str], font: object) -> list[object]:
    """Rasterize receipt lines; the store header and refund banner are centered."""
    images = []
    for idx, line in enumerate(lines):
        centered = idx < _CENTERED_HEADER_LINES or line == REFUNDED_BANNER
        images.append(render_line(line, font, centered=centered))
    images.append(render_spacer(PRINTER_TAIL_SPACER_PX))
    return images


def open_printer() -> object:
    try:
        from escpos.printer import Usb
    except Exception as exc:
        raise RuntimeError(f"Printer dependencies unavailable: {exc}") from exc
    return Usb(PRINTER_USB_VENDOR_ID, PRINTER_USB_PRODUCT_ID)


def print_receipt(order: Order, profile: StoreProfile, printer: object | None = None, font: object | None = None) -> None:
    """Print the receipt for an order and cut the ticket."""
    try:
        from PIL import ImageFont
    except Exception as exc:
        raise RuntimeError(f"Printer dependencies unavailable: {exc}") from exc

    if font is None:
        font = ImageFont.truetype(resolve_printer_font_path(), PRINTER_FONT_SIZE)
    if printer is None:
        printer = open_printer()

    for img in render_receipt(receipt_lines(order, profile), font):
        printer.image(img)
    printer.cut()
    logger.info("receipt_printed order_id=%s status=%s", order.order_id, order.status)
