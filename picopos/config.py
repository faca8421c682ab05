"""Runtime configuration defaults for printing, insight calls and logging."""

from __future__ import annotations

import logging
import os
from decimal import Decimal
from pathlib import Path

DEBUG_LOG_PATH = os.environ.get("PICOPOS_DEBUG_LOG", "/tmp/picopos-debug.log")

PRINTER_USB_VENDOR_ID = 0x28E9
PRINTER_USB_PRODUCT_ID = 0x0289
PRINTER_WIDTH_PX = 384
PRINTER_FONT_SIZE = 24
PRINTER_FONT_PATH = "/System/Library/Fonts/SFNS.ttf"
PRINTER_FONT_ENV = "PICOPOS_PRINTER_FONT_PATH"
PRINTER_LEFT_INDENT_PX = 8
PRINTER_TAIL_SPACER_PX = 70

AI_CREDITS = 50
GEMINI_API_KEY = os.environ.get("PICOPOS_GEMINI_API_KEY", "")
GEMINI_MODEL = "gemini-2.5-flash"
GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
GEMINI_TIMEOUT_SECONDS = 30.0

# Cart preview split. The finished receipt uses the profile tax rate instead.
PREVIEW_SUBTOTAL_SHARE = Decimal("0.87")
PREVIEW_TAX_SHARE = Decimal("0.13")
RECEIPT_TAXABLE_SHARE = Decimal("0.87")
RECEIPT_DEFAULT_PAN = "123456789"
RECEIPT_FOOTER_LINES = (
    "Namaste! Thank you for visiting.",
    "Wi-Fi: Guest / coffee123",
)

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def configure_logging(level: int = logging.DEBUG, path: str | None = None) -> None:
    """Send package logs to the debug file; the terminal belongs to the UI."""
    log_file = Path(path or DEBUG_LOG_PATH)
    logger = logging.getLogger("picopos")
    logger.setLevel(level)
    if any(isinstance(h, logging.FileHandler) for h in logger.handlers):
        return
    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(log_file, encoding="utf-8")
    except OSError:
        handler = logging.NullHandler()
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    logger.addHandler(handler)
