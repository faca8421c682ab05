"""Receipt preview with an optional print action."""

from __future__ import annotations

from typing import Callable

from textual.app import ComposeResult
from textual.containers import Container
from textual.screen import ModalScreen
from textual.widgets import Static

from picopos.models import Order, StoreProfile
from picopos.rendering import format_receipt


class ReceiptModal(ModalScreen[None]):
    """Show an order's receipt; refunded receipts cannot be printed."""

    BINDINGS = [
        ("escape", "close", "Close"),
        ("q", "close", "Close"),
        ("p", "print_receipt", "Print"),
    ]

    CSS = """
    ReceiptModal {
        align: center middle;
        background: $background 60%;
    }

    #receipt-dialog {
        width: 40;
        height: auto;
        border: round $secondary;
        background: white;
        color: black;
        padding: 1 2;
    }

    #receipt-help {
        margin-top: 1;
        color: #555555;
    }
    """

    def __init__(self, order: Order, profile: StoreProfile, on_print: Callable[[Order], str]) -> None:
        super().__init__()
        self.order = order
        self.profile = profile
        self.on_print = on_print

    def compose(self) -> ComposeResult:
        with Container(id="receipt-dialog"):
            yield Static(format_receipt(self.order, self.profile), id="receipt-body")
            yield Static(id="receipt-help")

    def on_mount(self) -> None:
        if self.order.is_completed:
            self._set_help("P print invoice, Esc/q close")
        else:
            self._set_help("Esc/q close")

    def action_close(self) -> None:
        self.dismiss()

    def action_print_receipt(self) -> None:
        if not self.order.is_completed:
            return
        self._set_help(self.on_print(self.order))

    def _set_help(self, message: str) -> None:
        self.query_one("#receipt-help", Static).update(message)
