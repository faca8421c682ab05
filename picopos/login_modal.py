"""Login prompt that picks the store profile for the session."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Container
from textual.events import Key
from textual.screen import ModalScreen
from textual.widgets import Static


class LoginModal(ModalScreen[str]):
    """Prompt for a staff email; dismisses with whatever was typed."""

    CSS = """
    LoginModal {
        align: center middle;
        background: $background 80%;
    }

    #login-dialog {
        width: 56;
        height: auto;
        border: round $primary;
        background: $panel;
        padding: 1 2;
    }

    #login-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    #login-value {
        border: heavy $secondary;
        padding: 0 1;
        color: white;
        margin-bottom: 1;
    }

    #login-help {
        color: #dddddd;
    }
    """

    def __init__(self) -> None:
        super().__init__()
        self.value = ""

    def compose(self) -> ComposeResult:
        with Container(id="login-dialog"):
            yield Static("Pico POS - sign in", id="login-title")
            yield Static("Small but mighty. The intelligent way to run your cafe.")
            yield Static(id="login-value")
            yield Static("Type your email, Enter to sign in. Use a 'demo' address for the demo store.", id="login-help")

    def on_mount(self) -> None:
        self._refresh_content()

    def on_key(self, event: Key) -> None:
        if event.key == "enter":
            self.dismiss(self.value.strip())
            event.stop()
            return

        if event.key == "backspace":
            if self.value:
                self.value = self.value[:-1]
                self._refresh_content()
            event.stop()
            return

        if event.is_printable and event.character:
            self.value += event.character
            self._refresh_content()
        event.stop()

    def _refresh_content(self) -> None:
        self.query_one("#login-value", Static).update(f"Email: {self.value}|")
