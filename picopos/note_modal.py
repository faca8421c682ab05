"""Free-text note editor for one cart line."""

from __future__ import annotations

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Container
from textual.events import Key
from textual.screen import ModalScreen
from textual.widgets import Static

from picopos.models import CartLine

NOTE_PLACEHOLDER = "e.g. No Ice, Less Sugar..."


class NoteModal(ModalScreen[str | None]):
    """Centered modal that edits a line note; dismisses with the new text or None."""

    CSS = """
    NoteModal {
        align: center middle;
        background: $background 60%;
    }

    #note-dialog {
        width: 64;
        height: auto;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #note-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    #note-value {
        border: heavy $secondary;
        padding: 0 1;
        color: white;
        margin-bottom: 1;
    }

    #note-help {
        color: #dddddd;
    }
    """

    def __init__(self, line: CartLine) -> None:
        super().__init__()
        self.line = line
        self.value = line.note

    def compose(self) -> ComposeResult:
        with Container(id="note-dialog"):
            yield Static(f"Note: {self.line.item.name}", id="note-title")
            yield Static(id="note-value")
            yield Static("Type text, Enter save, Ctrl+U clear, Esc cancel", id="note-help")

    def on_mount(self) -> None:
        self._refresh_content()

    def on_key(self, event: Key) -> None:
        if event.key == "escape":
            self.dismiss(None)
            event.stop()
            return

        if event.key == "enter":
            self.dismiss(self.value)
            event.stop()
            return

        if event.key == "ctrl+u":
            self.value = ""
            self._refresh_content()
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
            return

        # Ignore all non-text keys while typing.
        event.stop()

    def _refresh_content(self) -> None:
        value_widget = self.query_one("#note-value", Static)
        if self.value:
            value_widget.update(f"{self.value}|")
        else:
            value_widget.update(Text(NOTE_PLACEHOLDER, style="dim"))
