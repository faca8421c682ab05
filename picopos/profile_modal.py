"""Store profile form for the settings view."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Container
from textual.screen import ModalScreen
from textual.widgets import Input, Static

from picopos.constant import CURRENCIES, LOGO_ICONS
from picopos.models import StoreProfile

_FIELDS = (
    ("name", "Store name"),
    ("location", "Location"),
    ("currency", " / ".join(CURRENCIES)),
    ("tax_rate", "VAT %"),
    ("pan_number", "PAN / VAT number"),
    ("settlement_account", "Settlement account"),
    ("logo_icon", " / ".join(LOGO_ICONS)),
    ("theme_color", "Theme colour"),
)


class ProfileModal(ModalScreen[dict[str, str] | None]):
    """Edit the store profile; Enter on the last field saves, Esc cancels."""

    BINDINGS = [("escape", "cancel", "Cancel")]

    CSS = """
    ProfileModal {
        align: center middle;
        background: $background 60%;
    }

    #profile-dialog {
        width: 60;
        height: auto;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #profile-title {
        text-style: bold;
        margin-bottom: 1;
    }

    #profile-help {
        color: #dddddd;
    }
    """

    def __init__(self, profile: StoreProfile) -> None:
        super().__init__()
        self.profile = profile

    def compose(self) -> ComposeResult:
        with Container(id="profile-dialog"):
            yield Static("Store profile", id="profile-title")
            for name, placeholder in _FIELDS:
                yield Input(value=str(getattr(self.profile, name)), placeholder=placeholder, id=f"profile-{name}")
            yield Static("Enter next/save, Esc cancel", id="profile-help")

    def on_input_submitted(self, event: Input.Submitted) -> None:
        names = [name for name, _ in _FIELDS]
        field_name = (event.input.id or "").removeprefix("profile-")
        if field_name not in names:
            return
        if field_name != names[-1]:
            self.query_one(f"#profile-{names[names.index(field_name) + 1]}", Input).focus()
            return
        self.dismiss(self.values())

    def values(self) -> dict[str, str]:
        return {name: self.query_one(f"#profile-{name}", Input).value.strip() for name, _ in _FIELDS}

    def action_cancel(self) -> None:
        self.dismiss(None)
