"""Main Textual app class."""

from __future__ import annotations

import logging
from typing import Any

from rich.text import Text
from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.css.query import NoMatches
from textual.reactive import reactive
from textual.screen import ModalScreen
from textual.widgets import Header, Static

from picopos.confirm_modal import ConfirmModal
from picopos.constant import CATEGORY_LABELS, CURRENCIES
from picopos.data import category_label, profile_for_login
from picopos.insight import InsightDesk, InsightProvider, InsufficientCredits, default_provider
from picopos.ledger import Ledger
from picopos.login_modal import LoginModal
from picopos.menu_item_modal import MenuItemModal
from picopos.models import ForecastPoint, Order
from picopos.note_modal import NoteModal
from picopos.printer import card_reader_status, check_printer_dependencies, print_receipt
from picopos.profile_modal import ProfileModal
from picopos.receipt_modal import ReceiptModal
from picopos.rendering import (
    format_cart_line,
    format_cart_totals,
    format_forecast,
    format_menu_label,
    format_order_row,
    format_summary,
    format_table_label,
)

logger = logging.getLogger(__name__)

VIEW_TABLES = "tables"
VIEW_ORDER = "order"
VIEW_DASHBOARD = "dashboard"
VIEW_SETTINGS = "settings"

CATEGORY_FILTERS: list[str | None] = [None, *CATEGORY_LABELS]
TABLE_NUDGE_PCT = 5


class PosApp(App):
    """A Textual till for serving café tables, reviewing sales and editing settings."""

    TITLE = "Pico POS"
    SUB_TITLE = "Tables"

    CSS = """
    Screen {
        layout: vertical;
    }

    #main-layout {
        height: 1fr;
    }

    #left-pane {
        width: 3fr;
        border: round $primary;
        padding: 1;
    }

    #right-pane {
        width: 2fr;
        border: round $secondary;
        padding: 1;
    }

    #status-bar {
        border: heavy $secondary;
        padding: 0 1;
        margin-bottom: 1;
        height: 4;
    }

    #left-list, #right-list {
        height: 1fr;
        border: tall $surface;
        padding: 0 1;
    }

    .pane-title {
        text-style: bold;
        margin-bottom: 1;
    }
    """

    view = reactive(VIEW_TABLES)
    left_index = reactive(None)
    right_index = reactive(0)
    category_index = reactive(0)

    BINDINGS = [
        ("f2", "show_view('tables')", "Tables"),
        ("f3", "show_view('dashboard')", "Admin"),
        ("f4", "show_view('settings')", "Settings"),
        ("j", "move_left(1)", "Next"),
        ("k", "move_left(-1)", "Previous"),
        ("down", "move_right(1)", "Next"),
        ("up", "move_right(-1)", "Previous"),
        ("enter", "primary", "Select"),
        ("f", "cycle_category(1)", "Category"),
        ("plus,equals_sign", "adjust(1)", "More"),
        ("minus", "adjust(-1)", "Less"),
        ("left", "nudge_table(-1)", "Move left"),
        ("right", "nudge_table(1)", "Move right"),
        ("n", "edit_note", "Note"),
        ("a", "run_analysis", "AI analysis"),
        ("r", "refund_selected", "Refund"),
        ("m", "edit_menu_item(True)", "New item"),
        ("e", "edit_menu_item(False)", "Edit item"),
        ("d", "delete_selected", "Delete"),
        ("t", "add_table", "Add table"),
        ("c", "cycle_currency", "Currency"),
        ("p", "edit_profile", "Profile"),
        ("left_square_bracket", "adjust_tax(-1)", "Tax -"),
        ("right_square_bracket", "adjust_tax(1)", "Tax +"),
        ("escape", "back", "Back"),
        Binding("ctrl+s", "checkout", "Charge", priority=True),
        ("ctrl+l", "logout", "Logout"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, email: str | None = None, provider: InsightProvider | None = None) -> None:
        super().__init__()
        self.email = email
        self._provider = provider
        self.ledger = Ledger(profile_for_login(email or ""))
        self.desk = InsightDesk(provider or default_provider(self.ledger.profile.name))
        self.analysis_text = ""
        self.forecast_points: list[ForecastPoint] = []
        self.analysis_running = False
        self.system_status = ""

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="main-layout"):
            with Vertical(id="left-pane"):
                yield Static(id="left-title", classes="pane-title")
                yield Static(id="left-list")
            with Vertical(id="right-pane"):
                yield Static(id="status-bar")
                yield Static(id="right-title", classes="pane-title")
                yield Static(id="right-list")

    def check_action(self, action: str, parameters: tuple[object, ...]) -> bool | None:
        # While a modal is active, let the modal own keyboard handling.
        if isinstance(self.screen, ModalScreen) and action != "quit":
            return False
        return True

    def on_mount(self) -> None:
        _, msg = check_printer_dependencies()
        self.system_status = msg
        logger.debug("on_mount printer_status=%r", msg)
        if self.email is None:
            self.push_screen(LoginModal(), self._start_session)
        self._refresh_all()

    # -- session -----------------------------------------------------------

    def _start_session(self, email: str | None) -> None:
        self.email = email or ""
        self.ledger = Ledger(profile_for_login(self.email))
        self.desk = InsightDesk(self._provider or default_provider(self.ledger.profile.name))
        self.analysis_text = ""
        self.forecast_points = []
        self.left_index = None
        self.right_index = 0
        self.view = VIEW_TABLES
        self.system_status = f"Signed in to {self.ledger.profile.name}"
        logger.info("session_started store=%r", self.ledger.profile.name)
        self._refresh_all()

    def action_logout(self) -> None:
        logger.info("logout orders_discarded=%d", len(self.ledger.orders))
        self.push_screen(LoginModal(), self._start_session)

    # -- navigation --------------------------------------------------------

    def action_show_view(self, view: str) -> None:
        if self.view == VIEW_ORDER and view != VIEW_ORDER:
            self.ledger.close_table()
        self.view = view
        self.left_index = None
        self.right_index = 0
        self._refresh_all()

    def action_back(self) -> None:
        if self.view == VIEW_TABLES:
            return
        self.action_show_view(VIEW_TABLES)

    def action_move_left(self, delta: int) -> None:
        total = len(self._left_rows())
        if not total:
            return
        if self.left_index is None:
            self.left_index = 0 if delta > 0 else total - 1
        else:
            self.left_index = (self.left_index + delta) % total
        self._refresh_all()

    def action_move_right(self, delta: int) -> None:
        total = len(self._right_rows())
        if self.view == VIEW_TABLES:
            self.action_move_left(delta)
            return
        if not total:
            self.right_index = 0
            return
        self.right_index = (self.right_index + delta) % total
        self._refresh_all()

    def action_cycle_category(self, delta: int) -> None:
        if self.view != VIEW_ORDER:
            return
        self.category_index = (self.category_index + delta) % len(CATEGORY_FILTERS)
        self.right_index = 0
        self._refresh_all()

    def action_primary(self) -> None:
        if self.view == VIEW_TABLES:
            self._open_selected_table()
        elif self.view == VIEW_ORDER:
            self._add_selected_menu_item()
        elif self.view == VIEW_DASHBOARD:
            order = self._selected_order()
            if order is not None:
                self.push_screen(ReceiptModal(order, self.ledger.profile, self._print_order))

    # -- ordering ----------------------------------------------------------

    def _open_selected_table(self) -> None:
        tables = self.ledger.tables
        if self.left_index is None or not (0 <= self.left_index < len(tables)):
            return
        table = tables[self.left_index]
        if not self.ledger.open_table(table.table_id):
            return
        self.view = VIEW_ORDER
        self.left_index = None
        self.right_index = 0
        self.category_index = 0
        self.system_status = f"Serving {table.label}"
        self._refresh_all()

    def _filtered_menu(self) -> list:
        return self.ledger.menu_for_category(CATEGORY_FILTERS[self.category_index])

    def _add_selected_menu_item(self) -> None:
        menu = self._filtered_menu()
        if not (0 <= self.right_index < len(menu)):
            return
        item = menu[self.right_index]
        if not self.ledger.add_item(item.item_id):
            self.system_status = "Sold out" if item.stock <= 0 else "Not enough stock!"
        else:
            self.system_status = f"Added {item.name}"
            self.left_index = next(
                idx for idx, line in enumerate(self.ledger.cart) if line.item_id == item.item_id
            )
        self._refresh_all()

    def _selected_cart_line(self):
        cart = self.ledger.cart
        if self.left_index is None or not (0 <= self.left_index < len(cart)):
            return None
        return cart[self.left_index]

    def action_adjust(self, delta: int) -> None:
        if self.view == VIEW_ORDER:
            line = self._selected_cart_line()
            if line is None:
                return
            if not self.ledger.set_quantity(line.item_id, delta):
                self.system_status = "Not enough stock!"
        elif self.view == VIEW_SETTINGS:
            item = self._selected_menu_item()
            if item is None:
                return
            self.ledger.restock(item.item_id, delta)
        else:
            return
        self._refresh_all()

    def action_edit_note(self) -> None:
        if self.view != VIEW_ORDER:
            return
        line = self._selected_cart_line()
        if line is None:
            return

        def apply(note: str | None) -> None:
            if note is not None:
                self.ledger.set_note(line.item_id, note)
            self._refresh_all()

        self.push_screen(NoteModal(line), apply)

    def action_checkout(self) -> None:
        if self.view != VIEW_ORDER:
            return
        order = self.ledger.checkout()
        if order is None:
            self.system_status = "Nothing to charge"
            self._refresh_all()
            return
        self.system_status = f"Charged order {order.order_id[:8]}"
        self.view = VIEW_TABLES
        self.left_index = None
        self._refresh_all()
        self.push_screen(ReceiptModal(order, self.ledger.profile, self._print_order))

    def _print_order(self, order: Order) -> str:
        try:
            print_receipt(order, self.ledger.profile)
        except Exception as exc:
            logger.warning("print_failed order_id=%s error=%r", order.order_id, exc)
            return f"Print failed: {exc}"
        return f"Printed {order.order_id[:8]}"

    # -- dashboard ---------------------------------------------------------

    def _dashboard_orders(self) -> list[Order]:
        return list(reversed(self.ledger.orders))

    def _selected_order(self) -> Order | None:
        orders = self._dashboard_orders()
        if self.left_index is None or not (0 <= self.left_index < len(orders)):
            return None
        return orders[self.left_index]

    def action_refund_selected(self) -> None:
        if self.view != VIEW_DASHBOARD:
            return
        order = self._selected_order()
        if order is None or not order.is_completed:
            return

        def apply(confirmed: bool | None) -> None:
            if confirmed and self.ledger.refund(order.order_id):
                self.system_status = f"Refunded {order.order_id[:8]}"
            self._refresh_all()

        self.push_screen(ConfirmModal("Refund this order? This cannot be undone."), apply)

    def action_run_analysis(self) -> None:
        if self.view != VIEW_DASHBOARD or self.analysis_running:
            return
        if self.desk.credits <= 0:
            self.system_status = "Insufficient AI Credits. Please upgrade your plan in Settings."
            self._refresh_all()
            return
        self.analysis_running = True
        self.system_status = "Analyzing..."
        self._refresh_all()
        self._run_analysis(self.ledger.completed_orders(), list(self.ledger.menu))

    @work(thread=True, exclusive=True)
    def _run_analysis(self, orders: list[Order], menu: list) -> None:
        try:
            text = self.desk.analyze(orders, menu)
        except InsufficientCredits as exc:
            self.call_from_thread(self._finish_analysis, str(exc), None)
            return
        # Forecast only if a credit is left after the report.
        points = self.desk.forecast(orders) if self.desk.credits > 0 else None
        self.call_from_thread(self._finish_analysis, text, points)

    def _finish_analysis(self, text: str, points: list[ForecastPoint] | None) -> None:
        self.analysis_running = False
        self.analysis_text = text
        if points is not None:
            self.forecast_points = points
            self.system_status = f"Analysis done. Credits left: {self.desk.credits}"
        else:
            self.system_status = "Analysis done. No credits left for the forecast."
        self._refresh_all()

    # -- settings ----------------------------------------------------------

    def _selected_menu_item(self):
        menu = self.ledger.menu
        if self.left_index is None or not (0 <= self.left_index < len(menu)):
            return None
        return menu[self.left_index]

    def _selected_settings_table(self):
        tables = self.ledger.tables
        if not (0 <= self.right_index < len(tables)):
            return None
        return tables[self.right_index]

    def action_edit_menu_item(self, new: bool) -> None:
        if self.view != VIEW_SETTINGS:
            return
        item = None if new else self._selected_menu_item()
        if not new and item is None:
            return

        def apply(values: dict[str, Any] | None) -> None:
            if values is not None:
                try:
                    saved = self.ledger.save_menu_item(**values)
                except ValueError as exc:
                    self.system_status = str(exc)
                else:
                    self.system_status = f"Saved {saved.name}" if saved else "Name and price are required"
            self._refresh_all()

        self.push_screen(MenuItemModal(item), apply)

    def action_delete_selected(self) -> None:
        if self.view != VIEW_SETTINGS:
            return
        item = self._selected_menu_item()
        if item is not None:

            def apply_item(confirmed: bool | None) -> None:
                if confirmed:
                    self.ledger.delete_menu_item(item.item_id)
                    self.left_index = None
                self._refresh_all()

            self.push_screen(ConfirmModal(f"Delete {item.name}?"), apply_item)
            return

        table = self._selected_settings_table()
        if table is None:
            return

        def apply_table(confirmed: bool | None) -> None:
            if confirmed:
                self.ledger.remove_table(table.table_id)
                self.right_index = 0
            self._refresh_all()

        self.push_screen(ConfirmModal(f"Delete table {table.label}?"), apply_table)

    def action_add_table(self) -> None:
        if self.view != VIEW_SETTINGS:
            return
        table = self.ledger.add_table()
        self.right_index = len(self.ledger.tables) - 1
        self.system_status = f"Added {table.label}"
        self._refresh_all()

    def action_nudge_table(self, direction: int) -> None:
        if self.view != VIEW_SETTINGS:
            return
        table = self._selected_settings_table()
        if table is None:
            return
        self.ledger.move_table(table.table_id, table.x + direction * TABLE_NUDGE_PCT, table.y)
        self._refresh_all()

    def action_cycle_currency(self) -> None:
        if self.view != VIEW_SETTINGS:
            return
        current = self.ledger.profile.currency
        idx = CURRENCIES.index(current) if current in CURRENCIES else -1
        self.ledger.update_profile(currency=CURRENCIES[(idx + 1) % len(CURRENCIES)])
        self._refresh_all()

    def action_adjust_tax(self, delta: int) -> None:
        if self.view != VIEW_SETTINGS:
            return
        try:
            self.ledger.update_profile(tax_rate=self.ledger.profile.tax_rate + delta)
        except ValueError as exc:
            self.system_status = str(exc)
        self._refresh_all()

    def action_edit_profile(self) -> None:
        if self.view != VIEW_SETTINGS:
            return

        def apply(values: dict[str, str] | None) -> None:
            if values is not None:
                try:
                    profile = self.ledger.update_profile(**values)
                except ValueError as exc:
                    self.system_status = str(exc)
                else:
                    self.system_status = f"Saved profile for {profile.name}"
            self._refresh_all()

        self.push_screen(ProfileModal(self.ledger.profile), apply)

    # -- rendering ---------------------------------------------------------

    def _left_rows(self) -> list[Text]:
        profile = self.ledger.profile
        if self.view == VIEW_TABLES:
            return [format_table_label(table) for table in self.ledger.tables]
        if self.view == VIEW_ORDER:
            return [format_cart_line(line, profile) for line in self.ledger.cart]
        if self.view == VIEW_DASHBOARD:
            return [
                format_order_row(order, profile, self.ledger.table(order.table_id))
                for order in self._dashboard_orders()
            ]
        return [format_menu_label(item, profile) for item in self.ledger.menu]

    def _right_rows(self) -> list[Text]:
        if self.view == VIEW_ORDER:
            return [format_menu_label(item, self.ledger.profile) for item in self._filtered_menu()]
        if self.view == VIEW_SETTINGS:
            return [format_table_label(table) for table in self.ledger.tables]
        return []

    def _refresh_all(self) -> None:
        try:
            left_title = self._main_widget("#left-title", Static)
            right_title = self._main_widget("#right-title", Static)
        except NoMatches:
            return

        profile = self.ledger.profile
        self.title = f"{self.TITLE} - {profile.name}"
        if self.view == VIEW_TABLES:
            self.sub_title = "Tables"
            left_title.update("Floor map (J/K select, Enter open)")
            right_title.update("Hardware")
            self._render_list("#left-list", self._left_rows(), self.left_index)
            _, card_msg = card_reader_status()
            self._set_static("#right-list", f"{self.system_status or 'Ready'}\n{card_msg}")
        elif self.view == VIEW_ORDER:
            table = self.ledger.table(self.ledger.active_table_id)
            self.sub_title = f"Ordering {table.label if table else ''}"
            left_title.update(f"Current order - {table.label if table else ''}")
            filter_key = CATEGORY_FILTERS[self.category_index]
            right_title.update(f"Menu: {category_label(filter_key) if filter_key else 'All'} (F)")
            rows = self._left_rows()
            if rows:
                rows.append(format_cart_totals(self.ledger.cart_total(), profile))
            self._render_list("#left-list", rows, self.left_index)
            self._render_list("#right-list", self._right_rows(), self.right_index)
        elif self.view == VIEW_DASHBOARD:
            self.sub_title = "Admin"
            left_title.update("Transactions (Enter receipt, R refund)")
            right_title.update(f"Overview - AI credits {self.desk.credits} (A analyze)")
            self._render_list("#left-list", self._left_rows(), self.left_index)
            overview = format_summary(self.ledger.summary(), profile)
            if self.analysis_text:
                overview.append("\n\nAI Analyst\n", style="bold")
                overview.append(self.analysis_text)
            if self.forecast_points:
                overview.append("\n\n7-day forecast\n", style="bold")
                overview.append_text(format_forecast(self.forecast_points))
            self._set_static("#right-list", overview)
        else:
            self.sub_title = "Settings"
            left_title.update("Menu (M new, E edit, +/- stock, D delete)")
            right_title.update(
                f"{profile.name} (P edit) | {profile.currency} | VAT {profile.tax_rate}% ([ ]) | Floor (T add, arrows move)"
            )
            self._render_list("#left-list", self._left_rows(), self.left_index)
            self._render_list("#right-list", self._right_rows(), self.right_index)
        self._refresh_status_bar()

    def _refresh_status_bar(self) -> None:
        self._set_static(
            "#status-bar",
            f"F2 Tables  F3 Admin  F4 Settings  Ctrl+S Charge  Ctrl+L Logout\n{self.system_status or 'Ready'}",
        )

    def _main_widget(self, selector: str, expect_type: type[Static]) -> Static:
        # Query the base screen so refreshes from modal callbacks still land.
        return self.screen_stack[0].query_one(selector, expect_type)

    def _set_static(self, selector: str, content: Any) -> None:
        try:
            self._main_widget(selector, Static).update(content)
        except NoMatches:
            return

    def _visible_rows(self, widget: Static) -> int:
        height = widget.size.height
        if height <= 0:
            return 8
        return max(1, height)

    def _window_bounds(self, total: int, rows: int, selected: int | None) -> tuple[int, int]:
        if total <= 0:
            return (0, 0)

        rows = max(1, rows)
        if total <= rows:
            return (0, total)

        if selected is None:
            start = 0
        else:
            half = rows // 2
            start = selected - half
            start = max(0, start)
            start = min(start, total - rows)

        return (start, start + rows)

    def _render_list(self, selector: str, rows: list[Text], selected: int | None) -> None:
        widget = self._main_widget(selector, Static)
        if not rows:
            widget.update("(nothing here yet)")
            return

        start, end = self._window_bounds(len(rows), self._visible_rows(widget), selected)
        lines = Text()
        if start > 0:
            lines.append("⋮\n", style="dim")

        for idx in range(start, end):
            if idx > start:
                lines.append("\n")
            pointer = "➤ " if idx == selected else "  "
            lines.append(pointer)
            lines.append_text(rows[idx])

        if end < len(rows):
            lines.append("\n⋮", style="dim")

        widget.update(lines)
