from __future__ import annotations

from decimal import Decimal

from textual.widgets import Input

from picopos.confirm_modal import ConfirmModal
from picopos.login_modal import LoginModal
from picopos.menu_item_modal import MenuItemModal
from picopos.models import REFUNDED, TABLE_EMPTY
from picopos.pos_app import VIEW_DASHBOARD, VIEW_ORDER, VIEW_SETTINGS, VIEW_TABLES, PosApp
from picopos.profile_modal import ProfileModal
from picopos.receipt import receipt_lines
from picopos.receipt_modal import ReceiptModal


class StubProvider:
    def analyze(self, orders, menu):
        return f"{len(orders)} orders analyzed"

    def forecast(self, orders):
        return '[{"day": "Sat", "revenue": 42}]'


def make_app(email: str = "owner@pico.test") -> PosApp:
    return PosApp(email=email, provider=StubProvider())


async def test_open_table_order_and_charge():
    app = make_app()
    async with app.run_test() as pilot:
        await pilot.press("j", "enter")
        assert app.view == VIEW_ORDER
        assert app.ledger.table(1).is_occupied

        await pilot.press("enter", "enter")
        assert app.ledger.cart[0].quantity == 2

        await pilot.press("ctrl+s")
        await pilot.pause()
        assert len(app.ledger.orders) == 1
        assert app.ledger.table(1).status == TABLE_EMPTY
        assert isinstance(app.screen, ReceiptModal)

        await pilot.press("escape")
        await pilot.pause()
        assert app.view == VIEW_TABLES
        assert not isinstance(app.screen, ReceiptModal)


async def test_sold_out_item_is_rejected():
    app = make_app()
    async with app.run_test() as pilot:
        await pilot.press("j", "enter")
        # Dessert filter: Chocolate Cake, then the sold-out Cheese Cake.
        await pilot.press("f", "f", "f", "down", "enter")
        assert app.ledger.cart == []
        assert app.system_status == "Sold out"


async def test_leaving_order_view_frees_table():
    app = make_app()
    async with app.run_test() as pilot:
        await pilot.press("j", "enter", "enter", "escape")
        assert app.view == VIEW_TABLES
        assert app.ledger.cart == []
        assert not app.ledger.table(1).is_occupied


async def test_refund_requires_confirmation():
    app = make_app()
    async with app.run_test() as pilot:
        await pilot.press("j", "enter", "enter", "ctrl+s")
        await pilot.pause()
        await pilot.press("escape", "f3")
        assert app.view == VIEW_DASHBOARD

        await pilot.press("j", "r")
        await pilot.pause()
        assert isinstance(app.screen, ConfirmModal)
        await pilot.press("n")
        await pilot.pause()
        assert app.ledger.orders[0].is_completed

        await pilot.press("r")
        await pilot.pause()
        await pilot.press("y")
        await pilot.pause()
        assert app.ledger.orders[0].status == REFUNDED
        assert app.ledger.summary().count == 0


async def test_ai_analysis_runs_in_worker():
    app = make_app()
    async with app.run_test() as pilot:
        await pilot.press("f3", "a")
        await app.workers.wait_for_complete()
        await pilot.pause()
        assert app.analysis_text == "0 orders analyzed"
        assert [point.day for point in app.forecast_points] == ["Sat"]
        assert app.desk.credits == 48


async def test_settings_add_table_and_restock():
    app = make_app()
    async with app.run_test() as pilot:
        await pilot.press("f4")
        assert app.view == VIEW_SETTINGS
        tables_before = len(app.ledger.tables)
        await pilot.press("t")
        assert len(app.ledger.tables) == tables_before + 1

        stock_before = app.ledger.menu[0].stock
        await pilot.press("j", "minus")
        assert app.ledger.menu[0].stock == stock_before - 1

        await pilot.press("c")
        assert app.ledger.profile.currency == "KRW"


async def test_login_prompt_picks_profile():
    app = PosApp(provider=StubProvider())
    async with app.run_test() as pilot:
        await pilot.pause()
        assert isinstance(app.screen, LoginModal)
        await pilot.press("d", "e", "m", "o", "enter")
        await pilot.pause()
        assert app.ledger.profile.name == "Blue Bottle Demo"


async def test_analysis_with_one_credit_keeps_report():
    app = make_app()
    async with app.run_test() as pilot:
        app.desk.credits = 1
        await pilot.press("f3", "a")
        await app.workers.wait_for_complete()
        await pilot.pause()
        assert app.analysis_text == "0 orders analyzed"
        assert app.forecast_points == []
        assert app.desk.credits == 0
        assert app.system_status == "Analysis done. No credits left for the forecast."


async def _submit_form(pilot, last_field: str) -> None:
    pilot.app.screen.query_one(last_field, Input).focus()
    await pilot.pause()
    await pilot.press("enter")
    await pilot.pause()


async def test_profile_edit_reaches_receipt():
    app = make_app()
    async with app.run_test() as pilot:
        await pilot.press("f4", "p")
        await pilot.pause()
        assert isinstance(app.screen, ProfileModal)
        app.screen.query_one("#profile-pan_number", Input).value = "555-000-111"
        app.screen.query_one("#profile-location", Input).value = "Thamel"
        await _submit_form(pilot, "#profile-theme_color")
        assert app.ledger.profile.pan_number == "555-000-111"
        assert app.ledger.profile.location == "Thamel"

        await pilot.press("f2", "j", "enter", "enter", "ctrl+s")
        await pilot.pause()
        assert isinstance(app.screen, ReceiptModal)
        lines = receipt_lines(app.screen.order, app.screen.profile)
        assert "PAN: 555-000-111" in lines
        assert "Thamel" in lines


async def test_profile_form_reports_invalid_tax():
    app = make_app()
    async with app.run_test() as pilot:
        await pilot.press("f4", "p")
        await pilot.pause()
        app.screen.query_one("#profile-tax_rate", Input).value = "nan"
        app.screen.query_one("#profile-name", Input).value = "Renamed"
        await _submit_form(pilot, "#profile-theme_color")
        assert app.system_status == "Not a valid amount: 'nan'"
        assert app.ledger.profile.name == "Pico Cafe"
        assert app.ledger.profile.tax_rate == Decimal("8")


async def test_menu_item_form_reports_invalid_numbers():
    app = make_app()
    async with app.run_test() as pilot:
        menu_before = list(app.ledger.menu)
        for price, stock, status in (
            ("nan", "", "Not a valid amount: 'nan'"),
            ("3", "-3", "Stock must be non-negative"),
        ):
            await pilot.press("f4", "m")
            await pilot.pause()
            assert isinstance(app.screen, MenuItemModal)
            app.screen.query_one("#item-name", Input).value = "Tea"
            app.screen.query_one("#item-price", Input).value = price
            app.screen.query_one("#item-stock", Input).value = stock
            await _submit_form(pilot, "#item-stock")
            assert app.system_status == status
        assert app.ledger.menu == menu_before
