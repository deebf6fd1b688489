import asyncio
from decimal import Decimal

from backoffice.backoffice_app import BackofficeApp
from backoffice.login_modal import LoginScreen
from backoffice.menu_item_modal import MenuItemScreen
from backoffice.models import OrderStatus, Role
from backoffice.order_modal import OrderScreen

from .conftest import ADMIN_EMAIL, ADMIN_PASSWORD, STAFF_EMAIL, STAFF_PASSWORD


def _run(scenario):
    async def runner():
        app = BackofficeApp()
        async with app.run_test() as pilot:
            await pilot.pause()
            await scenario(app, pilot)
        return app

    return asyncio.run(runner())


class TestBackofficeApp:
    """Headless runs of the Textual app"""

    def test_login_screen_shown_first(self):
        async def scenario(app, pilot):
            assert isinstance(app.screen, LoginScreen)
            assert app.gate.current_role() is Role.NONE

        _run(scenario)

    def test_bad_login_keeps_modal_open(self):
        async def scenario(app, pilot):
            app.screen.login(ADMIN_EMAIL, "wrong")
            await pilot.pause()

            assert isinstance(app.screen, LoginScreen)
            assert app.screen.error == "Invalid email or password"

        _run(scenario)

    def test_staff_can_advance_orders_but_not_delete_items(self):
        async def scenario(app, pilot):
            app.screen.login(STAFF_EMAIL, STAFF_PASSWORD)
            await pilot.pause()
            assert not isinstance(app.screen, LoginScreen)

            await pilot.press("d")
            assert len(app.catalog) == 5
            assert app.system_status.startswith("Admin only")

            await pilot.press("2")
            assert app.active_view == "orders"
            await pilot.press("s")
            assert app.ledger.get("ORD-001").status is OrderStatus.READY

        _run(scenario)

    def test_admin_search_and_delete(self):
        async def scenario(app, pilot):
            app.screen.login(ADMIN_EMAIL, ADMIN_PASSWORD)
            await pilot.pause()

            await pilot.press("f", "b", "r", "e", "a", "d", "enter")
            assert app.search_text == "bread"
            assert app.input_state == "normal"

            await pilot.press("d")
            assert app.catalog.get("4") is None
            assert len(app.catalog) == 4

        _run(scenario)

    def test_logout_reopens_login(self):
        async def scenario(app, pilot):
            app.screen.login(ADMIN_EMAIL, ADMIN_PASSWORD)
            await pilot.pause()

            await pilot.press("l")
            await pilot.pause()

            assert app.gate.current_role() is Role.NONE
            assert isinstance(app.screen, LoginScreen)

        _run(scenario)

    def test_admin_adds_item_through_editor(self):
        async def scenario(app, pilot):
            app.screen.login(ADMIN_EMAIL, ADMIN_PASSWORD)
            await pilot.pause()

            await pilot.press("a")
            await pilot.pause()
            assert isinstance(app.screen, MenuItemScreen)

            await pilot.press("s", "o", "u", "p", "down")
            await pilot.press("s", "t", "a", "r", "t", "e", "r", "s", "down")
            await pilot.press("dollar_sign", "4", "full_stop", "5", "down")
            await pilot.press("h", "o", "t", "down")
            await pilot.press("space", "w", "a", "r", "m", "comma", "comma", "space", "v", "e", "g", "a", "n", "space")
            await pilot.press("ctrl+s")
            await pilot.pause()

            assert not isinstance(app.screen, MenuItemScreen)
            assert len(app.catalog) == 6
            item = app.catalog.items[-1]
            assert item.name == "soup"
            assert item.category == "starters"
            assert item.price == Decimal("4.50")
            assert item.tags == ("warm", "vegan")
            assert app.system_status == "Saved soup"

        _run(scenario)

    def test_editor_keeps_validation_error_inline(self):
        async def scenario(app, pilot):
            app.screen.login(ADMIN_EMAIL, ADMIN_PASSWORD)
            await pilot.pause()

            await pilot.press("a")
            await pilot.pause()
            await pilot.press("ctrl+s")
            await pilot.pause()

            assert isinstance(app.screen, MenuItemScreen)
            assert app.screen.error == "Name is required"
            assert len(app.catalog) == 5

            await pilot.press("escape")
            await pilot.pause()
            assert not isinstance(app.screen, MenuItemScreen)
            assert len(app.catalog) == 5

        _run(scenario)

    def test_staff_composes_order(self):
        async def scenario(app, pilot):
            app.screen.login(STAFF_EMAIL, STAFF_PASSWORD)
            await pilot.pause()

            await pilot.press("2", "n")
            await pilot.pause()
            assert isinstance(app.screen, OrderScreen)

            # first menu row sits below the customer and notes rows
            await pilot.press("down", "down", "plus", "plus", "plus", "minus")
            assert app.screen.draft.quantity_of("1") == 2

            await pilot.press("ctrl+s")
            await pilot.pause()
            assert isinstance(app.screen, OrderScreen)
            assert app.screen.error == "Customer name is required"
            assert len(app.ledger) == 3

            await pilot.press("up", "up", "d", "a", "n", "ctrl+s")
            await pilot.pause()

            assert not isinstance(app.screen, OrderScreen)
            order = app.ledger.get("ORD-004")
            assert order.customer_name == "dan"
            assert order.total == Decimal("25.98")
            assert order.status is OrderStatus.PLACED
            assert app.system_status == "Created ORD-004 for dan"

        _run(scenario)
