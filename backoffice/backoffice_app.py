"""Main Textual app class."""

from __future__ import annotations

import logging
from datetime import datetime

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.css.query import NoMatches
from textual.events import Key
from textual.reactive import reactive
from textual.screen import ModalScreen
from textual.widgets import Header, Static

from backoffice.analytics import summarize
from backoffice.catalog import MenuCatalog, draft_from_form, form_from_item
from backoffice.config import ALL_FILTER
from backoffice.data import ACCOUNT_DIRECTORY, seed_menu_items, seed_orders
from backoffice.errors import BackofficeError
from backoffice.ledger import OrderDraft, OrderLedger
from backoffice.login_modal import LoginScreen
from backoffice.menu_item_modal import MenuItemScreen
from backoffice.models import Account, MenuItem, MenuItemForm, Order
from backoffice.order_modal import OrderScreen
from backoffice.query import filter_menu_items, filter_orders
from backoffice.rendering import (
    DEFAULT_PAGE_HEIGHT,
    format_analytics,
    format_menu_detail,
    format_menu_row,
    format_nav,
    format_order_detail,
    format_order_row,
    format_record_page,
    selector_label,
)
from backoffice.session import AuthGate

logger = logging.getLogger(__name__)

VIEWS = ("menu", "orders", "analytics")


class BackofficeApp(App):
    """A Textual app for editing the menu, tracking orders and reading analytics."""

    TITLE = "Restaurant Back-Office"
    SUB_TITLE = "Menu / Orders / Analytics"

    CSS = """
    Screen {
        layout: vertical;
    }

    #nav {
        height: 1;
        margin: 0 1;
    }

    #main-layout {
        height: 1fr;
    }

    #list-pane {
        width: 3fr;
        border: round $primary;
        padding: 1;
    }

    #detail-pane {
        width: 2fr;
        border: round $secondary;
        padding: 1;
    }

    #search-bar {
        border: heavy $secondary;
        padding: 0 1;
        margin-bottom: 1;
        height: 4;
    }

    #records {
        height: 1fr;
        border: tall $surface;
        padding: 0 1;
    }

    #detail {
        height: 1fr;
        padding: 0 1;
    }
    """

    active_view = reactive("menu")
    input_state = reactive("normal")
    search_text = reactive("")
    selector_index = reactive(0)
    selected_index = reactive(0)

    BINDINGS = [
        ("up", "move_selection(-1)", "Previous"),
        ("down", "move_selection(1)", "Next"),
        ("backspace", "backspace_search", "Delete search char"),
        ("ctrl+c", "cancel_search", "Clear search"),
        ("escape", "cancel_search", "Clear search"),
        Binding("ctrl+q", "quit", "Quit", priority=True),
    ]

    def __init__(self, gate: AuthGate | None = None, catalog: MenuCatalog | None = None, ledger: OrderLedger | None = None) -> None:
        super().__init__()
        self.gate = gate or AuthGate(ACCOUNT_DIRECTORY)
        self.catalog = catalog or MenuCatalog(self.gate, seed_menu_items())
        self.ledger = ledger or OrderLedger(self.gate, seed_orders(datetime.now()))
        self.system_status = ""

    def compose(self) -> ComposeResult:
        yield Header()
        yield Static(id="nav")
        with Horizontal(id="main-layout"):
            with Vertical(id="list-pane"):
                yield Static(id="search-bar")
                yield Static(id="records")
            with Vertical(id="detail-pane"):
                yield Static(id="detail")

    def on_mount(self) -> None:
        self._refresh_all()
        self._open_login()

    def on_key(self, event: Key) -> None:
        # While a modal is active, let the modal own keyboard handling.
        if isinstance(self.screen, ModalScreen):
            return

        if self.input_state == "active":
            if event.key == "enter":
                self.input_state = "normal"
                self._refresh_all()
                event.stop()
                return
            if event.is_printable and event.character:
                self.search_text += event.character
                self.selected_index = 0
                self._refresh_all()
                event.stop()
            return

        if not event.is_printable or not event.character or len(event.character) != 1:
            return

        key = event.character.lower()
        handlers = {
            "1": lambda: self.switch_view("menu"),
            "2": lambda: self.switch_view("orders"),
            "3": lambda: self.switch_view("analytics"),
            "f": self._start_search,
            "c": self._cycle_selector,
            "j": lambda: self.action_move_selection(1),
            "k": lambda: self.action_move_selection(-1),
            "l": self.logout,
        }
        if self.active_view == "menu":
            handlers.update({"a": self._open_add_item, "e": self._open_edit_item, "d": self._delete_selected_item})
        elif self.active_view == "orders":
            handlers.update({"n": self._open_new_order, "s": self._advance_selected_order})

        handler = handlers.get(key)
        if handler is None:
            return
        handler()
        event.stop()

    def switch_view(self, view: str) -> None:
        if view not in VIEWS:
            return
        self.active_view = view
        self.input_state = "normal"
        self.search_text = ""
        self.selector_index = 0
        self.selected_index = 0
        self.system_status = ""
        self._refresh_all()

    def logout(self) -> None:
        self.gate.end_session()
        self.switch_view("menu")
        self._open_login()

    def action_move_selection(self, delta: int) -> None:
        if isinstance(self.screen, ModalScreen):
            return
        records = self._visible_records()
        if not records:
            self.selected_index = 0
            return
        self.selected_index = (self.selected_index + delta) % len(records)
        self._refresh_all()

    def action_backspace_search(self) -> None:
        if isinstance(self.screen, ModalScreen) or self.input_state != "active":
            return
        if not self.search_text:
            return
        self.search_text = self.search_text[:-1]
        self.selected_index = 0
        self._refresh_all()

    def action_cancel_search(self) -> None:
        if isinstance(self.screen, ModalScreen):
            return
        if self.input_state == "normal" and not self.search_text:
            return
        self.input_state = "normal"
        self.search_text = ""
        self.selected_index = 0
        self._refresh_all()

    def _start_search(self) -> None:
        if self.active_view == "analytics":
            return
        self.input_state = "active"
        self.selected_index = 0
        self._refresh_all()

    def _selectors(self) -> list[str]:
        if self.active_view == "menu":
            return self.catalog.list_categories()
        if self.active_view == "orders":
            return self.ledger.list_statuses()
        return [ALL_FILTER]

    def _current_selector(self) -> str:
        selectors = self._selectors()
        if self.selector_index >= len(selectors):
            self.selector_index = 0
        return selectors[self.selector_index]

    def _cycle_selector(self) -> None:
        self.selector_index = (self.selector_index + 1) % len(self._selectors())
        self.selected_index = 0
        self._refresh_all()

    def _visible_records(self) -> list[MenuItem] | list[Order]:
        if self.active_view == "menu":
            return filter_menu_items(self.catalog.items, self.search_text, self._current_selector())
        if self.active_view == "orders":
            return filter_orders(self.ledger.orders, self.search_text, self._current_selector())
        return []

    def _selected_record(self) -> MenuItem | Order | None:
        records = self._visible_records()
        if not (0 <= self.selected_index < len(records)):
            return None
        return records[self.selected_index]

    def _report(self, exc: BackofficeError) -> None:
        logger.info("report ::: %s %s", exc.error_code, exc.message)
        self.system_status = exc.message
        self._refresh_all()

    def _open_login(self) -> None:
        self.push_screen(LoginScreen(self.gate), self._on_login)

    def _on_login(self, account: Account | None) -> None:
        if account is None:
            self.exit()
            return
        self.system_status = f"Signed in as {account.name} ({account.role.value})"
        self._refresh_all()

    def _open_add_item(self) -> None:
        if not self.gate.is_admin:
            self.system_status = "Admin only: adding menu items is locked"
            self._refresh_all()
            return
        self.push_screen(MenuItemScreen(form_from_item(None), self._save_new_item, editing=False), self._on_item_saved)

    def _open_edit_item(self) -> None:
        item = self._selected_record()
        if not isinstance(item, MenuItem):
            return
        if not self.gate.is_admin:
            self.system_status = "Admin only: editing menu items is locked"
            self._refresh_all()
            return

        def save(form: MenuItemForm) -> MenuItem:
            draft = draft_from_form(form)
            return self.catalog.update_item(MenuItem.from_draft(item.id, draft))

        self.push_screen(MenuItemScreen(form_from_item(item), save, editing=True), self._on_item_saved)

    def _save_new_item(self, form: MenuItemForm) -> MenuItem:
        return self.catalog.add_item(draft_from_form(form))

    def _on_item_saved(self, item: MenuItem | None) -> None:
        if item is not None:
            self.system_status = f"Saved {item.name}"
        self._refresh_all()

    def _delete_selected_item(self) -> None:
        item = self._selected_record()
        if not isinstance(item, MenuItem):
            return
        try:
            self.catalog.remove_item(item.id)
        except BackofficeError as exc:
            self._report(exc)
            return
        self.system_status = f"Deleted {item.name}"
        self._refresh_all()

    def _open_new_order(self) -> None:
        self.push_screen(OrderScreen(self.catalog.available_items(), self._submit_draft), self._on_order_created)

    def _submit_draft(self, draft: OrderDraft) -> Order:
        return self.ledger.place_draft(draft)

    def _on_order_created(self, order: Order | None) -> None:
        if order is not None:
            self.system_status = f"Created {order.id} for {order.customer_name}"
        self._refresh_all()

    def _advance_selected_order(self) -> None:
        order = self._selected_record()
        if not isinstance(order, Order):
            return
        try:
            order = self.ledger.advance_status(order.id)
        except BackofficeError as exc:
            self._report(exc)
            return
        self.system_status = f"{order.id} is now {order.status.value}"
        self._refresh_all()

    def _main_widget(self, selector: str) -> Static:
        # The base screen stays mounted underneath any modal.
        return self.screen_stack[0].query_one(selector, Static)

    def _refresh_all(self) -> None:
        try:
            self._main_widget("#nav").update(format_nav(self.active_view))
            self._refresh_search_bar()
            self._refresh_records()
        except NoMatches:
            return

    def _refresh_search_bar(self) -> None:
        bar = self._main_widget("#search-bar")
        user = self.gate.current_user
        who = f"{user.name} [{user.role.value}]" if user is not None else "signed out"
        text = Text()
        if self.active_view == "analytics":
            text.append("Derived from the current order ledger.")
        else:
            kind = "Category" if self.active_view == "menu" else "Status"
            text.append(f"{kind}: {selector_label(self._current_selector())}  ", style="bold")
            if self.input_state == "active":
                text.append(f"Search: {self.search_text}|", style="bold #d9822b")
            else:
                text.append(f"Search: {self.search_text or '-'}")
                text.append("  (F search, C filter)", style="dim")
        text.append(f"\n{who}  ")
        text.append(self.system_status or "Ready", style="italic")
        bar.update(text)

    def _refresh_records(self) -> None:
        records_widget = self._main_widget("#records")
        detail_widget = self._main_widget("#detail")

        if self.active_view == "analytics":
            records_widget.update(format_analytics(summarize(self.ledger.orders, self.catalog.items)))
            detail_widget.update(Text("1/2/3 switch view, L logout, Ctrl+Q quit", style="dim"))
            return

        records = self._visible_records()
        if not records:
            records_widget.update("No results")
            detail_widget.update("")
            return

        if self.selected_index >= len(records):
            self.selected_index = len(records) - 1

        now = self.ledger.now()
        rows = [
            format_menu_row(record) if isinstance(record, MenuItem) else format_order_row(record, now)
            for record in records
        ]
        height = records_widget.size.height or DEFAULT_PAGE_HEIGHT
        records_widget.update(format_record_page(rows, self.selected_index, height))

        selected = records[self.selected_index]
        if isinstance(selected, MenuItem):
            detail_widget.update(format_menu_detail(selected, can_edit=self.gate.is_admin))
        else:
            detail_widget.update(format_order_detail(selected, now))
