"""New order composition modal screen."""

from __future__ import annotations

from typing import Callable

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Container
from textual.events import Key
from textual.reactive import reactive
from textual.screen import ModalScreen
from textual.widgets import Static

from backoffice.errors import BackofficeError
from backoffice.ledger import OrderDraft
from backoffice.models import MenuItem, Order
from backoffice.rendering import format_price


class OrderScreen(ModalScreen[Order | None]):
    """Compose a draft from available menu items and submit it."""

    CSS = """
    OrderScreen {
        align: center middle;
        background: $background 60%;
    }

    #order-dialog {
        width: 76;
        height: auto;
        max-height: 90%;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #order-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    #order-body {
        color: white;
    }

    #order-error {
        color: #ffb3b3;
        margin-top: 1;
    }

    #order-help {
        margin-top: 1;
        color: #dddddd;
    }
    """

    cursor_index = reactive(0)
    _FIELD_ROWS = ("customer_name", "notes")
    _FIELD_LABELS = {"customer_name": "Customer", "notes": "Notes"}

    def __init__(self, menu_items: list[MenuItem], on_submit: Callable[[OrderDraft], Order]) -> None:
        super().__init__()
        self.menu_items = menu_items
        self.on_submit = on_submit
        self.draft = OrderDraft()
        self.error = ""

    def compose(self) -> ComposeResult:
        with Container(id="order-dialog"):
            yield Static("Create New Order", id="order-title")
            yield Static(id="order-body")
            yield Static(id="order-error")
            yield Static(id="order-help")

    def on_mount(self) -> None:
        self._refresh_content()

    def on_key(self, event: Key) -> None:
        if event.key == "escape":
            self.dismiss(None)
            event.stop()
            return

        if event.key == "ctrl+s":
            self.submit()
            event.prevent_default()
            event.stop()
            return

        if event.key in {"up", "down", "tab", "shift+tab"}:
            delta = -1 if event.key in {"up", "shift+tab"} else 1
            self.cursor_index = (self.cursor_index + delta) % self._row_count()
            self._refresh_content()
            event.prevent_default()
            event.stop()
            return

        menu_item = self._menu_item_at_cursor()
        if menu_item is not None:
            if event.key in {"enter", "plus"} or event.character == "+":
                self.draft.add_line_item(menu_item)
            elif event.key == "minus" or event.character == "-":
                self.draft.change_quantity(menu_item.id, self.draft.quantity_of(menu_item.id) - 1)
            self.error = ""
            self._refresh_content()
            event.stop()
            return

        field = self._FIELD_ROWS[self.cursor_index]
        if event.key == "enter":
            self.cursor_index = (self.cursor_index + 1) % self._row_count()
        elif event.key == "backspace":
            setattr(self.draft, field, getattr(self.draft, field)[:-1])
        elif event.is_printable and event.character:
            setattr(self.draft, field, getattr(self.draft, field) + event.character)
        else:
            return
        self.error = ""
        self._refresh_content()
        event.stop()

    def submit(self) -> None:
        try:
            order = self.on_submit(self.draft)
        except BackofficeError as exc:
            self.error = exc.message
            self._refresh_content()
            return
        self.dismiss(order)

    def _row_count(self) -> int:
        return len(self._FIELD_ROWS) + len(self.menu_items)

    def _menu_item_at_cursor(self) -> MenuItem | None:
        idx = self.cursor_index - len(self._FIELD_ROWS)
        if 0 <= idx < len(self.menu_items):
            return self.menu_items[idx]
        return None

    def _refresh_content(self) -> None:
        content = Text(style="white")
        for idx, field in enumerate(self._FIELD_ROWS):
            selected = idx == self.cursor_index
            pointer = "➤ " if selected else "  "
            content.append(f"{pointer}{self._FIELD_LABELS[field]:<9} ", style="bold white" if selected else "white")
            content.append(getattr(self.draft, field))
            if selected:
                content.append("|")
            content.append("\n")

        content.append("\nMenu\n", style="bold")
        if not self.menu_items:
            content.append("  (no available items)\n", style="dim")
        for offset, item in enumerate(self.menu_items):
            selected = offset + len(self._FIELD_ROWS) == self.cursor_index
            pointer = "➤ " if selected else "  "
            qty = self.draft.quantity_of(item.id)
            qty_text = f"x{qty}" if qty else "  "
            content.append(f"{pointer}{qty_text:>4} {item.name}", style="bold white" if selected else "white")
            content.append(f"  {format_price(item.price)}\n", style="#d9822b")

        content.append("\nOrder Items\n", style="bold")
        if not self.draft.lines:
            content.append("  No items added yet\n", style="dim")
        for line in self.draft.lines:
            content.append(f"  {line.quantity}x {line.name}  {format_price(line.line_total)}\n")
        content.append(f"\nTotal: {format_price(self.draft.total)}", style="bold")

        self.query_one("#order-body", Static).update(content)
        self.query_one("#order-error", Static).update(self.error)
        self.query_one("#order-help", Static).update(
            "↑/↓ move, type to edit, Enter/+ add, - remove, Ctrl+S create, Esc cancel"
        )
