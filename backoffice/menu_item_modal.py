"""Menu item editor modal screen."""

from __future__ import annotations

from typing import Callable

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Container
from textual.events import Key
from textual.screen import ModalScreen
from textual.widgets import Static

from backoffice.errors import BackofficeError
from backoffice.models import MenuItem, MenuItemForm


class MenuItemScreen(ModalScreen[MenuItem | None]):
    """Edit the raw text form of a menu item and hand it to ``on_save``.

    ``on_save`` does the normalization and the catalog write; any
    BackofficeError it raises keeps the modal open with the message shown.
    """

    CSS = """
    MenuItemScreen {
        align: center middle;
        background: $background 60%;
    }

    #item-dialog {
        width: 72;
        height: auto;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #item-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    #item-error {
        color: #ffb3b3;
        margin-top: 1;
    }

    #item-help {
        margin-top: 1;
        color: #dddddd;
    }
    """

    _TEXT_FIELDS = ("name", "category", "price", "description", "tags", "ingredients")
    _ROWS = (*_TEXT_FIELDS, "available")
    _PLACEHOLDERS = {
        "tags": "vegetarian, spicy, popular",
        "ingredients": "tomato, cheese, basil",
    }

    def __init__(self, form: MenuItemForm, on_save: Callable[[MenuItemForm], MenuItem], editing: bool) -> None:
        super().__init__()
        self.form = form
        self.on_save = on_save
        self.editing = editing
        self.cursor_index = 0
        self.error = ""

    def compose(self) -> ComposeResult:
        with Container(id="item-dialog"):
            yield Static("Edit Menu Item" if self.editing else "Add Menu Item", id="item-title")
            yield Static(id="item-body")
            yield Static(id="item-error")
            yield Static(id="item-help")

    def on_mount(self) -> None:
        self._refresh_content()

    def on_key(self, event: Key) -> None:
        if event.key == "escape":
            self.dismiss(None)
            event.stop()
            return

        if event.key == "ctrl+s":
            self.save()
            event.prevent_default()
            event.stop()
            return

        if event.key in {"up", "down", "tab", "shift+tab"}:
            delta = -1 if event.key in {"up", "shift+tab"} else 1
            self.cursor_index = (self.cursor_index + delta) % len(self._ROWS)
            self._refresh_content()
            event.prevent_default()
            event.stop()
            return

        row = self._ROWS[self.cursor_index]
        if row == "available":
            if event.key in {"space", "enter"}:
                self.form.available = not self.form.available
                self._refresh_content()
            event.stop()
            return

        if event.key == "enter":
            self.cursor_index = (self.cursor_index + 1) % len(self._ROWS)
            self._refresh_content()
            event.stop()
            return

        if event.key == "backspace":
            setattr(self.form, row, getattr(self.form, row)[:-1])
            self.error = ""
            self._refresh_content()
            event.stop()
            return

        if event.is_printable and event.character:
            setattr(self.form, row, getattr(self.form, row) + event.character)
            self.error = ""
            self._refresh_content()
            event.stop()

    def save(self) -> None:
        try:
            item = self.on_save(self.form)
        except BackofficeError as exc:
            self.error = exc.message
            self._refresh_content()
            return
        self.dismiss(item)

    def _refresh_content(self) -> None:
        content = Text(style="white")
        for idx, row in enumerate(self._ROWS):
            if idx > 0:
                content.append("\n")
            selected = idx == self.cursor_index
            pointer = "➤ " if selected else "  "
            content.append(f"{pointer}{row.capitalize():<12} ", style="bold white" if selected else "white")
            if row == "available":
                content.append("[x] Available" if self.form.available else "[ ] Available")
                continue
            value = getattr(self.form, row)
            if value:
                content.append(value)
            elif row in self._PLACEHOLDERS:
                content.append(self._PLACEHOLDERS[row], style="dim")
            if selected:
                content.append("|")

        self.query_one("#item-body", Static).update(content)
        self.query_one("#item-error", Static).update(self.error)
        self.query_one("#item-help", Static).update(
            "↑/↓ move, type to edit, Space toggle, Ctrl+S save, Esc cancel"
        )
