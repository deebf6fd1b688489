"""Sign-in modal screen."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Container
from textual.events import Key
from textual.screen import ModalScreen
from textual.widgets import Static

from backoffice.errors import InvalidCredentials
from backoffice.models import Account
from backoffice.session import AuthGate


class LoginScreen(ModalScreen[Account | None]):
    """Collect email and password and sign in through the gate."""

    CSS = """
    LoginScreen {
        align: center middle;
        background: $background 60%;
    }

    #login-dialog {
        width: 56;
        height: auto;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #login-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    #login-fields {
        color: white;
        margin-bottom: 1;
    }

    #login-error {
        color: #ffb3b3;
        margin-bottom: 1;
    }

    #login-help {
        color: #dddddd;
    }
    """

    _FIELDS = ("email", "password")

    def __init__(self, gate: AuthGate) -> None:
        super().__init__()
        self.gate = gate
        self.values = {name: "" for name in self._FIELDS}
        self.field_index = 0
        self.error = ""

    def compose(self) -> ComposeResult:
        with Container(id="login-dialog"):
            yield Static("Restaurant Back-Office: Sign In", id="login-title")
            yield Static(id="login-fields")
            yield Static(id="login-error")
            yield Static("Tab/↑/↓ switch field. Enter sign in. Esc quit.", id="login-help")

    def on_mount(self) -> None:
        self._refresh_content()

    def on_key(self, event: Key) -> None:
        if event.key == "escape":
            self.dismiss(None)
            event.stop()
            return

        if event.key in {"tab", "down", "up", "shift+tab"}:
            delta = -1 if event.key in {"up", "shift+tab"} else 1
            self.field_index = (self.field_index + delta) % len(self._FIELDS)
            self._refresh_content()
            event.prevent_default()
            event.stop()
            return

        if event.key == "enter":
            self.login(self.values["email"], self.values["password"])
            event.stop()
            return

        field = self._FIELDS[self.field_index]
        if event.key == "backspace":
            self.values[field] = self.values[field][:-1]
            self.error = ""
            self._refresh_content()
            event.stop()
            return

        if event.is_printable and event.character:
            self.values[field] += event.character
            self.error = ""
            self._refresh_content()
            event.stop()

    def login(self, email: str, password: str) -> None:
        """Try the credentials; close on success, show the failure otherwise."""
        try:
            account = self.gate.authenticate(email.strip(), password)
        except InvalidCredentials as exc:
            self.values["password"] = ""
            self.error = exc.message
            self._refresh_content()
            return
        self.dismiss(account)

    def _refresh_content(self) -> None:
        lines = []
        for idx, field in enumerate(self._FIELDS):
            pointer = "➤ " if idx == self.field_index else "  "
            shown = "*" * len(self.values[field]) if field == "password" else self.values[field]
            cursor = "|" if idx == self.field_index else ""
            lines.append(f"{pointer}{field.capitalize():<9} {shown}{cursor}")
        self.query_one("#login-fields", Static).update("\n".join(lines))
        self.query_one("#login-error", Static).update(self.error)
