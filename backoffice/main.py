"""Entry point for the restaurant back-office Textual app."""

from __future__ import annotations

from backoffice.backoffice_app import BackofficeApp
from backoffice.config import setup_logging


def main() -> None:
    """Run the Textual application."""
    setup_logging()
    BackofficeApp().run()


if __name__ == "__main__":
    main()
