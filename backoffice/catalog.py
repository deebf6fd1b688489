"""Menu catalog store: admin-gated create, update and delete of menu items."""

from __future__ import annotations

import logging
import time
from dataclasses import replace
from decimal import Decimal
from typing import Callable, Iterable

from backoffice.config import ALL_FILTER
from backoffice.errors import NotFound, ValidationError
from backoffice.models import MenuItem, MenuItemDraft, MenuItemForm, to_price
from backoffice.session import AuthGate

logger = logging.getLogger(__name__)


def parse_token_list(text: str) -> list[str]:
    """Split comma-separated text into trimmed, non-empty tokens.

    Order and duplicates are preserved: ``" vegan,  , spicy "`` gives
    ``["vegan", "spicy"]``.
    """
    return [token.strip() for token in text.split(",") if token.strip()]


def parse_price(text: str) -> Decimal:
    """Parse a user-entered price into a non-negative Decimal."""
    return to_price(text.strip().lstrip("$").strip())


def draft_from_form(form: MenuItemForm) -> MenuItemDraft:
    """Normalize the raw editor fields into a draft."""
    for field_name in ("name", "category", "description"):
        if not getattr(form, field_name).strip():
            raise ValidationError(f"{field_name.capitalize()} is required", details={"field": field_name})

    return MenuItemDraft(
        name=form.name.strip(),
        category=form.category.strip(),
        price=parse_price(form.price),
        description=form.description.strip(),
        tags=tuple(parse_token_list(form.tags)),
        available=form.available,
        ingredients=tuple(parse_token_list(form.ingredients)),
    )


def form_from_item(item: MenuItem | None) -> MenuItemForm:
    """Prefill the editor from an existing item, or blank for a new one."""
    if item is None:
        return MenuItemForm()
    return MenuItemForm(
        name=item.name,
        category=item.category,
        price=str(item.price),
        description=item.description,
        tags=", ".join(item.tags),
        ingredients=", ".join(item.ingredients),
        available=item.available,
    )


def _millis_clock() -> int:
    return time.time_ns() // 1_000_000


class MenuCatalog:
    """Owns the ordered collection of menu items.

    Insertion order is display order. Every mutation checks the gate first
    and validates before touching the list, so a rejected call leaves the
    catalog exactly as it was.
    """

    def __init__(
        self,
        gate: AuthGate,
        items: Iterable[MenuItem] = (),
        id_clock: Callable[[], int] = _millis_clock,
    ) -> None:
        self._gate = gate
        self._items: list[MenuItem] = list(items)
        self._id_clock = id_clock
        ids = [item.id for item in self._items]
        if len(ids) != len(set(ids)):
            raise ValueError("Menu item ids must be unique")

    @property
    def items(self) -> tuple[MenuItem, ...]:
        return tuple(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def get(self, item_id: str) -> MenuItem | None:
        for item in self._items:
            if item.id == item_id:
                return item
        return None

    def list_categories(self) -> list[str]:
        """Return the category selector values, ``all`` first."""
        categories: list[str] = []
        for item in self._items:
            if item.category not in categories:
                categories.append(item.category)
        return [ALL_FILTER, *categories]

    def available_items(self) -> list[MenuItem]:
        return [item for item in self._items if item.available]

    def add_item(self, draft: MenuItemDraft) -> MenuItem:
        """Store a new item under a fresh id and return it."""
        self._gate.require_admin("add menu items")
        price = self._validate(draft.name, draft.price)

        item = MenuItem.from_draft(self._next_id(), replace(draft, price=price))
        self._items.append(item)
        logger.info("add_item ::: id=%s name=%r", item.id, item.name)
        return item

    def update_item(self, item: MenuItem) -> MenuItem:
        """Replace the stored item that has the same id."""
        self._gate.require_admin("edit menu items")
        price = self._validate(item.name, item.price)

        for idx, existing in enumerate(self._items):
            if existing.id == item.id:
                stored = replace(
                    item,
                    price=price,
                    tags=tuple(item.tags),
                    ingredients=tuple(item.ingredients),
                )
                self._items[idx] = stored
                logger.info("update_item ::: id=%s name=%r", stored.id, stored.name)
                return stored

        logger.warning("update_item ::: unknown id=%s", item.id)
        raise NotFound(f"Menu item {item.id} not found", details={"id": item.id})

    def remove_item(self, item_id: str) -> None:
        """Delete the item; an unknown id is a no-op."""
        self._gate.require_admin("delete menu items")

        remaining = [item for item in self._items if item.id != item_id]
        if len(remaining) == len(self._items):
            logger.info("remove_item ::: id=%s already absent", item_id)
            return
        self._items = remaining
        logger.info("remove_item ::: id=%s", item_id)

    def _next_id(self) -> str:
        taken = {item.id for item in self._items}
        candidate = self._id_clock()
        while str(candidate) in taken:
            candidate += 1
        return str(candidate)

    @staticmethod
    def _validate(name: str, price: Decimal) -> Decimal:
        """Check the name and return the price quantized to cents."""
        if not name.strip():
            raise ValidationError("Name is required", details={"field": "name"})
        return to_price(price)
