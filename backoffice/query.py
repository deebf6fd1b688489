"""Search and selector filtering over menu items and orders."""

from __future__ import annotations

from enum import Enum
from typing import Sequence, TypeVar

from backoffice.config import ALL_FILTER
from backoffice.models import MenuItem, Order

T = TypeVar("T")

MENU_SEARCH_FIELDS = ("name", "description")
ORDER_SEARCH_FIELDS = ("id", "customer_name")


def _field_text(record: object, field_name: str) -> str:
    value = getattr(record, field_name)
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def filter_records(
    records: Sequence[T],
    search_text: str,
    selector: str,
    text_fields: Sequence[str],
    selector_field: str,
) -> list[T]:
    """Keep records matching the search text AND the selector, in input order.

    Text matching is a case-insensitive substring test over ``text_fields``;
    an empty search matches everything. The selector is an exact comparison
    against ``selector_field`` unless it is ``all``.
    """
    needle = search_text.lower()
    matches: list[T] = []
    for record in records:
        if needle and not any(needle in _field_text(record, name).lower() for name in text_fields):
            continue
        if selector != ALL_FILTER and _field_text(record, selector_field) != selector:
            continue
        matches.append(record)
    return matches


def filter_menu_items(items: Sequence[MenuItem], search_text: str, category: str = ALL_FILTER) -> list[MenuItem]:
    return filter_records(items, search_text, category, MENU_SEARCH_FIELDS, "category")


def filter_orders(orders: Sequence[Order], search_text: str, status: str = ALL_FILTER) -> list[Order]:
    return filter_records(orders, search_text, status, ORDER_SEARCH_FIELDS, "status")
