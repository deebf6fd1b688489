"""Static account directory and sample data wrapped into domain models."""

from __future__ import annotations

from datetime import datetime, timedelta

from backoffice.constant import ACCOUNT_RECORDS, MENU_ITEM_RECORDS, ORDER_RECORDS
from backoffice.models import (
    Account,
    AccountCredential,
    MenuItem,
    Order,
    OrderItem,
    OrderStatus,
    Role,
    to_money,
)

ACCOUNT_DIRECTORY: tuple[AccountCredential, ...] = tuple(
    AccountCredential(
        account=Account(id=record["id"], name=record["name"], email=record["email"], role=Role(record["role"])),
        password=record["password"],
    )
    for record in ACCOUNT_RECORDS
)


def seed_menu_items() -> list[MenuItem]:
    """Build a fresh copy of the sample catalog."""
    return [
        MenuItem(
            id=str(record["id"]),
            name=str(record["name"]),
            category=str(record["category"]),
            price=to_money(str(record["price"])),
            description=str(record["description"]),
            tags=tuple(record["tags"]),  # type: ignore[arg-type]
            available=bool(record["available"]),
            ingredients=tuple(record["ingredients"]),  # type: ignore[arg-type]
        )
        for record in MENU_ITEM_RECORDS
    ]


def _order_item(record: dict) -> OrderItem:
    return OrderItem(
        id=str(record["id"]),
        name=str(record["name"]),
        quantity=int(record["quantity"]),
        unit_price=to_money(str(record["unit_price"])),
        customizations=tuple(record["customizations"]),
    )


def seed_orders(now: datetime) -> list[Order]:
    """Build the sample ledger with timestamps relative to ``now``."""
    orders: list[Order] = []
    for record in ORDER_RECORDS:
        items = tuple(_order_item(item) for item in record["items"])  # type: ignore[union-attr]
        orders.append(
            Order(
                id=str(record["id"]),
                customer_name=str(record["customer_name"]),
                items=items,
                status=OrderStatus(record["status"]),
                timestamp=now - timedelta(minutes=int(record["minutes_ago"])),  # type: ignore[arg-type]
                total=sum((item.line_total for item in items), to_money(0)),
                notes=str(record["notes"]),
            )
        )
    return orders
