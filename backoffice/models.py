"""Domain models for the restaurant back-office."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal, InvalidOperation
from enum import Enum

from backoffice.errors import ValidationError

CENT = Decimal("0.01")


def to_money(value: Decimal | int | float | str) -> Decimal:
    """Coerce a numeric value to a Decimal quantized to cents."""
    if isinstance(value, float):
        value = repr(value)
    return Decimal(value).quantize(CENT)


def to_price(value: Decimal | int | float | str, field_name: str = "price") -> Decimal:
    """Like ``to_money`` but only for finite, non-negative amounts."""
    try:
        amount = Decimal(repr(value)) if isinstance(value, float) else Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        raise ValidationError(f"Price {value!r} is not a number", details={"field": field_name}) from None
    if not amount.is_finite():
        raise ValidationError(f"Price {value!r} is not a number", details={"field": field_name})
    if amount < 0:
        raise ValidationError("Price cannot be negative", details={"field": field_name})
    return amount.quantize(CENT)


class Role(str, Enum):
    """Access level of the signed-in account."""

    ADMIN = "admin"
    STAFF = "staff"
    NONE = "none"


class OrderStatus(str, Enum):
    """Forward-only order lifecycle."""

    PLACED = "placed"
    PREPARING = "preparing"
    READY = "ready"
    DELIVERED = "delivered"


@dataclass(frozen=True)
class Account:
    """A signed-in user as seen by the rest of the system."""

    id: str
    name: str
    email: str
    role: Role


@dataclass(frozen=True)
class AccountCredential:
    """A directory entry: an account plus the password it signs in with."""

    account: Account
    password: str


@dataclass
class Session:
    """The single per-app login slot."""

    current_user: Account | None = None


@dataclass(frozen=True)
class MenuItemDraft:
    """Menu item payload before an id is assigned."""

    name: str
    category: str
    price: Decimal
    description: str
    tags: tuple[str, ...] = ()
    available: bool = True
    ingredients: tuple[str, ...] = ()


@dataclass(frozen=True)
class MenuItem:
    """A catalog entry."""

    id: str
    name: str
    category: str
    price: Decimal
    description: str
    tags: tuple[str, ...] = ()
    available: bool = True
    ingredients: tuple[str, ...] = ()

    @classmethod
    def from_draft(cls, item_id: str, draft: MenuItemDraft) -> MenuItem:
        return cls(
            id=item_id,
            name=draft.name,
            category=draft.category,
            price=to_money(draft.price),
            description=draft.description,
            tags=tuple(draft.tags),
            available=draft.available,
            ingredients=tuple(draft.ingredients),
        )


@dataclass
class MenuItemForm:
    """Raw text fields of the menu item editor, before normalization."""

    name: str = ""
    category: str = ""
    price: str = "0"
    description: str = ""
    tags: str = ""
    ingredients: str = ""
    available: bool = True


@dataclass(frozen=True)
class OrderItem:
    """One line of an order."""

    id: str
    name: str
    quantity: int
    unit_price: Decimal
    customizations: tuple[str, ...] = ()

    @property
    def line_total(self) -> Decimal:
        return self.unit_price * self.quantity


@dataclass(frozen=True)
class Order:
    """A placed order; total is fixed when the order is created."""

    id: str
    customer_name: str
    items: tuple[OrderItem, ...]
    status: OrderStatus
    timestamp: datetime
    total: Decimal
    notes: str = ""
