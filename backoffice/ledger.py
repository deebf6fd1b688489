"""Order ledger: order creation, status progression and draft composition."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field, replace
from datetime import datetime
from decimal import Decimal
from typing import Callable, Iterable

from backoffice.config import ALL_FILTER, ORDER_ID_PREFIX
from backoffice.errors import InvalidTransition, NotFound, ValidationError
from backoffice.models import MenuItem, Order, OrderItem, OrderStatus, to_money, to_price
from backoffice.session import AuthGate

logger = logging.getLogger(__name__)

STATUS_FLOW: tuple[OrderStatus, ...] = (
    OrderStatus.PLACED,
    OrderStatus.PREPARING,
    OrderStatus.READY,
    OrderStatus.DELIVERED,
)

_ORDER_NUMBER_RE = re.compile(rf"^{re.escape(ORDER_ID_PREFIX)}(\d+)$")


def next_status(status: OrderStatus) -> OrderStatus | None:
    """Return the following status, or None once delivered."""
    idx = STATUS_FLOW.index(status)
    if idx + 1 >= len(STATUS_FLOW):
        return None
    return STATUS_FLOW[idx + 1]


def order_total(items: Iterable[OrderItem]) -> Decimal:
    return sum((item.line_total for item in items), to_money(0))


def elapsed_minutes(timestamp: datetime, now: datetime) -> int:
    """Whole minutes since ``timestamp``; future timestamps count as zero."""
    seconds = (now - timestamp).total_seconds()
    return max(0, int(seconds // 60))


def format_elapsed(timestamp: datetime, now: datetime) -> str:
    """Render elapsed time as ``15m ago`` or ``1h 5m ago``."""
    minutes = elapsed_minutes(timestamp, now)
    if minutes < 60:
        return f"{minutes}m ago"
    return f"{minutes // 60}h {minutes % 60}m ago"


@dataclass
class OrderDraft:
    """An order being composed in the UI, before it reaches the ledger."""

    customer_name: str = ""
    notes: str = ""
    lines: list[OrderItem] = field(default_factory=list)

    def add_line_item(self, menu_item: MenuItem) -> None:
        """Add one unit; an item already on the draft gets its quantity bumped."""
        for idx, line in enumerate(self.lines):
            if line.id == menu_item.id:
                self.lines[idx] = replace(line, quantity=line.quantity + 1)
                return
        self.lines.append(OrderItem(id=menu_item.id, name=menu_item.name, quantity=1, unit_price=menu_item.price))

    def change_quantity(self, item_id: str, quantity: int) -> None:
        """Set a line's quantity; zero or below drops the line."""
        if quantity <= 0:
            self.lines = [line for line in self.lines if line.id != item_id]
            return
        for idx, line in enumerate(self.lines):
            if line.id == item_id:
                self.lines[idx] = replace(line, quantity=quantity)
                return
        raise NotFound(f"Item {item_id} is not on this order", details={"id": item_id})

    def quantity_of(self, item_id: str) -> int:
        for line in self.lines:
            if line.id == item_id:
                return line.quantity
        return 0

    @property
    def total(self) -> Decimal:
        return order_total(self.lines)

    @property
    def is_submittable(self) -> bool:
        return bool(self.customer_name.strip()) and bool(self.lines)


class OrderLedger:
    """Owns placed orders.

    Creating and advancing orders needs a signed-in user of either role.
    Status only ever moves one step forward along ``STATUS_FLOW``.
    """

    def __init__(
        self,
        gate: AuthGate,
        orders: Iterable[Order] = (),
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._gate = gate
        self._orders: list[Order] = list(orders)
        self._clock = clock
        self._last_number = max((self._order_number(order.id) for order in self._orders), default=0)

    @property
    def orders(self) -> tuple[Order, ...]:
        return tuple(self._orders)

    def __len__(self) -> int:
        return len(self._orders)

    def get(self, order_id: str) -> Order | None:
        for order in self._orders:
            if order.id == order_id:
                return order
        return None

    def list_statuses(self) -> list[str]:
        return [ALL_FILTER, *(status.value for status in STATUS_FLOW)]

    def now(self) -> datetime:
        return self._clock()

    def create_order(self, customer_name: str, items: Iterable[OrderItem], notes: str = "") -> Order:
        """Validate and store a new order in the ``placed`` state."""
        self._gate.require_signed_in("create orders")

        lines = list(items)
        if not customer_name.strip():
            raise ValidationError("Customer name is required", details={"field": "customer_name"})
        if not lines:
            raise ValidationError("Add at least one item to the order", details={"field": "items"})
        stored_lines = []
        for line in lines:
            if line.quantity <= 0:
                raise ValidationError(f"Quantity for {line.name} must be positive", details={"id": line.id})
            unit_price = to_price(line.unit_price, field_name="unit_price")
            stored_lines.append(replace(line, unit_price=unit_price, customizations=tuple(line.customizations)))

        self._last_number += 1
        order = Order(
            id=f"{ORDER_ID_PREFIX}{self._last_number:03d}",
            customer_name=customer_name.strip(),
            items=tuple(stored_lines),
            status=OrderStatus.PLACED,
            timestamp=self._clock(),
            total=order_total(stored_lines),
            notes=notes.strip(),
        )
        self._orders.append(order)
        logger.info("create_order ::: id=%s items=%d total=%s", order.id, len(order.items), order.total)
        return order

    def place_draft(self, draft: OrderDraft) -> Order:
        return self.create_order(draft.customer_name, draft.lines, draft.notes)

    def advance_status(self, order_id: str) -> Order:
        """Move the order exactly one step forward.

        An unknown id raises ``NotFound`` rather than ``InvalidTransition``.
        """
        self._gate.require_signed_in("update orders")

        idx = self._index_of(order_id)
        if idx is None:
            logger.warning("advance_status ::: unknown id=%s", order_id)
            raise NotFound(f"Order {order_id} not found", details={"id": order_id})

        order = self._orders[idx]
        following = next_status(order.status)
        if following is None:
            logger.warning("advance_status ::: id=%s already %s", order_id, order.status.value)
            raise InvalidTransition(
                f"Order {order_id} is already {order.status.value}",
                details={"id": order_id, "status": order.status.value},
            )

        order = replace(order, status=following)
        self._orders[idx] = order
        logger.info("advance_status ::: id=%s status=%s", order_id, following.value)
        return order

    def _index_of(self, order_id: str) -> int | None:
        for idx, order in enumerate(self._orders):
            if order.id == order_id:
                return idx
        return None

    @staticmethod
    def _order_number(order_id: str) -> int:
        match = _ORDER_NUMBER_RE.match(order_id)
        return int(match.group(1)) if match else 0
