"""Analytics derived from the ledger and catalog; nothing here is stored."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Sequence

from backoffice.config import TOP_ITEMS_LIMIT
from backoffice.ledger import STATUS_FLOW
from backoffice.models import MenuItem, Order, OrderStatus, to_money

UNKNOWN_CATEGORY = "Other"


@dataclass(frozen=True)
class TopItem:
    item_id: str
    name: str
    quantity: int
    revenue: Decimal


@dataclass(frozen=True)
class HourBucket:
    hour: int
    orders: int
    share: float

    @property
    def label(self) -> str:
        suffix = "AM" if self.hour < 12 else "PM"
        display = self.hour % 12 or 12
        return f"{display}:00 {suffix}"


@dataclass(frozen=True)
class CategoryShare:
    category: str
    revenue: Decimal
    share: float


@dataclass(frozen=True)
class AnalyticsSummary:
    revenue: Decimal
    order_count: int
    average_ticket: Decimal
    status_counts: dict[OrderStatus, int]
    top_items: list[TopItem]
    peak_hours: list[HourBucket]
    category_performance: list[CategoryShare]


def top_items(orders: Sequence[Order], limit: int = TOP_ITEMS_LIMIT) -> list[TopItem]:
    """Rank ordered items by units sold, then revenue, then first appearance."""
    quantities: dict[str, int] = {}
    revenues: dict[str, Decimal] = {}
    names: dict[str, str] = {}
    for order in orders:
        for line in order.items:
            names.setdefault(line.id, line.name)
            quantities[line.id] = quantities.get(line.id, 0) + line.quantity
            revenues[line.id] = revenues.get(line.id, to_money(0)) + line.line_total

    # dicts keep first-seen order, and sorted() is stable
    ranked = sorted(names, key=lambda item_id: (-quantities[item_id], -revenues[item_id]))
    return [
        TopItem(item_id=item_id, name=names[item_id], quantity=quantities[item_id], revenue=revenues[item_id])
        for item_id in ranked[:limit]
    ]


def peak_hours(orders: Sequence[Order]) -> list[HourBucket]:
    """Orders per hour of day, in hour order, with share of the busiest hour."""
    counts: dict[int, int] = {}
    for order in orders:
        counts[order.timestamp.hour] = counts.get(order.timestamp.hour, 0) + 1
    if not counts:
        return []
    busiest = max(counts.values())
    return [HourBucket(hour=hour, orders=counts[hour], share=counts[hour] / busiest) for hour in sorted(counts)]


def category_performance(orders: Sequence[Order], menu_items: Sequence[MenuItem]) -> list[CategoryShare]:
    """Revenue share per menu category, largest first."""
    category_by_id = {item.id: item.category for item in menu_items}
    revenue_by_category: dict[str, Decimal] = {}
    for order in orders:
        for line in order.items:
            category = category_by_id.get(line.id, UNKNOWN_CATEGORY)
            revenue_by_category[category] = revenue_by_category.get(category, to_money(0)) + line.line_total

    total = sum(revenue_by_category.values(), to_money(0))
    if total == 0:
        return []
    shares = [
        CategoryShare(category=category, revenue=revenue, share=float(revenue / total))
        for category, revenue in revenue_by_category.items()
    ]
    return sorted(shares, key=lambda share: -share.revenue)


def summarize(orders: Sequence[Order], menu_items: Sequence[MenuItem]) -> AnalyticsSummary:
    """Compute every analytics panel from the current snapshots."""
    revenue = sum((order.total for order in orders), to_money(0))
    count = len(orders)
    average = to_money(revenue / count) if count else to_money(0)
    status_counts = {status: 0 for status in STATUS_FLOW}
    for order in orders:
        status_counts[order.status] += 1

    return AnalyticsSummary(
        revenue=revenue,
        order_count=count,
        average_ticket=average,
        status_counts=status_counts,
        top_items=top_items(orders),
        peak_hours=peak_hours(orders),
        category_performance=category_performance(orders, menu_items),
    )
