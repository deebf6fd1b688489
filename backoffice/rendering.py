"""Rendering helpers that turn domain snapshots into Rich text."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Sequence

from rich.text import Text

from backoffice.analytics import AnalyticsSummary
from backoffice.config import ALL_FILTER, CURRENCY_SYMBOL
from backoffice.ledger import format_elapsed, next_status
from backoffice.models import MenuItem, Order, OrderStatus

# Used until the records widget has been laid out.
DEFAULT_PAGE_HEIGHT = 8

VIEW_LABELS: dict[str, str] = {
    "menu": "Menu Management",
    "orders": "Orders",
    "analytics": "Analytics",
}

_STATUS_STYLES: dict[OrderStatus, str] = {
    OrderStatus.PLACED: "bold #1f1f1f on #c9c9c9",
    OrderStatus.PREPARING: "bold #ffffff on #d9822b",
    OrderStatus.READY: "bold #0b1f0f on #5fbf72",
    OrderStatus.DELIVERED: "bold #ffffff on #2f6db5",
}

_ADVANCE_LABELS: dict[OrderStatus, str] = {
    OrderStatus.PREPARING: "Start Preparing",
    OrderStatus.READY: "Mark Ready",
    OrderStatus.DELIVERED: "Mark Delivered",
}

_BAR_WIDTH = 24


def format_price(amount: Decimal) -> str:
    return f"{CURRENCY_SYMBOL}{amount:.2f}"


def selector_label(selector: str) -> str:
    """Human label for a category/status selector value."""
    if selector == ALL_FILTER:
        return "All"
    return selector.capitalize() if selector.islower() else selector


def status_badge(status: OrderStatus) -> Text:
    return Text(f" {status.value} ", style=_STATUS_STYLES[status])


def format_nav(active_view: str) -> Text:
    """Render the tab strip with the active view highlighted."""
    text = Text()
    for idx, (view, label) in enumerate(VIEW_LABELS.items(), start=1):
        if idx > 1:
            text.append("  ")
        style = "bold #ffffff on #d9822b" if view == active_view else "#dddddd"
        text.append(f" {idx} {label} ", style=style)
    return text


def page_bounds(total: int, height: int, selected: int) -> tuple[int, int]:
    """Row range of the page holding ``selected``.

    Lists longer than ``height`` are cut into fixed pages; the two
    continuation markers each take one line of the budget.
    """
    if total <= 0:
        return (0, 0)
    if total <= height:
        return (0, total)
    per_page = max(1, height - 2)
    selected = min(max(selected, 0), total - 1)
    start = (selected // per_page) * per_page
    return (start, min(total, start + per_page))


def format_record_page(rows: Sequence[Text], selected: int, height: int = DEFAULT_PAGE_HEIGHT) -> Text:
    start, end = page_bounds(len(rows), height, selected)
    page = Text()
    if start > 0:
        page.append(f"⋮ {start} more above\n", style="dim")
    for idx in range(start, end):
        if idx > start:
            page.append("\n")
        page.append("➤ " if idx == selected else "  ")
        page.append_text(rows[idx])
    if end < len(rows):
        page.append(f"\n⋮ {len(rows) - end} more below", style="dim")
    return page


def format_menu_row(item: MenuItem) -> Text:
    text = Text()
    text.append(item.name, style="bold" if item.available else "dim")
    text.append(f"  {format_price(item.price)}", style="#d9822b")
    if not item.available:
        text.append("  unavailable", style="dim italic")
    return text


def format_menu_detail(item: MenuItem, can_edit: bool) -> Text:
    text = Text()
    text.append(f"{item.name}\n", style="bold")
    text.append(f"{item.description}\n\n")
    text.append(format_price(item.price), style="bold #d9822b")
    text.append("  ")
    if item.available:
        text.append(" Available ", style="bold #0b1f0f on #5fbf72")
    else:
        text.append(" Unavailable ", style="bold #ffffff on #777777")
    text.append(f"\n\nCategory: {item.category}")
    if item.tags:
        text.append("\nTags: ")
        for idx, tag in enumerate(item.tags):
            if idx > 0:
                text.append(" ")
            text.append(f"[{tag}]", style="white")
    if item.ingredients:
        text.append(f"\nIngredients: {', '.join(item.ingredients)}")
    text.append("\n\n")
    if can_edit:
        text.append("E edit  D delete  A add", style="dim")
    else:
        text.append("Admin only: editing is locked", style="dim italic")
    return text


def format_order_row(order: Order, now: datetime) -> Text:
    text = Text()
    text.append(order.id, style="bold")
    text.append(f"  {order.customer_name}  ")
    text.append_text(status_badge(order.status))
    text.append(f"  {format_elapsed(order.timestamp, now)}", style="dim")
    return text


def format_order_detail(order: Order, now: datetime) -> Text:
    text = Text()
    text.append(f"{order.id}", style="bold")
    text.append(f"  {order.customer_name}\n")
    text.append_text(status_badge(order.status))
    text.append(f"  {format_elapsed(order.timestamp, now)}\n\n", style="dim")
    for line in order.items:
        text.append(f"{line.quantity}x {line.name}")
        text.append(f"  {format_price(line.line_total)}\n")
        if line.customizations:
            text.append(f"   + {', '.join(line.customizations)}\n", style="dim")
    text.append(f"\nTotal: {format_price(order.total)}", style="bold")
    if order.notes:
        text.append(f"\nNotes: {order.notes}")
    following = next_status(order.status)
    text.append("\n\n")
    if following is None:
        text.append("Completed", style="dim italic")
    else:
        text.append(f"S {_ADVANCE_LABELS[following]}", style="dim")
    return text


def _bar(share: float) -> str:
    filled = round(share * _BAR_WIDTH)
    return "█" * filled + "░" * (_BAR_WIDTH - filled)


def format_analytics(summary: AnalyticsSummary) -> Text:
    """Render every analytics panel as one block of text."""
    text = Text()
    text.append("Revenue ", style="bold")
    text.append(format_price(summary.revenue))
    text.append("   Orders ", style="bold")
    text.append(str(summary.order_count))
    text.append("   Avg. ticket ", style="bold")
    text.append(format_price(summary.average_ticket))
    text.append("\n")
    for status, count in summary.status_counts.items():
        text.append_text(status_badge(status))
        text.append(f" {count}  ")

    text.append("\n\nTop Selling Items\n", style="bold")
    if not summary.top_items:
        text.append("(no orders yet)\n", style="dim")
    for rank, item in enumerate(summary.top_items, start=1):
        text.append(f"{rank}. {item.name}  {item.quantity} sold  {format_price(item.revenue)}\n")

    text.append("\nPeak Hours\n", style="bold")
    for bucket in summary.peak_hours:
        text.append(f"{bucket.label:>8} ")
        text.append(_bar(bucket.share), style="#d9822b")
        text.append(f" {bucket.orders}\n")

    text.append("\nCategory Performance\n", style="bold")
    for share in summary.category_performance:
        text.append(f"{share.category:<12} ")
        text.append(_bar(share.share), style="#2f6db5")
        text.append(f" {share.share:.0%}\n")
    return text
