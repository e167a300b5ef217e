"""Orders listing page."""
from __future__ import annotations

from typing import List

from models.ledger import Order, OrderStatusFilter
from models.list_query import ListPage, ListQuery, SortOrder
from utils.formatting import format_currency, format_date

from .base import ListingPage

STATUS_LABELS = {
    "pending": "Pending",
    "processing": "Processing",
    "completed": "Completed",
    "cancelled": "Cancelled",
}


class OrdersPage(ListingPage[Order]):
    title = "Orders"
    subtitle = "Manage and track all customer orders"
    search_placeholder = "Search orders..."
    page_key = "orders"
    columns = (
        ("Order ID", "id"),
        ("Customer", "customer"),
        ("Items", None),
        ("Total", "total"),
        ("Status", None),
        ("Date", "date"),
    )
    filters = (
        ("All statuses", OrderStatusFilter.ALL),
        ("Pending", OrderStatusFilter.PENDING),
        ("Processing", OrderStatusFilter.PROCESSING),
        ("Completed", OrderStatusFilter.COMPLETED),
        ("Cancelled", OrderStatusFilter.CANCELLED),
    )
    default_sort = ("date", SortOrder.DESC)

    def fetch_page(self, query: ListQuery) -> ListPage[Order]:
        return self.context.services.order_list.fetch_page(query)

    def row_values(self, item: Order) -> List[str]:
        return [
            item.id,
            item.customer,
            f"{item.items} items",
            format_currency(item.total),
            STATUS_LABELS.get(item.status, "Unknown"),
            format_date(item.date),
        ]


__all__ = ["OrdersPage"]
