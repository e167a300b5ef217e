from __future__ import annotations

"""Row types for the orders and finance listings."""

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from models.list_query import ListFilter


class OrderStatusFilter(ListFilter):
    ALL = "all"
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class TransactionTypeFilter(ListFilter):
    ALL = "all"
    INCOME = "income"
    EXPENSE = "expense"


ORDER_SORT_COLUMNS = ("id", "customer", "total", "date")
TRANSACTION_SORT_COLUMNS = ("date", "amount", "category")


@dataclass(frozen=True)
class Order:
    id: str
    customer: str
    items: int
    total: float
    status: str
    date: Optional[str] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Order":
        return cls(
            id=str(row.get("id", "")),
            customer=str(row.get("customer") or row.get("customer_name") or ""),
            items=int(row.get("items") or 0),
            total=float(row.get("total") or 0),
            status=str(row.get("status") or "unknown"),
            date=row.get("date") or row.get("order_date") or None,
        )


@dataclass(frozen=True)
class Transaction:
    id: str
    type: str
    description: str
    amount: float
    category: str = ""
    date: Optional[str] = None

    @property
    def is_income(self) -> bool:
        return self.type == "income"

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Transaction":
        return cls(
            id=str(row.get("id", "")),
            type=str(row.get("type") or ""),
            description=str(row.get("description") or ""),
            amount=float(row.get("amount") or 0),
            category=str(row.get("category") or ""),
            date=row.get("date") or None,
        )


__all__ = [
    "Order",
    "Transaction",
    "OrderStatusFilter",
    "TransactionTypeFilter",
    "ORDER_SORT_COLUMNS",
    "TRANSACTION_SORT_COLUMNS",
]
