"""Finance page: income and expense transactions."""
from __future__ import annotations

from typing import List

from models.ledger import Transaction, TransactionTypeFilter
from models.list_query import ListPage, ListQuery, SortOrder
from utils.formatting import format_abs_currency, format_date

from .base import ListingPage


class FinancePage(ListingPage[Transaction]):
    title = "Finance"
    subtitle = "Track your business financial performance"
    search_placeholder = "Search transactions..."
    page_key = "finance"
    columns = (
        ("Date", "date"),
        ("Description", None),
        ("Category", "category"),
        ("Type", None),
        ("Amount", "amount"),
    )
    filters = (
        ("All transactions", TransactionTypeFilter.ALL),
        ("Income", TransactionTypeFilter.INCOME),
        ("Expenses", TransactionTypeFilter.EXPENSE),
    )
    default_sort = ("date", SortOrder.DESC)

    def fetch_page(self, query: ListQuery) -> ListPage[Transaction]:
        return self.context.services.transaction_list.fetch_page(query)

    def row_values(self, item: Transaction) -> List[str]:
        sign = "+" if item.is_income else "-"
        return [
            format_date(item.date),
            item.description,
            item.category or "-",
            "Income" if item.is_income else "Expense",
            f"{sign}{format_abs_currency(item.amount)}",
        ]


__all__ = ["FinancePage"]
