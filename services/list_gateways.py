from __future__ import annotations

"""Paginated search gateways backing the admin listings."""

import logging
from typing import Any, Callable, Generic, List, Mapping, Optional, Sequence, Tuple, TypeVar

from models.customer import CUSTOMER_SORT_COLUMNS, Customer
from models.ledger import ORDER_SORT_COLUMNS, TRANSACTION_SORT_COLUMNS, Order, Transaction
from models.list_query import ListPage, ListQuery
from services.backend_client import BackendClient, unwrap_envelope
from utils.exceptions import GatewayError, ValidationError

logger = logging.getLogger(__name__)

T = TypeVar("T")

CUSTOMER_SEARCH_RPC = "search_customers"
ORDER_SEARCH_RPC = "search_orders"
TRANSACTION_SEARCH_RPC = "search_transactions"

_ITEM_KEYS = ("items", "rows", "data")
_TOTAL_KEYS = ("total", "total_count", "count")


def split_page_payload(payload: Any) -> Tuple[List[Mapping[str, Any]], int]:
    """Return ``(rows, total)`` from a search procedure result.

    The procedures answer ``{"items": [...], "total": n}``; a bare list is
    accepted as a single unpaginated page.
    """

    if isinstance(payload, list):
        return list(payload), len(payload)
    if not isinstance(payload, Mapping):
        raise GatewayError("BAD_RESPONSE", "Unexpected response from search procedure")
    rows: Optional[Sequence[Any]] = None
    for key in _ITEM_KEYS:
        if isinstance(payload.get(key), list):
            rows = payload[key]
            break
    if rows is None:
        raise GatewayError("BAD_RESPONSE", "Search response is missing its rows")
    total = next((payload[key] for key in _TOTAL_KEYS if payload.get(key) is not None), len(rows))
    try:
        total_int = int(total)
    except (TypeError, ValueError) as exc:
        raise GatewayError("BAD_RESPONSE", f"Invalid total {total!r}") from exc
    return list(rows), max(total_int, 0)


class RpcListGateway(Generic[T]):
    """``fetch_page(query)`` over a ``p_page/p_limit/...`` search procedure."""

    def __init__(
        self,
        client: BackendClient,
        function: str,
        row_factory: Callable[[Mapping[str, Any]], T],
        *,
        sort_columns: Sequence[str] = (),
    ) -> None:
        self._client = client
        self.function = function
        self._row_factory = row_factory
        self.sort_columns = tuple(sort_columns)

    def fetch_page(self, query: ListQuery) -> ListPage[T]:
        if self.sort_columns and query.sort_by not in self.sort_columns:
            raise ValidationError(f"{self.function} cannot sort by {query.sort_by!r}")
        payload = unwrap_envelope(self._client.rpc(self.function, query.to_params()))
        rows, total = split_page_payload(payload)
        items = [self._row_factory(row) for row in rows]
        logger.debug("%s page %s: %s of %s rows", self.function, query.page, len(items), total)
        return ListPage.of(items, total=total, query=query)


def customer_gateway(client: BackendClient) -> RpcListGateway[Customer]:
    return RpcListGateway(client, CUSTOMER_SEARCH_RPC, Customer.from_row, sort_columns=CUSTOMER_SORT_COLUMNS)


def order_gateway(client: BackendClient) -> RpcListGateway[Order]:
    return RpcListGateway(client, ORDER_SEARCH_RPC, Order.from_row, sort_columns=ORDER_SORT_COLUMNS)


def transaction_gateway(client: BackendClient) -> RpcListGateway[Transaction]:
    return RpcListGateway(
        client, TRANSACTION_SEARCH_RPC, Transaction.from_row, sort_columns=TRANSACTION_SORT_COLUMNS
    )


__all__ = [
    "RpcListGateway",
    "split_page_payload",
    "customer_gateway",
    "order_gateway",
    "transaction_gateway",
]
