from __future__ import annotations

"""Home page metrics: revenue for the current week and active customers."""

from dataclasses import dataclass
from datetime import date, timedelta
import logging
from typing import Any, Callable, Mapping

from services.backend_client import BackendClient, unwrap_envelope

logger = logging.getLogger(__name__)


def week_start(today: date) -> date:
    """Monday of the week containing ``today`` (Sunday belongs to the week before)."""

    return today - timedelta(days=today.weekday())


@dataclass(frozen=True)
class DashboardMetrics:
    revenue_since: date
    revenue: float
    active_customer_count: int


class DashboardMetricsService:
    def __init__(self, client: BackendClient, *, today: Callable[[], date] = date.today) -> None:
        self._client = client
        self._today = today

    def revenue_since(self, start: date) -> float:
        data = unwrap_envelope(
            self._client.rpc("get_total_revenue_from_date", {"p_start_date": start.isoformat()})
        )
        return float(data or 0)

    def active_customer_count(self) -> int:
        data: Any = unwrap_envelope(self._client.rpc("get_active_customer_count"))
        if isinstance(data, Mapping):
            data = data.get("count")
        return int(data or 0)

    def load(self) -> DashboardMetrics:
        start = week_start(self._today())
        metrics = DashboardMetrics(
            revenue_since=start,
            revenue=self.revenue_since(start),
            active_customer_count=self.active_customer_count(),
        )
        logger.debug("Dashboard metrics: %s", metrics)
        return metrics


__all__ = ["DashboardMetrics", "DashboardMetricsService", "week_start"]
