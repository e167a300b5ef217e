from datetime import date

from services.dashboard_metrics import DashboardMetricsService, week_start
from tests.util.backend import FakeClient


def test_week_starts_on_monday():
    assert week_start(date(2024, 5, 15)) == date(2024, 5, 13)
    assert week_start(date(2024, 5, 13)) == date(2024, 5, 13)
    assert week_start(date(2024, 5, 19)) == date(2024, 5, 13)


def test_load_collects_revenue_and_active_customers():
    client = FakeClient(
        get_total_revenue_from_date="1250000.50",
        get_active_customer_count={"count": 7, "customers": []},
    )
    service = DashboardMetricsService(client, today=lambda: date(2024, 5, 16))

    metrics = service.load()

    assert metrics.revenue_since == date(2024, 5, 13)
    assert metrics.revenue == 1250000.5
    assert metrics.active_customer_count == 7
    assert client.calls[0] == ("rpc", "get_total_revenue_from_date", {"p_start_date": "2024-05-13"})


def test_missing_values_default_to_zero():
    client = FakeClient(get_total_revenue_from_date=None, get_active_customer_count=None)

    metrics = DashboardMetricsService(client, today=lambda: date(2024, 5, 16)).load()

    assert metrics.revenue == 0.0
    assert metrics.active_customer_count == 0
