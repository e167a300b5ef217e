"""Admin home page with this week's revenue and active customers."""
from __future__ import annotations

from PyQt6.QtWidgets import QLabel, QPushButton, QVBoxLayout

from services.dashboard_metrics import DashboardMetrics
from ui.components import Card, build_metric_row, error_label, section_title, show_error
from utils.formatting import format_currency, format_date

from .base import DashboardPage

METRICS_FAILED_MESSAGE = "Failed to load dashboard metrics."


class AdminHomePage(DashboardPage):
    """Landing view with the week's revenue and active customer count."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self._loading = False

        layout = QVBoxLayout(self)
        layout.setContentsMargins(18, 18, 18, 18)
        layout.setSpacing(18)

        self.metrics_card = Card()
        self.metrics_card.layout().addWidget(section_title("Overview"))
        self.metrics_row = build_metric_row(self._metric_pairs(None), columns=2)
        self.metrics_card.layout().addWidget(self.metrics_row)
        self.period_label = QLabel("Revenue since --")
        self.metrics_card.layout().addWidget(self.period_label)
        self.error = error_label()
        self.metrics_card.layout().addWidget(self.error)
        self.reload_button = QPushButton("Reload")
        self.reload_button.clicked.connect(self.refresh)
        self.metrics_card.layout().addWidget(self.reload_button)
        layout.addWidget(self.metrics_card)
        layout.addStretch()

    @staticmethod
    def _metric_pairs(metrics: DashboardMetrics | None) -> list[tuple[str, str]]:
        if metrics is None:
            return [("Revenue This Week", "--"), ("Active Customers", "--")]
        return [
            ("Revenue This Week", format_currency(metrics.revenue, blank="Rp 0")),
            ("Active Customers", str(metrics.active_customer_count)),
        ]

    def on_attached(self) -> None:
        self.refresh()

    def refresh(self) -> None:
        if self._loading:
            return
        self._loading = True
        self.reload_button.setEnabled(False)
        show_error(self.error, None)
        self.run_in_background(self.context.services.metrics.load, self._show_metrics, self._show_failure)

    def _show_metrics(self, metrics: DashboardMetrics) -> None:
        self._loading = False
        self.reload_button.setEnabled(True)
        self.metrics_card.layout().removeWidget(self.metrics_row)
        self.metrics_row.setParent(None)
        self.metrics_row = build_metric_row(self._metric_pairs(metrics), columns=2)
        self.metrics_card.layout().insertWidget(1, self.metrics_row)
        self.period_label.setText(f"Revenue since Monday {format_date(metrics.revenue_since)}")

    def _show_failure(self, _exc: BaseException) -> None:
        self._loading = False
        self.reload_button.setEnabled(True)
        show_error(self.error, METRICS_FAILED_MESSAGE)


__all__ = ["AdminHomePage"]
