"""Settings page: backend timezone and the active-customer report."""
from __future__ import annotations

from PyQt6.QtGui import QColor
from PyQt6.QtWidgets import (
    QAbstractItemView,
    QHBoxLayout,
    QHeaderView,
    QLabel,
    QLineEdit,
    QPushButton,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
)

from services.settings_service import DEFAULT_TIMEZONE, ActiveCustomerReport, Severity
from ui.components import Card, error_label, section_title, show_error
from utils.exceptions import GatewayError, ValidationError

from .base import DashboardPage

SEVERITY_COLORS = {
    Severity.OVERDUE: "#fee2e2",
    Severity.WARNING: "#fef9c3",
    Severity.OK: "#dcfce7",
}
REPORT_FAILED_MESSAGE = "Failed to load active customer data."


class SettingsPage(DashboardPage):
    def __init__(self, parent=None):
        super().__init__(parent)
        layout = QVBoxLayout(self)
        layout.setContentsMargins(18, 18, 18, 18)
        layout.setSpacing(18)

        tz_card = Card()
        tz_card.layout().addWidget(section_title("Timezone"))
        self.timezone = QLineEdit()
        self.timezone.setPlaceholderText(DEFAULT_TIMEZONE)
        tz_card.layout().addWidget(self.timezone)
        buttons = QHBoxLayout()
        self.save_button = QPushButton("Save", objectName="Primary")
        self.jakarta_button = QPushButton("Set to Jakarta")
        buttons.addWidget(self.save_button)
        buttons.addWidget(self.jakarta_button)
        buttons.addStretch()
        tz_card.layout().addLayout(buttons)
        self.tz_error = error_label()
        tz_card.layout().addWidget(self.tz_error)
        layout.addWidget(tz_card)

        report_card = Card()
        report_card.layout().addWidget(section_title("Active Customer Details"))
        self.report_error = error_label()
        report_card.layout().addWidget(self.report_error)
        self.report_summary = QLabel()
        report_card.layout().addWidget(self.report_summary)
        self.report_table = QTableWidget(0, 2)
        self.report_table.setHorizontalHeaderLabels(["Customer Name", "Pending Days"])
        self.report_table.setEditTriggers(QAbstractItemView.EditTrigger.NoEditTriggers)
        self.report_table.horizontalHeader().setSectionResizeMode(QHeaderView.ResizeMode.Stretch)
        report_card.layout().addWidget(self.report_table)
        layout.addWidget(report_card)
        layout.addStretch()

        self.save_button.clicked.connect(self._save_timezone)
        self.jakarta_button.clicked.connect(lambda: self.timezone.setText(DEFAULT_TIMEZONE))

    def on_attached(self) -> None:
        self.refresh()

    def refresh(self) -> None:
        settings = self.context.services.settings
        self.run_in_background(
            settings.get_timezone,
            lambda value: self.timezone.setText(value or ""),
            lambda _exc: show_error(self.tz_error, "Failed to load timezone."),
        )
        self.run_in_background(settings.active_customer_report, self._show_report, self._report_failed)

    def _save_timezone(self) -> None:
        value = self.timezone.text()
        if not value.strip():
            show_error(self.tz_error, "Timezone cannot be empty")
            return
        show_error(self.tz_error, None)
        self.save_button.setEnabled(False)
        settings = self.context.services.settings
        self.run_in_background(lambda: settings.update_timezone(value), self._saved, self._save_failed)

    def _saved(self, value: str) -> None:
        self.save_button.setEnabled(True)
        self.timezone.setText(value)
        self.context.toast("success", "Timezone updated successfully")

    def _save_failed(self, exc: BaseException) -> None:
        self.save_button.setEnabled(True)
        if isinstance(exc, (GatewayError, ValidationError)):
            show_error(self.tz_error, str(getattr(exc, "message", exc)))
        self.context.toast("error", "Error updating timezone")

    def _show_report(self, report: ActiveCustomerReport) -> None:
        show_error(self.report_error, None)
        if not report.customers:
            self.report_summary.setText("No customers with pending orders found.")
        else:
            self.report_summary.setText(f"Showing {report.count} customers with pending orders")
        self.report_table.setRowCount(len(report.customers))
        for row, customer in enumerate(report.customers):
            self.report_table.setItem(row, 0, QTableWidgetItem(customer.name))
            days = QTableWidgetItem(f"{customer.pending_days} days")
            days.setBackground(QColor(SEVERITY_COLORS[customer.severity]))
            self.report_table.setItem(row, 1, days)

    def _report_failed(self, exc: BaseException) -> None:
        message = exc.message if isinstance(exc, GatewayError) and exc.code != "NETWORK_ERROR" else REPORT_FAILED_MESSAGE
        show_error(self.report_error, message)


__all__ = ["SettingsPage"]
