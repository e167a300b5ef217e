"""Courier delivery window: today's deliveries for one courier token."""
from __future__ import annotations

from datetime import date
import logging
from typing import Callable, Dict, Optional

from PyQt6.QtCore import Qt, QUrl
from PyQt6.QtGui import QDesktopServices
from PyQt6.QtWidgets import (
    QCheckBox,
    QFrame,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QScrollArea,
    QStatusBar,
    QVBoxLayout,
    QWidget,
)

from logic.alert_banner import AlertBannerModel
from logic.delivery_board import BoardState, DeliveryBoard
from models.delivery import DeliveryItem
from services.courier_service import CourierService
from services.realtime_feed import RealtimeFeed
from ui.components import Card, error_label, show_error
from ui.qt_bridge import BackgroundRunner, QtScheduler, UiDispatcher
from utils.config import DEFAULT_ALERT_HIDE_MS
from utils.contact_links import maps_url, whatsapp_url
from utils.formatting import format_long_date

from .alert_banner import AlertBannerWidget
from .daily_report_dialog import DailyReportDialog

logger = logging.getLogger(__name__)


class DeliveryRow(Card):
    """One delivery: completion checkbox, customer details and contact links."""

    def __init__(self, item: DeliveryItem, on_toggle: Callable[[int], None], parent=None) -> None:
        super().__init__(parent)
        self.order_id = item.order_id
        row = QHBoxLayout()
        self.layout().addLayout(row)

        self.done = QCheckBox()
        self.done.setChecked(not item.is_pending)
        self.done.setToolTip("Tandai sudah diantar")
        self.done.clicked.connect(lambda _checked=False: on_toggle(item.order_id))
        row.addWidget(self.done, alignment=Qt.AlignmentFlag.AlignTop)

        body = QVBoxLayout()
        name = QLabel(item.customer_name)
        name.setStyleSheet("font-size:15px; font-weight:600;")
        body.addWidget(name)
        address = QLabel(item.address)
        address.setWordWrap(True)
        body.addWidget(address)
        summary = QLabel(item.summary())
        summary.setWordWrap(True)
        summary.setStyleSheet("color:#6b7280;")
        body.addWidget(summary)
        if item.notes_for_courier:
            notes = QLabel(f"Catatan: {item.notes_for_courier}")
            notes.setWordWrap(True)
            body.addWidget(notes)
        if item.is_cod:
            body.addWidget(QLabel("COD"))

        links = QHBoxLayout()
        chat = QPushButton("Chat WhatsApp")
        chat.clicked.connect(lambda: QDesktopServices.openUrl(QUrl(whatsapp_url(item.phone, item.customer_name))))
        route = QPushButton("Maps")
        route.clicked.connect(lambda: QDesktopServices.openUrl(QUrl(maps_url(item.address))))
        links.addWidget(chat)
        links.addWidget(route)
        links.addStretch()
        body.addLayout(links)
        row.addLayout(body, 1)

        if not item.is_pending:
            self.setStyleSheet("#Card { background:#f0fdf4; }")


class DeliveryWindow(QMainWindow):
    def __init__(
        self,
        courier: CourierService,
        token: str,
        *,
        realtime: Optional[RealtimeFeed] = None,
        alert_hide_ms: int = DEFAULT_ALERT_HIDE_MS,
        today: Optional[date] = None,
    ) -> None:
        super().__init__()
        self._runner = BackgroundRunner()
        self._dispatcher = UiDispatcher(self)
        self._report_dialog: Optional[DailyReportDialog] = None
        self._rows: Dict[int, DeliveryRow] = {}

        self.board = DeliveryBoard(
            courier,
            token,
            run_async=self._runner.submit,
            dispatch=self._dispatcher.dispatch,
            on_state=self._render,
            on_notice=self._notice,
        )
        self.alert_banner = AlertBannerWidget()
        self._realtime = realtime
        self.alert_model: Optional[AlertBannerModel] = None
        if realtime is not None:
            self.alert_model = AlertBannerModel(
                realtime,
                token,
                scheduler=QtScheduler(self),
                dispatch=self._dispatcher.dispatch,
                hide_after_ms=alert_hide_ms,
                on_change=self.alert_banner.render,
            )
            self.alert_banner.bind(self.alert_model)

        self.setWindowTitle("Pengantaran")
        self.resize(480, 800)

        central = QWidget()
        root = QVBoxLayout(central)
        root.addWidget(self.alert_banner)

        header = QLabel(f"Pengantaran {format_long_date(today or date.today())}")
        header.setAlignment(Qt.AlignmentFlag.AlignHCenter)
        header.setStyleSheet("font-size:16px; font-weight:600;")
        root.addWidget(header)

        buttons = QHBoxLayout()
        self.refresh_button = QPushButton("Refresh")
        self.complete_button = QPushButton("Delivered", objectName="Primary")
        buttons.addStretch()
        buttons.addWidget(self.refresh_button)
        buttons.addWidget(self.complete_button)
        buttons.addStretch()
        root.addLayout(buttons)

        self.counter = QLabel()
        self.counter.setAlignment(Qt.AlignmentFlag.AlignHCenter)
        root.addWidget(self.counter)
        self.error = error_label()
        self.error.setAlignment(Qt.AlignmentFlag.AlignHCenter)
        root.addWidget(self.error)
        self.status_label = QLabel()
        self.status_label.setAlignment(Qt.AlignmentFlag.AlignHCenter)
        root.addWidget(self.status_label)

        self.list_host = QWidget()
        self.list_layout = QVBoxLayout(self.list_host)
        self.list_layout.addStretch()
        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        scroll.setFrameShape(QFrame.Shape.NoFrame)
        scroll.setWidget(self.list_host)
        root.addWidget(scroll, 1)

        self.setCentralWidget(central)
        self.setStatusBar(QStatusBar())

        self.refresh_button.clicked.connect(self.board.load)
        self.complete_button.clicked.connect(self.board.complete_all)

        self._render(self.board.state)
        if self.alert_model is not None:
            self.alert_model.start()
        if self._realtime is not None:
            self._realtime.start()
        self.board.load()

    def _notice(self, message: str) -> None:
        self.statusBar().showMessage(message, 5000)
        QMessageBox.information(self, "Pengantaran", message)

    # -- rendering ----------------------------------------------------------

    def _toggle(self, order_id: int) -> None:
        self.board.toggle(order_id)

    def _render(self, state: BoardState) -> None:
        self.counter.setText(f"Jumlah antaran: {state.total} (Belum diantar: {state.pending_count})")
        show_error(self.error, state.error)
        self.complete_button.setEnabled(not state.loading and state.pending_count > 0)
        if state.loading and not state.items:
            self.status_label.setText("Memuat data pengiriman...")
        elif state.is_empty:
            self.status_label.setText("Tidak ada pengiriman untuk hari ini")
        else:
            self.status_label.setText("")

        for row in self._rows.values():
            self.list_layout.removeWidget(row)
            row.deleteLater()
        self._rows = {}
        for index, item in enumerate(state.items):
            row = DeliveryRow(item, self._toggle)
            self._rows[item.order_id] = row
            self.list_layout.insertWidget(index, row)

        self._sync_report_dialog(state)

    def _sync_report_dialog(self, state: BoardState) -> None:
        if state.report_open and self._report_dialog is None:
            dialog = DailyReportDialog(
                has_cod=state.has_cod,
                submit=self.board.submit_report,
                skip=self.board.skip_report,
                parent=self,
            )
            dialog.rejected.connect(self.board.close_report)
            self._report_dialog = dialog
            dialog.show()
        elif self._report_dialog is not None:
            if not state.report_open:
                dialog, self._report_dialog = self._report_dialog, None
                dialog.blockSignals(True)
                dialog.close()
            else:
                self._report_dialog.set_busy(state.submitting_report)

    def closeEvent(self, event) -> None:  # type: ignore[override]
        self.board.close()
        if self.alert_model is not None:
            self.alert_model.close()
        if self._realtime is not None:
            self._realtime.stop()
        self._runner.shutdown()
        super().closeEvent(event)


__all__ = ["DeliveryWindow", "DeliveryRow"]
