"""Yellow banner showing the latest admin alert."""
from __future__ import annotations

from PyQt6.QtWidgets import QFrame, QHBoxLayout, QLabel, QToolButton, QVBoxLayout

from logic.alert_banner import AlertBannerModel
from utils.formatting import format_time


class AlertBannerWidget(QFrame):
    """Renders an :class:`AlertBannerModel`; hidden while no alert is showing."""

    def __init__(self, parent=None) -> None:
        super().__init__(parent)
        self.setObjectName("AlertBanner")
        self.setStyleSheet(
            "#AlertBanner { background:#fefce8; border-left:4px solid #facc15; }"
        )
        row = QHBoxLayout(self)
        row.setContentsMargins(12, 10, 12, 10)

        text = QVBoxLayout()
        title = QLabel("Pesan dari Admin")
        title.setStyleSheet("font-weight:600; color:#854d0e;")
        self.message = QLabel()
        self.message.setWordWrap(True)
        self.sent_at = QLabel()
        self.sent_at.setStyleSheet("color:#a16207; font-size:11px;")
        text.addWidget(title)
        text.addWidget(self.message)
        text.addWidget(self.sent_at)
        row.addLayout(text, 1)

        self.dismiss_button = QToolButton()
        self.dismiss_button.setText("x")
        self.dismiss_button.setToolTip("Tutup")
        row.addWidget(self.dismiss_button)
        self.setVisible(False)

    def bind(self, model: AlertBannerModel) -> None:
        self.dismiss_button.clicked.connect(model.dismiss)

    def render(self, model: AlertBannerModel) -> None:
        alert = model.alert
        if not model.visible or alert is None:
            self.setVisible(False)
            return
        self.message.setText(alert.message)
        self.sent_at.setText(format_time(alert.sent_at))
        self.setVisible(True)


__all__ = ["AlertBannerWidget"]
