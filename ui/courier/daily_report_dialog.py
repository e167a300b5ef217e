"""End-of-day report prompt shown once every delivery is done."""
from __future__ import annotations

from typing import Callable, Optional

from PyQt6.QtWidgets import (
    QDialog,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPlainTextEdit,
    QPushButton,
    QVBoxLayout,
)

from ui.components import error_label, show_error
from utils.exceptions import ValidationError


class DailyReportDialog(QDialog):
    """Collects the summary notes and, for COD days, the cash collected.

    ``submit`` receives the raw notes and COD text and raises
    ``ValidationError`` for bad input; ``skip`` sends an empty report.
    """

    def __init__(
        self,
        *,
        has_cod: bool,
        submit: Callable[[Optional[str], str], None],
        skip: Callable[[], None],
        parent=None,
    ) -> None:
        super().__init__(parent)
        self._submit = submit
        self._skip = skip
        self.has_cod = has_cod
        self.setWindowTitle("Laporan Akhir Hari")
        self.setMinimumWidth(380)

        layout = QVBoxLayout(self)
        layout.addWidget(QLabel("Ringkasan Pengantaran Hari Ini (opsional)"))
        self.notes = QPlainTextEdit()
        self.notes.setPlaceholderText(
            "Contoh: Pengantaran si A terlambat karena hujan, paket si B saya bawa lagi..."
        )
        layout.addWidget(self.notes)

        self.cod = QLineEdit()
        self.cod.setPlaceholderText("0")
        if has_cod:
            layout.addWidget(QLabel("Total Dana COD Diterima *"))
            layout.addWidget(self.cod)
            self.cod.textChanged.connect(self._update_submit_state)

        info = QLabel(
            "Selamat! Semua pengiriman hari ini telah selesai.\n"
            "Laporan ini akan dikirim ke admin untuk evaluasi dan pencatatan."
        )
        info.setWordWrap(True)
        layout.addWidget(info)

        self.error = error_label()
        layout.addWidget(self.error)

        buttons = QHBoxLayout()
        self.skip_button = QPushButton("Lewati")
        self.submit_button = QPushButton("Kirim Laporan", objectName="Primary")
        buttons.addWidget(self.skip_button)
        buttons.addWidget(self.submit_button)
        layout.addLayout(buttons)

        self.skip_button.clicked.connect(self._on_skip)
        self.submit_button.clicked.connect(self._on_submit)
        self._update_submit_state()

    def _update_submit_state(self) -> None:
        self.submit_button.setEnabled(not self.has_cod or bool(self.cod.text().strip()))

    def set_busy(self, busy: bool) -> None:
        self.submit_button.setText("Mengirim..." if busy else "Kirim Laporan")
        self.submit_button.setEnabled(not busy)
        self.skip_button.setEnabled(not busy)
        if not busy:
            self._update_submit_state()

    def _on_submit(self) -> None:
        try:
            self._submit(self.notes.toPlainText(), self.cod.text())
        except ValidationError as exc:
            show_error(self.error, str(exc))
            return
        show_error(self.error, None)

    def _on_skip(self) -> None:
        self._skip()


__all__ = ["DailyReportDialog"]
