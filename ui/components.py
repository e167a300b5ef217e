"""Reusable UI components for consistent styling."""

from typing import Callable, Optional

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtWidgets import (
    QComboBox,
    QFrame,
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QSizePolicy,
    QToolButton,
    QVBoxLayout,
    QWidget,
)

PAGE_SIZE_CHOICES = (10, 25, 50)


class NavButton(QToolButton):
    """Navigation button used in sidebars."""

    def __init__(self, text: str, parent=None) -> None:
        super().__init__(parent)
        self.setObjectName("NavButton")
        self.setText(text)
        self.setCheckable(True)
        self.setToolButtonStyle(Qt.ToolButtonStyle.ToolButtonTextOnly)
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Fixed)


class Card(QFrame):
    """Framed container with standard padding and layout."""

    def __init__(self, parent=None) -> None:
        super().__init__(parent)
        self.setObjectName("Card")
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Minimum)
        self.setFrameShape(QFrame.Shape.StyledPanel)
        layout = QVBoxLayout(self)
        layout.setContentsMargins(18, 18, 18, 18)
        layout.setSpacing(10)


def section_title(text: str) -> QLabel:
    """Create a standardized section header label."""

    label = QLabel(text)
    label.setObjectName("SectionTitle")
    return label


def error_label() -> QLabel:
    """Hidden inline error line; call ``setText`` + ``setVisible`` to show."""

    label = QLabel()
    label.setObjectName("ErrorLabel")
    label.setStyleSheet("color:#b91c1c;")
    label.setWordWrap(True)
    label.setVisible(False)
    return label


def show_error(label: QLabel, message: Optional[str]) -> None:
    label.setText(message or "")
    label.setVisible(bool(message))


def metric_widget(title: str, value: str, *, highlight: bool = False, tooltip: Optional[str] = None) -> QWidget:
    container = QWidget()
    layout = QVBoxLayout(container)
    layout.setContentsMargins(0, 0, 0, 0)
    layout.setSpacing(4)

    title_label = QLabel(title.upper())
    title_label.setObjectName("MetricLabel")
    value_label = QLabel(value)
    value_label.setObjectName("MetricValue")
    value_label.setWordWrap(True)
    if highlight:
        value_label.setProperty("highlight", True)
    if tooltip:
        value_label.setToolTip(tooltip)

    layout.addWidget(title_label)
    layout.addWidget(value_label)
    layout.addStretch()
    return container


def build_metric_row(pairs: list[tuple[str, str]], *, columns: int = 4) -> QWidget:
    wrapper = QWidget()
    grid = QGridLayout(wrapper)
    grid.setContentsMargins(0, 0, 0, 0)
    grid.setSpacing(18)
    for idx, (title, value) in enumerate(pairs):
        grid.addWidget(metric_widget(title, "--" if value is None else str(value)), idx // columns, idx % columns)
    for col in range(columns):
        grid.setColumnStretch(col, 1)
    return wrapper


class PaginationBar(QWidget):
    """Previous/next buttons, a page label and a page-size selector."""

    previousRequested = pyqtSignal()
    nextRequested = pyqtSignal()
    pageSizeChanged = pyqtSignal(int)

    def __init__(self, page_size: int = 10, parent=None) -> None:
        super().__init__(parent)
        row = QHBoxLayout(self)
        row.setContentsMargins(0, 0, 0, 0)

        self.summary = QLabel()
        row.addWidget(self.summary)
        row.addStretch()

        row.addWidget(QLabel("Rows per page"))
        self.size_combo = QComboBox()
        sizes = sorted(set(PAGE_SIZE_CHOICES) | {page_size})
        for size in sizes:
            self.size_combo.addItem(str(size), size)
        self.size_combo.setCurrentIndex(sizes.index(page_size))
        self.size_combo.currentIndexChanged.connect(
            lambda _idx: self.pageSizeChanged.emit(int(self.size_combo.currentData()))
        )
        row.addWidget(self.size_combo)

        self.prev_button = QPushButton("Previous")
        self.prev_button.clicked.connect(self.previousRequested.emit)
        self.page_label = QLabel("Page 1 of 1")
        self.next_button = QPushButton("Next")
        self.next_button.clicked.connect(self.nextRequested.emit)
        row.addWidget(self.prev_button)
        row.addWidget(self.page_label)
        row.addWidget(self.next_button)

    def update_state(
        self,
        *,
        page: int,
        total_pages: int,
        total: int,
        shown: int,
        has_previous: bool,
        has_next: bool,
        loading: bool,
    ) -> None:
        self.summary.setText(f"Showing {shown} of {total}")
        self.page_label.setText(f"Page {page} of {max(total_pages, 1)}")
        self.prev_button.setEnabled(has_previous and not loading)
        self.next_button.setEnabled(has_next and not loading)


def primary_button(text: str, on_click: Optional[Callable[[], None]] = None) -> QPushButton:
    button = QPushButton(text, objectName="Primary")
    if on_click is not None:
        button.clicked.connect(on_click)
    return button


__all__ = [
    "Card",
    "NavButton",
    "PaginationBar",
    "build_metric_row",
    "error_label",
    "metric_widget",
    "primary_button",
    "section_title",
    "show_error",
]
