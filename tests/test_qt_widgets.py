import pytest

pytest.importorskip("PyQt6.QtWidgets")

from PyQt6.QtWidgets import QApplication

from ui.components import PaginationBar
from ui.courier.daily_report_dialog import DailyReportDialog
from utils.exceptions import ValidationError


@pytest.fixture(scope="module")
def app():
    return QApplication.instance() or QApplication([])


def test_pagination_bar_reflects_state(app):
    bar = PaginationBar(page_size=25)
    sizes = []
    bar.pageSizeChanged.connect(sizes.append)

    bar.update_state(page=2, total_pages=5, total=120, shown=25, has_previous=True, has_next=True, loading=False)
    assert bar.page_label.text() == "Page 2 of 5"
    assert bar.summary.text() == "Showing 25 of 120"
    assert bar.prev_button.isEnabled()

    bar.update_state(page=2, total_pages=5, total=120, shown=25, has_previous=True, has_next=True, loading=True)
    assert not bar.next_button.isEnabled()

    bar.size_combo.setCurrentIndex(bar.size_combo.findData(50))
    assert sizes == [50]


def test_report_dialog_requires_cod_text(app):
    submitted = []
    dialog = DailyReportDialog(has_cod=True, submit=lambda n, c: submitted.append((n, c)), skip=lambda: None)

    assert not dialog.submit_button.isEnabled()
    dialog.cod.setText("150000")
    assert dialog.submit_button.isEnabled()

    dialog.submit_button.click()
    assert submitted == [("", "150000")]


def test_report_dialog_shows_validation_error(app):
    def submit(_notes, _cod):
        raise ValidationError("Total dana COD harus berupa angka")

    dialog = DailyReportDialog(has_cod=True, submit=submit, skip=lambda: None)
    dialog.cod.setText("abc")
    dialog.submit_button.click()

    assert dialog.error.text() == "Total dana COD harus berupa angka"
    assert not dialog.error.isHidden()


def test_report_dialog_without_cod_can_submit_and_skip(app):
    skipped = []
    dialog = DailyReportDialog(has_cod=False, submit=lambda n, c: None, skip=lambda: skipped.append(True))

    assert dialog.submit_button.isEnabled()
    dialog.skip_button.click()
    assert skipped == [True]
