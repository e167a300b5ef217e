import pytest

from models.delivery import DailyReport, DeliveryItem, DeliveryStatus
from models.list_query import ListPage, ListQuery, SortOrder, total_pages_for
from models.profile import Profile, Role
from tests.util.deliveries import delivery_row
from utils.exceptions import ValidationError


def test_report_without_cod_ignores_amount():
    report = DailyReport.parse("  ", "abc", has_cod=False)

    assert report == DailyReport()


@pytest.mark.parametrize(
    "cod_text, message",
    [("", "wajib diisi"), ("dua ratus", "harus berupa angka"), ("-1", "tidak boleh negatif")],
)
def test_report_cod_validation(cod_text, message):
    with pytest.raises(ValidationError, match=message):
        DailyReport.parse("catatan", cod_text, has_cod=True)


def test_report_with_cod_amount():
    report = DailyReport.parse(" semua lancar ", " 150000 ", has_cod=True)

    assert report.summary_notes == "semua lancar"
    assert report.total_cod_collected == 150000.0
    assert DailyReport.parse(None, 0, has_cod=True).total_cod_collected == 0.0


def test_delivery_item_from_row():
    item = DeliveryItem.from_row(delivery_row(4, "completed", "COD"))

    assert item.status is DeliveryStatus.COMPLETED
    assert item.is_cod
    assert item.with_status("pending").is_pending
    assert item.address == "Jl. Mawar 4"


def test_query_validation():
    with pytest.raises(ValidationError):
        ListQuery(page=0)
    with pytest.raises(ValidationError):
        ListQuery(limit=0)
    with pytest.raises(ValidationError):
        ListQuery(sort_order="sideways")
    assert ListQuery(sort_order="asc").sort_order is SortOrder.ASC


def test_query_changes_never_mutate():
    query = ListQuery()
    changed = query.with_changes(page=2, search="x")

    assert query.page == 1
    assert changed.page == 2
    assert changed.search == "x"


def test_page_math():
    assert total_pages_for(0, 10) == 0
    assert total_pages_for(10, 10) == 1
    assert total_pages_for(11, 10) == 2
    assert ListPage.of([1, 2], total=12, query=ListQuery(page=2, limit=10)).total_pages == 2


def test_profile_from_row_and_local():
    profile = Profile.from_row({"id": "u1", "role": "manager", "display_name": "Rina"})

    assert profile.role is Role.MANAGER
    assert profile.capabilities == frozenset({Role.MANAGER})
    assert Profile.local(Role.OWNER).display_name == "Owner"
