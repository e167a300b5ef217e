import pytest

from logic.delivery_board import (
    LOAD_FAILED_MESSAGE,
    MISSING_TOKEN_MESSAGE,
    REPORT_FAILED_MESSAGE,
    REPORT_SENT_MESSAGE,
    DeliveryBoard,
)
from models.delivery import DeliveryStatus
from tests.util.deliveries import make_item
from utils.exceptions import GatewayError, ValidationError


class FakeCourier:
    def __init__(self, items=()):
        self.items = list(items)
        self.updates = []
        self.batches = []
        self.reports = []

    def get_deliveries(self, token):
        return list(self.items)

    def update_delivery_status(self, token, order_id, status):
        self.updates.append((token, order_id, status))

    def batch_update_today_deliveries(self, token):
        self.batches.append(token)
        return len(self.items)

    def submit_daily_report(self, token, summary_notes=None, total_cod_collected=None):
        self.reports.append((token, summary_notes, total_cod_collected))


def _make(worker, courier=None, token="tok-1"):
    states = []
    notices = []
    board = DeliveryBoard(
        courier or FakeCourier([make_item(1), make_item(2)]),
        token,
        run_async=worker,
        on_state=states.append,
        on_notice=notices.append,
    )
    return board, states, notices


def test_missing_token_shows_error_without_fetching(worker):
    board, _states, _ = _make(worker, token="   ")

    assert board.load() is None
    assert board.state.error == MISSING_TOKEN_MESSAGE
    assert worker.jobs == []


def test_load_populates_items_and_counts(worker):
    board, states, _ = _make(worker)

    board.load()
    assert board.state.loading
    worker.run(0)

    state = board.state
    assert not state.loading
    assert state.total == 2
    assert state.pending_count == 2
    assert not state.is_empty
    assert states[-1] == state


def test_newer_load_supersedes_older_one(worker):
    board, _states, _ = _make(worker)

    board.load()
    board.load()
    worker.resolve(1, [make_item(9)])
    worker.resolve(0, [make_item(1), make_item(2)])

    assert [item.order_id for item in board.state.items] == [9]


def test_load_failure_uses_backend_message_or_default(worker):
    board, _states, _ = _make(worker)

    board.load()
    worker.fail(0, GatewayError("INVALID_TOKEN", "Token tidak valid"))
    assert board.state.error == "Token tidak valid"

    board.load()
    assert board.state.error is None
    worker.fail(1, RuntimeError("boom"))
    assert board.state.error == LOAD_FAILED_MESSAGE


def test_toggle_round_trips_status(worker):
    courier = FakeCourier([make_item(1), make_item(2)])
    board, _states, _ = _make(worker, courier)
    board.load()
    worker.run(0)

    board.toggle(1)
    assert board.state.pending_count == 1
    worker.run(1)
    board.toggle(1)
    worker.run(2)

    assert courier.updates == [
        ("tok-1", 1, DeliveryStatus.COMPLETED),
        ("tok-1", 1, DeliveryStatus.PENDING),
    ]
    assert board.state.pending_count == 2


def test_finishing_last_delivery_opens_report(worker):
    board, _states, _ = _make(worker)
    board.load()
    worker.run(0)

    board.toggle(1)
    worker.run(1)
    assert not board.state.report_open
    board.toggle(2)
    worker.run(2)

    assert board.state.report_open


def test_complete_all_opens_report(worker):
    courier = FakeCourier([make_item(1), make_item(2)])
    board, _states, _ = _make(worker, courier)
    board.load()
    worker.run(0)

    board.complete_all()
    worker.run(1)

    assert courier.batches == ["tok-1"]
    assert board.state.pending_count == 0
    assert board.state.report_open


def test_report_requires_cod_total_when_any_delivery_is_cod(worker):
    courier = FakeCourier([make_item(1, payment="COD")])
    board, _states, _ = _make(worker, courier)
    board.load()
    worker.run(0)

    with pytest.raises(ValidationError):
        board.submit_report("ok", "")
    assert courier.reports == []


def test_successful_report_closes_prompt(worker):
    courier = FakeCourier([make_item(1, payment="COD")])
    board, _states, notices = _make(worker, courier)
    board.load()
    worker.run(0)
    board.open_report()

    result = board.submit_report("  lancar  ", "250000")
    assert board.state.submitting_report
    worker.run(1)

    assert result.result() is True
    assert courier.reports == [("tok-1", "lancar", 250000.0)]
    assert not board.state.report_open
    assert not board.state.submitting_report
    assert notices == [REPORT_SENT_MESSAGE]


def test_failed_report_keeps_prompt_open(worker):
    board, _states, notices = _make(worker)
    board.open_report()

    result = board.submit_report(None, None)
    worker.fail(0, RuntimeError("offline"))

    assert result.result() is False
    assert board.state.report_open
    assert notices == [REPORT_FAILED_MESSAGE]


def test_skip_sends_empty_report(worker):
    courier = FakeCourier()
    board, _states, _ = _make(worker, courier)
    board.open_report()

    board.skip_report()
    worker.run(0)

    assert courier.reports == [("tok-1", None, None)]
    assert not board.state.report_open


def test_closed_board_ignores_late_results(worker):
    board, states, notices = _make(worker)
    board.load()
    emitted = len(states)

    board.close()
    worker.run(0)

    assert len(states) == emitted
    assert notices == []
    assert board.load() is None
