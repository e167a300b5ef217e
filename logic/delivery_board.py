from __future__ import annotations

"""Courier delivery page state: load, status toggles and the daily report."""

from concurrent.futures import Future
from dataclasses import dataclass
import logging
from typing import Any, Callable, Optional, Protocol, Sequence, Tuple

from logic.scheduling import Dispatch, Worker, call_now
from logic.status_transitions import StatusTransitionController, TransitionOutcome
from models.delivery import DailyReport, DeliveryItem, DeliveryStatus
from utils.exceptions import GatewayError

logger = logging.getLogger(__name__)

MISSING_TOKEN_MESSAGE = "Token kurir tidak ditemukan"
LOAD_FAILED_MESSAGE = "Gagal memuat data pengiriman"
REPORT_FAILED_MESSAGE = "Gagal mengirim laporan"
REPORT_SENT_MESSAGE = "Laporan harian berhasil dikirim!"


class CourierGateway(Protocol):
    def get_deliveries(self, token: str) -> Sequence[DeliveryItem]:
        ...

    def update_delivery_status(self, token: str, order_id: int, status: DeliveryStatus) -> Any:
        ...

    def batch_update_today_deliveries(self, token: str) -> int:
        ...

    def submit_daily_report(
        self,
        token: str,
        summary_notes: Optional[str] = None,
        total_cod_collected: Optional[float] = None,
    ) -> Any:
        ...


@dataclass(frozen=True)
class BoardState:
    items: Tuple[DeliveryItem, ...] = ()
    loading: bool = False
    error: Optional[str] = None
    pending_count: int = 0
    has_cod: bool = False
    report_open: bool = False
    submitting_report: bool = False

    @property
    def total(self) -> int:
        return len(self.items)

    @property
    def is_empty(self) -> bool:
        return not self.items and not self.loading and self.error is None


class DeliveryBoard:
    """Everything the courier page shows for one courier token."""

    def __init__(
        self,
        courier: CourierGateway,
        token: str,
        *,
        run_async: Worker,
        dispatch: Dispatch = call_now,
        on_state: Optional[Callable[[BoardState], None]] = None,
        on_notice: Optional[Callable[[str], None]] = None,
    ) -> None:
        self._courier = courier
        self._token = (token or "").strip()
        self._run_async = run_async
        self._dispatch = dispatch
        self._on_state = on_state
        self._on_notice = on_notice
        self._generation = 0
        self._loading = False
        self._error: Optional[str] = None
        self._report_open = False
        self._submitting = False
        self._closed = False
        self.transitions = StatusTransitionController(
            lambda order_id, status: courier.update_delivery_status(self._token, order_id, status),
            lambda: courier.batch_update_today_deliveries(self._token),
            run_async=run_async,
            dispatch=self._guarded,
            on_change=lambda _items: self._emit(),
            on_notice=self._notice,
            on_batch_complete=self.open_report,
        )
        self._state = self._snapshot()

    @property
    def token(self) -> str:
        return self._token

    @property
    def state(self) -> BoardState:
        return self._state

    @property
    def closed(self) -> bool:
        return self._closed

    # -- loading ----------------------------------------------------------

    def load(self) -> Optional["Future[Any]"]:
        """Fetch today's deliveries; a newer load supersedes an older one."""

        if self._closed:
            return None
        if not self._token:
            self._loading = False
            self._error = MISSING_TOKEN_MESSAGE
            self._emit()
            return None
        self._generation += 1
        generation = self._generation
        self._loading = True
        self._error = None
        self._emit()
        token = self._token
        try:
            future = self._run_async(lambda: self._courier.get_deliveries(token))
        except Exception as exc:
            self._load_failed(exc)
            return None

        def _done(fut: "Future[Any]") -> None:
            self._dispatch(lambda: self._on_loaded(generation, fut))

        future.add_done_callback(_done)
        return future

    def _on_loaded(self, generation: int, future: "Future[Any]") -> None:
        if self._closed:
            return
        if generation != self._generation:
            logger.debug("Dropping stale delivery load %s (current %s)", generation, self._generation)
            return
        exc = GatewayError("CANCELLED", LOAD_FAILED_MESSAGE) if future.cancelled() else future.exception()
        if exc is not None:
            self._load_failed(exc)
            return
        self._loading = False
        self._error = None
        self.transitions.load(future.result() or ())
        logger.info("Loaded %s deliveries for courier %s", self.transitions.total, self._token)

    def _load_failed(self, exc: BaseException) -> None:
        if isinstance(exc, GatewayError):
            logger.warning("Loading deliveries failed: %s", exc)
            message = exc.message or LOAD_FAILED_MESSAGE
        else:
            logger.error("Unexpected error loading deliveries", exc_info=exc)
            message = LOAD_FAILED_MESSAGE
        self._loading = False
        self._error = message
        self._emit()

    # -- status changes ---------------------------------------------------

    def set_status(self, order_id: int, status: DeliveryStatus | str) -> "Future[TransitionOutcome]":
        return self.transitions.set_status(order_id, status)

    def toggle(self, order_id: int) -> "Future[TransitionOutcome]":
        item = self.transitions.get(order_id)
        target = DeliveryStatus.COMPLETED if item.is_pending else DeliveryStatus.PENDING
        return self.transitions.set_status(order_id, target)

    def complete_all(self) -> "Future[int]":
        return self.transitions.complete_all()

    # -- daily report -----------------------------------------------------

    def open_report(self) -> None:
        if self._closed or self._report_open:
            return
        self._report_open = True
        self._emit()

    def close_report(self) -> None:
        if self._report_open:
            self._report_open = False
            self._emit()

    def submit_report(self, summary_notes: Optional[str], cod_text: Any) -> "Future[bool]":
        """Validate and send the report; raises ``ValidationError`` on bad input."""

        report = DailyReport.parse(summary_notes, cod_text, has_cod=self.transitions.has_cod)
        return self._send_report(report)

    def skip_report(self) -> "Future[bool]":
        """Send an empty report so the day is still marked as closed."""

        return self._send_report(DailyReport())

    def _send_report(self, report: DailyReport) -> "Future[bool]":
        result: "Future[bool]" = Future()
        self._submitting = True
        self._emit()
        token = self._token
        try:
            remote = self._run_async(
                lambda: self._courier.submit_daily_report(
                    token, report.summary_notes, report.total_cod_collected
                )
            )
        except Exception as exc:
            self._report_done(exc, result)
            return result

        def _done(fut: "Future[Any]") -> None:
            exc = GatewayError("CANCELLED", REPORT_FAILED_MESSAGE) if fut.cancelled() else fut.exception()
            self._dispatch(lambda: self._report_done(exc, result))

        remote.add_done_callback(_done)
        return result

    def _report_done(self, exc: Optional[BaseException], result: "Future[bool]") -> None:
        self._submitting = False
        if exc is not None:
            logger.warning("Daily report submission failed: %s", exc)
            message = exc.message if isinstance(exc, GatewayError) and exc.message else REPORT_FAILED_MESSAGE
            self._emit()
            self._notice(message)
            result.set_result(False)
            return
        self._report_open = False
        self._emit()
        self._notice(REPORT_SENT_MESSAGE)
        result.set_result(True)

    # -- plumbing ---------------------------------------------------------

    def close(self) -> None:
        self._closed = True

    def _guarded(self, callback: Callable[[], None]) -> None:
        def _run() -> None:
            if not self._closed:
                callback()

        self._dispatch(_run)

    def _snapshot(self) -> BoardState:
        return BoardState(
            items=self.transitions.items,
            loading=self._loading,
            error=self._error,
            pending_count=self.transitions.pending_count,
            has_cod=self.transitions.has_cod,
            report_open=self._report_open,
            submitting_report=self._submitting,
        )

    def _emit(self) -> None:
        self._state = self._snapshot()
        if self._on_state is not None and not self._closed:
            self._on_state(self._state)

    def _notice(self, message: str) -> None:
        if self._on_notice is not None and not self._closed:
            self._on_notice(message)


__all__ = [
    "BoardState",
    "CourierGateway",
    "DeliveryBoard",
    "MISSING_TOKEN_MESSAGE",
    "LOAD_FAILED_MESSAGE",
    "REPORT_FAILED_MESSAGE",
    "REPORT_SENT_MESSAGE",
]
