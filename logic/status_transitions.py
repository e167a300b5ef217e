from __future__ import annotations

"""Optimistic delivery status updates with rollback and batch completion."""

from concurrent.futures import Future
from dataclasses import dataclass
import logging
from typing import Any, Callable, Dict, Iterable, Optional, Tuple

from logic.scheduling import Dispatch, Worker, call_now
from models.delivery import DeliveryItem, DeliveryStatus, PendingTransition
from utils.exceptions import GatewayError, ValidationError

logger = logging.getLogger(__name__)

UpdateStatus = Callable[[int, DeliveryStatus], Any]
CompleteAllPending = Callable[[], int]

STATUS_FAILED_MESSAGE = "Gagal mengubah status pengiriman"
BATCH_FAILED_MESSAGE = "Gagal menyelesaikan semua pengiriman"


@dataclass(frozen=True)
class TransitionOutcome:
    order_id: int

    @property
    def ok(self) -> bool:
        return isinstance(self, Applied)


@dataclass(frozen=True)
class Applied(TransitionOutcome):
    status: DeliveryStatus


@dataclass(frozen=True)
class RolledBack(TransitionOutcome):
    restored: DeliveryStatus
    reason: str


def _user_message(exc: BaseException, fallback: str) -> str:
    if isinstance(exc, GatewayError) and exc.message:
        return exc.message
    return fallback


class StatusTransitionController:
    """Keeps the courier's local delivery list in step with the backend.

    ``set_status`` applies the new status locally first and reconciles once
    the remote call resolves: success keeps it, failure restores the previous
    status and raises a notice. When a successful completion leaves no other
    item pending, ``on_batch_complete`` fires once for the batch.
    """

    def __init__(
        self,
        update_status: UpdateStatus,
        complete_all_pending: CompleteAllPending,
        *,
        run_async: Worker,
        dispatch: Dispatch = call_now,
        items: Iterable[DeliveryItem] = (),
        on_change: Optional[Callable[[Tuple[DeliveryItem, ...]], None]] = None,
        on_notice: Optional[Callable[[str], None]] = None,
        on_batch_complete: Optional[Callable[[], None]] = None,
    ) -> None:
        self._update_status = update_status
        self._complete_all_pending = complete_all_pending
        self._run_async = run_async
        self._dispatch = dispatch
        self._on_change = on_change
        self._on_notice = on_notice
        self._on_batch_complete = on_batch_complete

        self._items: Dict[int, DeliveryItem] = {}
        self._latest: Dict[int, int] = {}
        self._token = 0
        self._batch_signalled = False
        self._replace(items)

    # -- read side --------------------------------------------------------

    @property
    def items(self) -> Tuple[DeliveryItem, ...]:
        """Pending deliveries first, then completed, each in load order."""

        values = list(self._items.values())
        return tuple([i for i in values if i.is_pending] + [i for i in values if not i.is_pending])

    def get(self, order_id: int) -> DeliveryItem:
        try:
            return self._items[order_id]
        except KeyError:
            raise ValidationError(f"Unknown delivery {order_id}") from None

    @property
    def total(self) -> int:
        return len(self._items)

    @property
    def pending_count(self) -> int:
        return sum(1 for item in self._items.values() if item.is_pending)

    @property
    def completed_count(self) -> int:
        return self.total - self.pending_count

    @property
    def has_cod(self) -> bool:
        return any(item.is_cod for item in self._items.values())

    @property
    def in_flight(self) -> int:
        return len(self._latest)

    # -- operations -------------------------------------------------------

    def load(self, items: Iterable[DeliveryItem]) -> None:
        """Replace the whole list (fresh fetch); starts a new batch."""

        self._replace(items)
        self._changed()

    def set_status(self, order_id: int, new_status: DeliveryStatus | str) -> "Future[TransitionOutcome]":
        try:
            target = DeliveryStatus(new_status)
        except ValueError as exc:
            raise ValidationError(f"Unknown delivery status {new_status!r}") from exc
        item = self.get(order_id)

        self._token += 1
        transition = PendingTransition(order_id=order_id, target=target, previous=item.status, token=self._token)
        self._latest[order_id] = transition.token
        self._items[order_id] = item.with_status(target)
        self._changed()

        outcome: "Future[TransitionOutcome]" = Future()
        try:
            remote = self._run_async(lambda: self._update_status(order_id, target))
        except Exception as exc:
            self._reconcile_failure(transition, exc, outcome)
            return outcome

        def _done(fut: "Future[Any]") -> None:
            self._dispatch(lambda: self._reconcile(transition, fut, outcome))

        remote.add_done_callback(_done)
        return outcome

    def complete_all(self) -> "Future[int]":
        """Mark every delivery completed with one remote batch call.

        Nothing changes locally unless the backend confirms.
        """

        result: "Future[int]" = Future()
        try:
            remote = self._run_async(self._complete_all_pending)
        except Exception as exc:
            self._batch_failed(exc, result)
            return result

        def _done(fut: "Future[Any]") -> None:
            self._dispatch(lambda: self._finish_batch(fut, result))

        remote.add_done_callback(_done)
        return result

    # -- internals --------------------------------------------------------

    def _replace(self, items: Iterable[DeliveryItem]) -> None:
        self._items = {item.order_id: item for item in items}
        self._latest.clear()
        self._batch_signalled = False

    def _is_latest(self, transition: PendingTransition) -> bool:
        return self._latest.get(transition.order_id) == transition.token

    def _reconcile(
        self,
        transition: PendingTransition,
        remote: "Future[Any]",
        outcome: "Future[TransitionOutcome]",
    ) -> None:
        exc: Optional[BaseException]
        if remote.cancelled():
            exc = GatewayError("CANCELLED", STATUS_FAILED_MESSAGE)
        else:
            exc = remote.exception()
        if exc is not None:
            self._reconcile_failure(transition, exc, outcome)
            return

        latest = self._is_latest(transition)
        if latest:
            del self._latest[transition.order_id]
        if transition.target is DeliveryStatus.COMPLETED:
            if latest:
                self._check_batch_complete(transition.order_id)
        elif latest and transition.order_id in self._items:
            # new pending work re-arms the batch prompt
            self._batch_signalled = False
        outcome.set_result(Applied(order_id=transition.order_id, status=transition.target))

    def _reconcile_failure(
        self,
        transition: PendingTransition,
        exc: BaseException,
        outcome: "Future[TransitionOutcome]",
    ) -> None:
        reason = _user_message(exc, STATUS_FAILED_MESSAGE)
        logger.warning(
            "Status update for order %s to %s failed: %s",
            transition.order_id,
            transition.target.value,
            exc,
        )
        restored = transition.previous
        if self._is_latest(transition):
            del self._latest[transition.order_id]
            item = self._items.get(transition.order_id)
            if item is not None:
                self._items[transition.order_id] = item.with_status(transition.previous)
                self._changed()
        else:
            current = self._items.get(transition.order_id)
            restored = current.status if current is not None else transition.previous
        self._notice(reason)
        outcome.set_result(RolledBack(order_id=transition.order_id, restored=restored, reason=reason))

    def _check_batch_complete(self, order_id: int) -> None:
        remaining = [
            item for item in self._items.values() if item.order_id != order_id and item.is_pending
        ]
        if remaining or self._batch_signalled:
            return
        self._signal_batch_complete()

    def _signal_batch_complete(self) -> None:
        self._batch_signalled = True
        if self._on_batch_complete is not None:
            self._on_batch_complete()

    def _finish_batch(self, remote: "Future[Any]", result: "Future[int]") -> None:
        if remote.cancelled():
            self._batch_failed(GatewayError("CANCELLED", BATCH_FAILED_MESSAGE), result)
            return
        exc = remote.exception()
        if exc is not None:
            self._batch_failed(exc, result)
            return
        updated = int(remote.result() or 0)
        self._items = {
            order_id: item.with_status(DeliveryStatus.COMPLETED) for order_id, item in self._items.items()
        }
        # single-item reconciliations still in flight must not undo the batch
        self._latest.clear()
        self._changed()
        logger.info("Batch completion updated %s deliveries", updated)
        if not self._batch_signalled:
            self._signal_batch_complete()
        result.set_result(updated)

    def _batch_failed(self, exc: BaseException, result: "Future[int]") -> None:
        logger.warning("Batch completion failed: %s", exc)
        self._notice(_user_message(exc, BATCH_FAILED_MESSAGE))
        result.set_exception(exc)

    def _notice(self, message: str) -> None:
        if self._on_notice is not None:
            self._on_notice(message)

    def _changed(self) -> None:
        if self._on_change is not None:
            self._on_change(self.items)


__all__ = [
    "StatusTransitionController",
    "TransitionOutcome",
    "Applied",
    "RolledBack",
    "STATUS_FAILED_MESSAGE",
    "BATCH_FAILED_MESSAGE",
]
