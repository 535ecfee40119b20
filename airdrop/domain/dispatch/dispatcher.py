"""
Dispatchers

Drive submissions through a TransferService. Completions arrive as callbacks,
and the sequential dispatcher only issues the next submission from inside the
completion handler of the previous one.
"""
from collections import deque
from typing import Callable, Optional

from ...core.exceptions import DispatchError, SubmissionFailed, SubmissionRejected
from ...core.interfaces import TransferService
from ...core.logging import get_logger
from .models import (
    DispatchOutcome,
    DispatchState,
    ItemBatch,
    SubmissionPlan,
    SubmissionResult,
    TransferItem,
)

logger = get_logger(__name__)

ProgressCallback = Callable[[SubmissionResult], None]
OutcomeCallback = Callable[[DispatchOutcome], None]


class SequentialDispatcher:
    """
    One-at-a-time dispatcher.

    States are Dispatching (items remain) and Drained (terminal). Each
    dispatcher owns a single DispatchState and can run once.
    """

    def __init__(
        self,
        service: TransferService,
        progress_callback: Optional[ProgressCallback] = None,
    ):
        """
        Initialize dispatcher.

        Args:
            service: Transfer service to submit through
            progress_callback: Optional callback invoked once per item, in input order
        """
        self.service = service
        self.progress_callback = progress_callback
        self._state: Optional[DispatchState] = None
        self._in_flight: Optional[TransferItem] = None
        self._on_drained: Optional[OutcomeCallback] = None

    @property
    def state(self) -> Optional[DispatchState]:
        return self._state

    @property
    def in_flight(self) -> Optional[TransferItem]:
        return self._in_flight

    def start(self, batch: ItemBatch, on_drained: OutcomeCallback) -> None:
        """
        Start dispatching batch.

        Args:
            batch: Non-empty batch of items
            on_drained: Called exactly once with the final outcome

        Raises:
            DispatchError: If this dispatcher was already started
        """
        if self._state is not None:
            raise DispatchError("Dispatch run already started")

        self._state = DispatchState(remaining_items=deque(batch))
        self._on_drained = on_drained
        logger.info(f"Sharing {len(batch)} items individually")
        self._advance()

    def _advance(self) -> None:
        """Submit the front item, or finish when nothing is left"""
        state = self._state
        while state.remaining_items:
            item = state.remaining_items[0]

            if not self.service.can_submit([item]):
                logger.warning(f"Cannot share: {item}")
                self._record(SubmissionResult(items=(item,), error=SubmissionRejected(item)))
                continue

            self._in_flight = item
            logger.debug(f"Submitting {item}")
            self.service.submit(
                [item],
                on_success=self._handle_success,
                on_failure=self._handle_failure,
            )
            return

        self._finish()

    def _handle_success(self) -> None:
        item = self._take_in_flight()
        logger.debug(f"Shared {item}")
        self._record(SubmissionResult(items=(item,)))
        self._advance()

    def _handle_failure(self, reason: str) -> None:
        item = self._take_in_flight()
        logger.warning(f"Failed to share {item}: {reason}")
        self._record(SubmissionResult(items=(item,), error=SubmissionFailed(item, reason)))
        self._advance()

    def _take_in_flight(self) -> TransferItem:
        if self._in_flight is None:
            raise DispatchError("Completion received with no submission in flight")
        item = self._in_flight
        self._in_flight = None
        return item

    def _record(self, result: SubmissionResult) -> None:
        """Update counters and pop the front item"""
        state = self._state
        if result.success:
            state.success_count += 1
        else:
            state.failure_count += 1
        state.results.append(result)
        state.remaining_items.popleft()

        if self.progress_callback:
            self.progress_callback(result)

    def _finish(self) -> None:
        state = self._state
        outcome = DispatchOutcome(
            success_count=state.success_count,
            failure_count=state.failure_count,
            plan=SubmissionPlan.SEQUENTIAL,
            results=tuple(state.results),
        )
        logger.info(
            f"Sequential dispatch drained: {outcome.success_count} successful, "
            f"{outcome.failure_count} failed"
        )
        self._on_drained(outcome)


class AtomicDispatcher:
    """Single submission for the whole batch, with no fallback on failure"""

    def __init__(
        self,
        service: TransferService,
        progress_callback: Optional[ProgressCallback] = None,
    ):
        self.service = service
        self.progress_callback = progress_callback
        self._batch: Optional[ItemBatch] = None
        self._on_done: Optional[OutcomeCallback] = None
        self._pending = False

    def start(self, batch: ItemBatch, on_done: OutcomeCallback) -> None:
        if self._batch is not None:
            raise DispatchError("Dispatch run already started")

        self._batch = batch
        self._on_done = on_done
        self._pending = True
        logger.info(f"Sharing {len(batch)} items at once")
        self.service.submit(
            batch.items,
            on_success=self._handle_success,
            on_failure=self._handle_failure,
        )

    def _handle_success(self) -> None:
        self._complete(SubmissionResult(items=self._batch.items))

    def _handle_failure(self, reason: str) -> None:
        logger.warning(f"Failed to share batch: {reason}")
        self._complete(
            SubmissionResult(
                items=self._batch.items,
                error=SubmissionFailed(self._batch.items, reason),
            )
        )

    def _complete(self, result: SubmissionResult) -> None:
        if not self._pending:
            raise DispatchError("Completion received with no submission in flight")
        self._pending = False

        if self.progress_callback:
            self.progress_callback(result)

        size = len(self._batch)
        outcome = DispatchOutcome(
            success_count=size if result.success else 0,
            failure_count=0 if result.success else size,
            plan=SubmissionPlan.ATOMIC,
            results=(result,),
        )
        self._on_done(outcome)
