"""
Stage and hand-off queue primitives for the concurrent pipeline.

A Stage runs in its own thread, reads items from a finite source, applies
one operation per item and forwards the result through a bounded
HandoffQueue.  Closing the queue is how a stage tells its consumer that
no more items will follow.
"""

from __future__ import annotations
import logging
import queue
import threading
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Iterator, Optional, Tuple, Type

from ..errors import PipelineCancelled

logger = logging.getLogger(__name__)

_END_OF_STREAM = object()


class HandoffQueue:
    """
    Bounded point-to-point channel between two stages.

    Parameters
    ----------
    capacity : int
        Maximum number of in-flight items.  Must be > 0.
    cancel_event : threading.Event, optional
        Shared cancellation flag checked while blocked in `put` or
        iteration.
    poll_interval : float
        How often (seconds) a blocked caller re-checks the cancel flag.

    Raises
    ------
    ValueError
        If capacity <= 0.
    """

    def __init__(self, capacity: int = 1,
                 cancel_event: Optional[threading.Event] = None,
                 poll_interval: float = 0.05) -> None:
        if capacity <= 0:
            raise ValueError("Hand-off queue must be bounded")
        self.capacity = capacity
        self.cancel_event = cancel_event or threading.Event()
        self.poll_interval = poll_interval
        self._queue: queue.Queue = queue.Queue(maxsize=capacity)
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def put(self, item: Any) -> None:
        if self._closed:
            raise RuntimeError("put() on a closed hand-off queue")
        self._put(item)

    def _put(self, item: Any) -> None:
        while True:
            if self.cancel_event.is_set():
                raise PipelineCancelled()
            try:
                self._queue.put(item, timeout=self.poll_interval)
                return
            except queue.Full:
                continue

    def close(self) -> None:
        """Signal end-of-stream.  A no-op once cancelled or already closed."""
        if self._closed:
            return
        self._closed = True
        try:
            self._put(_END_OF_STREAM)
        except PipelineCancelled:
            pass  # consumers stop on the same cancel flag

    def __iter__(self) -> Iterator[Any]:
        while True:
            if self.cancel_event.is_set():
                raise PipelineCancelled()
            try:
                item = self._queue.get(timeout=self.poll_interval)
            except queue.Empty:
                continue
            if item is _END_OF_STREAM:
                return
            yield item


@dataclass
class StageStats:
    received: int = 0
    emitted: int = 0
    dropped: int = 0


class Stage:
    """
    One pipeline segment applying `operation` to each item, in order.

    Args:
        name: Stage identifier used in logs and errors (e.g. 'resize').
        operation: Callable taking one item and returning the item to
            forward.  Returning None drops the item.
        skip_errors: Exception types treated as per-item failures: the item
            is logged and dropped, the stage keeps going.  Anything else
            stops the stage and cancels the pipeline.
    """

    def __init__(self,
                 name: str,
                 operation: Callable[[Any], Any],
                 skip_errors: Tuple[Type[BaseException], ...] = ()):
        self.name = name
        self.operation = operation
        self.skip_errors = tuple(skip_errors)
        self.stats = StageStats()
        self.error: Optional[BaseException] = None
        self.outbox: Optional[HandoffQueue] = None
        self._thread: Optional[threading.Thread] = None

    def start(self, source: Iterable[Any], capacity: int = 1,
              cancel_event: Optional[threading.Event] = None) -> HandoffQueue:
        """
        Start the stage thread on *source* and return its output queue.
        """
        if self._thread is not None:
            raise RuntimeError(f"Stage '{self.name}' already started")
        self.outbox = HandoffQueue(capacity, cancel_event)
        self._thread = threading.Thread(
            target=self._run, args=(source,), name=f"stage-{self.name}", daemon=True
        )
        self._thread.start()
        return self.outbox

    def join(self, timeout: Optional[float] = None) -> None:
        if self._thread is not None:
            self._thread.join(timeout)

    def is_alive(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def _run(self, source: Iterable[Any]) -> None:
        outbox = self.outbox
        try:
            for item in source:
                if outbox.cancel_event.is_set():
                    raise PipelineCancelled()
                self.stats.received += 1
                try:
                    result = self.operation(item)
                except self.skip_errors as err:
                    self.stats.dropped += 1
                    logger.warning(f"[{self.name}] skipping item: {err}")
                    continue
                if result is None:
                    self.stats.dropped += 1
                    continue
                outbox.put(result)
                self.stats.emitted += 1
        except PipelineCancelled:
            logger.info(f"[{self.name}] cancelled")
        except Exception as err:
            self.error = err
            logger.error(f"[{self.name}] failed: {err}", exc_info=True)
            outbox.cancel_event.set()
        finally:
            outbox.close()
            logger.debug(
                f"[{self.name}] closed: {self.stats.received} received, "
                f"{self.stats.emitted} emitted, {self.stats.dropped} dropped"
            )
