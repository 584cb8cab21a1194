from __future__ import annotations
import logging
import threading
from typing import Any, Iterable, Iterator, List, Optional, Sequence

from ..errors import PipelineCancelled, StageError
from .stage import Stage

logger = logging.getLogger(__name__)


class StagedPipeline:
    """
    Wires stages in sequence, each stage's output queue feeding the next
    stage's input.  All stages run at the same time in their own threads.

    Features:
    - Any number and order of stages
    - Bounded hand-off between stages (backpressure)
    - Shared cancellation flag
    - Fatal stage errors re-raised in the caller's thread
    """

    def __init__(self,
                 stages: Sequence[Stage],
                 capacity: int = 1,
                 cancel_event: Optional[threading.Event] = None):
        if not stages:
            raise ValueError("A pipeline needs at least one stage")
        names = [s.name for s in stages]
        if len(set(names)) != len(names):
            raise ValueError(f"Duplicate stage names: {names}")
        self.stages: List[Stage] = list(stages)
        self.capacity = capacity
        self.cancel_event = cancel_event or threading.Event()
        self.cancelled = False

    def stage(self, name: str) -> Stage:
        for s in self.stages:
            if s.name == name:
                return s
        raise KeyError(name)

    def run(self, source: Iterable[Any]) -> Iterator[Any]:
        """
        Feed *source* into the first stage and yield every item the last
        stage emits.  Returns once the last stage has closed its output.

        Raises:
            StageError: if any stage failed with an unexpected error.
        """
        logger.info(f"Starting pipeline: {' → '.join(s.name for s in self.stages)}")

        upstream: Iterable[Any] = source
        for s in self.stages:
            upstream = s.start(upstream, self.capacity, self.cancel_event)

        exhausted = False
        try:
            yield from upstream
            exhausted = True
        except PipelineCancelled:
            pass
        finally:
            if not exhausted:
                # not fully drained, so stop every stage
                self.cancel_event.set()
            for s in self.stages:
                s.join()

        failed = [s for s in self.stages if s.error is not None]
        if failed:
            raise StageError(failed[0].name, failed[0].error) from failed[0].error
        if not exhausted:
            self.cancelled = True
            logger.warning("Pipeline cancelled before the input was exhausted")
