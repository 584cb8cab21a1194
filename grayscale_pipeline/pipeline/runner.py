import logging
import threading
import time
from datetime import timedelta
from enum import Enum
from typing import Optional, Sequence

from ..models.run_summary import RunSummary
from .concurrent_runner import run_concurrent
from .operations import ItemOperations
from .sequential_runner import run_sequential

logger = logging.getLogger(__name__)


class ExecutionMode(Enum):
    """Supported execution strategies."""
    CONCURRENT = "concurrent"
    SEQUENTIAL = "sequential"

    @classmethod
    def parse(cls, value: Optional[str]) -> "ExecutionMode":
        """Unknown or empty values fall back to CONCURRENT."""
        normalized = (value or "").strip().lower()
        for mode in cls:
            if mode.value == normalized:
                return mode
        logger.warning(f"Unsupported mode {value!r}, using '{cls.CONCURRENT.value}'")
        return cls.CONCURRENT


def run(
    paths: Sequence[str],
    mode: ExecutionMode | str = ExecutionMode.CONCURRENT,
    *,
    operations: Optional[ItemOperations] = None,
    capacity: int = 1,
    cancel_event: Optional[threading.Event] = None,
) -> RunSummary:
    if not isinstance(mode, ExecutionMode):
        mode = ExecutionMode.parse(mode)

    start = time.perf_counter()
    if mode is ExecutionMode.SEQUENTIAL:
        summary = run_sequential(paths, operations=operations, cancel_event=cancel_event)
    else:
        summary = run_concurrent(paths, operations=operations, capacity=capacity,
                                 cancel_event=cancel_event)
    elapsed = time.perf_counter() - start

    logger.info(f"Execution time for mode '{mode.value}': {timedelta(seconds=elapsed)}")
    return summary
