import logging
import threading
import time
from typing import Any, Callable, Optional, Sequence

from ..errors import PipelineError, StageError
from ..models.run_summary import RunSummary
from .operations import ItemOperations

logger = logging.getLogger(__name__)


def _apply(step_name: str, step: Callable[[Any], Any], item: Any) -> Any:
    """Run one post-load step; anything it raises is fatal to the run."""
    try:
        return step(item)
    except Exception as err:
        logger.error(f"[{step_name}] failed: {err}", exc_info=True)
        raise StageError(step_name, err) from err


def run_sequential(
    paths: Sequence[str],
    *,
    operations: Optional[ItemOperations] = None,
    cancel_event: Optional[threading.Event] = None,
) -> RunSummary:
    """
    Baseline runner: every item goes through load, resize, grayscale and
    save before the next one starts.  Same skip-and-continue policy as the
    concurrent pipeline.
    """
    operations = operations or ItemOperations()
    summary = RunSummary(mode="sequential", submitted=len(paths))

    start = time.perf_counter()
    for path in paths:
        if cancel_event is not None and cancel_event.is_set():
            summary.cancelled = True
            logger.warning("Sequential run cancelled before the input was exhausted")
            break
        try:
            item = operations.load(path)
        except PipelineError as err:
            summary.skipped += 1
            logger.warning(f"Skipping {path}: {err}")
            continue
        summary.loaded += 1

        item = _apply("resize", operations.resize, item)
        item = _apply("grayscale", operations.grayscale, item)
        outcome = _apply("save", operations.save, item)
        if outcome.success:
            summary.saved += 1
            logger.info(f"Wrote: {outcome.destination_path}")
        else:
            summary.failed += 1
    summary.elapsed_seconds = time.perf_counter() - start

    logger.info(f"Sequential run finished: {summary.describe()}")
    return summary
