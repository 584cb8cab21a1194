import logging
import threading
import time
from typing import List, Optional, Sequence

from ..errors import PipelineError
from ..models.run_summary import RunSummary
from .operations import ItemOperations
from .stage import Stage
from .staged_pipeline import StagedPipeline

logger = logging.getLogger(__name__)


def build_stages(operations: ItemOperations) -> List[Stage]:
    """Load → Resize → Grayscale → Save."""
    return [
        Stage("load", operations.load, skip_errors=(PipelineError,)),
        Stage("resize", operations.resize),
        Stage("grayscale", operations.grayscale),
        Stage("save", operations.save),
    ]


def run_concurrent(
    paths: Sequence[str],
    *,
    operations: Optional[ItemOperations] = None,
    capacity: int = 1,
    cancel_event: Optional[threading.Event] = None,
) -> RunSummary:
    """
    Process *paths* through the staged pipeline, one thread per stage.

    Completion is detected when the save stage closes its output; every
    SaveOutcome is read before that happens, so none is lost.
    """
    operations = operations or ItemOperations()
    pipeline = StagedPipeline(build_stages(operations), capacity=capacity,
                              cancel_event=cancel_event)
    summary = RunSummary(mode="concurrent", submitted=len(paths))

    start = time.perf_counter()
    for outcome in pipeline.run(list(paths)):
        if outcome.success:
            summary.saved += 1
            logger.info(f"Success! {outcome.destination_path}")
        else:
            summary.failed += 1
            logger.warning(f"Failed to save image: {outcome.destination_path}")
    summary.elapsed_seconds = time.perf_counter() - start

    load_stats = pipeline.stage("load").stats
    summary.loaded = load_stats.emitted
    summary.skipped = load_stats.dropped
    summary.cancelled = pipeline.cancelled

    logger.info(f"Concurrent run finished: {summary.describe()}")
    return summary
