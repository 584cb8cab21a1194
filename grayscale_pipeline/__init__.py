"""
Batch image pipeline: load, resize, grayscale and save a list of images,
either one at a time or through a staged concurrent pipeline.
"""

from .config import PipelineConfig
from .models import Image, WorkItem, SaveOutcome, RunSummary
from .pipeline import ExecutionMode, run, run_concurrent, run_sequential

__version__ = "1.0.0"

__all__ = [
    "PipelineConfig",
    "Image", "WorkItem", "SaveOutcome", "RunSummary",
    "ExecutionMode", "run", "run_concurrent", "run_sequential",
]
