from __future__ import annotations
from dataclasses import dataclass
from .image import Image


@dataclass
class WorkItem:
    """
    One image moving through the pipeline.

    `source_path` and `destination_path` are fixed at load time. `image` is
    replaced by every transform stage and is owned by whichever stage
    currently holds the item.
    """
    source_path: str
    image: Image
    destination_path: str


@dataclass
class SaveOutcome:
    """Completion signal emitted by the save step for one WorkItem."""
    source_path: str
    destination_path: str
    success: bool
    error: str | None = None
