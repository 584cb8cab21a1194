from .image import Image
from .work_item import WorkItem, SaveOutcome
from .run_summary import RunSummary

__all__ = ["Image", "WorkItem", "SaveOutcome", "RunSummary"]
