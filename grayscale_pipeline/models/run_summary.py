from __future__ import annotations
from dataclasses import dataclass


@dataclass
class RunSummary:
    """
    Aggregated result of one batch run.
    Used for logging and for comparing the two execution modes.
    """
    mode: str
    submitted: int = 0     # Paths handed to the runner
    loaded: int = 0        # Items that passed the existence/decode checks
    skipped: int = 0       # Items dropped before entering the pipeline
    saved: int = 0         # Successful writes
    failed: int = 0        # Failed writes
    elapsed_seconds: float = 0.0
    cancelled: bool = False

    @property
    def completed(self) -> int:
        """Number of completion signals observed (success or failure)."""
        return self.saved + self.failed

    def describe(self) -> str:
        return (
            f"{self.submitted} submitted, {self.loaded} loaded, "
            f"{self.skipped} skipped, {self.saved} saved, {self.failed} failed"
        )
