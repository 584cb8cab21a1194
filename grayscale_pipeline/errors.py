"""
Error taxonomy for the grayscale pipeline.

Per-item errors (missing input, decode, encode, path rewrite) are recovered
locally: the item is logged and skipped. `StageError` wraps anything else
raised inside a stage and is fatal to the run.
"""


class PipelineError(Exception):
    """Base class for per-item failures that are skipped, never fatal."""


class MissingInputError(PipelineError, FileNotFoundError):
    """The input path does not exist (or is not a regular file)."""


class DecodeError(PipelineError):
    """The input exists but cannot be decoded as an image."""


class EncodeError(PipelineError):
    """The destination cannot be written."""


class PathRewriteError(PipelineError):
    """The destination rule does not match the input path."""


class StageError(RuntimeError):
    """A stage failed with an unexpected (programmer) error."""

    def __init__(self, stage_name: str, cause: BaseException):
        super().__init__(f"Stage '{stage_name}' failed: {cause}")
        self.stage_name = stage_name
        self.cause = cause


class PipelineCancelled(Exception):
    """Raised at a suspension point once cancellation has been requested."""
