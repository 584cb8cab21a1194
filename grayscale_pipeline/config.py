from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional
import logging
import os

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

DEFAULT_INPUT_PATHS = [
    "images/image7.jpeg",
    "images/image8.jpeg",
    "images/image5.jpeg",
    "images/image6.jpeg",
]


def _get_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _get_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def _get_list(name: str) -> List[str]:
    raw = os.getenv(name, "")
    return [part.strip() for part in raw.split(",") if part.strip()]


@dataclass
class PipelineConfig:
    """
    Run configuration, read from the environment (and an optional .env file).
    """
    input_paths: List[str] = field(default_factory=list)
    input_dir: Optional[str] = None
    input_segment: str = "images"
    output_segment: str = "images/output"
    max_dimension: int = 500
    mode: str = "concurrent"
    queue_capacity: int = 1
    jpeg_quality: int = 75
    create_output_dirs: bool = True
    valid_extensions: List[str] = field(default_factory=lambda: [".jpg", ".jpeg", ".png"])
    log_level: str = "INFO"

    def __post_init__(self):
        if self.max_dimension <= 0:
            raise ValueError("MAX_DIMENSION must be > 0")
        if self.queue_capacity <= 0:
            raise ValueError("QUEUE_CAPACITY must be >= 1")
        if not 1 <= self.jpeg_quality <= 100:
            raise ValueError("JPEG_QUALITY must be within [1, 100]")
        # getLevelName maps known names to ints and echoes anything else back
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ValueError(f"LOG_LEVEL {self.log_level!r} is not a logging level")

    @classmethod
    def from_env(cls) -> "PipelineConfig":
        exts = _get_list("VALID_IMAGE_EXTENSIONS") or [".jpg", ".jpeg", ".png"]
        return cls(
            input_paths=_get_list("INPUT_PATHS"),
            input_dir=os.getenv("INPUT_DIR") or None,
            input_segment=os.getenv("INPUT_DIR_SEGMENT", "images"),
            output_segment=os.getenv("OUTPUT_DIR_SEGMENT", "images/output"),
            max_dimension=_get_int("MAX_DIMENSION", 500),
            mode=os.getenv("PIPELINE_MODE", "concurrent"),
            queue_capacity=_get_int("QUEUE_CAPACITY", 1),
            jpeg_quality=_get_int("JPEG_QUALITY", 75),
            create_output_dirs=_get_bool("CREATE_OUTPUT_DIRS", True),
            valid_extensions=[e.lower() for e in exts],
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )
