"""
Staged image pipeline.

Components:
- stage: HandoffQueue and Stage primitives
- staged_pipeline: generic composition of stages
- operations: the per-item load/resize/grayscale/save steps
- concurrent_runner / sequential_runner: the two execution strategies
- runner: mode selection and timing
"""

from .stage import HandoffQueue, Stage, StageStats
from .staged_pipeline import StagedPipeline
from .operations import ItemOperations
from .concurrent_runner import build_stages, run_concurrent
from .sequential_runner import run_sequential
from .runner import ExecutionMode, run

__all__ = [
    'HandoffQueue',
    'Stage',
    'StageStats',
    'StagedPipeline',
    'ItemOperations',
    'build_stages',
    'run_concurrent',
    'run_sequential',
    'ExecutionMode',
    'run',
]
