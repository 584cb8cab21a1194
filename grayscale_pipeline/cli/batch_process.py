import logging
import sys
import threading
from typing import List

from ..config import PipelineConfig, DEFAULT_INPUT_PATHS
from ..errors import StageError
from ..pipeline.operations import ItemOperations
from ..pipeline.runner import ExecutionMode, run
from ..repositories.image_repository import ImageRepository
from ..services.image_service import ImageService
from ..services.path_rewrite_service import PathRewriteService
from ..services.transform_service import TransformService

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    # --- Centralized Logging Configuration ---
    logging.basicConfig(
        level=logging.getLevelName(level),
        format='%(asctime)s - %(name)-25s - %(levelname)-8s - %(message)s',
        datefmt='%H:%M:%S'
    )


def collect_inputs(config: PipelineConfig, image_service: ImageService) -> List[str]:
    if config.input_paths:
        return list(config.input_paths)
    if config.input_dir:
        return image_service.list_inputs(config.input_dir, config.valid_extensions)
    return list(DEFAULT_INPUT_PATHS)


def build_operations(config: PipelineConfig) -> ItemOperations:
    repository = ImageRepository(jpeg_quality=config.jpeg_quality,
                                 create_output_dirs=config.create_output_dirs)
    return ItemOperations(
        image_service=ImageService(repository),
        transform_service=TransformService(config.max_dimension),
        rewrite=PathRewriteService(config.input_segment, config.output_segment),
    )


def main() -> int:
    try:
        config = PipelineConfig.from_env()
    except ValueError as err:
        configure_logging()
        logger.error(f"Invalid configuration: {err}")
        return 1
    configure_logging(config.log_level)

    operations = build_operations(config)
    try:
        paths = collect_inputs(config, operations.image_service)
    except NotADirectoryError as err:
        logger.error(f"Input directory not found: {err}")
        return 1

    mode = ExecutionMode.parse(config.mode)
    logger.info(f"Processing {len(paths)} image(s) in '{mode.value}' mode")

    cancel_event = threading.Event()
    try:
        summary = run(paths, mode, operations=operations,
                      capacity=config.queue_capacity, cancel_event=cancel_event)
    except KeyboardInterrupt:
        cancel_event.set()
        logger.warning("Interrupted, shutting down")
        return 130
    except StageError as err:
        logger.error(f"Pipeline aborted: {err}")
        return 1

    if summary.cancelled:
        return 130
    return 0


if __name__ == "__main__":
    sys.exit(main())
