"""
Per-item operations shared by the sequential and the concurrent runner.

Both runners call exactly these four steps, which is what keeps their
output files identical.
"""

import logging
from typing import Callable, Optional

from ..errors import EncodeError
from ..models.work_item import WorkItem, SaveOutcome
from ..services.image_service import ImageService
from ..services.transform_service import TransformService
from ..services.path_rewrite_service import PathRewriteService

logger = logging.getLogger(__name__)


class ItemOperations:
    def __init__(self,
                 image_service: Optional[ImageService] = None,
                 transform_service: Optional[TransformService] = None,
                 rewrite: Optional[Callable[[str], str]] = None):
        self.image_service = image_service or ImageService()
        self.transform_service = transform_service or TransformService()
        self.rewrite = rewrite or PathRewriteService()

    def load(self, path: str) -> WorkItem:
        """
        Decode *path* into a new WorkItem.

        Raises:
            MissingInputError, DecodeError, PathRewriteError
        """
        image = self.image_service.load(path)
        destination = self.rewrite(path)
        logger.info(f"Loading image: {path}")
        return WorkItem(source_path=path, image=image, destination_path=destination)

    def resize(self, item: WorkItem) -> WorkItem:
        item.image = self.transform_service.resize(item.image)
        return item

    def grayscale(self, item: WorkItem) -> WorkItem:
        item.image = self.transform_service.grayscale(item.image)
        return item

    def save(self, item: WorkItem) -> SaveOutcome:
        """Write the item; an encode failure becomes a failed outcome."""
        try:
            self.image_service.save(item.image, item.destination_path)
        except EncodeError as err:
            logger.error(f"Failed to save image: {err}")
            return SaveOutcome(item.source_path, item.destination_path, False, str(err))
        logger.info(f"Saving image: {item.destination_path}")
        return SaveOutcome(item.source_path, item.destination_path, True)
