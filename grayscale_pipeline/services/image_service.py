from pathlib import Path
from typing import Iterable, List, Union

from ..models.image import Image
from ..repositories.image_repository import ImageRepository


class ImageService:
    """I/O helpers.  No transform logic."""
    def __init__(self, image_repository: ImageRepository | None = None):
        self.image_repository = image_repository or ImageRepository()

    def load(self, path: str | Path) -> Image:
        """Load a single image from disk into an Image object."""
        return self.image_repository.load(path)

    def save(self, image: Image, path: str | Path) -> Path:
        """
        Business-level method to save the image to a specific path.
        """
        return self.image_repository.save(image, path)

    def list_inputs(self, folder: Union[str, Path], exts: Iterable[str]) -> List[str]:
        return self.image_repository.list_images(folder, exts)
