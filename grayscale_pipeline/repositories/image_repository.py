from pathlib import Path
from typing import Union, Iterable, List
import logging
import numpy as np
import cv2
from PIL import Image as PILImage

from ..models.image import Image
from ..errors import MissingInputError, DecodeError, EncodeError

logger = logging.getLogger(__name__)


class ImageRepository:
    """
    Handles file I/O for Image entities.
    Decoding goes through OpenCV, encoding through Pillow.
    """
    def __init__(self, jpeg_quality: int = 75, create_output_dirs: bool = True):
        self.jpeg_quality = jpeg_quality
        self.create_output_dirs = create_output_dirs

    @staticmethod
    def load(path: Union[str, Path]) -> Image:
        path = Path(path)
        if not path.is_file():
            raise MissingInputError(f"File does not exist: {path}")

        arr_bgr = cv2.imread(str(path), cv2.IMREAD_COLOR)
        if arr_bgr is None:
            raise DecodeError(f"Image could not be decoded: {path}")

        arr = cv2.cvtColor(arr_bgr, cv2.COLOR_BGR2RGB)
        return Image(pixels=arr, path=path)

    def save(self, image: Image, path: Union[str, Path]) -> Path:
        target = Path(path)

        pixels = image.pixels
        if not pixels.flags['C_CONTIGUOUS']:
            pixels = np.ascontiguousarray(pixels)

        try:
            if self.create_output_dirs:
                target.parent.mkdir(parents=True, exist_ok=True)
            pil_image = PILImage.fromarray(pixels)
            if target.suffix.lower() in {".jpg", ".jpeg"}:
                pil_image.save(target, "JPEG", quality=self.jpeg_quality)
            else:
                pil_image.save(target)
        except (OSError, ValueError) as err:
            # PIL raises ValueError for unknown extensions, OSError for the rest
            raise EncodeError(f"Could not write {target}: {err}") from err
        return target

    @staticmethod
    def list_images(folder: Union[str, Path], exts: Iterable[str]) -> List[str]:
        """
        Sorted image paths directly inside *folder*.
        """
        folder = Path(folder)
        if not folder.is_dir():
            raise NotADirectoryError(folder)

        allowed = {e.lower() for e in exts}
        paths = []
        for p in sorted(folder.iterdir()):
            if not p.is_file():
                continue
            if p.suffix.lower() not in allowed:
                logger.debug(f"Skipping due to extension: {p}")
                continue
            paths.append(str(p))
        return paths
