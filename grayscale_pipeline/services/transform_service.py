from typing import Tuple
import cv2
import numpy as np
from PIL import Image as PILImage

from ..models.image import Image

DEFAULT_MAX_DIMENSION = 500


class TransformService:
    """
    Pure in-memory transforms.  Every method returns a *new* Image and
    leaves its input untouched, so independent images can be transformed
    from several threads at once.
    """
    def __init__(self, max_dimension: int = DEFAULT_MAX_DIMENSION):
        if max_dimension <= 0:
            raise ValueError("max_dimension must be > 0")
        self.max_dimension = max_dimension

    def target_dimensions(self, width: int, height: int) -> Tuple[int, int]:
        """
        Args:
            width (int): Source width in pixels.
            height (int): Source height in pixels.

        Returns:
            (width, height) where the larger side equals `max_dimension` and
            the other side is scaled proportionally, truncated toward zero.
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Degenerate image size {width}x{height}")

        bound = self.max_dimension
        if width >= height:
            return bound, max(1, height * bound // width)
        return max(1, width * bound // height), bound

    def resize(self, img: Image) -> Image:
        height, width = img.pixels.shape[:2]
        new_width, new_height = self.target_dimensions(width, height)

        pixels = img.pixels
        if not pixels.flags['C_CONTIGUOUS']:
            pixels = np.ascontiguousarray(pixels)

        resized = PILImage.fromarray(pixels).resize(
            (new_width, new_height), PILImage.Resampling.LANCZOS
        )
        return Image(pixels=np.array(resized), path=img.path)

    @staticmethod
    def grayscale(img: Image) -> Image:
        """
        Luminance conversion (ITU-R 601 weights).  A 2-D input is already
        gray and is copied as-is.
        """
        if img.pixels.ndim == 2:
            return Image(pixels=img.pixels.copy(), path=img.path)
        gray_pixels = cv2.cvtColor(img.pixels, cv2.COLOR_RGB2GRAY)
        return Image(pixels=gray_pixels, path=img.path)
