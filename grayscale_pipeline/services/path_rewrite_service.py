from pathlib import PurePath
from typing import Tuple

from ..errors import PathRewriteError


class PathRewriteService:
    """
    Derives an output path from an input path by swapping one directory
    segment for another, e.g. ``images/cat.jpeg -> images/output/cat.jpeg``.

    Only whole path components are matched, so ``images`` never matches
    ``my_images``.  Inputs that do not contain the segment raise
    PathRewriteError instead of mapping onto themselves.
    """

    def __init__(self, input_segment: str = "images", output_segment: str = "images/output"):
        self.input_parts = self._parts(input_segment)
        self.output_parts = self._parts(output_segment)
        if not self.input_parts:
            raise ValueError("input_segment must not be empty")
        if self.input_parts == self.output_parts:
            raise ValueError("input and output segments must differ")

    @staticmethod
    def _parts(segment: str) -> Tuple[str, ...]:
        return tuple(p for p in PurePath(segment).parts if p not in ("", "."))

    def destination_for(self, source_path: str) -> str:
        parts = PurePath(source_path).parts
        n = len(self.input_parts)
        # the file name itself is never treated as a directory segment
        for i in range(len(parts) - n):
            if parts[i:i + n] == self.input_parts:
                new_parts = parts[:i] + self.output_parts + parts[i + n:]
                return str(PurePath(*new_parts))
        raise PathRewriteError(
            f"'{source_path}' is not inside '{PurePath(*self.input_parts)}'"
        )

    __call__ = destination_for
