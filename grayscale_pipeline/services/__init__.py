from .image_service import ImageService
from .transform_service import TransformService
from .path_rewrite_service import PathRewriteService

__all__ = ["ImageService", "TransformService", "PathRewriteService"]
