"""
lightcrop

Batch-crop unevenly lit image edges until brightness is uniform.
"""

__version__ = "0.1.0"

from .core.crop_engine import find_uniform_crop
from .core.materializer import corner_crop_image, crop_image
from .core.models import Corner, CropResult, CropSettings, CornerSettings, Rect
from .core.uniformity import is_uniform
from .core.workers import WorkerPool, process_directory


__all__ = [
    "find_uniform_crop",
    "is_uniform",
    "crop_image",
    "corner_crop_image",
    "Corner",
    "CropResult",
    "CropSettings",
    "CornerSettings",
    "Rect",
    "WorkerPool",
    "process_directory",
]
