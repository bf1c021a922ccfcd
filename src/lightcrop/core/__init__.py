"""
Core cropping engine, image I/O and batch processing.
"""

from .errors import ConfigurationError, CropSearchError, ImageCodecError, LightcropError
from .models import BatchSummary, Corner, CropResult, Edge, Image, Job, Rect, WorkerOutcome
from .luminance import brightness, region_brightness
from .uniformity import is_uniform
from .crop_engine import find_uniform_crop
from .materializer import corner_crop_image, crop_image
from .workers import WorkerPool, process_directory

__all__ = [
    "ConfigurationError",
    "CropSearchError",
    "ImageCodecError",
    "LightcropError",
    "BatchSummary",
    "Corner",
    "CropResult",
    "Edge",
    "Image",
    "Job",
    "Rect",
    "WorkerOutcome",
    "brightness",
    "region_brightness",
    "is_uniform",
    "find_uniform_crop",
    "corner_crop_image",
    "crop_image",
    "WorkerPool",
    "process_directory",
]
