"""
Utility functions and helpers.
"""

from .log_utils import configure_logging, get_logger
from .utils import IMAGE_EXTS, JPEG_EXTS, iter_files, iter_image_files

__all__ = ["configure_logging", "get_logger", "IMAGE_EXTS", "JPEG_EXTS", "iter_files", "iter_image_files"]
