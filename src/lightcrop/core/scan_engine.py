#!/usr/bin/env python3
"""
scan_engine.py: Turn an input directory into the list of jobs for a batch run.

Walks the tree, keeps files with a supported extension, and skips the output
directory when it lives inside the input tree so a run never consumes its own
output.
"""

from pathlib import Path
from typing import Iterable, List, Union

from .models import CornerSettings, CropSettings, Job
from ..utils.utils import IMAGE_EXTS, JPEG_EXTS, iter_image_files
from ..utils.log_utils import get_logger

logger = get_logger(__name__)


def extensions_for(settings: Union[CropSettings, CornerSettings]) -> Iterable[str]:
    """Corner cropping handles JPEG only; the brightness engine handles JPEG and PNG."""
    if isinstance(settings, CornerSettings):
        return JPEG_EXTS
    return IMAGE_EXTS


def collect_jobs(input_dir: Path, output_dir: Path,
                 settings: Union[CropSettings, CornerSettings]) -> List[Job]:
    """
    Build one Job per supported image under `input_dir`, in sorted path order.
    """
    paths = sorted(iter_image_files(input_dir, extensions_for(settings), exclude=output_dir))
    logger.debug("Found %d candidate files under %s", len(paths), input_dir)
    return [Job(input_path=path, output_dir=output_dir, settings=settings) for path in paths]
