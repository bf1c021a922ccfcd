"""
crop_engine.py: Iteratively shrink a crop rectangle until its brightness is uniform.

Each iteration measures a thin band on every edge that still has crop budget left,
and trims the edge that deviates most from the center brightness. The step size
scales with the rectangle so the iteration count stays roughly independent of
image resolution.
"""

from dataclasses import dataclass
from typing import List, Optional

from .errors import CropSearchError
from .luminance import deviation_percent, region_brightness
from .models import Edge, Image, Rect
from .uniformity import band_thickness, center_brightness, is_uniform
from ..utils.log_utils import get_logger

logger = get_logger(__name__)

MIN_ITERATIONS = 100
SEARCH_BAND_DIVISOR = 20  # 5% bands when choosing which edge to trim
STEP_DIVISOR = 200        # step = 1% of (width + height)


@dataclass
class EdgeSample:
    """Deviation of one edge band from the center brightness."""
    edge: Edge
    eligible: bool
    deviation: float = 0.0


def max_iterations(bounds: Rect) -> int:
    return max(MIN_ITERATIONS, max(bounds.width, bounds.height) // 2)


def crop_step(rect: Rect) -> int:
    return max(1, (rect.width + rect.height) // STEP_DIVISOR)


def crop_ceiling(length: int, max_crop_percent: float) -> int:
    """Maximum number of pixels that may be removed from a dimension of `length`."""
    return int(length * max_crop_percent / 100.0)


def sample_edges(image: Image, rect: Rect, reference: float,
                 width_open: bool, height_open: bool) -> List[EdgeSample]:
    """Measure the 5% band on every edge whose dimension still has crop budget."""
    samples = [
        EdgeSample(Edge.TOP, height_open),
        EdgeSample(Edge.BOTTOM, height_open),
        EdgeSample(Edge.LEFT, width_open),
        EdgeSample(Edge.RIGHT, width_open),
    ]
    for sample in samples:
        if not sample.eligible:
            continue
        if sample.edge in (Edge.TOP, Edge.BOTTOM):
            thickness = band_thickness(rect.height, SEARCH_BAND_DIVISOR)
        else:
            thickness = band_thickness(rect.width, SEARCH_BAND_DIVISOR)
        value = region_brightness(image, rect.band(sample.edge, thickness))
        sample.deviation = abs(value - reference)
    return samples


def worst_edge(samples: List[EdgeSample]) -> Optional[EdgeSample]:
    """Eligible sample with the largest deviation; earlier edges win ties."""
    worst = None
    for sample in samples:
        if sample.eligible and (worst is None or sample.deviation > worst.deviation):
            worst = sample
    return worst


def find_uniform_crop(image: Image, bounds: Rect, tolerance: float,
                      max_crop_percent: float) -> Rect:
    """
    Shrink `bounds` one edge at a time until the region is uniform within
    `tolerance` percent, or until no edge may be cropped further.

    Returns the final crop rectangle, which equals `bounds` when nothing was
    trimmed. Reaching the crop budget without becoming uniform is a normal
    outcome; the best rectangle found so far is returned.

    Raises:
        CropSearchError: a trim would leave the rectangle with no area.
    """
    max_crop_width = crop_ceiling(bounds.width, max_crop_percent)
    max_crop_height = crop_ceiling(bounds.height, max_crop_percent)
    crop_rect = bounds

    for iteration in range(max_iterations(bounds)):
        # Done as soon as the edge bands match the center
        if is_uniform(image, crop_rect, tolerance):
            logger.debug("Uniform after %d iterations: %s", iteration, crop_rect)
            return crop_rect

        # Stop once neither dimension has budget left
        cropped_width = bounds.width - crop_rect.width
        cropped_height = bounds.height - crop_rect.height
        if cropped_width >= max_crop_width and cropped_height >= max_crop_height:
            logger.debug("Crop budget exhausted after %d iterations: %s", iteration, crop_rect)
            return crop_rect

        # Measure each edge that may still be trimmed
        reference = center_brightness(image, crop_rect)
        samples = sample_edges(
            image,
            crop_rect,
            reference,
            width_open=cropped_width < max_crop_width,
            height_open=cropped_height < max_crop_height,
        )
        worst = worst_edge(samples)
        if worst is None:
            return crop_rect

        if deviation_percent(worst.deviation, reference) <= tolerance:
            logger.debug("Remaining edges within tolerance after %d iterations", iteration)
            return crop_rect

        # Trim the worst edge by one step
        step = crop_step(crop_rect)
        crop_rect = crop_rect.shrink(worst.edge, step)
        logger.debug("Trimmed %d px from %s edge -> %s", step, worst.edge.value, crop_rect)

        if crop_rect.is_empty:
            raise CropSearchError(
                f"crop would result in empty image ({crop_rect.width}x{crop_rect.height})"
            )

    return crop_rect
