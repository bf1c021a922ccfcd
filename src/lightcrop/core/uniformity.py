"""
uniformity.py: Decide whether a region's edges match its center brightness.

Edges are compared against the inner 60% of the region rather than the whole
region average, so a wide dark or bright border cannot pull the reference toward
itself and hide its own deviation.
"""

from .luminance import region_brightness, relative_deviation
from .models import Edge, Image, Rect
from ..utils.log_utils import get_logger

logger = get_logger(__name__)

CENTER_MARGIN_DIVISOR = 5  # 20% margin on each side
EDGE_BAND_DIVISOR = 10     # 10% bands for the uniformity check


def center_rect(rect: Rect) -> Rect:
    """
    Inner 60% of `rect` by each dimension, with at least a 1 pixel margin.
    Falls back to `rect` itself when the region is too small to have a center.
    """
    margin_x = max(1, rect.width // CENTER_MARGIN_DIVISOR)
    margin_y = max(1, rect.height // CENTER_MARGIN_DIVISOR)
    center = rect.inset(margin_x, margin_y)
    if center.is_empty:
        return rect
    return center


def center_brightness(image: Image, rect: Rect) -> float:
    return region_brightness(image, center_rect(rect))


def band_thickness(length: int, divisor: int) -> int:
    """Width of an edge band covering 1/divisor of `length`, at least 1 pixel."""
    return max(1, length // divisor)


def is_uniform(image: Image, rect: Rect, tolerance: float) -> bool:
    """
    True when the top, bottom, left and right 10% bands of `rect` are all within
    `tolerance` percent of the center brightness.
    """
    reference = center_brightness(image, rect)
    thickness = {
        Edge.TOP: band_thickness(rect.height, EDGE_BAND_DIVISOR),
        Edge.BOTTOM: band_thickness(rect.height, EDGE_BAND_DIVISOR),
        Edge.LEFT: band_thickness(rect.width, EDGE_BAND_DIVISOR),
        Edge.RIGHT: band_thickness(rect.width, EDGE_BAND_DIVISOR),
    }
    for edge in Edge:
        edge_value = region_brightness(image, rect.band(edge, thickness[edge]))
        deviation = relative_deviation(edge_value, reference)
        if deviation > tolerance:
            logger.debug("%s edge deviates %.1f%% from center (tolerance %.1f%%)",
                         edge.value, deviation, tolerance)
            return False
    return True
