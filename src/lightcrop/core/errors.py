"""
errors.py: Exception types raised by lightcrop components.

Components raise; the batch driver is the only layer that turns these into
per-job outcomes and console messages.
"""


class LightcropError(Exception):
    """Base class for all lightcrop errors."""


class ConfigurationError(LightcropError):
    """Invalid or missing run configuration. Fatal before any file is processed."""


class ImageCodecError(LightcropError):
    """A single file could not be read, decoded, encoded or written."""


class CropSearchError(LightcropError):
    """The crop search collapsed the crop rectangle to a non-positive extent."""
