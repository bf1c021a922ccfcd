"""
models.py: Plain data objects shared by the engine, materializer and batch driver.

No image I/O and no brightness logic lives here.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional, Union

import numpy as np

from .errors import ConfigurationError


class Edge(Enum):
    """Rectangle edges. Declaration order is the tie-break order of the crop search."""
    TOP = "top"
    BOTTOM = "bottom"
    LEFT = "left"
    RIGHT = "right"


class Corner(Enum):
    """Anchor corners for the fixed-percentage corner crop."""
    TOP_LEFT = "tl"
    TOP_RIGHT = "tr"
    BOTTOM_LEFT = "bl"
    BOTTOM_RIGHT = "br"

    @property
    def label(self) -> str:
        return self.name.lower().replace("_", "-")


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle, half-open on the max side."""
    min_x: int
    min_y: int
    max_x: int
    max_y: int

    @classmethod
    def from_size(cls, width: int, height: int) -> "Rect":
        return cls(0, 0, width, height)

    @property
    def width(self) -> int:
        return self.max_x - self.min_x

    @property
    def height(self) -> int:
        return self.max_y - self.min_y

    @property
    def area(self) -> int:
        if self.is_empty:
            return 0
        return self.width * self.height

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    def inset(self, dx: int, dy: int) -> "Rect":
        """Return a rectangle shrunk by dx on the left and right and dy on the top and bottom."""
        return Rect(self.min_x + dx, self.min_y + dy, self.max_x - dx, self.max_y - dy)

    def shrink(self, edge: Edge, amount: int) -> "Rect":
        """Return a rectangle with `amount` pixels removed from `edge`."""
        if edge is Edge.TOP:
            return Rect(self.min_x, self.min_y + amount, self.max_x, self.max_y)
        if edge is Edge.BOTTOM:
            return Rect(self.min_x, self.min_y, self.max_x, self.max_y - amount)
        if edge is Edge.LEFT:
            return Rect(self.min_x + amount, self.min_y, self.max_x, self.max_y)
        return Rect(self.min_x, self.min_y, self.max_x - amount, self.max_y)

    def band(self, edge: Edge, thickness: int) -> "Rect":
        """Return the strip of `thickness` pixels lying flush against `edge`."""
        if edge is Edge.TOP:
            return Rect(self.min_x, self.min_y, self.max_x, self.min_y + thickness)
        if edge is Edge.BOTTOM:
            return Rect(self.min_x, self.max_y - thickness, self.max_x, self.max_y)
        if edge is Edge.LEFT:
            return Rect(self.min_x, self.min_y, self.min_x + thickness, self.max_y)
        return Rect(self.max_x - thickness, self.min_y, self.max_x, self.max_y)


@dataclass(frozen=True)
class Image:
    """
    Decoded RGB pixels (+ decode format and source path for bookkeeping).
    The pixel array has shape (H, W, 3) and is held as a read-only view; the
    caller's array keeps its own flags.
    """
    pixels: np.ndarray
    format: Optional[str] = None
    path: Optional[Path] = None

    def __post_init__(self) -> None:
        if self.pixels.ndim != 3 or self.pixels.shape[2] != 3:
            raise ValueError(f"Expected (H, W, 3) pixel array, got shape {self.pixels.shape}")
        view = self.pixels.view()
        view.setflags(write=False)
        object.__setattr__(self, "pixels", view)

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    @property
    def bounds(self) -> Rect:
        return Rect.from_size(self.width, self.height)

    def region(self, rect: Rect) -> np.ndarray:
        """Read-only view of the pixels inside `rect`."""
        return self.pixels[rect.min_y:rect.max_y, rect.min_x:rect.max_x]


@dataclass(frozen=True)
class CropResult:
    """Outcome of one engine invocation on one file."""
    was_cropped: bool
    message: str


@dataclass(frozen=True)
class CropSettings:
    """Parameters for the brightness-uniformity engine."""
    tolerance: float = 15.0
    max_crop_percent: float = 30.0

    def __post_init__(self) -> None:
        if not 0 <= self.tolerance <= 100:
            raise ConfigurationError("tolerance must be between 0 and 100")
        if not 0 <= self.max_crop_percent <= 100:
            raise ConfigurationError("max-crop must be between 0 and 100")


@dataclass(frozen=True)
class CornerSettings:
    """Parameters for the fixed-percentage corner crop."""
    corner: Corner
    percent: float

    def __post_init__(self) -> None:
        if not 0 < self.percent < 100:
            raise ConfigurationError("percent must be between 0 and 100 (exclusive)")


@dataclass(frozen=True)
class Job:
    """One file to process. Created by the scanner, consumed once by one worker."""
    input_path: Path
    output_dir: Path
    settings: Union[CropSettings, CornerSettings]

    @property
    def filename(self) -> str:
        return self.input_path.name


@dataclass
class WorkerOutcome:
    """Per-job result used for run-level accounting."""
    filename: str
    success: bool
    was_cropped: bool = False
    message: str = ""
    output_path: Optional[Path] = None


@dataclass
class BatchSummary:
    """Run-level totals. processed + errors always equals the number of jobs."""
    processed: int = 0
    cropped: int = 0
    unchanged: int = 0
    errors: int = 0
    outcomes: list[WorkerOutcome] = field(default_factory=list)

    @property
    def total(self) -> int:
        return self.processed + self.errors
