"""Escape-time evaluation and region rendering for Mandelbrot images."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from .plane import Bounds, Viewport, pixel_to_point

logger = logging.getLogger(__name__)

HORIZON = 4.0
DEFAULT_DEPTH = 255
BACKENDS = ("python", "tensor")


@dataclass(frozen=True)
class RenderConfig:
    """Settings shared by every region of a render.

    ``depth`` is both the iteration limit and the brightest intensity: a point
    escaping after ``n`` iterations is written as ``depth - n``. It is capped
    at 255 so intensities fit in a byte.
    """

    depth: int = DEFAULT_DEPTH
    backend: str = "python"

    def __post_init__(self) -> None:
        if isinstance(self.depth, bool) or not isinstance(self.depth, int):
            raise ValueError(f"depth must be an integer, got {self.depth!r}.")
        if not 1 <= self.depth <= 255:
            raise ValueError(f"depth must be between 1 and 255, got {self.depth}.")
        if self.backend not in BACKENDS:
            raise ValueError(
                f"Unknown backend '{self.backend}'. Valid choices: {', '.join(BACKENDS)}."
            )


def escape_time(c: complex, limit: int) -> Optional[int]:
    """Return the iteration at which ``z <- z*z + c`` leaves the radius-2 disc.

    The magnitude is checked before each update, so iteration 0 always sees
    ``z = 0``. ``None`` means the orbit stayed bounded for ``limit``
    iterations and ``c`` is taken to be in the set.
    """

    z = 0j
    for i in range(limit):
        if z.real * z.real + z.imag * z.imag > HORIZON:
            return i
        z = z * z + c
    return None


def intensity(count: Optional[int], depth: int = DEFAULT_DEPTH) -> int:
    if count is None:
        return 0
    return depth - count


def _check_buffer(pixels, bounds: Bounds) -> None:
    if len(pixels) != bounds.size:
        raise ValueError(
            f"Buffer holds {len(pixels)} bytes but bounds {bounds.width}x{bounds.height} "
            f"need {bounds.size}."
        )


def render_region(pixels, bounds: Bounds, viewport: Viewport, config: Optional[RenderConfig] = None) -> None:
    """Fill ``pixels`` with the rendering of ``viewport`` at ``bounds``.

    ``pixels`` is the region's own row-major byte buffer (a numpy ``uint8``
    array or anything else indexable by flat offset), and ``bounds`` and
    ``viewport`` describe that region alone.
    """

    config = config or RenderConfig()
    _check_buffer(pixels, bounds)

    if config.backend == "tensor":
        from .kernels import render_region_tensor

        render_region_tensor(pixels, bounds, viewport, config.depth)
        return

    depth = config.depth
    for row in range(bounds.height):
        offset = row * bounds.width
        for column in range(bounds.width):
            point = pixel_to_point(bounds, (column, row), viewport)
            pixels[offset + column] = intensity(escape_time(point, depth), depth)
