"""Split an image into row bands and render them on a thread pool."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from .plane import Bounds, Viewport, pixel_to_point
from .renderer import RenderConfig, render_region

logger = logging.getLogger(__name__)

DEFAULT_WORKERS = 8


@dataclass(frozen=True)
class Band:
    """Rows ``[top, top + bounds.height)`` of the full image."""

    top: int
    bounds: Bounds
    viewport: Viewport

    @property
    def start(self) -> int:
        return self.top * self.bounds.width

    @property
    def stop(self) -> int:
        return (self.top + self.bounds.height) * self.bounds.width


def band_height(height: int, workers: int) -> int:
    # Over-allocates, so the last band may come up short or not exist at all.
    return height // workers + 1


def partition_rows(height: int, workers: int) -> list[tuple[int, int]]:
    """Consecutive ``[start, stop)`` row ranges, one per band."""

    if workers < 1:
        raise ValueError(f"workers must be at least 1, got {workers}.")
    rows = band_height(height, workers)
    return [(start, min(start + rows, height)) for start in range(0, height, rows)]


def check_partition(ranges: Sequence[tuple[int, int]], height: int) -> None:
    """Raise ``ValueError`` unless ``ranges`` tile ``[0, height)`` exactly."""

    expected = 0
    for start, stop in ranges:
        if start != expected:
            kind = "gap" if start > expected else "overlap"
            raise ValueError(f"Row ranges have a {kind} at row {expected} (next range starts at {start}).")
        if stop <= start:
            raise ValueError(f"Empty row range [{start}, {stop}).")
        expected = stop
    if expected != height:
        raise ValueError(f"Row ranges cover [0, {expected}) but the image has {height} rows.")


def plan_bands(bounds: Bounds, viewport: Viewport, workers: int) -> list[Band]:
    """Cut the image into bands, each with the sub-viewport it covers.

    Band corners are mapped against the full image, so neighbouring bands
    share an edge on the plane.
    """

    bands = []
    for top, stop in partition_rows(bounds.height, workers):
        height = stop - top
        upper_left = pixel_to_point(bounds, (0, top), viewport)
        lower_right = pixel_to_point(bounds, (bounds.width, top + height), viewport)
        bands.append(Band(top, Bounds(bounds.width, height), Viewport(upper_left, lower_right)))
    return bands


def new_buffer(bounds: Bounds) -> np.ndarray:
    """Zero-filled row-major pixel buffer for ``bounds``."""

    return np.zeros(bounds.size, dtype=np.uint8)


def _as_array(pixels) -> np.ndarray:
    if isinstance(pixels, np.ndarray):
        return pixels
    return np.frombuffer(pixels, dtype=np.uint8)


def render_parallel(
    pixels,
    bounds: Bounds,
    viewport: Viewport,
    workers: int = DEFAULT_WORKERS,
    config: Optional[RenderConfig] = None,
) -> None:
    """Render the whole image into ``pixels``, one pool task per band.

    Returns only once every band has finished. If any band fails, its
    exception is raised here and ``pixels`` must be treated as invalid.
    """

    config = config or RenderConfig()
    buffer = _as_array(pixels)
    if buffer.size != bounds.size:
        raise ValueError(
            f"Buffer holds {buffer.size} bytes but bounds {bounds.width}x{bounds.height} "
            f"need {bounds.size}."
        )
    if workers < 1:
        raise ValueError(f"workers must be at least 1, got {workers}.")

    bands = plan_bands(bounds, viewport, workers)
    check_partition([(band.top, band.top + band.bounds.height) for band in bands], bounds.height)
    logger.debug(
        "Rendering %dx%d in %d bands of up to %d rows on %d workers (%s backend)",
        bounds.width, bounds.height, len(bands), band_height(bounds.height, workers), workers, config.backend,
    )

    with ThreadPoolExecutor(max_workers=workers) as pool:
        futures = {
            pool.submit(render_region, buffer[band.start:band.stop], band.bounds, band.viewport, config): band
            for band in bands
        }

    for future, band in futures.items():
        error = future.exception()
        if error is not None:
            logger.debug("Band at row %d failed", band.top)
            raise error
        logger.debug("Band rows [%d, %d) done", band.top, band.top + band.bounds.height)
