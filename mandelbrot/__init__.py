"""Public API for Mandelbrot rendering utilities."""

from .plane import Bounds, Viewport, pixel_to_point
from .renderer import DEFAULT_DEPTH, RenderConfig, escape_time, intensity, render_region
from .parallel import (
    DEFAULT_WORKERS,
    Band,
    band_height,
    check_partition,
    new_buffer,
    partition_rows,
    plan_bands,
    render_parallel,
)
from .parsing import parse_bounds, parse_complex, parse_pair
from .image import write_image

__all__ = [
    "Band",
    "Bounds",
    "DEFAULT_DEPTH",
    "DEFAULT_WORKERS",
    "RenderConfig",
    "Viewport",
    "band_height",
    "check_partition",
    "escape_time",
    "intensity",
    "new_buffer",
    "parse_bounds",
    "parse_complex",
    "parse_pair",
    "partition_rows",
    "pixel_to_point",
    "plan_bands",
    "render_parallel",
    "render_region",
    "write_image",
]
