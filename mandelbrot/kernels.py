"""Vectorized escape-time kernel built on TensorFlow."""

from __future__ import annotations

import numpy as np
import tensorflow as tf

from .plane import Bounds, Viewport
from .renderer import HORIZON

NOT_ESCAPED = -1


@tf.function
def _escape_step(
    i: tf.Tensor,
    zr: tf.Tensor,
    zi: tf.Tensor,
    cr: tf.Tensor,
    ci: tf.Tensor,
    counts: tf.Tensor,
) -> tuple[tf.Tensor, tf.Tensor, tf.Tensor]:
    """Check every still-bounded point against the horizon, then iterate it once."""

    active = tf.equal(counts, NOT_ESCAPED)
    horizon = tf.cast(HORIZON, zr.dtype)
    escaped = tf.logical_and(active, zr * zr + zi * zi > horizon)
    counts = tf.where(escaped, i, counts)
    active = tf.logical_and(active, tf.logical_not(escaped))

    zr_new = zr * zr - zi * zi + cr
    zi_new = zr * zi + zi * zr + ci
    return tf.where(active, zr_new, zr), tf.where(active, zi_new, zi), counts


@tf.function
def _escape_run(cr: tf.Tensor, ci: tf.Tensor, limit: tf.Tensor) -> tf.Tensor:
    """Iterate the Mandelbrot formula using a TensorFlow while loop."""

    limit = tf.cast(limit, tf.int32)
    i = tf.constant(0, dtype=tf.int32)
    zr = tf.zeros_like(cr)
    zi = tf.zeros_like(ci)
    counts = tf.fill(tf.shape(cr), tf.constant(NOT_ESCAPED, dtype=tf.int32))

    def cond(i: tf.Tensor, zr: tf.Tensor, zi: tf.Tensor, counts: tf.Tensor) -> tf.Tensor:
        return tf.logical_and(tf.less(i, limit), tf.reduce_any(tf.equal(counts, NOT_ESCAPED)))

    def body(i: tf.Tensor, zr: tf.Tensor, zi: tf.Tensor, counts: tf.Tensor) -> tuple[tf.Tensor, tf.Tensor, tf.Tensor, tf.Tensor]:
        zr, zi, counts = _escape_step(i, zr, zi, cr, ci, counts)
        return i + 1, zr, zi, counts

    _, _, _, counts = tf.while_loop(cond, body, (i, zr, zi, counts))
    return counts


def plane_grid(bounds: Bounds, viewport: Viewport) -> tuple[np.ndarray, np.ndarray]:
    """Real and imaginary parts of every pixel, shaped ``(height, width)``.

    Uses the same operation order as ``pixel_to_point`` so both backends see
    bit-identical points.
    """

    width = viewport.lower_right.real - viewport.upper_left.real
    height = viewport.upper_left.imag - viewport.lower_right.imag
    columns = np.arange(bounds.width, dtype=np.float64)
    rows = np.arange(bounds.height, dtype=np.float64)
    re = viewport.upper_left.real + columns * width / bounds.width
    im = viewport.upper_left.imag - rows * height / bounds.height
    return np.meshgrid(re, im)


def escape_counts(bounds: Bounds, viewport: Viewport, limit: int, *, device: str = "/CPU:0") -> np.ndarray:
    """Escape iteration per pixel, ``NOT_ESCAPED`` for points that stayed bounded."""

    re, im = plane_grid(bounds, viewport)
    with tf.device(device):
        cr = tf.convert_to_tensor(re, dtype=tf.float64)
        ci = tf.convert_to_tensor(im, dtype=tf.float64)
        counts = _escape_run(cr, ci, tf.constant(limit, dtype=tf.int32))
    return counts.numpy()


def render_region_tensor(pixels, bounds: Bounds, viewport: Viewport, depth: int) -> None:
    counts = escape_counts(bounds, viewport, depth)
    values = np.where(counts == NOT_ESCAPED, 0, depth - counts).astype(np.uint8)
    pixels[:] = values.ravel()
