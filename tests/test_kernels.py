import numpy as np
import pytest

tf = pytest.importorskip("tensorflow")

from mandelbrot import Bounds, RenderConfig, Viewport, escape_time, new_buffer, render_parallel, render_region
from mandelbrot.kernels import NOT_ESCAPED, escape_counts, plane_grid

BOUNDS = Bounds(48, 32)
VIEWPORT = Viewport(-2.0 + 1.0j, 1.0 - 1.0j)


@pytest.mark.parametrize("c, expected", [(0j, None), (3 + 0j, 1), (1 + 0j, 3), (0.5 + 0j, 5), (2 + 0j, 2), (-2 + 0j, None), (2j, 2)])
def test_escape_counts_match_scalar_evaluator(c, expected):
    counts = escape_counts(Bounds(1, 1), Viewport(c, c), 255)
    assert counts.shape == (1, 1)
    assert escape_time(c, 255) == expected
    assert counts[0, 0] == (NOT_ESCAPED if expected is None else expected)


def test_plane_grid_orientation():
    re, im = plane_grid(Bounds(4, 2), Viewport(-1.0 + 1.0j, 1.0 - 1.0j))
    np.testing.assert_array_equal(re[0], [-1.0, -0.5, 0.0, 0.5])
    np.testing.assert_array_equal(im[:, 0], [1.0, 0.0])


def test_tensor_backend_matches_python_backend():
    expected = new_buffer(BOUNDS)
    render_region(expected, BOUNDS, VIEWPORT)

    pixels = new_buffer(BOUNDS)
    render_region(pixels, BOUNDS, VIEWPORT, RenderConfig(backend="tensor"))
    np.testing.assert_array_equal(pixels, expected)


def test_tensor_backend_in_parallel():
    expected = new_buffer(BOUNDS)
    render_parallel(expected, BOUNDS, VIEWPORT, 1)

    pixels = new_buffer(BOUNDS)
    render_parallel(pixels, BOUNDS, VIEWPORT, 4, RenderConfig(depth=64, backend="tensor"))
    shallow = new_buffer(BOUNDS)
    render_parallel(shallow, BOUNDS, VIEWPORT, 2, RenderConfig(depth=64))
    np.testing.assert_array_equal(pixels, shallow)
    assert not np.array_equal(pixels, expected)
