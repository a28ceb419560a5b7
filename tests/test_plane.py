import pytest

from mandelbrot import Bounds, Viewport, pixel_to_point


VIEWPORTS = [
    Viewport(-1.0 + 1.0j, 1.0 - 1.0j),
    Viewport(-2.5 + 1.25j, 1.0 - 1.25j),
    Viewport(-1.20 + 0.35j, -1.0 + 0.20j),
    Viewport(0.3 + 0.1j, -0.7 - 0.3j),
]


def test_pixel_to_point_known_value():
    point = pixel_to_point(Bounds(100, 200), (25, 175), Viewport(-1.0 + 1.0j, 1.0 - 1.0j))
    assert point == complex(-0.5, -0.75)


def test_pixel_to_point_rows_move_down_the_plane():
    bounds = Bounds(10, 10)
    viewport = Viewport(-1.0 + 1.0j, 1.0 - 1.0j)
    top = pixel_to_point(bounds, (0, 0), viewport)
    lower = pixel_to_point(bounds, (0, 5), viewport)
    assert lower.imag < top.imag
    assert lower.real == top.real


@pytest.mark.parametrize("viewport", VIEWPORTS)
@pytest.mark.parametrize("bounds", [Bounds(1, 1), Bounds(100, 200), Bounds(640, 480), Bounds(7, 3)])
def test_corners_map_to_viewport_corners(bounds, viewport):
    assert pixel_to_point(bounds, (0, 0), viewport) == viewport.upper_left
    lower_right = pixel_to_point(bounds, (bounds.width, bounds.height), viewport)
    assert lower_right.real == pytest.approx(viewport.lower_right.real)
    assert lower_right.imag == pytest.approx(viewport.lower_right.imag)


def test_viewport_dimensions():
    viewport = Viewport(-2.0 + 1.0j, 1.0 - 1.5j)
    assert viewport.width == 3.0
    assert viewport.height == 2.5


def test_viewport_real_axis_may_run_backwards():
    viewport = Viewport(1.0 + 1.0j, -1.0 - 1.0j)
    assert viewport.width == -2.0
    assert pixel_to_point(Bounds(4, 4), (1, 0), viewport) == complex(0.5, 1.0)


def test_viewport_rejects_upside_down_region():
    with pytest.raises(ValueError):
        Viewport(0.0 + 0.0j, 1.0 + 1.0j)


def test_viewport_accepts_zero_height():
    viewport = Viewport(3.0 + 0.0j, 3.0 + 0.0j)
    assert viewport.height == 0.0


@pytest.mark.parametrize("width, height", [(0, 1), (1, 0), (-3, 4), (2.5, 3)])
def test_bounds_rejects_invalid_dimensions(width, height):
    with pytest.raises(ValueError):
        Bounds(width, height)


def test_bounds_size():
    assert Bounds(100, 200).size == 20000
