"""Pixel grid and complex-plane geometry."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Bounds:
    """Pixel dimensions of an image or of one band of it."""

    width: int
    height: int

    def __post_init__(self) -> None:
        for name in ("width", "height"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{name} must be an integer, got {value!r}.")
            if value <= 0:
                raise ValueError(f"{name} must be positive, got {value}.")

    @property
    def size(self) -> int:
        return self.width * self.height


@dataclass(frozen=True)
class Viewport:
    """Rectangle of the complex plane spread over a pixel grid.

    ``upper_left`` lands on pixel ``(0, 0)`` and ``lower_right`` on pixel
    ``(width, height)``. The imaginary part may not increase from top to
    bottom; the real axis may run either way.
    """

    upper_left: complex
    lower_right: complex

    def __post_init__(self) -> None:
        object.__setattr__(self, "upper_left", complex(self.upper_left))
        object.__setattr__(self, "lower_right", complex(self.lower_right))
        if self.upper_left.imag < self.lower_right.imag:
            raise ValueError(
                "upper_left must not lie below lower_right "
                f"({self.upper_left.imag} < {self.lower_right.imag})."
            )

    @property
    def width(self) -> float:
        return self.lower_right.real - self.upper_left.real

    @property
    def height(self) -> float:
        return self.upper_left.imag - self.lower_right.imag


def pixel_to_point(bounds: Bounds, pixel: tuple[int, int], viewport: Viewport) -> complex:
    """Return the plane point for ``pixel = (column, row)``.

    Rows grow downward on screen while imaginary parts grow upward, hence the
    subtraction on the second axis.
    """

    column, row = pixel
    width = viewport.lower_right.real - viewport.upper_left.real
    height = viewport.upper_left.imag - viewport.lower_right.imag
    return complex(
        viewport.upper_left.real + column * width / bounds.width,
        viewport.upper_left.imag - row * height / bounds.height,
    )
