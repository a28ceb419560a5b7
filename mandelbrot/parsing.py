"""Parsers for the textual pixel-bounds and plane-point arguments."""

from __future__ import annotations

from typing import Callable, Optional, TypeVar

from .plane import Bounds

T = TypeVar("T")


def parse_pair(s: str, separator: str, kind: Callable[[str], T]) -> Optional[tuple[T, T]]:
    """Parse ``"<left><separator><right>"`` such as ``"400x600"`` or ``"1.0,0.5"``.

    Splits on the first ``separator`` and converts both sides with ``kind``.
    Returns ``None`` when the separator is missing or either side does not
    convert. Sides with surrounding whitespace or ``_`` separators are
    rejected.
    """

    index = s.find(separator)
    if index == -1:
        return None
    left, right = s[:index], s[index + 1:]
    if not (_is_bare_token(left) and _is_bare_token(right)):
        return None
    try:
        return kind(left), kind(right)
    except ValueError:
        return None


def _is_bare_token(text: str) -> bool:
    # int() and float() would otherwise accept padding and digit separators.
    return text == text.strip() and "_" not in text


def parse_complex(s: str) -> Optional[complex]:
    """Parse ``"RE,IM"`` into a plane point."""

    pair = parse_pair(s, ",", float)
    if pair is None:
        return None
    re, im = pair
    return complex(re, im)


def parse_bounds(s: str) -> Optional[Bounds]:
    pair = parse_pair(s, "x", int)
    if pair is None:
        return None
    width, height = pair
    if width <= 0 or height <= 0:
        return None
    return Bounds(width, height)
