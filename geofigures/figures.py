"""Figure kinds and their metric formulas.

A figure is an immutable record of a kind tag plus an ordered tuple of
points. Behaviour is looked up per kind in a small formula table rather than
spread over a class hierarchy: rhombus, rectangle and square share the
quadrilateral formulas and differ only in their ``is_a`` ancestry.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional, Sequence, Tuple

import numpy as np

from .logging_utils import apply_debug_logging
from .primitives import Point, distance

logger = logging.getLogger(__name__)

LINE = "line"
TRIANGLE = "triangle"
QUADRILATERAL = "quadrilateral"
RHOMBUS = "rhombus"
RECTANGLE = "rectangle"
SQUARE = "square"
UNKNOWN = "unknown"

FIGURE_KINDS = (LINE, TRIANGLE, QUADRILATERAL, RHOMBUS, RECTANGLE, SQUARE, UNKNOWN)

_QUAD_KINDS = {QUADRILATERAL, RHOMBUS, RECTANGLE, SQUARE}

# kind -> (minimum, maximum) point count; None means unbounded
_ARITY: Dict[str, Tuple[int, Optional[int]]] = {
    LINE: (2, 2),
    TRIANGLE: (3, 3),
    QUADRILATERAL: (4, 4),
    RHOMBUS: (4, 4),
    RECTANGLE: (4, 4),
    SQUARE: (4, 4),
    UNKNOWN: (0, None),
}

_PARENT: Dict[str, str] = {
    RHOMBUS: QUADRILATERAL,
    RECTANGLE: QUADRILATERAL,
    SQUARE: RECTANGLE,
}

DEFAULT_NAME = "Figure"


class InvalidGeometry(ValueError):
    """Raised when a figure is built with the wrong number of points."""

    def __init__(self, kind: str, expected: int, got: int) -> None:
        super().__init__(f"{kind} expected {expected} points, got {got}")
        self.kind = kind
        self.expected = expected
        self.got = got


def _cyclic_perimeter(points: Sequence[Point]) -> float:
    count = len(points)
    return sum(distance(points[idx], points[(idx + 1) % count]) for idx in range(count))


def _line_perimeter(points: Sequence[Point]) -> float:
    return distance(points[0], points[1])


def _heron_area(points: Sequence[Point]) -> float:
    a, b, c = sorted(
        (
            distance(points[0], points[1]),
            distance(points[1], points[2]),
            distance(points[2], points[0]),
        ),
        reverse=True,
    )
    # Kahan's ordering of Heron's formula, a >= b >= c
    gap = c - (a - b)
    # sides measured between real points obey the triangle inequality,
    # so a negative gap is rounding on a collinear triple
    if gap < 0.0:
        gap = 0.0
    product = (a + (b + c)) * gap * (c + (a - b)) * (a + (b - c))
    return 0.25 * math.sqrt(product) if product >= 0.0 else math.nan


def _shoelace_area(points: Sequence[Point]) -> float:
    coords = np.array([p.as_tuple() for p in points], dtype=float)
    xs = coords[:, 0]
    ys = coords[:, 1]
    twice = np.dot(xs, np.roll(ys, -1)) - np.dot(ys, np.roll(xs, -1))
    return float(abs(twice) / 2.0)


def _zero(points: Sequence[Point]) -> float:
    return 0.0


_PERIMETER: Dict[str, Callable[[Sequence[Point]], float]] = {
    LINE: _line_perimeter,
    TRIANGLE: _cyclic_perimeter,
    UNKNOWN: _zero,
}
_AREA: Dict[str, Callable[[Sequence[Point]], float]] = {
    LINE: _zero,
    TRIANGLE: _heron_area,
    UNKNOWN: _zero,
}
for _kind in _QUAD_KINDS:
    _PERIMETER[_kind] = _cyclic_perimeter
    _AREA[_kind] = _shoelace_area


def _check_arity(kind: str, count: int) -> None:
    low, high = _ARITY[kind]
    if count < low:
        raise InvalidGeometry(kind, low, count)
    if high is not None and count > high:
        raise InvalidGeometry(kind, high, count)


@dataclass(frozen=True)
class Figure:
    kind: str
    points: Tuple[Point, ...]
    name: Optional[str] = None

    def __post_init__(self) -> None:
        if self.kind not in _ARITY:
            raise ValueError(f"unknown figure kind {self.kind!r}")
        points = tuple(self.points)
        for point in points:
            if not isinstance(point, Point):
                raise TypeError(f"figure points must be Point, got {type(point).__name__}")
        _check_arity(self.kind, len(points))
        object.__setattr__(self, "points", points)

    @classmethod
    def create(cls, kind: str, points: Iterable[Point], name: Optional[str] = None) -> "Figure":
        return cls(kind, tuple(points), name)

    @property
    def display_name(self) -> str:
        return self.name or DEFAULT_NAME

    @property
    def point_count(self) -> int:
        return len(self.points)

    def area(self) -> float:
        return _AREA[self.kind](self.points)

    def perimeter(self) -> float:
        return _PERIMETER[self.kind](self.points)

    def is_a(self, kind: str) -> bool:
        """True when this figure's kind is *kind* or specializes it."""

        current: Optional[str] = self.kind
        while current is not None:
            if current == kind:
                return True
            current = _PARENT.get(current)
        return False

    def coordinates(self) -> np.ndarray:
        """Return the points as an ``(n, 2)`` float array."""

        if not self.points:
            return np.zeros((0, 2), dtype=float)
        return np.array([p.as_tuple() for p in self.points], dtype=float)


def line(a: Point, b: Point, name: Optional[str] = None) -> Figure:
    return Figure(LINE, (a, b), name)


def triangle(a: Point, b: Point, c: Point, name: Optional[str] = None) -> Figure:
    return Figure(TRIANGLE, (a, b, c), name)


def quadrilateral(a: Point, b: Point, c: Point, d: Point, name: Optional[str] = None) -> Figure:
    return Figure(QUADRILATERAL, (a, b, c, d), name)


def rhombus(a: Point, b: Point, c: Point, d: Point, name: Optional[str] = None) -> Figure:
    return Figure(RHOMBUS, (a, b, c, d), name)


def rectangle(a: Point, b: Point, c: Point, d: Point, name: Optional[str] = None) -> Figure:
    return Figure(RECTANGLE, (a, b, c, d), name)


def square(a: Point, b: Point, c: Point, d: Point, name: Optional[str] = None) -> Figure:
    return Figure(SQUARE, (a, b, c, d), name)


def unknown_figure(points: Iterable[Point] = (), name: Optional[str] = None) -> Figure:
    return Figure(UNKNOWN, tuple(points), name)


__all__ = [
    "LINE",
    "TRIANGLE",
    "QUADRILATERAL",
    "RHOMBUS",
    "RECTANGLE",
    "SQUARE",
    "UNKNOWN",
    "FIGURE_KINDS",
    "DEFAULT_NAME",
    "Figure",
    "InvalidGeometry",
    "line",
    "triangle",
    "quadrilateral",
    "rhombus",
    "rectangle",
    "square",
    "unknown_figure",
]


apply_debug_logging(globals(), logger=logger, skip={"Figure.is_a", "Figure.create"})
