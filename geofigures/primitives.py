from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Point:
    """Immutable point in the plane."""

    x: float
    y: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "x", float(self.x))
        object.__setattr__(self, "y", float(self.y))

    def distance_to(self, other: "Point") -> float:
        return distance(self, other)

    def as_tuple(self) -> Tuple[float, float]:
        return self.x, self.y

    def __sub__(self, other: "Point") -> "Vector":
        if not isinstance(other, Point):
            return NotImplemented
        return Vector.between(other, self)


@dataclass(frozen=True)
class Vector:
    """Displacement ``(dx, dy)``; usually built from two points."""

    dx: float
    dy: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "dx", float(self.dx))
        object.__setattr__(self, "dy", float(self.dy))

    @classmethod
    def between(cls, start: Point, end: Point) -> "Vector":
        return cls(end.x - start.x, end.y - start.y)

    @classmethod
    def zero(cls) -> "Vector":
        return cls(0.0, 0.0)

    @property
    def magnitude(self) -> float:
        return math.hypot(self.dx, self.dy)

    def dot(self, other: "Vector") -> float:
        return self.dx * other.dx + self.dy * other.dy

    def angle(self, other: "Vector") -> float:
        """Return the unsigned angle to *other* in radians.

        A zero-length operand yields ``0.0`` instead of a division by zero.
        """

        norm = self.magnitude * other.magnitude
        if norm == 0.0:
            return 0.0
        cosine = self.dot(other) / norm
        return math.acos(max(-1.0, min(1.0, cosine)))


def distance(a: Point, b: Point) -> float:
    """Euclidean distance between *a* and *b*."""

    return math.sqrt((b.x - a.x) ** 2 + (b.y - a.y) ** 2)


__all__ = ["Point", "Vector", "distance"]
