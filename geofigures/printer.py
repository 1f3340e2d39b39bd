from typing import Iterable

from .figures import DEFAULT_NAME, Figure
from .primitives import Point


def format_point(point: Point) -> str:
    return f"({point.x}, {point.y})"


def description(figure: Figure, fallback_name: str = DEFAULT_NAME) -> str:
    """Human-readable summary; metrics are recomputed on every call."""

    name = figure.name or fallback_name
    return (
        f"{name} with {figure.point_count} points, "
        f"perimeter: {figure.perimeter()}, area: {figure.area()}"
    )


def print_figures(figures: Iterable[Figure], fallback_name: str = DEFAULT_NAME) -> str:
    lines = [description(figure, fallback_name) for figure in figures]
    return "".join(line + "\n" for line in lines)


__all__ = ["format_point", "description", "print_figures"]
