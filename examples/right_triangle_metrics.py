"""Example: build a few figures and print their metrics."""

from geofigures import Point, line, quadrilateral, total_area, triangle
from geofigures.printer import print_figures

POINTS = [Point(0, 0), Point(3, 0), Point(3, 4), Point(0, 4)]


def main() -> None:
    figures = [
        line(POINTS[0], POINTS[1], name="Base"),
        triangle(*POINTS[:3], name="Right triangle"),
        quadrilateral(*POINTS, name="Rectangle outline"),
    ]
    print(print_figures(figures), end="")
    print("Total area:", total_area(figures))


if __name__ == "__main__":
    main()
