"""Example: compute description statistics off-thread with an observer."""

import logging

from geofigures import FigureRegistry, Point, RepresentationStats, rectangle, square, triangle

logger = logging.getLogger(__name__)


class LongestPrinter:
    def on_representation_found(self, longest: str) -> None:
        print(f"Observer saw: {longest}")


def report(stats: RepresentationStats) -> None:
    for field, value in stats._asdict().items():
        print(f"{field}: {value}")


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s:%(name)s:%(message)s")
    observer = LongestPrinter()
    registry = FigureRegistry(
        [
            triangle(Point(0, 0), Point(4, 0), Point(0, 3), name="Triangle"),
            rectangle(Point(0, 0), Point(5, 0), Point(5, 2), Point(0, 2), name="Rectangle"),
            square(Point(0, 0), Point(2, 0), Point(2, 2), Point(0, 2)),
        ],
        result_handler=report,
        observer=observer,
    )
    with registry:
        pending = registry.find_figure_representations()
        logger.info("Request submitted; pumping delivery queue on the main thread")
        registry.delivery.run_until_complete(pending, timeout=5.0)


if __name__ == "__main__":
    main()
