import argparse
import logging
import sys
from typing import Any, Dict, List, Optional, Sequence

from geofigures import (
    Figure,
    FigureRegistry,
    InvalidGeometry,
    RepresentationStats,
    description,
    figure_from_record,
    load_figures,
    total_area,
)

logger = logging.getLogger(__name__)

SAMPLE_POINTS = [(0.0, 0.0), (3.0, 0.0), (3.0, 4.0), (0.0, 4.0)]

SAMPLE_RECORDS: List[Dict[str, Any]] = [
    {"kind": "line", "name": "Line", "points": SAMPLE_POINTS[:2]},
    {"kind": "triangle", "name": "Triangle", "points": SAMPLE_POINTS[:3]},
    {"kind": "quadrilateral", "name": "Quadrilateral", "points": SAMPLE_POINTS},
    {"kind": "rectangle", "name": "Rectangle", "points": SAMPLE_POINTS},
    {"kind": "rhombus", "name": "Rhombus", "points": [(0, 0), (2, 1), (4, 0), (2, -1)]},
    {"kind": "square", "name": "Square", "points": [(0, 0), (2, 0), (2, 2), (0, 2)]},
    {"kind": "unknown", "points": SAMPLE_POINTS},
    {"kind": "triangle", "name": "Broken triangle", "points": SAMPLE_POINTS[:2]},
]


def _configure_logging(level: str) -> None:
    log_level = getattr(logging, level.upper(), logging.WARNING)
    logging.basicConfig(
        level=log_level,
        format="%(levelname)s:%(name)s:%(message)s",
    )


def _build_sample_figures() -> List[Figure]:
    figures: List[Figure] = []
    for record in SAMPLE_RECORDS:
        try:
            figures.append(figure_from_record(record))
        except InvalidGeometry as exc:
            print(f"Skipping {record.get('name') or record['kind']}: {exc}")
    return figures


def _print_result(stats: RepresentationStats) -> None:
    print("Representations:")
    print(f"  longest: {stats.longest}")
    print(f"  shortest: {stats.shortest}")
    print(f"  largest: {stats.largest}")
    print(f"  smallest: {stats.smallest}")


def _describe_or_none(figure: Optional[Figure]) -> str:
    return description(figure) if figure is not None else "(none)"


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Describe figures and their statistics")
    parser.add_argument(
        "path",
        nargs="?",
        help="JSON file with a list of figure records (default: built-in sample)",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Logging level (default: WARNING)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=10.0,
        help="Seconds to wait for the asynchronous representations (default: 10)",
    )
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)

    if args.path:
        figures = load_figures(args.path, skip_invalid=True)
    else:
        figures = _build_sample_figures()
    logger.info("Loaded %d figure(s)", len(figures))

    with FigureRegistry(figures, result_handler=_print_result) as registry:
        print("Figures:")
        for text in registry.describe():
            print(f"  {text}")

        print(f"Total area: {total_area(registry)}")
        print(f"Max area: {_describe_or_none(registry.max_area_figure())}")
        print(f"Min area: {_describe_or_none(registry.min_area_figure())}")
        print(f"Max perimeter: {_describe_or_none(registry.max_perimeter_figure())}")
        print(f"Min perimeter: {_describe_or_none(registry.min_perimeter_figure())}")

        pending = registry.find_figure_representations()
        try:
            registry.delivery.run_until_complete(pending, timeout=args.timeout)
        except TimeoutError as exc:
            logger.error("%s", exc)
            raise SystemExit(1)


if __name__ == "__main__":
    main(sys.argv[1:])
