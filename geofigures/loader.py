from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, List, Mapping, Sequence, Union

from .figures import Figure, InvalidGeometry
from .primitives import Point

logger = logging.getLogger(__name__)


def _point_from_value(value: Any) -> Point:
    if isinstance(value, Mapping):
        return Point(value["x"], value["y"])
    if isinstance(value, (list, tuple)) and len(value) == 2:
        return Point(value[0], value[1])
    raise ValueError(f"invalid point {value!r}; expected [x, y] or {{'x': .., 'y': ..}}")


def figure_from_record(record: Mapping[str, Any]) -> Figure:
    """Build a figure from ``{"kind": .., "points": [...], "name": ..}``."""

    kind = record.get("kind")
    if not isinstance(kind, str):
        raise ValueError(f"figure record needs a string kind, got {kind!r}")
    raw_points = record.get("points", [])
    if not isinstance(raw_points, (list, tuple)):
        raise ValueError(f"figure points must be a list, got {type(raw_points).__name__}")
    name = record.get("name")
    points = [_point_from_value(value) for value in raw_points]
    return Figure.create(kind.strip().lower(), points, name)


def figures_from_records(
    records: Sequence[Mapping[str, Any]], *, skip_invalid: bool = False
) -> List[Figure]:
    figures: List[Figure] = []
    for idx, record in enumerate(records):
        try:
            figures.append(figure_from_record(record))
        except (InvalidGeometry, ValueError, KeyError, TypeError) as exc:
            if not skip_invalid:
                raise
            logger.warning("Skipping figure record %d: %s", idx, exc)
    return figures


def load_figures(path: Union[str, Path], *, skip_invalid: bool = False) -> List[Figure]:
    path = Path(path)
    logger.info("Loading figures from %s", path)
    data: Any = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(data, dict):
        data = data.get("figures", [])
    if not isinstance(data, list):
        raise ValueError(f"{path}: expected a list of figure records")
    return figures_from_records(data, skip_invalid=skip_invalid)


__all__ = ["figure_from_record", "figures_from_records", "load_figures"]
