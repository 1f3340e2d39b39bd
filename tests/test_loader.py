import json

import pytest

from geofigures import InvalidGeometry, Point
from geofigures.loader import figure_from_record, figures_from_records, load_figures


def test_figure_from_record_accepts_pairs_and_mappings():
    fig = figure_from_record(
        {'kind': 'Triangle', 'name': 'T', 'points': [[0, 0], {'x': 3, 'y': 0}, (3, 4)]}
    )
    assert fig.kind == 'triangle'
    assert fig.name == 'T'
    assert fig.points == (Point(0, 0), Point(3, 0), Point(3, 4))


def test_figure_from_record_reports_bad_arity():
    with pytest.raises(InvalidGeometry):
        figure_from_record({'kind': 'square', 'points': [[0, 0]]})


@pytest.mark.parametrize(
    'record',
    [
        {'points': [[0, 0], [1, 1]]},
        {'kind': 'line', 'points': 'nope'},
        {'kind': 'line', 'points': [[0, 0, 0], [1, 1]]},
    ],
)
def test_figure_from_record_rejects_malformed(record):
    with pytest.raises(ValueError):
        figure_from_record(record)


def test_figures_from_records_can_skip_invalid(caplog):
    records = [
        {'kind': 'line', 'points': [[0, 0], [1, 0]]},
        {'kind': 'triangle', 'points': [[0, 0], [1, 0]]},
        {'kind': 'unknown'},
    ]
    with caplog.at_level('WARNING'):
        figures = figures_from_records(records, skip_invalid=True)

    assert [f.kind for f in figures] == ['line', 'unknown']
    assert 'Skipping figure record 1' in caplog.text

    with pytest.raises(InvalidGeometry):
        figures_from_records(records)


def test_load_figures_from_json(tmp_path):
    path = tmp_path / 'figures.json'
    path.write_text(
        json.dumps({'figures': [{'kind': 'line', 'points': [[0, 0], [3, 4]]}]}),
        encoding='utf-8',
    )
    figures = load_figures(path)
    assert len(figures) == 1
    assert figures[0].perimeter() == pytest.approx(5.0)


def test_load_figures_rejects_non_list(tmp_path):
    path = tmp_path / 'figures.json'
    path.write_text('"triangle"', encoding='utf-8')
    with pytest.raises(ValueError):
        load_figures(path)
