import pytest

from geofigures import (
    Figure,
    FigureRegistry,
    IndexOutOfRange,
    InvalidGeometry,
    Mathematics,
    Point,
    line,
    quadrilateral,
    total_area,
    triangle,
    unknown_figure,
)
from geofigures.registry import max_by, min_by

P0, P1, P2, P3 = Point(0, 0), Point(3, 0), Point(3, 4), Point(0, 4)


@pytest.fixture
def scenario():
    fig_line = line(P0, P1, name='Line')
    fig_triangle = triangle(P0, P1, P2, name='Triangle')
    fig_quad = quadrilateral(P0, P1, P2, P3, name='Quadrilateral')
    registry = FigureRegistry([fig_line, fig_triangle, fig_quad])
    yield registry, fig_line, fig_triangle, fig_quad
    registry.close()


def test_concrete_scenario(scenario):
    registry, fig_line, fig_triangle, fig_quad = scenario

    assert total_area(registry) == pytest.approx(18.0)
    assert registry.max_area_figure() is fig_quad
    assert registry.min_area_figure() is fig_line
    assert registry.max_perimeter_figure() is fig_quad
    assert registry.min_perimeter_figure() is fig_line


def test_total_area_of_empty_sequence_is_zero():
    assert total_area([]) == 0.0
    assert FigureRegistry.total_area([]) == 0.0


def test_total_area_is_sum_of_areas():
    figures = [triangle(P0, P1, P2), quadrilateral(P0, P1, P2, P3), unknown_figure()]
    assert total_area(figures) == pytest.approx(sum(f.area() for f in figures))
    assert total_area(iter(figures)) == pytest.approx(18.0)


def test_extremal_queries_on_empty_registry_return_none():
    registry = FigureRegistry()
    assert registry.max_area_figure() is None
    assert registry.min_area_figure() is None
    assert registry.max_perimeter_figure() is None
    assert registry.min_perimeter_figure() is None


def test_single_figure_is_its_own_extremum():
    fig = triangle(P0, P1, P2)
    registry = FigureRegistry([fig])
    assert registry.max_area_figure() is fig
    assert registry.min_area_figure() is fig
    assert registry.max_perimeter_figure() is fig
    assert registry.min_perimeter_figure() is fig


def test_ties_return_first_encountered():
    first = quadrilateral(P0, P1, P2, P3, name='first')
    second = quadrilateral(P1, P2, P3, P0, name='second')
    zero_a = line(P0, P1, name='a')
    zero_b = unknown_figure(name='b')
    registry = FigureRegistry([zero_a, first, zero_b, second])

    assert registry.max_area_figure() is first
    assert registry.min_area_figure() is zero_a
    assert registry.max_perimeter_figure() is first


def test_min_perimeter_tie_returns_first_encountered():
    quad = quadrilateral(P0, P1, P2, P3, name='quad')
    first = line(P0, P1, name='a')
    second = line(P3, P2, name='b')
    registry = FigureRegistry([quad, first, second])

    assert first.perimeter() == second.perimeter()
    assert registry.min_perimeter_figure() is first


def test_collinear_triangle_does_not_poison_extremes():
    k = 91
    flat = triangle(Point(0, 0), Point(0.1 * k, 0.3 * k), Point(0.7 * k, 2.1 * k), name='flat')
    quad = quadrilateral(P0, P1, P2, P3, name='quad')
    registry = FigureRegistry([flat, quad])

    assert registry.max_area_figure() is quad
    assert registry.min_area_figure() is flat
    assert total_area(registry) == pytest.approx(12.0, abs=1e-3)


def test_max_by_and_min_by_on_plain_sequences():
    assert max_by([], len) is None
    assert min_by([], len) is None
    assert max_by(['bb', 'aa', 'c'], len) == 'bb'
    assert min_by(['bb', 'c', 'd'], len) == 'c'


def test_indexed_get_and_set(scenario):
    registry, fig_line, _, fig_quad = scenario
    assert registry[0] is fig_line

    replacement = triangle(P1, P2, P3, name='replacement')
    registry[2] = replacement
    assert registry[2] is replacement
    assert fig_quad not in registry.figures
    assert registry.metrics.replaced == 1


@pytest.mark.parametrize('index', [3, 10, -1])
def test_get_out_of_range(scenario, index):
    registry = scenario[0]
    with pytest.raises(IndexOutOfRange) as exc:
        registry[index]
    assert exc.value.index == index
    assert exc.value.size == 3


@pytest.mark.parametrize('index', [3, -1])
def test_set_out_of_range_does_not_mutate(scenario, index):
    registry = scenario[0]
    before = registry.figures
    with pytest.raises(IndexOutOfRange):
        registry[index] = line(P2, P3)
    assert registry.figures == before
    assert registry.metrics.replaced == 0


def test_index_out_of_range_is_index_error():
    with pytest.raises(IndexError):
        FigureRegistry()[0]


def test_non_integer_index_rejected(scenario):
    with pytest.raises(TypeError):
        scenario[0]['0']


def test_failed_construction_leaves_registry_unchanged(scenario):
    registry = scenario[0]
    with pytest.raises(InvalidGeometry) as exc:
        registry.add(Figure.create('triangle', [P0, P1]))
    assert (exc.value.expected, exc.value.got) == (3, 2)
    assert len(registry) == 3


def test_add_rejects_non_figures():
    with pytest.raises(TypeError):
        FigureRegistry().add('triangle')  # type: ignore[arg-type]


def test_remove_and_metrics(scenario):
    registry, fig_line, fig_triangle, _ = scenario
    assert registry.remove(0) is fig_line
    assert registry[0] is fig_triangle
    assert registry.metrics.added == 3
    assert registry.metrics.removed == 1
    assert registry.metrics.live == len(registry) == 2
    with pytest.raises(IndexOutOfRange):
        registry.remove(5)


def test_iteration_order_matches_insertion(scenario):
    registry, fig_line, fig_triangle, fig_quad = scenario
    assert list(registry) == [fig_line, fig_triangle, fig_quad]


def test_mathematics_alias():
    assert Mathematics is FigureRegistry
