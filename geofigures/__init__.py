from .primitives import Point, Vector, distance
from .figures import (
    FIGURE_KINDS,
    Figure,
    InvalidGeometry,
    line,
    triangle,
    quadrilateral,
    rhombus,
    rectangle,
    square,
    unknown_figure,
)
from .printer import description, format_point, print_figures
from .config import RegistryOptions, get_registry_options, set_registry_options
from .dispatch import DeliveryQueue
from .registry import (
    FigureRegistry,
    Mathematics,
    IndexOutOfRange,
    RegistryMetrics,
    RepresentationObserver,
    RepresentationStats,
    compute_representations,
    max_by,
    min_by,
    total_area,
)
from .loader import figure_from_record, figures_from_records, load_figures

__all__ = [
    'Point',
    'Vector',
    'distance',
    'FIGURE_KINDS',
    'Figure',
    'InvalidGeometry',
    'line',
    'triangle',
    'quadrilateral',
    'rhombus',
    'rectangle',
    'square',
    'unknown_figure',
    'description',
    'format_point',
    'print_figures',
    'RegistryOptions',
    'get_registry_options',
    'set_registry_options',
    'DeliveryQueue',
    'FigureRegistry',
    'Mathematics',
    'IndexOutOfRange',
    'RegistryMetrics',
    'RepresentationObserver',
    'RepresentationStats',
    'compute_representations',
    'max_by',
    'min_by',
    'total_area',
    'figure_from_record',
    'figures_from_records',
    'load_figures',
]
