"""Figure registry: indexed storage, extremal queries and description statistics.

:meth:`FigureRegistry.find_figure_representations` runs in two phases. The
descriptions and their four reductions are computed on a worker thread from a
snapshot of the figure list; the result is then posted to the registry's
:class:`~geofigures.dispatch.DeliveryQueue`, whose single consumer invokes the
result handler and notifies the observer.
"""

from __future__ import annotations

import logging
import weakref
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, Iterable, Iterator, List, NamedTuple, Optional, Protocol, Sequence, Tuple, TypeVar

from .config import RegistryOptions, get_registry_options
from .dispatch import DeliveryQueue
from .figures import Figure
from .logging_utils import apply_debug_logging
from .printer import description

logger = logging.getLogger(__name__)

T = TypeVar("T")


class IndexOutOfRange(IndexError):
    """Raised when a registry position is outside ``[0, len)``."""

    def __init__(self, index: int, size: int) -> None:
        super().__init__(f"index {index} out of range for registry of {size} figure(s)")
        self.index = index
        self.size = size


class RepresentationStats(NamedTuple):
    longest: str
    shortest: str
    largest: str
    smallest: str


EMPTY_STATS = RepresentationStats("", "", "", "")

ResultHandler = Callable[[RepresentationStats], None]


class RepresentationObserver(Protocol):
    def on_representation_found(self, longest: str) -> None:
        ...


@dataclass
class RegistryMetrics:
    """Lifetime counters; ``live`` always equals the registry length."""

    added: int = 0
    replaced: int = 0
    removed: int = 0

    @property
    def live(self) -> int:
        return self.added - self.removed


def max_by(items: Iterable[T], key: Callable[[T], object]) -> Optional[T]:
    """Return the first item with the greatest key, or ``None`` when empty."""

    best: Optional[T] = None
    best_key = None
    for item in items:
        value = key(item)
        if best is None or value > best_key:  # type: ignore[operator]
            best, best_key = item, value
    return best


def min_by(items: Iterable[T], key: Callable[[T], object]) -> Optional[T]:
    """Return the first item with the smallest key, or ``None`` when empty."""

    best: Optional[T] = None
    best_key = None
    for item in items:
        value = key(item)
        if best is None or value < best_key:  # type: ignore[operator]
            best, best_key = item, value
    return best


def total_area(figures: Iterable[Figure]) -> float:
    return sum((figure.area() for figure in figures), 0.0)


def _identity(value: str) -> str:
    return value


def compute_representations(descriptions: Sequence[str]) -> RepresentationStats:
    if not descriptions:
        return EMPTY_STATS
    return RepresentationStats(
        longest=max_by(descriptions, len) or "",
        shortest=min_by(descriptions, len) or "",
        largest=max_by(descriptions, _identity) or "",
        smallest=min_by(descriptions, _identity) or "",
    )


class FigureRegistry:
    """Ordered, indexable collection of figures with aggregate queries.

    The registry is single-writer: mutate it from one thread only, and not
    while a representation request is being computed from it.
    """

    def __init__(
        self,
        figures: Iterable[Figure] = (),
        *,
        result_handler: Optional[ResultHandler] = None,
        observer: Optional[RepresentationObserver] = None,
        options: Optional[RegistryOptions] = None,
        delivery: Optional[DeliveryQueue] = None,
    ) -> None:
        self.options = options or get_registry_options()
        self.result_handler = result_handler
        self.delivery = delivery or DeliveryQueue()
        self.metrics = RegistryMetrics()
        self._figures: List[Figure] = []
        self._observer_ref: Optional["weakref.ReferenceType[RepresentationObserver]"] = None
        self._executor: Optional[ThreadPoolExecutor] = None
        if observer is not None:
            self.attach_observer(observer)
        for figure in figures:
            self.add(figure)
        logger.info("Figure registry created with %d figure(s)", len(self._figures))

    # collection protocol

    def __len__(self) -> int:
        return len(self._figures)

    def __iter__(self) -> Iterator[Figure]:
        return iter(list(self._figures))

    def __getitem__(self, index: int) -> Figure:
        return self._figures[self._check_index(index)]

    def __setitem__(self, index: int, figure: Figure) -> None:
        position = self._check_index(index)
        self._figures[position] = figure
        self.metrics.replaced += 1
        logger.debug("Replaced figure at %d with %s", position, figure.kind)

    def __enter__(self) -> "FigureRegistry":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _check_index(self, index: int) -> int:
        if not isinstance(index, int) or isinstance(index, bool):
            raise TypeError(f"registry indices must be int, got {type(index).__name__}")
        if not 0 <= index < len(self._figures):
            raise IndexOutOfRange(index, len(self._figures))
        return index

    @property
    def figures(self) -> Tuple[Figure, ...]:
        return tuple(self._figures)

    def add(self, figure: Figure) -> None:
        if not isinstance(figure, Figure):
            raise TypeError(f"expected Figure, got {type(figure).__name__}")
        self._figures.append(figure)
        self.metrics.added += 1
        logger.debug("Added %s (%d in registry)", figure.kind, len(self._figures))

    def remove(self, index: int) -> Figure:
        figure = self._figures.pop(self._check_index(index))
        self.metrics.removed += 1
        return figure

    # extremal queries

    def max_area_figure(self) -> Optional[Figure]:
        return max_by(self._figures, Figure.area)

    def min_area_figure(self) -> Optional[Figure]:
        return min_by(self._figures, Figure.area)

    def max_perimeter_figure(self) -> Optional[Figure]:
        return max_by(self._figures, Figure.perimeter)

    def min_perimeter_figure(self) -> Optional[Figure]:
        return min_by(self._figures, Figure.perimeter)

    total_area = staticmethod(total_area)

    # observer

    def attach_observer(self, observer: RepresentationObserver) -> None:
        self._observer_ref = weakref.ref(observer)

    def detach_observer(self) -> None:
        self._observer_ref = None

    @property
    def observer(self) -> Optional[RepresentationObserver]:
        if self._observer_ref is None:
            return None
        return self._observer_ref()

    # asynchronous statistics

    def describe(self) -> List[str]:
        return [description(figure, self.options.fallback_name) for figure in self._figures]

    def _ensure_executor(self) -> ThreadPoolExecutor:
        if self._executor is None:
            self._executor = ThreadPoolExecutor(
                max_workers=self.options.max_workers,
                thread_name_prefix=self.options.thread_name_prefix,
            )
        return self._executor

    def find_figure_representations(
        self, result_handler: Optional[ResultHandler] = None
    ) -> "Future[RepresentationStats]":
        """Compute description statistics off-thread and deliver them.

        The returned future completes once the handler and observer have run
        on the delivery queue. Use ``registry.delivery.run_until_complete``
        to pump the queue from the owning thread.
        """

        handler = result_handler or self.result_handler
        snapshot = tuple(self._figures)
        fallback = self.options.fallback_name
        delivered: "Future[RepresentationStats]" = Future()
        delivered.set_running_or_notify_cancel()

        def compute() -> RepresentationStats:
            texts = [description(figure, fallback) for figure in snapshot]
            return compute_representations(texts)

        def on_computed(worker: "Future[RepresentationStats]") -> None:
            error = worker.exception()
            if error is not None:
                logger.error("Representation computation failed: %s", error, exc_info=error)
                delivered.set_exception(error)
                return
            stats = worker.result()
            self.delivery.post(lambda: self._deliver(stats, handler, delivered))

        logger.info("Computing representations for %d figure(s)", len(snapshot))
        self._ensure_executor().submit(compute).add_done_callback(on_computed)
        return delivered

    def _deliver(
        self,
        stats: RepresentationStats,
        handler: Optional[ResultHandler],
        delivered: "Future[RepresentationStats]",
    ) -> None:
        try:
            if handler is not None:
                handler(stats)
            observer = self.observer
            if observer is not None:
                observer.on_representation_found(stats.longest)
            elif self._observer_ref is not None:
                logger.debug("Representation observer is gone; skipping notification")
        except Exception as exc:
            delivered.set_exception(exc)
            raise
        delivered.set_result(stats)
        logger.info("Delivered representations (longest=%d chars)", len(stats.longest))

    def close(self, wait: bool = True) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=wait)
            self._executor = None


Mathematics = FigureRegistry


__all__ = [
    "FigureRegistry",
    "Mathematics",
    "IndexOutOfRange",
    "RepresentationStats",
    "RepresentationObserver",
    "RegistryMetrics",
    "ResultHandler",
    "EMPTY_STATS",
    "max_by",
    "min_by",
    "total_area",
    "compute_representations",
]


apply_debug_logging(
    globals(),
    logger=logger,
    skip={
        "FigureRegistry",
        "Mathematics",
        "RegistryMetrics",
        "IndexOutOfRange",
        "RepresentationStats",
        "RepresentationObserver",
    },
)
