"""Single-consumer delivery context.

Results computed on worker threads are handed to a :class:`DeliveryQueue`
and executed by exactly one consumer, either the thread that pumps the queue
(:meth:`DeliveryQueue.run_pending`, :meth:`DeliveryQueue.run_until_complete`)
or a dedicated delivery thread started with :meth:`DeliveryQueue.start`.
Callables therefore never run concurrently with each other.
"""

from __future__ import annotations

import logging
import queue
import threading
import time
from concurrent.futures import Future, wait
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)

Task = Callable[[], Any]


class DeliveryQueue:
    def __init__(self, name: str = "delivery") -> None:
        self.name = name
        self._tasks: "queue.Queue[Task]" = queue.Queue()
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._consumer_lock = threading.Lock()
        self._consumer_ident: Optional[int] = None

    def post(self, task: Task) -> None:
        """Schedule *task* on the delivery context. Safe from any thread."""

        self._tasks.put(task)

    @property
    def pending(self) -> int:
        return self._tasks.qsize()

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def _check_reentry(self) -> None:
        if self._consumer_ident == threading.get_ident():
            raise RuntimeError(f"re-entrant delivery on {self.name}")

    def _execute(self, task: Task) -> None:
        try:
            task()
        except Exception:
            logger.exception("Delivery task %r failed on %s", task, self.name)

    def run_pending(self, timeout: Optional[float] = None) -> int:
        """Run queued tasks on the calling thread and return how many ran.

        With a *timeout*, wait up to that long for the first task to arrive.
        """

        self._check_reentry()
        if self.running:
            raise RuntimeError(f"{self.name} is consumed by its own thread")
        executed = 0
        with self._consumer_lock:
            self._consumer_ident = threading.get_ident()
            try:
                while True:
                    try:
                        if executed == 0 and timeout is not None:
                            task = self._tasks.get(timeout=timeout)
                        else:
                            task = self._tasks.get_nowait()
                    except queue.Empty:
                        break
                    self._execute(task)
                    executed += 1
            finally:
                self._consumer_ident = None
        return executed

    def run_until_complete(self, future: Future, timeout: Optional[float] = None) -> Any:
        """Pump the queue until *future* is done, then return its result.

        Raises ``RuntimeError`` when called from a task the queue is running,
        since that task would be waiting on its own consumer.
        """

        self._check_reentry()
        deadline = None if timeout is None else time.monotonic() + timeout
        while not future.done():
            if deadline is not None and time.monotonic() >= deadline:
                raise TimeoutError(f"{self.name}: result not delivered within {timeout}s")
            if self.running:
                wait([future], timeout=0.05)
            else:
                self.run_pending(timeout=0.05)
        return future.result()

    def start(self) -> None:
        """Consume the queue on a dedicated thread."""

        if self.running:
            return
        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._loop,
            name=f"{self.name}-thread",
            daemon=True,
        )
        self._thread.start()
        logger.info("Delivery thread %s started", self.name)

    def stop(self, timeout: float = 5.0) -> None:
        if self._thread is None:
            return
        self._stop_event.set()
        self._thread.join(timeout=timeout)
        self._thread = None
        logger.info("Delivery thread %s stopped", self.name)

    def _loop(self) -> None:
        with self._consumer_lock:
            self._consumer_ident = threading.get_ident()
            try:
                while not self._stop_event.is_set():
                    try:
                        task = self._tasks.get(timeout=0.1)
                    except queue.Empty:
                        continue
                    self._execute(task)
                # drain what was already posted so no delivery is lost on stop
                while True:
                    try:
                        task = self._tasks.get_nowait()
                    except queue.Empty:
                        break
                    self._execute(task)
            finally:
                self._consumer_ident = None


__all__ = ["DeliveryQueue", "Task"]
