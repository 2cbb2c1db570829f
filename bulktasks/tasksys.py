"""Task systems that execute bulk launches of identical tasks."""

from __future__ import annotations

import threading
import time
from abc import ABC, abstractmethod
from collections import deque
from collections.abc import Sequence

TaskID = int


class Runnable(ABC):
    """Work that a task system runs once per task of a bulk launch."""

    @abstractmethod
    def run_task(self, task_id: int, num_total_tasks: int) -> None:
        """Execute task ``task_id`` of a launch of ``num_total_tasks`` tasks."""


def _require_threads(num_threads: int) -> int:
    if num_threads < 1:
        raise ValueError(f"num_threads must be at least 1, got {num_threads}")
    return num_threads


class TaskSystem(ABC):
    """Executes bulk task launches using up to ``num_threads`` threads."""

    name: str = ""

    def __init__(self, num_threads: int) -> None:
        self.num_threads = num_threads
        self._next_task_id = 0
        self._closed = False

    def _ensure_open(self) -> None:
        if self._closed:
            raise RuntimeError(f"{self.name} task system is closed")

    @abstractmethod
    def run(self, runnable: Runnable, num_total_tasks: int) -> None:
        """Run every task of the launch and return when all are done."""

    def run_async_with_deps(
        self, runnable: Runnable, num_total_tasks: int, deps: Sequence[TaskID]
    ) -> TaskID:
        """Run a launch and return its identifier.

        This system completes each launch before returning, so every launch
        named in ``deps`` has already finished.
        """
        task_id = self._next_task_id
        self._next_task_id += 1
        self.run(runnable, num_total_tasks)
        return task_id

    def sync(self) -> None:
        """Wait for all launched work; launches here are already complete."""

    def close(self) -> None:
        """Release the system's resources."""
        self._closed = True

    def __enter__(self) -> TaskSystem:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class SerialTaskSystem(TaskSystem):
    """Runs every task on the calling thread, in order."""

    name = "Serial"

    def run(self, runnable: Runnable, num_total_tasks: int) -> None:
        self._ensure_open()
        for task_id in range(num_total_tasks):
            runnable.run_task(task_id, num_total_tasks)


class SpawnTaskSystem(TaskSystem):
    """Starts fresh threads for every launch, assigning tasks round-robin."""

    name = "Parallel + Always Spawn"

    def __init__(self, num_threads: int) -> None:
        super().__init__(_require_threads(num_threads))

    def run(self, runnable: Runnable, num_total_tasks: int) -> None:
        self._ensure_open()
        stride = min(self.num_threads, num_total_tasks)
        errors: list[BaseException] = []

        def work(first: int) -> None:
            try:
                for task_id in range(first, num_total_tasks, stride):
                    runnable.run_task(task_id, num_total_tasks)
            except BaseException as exc:  # re-raised on the calling thread
                errors.append(exc)

        threads = [threading.Thread(target=work, args=(i,)) for i in range(stride)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        if errors:
            raise errors[0]


class SpinningTaskSystem(TaskSystem):
    """A persistent pool whose idle workers and waiting caller spin."""

    name = "Parallel + Thread Pool + Spin"

    def __init__(self, num_threads: int) -> None:
        super().__init__(_require_threads(num_threads))
        self._lock = threading.Lock()
        self._queue: deque[tuple[Runnable, int, int]] = deque()
        self._remaining = 0
        self._errors: list[BaseException] = []
        self._stop = False
        self._workers = [
            threading.Thread(target=self._spin, daemon=True)
            for _ in range(num_threads)
        ]
        for worker in self._workers:
            worker.start()

    def _spin(self) -> None:
        while not self._stop:
            with self._lock:
                item = self._queue.popleft() if self._queue else None
            if item is None:
                time.sleep(0)
                continue
            runnable, task_id, total = item
            try:
                runnable.run_task(task_id, total)
            except BaseException as exc:  # re-raised by run()
                with self._lock:
                    self._errors.append(exc)
            finally:
                with self._lock:
                    self._remaining -= 1

    def run(self, runnable: Runnable, num_total_tasks: int) -> None:
        self._ensure_open()
        with self._lock:
            self._errors.clear()
            self._remaining = num_total_tasks
            self._queue.extend(
                (runnable, task_id, num_total_tasks)
                for task_id in range(num_total_tasks)
            )
        while self._remaining > 0:
            time.sleep(0)
        with self._lock:
            errors = list(self._errors)
            self._errors.clear()
        if errors:
            raise errors[0]

    def close(self) -> None:
        if self._closed:
            return
        self._stop = True
        for worker in self._workers:
            worker.join()
        super().close()