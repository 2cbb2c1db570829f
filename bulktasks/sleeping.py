"""A sleeping thread pool that honours dependencies between bulk launches."""

from __future__ import annotations

import threading
from collections import deque
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import IntEnum

from bulktasks.tasksys import (
    Runnable,
    SerialTaskSystem,
    SpawnTaskSystem,
    SpinningTaskSystem,
    TaskID,
    TaskSystem,
)


@dataclass
class _Launch:
    runnable: Runnable
    num_total_tasks: int
    unfinished: int
    pending_deps: int = 0
    dependents: list[TaskID] = field(default_factory=list)


class SleepingTaskSystem(TaskSystem):
    """A persistent pool whose idle workers and waiting callers sleep.

    Launches may depend on earlier launches; no task of a launch starts
    before every task of each launch it depends on has finished.
    """

    name = "Parallel + Thread Pool + Sleep"

    def __init__(self, num_threads: int) -> None:
        if num_threads < 1:
            raise ValueError(f"num_threads must be at least 1, got {num_threads}")
        super().__init__(num_threads)
        self._lock = threading.Lock()
        self._work_available = threading.Condition(self._lock)
        self._all_done = threading.Condition(self._lock)
        self._ready: deque[tuple[TaskID, int]] = deque()
        self._launches: dict[TaskID, _Launch] = {}
        self._errors: list[BaseException] = []
        self._stop = False
        self._workers = [
            threading.Thread(target=self._work, daemon=True)
            for _ in range(num_threads)
        ]
        for worker in self._workers:
            worker.start()

    def _work(self) -> None:
        while True:
            with self._lock:
                self._work_available.wait_for(lambda: self._ready or self._stop)
                if not self._ready:
                    return
                launch_id, task_id = self._ready.popleft()
                launch = self._launches[launch_id]
            error: BaseException | None = None
            try:
                launch.runnable.run_task(task_id, launch.num_total_tasks)
            except BaseException as exc:  # re-raised by sync()
                error = exc
            with self._lock:
                if error is not None:
                    self._errors.append(error)
                launch.unfinished -= 1
                if launch.unfinished == 0:
                    self._complete(launch_id)

    def _enqueue(self, launch_id: TaskID, launch: _Launch) -> None:
        self._ready.extend((launch_id, task_id) for task_id in range(launch.num_total_tasks))
        self._work_available.notify_all()

    def _complete(self, launch_id: TaskID) -> None:
        finished = [launch_id]
        while finished:
            launch = self._launches.pop(finished.pop())
            for dependent_id in launch.dependents:
                dependent = self._launches[dependent_id]
                dependent.pending_deps -= 1
                if dependent.pending_deps == 0:
                    if dependent.num_total_tasks == 0:
                        finished.append(dependent_id)
                    else:
                        self._enqueue(dependent_id, dependent)
        if not self._launches:
            self._all_done.notify_all()

    def run(self, runnable: Runnable, num_total_tasks: int) -> None:
        """Launch the tasks and wait for all outstanding work to finish."""
        self.run_async_with_deps(runnable, num_total_tasks, [])
        self.sync()

    def run_async_with_deps(
        self, runnable: Runnable, num_total_tasks: int, deps: Sequence[TaskID]
    ) -> TaskID:
        """Schedule a launch after ``deps`` complete and return its identifier."""
        if num_total_tasks < 0:
            raise ValueError(f"num_total_tasks must not be negative, got {num_total_tasks}")
        with self._lock:
            self._ensure_open()
            launch_id = self._next_task_id
            unknown = [dep for dep in deps if not 0 <= dep < launch_id]
            if unknown:
                raise ValueError(f"unknown task ids in deps: {unknown}")
            self._next_task_id += 1
            launch = _Launch(runnable, num_total_tasks, unfinished=num_total_tasks)
            self._launches[launch_id] = launch
            for dep in dict.fromkeys(deps):
                prior = self._launches.get(dep)
                if prior is not None:
                    prior.dependents.append(launch_id)
                    launch.pending_deps += 1
            if launch.pending_deps == 0:
                if num_total_tasks == 0:
                    self._complete(launch_id)
                else:
                    self._enqueue(launch_id, launch)
        return launch_id

    def sync(self) -> None:
        """Block until every prior launch is done; re-raise a task's error."""
        with self._lock:
            self._all_done.wait_for(lambda: not self._launches)
            errors = list(self._errors)
            self._errors.clear()
        if errors:
            raise errors[0]

    def close(self) -> None:
        """Let outstanding launches finish, then stop the workers."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            self._all_done.wait_for(lambda: not self._launches)
            self._stop = True
            self._work_available.notify_all()
        for worker in self._workers:
            worker.join()


class TaskSystemKind(IntEnum):
    """The available task system implementations."""

    SERIAL = 0
    PARALLEL_SPAWN = 1
    PARALLEL_THREAD_POOL_SPINNING = 2
    PARALLEL_THREAD_POOL_SLEEPING = 3


_FACTORIES: dict[TaskSystemKind, type[TaskSystem]] = {
    TaskSystemKind.SERIAL: SerialTaskSystem,
    TaskSystemKind.PARALLEL_SPAWN: SpawnTaskSystem,
    TaskSystemKind.PARALLEL_THREAD_POOL_SPINNING: SpinningTaskSystem,
    TaskSystemKind.PARALLEL_THREAD_POOL_SLEEPING: SleepingTaskSystem,
}


def make_task_system(kind: TaskSystemKind | int, num_threads: int) -> TaskSystem:
    """Create the task system of the given kind."""
    return _FACTORIES[TaskSystemKind(kind)](num_threads)