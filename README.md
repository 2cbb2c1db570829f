# bulktasks

Run *bulk task launches*. A bulk task launch executes one runnable object as
`num_total_tasks` tasks, numbered `0 .. num_total_tasks - 1`, and spreads
them across worker threads.

## Task systems

Each system takes `num_threads` and works as a context manager. Leaving the
`with` block calls `close()`, which stops any worker threads. After that, new
launches raise `RuntimeError`.

- `bulktasks.tasksys.SerialTaskSystem` runs every task on the calling thread,
  in order.
- `bulktasks.tasksys.SpawnTaskSystem` starts fresh threads on each `run`
  call and hands out tasks round-robin.
- `bulktasks.tasksys.SpinningTaskSystem` keeps a pool of threads that poll a
  shared queue. The caller also polls while it waits.
- `bulktasks.sleeping.SleepingTaskSystem` keeps a pool of threads that sleep
  until work arrives. It is the only system whose launches can overlap and
  depend on one another.

The parallel systems raise `ValueError` when `num_threads` is less than 1.
If a task raises an exception, the exception is raised again on the calling
thread. For the serial, spawn and spinning systems this happens in `run`. For
the sleeping system it happens in `sync`.

## Usage

A runnable subclasses `bulktasks.tasksys.Runnable` and implements
`run_task(task_id, num_total_tasks)`:

```python
from bulktasks.tasksys import Runnable
from bulktasks.sleeping import SleepingTaskSystem


class Square(Runnable):
    def __init__(self, values):
        self.values = values

    def run_task(self, task_id, num_total_tasks):
        self.values[task_id] = task_id * task_id


values = [0] * 16
with SleepingTaskSystem(4) as system:
    system.run(Square(values), 16)
print(values)
```

`run` blocks until every task in the launch has finished. On the sleeping
system, `run` waits for all outstanding launches, not only the new one.

### Launches with dependencies

`run_async_with_deps(runnable, num_total_tasks, deps)` returns a task id.
None of the new launch's tasks start until every launch listed in `deps`
has finished. `sync()` blocks until all prior launches have finished.

```python
with SleepingTaskSystem(8) as system:
    first = system.run_async_with_deps(Square(values), 16, [])
    system.run_async_with_deps(Square(values), 16, [first])
    system.sync()
```

How this behaves depends on the system:

- On `SleepingTaskSystem`, the call returns at once. It raises `ValueError`
  if a dependency is not the id of an earlier launch, or if
  `num_total_tasks` is negative.
- On the other systems, the launch runs to completion before the id is
  returned, and `sync()` returns immediately.

### Choosing a system by kind

`bulktasks.sleeping.make_task_system(kind, num_threads)` builds a system from
a `TaskSystemKind` member or its integer value:

| Kind | Value |
| --- | --- |
| `SERIAL` | 0 |
| `PARALLEL_SPAWN` | 1 |
| `PARALLEL_THREAD_POOL_SPINNING` | 2 |
| `PARALLEL_THREAD_POOL_SLEEPING` | 3 |

Each system has a `name` attribute, for example `"Parallel + Thread Pool + Sleep"`.

## Helpers

### `bulktasks.timer`

- `current_ticks()` reads the monotonic nanosecond counter.
- `current_seconds()` gives the same counter in seconds. Use it to time
  launches.
- `seconds_per_tick()`, `ticks_per_second()`, `ms_per_tick()` and
  `tick_units()` describe the tick. Its unit is `"ns"`.
- `parse_seconds_per_tick(lines)` works out a CPU cycle period from
  `/proc/cpuinfo`-style lines. It prefers a clock rate written after `@` on a
  `model name` line, and otherwise uses a `cpu MHz : <value>` line. If
  neither is present, it returns `1e-9`. The tick functions above do not
  use it.

### `bulktasks.ppm`

- `pixel_value(iterations, max_iterations)` maps an iteration count to a grey
  level from 0 to 255.
- `write_ppm_image(data, width, height, filename, max_iterations)` writes
  `width * height` iteration counts as a greyscale binary (P6) PPM image and
  prints the file name. It raises `ValueError` if there are too few values or
  if a dimension is negative.

## Tutorial

`bulktasks.tutorial` has two small demonstrations:

- `mutex_example(num_threads=8)` has threads increment a lock-guarded
  `Counter` 10,000 times each and returns the final value.
- `condition_variable_example(num_threads=3)` runs one signalling thread and
  `num_threads - 1` waiting threads, and returns how many waiters were woken.

To run both demonstrations:

```
bulktasks-tutorial
```

## What is not included

The package has no command for benchmarking or comparing the task systems.
To time launches, call `bulktasks.timer.current_seconds()` around them in
your own code.