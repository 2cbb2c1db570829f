"""Small demonstrations of mutexes and condition variables."""

from __future__ import annotations

import argparse
import threading
import time
from collections.abc import Sequence
from dataclasses import dataclass, field

_RULE = "=" * 62


@dataclass
class Counter:
    """An integer counter guarded by a lock."""

    value: int = 0
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def increment(self) -> None:
        """Add one to the counter under the lock."""
        with self._lock:
            self.value += 1


@dataclass
class ThreadState:
    """A counter of woken threads and the condition they wait on."""

    num_waiting_threads: int
    counter: int = 0
    condition: threading.Condition = field(
        default_factory=threading.Condition, repr=False, compare=False
    )


def increment_counter(counter: Counter, times: int = 10000) -> None:
    """Increment ``counter`` ``times`` times."""
    for _ in range(times):
        counter.increment()


def mutex_example(num_threads: int = 8) -> int:
    """Have ``num_threads`` threads bump a shared counter; return its value."""
    if num_threads < 0:
        raise ValueError("num_threads must not be negative")
    print(_RULE)
    print(f"Starting {num_threads} threads to increment counter...")
    counter = Counter()
    threads = [threading.Thread(target=increment_counter, args=(counter,)) for _ in range(num_threads)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    print(f"Final counter value: {counter.value}...")
    print(_RULE)
    return counter.value


def signal_waiters(state: ThreadState) -> None:
    """Keep notifying until every waiting thread has reported in."""
    while True:
        with state.condition:
            if state.counter >= state.num_waiting_threads:
                return
            state.condition.notify_all()
        time.sleep(0)


def wait_for_signal(state: ThreadState) -> None:
    """Wait for one notification, then report in by bumping the counter."""
    with state.condition:
        state.condition.wait()
        state.counter += 1
        print("Lock re-acquired after wait()...")


def condition_variable_example(num_threads: int = 3) -> int:
    """Run one signalling and ``num_threads - 1`` waiting threads.

    Returns how many waiting threads were woken.
    """
    if num_threads < 1:
        raise ValueError("num_threads must be at least 1")
    print(_RULE)
    print(f"Starting {num_threads} threads for signal-and-waiting...")
    state = ThreadState(num_threads - 1)
    threads = [threading.Thread(target=signal_waiters, args=(state,))]
    threads += [threading.Thread(target=wait_for_signal, args=(state,)) for _ in range(num_threads - 1)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    print(_RULE)
    return state.counter


def main(argv: Sequence[str] | None = None) -> int:
    """Run both demonstrations."""
    parser = argparse.ArgumentParser(description="Mutex and condition variable demonstrations.")
    parser.parse_args(argv)
    mutex_example()
    condition_variable_example()
    return 0