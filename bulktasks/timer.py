"""High-resolution timing helpers for measuring task launches."""

from __future__ import annotations

import math
import re
import time
from collections.abc import Iterable

_FLOAT = r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?"
_LEADING_FLOAT = re.compile(rf"\s*({_FLOAT})")
_CPU_MHZ = re.compile(rf"cpu\s*MHz\s*:\s*({_FLOAT})")

DEFAULT_SECONDS_PER_TICK = 1e-9
_NANOSECOND = 1e-9


def current_ticks() -> int:
    """Return the current value of the monotonic high-resolution counter."""
    return time.perf_counter_ns()


def seconds_per_tick() -> float:
    """Return the length of one tick in seconds."""
    return _NANOSECOND


def current_seconds() -> float:
    """Return the current counter value in seconds from an arbitrary origin."""
    return current_ticks() * seconds_per_tick()


def ticks_per_second() -> float:
    """Return how many ticks make up one second."""
    return 1.0 / seconds_per_tick()


def ms_per_tick() -> float:
    """Return the length of one tick in milliseconds."""
    return seconds_per_tick() * 1000.0


def tick_units() -> str:
    """Return the unit that a tick is counted in."""
    return "ns"


def _leading_float(text: str) -> float | None:
    match = _LEADING_FLOAT.match(text)
    return float(match.group(1)) if match else None


def _period(scale: float, frequency: float) -> float:
    return math.inf if frequency == 0 else scale / frequency


def parse_seconds_per_tick(lines: Iterable[str]) -> float:
    """Derive the CPU cycle period from ``/proc/cpuinfo``-style lines.

    A clock rate given after ``@`` on a ``model name`` line is preferred;
    otherwise a ``cpu MHz : <value>`` line is used. When neither is found
    the period defaults to one nanosecond.
    """
    for line in lines:
        if "model name" in line:
            _, at, after = line.partition("@")
            if not at:
                continue
            if "GHz" in after:
                ghz = _leading_float(after[: after.index("GHz")])
                if ghz is not None:
                    return _period(1e-9, ghz)
            elif "MHz" in after:
                mhz = _leading_float(after[: after.index("MHz")])
                if mhz is not None:
                    return _period(1e-6, mhz)
        else:
            match = _CPU_MHZ.match(line)
            if match:
                return _period(1e-6, float(match.group(1)))
    return DEFAULT_SECONDS_PER_TICK