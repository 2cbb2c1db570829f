"""Writing iteration-count images as binary PPM files."""

from __future__ import annotations

import struct
from collections.abc import Iterable
from itertools import islice
from os import PathLike


def _f32(value: float) -> float:
    return struct.unpack("f", struct.pack("f", value))[0]


def pixel_value(iterations: int, max_iterations: int) -> int:
    """Map an iteration count to an 8-bit grey level.

    The count is clamped to ``max_iterations``, scaled by 1/256 and raised
    to the power 0.5 to brighten low counts.
    """
    clamped = min(_f32(float(max_iterations)), _f32(float(iterations)))
    ratio = _f32(clamped / 256.0)
    if ratio < 0:
        raise ValueError(f"iteration count must not be negative: {iterations}")
    mapped = _f32(ratio**0.5)
    return min(int(_f32(255.0 * mapped)), 255)


def write_ppm_image(
    data: Iterable[int],
    width: int,
    height: int,
    filename: str | PathLike[str],
    max_iterations: int,
) -> None:
    """Write ``width * height`` iteration counts as a greyscale P6 image."""
    if width < 0 or height < 0:
        raise ValueError("image dimensions must not be negative")
    count = width * height
    pixels = bytearray()
    taken = 0
    for value in islice(data, count):
        grey = pixel_value(value, max_iterations)
        pixels += bytes((grey, grey, grey))
        taken += 1
    if taken < count:
        raise ValueError(f"expected {count} values, got {taken}")

    header = f"P6\n{width} {height}\n255\n".encode("ascii")
    with open(filename, "wb") as fp:
        fp.write(header)
        fp.write(pixels)
    print(f"Wrote image file {filename}")