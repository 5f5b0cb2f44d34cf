"""Tone mapping and plain (P3) pixel map export.

Accumulated pixel sums are averaged over the sample count, clipped to
[0, 0.999], scaled by 255 and truncated, so every channel lands in
[0, 254]. The clip ceiling keeps a full-intensity value from truncating
to 255. Non-finite sums never raise: NaN becomes 0, +inf clips to 254
and -inf clips to 0.

Two forms of the mapping are provided. ``clip`` and ``color_to_pixel`` are
the per-pixel reference form, one channel at a time. ``tone_map`` applies the
same arithmetic to a whole buffer with numpy and is what the writer uses; it
must agree with ``color_to_pixel`` channel for channel.

Stream layout:
    P3
    <width> <height>
    255
    <blank line>
    R G B          one line per pixel, top row first, left to right

Example:
    >>> from spheretrace.core.vec3 import Vec3
    >>> color_to_pixel(Vec3(2.0, 2.0, 2.0), samples_per_pixel=2)
    (254, 254, 254)
"""

from __future__ import annotations

import io
import math
from typing import TextIO

import numpy as np
import numpy.typing as npt

from spheretrace.core.vec3 import Vec3

# Channel ceiling before scaling to 8-bit
CLIP_MAX = 0.999

MAX_COLOR_VALUE = 255


def clip(value: float, low: float, high: float) -> float:
    """Clamp a value to [low, high]. NaN passes through unchanged."""
    if value > high:
        return high
    if value < low:
        return low
    return value


def _quantize(value: float) -> int:
    scaled = clip(value, 0.0, CLIP_MAX) * MAX_COLOR_VALUE
    if math.isnan(scaled):
        return 0
    return int(scaled)


def color_to_pixel(color: Vec3, samples_per_pixel: int) -> tuple[int, int, int]:
    """Convert one accumulated color sum to an 8-bit RGB triple.

    Args:
        color: The raw (unaveraged) sum of samples_per_pixel samples.
        samples_per_pixel: Number of samples in the sum.

    Returns:
        Tuple of (R, G, B) integers in [0, 254].
    """
    scale = 1.0 / samples_per_pixel
    return (
        _quantize(color.x * scale),
        _quantize(color.y * scale),
        _quantize(color.z * scale),
    )


def tone_map(
    image: npt.NDArray[np.float64],
    samples_per_pixel: int,
) -> npt.NDArray[np.int64]:
    """Convert a buffer of accumulated sums to 8-bit values.

    Applies the same per-channel arithmetic as ``color_to_pixel`` to the
    whole buffer at once.

    Args:
        image: Raw sums of shape (N, 3) in render order.
        samples_per_pixel: Number of samples in each sum.

    Returns:
        Integer array of shape (N, 3) with values in [0, 254].
    """
    scale = 1.0 / samples_per_pixel
    with np.errstate(invalid="ignore", over="ignore"):
        averaged = np.asarray(image, dtype=np.float64) * scale
        clipped = np.clip(averaged, 0.0, CLIP_MAX) * MAX_COLOR_VALUE
    clipped = np.nan_to_num(clipped, nan=0.0)
    return np.trunc(clipped).astype(np.int64)


def ppm_header(width: int, height: int) -> str:
    """Build the P3 header, including the trailing blank line."""
    return f"P3\n{width} {height}\n{MAX_COLOR_VALUE}\n\n"


def write_ppm(
    stream: TextIO,
    image: npt.NDArray[np.float64],
    width: int,
    height: int,
    samples_per_pixel: int,
) -> None:
    """Write accumulated sums as a P3 pixel map.

    Args:
        stream: Text stream to write to (e.g. sys.stdout or an open file).
        image: Raw sums of shape (width * height, 3) in render order.
        width: Image width in pixels.
        height: Image height in pixels.
        samples_per_pixel: Number of samples in each sum.

    Raises:
        ValueError: If the buffer does not hold width * height pixels.
    """
    if len(image) != width * height:
        raise ValueError(
            f"Image buffer holds {len(image)} pixels, expected {width}x{height}"
        )

    stream.write(ppm_header(width, height))
    for r, g, b in tone_map(image, samples_per_pixel):
        stream.write(f"{r} {g} {b}\n")


def format_ppm(
    image: npt.NDArray[np.float64],
    width: int,
    height: int,
    samples_per_pixel: int,
) -> str:
    """Render accumulated sums to a P3 string. See ``write_ppm``."""
    buffer = io.StringIO()
    write_ppm(buffer, image, width, height, samples_per_pixel)
    return buffer.getvalue()
