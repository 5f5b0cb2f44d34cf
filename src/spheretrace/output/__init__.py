"""Output module for tone mapping and image export.

Components:
    ppm: Averaging, clipping and 8-bit quantization, plus the P3 writer

Example:
    >>> import sys
    >>> from spheretrace.output import write_ppm
    >>> write_ppm(sys.stdout, image, width, height, samples_per_pixel)
"""

from .ppm import (
    CLIP_MAX,
    clip,
    color_to_pixel,
    format_ppm,
    ppm_header,
    tone_map,
    write_ppm,
)

__all__ = [
    "CLIP_MAX",
    "clip",
    "color_to_pixel",
    "tone_map",
    "ppm_header",
    "write_ppm",
    "format_ppm",
]
