"""Camera module for view and ray generation.

Components:
    pinhole: Fixed-viewport pinhole camera

Camera responsibilities:
    - Transform (u, v) image coordinates to world-space rays
    - Apply anti-aliasing jitter for sub-pixel sampling

Ray generation uses normalized image coordinates:
    u in [0, 1]: left to right across image
    v in [0, 1]: bottom to top across image
"""

from .pinhole import ASPECT_RATIO, FOCAL_LENGTH, VIEWPORT_HEIGHT, Camera

__all__ = [
    "Camera",
    "ASPECT_RATIO",
    "VIEWPORT_HEIGHT",
    "FOCAL_LENGTH",
]
