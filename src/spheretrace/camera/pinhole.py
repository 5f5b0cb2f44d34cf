"""Pinhole camera model with a fixed viewport.

The camera sits at the origin looking down -z. Its viewport is a rectangle
at ``focal_length`` in front of the origin, described by:
- horizontal: the full width of the viewport
- vertical: the full height of the viewport
- lower_left_corner: origin - horizontal/2 - vertical/2 - (0, 0, focal_length)

Image-plane coordinates are normalized:
    u = 0: left edge, u = 1: right edge
    v = 0: bottom edge, v = 1: top edge

Values outside [0, 1] are not clamped and extrapolate past the viewport.

Example:
    >>> camera = Camera.from_viewport()
    >>> camera.get_ray(0.5, 0.5).direction  # Ray through image center
    Vec3(x=0.0, y=0.0, z=-1.0)
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from spheretrace.core.ray import Ray
from spheretrace.core.vec3 import ZERO, Vec3, ieee_divide

# =============================================================================
# Camera Constants
# =============================================================================

ASPECT_RATIO = 16.0 / 9.0
VIEWPORT_HEIGHT = 2.0
FOCAL_LENGTH = 1.0


# =============================================================================
# Camera Data Structure
# =============================================================================


@dataclass(frozen=True, slots=True)
class Camera:
    """A pinhole camera derived once from viewport constants.

    Attributes:
        origin: Camera position in world space.
        horizontal: Vector spanning the full viewport width.
        vertical: Vector spanning the full viewport height.
        lower_left_corner: World-space point at the viewport's lower left.
    """

    origin: Vec3
    horizontal: Vec3
    vertical: Vec3
    lower_left_corner: Vec3

    @classmethod
    def from_viewport(
        cls,
        aspect_ratio: float = ASPECT_RATIO,
        viewport_height: float = VIEWPORT_HEIGHT,
        focal_length: float = FOCAL_LENGTH,
        origin: Vec3 = ZERO,
    ) -> Camera:
        """Build the camera geometry from viewport parameters.

        Args:
            aspect_ratio: Viewport width divided by height (default 16:9).
            viewport_height: Height of the virtual image plane.
            focal_length: Distance from the origin to the image plane.
            origin: Camera position.

        Returns:
            A Camera whose viewport is centred on the -z axis through origin.
        """
        viewport_width = aspect_ratio * viewport_height
        horizontal = Vec3(viewport_width, 0.0, 0.0)
        vertical = Vec3(0.0, viewport_height, 0.0)
        lower_left_corner = (
            origin - horizontal / 2.0 - vertical / 2.0 - Vec3(0.0, 0.0, focal_length)
        )
        return cls(
            origin=origin,
            horizontal=horizontal,
            vertical=vertical,
            lower_left_corner=lower_left_corner,
        )

    def get_ray(self, u: float, v: float) -> Ray:
        """Generate a ray through normalized image coordinates (u, v).

        The direction is left unnormalized.

        Args:
            u: Horizontal coordinate (0 = left edge, 1 = right edge).
            v: Vertical coordinate (0 = bottom edge, 1 = top edge).

        Returns:
            A Ray from the camera origin toward the point on the viewport.
        """
        direction = (
            self.lower_left_corner + self.horizontal * u + self.vertical * v - self.origin
        )
        return Ray(self.origin, direction)

    def get_ray_jittered(
        self,
        column: int,
        row: int,
        width: int,
        height: int,
        rng: np.random.Generator,
    ) -> Ray:
        """Generate a jittered ray for anti-aliasing.

        Adds a uniform offset in [0, 1) to the pixel coordinates, horizontal
        first, then normalizes by (width - 1) and (height - 1). Jitter on the
        last column or top row lands past the nominal viewport edge.

        Args:
            column: Pixel x-coordinate (0 = left).
            row: Pixel y-coordinate counted from the bottom (0 = bottom).
            width: Image width in pixels.
            height: Image height in pixels.
            rng: Generator supplying the jitter.

        Returns:
            A Ray with random sub-pixel offset.
        """
        u = ieee_divide(column + float(rng.random()), width - 1)
        v = ieee_divide(row + float(rng.random()), height - 1)
        return self.get_ray(u, v)

    def info(self) -> dict[str, tuple[float, float, float]]:
        """Get the camera vectors as plain tuples for inspection."""
        return {
            "origin": tuple(self.origin),
            "horizontal": tuple(self.horizontal),
            "vertical": tuple(self.vertical),
            "lower_left_corner": tuple(self.lower_left_corner),
        }
