"""Path tracing integrator for Monte Carlo light transport.

A ray that hits a sphere bounces toward ``point + normal + p`` where p is a
random point in the unit sphere, and whatever that bounce returns is
attenuated by a fixed 50% albedo. A ray that escapes the scene picks up the
sky gradient, white at the bottom blending to light blue at the top. A path
that runs out of depth contributes black.

``ray_color`` walks the path in a loop and then applies the attenuation once
per bounce, innermost first, which reproduces ``ray_color_recursive``
exactly while keeping the call stack flat for large depths.

Example:
    >>> import numpy as np
    >>> from spheretrace.core.ray import Ray
    >>> from spheretrace.core.vec3 import Vec3
    >>> from spheretrace.scene.manager import Scene
    >>> up = Ray(Vec3(0.0, 0.0, 0.0), Vec3(0.0, 1.0, 0.0))
    >>> ray_color(up, Scene(), MAX_DEPTH, np.random.default_rng(0))
    Vec3(x=0.5, y=0.7, z=1.0)
"""

from __future__ import annotations

import numpy as np

from spheretrace.core.ray import Ray
from spheretrace.core.vec3 import ZERO, Vec3, random_in_unit_sphere, unit_vector
from spheretrace.geometry.sphere import HitRecord
from spheretrace.scene.manager import Scene

# =============================================================================
# Rendering Constants
# =============================================================================

# Maximum ray bounces (path length)
MAX_DEPTH = 50

# Fraction of energy kept at every surface bounce
DIFFUSE_ATTENUATION = 0.5

# Sky gradient endpoints
HORIZON_COLOR = Vec3(1.0, 1.0, 1.0)
SKY_COLOR = Vec3(0.5, 0.7, 1.0)

BLACK = ZERO


def background_color(ray: Ray) -> Vec3:
    """Evaluate the sky gradient for an escaped ray.

    Maps the normalized direction's y from [-1, 1] to t in [0, 1] and blends
    HORIZON_COLOR * (1 - t) + SKY_COLOR * t. A zero direction gives NaN.
    """
    unit_direction = unit_vector(ray.direction)
    t = 0.5 * (unit_direction.y + 1.0)
    return HORIZON_COLOR * (1.0 - t) + SKY_COLOR * t


def _scatter(record: HitRecord, rng: np.random.Generator) -> Ray:
    """Build the diffuse bounce ray leaving a hit point."""
    target = record.point + record.normal + random_in_unit_sphere(rng)
    return Ray(record.point, target - record.point)


def ray_color(ray: Ray, scene: Scene, depth: int, rng: np.random.Generator) -> Vec3:
    """Compute the radiance carried back along a ray.

    Args:
        ray: The ray to trace.
        scene: The scene to resolve hits against.
        depth: Remaining bounce budget. Zero or less returns black.
        rng: Generator for the diffuse bounce directions.

    Returns:
        The estimated color for this path.
    """
    bounces = 0
    while depth > 0:
        record = scene.hit(ray)
        if not isinstance(record, HitRecord):
            color = background_color(ray)
            break
        ray = _scatter(record, rng)
        depth -= 1
        bounces += 1
    else:
        color = BLACK

    for _ in range(bounces):
        color = color * DIFFUSE_ATTENUATION
    return color


def ray_color_recursive(ray: Ray, scene: Scene, depth: int, rng: np.random.Generator) -> Vec3:
    """Recursive form of ``ray_color``.

    Consumes the generator in the same order and returns the same value.
    Limited by the interpreter recursion limit for very large depths.
    """
    if depth <= 0:
        return BLACK

    record = scene.hit(ray)
    if isinstance(record, HitRecord):
        bounced = _scatter(record, rng)
        return ray_color_recursive(bounced, scene, depth - 1, rng) * DIFFUSE_ATTENUATION

    return background_color(ray)
