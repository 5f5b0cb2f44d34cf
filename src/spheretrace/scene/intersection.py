"""Scene-level nearest-hit resolution.

Every sphere is tested against the ray and the hit with the smallest t is
kept. Cost is linear in the number of spheres; there is no acceleration
structure.

Example:
    >>> from spheretrace.core.ray import Ray
    >>> from spheretrace.core.vec3 import Vec3
    >>> from spheretrace.geometry.sphere import Sphere
    >>> spheres = [Sphere(Vec3(0, 0, -10), 4.0), Sphere(Vec3(0, 0, -3), 1.0)]
    >>> intersect_scene(Ray(Vec3(0, 0, 0), Vec3(0, 0, -1)), spheres).t
    2.0
"""

from __future__ import annotations

import math
from collections.abc import Iterable

from spheretrace.core.ray import Ray
from spheretrace.geometry.sphere import MISSED, HitRecord, Intersection, Sphere, hit_sphere


def intersect_scene(ray: Ray, spheres: Iterable[Sphere]) -> Intersection:
    """Test a ray against all spheres and return the closest hit.

    The comparison is strict, so among equal t values the first sphere in
    iteration order wins. Order never changes which t is chosen.

    Args:
        ray: The ray to test.
        spheres: The spheres to test, in scene order.

    Returns:
        The HitRecord with the smallest t, or MISSED if nothing was hit.
    """
    closest_t = math.inf
    result: Intersection = MISSED

    for sphere in spheres:
        record = hit_sphere(ray, sphere)
        if isinstance(record, HitRecord) and record.t < closest_t:
            closest_t = record.t
            result = record

    return result
