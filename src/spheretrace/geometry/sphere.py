"""Sphere primitive with analytic ray-sphere intersection.

The intersection test solves the quadratic in half-b form and reports the
outcome as one of two variants: a ``HitRecord`` or the ``MISSED`` sentinel.
The two are never confused, so a hit at t == 0 is still a hit.

The valid-root range excludes only negative t. No epsilon is applied, so
bounce rays may re-hit the surface they leave from.

Example:
    >>> from spheretrace.core.ray import Ray
    >>> from spheretrace.core.vec3 import Vec3
    >>> sphere = Sphere(center=Vec3(0.0, 0.0, -10.0), radius=4.0)
    >>> ray = Ray(Vec3(0.0, 0.0, 0.0), Vec3(0.0, 0.0, -1.0))
    >>> hit_sphere(ray, sphere).t
    6.0
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Final

from spheretrace.core.ray import Ray
from spheretrace.core.vec3 import Vec3, ieee_divide

# Accepted range for the ray parameter of a hit
T_MIN: Final = 0.0
T_MAX: Final = math.inf


@dataclass(frozen=True, slots=True)
class HitRecord:
    """Record of a ray-sphere intersection.

    Attributes:
        t: The parameter value along the ray where intersection occurred.
        point: The point where the ray intersected the sphere.
        normal: The unit surface normal, oriented against the incoming ray.
        front_face: True if the ray struck the sphere from outside.
    """

    t: float
    point: Vec3
    normal: Vec3
    front_face: bool


class Missed:
    """The no-intersection outcome. Use the ``MISSED`` singleton."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "MISSED"


MISSED: Final = Missed()

Intersection = HitRecord | Missed


@dataclass(frozen=True, slots=True)
class Sphere:
    """A sphere defined by center point and radius.

    Attributes:
        center: The center point of the sphere.
        radius: The radius of the sphere. Zero or negative radii are not
            rejected and produce non-finite normals.
    """

    center: Vec3
    radius: float

    def hit(self, ray: Ray) -> Intersection:
        """Intersect a ray with this sphere. See ``hit_sphere``."""
        return hit_sphere(ray, self)


def _in_range(root: float) -> bool:
    # NaN roots pass, matching the comparison order of the range test
    return not (root < T_MIN or T_MAX < root)


def hit_sphere(ray: Ray, sphere: Sphere) -> Intersection:
    """Test for ray-sphere intersection.

    Solves |origin + t * direction - center|^2 = radius^2, written as
    a*t^2 + 2*half_b*t + c = 0 where:
        oc = origin - center
        a = dot(direction, direction)
        half_b = dot(oc, direction)
        c = dot(oc, oc) - radius^2

    The smaller root is tried first, then the larger one.

    Args:
        ray: The ray to test. Its direction need not be normalized.
        sphere: The sphere to test against.

    Returns:
        A HitRecord for the nearest root in [0, inf], or MISSED.
    """
    oc = ray.origin - sphere.center
    a = ray.direction.dot(ray.direction)
    half_b = oc.dot(ray.direction)
    c = oc.dot(oc) - sphere.radius * sphere.radius
    discriminant = half_b * half_b - a * c

    if discriminant < 0.0:
        return MISSED

    sqrt_d = math.sqrt(discriminant)

    # Find the nearest root that lies in the acceptable range
    root = ieee_divide(-half_b - sqrt_d, a)
    if not _in_range(root):
        root = ieee_divide(-half_b + sqrt_d, a)
        if not _in_range(root):
            return MISSED

    point = ray.at(root)
    outward_normal = (point - sphere.center) / sphere.radius
    front_face = ray.direction.dot(outward_normal) < 0.0
    normal = outward_normal if front_face else -outward_normal

    return HitRecord(t=root, point=point, normal=normal, front_face=front_face)
