"""Core rendering module.

This module contains the fundamental building blocks for ray tracing:

Components:
    vec3: Vector type, IEEE-754 division and random sampling utilities
    ray: Ray data structure
    integrator: Diffuse bounce light transport under a sky gradient
    render: Per-pixel jittered sampling loop and render settings

Note: integrator and render are NOT imported here because they depend on the
scene and camera packages, which themselves import from core.
"""

from .ray import Ray
from .vec3 import (
    ZERO,
    Vec3,
    dot,
    ieee_divide,
    random_double,
    random_in_unit_sphere,
    random_vector,
    unit_vector,
)

__all__ = [
    "Ray",
    "Vec3",
    "ZERO",
    "dot",
    "ieee_divide",
    "random_double",
    "random_in_unit_sphere",
    "random_vector",
    "unit_vector",
]
