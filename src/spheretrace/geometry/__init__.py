"""Geometry module for shape primitives.

This module provides the sphere primitive and its intersection algorithm:

Components:
    sphere: Sphere primitive, hit records and the ray-sphere solver

Ray-object intersection follows the pattern:
    outcome = hit_sphere(ray, sphere)  # HitRecord or MISSED
"""

from .sphere import MISSED, T_MAX, T_MIN, HitRecord, Intersection, Missed, Sphere, hit_sphere

__all__ = [
    "Sphere",
    "HitRecord",
    "Missed",
    "MISSED",
    "Intersection",
    "hit_sphere",
    "T_MIN",
    "T_MAX",
]
