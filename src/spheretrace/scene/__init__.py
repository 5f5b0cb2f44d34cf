"""Scene module for sphere collections and nearest-hit queries.

Components:
    intersection: Nearest-hit resolution across a list of spheres
    manager: Scene container with dictionary (JSON) round trips
    three_spheres: The default three-sphere scene
"""

from .intersection import intersect_scene
from .manager import Scene
from .three_spheres import create_three_spheres_scene

__all__ = [
    "Scene",
    "intersect_scene",
    "create_three_spheres_scene",
]
