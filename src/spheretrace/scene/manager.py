"""Scene container holding an ordered list of spheres.

The Scene is built once and is read-only while rendering. Besides the
nearest-hit query it supports dictionary round trips, so scenes can be
stored as JSON:

    {"spheres": [{"center": [0, 0, -10], "radius": 4}, ...]}

Example:
    >>> scene = Scene()
    >>> scene.add_sphere(center=(0.0, 0.0, -10.0), radius=4.0)
    0
    >>> len(scene)
    1
    >>> Scene.from_dict(scene.to_dict()) == scene
    True
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Any

from spheretrace.core.ray import Ray
from spheretrace.core.vec3 import Vec3
from spheretrace.geometry.sphere import Intersection, Sphere
from spheretrace.scene.intersection import intersect_scene


class Scene:
    """An ordered collection of spheres.

    Order affects iteration only; nearest-hit selection is by minimum t.

    Attributes:
        spheres: The spheres in insertion order.
    """

    def __init__(self, spheres: Iterable[Sphere] = ()) -> None:
        """Initialize a scene, optionally from existing spheres."""
        self.spheres: list[Sphere] = list(spheres)

    # =========================================================================
    # Scene Building
    # =========================================================================

    def add_sphere(self, center: tuple[float, float, float] | Vec3, radius: float) -> int:
        """Add a sphere to the scene.

        The radius is stored as given. A zero radius is accepted and renders
        as a degenerate (non-finite) surface.

        Args:
            center: The center of the sphere as (x, y, z) or a Vec3.
            radius: The radius of the sphere.

        Returns:
            The index of the added sphere.
        """
        if not isinstance(center, Vec3):
            center = Vec3(float(center[0]), float(center[1]), float(center[2]))
        self.spheres.append(Sphere(center=center, radius=float(radius)))
        return len(self.spheres) - 1

    # =========================================================================
    # Scene Queries
    # =========================================================================

    def hit(self, ray: Ray) -> Intersection:
        """Resolve the globally nearest hit for a ray."""
        return intersect_scene(ray, self.spheres)

    def __len__(self) -> int:
        return len(self.spheres)

    def __iter__(self) -> Iterator[Sphere]:
        return iter(self.spheres)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Scene):
            return NotImplemented
        return self.spheres == other.spheres

    def __repr__(self) -> str:
        return f"Scene(spheres={self.spheres!r})"

    # =========================================================================
    # Scene Serialization
    # =========================================================================

    def to_dict(self) -> dict[str, Any]:
        """Export the scene to a dictionary (for JSON serialization)."""
        return {
            "spheres": [
                {"center": list(sphere.center), "radius": sphere.radius}
                for sphere in self.spheres
            ]
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Scene:
        """Load a scene from a dictionary.

        Args:
            data: Dictionary with a 'spheres' list. Each entry needs a
                'center' of three numbers and a 'radius'.

        Returns:
            A new Scene with the spheres in list order.

        Raises:
            ValueError: If 'spheres' is not a list, or an entry is not a
                dictionary, is missing fields or has a malformed center.
        """
        spheres = data.get("spheres", [])
        if not isinstance(spheres, list):
            raise ValueError(f"'spheres' must be a list, got {type(spheres).__name__}")

        scene = cls()
        for index, sphere_config in enumerate(spheres):
            if not isinstance(sphere_config, dict):
                raise ValueError(
                    f"Sphere {index}: entry must be an object, got {type(sphere_config).__name__}"
                )
            center = sphere_config.get("center")
            if not isinstance(center, (list, tuple)) or len(center) != 3:
                raise ValueError(f"Sphere {index}: center must be three numbers, got {center!r}")
            if "radius" not in sphere_config:
                raise ValueError(f"Sphere {index}: missing radius")
            try:
                scene.add_sphere(center, sphere_config["radius"])
            except (TypeError, ValueError) as e:
                raise ValueError(f"Sphere {index}: {e}") from e
        return scene
