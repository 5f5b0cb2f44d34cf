"""Ray data structure.

Example:
    >>> from spheretrace.core.vec3 import Vec3
    >>> ray = Ray(origin=Vec3(0.0, 0.0, 0.0), direction=Vec3(0.0, 0.0, -1.0))
    >>> ray.at(5.0)  # Point 5 units along the ray
    Vec3(x=0.0, y=0.0, z=-5.0)
"""

from dataclasses import dataclass

from spheretrace.core.vec3 import Vec3


@dataclass(frozen=True, slots=True)
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray.
        direction: The direction vector of the ray. It is not required to be
            unit length; t parameterizes ``origin + direction * t``.
    """

    origin: Vec3
    direction: Vec3

    def at(self, t: float) -> Vec3:
        """Compute the point along the ray at parameter t.

        Args:
            t: The parameter value. It is not validated.

        Returns:
            The point origin + direction * t.
        """
        return self.origin + self.direction * t
