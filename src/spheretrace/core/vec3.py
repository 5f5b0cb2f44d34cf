"""Three-component vector and random sampling utilities.

``Vec3`` is used for points, directions and RGB colors alike. Arithmetic
follows IEEE-754 semantics: dividing by zero produces infinities or NaN
instead of raising, so degenerate geometry propagates non-finite values
through the pipeline rather than stopping a render.

All random draws take an explicit ``numpy.random.Generator`` so that a
seeded generator reproduces an image exactly.

Example:
    >>> import numpy as np
    >>> rng = np.random.default_rng(7)
    >>> v = Vec3(3.0, 0.0, 4.0)
    >>> v.length()
    5.0
    >>> unit_vector(v)
    Vec3(x=0.6, y=0.0, z=0.8)
    >>> random_in_unit_sphere(rng).length_squared() < 1.0
    True
"""

from __future__ import annotations

import math
from collections.abc import Iterator
from dataclasses import dataclass

import numpy as np


def ieee_divide(numerator: float, denominator: float) -> float:
    """Divide two floats with IEEE-754 semantics.

    Division by zero gives a signed infinity, and 0/0 or NaN/0 gives NaN.
    numpy floats follow the standard here; their warnings are silenced.
    """
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        return float(np.float64(numerator) / np.float64(denominator))


@dataclass(frozen=True, slots=True)
class Vec3:
    """An immutable 3D vector.

    Attributes:
        x: First component (red when used as a color).
        y: Second component (green when used as a color).
        z: Third component (blue when used as a color).
    """

    x: float
    y: float
    z: float

    @classmethod
    def random(cls, rng: np.random.Generator, low: float = 0.0, high: float = 1.0) -> Vec3:
        """Draw a vector with independent components uniform in [low, high)."""
        return cls(
            random_double(rng, low, high),
            random_double(rng, low, high),
            random_double(rng, low, high),
        )

    def __add__(self, other: Vec3) -> Vec3:
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vec3) -> Vec3:
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scalar: float) -> Vec3:
        return Vec3(self.x * scalar, self.y * scalar, self.z * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> Vec3:
        return Vec3(
            ieee_divide(self.x, scalar),
            ieee_divide(self.y, scalar),
            ieee_divide(self.z, scalar),
        )

    def __neg__(self) -> Vec3:
        return Vec3(-self.x, -self.y, -self.z)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def dot(self, other: Vec3) -> float:
        """Compute the dot product with another vector."""
        return self.x * other.x + self.y * other.y + self.z * other.z

    def length_squared(self) -> float:
        """Compute the squared Euclidean length.

        Cheaper than ``length()`` when only comparing magnitudes.
        """
        return self.x * self.x + self.y * self.y + self.z * self.z

    def length(self) -> float:
        """Compute the Euclidean length."""
        return math.sqrt(self.length_squared())


ZERO = Vec3(0.0, 0.0, 0.0)


def dot(a: Vec3, b: Vec3) -> float:
    """Compute the dot product a . b."""
    return a.dot(b)


def unit_vector(v: Vec3) -> Vec3:
    """Scale a vector to unit length.

    A zero-length vector is not guarded against: every component of the
    result is NaN.
    """
    return v / v.length()


# =============================================================================
# Random Sampling Utilities for Monte Carlo
# =============================================================================


def random_double(rng: np.random.Generator, low: float = 0.0, high: float = 1.0) -> float:
    """Draw a float uniformly from [low, high)."""
    return low + (high - low) * float(rng.random())


def random_vector(rng: np.random.Generator, low: float, high: float) -> Vec3:
    """Draw a vector with independent components uniform in [low, high)."""
    return Vec3.random(rng, low, high)


def random_in_unit_sphere(rng: np.random.Generator) -> Vec3:
    """Generate a random point strictly inside the unit sphere.

    Uses rejection sampling from the enclosing cube. Each attempt is
    accepted with probability pi/6 and the loop has no attempt cap.

    Args:
        rng: Generator supplying the uniform draws.

    Returns:
        A point p with p.length_squared() < 1.
    """
    while True:
        p = Vec3.random(rng, -1.0, 1.0)
        if p.length_squared() < 1.0:
            return p
