"""Pytest configuration for path tracer tests.

This module provides shared fixtures for all test modules. Every random
draw in the tracer goes through an explicit generator, so tests get a
freshly seeded one each time and stay reproducible.
"""

import numpy as np
import pytest

from spheretrace.camera.pinhole import Camera
from spheretrace.scene.manager import Scene
from spheretrace.scene.three_spheres import create_three_spheres_scene


@pytest.fixture
def rng() -> np.random.Generator:
    """A seeded generator, fresh for each test."""
    return np.random.default_rng(42)


@pytest.fixture
def camera() -> Camera:
    """The default 16:9 camera at the origin."""
    return Camera.from_viewport()


@pytest.fixture
def empty_scene() -> Scene:
    """A scene without spheres; every ray sees the sky."""
    return Scene()


@pytest.fixture
def three_spheres() -> Scene:
    """The default three-sphere scene."""
    scene, _ = create_three_spheres_scene()
    return scene
