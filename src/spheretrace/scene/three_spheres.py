"""Default three-sphere scene.

Three radius-4 spheres sit in a row ten units in front of the camera,
spaced nine units apart along x, viewed by the fixed 16:9 camera.

Example:
    >>> scene, camera = create_three_spheres_scene()
    >>> len(scene)
    3
"""

from spheretrace.camera.pinhole import Camera
from spheretrace.scene.manager import Scene

# =============================================================================
# Scene Constants
# =============================================================================

SPHERE_RADIUS = 4.0
SPHERE_DEPTH = -10.0
SPHERE_SPACING = 9.0


def create_three_spheres_scene() -> tuple[Scene, Camera]:
    """Create the default scene and camera.

    Spheres are added right, center, left, which only affects iteration
    order.

    Returns:
        A tuple of (Scene, Camera).
    """
    scene = Scene()
    for x in (SPHERE_SPACING, 0.0, -SPHERE_SPACING):
        scene.add_sphere(center=(x, 0.0, SPHERE_DEPTH), radius=SPHERE_RADIUS)
    return scene, Camera.from_viewport()
