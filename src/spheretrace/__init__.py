"""Batch Monte Carlo path tracer for scenes of spheres.

This package renders a static scene of spheres into a plain-text pixel map
by casting jittered camera rays, resolving the nearest sphere hit and
integrating light through diffuse bounces lit by a sky gradient.

Subpackages:
    core: Vector math, rays, the path integrator and the render loop
    geometry: Sphere primitive and ray-sphere intersection
    camera: Fixed-viewport pinhole camera
    scene: Sphere collections, nearest-hit queries and the default scene
    output: Tone mapping and the P3 pixel stream writer
"""

__version__ = "0.1.0"
