"""Per-pixel sampling loop and render lifecycle.

Rows are rendered from the top of the image to the bottom and columns left
to right. Each pixel sums ``samples_per_pixel`` jittered camera rays through
the path integrator and the raw (unaveraged) sum is stored in a flat,
row-major buffer. Averaging happens in the writer.

The buffer is pre-sized to width * height and every slot is written exactly
once, so rendering runs single-threaded and in order. A parallel renderer
must partition by pixel or row to keep one writer per slot.

Example:
    >>> from spheretrace.core.render import Renderer, RenderSettings
    >>> from spheretrace.scene.three_spheres import create_three_spheres_scene
    >>>
    >>> scene, camera = create_three_spheres_scene()
    >>> settings = RenderSettings(width=32, height=18, samples_per_pixel=4, seed=1)
    >>> renderer = Renderer(scene, camera, settings)
    >>> renderer.render()
    >>> ppm_text = renderer.to_ppm()
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Generator
from dataclasses import dataclass
from typing import TextIO

import numpy as np
import numpy.typing as npt

from spheretrace.camera.pinhole import ASPECT_RATIO, Camera
from spheretrace.core.integrator import MAX_DEPTH, ray_color
from spheretrace.core.vec3 import ZERO, Vec3
from spheretrace.output.ppm import format_ppm, write_ppm
from spheretrace.scene.manager import Scene

logger = logging.getLogger(__name__)

# Type alias for progress callback
# Callback receives (rows_done, total_rows)
ProgressCallback = Callable[[int, int], None]

DEFAULT_WIDTH = 300
DEFAULT_SAMPLES_PER_PIXEL = 50


# =============================================================================
# Render Settings
# =============================================================================


@dataclass(frozen=True)
class RenderSettings:
    """Fixed inputs of a render.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels. Defaults to the width divided by
            the camera aspect ratio, truncated.
        samples_per_pixel: Number of jittered rays summed per pixel.
        max_depth: Bounce budget handed to the integrator.
        seed: Seed for the random generator. None draws fresh entropy.

    Raises:
        ValueError: If a dimension or the sample count is below 1, or
            max_depth is negative.
    """

    width: int = DEFAULT_WIDTH
    height: int = int(DEFAULT_WIDTH / ASPECT_RATIO)
    samples_per_pixel: int = DEFAULT_SAMPLES_PER_PIXEL
    max_depth: int = MAX_DEPTH
    seed: int | None = None

    def __post_init__(self) -> None:
        if self.width < 1 or self.height < 1:
            raise ValueError(
                f"Image dimensions must be positive, got {self.width}x{self.height}"
            )
        if self.samples_per_pixel < 1:
            raise ValueError(
                f"samples_per_pixel must be at least 1, got {self.samples_per_pixel}"
            )
        if self.max_depth < 0:
            raise ValueError(f"max_depth must not be negative, got {self.max_depth}")

    @classmethod
    def for_width(cls, width: int, aspect_ratio: float = ASPECT_RATIO, **kwargs) -> RenderSettings:
        """Create settings whose height follows from the aspect ratio."""
        return cls(width=width, height=int(width / aspect_ratio), **kwargs)

    @property
    def pixel_count(self) -> int:
        """Total number of pixels in the image."""
        return self.width * self.height

    def make_rng(self) -> np.random.Generator:
        """Create a generator seeded from these settings."""
        return np.random.default_rng(self.seed)


# =============================================================================
# Sampling
# =============================================================================


def sample_pixel(
    column: int,
    row: int,
    width: int,
    height: int,
    samples_per_pixel: int,
    max_depth: int,
    scene: Scene,
    camera: Camera,
    rng: np.random.Generator,
) -> Vec3:
    """Sum the integrated colors of jittered rays through one pixel.

    Args:
        column: Pixel x-coordinate (0 = left).
        row: Pixel y-coordinate counted from the bottom (0 = bottom).
        width: Image width in pixels.
        height: Image height in pixels.
        samples_per_pixel: Number of rays to sum.
        max_depth: Bounce budget for each ray.
        scene: Scene to trace against.
        camera: Camera generating the rays.
        rng: Generator for jitter and bounce directions.

    Returns:
        The raw sum of samples_per_pixel colors.
    """
    color = ZERO
    for _ in range(samples_per_pixel):
        ray = camera.get_ray_jittered(column, row, width, height, rng)
        color = color + ray_color(ray, scene, max_depth, rng)
    return color


def iter_render_rows(
    width: int,
    height: int,
    samples_per_pixel: int,
    max_depth: int,
    scene: Scene,
    camera: Camera,
    rng: np.random.Generator,
) -> Generator[list[Vec3], None, None]:
    """Render an image one row at a time, top row first.

    Yields:
        The raw pixel sums of each row, left to right.
    """
    for row in range(height - 1, -1, -1):
        yield [
            sample_pixel(column, row, width, height, samples_per_pixel, max_depth, scene, camera, rng)
            for column in range(width)
        ]


def render_image(
    width: int,
    height: int,
    samples_per_pixel: int,
    max_depth: int,
    scene: Scene,
    camera: Camera,
    rng: np.random.Generator,
) -> npt.NDArray[np.float64]:
    """Render a full image of raw pixel sums.

    Returns:
        Array of shape (width * height, 3), top row first, left to right.
    """
    image = np.zeros((width * height, 3), dtype=np.float64)
    rows = iter_render_rows(width, height, samples_per_pixel, max_depth, scene, camera, rng)
    for row_index, pixels in enumerate(rows):
        image[row_index * width : (row_index + 1) * width] = [tuple(p) for p in pixels]
    return image


# =============================================================================
# Renderer
# =============================================================================


class Renderer:
    """Renders a scene once into a pre-sized buffer.

    Wraps the sampling functions with progress reporting and output. Every
    buffer slot is written exactly once; a second render raises.

    Attributes:
        scene: The scene being rendered.
        camera: The camera generating primary rays.
        settings: Image dimensions, sample count and depth.
    """

    def __init__(
        self,
        scene: Scene,
        camera: Camera,
        settings: RenderSettings | None = None,
        rng: np.random.Generator | None = None,
    ) -> None:
        """Initialize the renderer.

        Args:
            scene: The scene to render.
            camera: The camera to render from.
            settings: Render settings. Defaults to RenderSettings().
            rng: Generator for all random draws. Defaults to one seeded
                from settings.seed.
        """
        self.scene = scene
        self.camera = camera
        self.settings = settings if settings is not None else RenderSettings()
        self._rng = rng if rng is not None else self.settings.make_rng()
        self._image = np.zeros((self.settings.pixel_count, 3), dtype=np.float64)
        self._rows_done = 0
        self._started = False

    @property
    def width(self) -> int:
        """Get the image width."""
        return self.settings.width

    @property
    def height(self) -> int:
        """Get the image height."""
        return self.settings.height

    @property
    def rows_done(self) -> int:
        """Number of rows written so far."""
        return self._rows_done

    @property
    def is_complete(self) -> bool:
        """Whether every pixel has been written."""
        return self._rows_done == self.height

    @property
    def image(self) -> npt.NDArray[np.float64]:
        """The raw pixel sums, shape (width * height, 3), read-only.

        Raises:
            RuntimeError: If the render has not completed.
        """
        self._check_complete()
        view = self._image.view()
        view.flags.writeable = False
        return view

    def render_rows(self) -> Generator[tuple[int, int], None, None]:
        """Render row by row, yielding progress after each row.

        Yields:
            Tuple of (rows_done, total_rows).

        Raises:
            RuntimeError: If rendering was already started.
        """
        if self._started:
            raise RuntimeError("Renderer already used. Create a new Renderer to render again.")
        self._started = True

        s = self.settings
        logger.info(
            "Rendering %dx%d at %d spp, max depth %d, %d spheres",
            s.width,
            s.height,
            s.samples_per_pixel,
            s.max_depth,
            len(self.scene),
        )

        rows = iter_render_rows(
            s.width, s.height, s.samples_per_pixel, s.max_depth, self.scene, self.camera, self._rng
        )
        for pixels in rows:
            start = self._rows_done * s.width
            self._image[start : start + s.width] = [tuple(p) for p in pixels]
            self._rows_done += 1
            logger.debug("Row %d/%d done", self._rows_done, s.height)
            yield (self._rows_done, s.height)

        logger.info("Render finished")

    def render(self, callback: ProgressCallback | None = None) -> None:
        """Render the whole image.

        Args:
            callback: Optional function called after each row with
                (rows_done, total_rows).

        Raises:
            RuntimeError: If rendering was already started.
        """
        for done, total in self.render_rows():
            if callback is not None:
                callback(done, total)

    def write_ppm(self, stream: TextIO) -> None:
        """Write the finished image as a P3 pixel map.

        Raises:
            RuntimeError: If the render has not completed.
        """
        write_ppm(stream, self.image, self.width, self.height, self.settings.samples_per_pixel)

    def to_ppm(self) -> str:
        """Get the finished image as P3 text.

        Raises:
            RuntimeError: If the render has not completed.
        """
        return format_ppm(self.image, self.width, self.height, self.settings.samples_per_pixel)

    def _check_complete(self) -> None:
        if not self.is_complete:
            raise RuntimeError("Image not rendered. Call render() first.")

    def __repr__(self) -> str:
        """Return a string representation of the renderer state."""
        return (
            f"Renderer(width={self.width}, height={self.height}, "
            f"samples={self.settings.samples_per_pixel}, rows_done={self.rows_done})"
        )
