"""Render a scene of spheres to a P3 pixel map.

Usage:
    spheretrace [options] > image.ppm
    python -m spheretrace [options]

Options:
    --width WIDTH         Image width in pixels (default: 300)
    --height HEIGHT       Image height in pixels (default: width / (16/9))
    --samples SAMPLES     Number of samples per pixel (default: 50)
    --max-depth DEPTH     Maximum bounces per path (default: 50)
    --seed SEED           Random seed for a reproducible image
    --scene PATH          JSON scene file (default: three spheres)
    --output PATH         Output file (default: standard output)
    --quiet               Suppress progress output
    --verbose             Log render details to stderr

Example:
    spheretrace --width 160 --samples 20 --seed 7 --output spheres.ppm
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import time
from collections.abc import Sequence
from pathlib import Path

from spheretrace.camera.pinhole import Camera
from spheretrace.core.integrator import MAX_DEPTH
from spheretrace.core.render import DEFAULT_SAMPLES_PER_PIXEL, DEFAULT_WIDTH, Renderer, RenderSettings
from spheretrace.scene.manager import Scene
from spheretrace.scene.three_spheres import create_three_spheres_scene


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="spheretrace",
        description="Render a scene of spheres to a P3 pixel map.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--width",
        type=int,
        default=DEFAULT_WIDTH,
        help=f"Image width in pixels (default: {DEFAULT_WIDTH})",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=None,
        help="Image height in pixels (default: width / (16/9))",
    )
    parser.add_argument(
        "--samples",
        type=int,
        default=DEFAULT_SAMPLES_PER_PIXEL,
        help=f"Number of samples per pixel (default: {DEFAULT_SAMPLES_PER_PIXEL})",
    )
    parser.add_argument(
        "--max-depth",
        type=int,
        default=MAX_DEPTH,
        help=f"Maximum bounces per path (default: {MAX_DEPTH})",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for a reproducible image",
    )
    parser.add_argument(
        "--scene",
        type=Path,
        default=None,
        help="JSON scene file (default: three spheres)",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Output file path (default: standard output)",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log render details to stderr",
    )
    return parser.parse_args(argv)


def load_scene(path: Path) -> Scene:
    """Load a scene from a JSON file.

    Raises:
        OSError: If the file cannot be read.
        ValueError: If the file is not valid JSON or not a valid scene.
    """
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"{path}: scene must be a JSON object")
    return Scene.from_dict(data)


def render_scene(
    scene: Scene,
    camera: Camera,
    settings: RenderSettings,
    output_path: Path | None = None,
    quiet: bool = False,
) -> None:
    """Render a scene and write the pixel map.

    Progress goes to stderr so it never mixes with the pixel stream.

    Args:
        scene: The scene to render.
        camera: The camera to render from.
        settings: Image dimensions, sample count, depth and seed.
        output_path: File to write. None writes to standard output.
        quiet: If True, suppress progress output.
    """
    renderer = Renderer(scene, camera, settings)

    if not quiet:
        print(
            f"Rendering {settings.width}x{settings.height}, "
            f"{settings.samples_per_pixel} samples per pixel...",
            file=sys.stderr,
        )

    start_time = time.time()

    def progress_callback(current: int, target: int) -> None:
        if not quiet:
            progress_pct = (current / target) * 100 if target > 0 else 0
            print(
                f"\r  Progress: {current}/{target} rows ({progress_pct:.1f}%)",
                end="",
                file=sys.stderr,
                flush=True,
            )

    renderer.render(callback=progress_callback)

    if not quiet:
        print(file=sys.stderr)  # Newline after progress

    if output_path is None:
        renderer.write_ppm(sys.stdout)
        sys.stdout.flush()
    else:
        with output_path.open("w", encoding="ascii") as stream:
            renderer.write_ppm(stream)

    if not quiet:
        if output_path is not None:
            print(f"Saved to: {output_path.absolute()}", file=sys.stderr)
        print(f"Total time: {time.time() - start_time:.2f}s", file=sys.stderr)
        print("Done!", file=sys.stderr)


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        if args.height is None:
            settings = RenderSettings.for_width(
                args.width,
                samples_per_pixel=args.samples,
                max_depth=args.max_depth,
                seed=args.seed,
            )
        else:
            settings = RenderSettings(
                width=args.width,
                height=args.height,
                samples_per_pixel=args.samples,
                max_depth=args.max_depth,
                seed=args.seed,
            )

        scene, camera = create_three_spheres_scene()
        if args.scene is not None:
            scene = load_scene(args.scene)

        render_scene(scene, camera, settings, output_path=args.output, quiet=args.quiet)
        return 0
    except (ValueError, RuntimeError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
