#!/usr/bin/env python3
"""Render a built-in scene or a JSON scene file.

Usage:
    python -m examples.render_scene [options]

Options:
    --scene NAME        Built-in scene: three_spheres, glass, csg, cornell_box
                        (default: three_spheres)
    --scene-file PATH   JSON scene description (overrides --scene)
    --width WIDTH       Image width in pixels (default: 320)
    --height HEIGHT     Image height in pixels (default: 180)
    --depth DEPTH       Reflection/refraction recursion depth (default: 5)
    --workers N         Render processes (default: 1)
    --no-taichi         Generate primary rays per pixel instead of with Taichi
    --output OUTPUT     Output file, .png or .ppm (default: render.png)
    --preview           Show the result in a Matplotlib window
    --reference PATH    Report the RMSE against a reference PNG
    --quiet             Suppress progress output
    --verbose           Enable debug logging

Example:
    python -m examples.render_scene --scene csg --width 640 --height 360 --workers 4
    python -m examples.render_scene --scene-file examples/scenes/glass_over_checks.json
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path

import taichi as ti

SCENE_NAMES = ("three_spheres", "glass", "csg", "cornell_box")


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render a scene with the Whitted ray tracer.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--scene",
        choices=SCENE_NAMES,
        default="three_spheres",
        help="Built-in scene to render (default: three_spheres)",
    )
    parser.add_argument(
        "--scene-file",
        type=Path,
        default=None,
        help="JSON scene description; overrides --scene and the image size",
    )
    parser.add_argument("--width", type=int, default=320, help="Image width (default: 320)")
    parser.add_argument("--height", type=int, default=180, help="Image height (default: 180)")
    parser.add_argument(
        "--depth",
        type=int,
        default=5,
        help="Reflection/refraction recursion depth (default: 5)",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=1,
        help="Number of render processes (default: 1)",
    )
    parser.add_argument(
        "--no-taichi",
        action="store_true",
        help="Generate primary rays per pixel in Python instead of with Taichi",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="render.png",
        help="Output file path, .png or .ppm (default: render.png)",
    )
    parser.add_argument(
        "--preview",
        action="store_true",
        help="Show the rendered image in a Matplotlib window",
    )
    parser.add_argument(
        "--reference",
        type=Path,
        default=None,
        help="Reference PNG to compare the render against (prints the RMSE)",
    )
    parser.add_argument("--quiet", action="store_true", help="Suppress progress output")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args()


def render_scene(
    scene: str = "three_spheres",
    scene_file: Path | None = None,
    width: int = 320,
    height: int = 180,
    max_depth: int = 5,
    workers: int = 1,
    use_taichi: bool = True,
    output_path: str = "render.png",
    preview: bool = False,
    reference: Path | None = None,
    quiet: bool = False,
) -> Path:
    """Render a scene and save it.

    Args:
        scene: Name of a built-in scene.
        scene_file: Optional JSON scene; when given, ``scene``, ``width``
            and ``height`` are ignored.
        width: Image width in pixels.
        height: Image height in pixels.
        max_depth: Recursion budget for reflection and refraction.
        workers: Number of render processes.
        use_taichi: Generate primary rays with the Taichi kernel.
        output_path: Output file; the suffix selects PNG or PPM.
        preview: Show the result with Matplotlib.
        reference: Optional PNG to compare against; the RMSE is printed.
        quiet: If True, suppress progress output.

    Returns:
        Path to the saved image file.
    """
    # Lazy imports so Taichi is initialized before any kernel is compiled
    from whitted.core.renderer import Renderer, RenderSettings
    from whitted.preview.display import show_preview
    from whitted.preview.export import compare_to_reference, save_png, save_ppm
    from whitted.scene.config import load_scene_file
    from whitted.scene.showcase import SCENES

    if scene_file is not None:
        if not quiet:
            print(f"Loading scene file {scene_file}...")
        world, camera = load_scene_file(scene_file)
    else:
        if not quiet:
            print(f"Creating {scene} scene ({width}x{height})...")
        world, camera = SCENES[scene](width, height)

    settings = RenderSettings(max_depth=max_depth, workers=workers, use_taichi_raygen=use_taichi)
    renderer = Renderer(camera, world, settings)

    if not quiet:
        print(f"Rendering {camera.hsize}x{camera.vsize} with {workers} worker(s)...")

    start_time = time.time()

    def progress_callback(current: int, target: int) -> None:
        if not quiet:
            elapsed = time.time() - start_time
            progress_pct = (current / target) * 100 if target > 0 else 0
            rows_per_sec = current / elapsed if elapsed > 0 else 0
            print(
                f"\r  Progress: {current}/{target} rows "
                f"({progress_pct:.1f}%) - {rows_per_sec:.1f} rows/s",
                end="",
                flush=True,
            )

    canvas = renderer.render(callback=progress_callback)

    if not quiet:
        print()  # Newline after progress

    output_file = Path(output_path)
    if output_file.suffix.lower() == ".ppm":
        save_ppm(canvas, output_file)
    else:
        save_png(canvas, output_file)

    total_time = time.time() - start_time
    if not quiet:
        print(f"Saved to: {output_file.absolute()}")
        print(f"Total time: {total_time:.2f}s")

    if reference is not None:
        rmse = compare_to_reference(canvas, reference)
        print(f"RMSE vs {reference}: {rmse:.6f}")

    if preview:
        show_preview(canvas)

    return output_file


def main() -> int:
    """Main entry point."""
    args = parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if not args.no_taichi:
        # Ray generation is a small kernel; the CPU backend keeps f64 available.
        ti.init(arch=ti.cpu, default_fp=ti.f64)

    try:
        render_scene(
            scene=args.scene,
            scene_file=args.scene_file,
            width=args.width,
            height=args.height,
            max_depth=args.depth,
            workers=args.workers,
            use_taichi=not args.no_taichi,
            output_path=args.output,
            preview=args.preview,
            reference=args.reference,
            quiet=args.quiet,
        )
        return 0
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
