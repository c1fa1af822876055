#!/usr/bin/env python3
"""Render the Cornell box scene.

This script demonstrates end-to-end rendering of the Cornell box scene with
the path tracer. It builds and compiles the scene, then renders it in
progressive passes and writes a PNG.

Usage:
    python -m examples.render_cornell_box [options]

Options:
    --width WIDTH       Image width in pixels (default: 128)
    --height HEIGHT     Image height in pixels (default: 128)
    --samples SAMPLES   Stratified samples per pixel per pass (default: 16)
    --passes PASSES     Number of progressive passes (default: 4)
    --depth DEPTH       Bounce budget per path (default: 4)
    --seed SEED         Random seed (default: 0)
    --workers WORKERS   Rendering threads (default: 1)
    --output OUTPUT     Output file path (default: cornell_box.png)
    --tone-map METHOD   none, reinhard or exposure (default: reinhard)
    --quiet             Suppress progress output
    --verbose           Enable debug logging

Example:
    python -m examples.render_cornell_box --width 64 --height 64 --passes 2
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path

from pathtrace.core.errors import PathTraceError
from pathtrace.core.progressive import ProgressiveRenderer
from pathtrace.preview.display import TONE_MAP_METHODS
from pathtrace.preview.export import save_png
from pathtrace.scene.cornell_box import create_cornell_box_scene


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render the Cornell box scene.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--width", type=int, default=128, help="Image width in pixels (default: 128)"
    )
    parser.add_argument(
        "--height", type=int, default=128, help="Image height in pixels (default: 128)"
    )
    parser.add_argument(
        "--samples",
        type=int,
        default=16,
        help="Stratified samples per pixel per pass, truncated to a square (default: 16)",
    )
    parser.add_argument(
        "--passes", type=int, default=4, help="Number of progressive passes (default: 4)"
    )
    parser.add_argument("--depth", type=int, default=4, help="Bounce budget per path (default: 4)")
    parser.add_argument("--seed", type=int, default=0, help="Random seed (default: 0)")
    parser.add_argument("--workers", type=int, default=1, help="Rendering threads (default: 1)")
    parser.add_argument(
        "--output",
        type=str,
        default="cornell_box.png",
        help="Output file path (default: cornell_box.png)",
    )
    parser.add_argument(
        "--tone-map",
        choices=TONE_MAP_METHODS,
        default="reinhard",
        help="Tone mapping method (default: reinhard)",
    )
    parser.add_argument("--quiet", action="store_true", help="Suppress progress output")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def render_cornell_box(
    width: int = 128,
    height: int = 128,
    samples: int = 16,
    passes: int = 4,
    depth: int = 4,
    seed: int = 0,
    workers: int = 1,
    output_path: str = "cornell_box.png",
    tone_map: str = "reinhard",
    quiet: bool = False,
) -> Path:
    """Render the Cornell box scene and save to file.

    Returns:
        Path to the saved image file.
    """
    if not quiet:
        print(f"Creating Cornell box scene ({width}x{height})...")

    scene, camera = create_cornell_box_scene()
    renderer = ProgressiveRenderer(
        scene,
        camera,
        width,
        height,
        samples_per_pass=samples,
        depth=depth,
        seed=seed,
        workers=workers,
    )

    if not quiet:
        print(f"Rendering {passes} passes of {samples} samples per pixel...")

    start_time = time.time()

    def progress_callback(current: int, target: int) -> None:
        if not quiet:
            elapsed = time.time() - start_time
            progress_pct = (current / target) * 100 if target > 0 else 0
            print(
                f"\r  Progress: {current}/{target} passes ({progress_pct:.1f}%) - {elapsed:.1f}s",
                end="",
                flush=True,
            )

    renderer.render(num_passes=passes, callback=progress_callback)

    if not quiet:
        print()  # Newline after progress

    output_file = save_png(renderer.get_radiance(), output_path, tone_map=tone_map, gamma=2.2)

    total_time = time.time() - start_time
    if not quiet:
        print(f"Saved to: {output_file.absolute()}")
        print(f"Total time: {total_time:.2f}s")

    return output_file


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        render_cornell_box(
            width=args.width,
            height=args.height,
            samples=args.samples,
            passes=args.passes,
            depth=args.depth,
            seed=args.seed,
            workers=args.workers,
            output_path=args.output,
            tone_map=args.tone_map,
            quiet=args.quiet,
        )
        return 0
    except (PathTraceError, ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
