#!/usr/bin/env python3
"""Render the four-sphere demo scene or a scene loaded from JSON.

This script renders the demo scene (ivory, glass, red rubber and mirror
spheres under three point lights) and writes it to an image file.

Usage:
    python -m examples.render_spheres [options]

Options:
    --width WIDTH       Image width in pixels (default: 1024)
    --height HEIGHT     Image height in pixels (default: 768)
    --fov DEGREES       Field of view in degrees (default: 90)
    --no-shadows        Disable shadow rays
    --no-secondary      Disable reflection and refraction rays
    --output OUTPUT     Output file path (default: out.png)
    --scene FILE        Render a scene loaded from a JSON file instead of the demo
    --save-scene FILE   Write the rendered scene to a JSON file
    --cpu               Force the CPU backend
    --quiet             Suppress progress output

Example:
    python -m examples.render_spheres --width 512 --height 384 --output spheres.jpg
"""

from __future__ import annotations

import argparse
import json
import sys
import time
from pathlib import Path

import taichi as ti


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render the four-sphere demo scene.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--width",
        type=int,
        default=1024,
        help="Image width in pixels (default: 1024)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=768,
        help="Image height in pixels (default: 768)",
    )
    parser.add_argument(
        "--fov",
        type=float,
        default=90.0,
        help="Field of view in degrees (default: 90)",
    )
    parser.add_argument(
        "--no-shadows",
        action="store_true",
        help="Disable shadow rays",
    )
    parser.add_argument(
        "--no-secondary",
        action="store_true",
        help="Disable reflection and refraction rays",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="out.png",
        help="Output file path (default: out.png)",
    )
    parser.add_argument(
        "--scene",
        type=str,
        default=None,
        help="Render a scene loaded from a JSON file instead of the demo",
    )
    parser.add_argument(
        "--save-scene",
        type=str,
        default=None,
        help="Write the rendered scene to a JSON file",
    )
    parser.add_argument(
        "--cpu",
        action="store_true",
        help="Force the CPU backend",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    return parser.parse_args()


def load_scene_file(scene_path: str):
    """Load a scene from a JSON file written by ``--save-scene``.

    The file is validated by uploading it through a SceneManager.

    Raises:
        ValueError: If the file is not valid JSON or describes an invalid scene.
        OSError: If the file cannot be read.
    """
    from whitted.scene.manager import SceneManager

    with open(scene_path, encoding="utf-8") as f:
        data = json.load(f)

    manager = SceneManager()
    manager.from_dict(data)
    return manager.to_scene()


def save_scene_file(scene, scene_path: str) -> None:
    """Write a scene to a JSON file readable by ``--scene``."""
    from whitted.scene.manager import load_scene

    with open(scene_path, "w", encoding="utf-8") as f:
        json.dump(load_scene(scene).to_dict(), f, indent=2)


def render_spheres(
    width: int = 1024,
    height: int = 768,
    fov_degrees: float = 90.0,
    shadows: bool = True,
    secondary_rays: bool = True,
    output_path: str = "out.png",
    scene_path: str | None = None,
    save_scene_path: str | None = None,
    quiet: bool = False,
) -> Path:
    """Render a scene and save it to a file.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        fov_degrees: Field of view in degrees.
        shadows: Cast shadow rays.
        secondary_rays: Trace reflection and refraction rays.
        output_path: Output file path; the extension selects the format.
        scene_path: JSON scene file to render. Defaults to the demo scene.
        save_scene_path: If given, the rendered scene is also written here.
        quiet: If True, suppress progress output.

    Returns:
        Path to the saved image file.
    """
    # Lazy imports to allow Taichi initialization first
    from whitted.camera.pinhole import RenderSettings
    from whitted.core.integrator import render
    from whitted.preview.export import save_image
    from whitted.scene.presets import create_demo_scene

    settings = RenderSettings.from_degrees(
        fov_degrees, shadows=shadows, secondary_rays=secondary_rays
    )

    if scene_path is None:
        scene = create_demo_scene()
        scene_name = "demo scene"
    else:
        scene = load_scene_file(scene_path)
        scene_name = scene_path

    if save_scene_path is not None:
        save_scene_file(scene, save_scene_path)
        if not quiet:
            print(f"Scene written to: {Path(save_scene_path).absolute()}")

    if not quiet:
        print(
            f"Rendering {scene_name} ({len(scene.spheres)} spheres, {len(scene.lights)} lights, "
            f"{width}x{height}, fov {fov_degrees:g} deg)..."
        )

    start_time = time.time()
    framebuffer = render(scene, width, height, settings)
    render_time = time.time() - start_time

    output_file = Path(output_path)
    save_image(framebuffer, str(output_file))

    if not quiet:
        print(f"Saved to: {output_file.absolute()}")
        print(f"Render time: {render_time:.2f}s")

    return output_file


def main() -> int:
    """Main entry point."""
    args = parse_args()

    # Initialize Taichi
    # Taichi falls back to CPU when no GPU backend is available
    arch = ti.cpu if args.cpu else ti.gpu
    ti.init(arch=arch)

    try:
        render_spheres(
            width=args.width,
            height=args.height,
            fov_degrees=args.fov,
            shadows=not args.no_shadows,
            secondary_rays=not args.no_secondary,
            output_path=args.output,
            scene_path=args.scene,
            save_scene_path=args.save_scene,
            quiet=args.quiet,
        )
        return 0
    except (ValueError, RuntimeError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
