# main.py
import argparse
import random
import sys
from typing import List, Optional

from pathtracer.config import QUALITY_LEVELS, Scene, load_scene, save_scene
from pathtracer.renderer.raytracer import Renderer
from pathtracer.scenes import cover_scene, earth_scene


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Sphere path tracer")
    parser.add_argument("scene", nargs="?", help="Path to a JSON scene file")
    parser.add_argument("output", help="Output PNG path")
    parser.add_argument("--demo", choices=["cover", "earth"],
                        help="Render a built-in scene instead of a scene file")
    parser.add_argument("--texture-dir", default="data",
                        help="Directory holding earth.jpg and moon.jpg for --demo earth")
    parser.add_argument("--width", type=int, help="Override image width")
    parser.add_argument("--height", type=int, help="Override image height")
    parser.add_argument("--samples", type=int, help="Override samples per pixel")
    parser.add_argument("--depth", type=int, help="Override maximum bounce depth")
    parser.add_argument("--quality", choices=list(QUALITY_LEVELS),
                        help="Apply a quality preset before other overrides")
    parser.add_argument("--workers", type=int, default=None,
                        help="Number of worker processes (default: CPU count)")
    parser.add_argument("--rows-per-band", type=int, default=None,
                        help="Rows rendered per work unit")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--frames", type=int, default=1,
                        help="Render N frames, rotating textures a full turn")
    parser.add_argument("--save-scene", metavar="PATH",
                        help="Also write the final scene description as JSON")
    parser.add_argument("--debug", action="store_true", help="Print per-band timings")
    return parser


def frame_filename(output: str, index: int, frames: int) -> str:
    if frames == 1:
        return output
    stem = output[:-4] if output.lower().endswith(".png") else output
    return f"{stem}_{index:03d}.png"


def build_scene(args, rot: float) -> Scene:
    if args.demo == "cover":
        scene = cover_scene(rng=random.Random(args.seed))
    elif args.demo == "earth":
        scene = earth_scene(args.texture_dir, rot)
    else:
        scene = load_scene(args.scene)
        if rot:
            scene = scene.with_texture_rotation(rot)

    if args.quality:
        scene = scene.with_quality(args.quality)
    return scene.with_overrides(width=args.width, height=args.height,
                                samples_per_pixel=args.samples, max_depth=args.depth)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.demo and not args.scene:
        parser.error("a scene file is required unless --demo is given")
    if args.frames < 1:
        parser.error("--frames must be at least 1")

    try:
        for i in range(args.frames):
            filename = frame_filename(args.output, i, args.frames)
            print(f"\n=== Rendering {filename} ===")
            scene = build_scene(args, i / args.frames)
            renderer = Renderer(scene, workers=args.workers,
                                rows_per_band=args.rows_per_band,
                                seed=args.seed, debug_mode=args.debug)
            renderer.render(filename)
        if args.save_scene:
            save_scene(scene, args.save_scene)
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
