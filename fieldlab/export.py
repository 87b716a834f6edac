"""Headless frame export for the fieldlab simulations.

Drives a single simulation on a deterministic timeline (one frame every
1 / fps seconds) and writes the frames as an animated GIF or a numbered PNG
sequence.

Usage:
  fieldlab-export waves out.gif --frames 120 --fps 30
  fieldlab-export voronoi frames/ --frames 300 --seed 7
"""
from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import List, Optional

import imageio.v3 as iio
import numpy as np
from PIL import Image

from fieldlab.config import DEFAULT_FPS, DEFAULT_HEIGHT, DEFAULT_WIDTH, DEMOS
from fieldlab.core.loop import FrameLoop
from fieldlab.demos import build_demo
from fieldlab.utils.image_ops import flatten
from fieldlab.utils.surface import Surface

log = logging.getLogger(__name__)


def render_frames(
    demo: str,
    frames: int,
    fps: int = DEFAULT_FPS,
    width: int = DEFAULT_WIDTH,
    height: int = DEFAULT_HEIGHT,
    seed: Optional[int] = None,
    upscale: float = 1.0,
) -> List[Image.Image]:
    surface = Surface(width, height)
    dt = 1.0 / max(1, int(fps))
    timeline = [0.0]
    sim = build_demo(demo, surface, np.random.default_rng(seed), clock=lambda: timeline[0])
    out: List[Image.Image] = []

    def capture():
        im = flatten(surface.to_image())
        if abs(upscale - 1.0) > 1e-6:
            im = im.resize((int(im.width * upscale), int(im.height * upscale)), Image.NEAREST)
        out.append(im)

    def advance():
        timeline[0] += dt

    FrameLoop([sim.update, capture], wait_for_frame=advance).run(max_frames=frames)
    return out


def export(demo: str, path: str, frames: int = 120, fps: int = DEFAULT_FPS, loop: bool = True,
           **kwargs) -> List[str]:
    """Render `frames` frames of `demo` and write them to `path`.

    A path ending in .gif gets an animated GIF, anything else is treated as a
    directory for a PNG sequence. Returns the written file names.
    """
    images = render_frames(demo, frames, fps=fps, **kwargs)
    arrays = [np.asarray(im) for im in images]
    if path.lower().endswith(".gif"):
        dur = max(10, int(1000 / max(1, fps)))
        iio.imwrite(path, np.stack(arrays), extension=".gif", duration=dur, loop=0 if loop else 1)
        log.info("wrote %d frames to %s", len(arrays), path)
        return [path]
    os.makedirs(path, exist_ok=True)
    written = []
    for i, fr in enumerate(arrays):
        fn = os.path.join(path, f"{demo}_{i:05d}.png")
        iio.imwrite(fn, fr)
        written.append(fn)
    log.info("wrote %d frames to %s", len(written), path)
    return written


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="fieldlab-export", description="Render a simulation to GIF or PNG frames.")
    p.add_argument("demo", choices=DEMOS)
    p.add_argument("output", help="GIF file or directory for PNG frames")
    p.add_argument("--frames", type=int, default=120)
    p.add_argument("--fps", type=int, default=DEFAULT_FPS)
    p.add_argument("--width", type=int, default=DEFAULT_WIDTH)
    p.add_argument("--height", type=int, default=DEFAULT_HEIGHT)
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--upscale", type=float, default=1.0)
    p.add_argument("--no-loop", action="store_true", help="play the GIF once")
    p.add_argument("-v", "--verbose", action="store_true")
    return p


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="[%(levelname)s] %(name)s: %(message)s",
    )
    if args.frames <= 0:
        log.error("--frames must be positive")
        return 2
    try:
        export(
            args.demo,
            args.output,
            frames=args.frames,
            fps=args.fps,
            loop=not args.no_loop,
            width=args.width,
            height=args.height,
            seed=args.seed,
            upscale=args.upscale,
        )
    except (OSError, ValueError) as e:
        log.error("export failed: %s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
