from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Sequence, Tuple

import numpy as np

from fieldlab.utils.image_ops import hsl_color
from fieldlab.utils.surface import Surface

log = logging.getLogger(__name__)


@dataclass
class GrowthParams:
    count: int = 20
    initial_radius: float = 1.0
    growth_step: float = 0.5
    gap: float = 2.0
    saturation: float = 80.0
    lightness: float = 60.0


@dataclass
class Seed:
    x: float
    y: float
    radius: float
    color: Tuple[int, int, int]
    growing: bool = True


def init_seeds(width: int, height: int, rng: np.random.Generator,
               params: GrowthParams | None = None) -> List[Seed]:
    params = params or GrowthParams()
    seeds = []
    for _ in range(int(params.count)):
        x = float(rng.random() * width)
        y = float(rng.random() * height)
        hue = float(rng.random() * 360.0)
        color = hsl_color(hue, params.saturation, params.lightness)
        seeds.append(Seed(x, y, params.initial_radius, color))
    return seeds


def touches_boundary(seed: Seed, width: int, height: int) -> bool:
    r = seed.radius
    return (
        seed.x - r <= 0
        or seed.x + r >= width
        or seed.y - r <= 0
        or seed.y + r >= height
    )


class RadialGrowth:
    """Growing disks that freeze on contact with an edge or a neighbour.

    Seeds are visited in creation order each frame. A seed compares itself
    against the radii of the other seeds as they stand at that point in the
    pass, so seeds earlier in the list may already have grown this frame.
    Centres never move, so centre distances are computed once.
    """

    def __init__(
        self,
        surface: Surface,
        params: GrowthParams | None = None,
        rng: np.random.Generator | None = None,
        seeds: Sequence[Seed] | None = None,
    ):
        self.surface = surface
        self.params = params or GrowthParams()
        if seeds is None:
            rng = rng if rng is not None else np.random.default_rng()
            seeds = init_seeds(surface.width, surface.height, rng, self.params)
        self.seeds = list(seeds)
        centers = np.array([(s.x, s.y) for s in self.seeds], dtype=float).reshape(-1, 2)
        diff = centers[:, None, :] - centers[None, :, :]
        self._dist = np.hypot(diff[..., 0], diff[..., 1])
        log.debug("radial growth: %d seeds on %dx%d", len(self.seeds), *surface.size)

    @property
    def done(self) -> bool:
        return not any(s.growing for s in self.seeds)

    def _touches_neighbour(self, i: int, radii: np.ndarray) -> bool:
        reach = radii[i] + radii + self.params.gap
        hit = self._dist[i] < reach
        hit[i] = False
        return bool(hit.any())

    def step(self):
        w, h = self.surface.size
        radii = np.array([s.radius for s in self.seeds], dtype=float)
        for i, seed in enumerate(self.seeds):
            if not seed.growing:
                continue
            if touches_boundary(seed, w, h) or self._touches_neighbour(i, radii):
                seed.growing = False
                log.debug("seed %d frozen at r=%.1f", i, seed.radius)
                continue
            seed.radius += self.params.growth_step
            radii[i] = seed.radius

    def draw(self):
        self.surface.clear()
        for seed in self.seeds:
            self.surface.fill_circle(seed.x, seed.y, seed.radius, seed.color)

    def update(self):
        self.step()
        self.draw()
