from __future__ import annotations

import time
from typing import Callable, Optional

import numpy as np

from fieldlab.config import DEMOS
from fieldlab.core.growth import RadialGrowth
from fieldlab.core.interference import WaveField
from fieldlab.core.particles import ParticleField
from fieldlab.utils.surface import Surface


def build_demo(name: str, surface: Surface, rng: Optional[np.random.Generator] = None,
               clock: Callable[[], float] = time.perf_counter):
    """Create the named simulation bound to `surface`.

    Raises KeyError for an unknown name.
    """
    if name not in DEMOS:
        raise KeyError(name)
    rng = rng if rng is not None else np.random.default_rng()
    if name == "fields":
        return ParticleField(surface, rng=rng, clock=clock)
    if name == "voronoi":
        return RadialGrowth(surface, rng=rng)
    return WaveField(surface)
