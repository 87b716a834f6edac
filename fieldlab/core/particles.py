from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

import numpy as np

from fieldlab.utils.surface import Surface

log = logging.getLogger(__name__)


@dataclass
class FieldParams:
    count: int = 200
    force_scale: float = 0.05
    accel_gain: float = 50.0
    initial_speed: float = 1.0
    dot_radius: float = 2.0
    fade_alpha: float = 0.2
    fade_color: Tuple[int, int, int] = (0, 0, 0)
    dot_color: Tuple[int, int, int] = (255, 255, 255)


class ParticleState:
    """Positions and velocities of a fixed particle pool, as numpy arrays."""

    def __init__(self):
        self.x = np.zeros(0)
        self.y = np.zeros(0)
        self.vx = np.zeros(0)
        self.vy = np.zeros(0)

    def __len__(self):
        return len(self.x)


def init_particles(state: ParticleState, width: int, height: int, rng: np.random.Generator,
                   params: FieldParams | None = None):
    params = params or FieldParams()
    n = int(params.count)
    state.x = rng.random(n) * width
    state.y = rng.random(n) * height
    state.vx = (rng.random(n) - 0.5) * 2 * params.initial_speed
    state.vy = (rng.random(n) - 0.5) * 2 * params.initial_speed


def wrap_positions(pos: np.ndarray, size: float) -> np.ndarray:
    """Single toroidal wrap per axis; values more than one size out stay out."""
    out = np.where(pos < 0, pos + size, pos)
    return np.where(out > size, out - size, out)


def step_particles(state: ParticleState, dt: float, t: float, width: int, height: int,
                   params: FieldParams | None = None):
    params = params or FieldParams()
    ax = np.sin(state.y * params.force_scale + t)
    ay = np.cos(state.x * params.force_scale + t)
    gain = dt * params.accel_gain
    state.vx = state.vx + ax * gain
    state.vy = state.vy + ay * gain
    state.x = wrap_positions(state.x + state.vx * dt, width)
    state.y = wrap_positions(state.y + state.vy * dt, height)


def render_particles(surface: Surface, state: ParticleState, params: FieldParams | None = None):
    params = params or FieldParams()
    surface.fill_rect(params.fade_color, alpha=params.fade_alpha)
    r = params.dot_radius
    for x, y in zip(state.x, state.y):
        surface.fill_circle(float(x), float(y), r, params.dot_color)


class ParticleField:
    """Particle field with a fading trail, driven once per frame by `update`.

    The force phase is the number of seconds since the field was created,
    read from `clock` (defaults to `time.perf_counter`).
    """

    def __init__(
        self,
        surface: Surface,
        params: FieldParams | None = None,
        rng: np.random.Generator | None = None,
        clock: Callable[[], float] = time.perf_counter,
    ):
        self.surface = surface
        self.params = params or FieldParams()
        rng = rng if rng is not None else np.random.default_rng()
        self.clock = clock
        self.state = ParticleState()
        init_particles(self.state, surface.width, surface.height, rng, self.params)
        self._epoch = clock()
        self._last = self._epoch
        log.debug("particle field: %d particles on %dx%d", len(self.state), *surface.size)

    def step(self, dt: float, t: float):
        step_particles(self.state, dt, t, self.surface.width, self.surface.height, self.params)

    def draw(self):
        render_particles(self.surface, self.state, self.params)

    def resume(self):
        """Restart frame timing after a pause so the gap is not one huge step."""
        self._last = self.clock()

    def update(self, now: Optional[float] = None):
        if now is None:
            now = self.clock()
        dt = now - self._last
        self._last = now
        self.step(dt, now - self._epoch)
        self.draw()
