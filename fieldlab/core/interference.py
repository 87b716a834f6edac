from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

import numpy as np

from fieldlab.utils.image_ops import gray_to_rgba
from fieldlab.utils.surface import Surface


@dataclass
class WaveParams:
    wavelength: float = 20.0
    phase_step: float = 0.1
    source_a: Tuple[float, float] = (0.3, 0.5)
    source_b: Tuple[float, float] = (0.7, 0.5)


@dataclass(frozen=True)
class WaveSource:
    x: float
    y: float


def source_distances(width: int, height: int, source: WaveSource) -> np.ndarray:
    yy, xx = np.mgrid[0:height, 0:width].astype(np.float64)
    return np.hypot(xx - source.x, yy - source.y)


def interference(d1: np.ndarray, d2: np.ndarray, time: float, wavelength: float) -> np.ndarray:
    """Mean of two cosine waves, in [-1, 1]."""
    w1 = np.cos(d1 / wavelength * 2 * math.pi - time)
    w2 = np.cos(d2 / wavelength * 2 * math.pi - time)
    return (w1 + w2) / 2


def intensity_to_gray(intensity: np.ndarray) -> np.ndarray:
    gray = np.floor((np.asarray(intensity) + 1.0) * 127.5)
    return np.clip(gray, 0, 255).astype(np.uint8)


class WaveField:
    """Two-source interference pattern, recomputed each frame.

    The phase advances by a fixed step per rendered frame, not per second.
    Per-pixel source distances are fixed and computed once at setup.
    """

    def __init__(self, surface: Surface, params: WaveParams | None = None):
        self.surface = surface
        self.params = params or WaveParams()
        w, h = surface.size
        ax, ay = self.params.source_a
        bx, by = self.params.source_b
        self.sources = (WaveSource(w * ax, h * ay), WaveSource(w * bx, h * by))
        self._d1 = source_distances(w, h, self.sources[0])
        self._d2 = source_distances(w, h, self.sources[1])
        self.time = 0.0

    def step(self):
        self.time += self.params.phase_step

    def gray(self) -> np.ndarray:
        return intensity_to_gray(interference(self._d1, self._d2, self.time, self.params.wavelength))

    def render_frame(self) -> np.ndarray:
        return gray_to_rgba(self.gray())

    def update(self):
        self.step()
        self.surface.put_pixels(self.render_frame())
