from __future__ import annotations

from typing import Sequence, Tuple

import numpy as np
from PIL import Image, ImageDraw


def _rgba(color: Sequence[int], alpha: float = 1.0) -> Tuple[int, int, int, int]:
    a = int(round(float(np.clip(alpha, 0.0, 1.0)) * 255))
    return int(color[0]), int(color[1]), int(color[2]), a


class Surface:
    """Fixed-size RGBA raster backed by a Pillow image.

    Offers the handful of primitives the simulations need: rectangle fill
    (optionally alpha-blended), filled circles, a bulk pixel write and a
    full clear. Width and height never change after construction.
    """

    def __init__(self, width: int, height: int):
        width = int(width)
        height = int(height)
        if width <= 0 or height <= 0:
            raise ValueError(f"surface size must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self._img = Image.new("RGBA", (width, height), (0, 0, 0, 0))
        self._draw = ImageDraw.Draw(self._img)

    @property
    def size(self) -> tuple[int, int]:
        return self.width, self.height

    def clear(self) -> None:
        self._img.paste((0, 0, 0, 0), (0, 0, self.width, self.height))

    def fill_rect(self, color: Sequence[int], alpha: float = 1.0, box=None) -> None:
        x0, y0, x1, y1 = box if box is not None else (0, 0, self.width, self.height)
        x0, y0 = max(0, int(x0)), max(0, int(y0))
        x1, y1 = min(self.width, int(x1)), min(self.height, int(y1))
        if x1 <= x0 or y1 <= y0:
            return
        ink = _rgba(color, alpha)
        if ink[3] >= 255:
            self._img.paste(ink, (x0, y0, x1, y1))
            return
        # source-over, same as a translucent canvas fill
        overlay = Image.new("RGBA", (x1 - x0, y1 - y0), ink)
        self._img.alpha_composite(overlay, dest=(x0, y0))

    def fill_circle(self, x: float, y: float, radius: float, color: Sequence[int]) -> None:
        r = max(0.0, float(radius))
        # ellipse boxes are inclusive, a radius-r disk spans 2r pixels
        x1 = max(x - r, x + r - 1)
        y1 = max(y - r, y + r - 1)
        self._draw.ellipse((x - r, y - r, x1, y1), fill=_rgba(color))

    def put_pixels(self, buffer: np.ndarray) -> None:
        buf = np.asarray(buffer)
        if buf.shape != (self.height, self.width, 4):
            raise ValueError(
                f"expected buffer of shape {(self.height, self.width, 4)}, got {buf.shape}"
            )
        frame = Image.fromarray(np.ascontiguousarray(buf, dtype=np.uint8))
        self._img.paste(frame, (0, 0))

    def to_array(self) -> np.ndarray:
        """Current pixels as a (height, width, 4) uint8 array."""
        return np.array(self._img, dtype=np.uint8)

    def to_image(self) -> Image.Image:
        return self._img.copy()
