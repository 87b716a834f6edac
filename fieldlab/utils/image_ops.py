from __future__ import annotations

from typing import Tuple

import numpy as np
from PIL import Image, ImageColor


def hsl_color(hue: float, saturation: float, lightness: float) -> Tuple[int, int, int]:
    """RGB tuple for an HSL colour (hue in degrees, the rest in percent)."""
    hue = float(hue) % 360.0
    spec = f"hsl({hue:.3f}, {float(saturation):.3f}%, {float(lightness):.3f}%)"
    r, g, b = ImageColor.getrgb(spec)[:3]
    return r, g, b


def flatten(img: Image.Image, bg_color: Tuple[int, int, int] = (0, 0, 0)) -> Image.Image:
    """Composite an RGBA frame over a solid background, RGB out."""
    rgba = img.convert("RGBA")
    base = Image.new("RGBA", rgba.size, bg_color + (255,))
    return Image.alpha_composite(base, rgba).convert("RGB")


def gray_to_rgba(gray: np.ndarray) -> np.ndarray:
    """Expand an (h, w) uint8 gray field to opaque (h, w, 4) RGBA."""
    h, w = gray.shape
    out = np.empty((h, w, 4), dtype=np.uint8)
    out[..., 0:3] = gray[..., None]
    out[..., 3] = 255
    return out
