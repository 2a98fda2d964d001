from __future__ import annotations
from typing import Optional
import numpy as np
from numpy import ndarray as NDArray

from ..types.color_types import HSL, RGBLike, HSLLike
from ..utils.num_utils import is_unset, math_mod, normalized_clamp, to_fixed


def rgb_to_hsl(rgb: RGBLike, default_hue: Optional[float] = None) -> Optional[HSL]:
    """
    Convert 8-bit RGB to HSL (the values are not rounded).

    Args:
        rgb: (r, g, b) in [0, 255]
        default_hue: hue to keep when the color is achromatic, so the hue
            does not jump when lightness passes through gray

    Returns:
        HSL with hue in [0, 360), saturation and lightness in [0, 1],
        or None if a channel is unset
    """
    r, g, b = rgb
    if is_unset(r) or is_unset(g) or is_unset(b):
        return None
    max_c = max(r, g, b)
    min_c = min(r, g, b)

    l = (max_c + min_c) / (2 * 255)
    # chroma is kept in 0..255 for precision
    chroma = max_c - min_c

    if chroma == 0:
        hue = default_hue if default_hue and not is_unset(default_hue) else 0
        return HSL(hue, 0, normalized_clamp(l))

    s = chroma / (255 - abs(max_c + min_c - 255))
    if max_c == r:
        h = ((g - b) * 60) / chroma
    elif max_c == g:
        h = ((b - r) * 60) / chroma + 120
    else:
        h = ((r - g) * 60) / chroma + 240
    return HSL(math_mod(h, 360), normalized_clamp(s), normalized_clamp(l))


def normalize_hsl(hsl: Optional[HSLLike], precision: int = 0) -> Optional[HSL]:
    """
    Round hue to ``precision`` digits and wrap it into [0, 360); round
    saturation and lightness to ``precision + 2`` digits and clamp them
    into [0, 1].
    """
    if hsl is None:
        return None
    precision = precision or 0
    h, s, l = hsl
    return HSL(
        math_mod(to_fixed(float(h), precision), 360),
        normalized_clamp(to_fixed(float(s), precision + 2)),
        normalized_clamp(to_fixed(float(l), precision + 2)),
    )


def np_rgb_to_hsl(rgb: NDArray, default_hue: float | NDArray = 0) -> NDArray:
    """
    Vectorized: Convert 8-bit RGB to HSL.

    Args:
        rgb: array of shape (..., 3) with channels in [0, 255]
        default_hue: hue used where the color is achromatic

    Returns:
        hsl: array of shape (..., 3): (hue [0,360), saturation [0,1], lightness [0,1])
    """
    rgb = np.asarray(rgb, dtype=float)
    r, g, b = rgb[..., 0], rgb[..., 1], rgb[..., 2]

    max_c = np.maximum.reduce([r, g, b])
    min_c = np.minimum.reduce([r, g, b])
    chroma = max_c - min_c
    lightness = np.clip((max_c + min_c) / (2 * 255), 0.0, 1.0)

    chromatic = chroma > 0
    safe_chroma = np.where(chromatic, chroma, 1.0)
    denominator = 255 - np.abs(max_c + min_c - 255)
    safe_denominator = np.where(denominator > 0, denominator, 1.0)
    saturation = np.where(chromatic, np.clip(chroma / safe_denominator, 0.0, 1.0), 0.0)

    hue = np.where(
        max_c == r,
        (g - b) * 60 / safe_chroma,
        np.where(
            max_c == g,
            (b - r) * 60 / safe_chroma + 120,
            (r - g) * 60 / safe_chroma + 240,
        ),
    )
    hue = np.mod(hue, 360)
    hue = np.where(hue >= 360, 0.0, hue)
    hue = np.where(chromatic, hue, np.broadcast_to(np.asarray(default_hue, dtype=float), hue.shape))

    return np.stack([hue, saturation, lightness], axis=-1)


def np_normalize_hsl(hsl: NDArray, precision: int = 0) -> NDArray:
    """Vectorized :func:`normalize_hsl` (ties rounded half up)."""
    hsl = np.asarray(hsl, dtype=float)
    hue_scale = 10.0 ** precision
    sl_scale = 10.0 ** (precision + 2)
    h = np.mod(np.floor(hsl[..., 0] * hue_scale + 0.5) / hue_scale, 360)
    h = np.where(h >= 360, 0.0, h)
    s = np.clip(np.floor(hsl[..., 1] * sl_scale + 0.5) / sl_scale, 0.0, 1.0)
    l = np.clip(np.floor(hsl[..., 2] * sl_scale + 0.5) / sl_scale, 0.0, 1.0)
    return np.stack([h, s, l], axis=-1)
