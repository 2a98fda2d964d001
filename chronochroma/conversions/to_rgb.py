from __future__ import annotations
from typing import Optional
import numpy as np
from numpy import ndarray as NDArray

from ..types.color_types import RGB, RGBLike, HSLLike
from ..types.format_type import CHANNEL_MODULUS
from ..utils.num_utils import is_unset, math_mod, round_half_up


def _hue_to_channel(t1: float, t2: float, t3: float) -> float:
    if t3 < 0:
        t3 += 360
    if t3 >= 360:
        t3 -= 360
    if t3 < 60:
        return (t2 - t1) * t3 / 60 + t1
    if t3 < 180:
        return t2
    if t3 < 240:
        return (t2 - t1) * (240 - t3) / 60 + t1
    return t1


def hsl_to_rgb(hsl: HSLLike) -> Optional[RGB]:
    """
    Convert HSL to 8-bit RGB (the values are not rounded).

    Args:
        hsl: hue in degrees, saturation and lightness in [0, 1]

    Returns:
        RGB wrapped into [0, 256), or None if a component is unset
    """
    h, s, l = hsl
    if is_unset(h) or is_unset(s) or is_unset(l):
        return None
    t2 = (l * (s + 1) if l <= 0.5 else l + s - l * s) * 255
    t1 = l * 2 * 255 - t2
    return RGB(
        math_mod(_hue_to_channel(t1, t2, h + 120), CHANNEL_MODULUS),
        math_mod(_hue_to_channel(t1, t2, h), CHANNEL_MODULUS),
        math_mod(_hue_to_channel(t1, t2, h - 120), CHANNEL_MODULUS),
    )


def normalize_rgb(rgb: Optional[RGBLike]) -> Optional[RGB]:
    """Round every channel and wrap it into [0, 256); out-of-range input wraps, it is not clamped."""
    if rgb is None:
        return None
    return RGB(*(math_mod(round_half_up(c), CHANNEL_MODULUS) for c in rgb))


def np_hsl_to_rgb(hsl: NDArray) -> NDArray:
    """
    Vectorized: Convert HSL to 8-bit RGB.

    Args:
        hsl: array of shape (..., 3): hue in degrees, saturation and lightness in [0, 1]

    Returns:
        rgb: array of shape (..., 3) in [0, 256), not rounded
    """
    hsl = np.asarray(hsl, dtype=float)
    h, s, l = hsl[..., 0], hsl[..., 1], hsl[..., 2]

    t2 = np.where(l <= 0.5, l * (s + 1), l + s - l * s) * 255
    t1 = l * 2 * 255 - t2

    def channel(t3: NDArray) -> NDArray:
        t3 = np.where(t3 < 0, t3 + 360, t3)
        t3 = np.where(t3 >= 360, t3 - 360, t3)
        return np.select(
            [t3 < 60, t3 < 180, t3 < 240],
            [(t2 - t1) * t3 / 60 + t1, t2, (t2 - t1) * (240 - t3) / 60 + t1],
            default=t1,
        )

    rgb = np.stack([channel(h + 120), channel(h), channel(h - 120)], axis=-1)
    return np.mod(rgb, CHANNEL_MODULUS)


def np_normalize_rgb(rgb: NDArray) -> NDArray:
    """Vectorized :func:`normalize_rgb`, returns an integer array."""
    rgb = np.asarray(rgb, dtype=float)
    return np.mod(np.floor(rgb + 0.5), CHANNEL_MODULUS).astype(np.int64)
