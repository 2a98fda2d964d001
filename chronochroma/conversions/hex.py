from __future__ import annotations
from typing import Optional

from ..types.color_types import RGB, RGBLike
from ..utils.num_utils import is_unset, round_half_up, safe_mult


def hex_to_rgb(hex_str: Optional[str]) -> Optional[RGB]:
    """
    Convert ``#rgb`` or ``#rrggbb`` (without alpha) to RGB.

    Three-digit colors are expanded by doubling every digit.
    """
    if hex_str is None:
        return None
    digits = hex_str[1:] if hex_str.startswith("#") else hex_str
    if len(digits) == 3:
        digits = "".join(d * 2 for d in digits)
    return RGB(int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))


def _component_to_hex(component: int) -> str:
    return f"{component:02x}"[:2]


def rgb_to_hex(rgb: RGBLike) -> Optional[str]:
    """Lowercase ``#rrggbb``, or None if a channel is unset."""
    if rgb is None or any(is_unset(c) for c in rgb):
        return None
    return "#" + "".join(_component_to_hex(round_half_up(c)) for c in rgb)


def alpha_to_hex(alpha: float, length: int) -> str:
    """
    Encode alpha as ``length`` hex digits.

    Args:
        alpha: alpha in [0, 1]
        length: 1 for ``#rgba``, 2 for ``#rrggbbaa``
    """
    base = 16 ** length - 1
    return f"{round_half_up(alpha * base):0{length}x}"


def hex_to_alpha(hex_str: str, length: int) -> float:
    """
    Decode hex alpha digits.

    The value is rounded to two decimals, which is what browsers report for
    a composited alpha byte.
    """
    base = 16 ** length - 1
    return safe_mult(round_half_up(100 * (int(hex_str, 16) / base)), 0.01)
