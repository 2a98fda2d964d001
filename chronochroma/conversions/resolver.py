from __future__ import annotations
import logging
from typing import Optional, Protocol

from PIL import ImageColor
from boundednumbers.functions import clamp, clamp01

from ..types.color_types import HSL, RGB, ResolvedColor
from ..utils.num_utils import round_half_up
from .color_string import regexp_hex, regexp_hsl, regexp_rgb, to_number, percent_or_fraction
from .hex import hex_to_alpha, hex_to_rgb
from .to_rgb import hsl_to_rgb, normalize_rgb

log = logging.getLogger(__name__)

OPAQUE_BLACK = ResolvedColor(0, 0, 0, 1, False)


class ColorResolver(Protocol):
    """Anything that can tell which rgba quadruple a color string renders as."""

    def resolve(self, color_string: Optional[str]) -> ResolvedColor:
        ...


def _from_alpha_byte(rgb: RGB, alpha_byte: int) -> ResolvedColor:
    alpha_byte = int(clamp(alpha_byte, 0, 255))
    if alpha_byte == 0:
        # fully transparent pixels carry no color
        rgb = RGB(0, 0, 0)
    return ResolvedColor(
        int(rgb.r), int(rgb.g), int(rgb.b),
        hex_to_alpha(f"{alpha_byte:x}", 2),
        alpha_byte != 255,
    )


def _alpha_byte(alpha: float) -> int:
    if alpha != alpha:
        return 255
    return round_half_up(clamp01(alpha) * 255)


class CSSColorResolver:
    """
    Resolve CSS color strings the way a 2D canvas renders them.

    Structured notations are clamped to their valid ranges, CSS named colors
    are looked up in Pillow's ``ImageColor`` table, and anything unresolvable
    renders as opaque black.

    Args:
        hex_alpha_supported: whether ``#rrggbbaa`` / ``#rgba`` are understood
    """

    def __init__(self, hex_alpha_supported: bool = True):
        self.hex_alpha_supported = hex_alpha_supported

    def resolve(self, color_string: Optional[str]) -> ResolvedColor:
        text = (color_string or "#000").strip()
        resolved = self._resolve_structured(text)
        if resolved is None:
            resolved = self._resolve_keyword(text.lower())
        if resolved is None:
            log.debug("Unresolvable color string %r, rendering as black", color_string)
            return OPAQUE_BLACK
        return resolved

    def _resolve_structured(self, text: str) -> Optional[ResolvedColor]:
        match = regexp_hex.match(text)
        if match:
            hex_str = match.group(1) or match.group(3)
            alpha_digits = match.group(2) or match.group(4)
            if alpha_digits is None:
                return _from_alpha_byte(hex_to_rgb(hex_str), 255)
            if not self.hex_alpha_supported:
                return None
            # a single alpha digit is doubled like the color digits
            alpha_byte = int(alpha_digits * (3 - len(alpha_digits)), 16)
            return _from_alpha_byte(hex_to_rgb(hex_str), alpha_byte)

        match = regexp_rgb.match(text)
        if match:
            rgb = RGB(*(int(clamp(int(match.group(i)), 0, 255)) for i in (2, 3, 4)))
            alpha = to_number(match.group(5)) if match.group(5) is not None else 1
            return _from_alpha_byte(rgb, _alpha_byte(alpha))

        match = regexp_hsl.match(text)
        if match:
            hsl = HSL(
                to_number(match.group(2)),
                clamp01(percent_or_fraction(match.group(3))),
                clamp01(percent_or_fraction(match.group(4))),
            )
            rgb = hsl_to_rgb(hsl)
            if rgb is None:
                return None
            alpha = to_number(match.group(5)) if match.group(5) is not None else 1
            return _from_alpha_byte(normalize_rgb(rgb), _alpha_byte(alpha))
        return None

    def _resolve_keyword(self, name: str) -> Optional[ResolvedColor]:
        if name == "transparent":
            return _from_alpha_byte(RGB(0, 0, 0), 0)
        if name not in ImageColor.colormap:
            return None
        r, g, b = ImageColor.getrgb(name)[:3]
        return _from_alpha_byte(RGB(r, g, b), 255)
