"""
Structured color string grammars.

Three grammars are recognized: ``rgb(a)(r, g, b[, a])``,
``hsl(a)(h, s[%], l[%][, a])`` and ``#rgb[a]`` / ``#rrggbb[aa]``. Anything
else is left to a :class:`~chronochroma.conversions.resolver.CSSColorResolver`.
"""
from __future__ import annotations
import math
import re
from typing import Optional

from ..types.color_types import HSL, RGB, ParsedColor, RGBLike, HSLLike
from ..types.format_type import ColorFormat
from ..utils.num_utils import format_number, normalized_clamp, safe_mult
from .hex import alpha_to_hex, hex_to_alpha
from .to_hsl import normalize_hsl
from .to_rgb import normalize_rgb

_NUMBER = r"-?\d*(?:\.(?:\d*)?)?"

regexp_rgb = re.compile(
    r"^\s*rgb(a)?\(\s*(-?\d+)\s*,\s*(-?\d+)\s*,\s*(-?\d+)(?:\s*,\s*(" + _NUMBER + r"))?\s*\)\s*$"
)
regexp_hsl = re.compile(
    r"^\s*hsl(a)?\(\s*(-?\d+(?:\.\d*)?)\s*,\s*(" + _NUMBER + r"%?)\s*,\s*(" + _NUMBER + r"%?)"
    r"(?:\s*,\s*(" + _NUMBER + r"))?\s*\)\s*$"
)
regexp_hex = re.compile(
    r"^\s*(?:(#[A-Fa-f0-9]{6})([A-Fa-f0-9]{2})?|(#[A-Fa-f0-9]{3})([A-Fa-f0-9])?)\s*$"
)
regexp_percent = re.compile(r"(" + _NUMBER + r")%")


def to_number(text: Optional[str]) -> float:
    """Numeric value of a matched token; an empty token is 0, a malformed one NaN."""
    if text is None:
        return math.nan
    text = text.strip()
    if not text:
        return 0
    try:
        return float(text)
    except ValueError:
        return math.nan


def _alpha_from_group(has_alpha_group: bool, token: Optional[str], without_alpha: bool) -> tuple[float, bool]:
    if without_alpha or not has_alpha_group:
        return 1, False
    alpha = normalized_clamp(to_number(token)) if token is not None else 1
    if math.isnan(alpha):
        alpha = 1
    return alpha, True


def percent_or_fraction(token: str) -> float:
    match = regexp_percent.search(token)
    if match:
        return safe_mult(to_number(match.group(1)), 0.01)
    return to_number(token)


def parse_color_string(
    color_string: str,
    hsl_precision: int = 0,
    without_alpha: bool = False,
    hex_alpha_supported: bool = True,
) -> Optional[ParsedColor]:
    """
    Decode one of the structured grammars.

    Returns:
        ParsedColor, or None when no structured grammar matches
    """
    match = regexp_hsl.match(color_string)
    if match:
        alpha, alpha_mode = _alpha_from_group(match.group(1) is not None, match.group(5), without_alpha)
        hsl = normalize_hsl(
            HSL(to_number(match.group(2)), percent_or_fraction(match.group(3)), percent_or_fraction(match.group(4))),
            hsl_precision,
        )
        return ParsedColor(ColorFormat.HSL, ColorFormat.HSL, alpha, alpha_mode, hsl=hsl)

    match = regexp_rgb.match(color_string)
    if match:
        alpha, alpha_mode = _alpha_from_group(match.group(1) is not None, match.group(5), without_alpha)
        rgb = normalize_rgb(RGB(int(match.group(2)), int(match.group(3)), int(match.group(4))))
        return ParsedColor(ColorFormat.RGB, ColorFormat.RGB, alpha, alpha_mode, rgb=rgb)

    match = regexp_hex.match(color_string)
    if match:
        if match.group(1) is not None:
            hex_str, alpha_digits, length = match.group(1), match.group(2), 2
        else:
            hex_str, alpha_digits, length = match.group(3), match.group(4), 1
        if without_alpha or alpha_digits is None:
            return ParsedColor(ColorFormat.HEX, ColorFormat.HEX, 1, False, hex=hex_str)
        alpha = hex_to_alpha(alpha_digits, length)
        if not hex_alpha_supported:
            return ParsedColor(ColorFormat.RGB, ColorFormat.HEX, alpha, True, hex=hex_str, unfix_format=True)
        return ParsedColor(ColorFormat.HEX, ColorFormat.HEX, alpha, True, hex=hex_str)

    return None


def rgb_string(rgb: RGBLike, alpha: Optional[float] = None) -> str:
    r, g, b = (format_number(c) for c in rgb)
    if alpha is not None:
        return f"rgba({r}, {g}, {b}, {format_number(alpha)})"
    return f"rgb({r}, {g}, {b})"


def hsl_string(hsl: HSLLike, alpha: Optional[float] = None) -> str:
    h, s, l = hsl
    parts = f"{format_number(h)}, {format_number(safe_mult(s, 100))}%, {format_number(safe_mult(l, 100))}%"
    if alpha is not None:
        return f"hsla({parts}, {format_number(alpha)})"
    return f"hsl({parts})"


def hex_string(hex_str: str, alpha: Optional[float] = None) -> str:
    if alpha is not None:
        return hex_str + alpha_to_hex(alpha, 1 if len(hex_str) <= 4 else 2)
    return hex_str


def infer_format(previous: Optional[str]) -> ColorFormat:
    """Guess the output format from a previous color string; hex is the fallback."""
    if previous:
        if "hsl" in previous:
            return ColorFormat.HSL
        if "rgb" in previous:
            return ColorFormat.RGB
    return ColorFormat.HEX
