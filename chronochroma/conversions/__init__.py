"""
Chronochroma Color Conversions
==============================

Conversions between the equivalent views of a color: 8-bit RGB, HSL, hex
and CSS-style color strings, with scalar and vectorized (numpy)
implementations.

Conversion Functions
--------------------

RGB -> HSL:
    rgb_to_hsl(rgb, default_hue=None)
        Scalar conversion, keeps ``default_hue`` for achromatic colors
    np_rgb_to_hsl(rgb, default_hue=0)
        Vectorized conversion of (..., 3) arrays

HSL -> RGB:
    hsl_to_rgb(hsl)
    np_hsl_to_rgb(hsl)

Normalization:
    normalize_rgb(rgb) / np_normalize_rgb(rgb)
        Round and wrap channels into [0, 256)
    normalize_hsl(hsl, precision=0) / np_normalize_hsl(hsl, precision=0)
        Round hue to ``precision`` digits, saturation and lightness to
        ``precision + 2`` digits

Hex:
    hex_to_rgb(hex), rgb_to_hex(rgb)
    alpha_to_hex(alpha, length), hex_to_alpha(hex, length)

Color strings:
    parse_color_string(color_string, hsl_precision, without_alpha, hex_alpha_supported)
    rgb_string, hsl_string, hex_string, infer_format
    CSSColorResolver().resolve(color_string)

Examples
--------
>>> rgb_to_hsl((255, 0, 0))
HSL(h=0.0, s=1.0, l=0.5)
>>> normalize_rgb(hsl_to_rgb((120, 1, 0.5)))
RGB(r=0, g=255, b=0)
>>> rgb_to_hex((255, 128, 0))
'#ff8000'
"""

from .to_hsl import rgb_to_hsl, normalize_hsl, np_rgb_to_hsl, np_normalize_hsl
from .to_rgb import hsl_to_rgb, normalize_rgb, np_hsl_to_rgb, np_normalize_rgb
from .hex import hex_to_rgb, rgb_to_hex, alpha_to_hex, hex_to_alpha
from .color_string import (
    parse_color_string,
    rgb_string,
    hsl_string,
    hex_string,
    infer_format,
    regexp_rgb,
    regexp_hsl,
    regexp_hex,
)
from .resolver import CSSColorResolver, ColorResolver, OPAQUE_BLACK

__all__ = [
    "rgb_to_hsl",
    "normalize_hsl",
    "np_rgb_to_hsl",
    "np_normalize_hsl",
    "hsl_to_rgb",
    "normalize_rgb",
    "np_hsl_to_rgb",
    "np_normalize_rgb",
    "hex_to_rgb",
    "rgb_to_hex",
    "alpha_to_hex",
    "hex_to_alpha",
    "parse_color_string",
    "rgb_string",
    "hsl_string",
    "hex_string",
    "infer_format",
    "regexp_rgb",
    "regexp_hsl",
    "regexp_hex",
    "CSSColorResolver",
    "ColorResolver",
    "OPAQUE_BLACK",
]
