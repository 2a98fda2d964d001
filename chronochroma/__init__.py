"""Chronochroma: values that stay consistent across their representations.

A color is observable as RGB, HSL, hex, alpha and a CSS color string; a
point in time as calendar components, ISO strings, epoch milliseconds, a
:class:`datetime` and a UTC offset. Writing any one representation of a
model updates all the others.
"""

from .models import ColorModel, DatetimeModel, DurationModel, RangeModel
from .core import Observable, ObservedProperty, UpdateSource
from .types import (
    ColorFormat,
    ClampUnit,
    RGB,
    HSL,
    ParsedColor,
    ResolvedColor,
    DateComponents,
    TimezoneProperties,
)
from .conversions import (
    rgb_to_hsl,
    hsl_to_rgb,
    normalize_rgb,
    normalize_hsl,
    np_rgb_to_hsl,
    np_hsl_to_rgb,
    np_normalize_rgb,
    np_normalize_hsl,
    hex_to_rgb,
    rgb_to_hex,
    alpha_to_hex,
    hex_to_alpha,
    parse_color_string,
    CSSColorResolver,
)
from .dates import (
    compute_timezone,
    compute_timezone_offset,
    from_datetime,
    parse_datetime_string,
    to_duration_string,
    to_duration_number,
)
from .utils import safe_add, safe_mult, math_mod, normalized_clamp, setup_default_logging

__all__ = [
    # models
    "ColorModel",
    "DatetimeModel",
    "DurationModel",
    "RangeModel",
    # observation
    "Observable",
    "ObservedProperty",
    "UpdateSource",
    # types
    "ColorFormat",
    "ClampUnit",
    "RGB",
    "HSL",
    "ParsedColor",
    "ResolvedColor",
    "DateComponents",
    "TimezoneProperties",
    # color conversions
    "rgb_to_hsl",
    "hsl_to_rgb",
    "normalize_rgb",
    "normalize_hsl",
    "np_rgb_to_hsl",
    "np_hsl_to_rgb",
    "np_normalize_rgb",
    "np_normalize_hsl",
    "hex_to_rgb",
    "rgb_to_hex",
    "alpha_to_hex",
    "hex_to_alpha",
    "parse_color_string",
    "CSSColorResolver",
    # datetime conversions
    "compute_timezone",
    "compute_timezone_offset",
    "from_datetime",
    "parse_datetime_string",
    "to_duration_string",
    "to_duration_number",
    # arithmetic
    "safe_add",
    "safe_mult",
    "math_mod",
    "normalized_clamp",
    "setup_default_logging",
]
