from .format_type import ColorFormat, valid_formats, is_valid_format, DEFAULT_FORMAT, DEFAULT_HSL_PRECISION
from .color_types import RGB, HSL, ParsedColor, ResolvedColor
from .datetime_types import ClampUnit, DateComponents, TimezoneProperties, to_clamp_unit

__all__ = [
    "ColorFormat", "valid_formats", "is_valid_format", "DEFAULT_FORMAT", "DEFAULT_HSL_PRECISION",
    "RGB", "HSL", "ParsedColor", "ResolvedColor",
    "ClampUnit", "DateComponents", "TimezoneProperties", "to_clamp_unit",
]
