# No dependencies
from enum import Enum


class ColorFormat(str, Enum):
    RGB = "rgb"
    HEX = "hex"
    HSL = "hsl"
    AUTO = "auto"


valid_formats = frozenset(f.value for f in ColorFormat)

DEFAULT_FORMAT = ColorFormat.AUTO
DEFAULT_HSL_PRECISION = 0

HUE_360 = 360
CHANNEL_MODULUS = 256


def is_valid_format(value) -> bool:
    """Check whether ``value`` names one of the supported color string formats."""
    return isinstance(value, str) and value in valid_formats
