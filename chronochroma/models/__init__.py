from .color import ColorModel
from .datetime_value import DatetimeModel
from .duration import DurationModel
from .range import RangeModel

__all__ = [
    "ColorModel",
    "DatetimeModel",
    "DurationModel",
    "RangeModel",
]
