from __future__ import annotations
from enum import Enum
from typing import NamedTuple, Optional


class ClampUnit(str, Enum):
    YEAR = "year"
    MONTH = "month"
    DAY = "day"
    HOUR = "hour"
    MINUTE = "minute"
    SECOND = "second"
    MILLISECOND = "millisecond"


# coarse to fine
clamp_order = (
    ClampUnit.YEAR,
    ClampUnit.MONTH,
    ClampUnit.DAY,
    ClampUnit.HOUR,
    ClampUnit.MINUTE,
    ClampUnit.SECOND,
    ClampUnit.MILLISECOND,
)

MS_PER_SECOND = 1000
MS_PER_MINUTE = 60 * MS_PER_SECOND
MS_PER_HOUR = 60 * MS_PER_MINUTE
MS_PER_DAY = 24 * MS_PER_HOUR
MS_PER_WEEK = 7 * MS_PER_DAY
# julian year, 365.25 days
MS_PER_YEAR = 31557600000

# ECMAScript time value range
MAX_EPOCH_MS = 8.64e15


class DateComponents(NamedTuple):
    year: int
    month: int
    day: int
    hour: int = 0
    minute: int = 0
    second: int = 0
    millisecond: int = 0


class TimezoneProperties(NamedTuple):
    """
    Offset minutes count how far the zone lags behind UTC, so ``300`` is
    ``"-05:00"`` and ``timezone_hours`` is ``-5``.
    """
    timezone: str
    offset_minutes: float
    timezone_hours: float
    timezone_minutes: float


def to_clamp_unit(value) -> Optional[ClampUnit]:
    """Coerce ``value`` to a :class:`ClampUnit`, ``None`` for unknown units."""
    if value is None:
        return None
    try:
        return ClampUnit(value)
    except ValueError:
        return None
