"""
Proleptic Gregorian calendar arithmetic on epoch milliseconds.

Works for any year, including years outside the range of :mod:`datetime`.
Component overflow follows ``Date.UTC``: month 13 is January of the next
year, day 0 is the last day of the previous month, and so on.
"""
from __future__ import annotations
from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple

from ..types.datetime_types import (
    ClampUnit,
    DateComponents,
    MAX_EPOCH_MS,
    MS_PER_DAY,
    MS_PER_HOUR,
    MS_PER_MINUTE,
    MS_PER_SECOND,
    clamp_order,
)

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# first value of every calendar field
_FIELD_START = {
    "month": 1,
    "day": 1,
    "hour": 0,
    "minute": 0,
    "second": 0,
    "millisecond": 0,
}


def days_from_civil(year: int, month: int, day: int) -> int:
    """Days since 1970-01-01 of a Gregorian date."""
    year -= month <= 2
    era = year // 400
    yoe = year - era * 400
    mp = (month + 9) % 12
    doy = (153 * mp + 2) // 5 + day - 1
    doe = yoe * 365 + yoe // 4 - yoe // 100 + doy
    return era * 146097 + doe - 719468


def civil_from_days(days: int) -> Tuple[int, int, int]:
    """Gregorian ``(year, month, day)`` of a day count since 1970-01-01."""
    days += 719468
    era = days // 146097
    doe = days - era * 146097
    yoe = (doe - doe // 1460 + doe // 36524 - doe // 146096) // 365
    doy = doe - (365 * yoe + yoe // 4 - yoe // 100)
    mp = (5 * doy + 2) // 153
    day = doy - (153 * mp + 2) // 5 + 1
    month = mp + 3 if mp < 10 else mp - 9
    return yoe + era * 400 + (month <= 2), month, day


def days_in_month(year: int, month: int) -> int:
    if month == 12:
        return 31
    return days_from_civil(year, month + 1, 1) - days_from_civil(year, month, 1)


def make_epoch_ms(
    year: int,
    month: int = 1,
    day: int = 1,
    hour: int = 0,
    minute: int = 0,
    second: int = 0,
    millisecond: int = 0,
) -> int:
    """Epoch milliseconds of UTC components; out-of-range components carry over."""
    month_index = int(month) - 1
    year = int(year) + month_index // 12
    days = days_from_civil(year, month_index % 12 + 1, 1) + int(day) - 1
    time = int(hour) * MS_PER_HOUR + int(minute) * MS_PER_MINUTE + int(second) * MS_PER_SECOND + int(millisecond)
    return days * MS_PER_DAY + time


def split_epoch_ms(epoch_ms: int) -> DateComponents:
    """UTC calendar components of an epoch-millisecond instant."""
    days, rest = divmod(int(epoch_ms), MS_PER_DAY)
    year, month, day = civil_from_days(days)
    hour, rest = divmod(rest, MS_PER_HOUR)
    minute, rest = divmod(rest, MS_PER_MINUTE)
    second, millisecond = divmod(rest, MS_PER_SECOND)
    return DateComponents(year, month, day, hour, minute, second, millisecond)


def is_valid_epoch_ms(epoch_ms) -> bool:
    return epoch_ms is not None and abs(epoch_ms) <= MAX_EPOCH_MS


def clamp_components(components: DateComponents, clamp: Optional[ClampUnit | str]) -> DateComponents:
    """
    Reset every field finer than ``clamp`` to its first value.

    Clamping to ``"day"`` zeroes hour, minute, second and millisecond and
    leaves year, month and day untouched; clamping to ``"month"`` also sets
    the day to 1.

    Raises:
        ValueError: for an unknown clamp unit
    """
    if clamp is None:
        return components
    position = clamp_order.index(ClampUnit(clamp))
    finer = {unit.value: _FIELD_START[unit.value] for unit in clamp_order[position + 1:]}
    return components._replace(**finer)


def is_date_locked(clamp: Optional[ClampUnit | str]) -> bool:
    """True when the time of day is clamped away (``hour`` or coarser)."""
    if clamp is None:
        return False
    return clamp_order.index(ClampUnit(clamp)) <= clamp_order.index(ClampUnit.HOUR)


def to_hour12(hour: int) -> int:
    if hour == 0:
        return 12
    return hour - 12 if hour > 12 else hour


def from_hour12(hour12: int, is_am: bool) -> int:
    """24-hour value of a 12-hour clock reading; 12 AM is midnight, 12 PM is noon."""
    if hour12 == 12:
        return 0 if is_am else 12
    return hour12 if is_am else hour12 + 12


def pad(n: int, length: int) -> str:
    sign = "-" if n < 0 else ""
    return sign + str(abs(int(n))).zfill(length)


def to_date_string(year: int, month: int, day: int) -> str:
    return f"{pad(year, 6 if year < 0 else 4)}-{pad(month, 2)}-{pad(day, 2)}"


def to_time_string(hour: int, minute: int, second: Optional[int] = None, millisecond: Optional[int] = None) -> str:
    text = f"{pad(hour or 0, 2)}:{pad(minute or 0, 2)}"
    if second is not None:
        text += f":{pad(second, 2)}"
        if millisecond is not None:
            text += f".{pad(millisecond, 3)}"
    return text


def to_utc_datetime(epoch_ms: Optional[int]) -> Optional[datetime]:
    """Aware UTC :class:`datetime` of an instant, None outside the datetime range."""
    if epoch_ms is None:
        return None
    try:
        return EPOCH + timedelta(milliseconds=int(epoch_ms))
    except OverflowError:
        return None


def datetime_to_epoch_ms(value: datetime) -> int:
    """Epoch milliseconds of an aware datetime."""
    return (value - EPOCH) // timedelta(milliseconds=1)
