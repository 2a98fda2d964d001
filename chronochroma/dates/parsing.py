from __future__ import annotations
import logging
import math
import re
from datetime import datetime, tzinfo
from typing import NamedTuple, Optional, Tuple

from ..utils.num_utils import is_number, is_unset
from .calendar import datetime_to_epoch_ms, days_in_month, is_valid_epoch_ms, make_epoch_ms
from .timezone import compute_timezone_offset, local_offset_minutes
from ..types.datetime_types import MS_PER_MINUTE, TimezoneProperties

log = logging.getLogger(__name__)

regexp_datetime = re.compile(
    r"^([+-]?\d+-?\d\d-?\d\d)?(?:T?(?:(\d\d:?\d\d(?::?\d\d(?:\.?\d\d\d)?)?)([+-]\d\d:?\d\d|Z)?)?)$"
)
_date_part = re.compile(r"^([+-]?\d+?)-?(\d\d)-?(\d\d)$")
_time_part = re.compile(r"^(\d\d):?(\d\d)(?::?(\d\d)(?:\.?(\d\d\d))?)?$")


class DatetimeString(NamedTuple):
    """The parts of a datetime string; ``date``/``time`` are None when absent."""
    date: Optional[Tuple[int, int, int]]
    time: Optional[Tuple[int, int, int, int]]
    timezone: Optional[TimezoneProperties]

    @property
    def wall_ms(self) -> int:
        """Epoch milliseconds of the wall clock reading as if it were UTC."""
        year, month, day = self.date or (1970, 1, 1)
        return make_epoch_ms(year, month, day, *(self.time or (0, 0, 0, 0)))


def parse_datetime_string(text: str) -> Optional[DatetimeString]:
    """
    Split ``[±YYYY-MM-DD]T?[hh:mm[:ss[.mmm]]][±hh:mm|Z]``.

    Returns:
        DatetimeString, or None when the text does not match, has neither
        a date nor a time, or names an impossible date or time
    """
    match = regexp_datetime.match(text.strip())
    if match is None or (match.group(1) is None and match.group(2) is None):
        return None

    date = None
    if match.group(1) is not None:
        year, month, day = (int(g) for g in _date_part.match(match.group(1)).groups())
        if not 1 <= month <= 12 or not 1 <= day <= days_in_month(year, month):
            return None
        date = (year, month, day)

    time = None
    if match.group(2) is not None:
        hour, minute, second, millisecond = _time_part.match(match.group(2)).groups()
        time = (int(hour), int(minute), int(second or 0), int(millisecond or 0))
        if time[0] > 24 or time[1] > 59 or time[2] > 59 or (time[0] == 24 and any(time[1:])):
            return None

    tz = compute_timezone_offset(match.group(3)) if match.group(3) else None
    return DatetimeString(date, time, tz)


def from_datetime(
    value,
    offset_minutes: Optional[float] = None,
    time_only: bool = False,
    local_tz: Optional[tzinfo] = None,
) -> Tuple[Optional[int], Optional[float]]:
    """
    Resolve any accepted datetime input to an instant.

    Args:
        value: epoch milliseconds, a :class:`datetime` (naive values are read
            in ``local_tz``) or a datetime string
        offset_minutes: offset applied to strings without a timezone
        time_only: strings without a date and timezone are offset-naive
            (UTC) instead of local
        local_tz: the zone standing in for the platform local zone

    Returns:
        ``(epoch_ms, offset_minutes)``; ``epoch_ms`` is None when the input
        cannot be resolved
    """
    epoch_ms = None
    if is_unset(offset_minutes):
        offset_minutes = None

    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=local_tz) if local_tz is not None else value.astimezone()
        epoch_ms = datetime_to_epoch_ms(value)
    elif is_number(value):
        if math.isfinite(value):
            epoch_ms = int(value)
    elif isinstance(value, str):
        parsed = parse_datetime_string(value)
        if parsed is not None:
            wall_ms = parsed.wall_ms
            if parsed.timezone is not None:
                offset_minutes = parsed.timezone.offset_minutes
            elif offset_minutes is None:
                if parsed.date is not None or not time_only:
                    offset_minutes = local_offset_minutes(wall_ms, local_tz)
                else:
                    offset_minutes = 0
            epoch_ms = wall_ms + int(offset_minutes * MS_PER_MINUTE)
        else:
            log.debug("Ignoring unparseable datetime %r", value)

    if epoch_ms is None or not is_valid_epoch_ms(epoch_ms):
        return None, offset_minutes
    if offset_minutes is None:
        offset_minutes = local_offset_minutes(epoch_ms, local_tz)
    return epoch_ms, offset_minutes
