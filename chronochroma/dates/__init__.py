"""
Chronochroma Datetime Codec
===========================

Calendar components, epoch milliseconds, ISO-like strings and UTC offsets.

Offsets follow the "minutes behind UTC" convention: ``offset_minutes == 300``
is the timezone ``"-05:00"``.
"""

from .calendar import (
    EPOCH,
    days_from_civil,
    civil_from_days,
    days_in_month,
    make_epoch_ms,
    split_epoch_ms,
    clamp_components,
    is_date_locked,
    to_hour12,
    from_hour12,
    pad,
    to_date_string,
    to_time_string,
    to_utc_datetime,
    datetime_to_epoch_ms,
)
from .timezone import (
    UTC_TIMEZONE,
    compute_timezone,
    compute_timezone_offset,
    timezone_from_hours_minutes,
    local_offset_minutes,
    system_timezone,
)
from .parsing import DatetimeString, parse_datetime_string, from_datetime
from .duration import to_duration_string, to_duration_number

__all__ = [
    "EPOCH",
    "days_from_civil",
    "civil_from_days",
    "days_in_month",
    "make_epoch_ms",
    "split_epoch_ms",
    "clamp_components",
    "is_date_locked",
    "to_hour12",
    "from_hour12",
    "pad",
    "to_date_string",
    "to_time_string",
    "to_utc_datetime",
    "datetime_to_epoch_ms",
    "UTC_TIMEZONE",
    "compute_timezone",
    "compute_timezone_offset",
    "timezone_from_hours_minutes",
    "local_offset_minutes",
    "system_timezone",
    "DatetimeString",
    "parse_datetime_string",
    "from_datetime",
    "to_duration_string",
    "to_duration_number",
]
