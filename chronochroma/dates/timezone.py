"""
UTC offsets.

Offsets are stored as *minutes behind UTC*: a zone five hours behind UTC
has ``offset_minutes == 300`` and the textual form ``"-05:00"``. The sign is
inverted when building or reading the ``±hh:mm`` text.

A zero offset is always written ``"+00:00"``. Its sign is still tracked in
``timezone_hours`` (``-0.0`` for ``+0`` minutes, ``0`` for ``-0.0``
minutes) so that hours/minutes and offset minutes convert back and forth.
"""
from __future__ import annotations
import logging
import math
import re
from datetime import datetime, timedelta, timezone, tzinfo
from typing import Optional

from ..types.datetime_types import TimezoneProperties
from ..utils.num_utils import is_negative, is_unset
from .calendar import EPOCH, pad

log = logging.getLogger(__name__)

regexp_timezone = re.compile(r"(?:([+-])(\d\d):?(\d\d)|Z)$")

UTC_TIMEZONE = "+00:00"

# span of epoch milliseconds that datetime can represent with an offset applied
_MIN_LOOKUP_MS = (datetime(1, 1, 2, tzinfo=timezone.utc) - EPOCH) // timedelta(milliseconds=1)
_MAX_LOOKUP_MS = (datetime(9999, 12, 30, tzinfo=timezone.utc) - EPOCH) // timedelta(milliseconds=1)


def compute_timezone(offset_minutes: Optional[float]) -> Optional[TimezoneProperties]:
    """Timezone properties of an offset in minutes behind UTC; None when unset."""
    if is_unset(offset_minutes):
        return None
    offset_is_negative = is_negative(offset_minutes)
    if offset_minutes == 0:
        return TimezoneProperties(UTC_TIMEZONE, offset_minutes, 0 if offset_is_negative else -0.0, 0)
    hour = (1 if offset_is_negative else -1) * math.floor(abs(offset_minutes) / 60)
    minute = abs(offset_minutes) % 60
    text = ("+" if offset_is_negative else "-") + pad(abs(hour), 2) + ":" + pad(minute, 2)
    return TimezoneProperties(text, offset_minutes, hour, minute)


def compute_timezone_offset(text: Optional[str]) -> Optional[TimezoneProperties]:
    """Timezone properties of a ``±hh:mm``, ``±hhmm`` or ``Z`` suffix; None if it does not match."""
    if text == "Z":
        return TimezoneProperties(UTC_TIMEZONE, 0, 0, 0)
    if not isinstance(text, str):
        return None
    match = regexp_timezone.search(text)
    if match is None:
        return None
    if match.group(1) is None:
        return TimezoneProperties(UTC_TIMEZONE, 0, 0, 0)
    hour_is_negative = match.group(1) == "-"
    hours = int(match.group(2))
    minutes = int(match.group(3))
    if hours == 0 and minutes == 0:
        return TimezoneProperties(
            UTC_TIMEZONE,
            0 if hour_is_negative else -0.0,
            -0.0 if hour_is_negative else 0,
            0,
        )
    offset_minutes = (1 if hour_is_negative else -1) * (hours * 60 + minutes)
    text = match.group(1) + pad(hours, 2) + ":" + pad(minutes, 2)
    return TimezoneProperties(text, offset_minutes, -hours if hour_is_negative else hours, minutes)


def timezone_from_hours_minutes(hours: float, minutes: float) -> Optional[TimezoneProperties]:
    """Timezone properties of signed hours and unsigned minutes of a UTC offset."""
    if is_unset(hours) or is_unset(minutes):
        return None
    hour_is_negative = is_negative(hours)
    if hours == 0 and minutes == 0:
        return TimezoneProperties(UTC_TIMEZONE, 0 if hour_is_negative else -0.0, hours, minutes)
    offset_minutes = (1 if hour_is_negative else -1) * (abs(hours) * 60 + minutes)
    text = ("-" if hour_is_negative else "+") + pad(abs(hours), 2) + ":" + pad(minutes, 2)
    return TimezoneProperties(text, offset_minutes, hours, minutes)


def system_timezone() -> tzinfo:
    """The platform local timezone."""
    return datetime.now().astimezone().tzinfo


def local_offset_minutes(epoch_ms: Optional[float] = None, tz: Optional[tzinfo] = None) -> int:
    """
    Minutes the zone ``tz`` is behind UTC at the given instant.

    Args:
        epoch_ms: the instant, now when None
        tz: the zone, the platform local zone when None

    Returns:
        offset in minutes, positive west of Greenwich
    """
    if epoch_ms is None:
        moment = datetime.now(timezone.utc)
    else:
        ms = min(max(int(epoch_ms), _MIN_LOOKUP_MS), _MAX_LOOKUP_MS)
        moment = EPOCH + timedelta(milliseconds=ms)
    try:
        local = moment.astimezone(tz) if tz is not None else moment.astimezone()
    except (OverflowError, OSError) as e:
        log.debug("Cannot resolve local offset at %s (%s), assuming UTC", moment, e)
        return 0
    offset = local.utcoffset() or timedelta(0)
    return -int(round(offset.total_seconds() / 60))
