from __future__ import annotations
import logging
import warnings
from datetime import datetime, timezone, tzinfo
from typing import Any, Optional

from ..core.observable import Observable, ObservedProperty, UpdateSource
from ..dates import (
    clamp_components,
    compute_timezone,
    compute_timezone_offset,
    datetime_to_epoch_ms,
    from_datetime,
    from_hour12,
    is_date_locked,
    local_offset_minutes,
    make_epoch_ms,
    parse_datetime_string,
    split_epoch_ms,
    timezone_from_hours_minutes,
    to_date_string,
    to_hour12,
    to_time_string,
    to_utc_datetime,
)
from ..dates.calendar import is_valid_epoch_ms
from ..types.datetime_types import MS_PER_DAY, MS_PER_MINUTE, TimezoneProperties, to_clamp_unit
from ..utils.num_utils import is_number, is_set, is_unset, same_value

log = logging.getLogger(__name__)

_COMPONENTS = ("year", "month", "day", "hour", "minute", "second", "millisecond")


def _offset_ms(offset_minutes) -> int:
    return int(offset_minutes * MS_PER_MINUTE)


class DatetimeModel(Observable):
    """
    A point in time observable as calendar components, ISO strings, epoch
    milliseconds, an aware :class:`datetime` and a UTC offset.

    Offsets count the minutes the zone is *behind* UTC: ``offset_minutes``
    300 is the timezone ``"-05:00"``. Calendar components are the wall clock
    in that zone.

    When the local zone changes its offset between two instants (daylight
    saving), the stored offset follows the change so that the wall clock
    does not jump.

    Args:
        local_tz: zone used as the platform local zone, the system zone when
            None
        time_only: strings without a date are read at 1970-01-01 UTC
        **values: initial property values

    Example:
        >>> value = DatetimeModel(datetime="2023-03-10T08:00:00-05:00")
        >>> value.offset_minutes, value.hour
        (300, 8)
    """

    year = ObservedProperty()
    month = ObservedProperty()
    day = ObservedProperty()
    hour = ObservedProperty()
    hour12 = ObservedProperty(observer="_hour12_changed")
    is_am = ObservedProperty(observer="_is_am_changed")
    minute = ObservedProperty()
    second = ObservedProperty()
    millisecond = ObservedProperty()
    datetime = ObservedProperty(observer="_datetime_changed")
    date = ObservedProperty()
    time = ObservedProperty()
    value_as_date = ObservedProperty(observer="_value_as_date_changed")
    value_as_number = ObservedProperty(observer="_value_as_number_changed")
    default = ObservedProperty(observer="_default_changed")
    min = ObservedProperty(observer="_min_changed")
    max = ObservedProperty(observer="_max_changed")
    # resolved bounds in epoch milliseconds
    min_value = ObservedProperty()
    max_value = ObservedProperty()
    hour12_format = ObservedProperty(False)
    clamp = ObservedProperty(observer="_clamp_changed")
    timezone = ObservedProperty(observer="_timezone_changed")
    offset_minutes = ObservedProperty(observer="_offset_minutes_changed")
    timezone_hours = ObservedProperty()
    timezone_minutes = ObservedProperty()

    observers = (
        ("_compute_datetime", _COMPONENTS),
        ("_date_time_changed", ("date", "time")),
        ("_timezone_hours_minutes_changed", ("timezone_hours", "timezone_minutes")),
        ("_min_max_value_changed", ("min_value", "max_value")),
    )

    def __init__(self, local_tz: Optional[tzinfo] = None, time_only: bool = False, **values: Any) -> None:
        self._local_tz = local_tz
        self._time_only = time_only
        # local offset at the last computed instant
        self._recent_local_offset: Optional[int] = None
        super().__init__(**values)

    @property
    def time_only(self) -> bool:
        return self._time_only

    @property
    def date_locked(self) -> bool:
        """True when the clamp unit is ``hour`` or coarser."""
        return is_date_locked(to_clamp_unit(self.clamp))

    def _local_offset(self, epoch_ms: Optional[float] = None) -> int:
        return local_offset_minutes(epoch_ms, self._local_tz)

    def _apply_timezone(self, props: Optional[TimezoneProperties]) -> None:
        if props is None:
            return
        with self._deriving(UpdateSource.TIMEZONE):
            self.set_properties(props._asdict())

    # ---- public operations ----

    def set_date(self, value) -> None:
        """
        Recompute every representation from an instant.

        Args:
            value: epoch milliseconds or a :class:`datetime`; None falls back
                to ``default`` when one is set, a number outside the
                representable range clears the value
        """
        if isinstance(value, datetime):
            value, _ = from_datetime(value, local_tz=self._local_tz)
        if not is_number(value) or is_unset(value) or not is_valid_epoch_ms(value):
            # an unusable number clears the value, a missing one only restores the default
            if self.default is not None or is_number(value):
                self.reset_date()
            return

        epoch_ms = self._check_threshold(int(value))
        self._check_default_timezone(epoch_ms)

        to_set: dict = {}
        offset_minutes = self._compute_timezone_shift(epoch_ms)
        if not same_value(offset_minutes, self.offset_minutes):
            log.debug("Local offset changed, moving timezone to %s minutes", offset_minutes)
            to_set.update(compute_timezone(offset_minutes)._asdict())

        wall = split_epoch_ms(epoch_ms - _offset_ms(offset_minutes))
        unit = to_clamp_unit(self.clamp)
        clamped = clamp_components(wall, unit)
        if clamped != wall:
            epoch_ms = make_epoch_ms(*clamped) + _offset_ms(offset_minutes)
            if is_set(self.min_value) and epoch_ms < self.min_value:
                # the start of the granule lies below min, take the next one
                next_granule = clamped._replace(**{unit.value: getattr(clamped, unit.value) + 1})
                clamped = split_epoch_ms(make_epoch_ms(*next_granule))
                epoch_ms = make_epoch_ms(*clamped) + _offset_ms(offset_minutes)

        to_set["value_as_number"] = epoch_ms
        value_as_date = to_utc_datetime(epoch_ms)
        if value_as_date != self.value_as_date:
            to_set["value_as_date"] = value_as_date

        to_set.update(clamped._asdict())
        to_set["hour12"] = to_hour12(clamped.hour)
        to_set["is_am"] = clamped.hour < 12

        date = to_date_string(clamped.year, clamped.month, clamped.day)
        time = to_time_string(clamped.hour, clamped.minute, clamped.second, clamped.millisecond)
        to_set["date"] = date
        to_set["time"] = time
        to_set["datetime"] = f"{date}T{time}{to_set.get('timezone', self.timezone)}"

        with self._deriving(UpdateSource.SET_DATE):
            self.set_properties(to_set)

    def reset_date(self) -> None:
        """Clear the value; ``default``, when set, becomes the new value."""
        if self._update_source is UpdateSource.RESET:
            return
        with self._deriving(UpdateSource.RESET):
            self.set_properties(
                {
                    "value_as_date": None,
                    "value_as_number": None,
                    "datetime": None,
                    "date": None,
                    "time": None,
                    "year": None,
                    "month": None,
                    "day": None,
                    "hour": None,
                    "hour12": None,
                    "is_am": None,
                    "minute": None,
                    "second": None,
                    "millisecond": None,
                    "timezone": None,
                    "offset_minutes": None,
                    "timezone_hours": None,
                    "timezone_minutes": None,
                }
            )
            self._recent_local_offset = None

        epoch_ms, offset_minutes = from_datetime(self.default, None, self._time_only, self._local_tz)
        if epoch_ms is not None:
            log.debug("Resetting to default %r", self.default)
            self._apply_timezone(compute_timezone(offset_minutes))
            self._recent_local_offset = self._local_offset(epoch_ms)
            self.set_date(epoch_ms)

    def now(self) -> None:
        """Set the value to the current local wall clock time."""
        epoch_ms = datetime_to_epoch_ms(datetime.now(timezone.utc))
        local = self._local_offset(epoch_ms)
        if not self.timezone:
            if self._time_only and not self.date:
                self._apply_timezone(compute_timezone(0))
                # time of day on 1970-01-01
                epoch_ms = (epoch_ms - local * MS_PER_MINUTE) % MS_PER_DAY
                self.set_date(epoch_ms)
                return
            self._check_default_timezone(epoch_ms)
        # same wall clock as the local zone, read in the stored timezone
        self.set_date(epoch_ms + _offset_ms(self.offset_minutes - local))

    # ---- derivation helpers ----

    def _check_threshold(self, epoch_ms: int) -> int:
        if is_set(self.min_value) and epoch_ms < self.min_value:
            return int(self.min_value)
        if is_set(self.max_value) and epoch_ms > self.max_value:
            return int(self.max_value)
        return epoch_ms

    def _check_default_timezone(self, epoch_ms: Optional[int] = None) -> None:
        if is_unset(self.offset_minutes) or self.timezone is None:
            props = compute_timezone_offset(self.timezone) if self.timezone else None
            if props is None:
                props = compute_timezone(self._local_offset(epoch_ms))
            self._apply_timezone(props)
        if self._recent_local_offset is None:
            self._recent_local_offset = self._local_offset(epoch_ms)

    def _compute_timezone_shift(self, epoch_ms: int):
        local = self._local_offset(epoch_ms)
        offset_minutes = self.offset_minutes
        if self._recent_local_offset != local:
            offset_minutes = offset_minutes - self._recent_local_offset + local
        self._recent_local_offset = local
        return offset_minutes

    def _prior_instant(self) -> int:
        if is_set(self.value_as_number):
            return int(self.value_as_number)
        if self.datetime:
            epoch_ms, _ = from_datetime(self.datetime, self.offset_minutes, self._time_only, self._local_tz)
            if epoch_ms is not None:
                return epoch_ms
        if self._time_only and not self.date:
            epoch_ms, _ = from_datetime(f"1970-01-01T{self.time or '00:00'}", None, False, self._local_tz)
            if epoch_ms is not None:
                return epoch_ms
        elif self.date:
            text = f"{self.date}T{self.time or '00:00'}{self.timezone or ''}"
            epoch_ms, _ = from_datetime(text, None, self._time_only, self._local_tz)
            if epoch_ms is not None:
                return epoch_ms
        # January 1st of the current year, local time
        wall = make_epoch_ms(datetime.now(self._local_tz).year)
        return wall + _offset_ms(self._local_offset(wall))

    # ---- observers ----

    def _compute_datetime(self) -> None:
        if self.is_deriving:
            return
        values = {name: getattr(self, name) for name in _COMPONENTS}
        if all(is_unset(v) for v in values.values()):
            if self.value_as_number is not None:
                self.reset_date()
            return

        prior = self._prior_instant()
        local_before = self._local_offset(prior)
        offset_minutes = self.offset_minutes if is_set(self.offset_minutes) else local_before
        wall = split_epoch_ms(prior - _offset_ms(offset_minutes))
        wall = wall._replace(**{name: int(v) for name, v in values.items() if is_set(v)})
        new_wall = make_epoch_ms(*wall)
        # follow the local offset at the new wall clock time
        shift = offset_minutes - local_before + self._local_offset(new_wall)
        self.set_date(new_wall + _offset_ms(shift))

    def _datetime_changed(self, value, old) -> None:
        if self.is_deriving:
            return
        if value is None:
            if self.value_as_number is not None:
                self.reset_date()
            return

        if isinstance(value, datetime):
            epoch_ms, _ = from_datetime(value, local_tz=self._local_tz)
            if epoch_ms is not None:
                self._recent_local_offset = self._local_offset(epoch_ms)
                self.set_date(epoch_ms)
            return

        parsed = parse_datetime_string(value) if isinstance(value, str) else None
        if parsed is None:
            log.debug("Ignoring unparseable datetime %r", value)
            return

        if parsed.timezone is None:
            self._check_default_timezone(parsed.wall_ms)
            epoch_ms = parsed.wall_ms + _offset_ms(self.offset_minutes)
        else:
            epoch_ms = parsed.wall_ms + _offset_ms(parsed.timezone.offset_minutes)
            if parsed.timezone.timezone != self.timezone or not same_value(
                parsed.timezone.offset_minutes, self.offset_minutes
            ):
                self._apply_timezone(parsed.timezone)
        self._recent_local_offset = self._local_offset(epoch_ms)
        self.set_date(epoch_ms)

    def _date_time_changed(self) -> None:
        if self.is_deriving:
            return
        date, time = self.date, self.time
        if date is None and time is None:
            if self.value_as_number is not None:
                self.reset_date()
            return

        if not date and self._time_only:
            self._apply_timezone(compute_timezone(0))

        date = date or "1970-01-01"
        time = time or "00:00:00.000"
        parsed = parse_datetime_string(f"{date}T{time}")
        if parsed is None or parsed.timezone is not None:
            log.debug("Ignoring unparseable date %r and time %r", date, time)
            return
        if not self.timezone:
            self._check_default_timezone(parsed.wall_ms)
        self.datetime = f"{date}T{time}{self.timezone}"

    def _value_as_number_changed(self, value, old) -> None:
        if self.is_deriving:
            return
        if not is_number(value) or is_unset(value) or not is_valid_epoch_ms(value):
            self.reset_date()
            return
        self.set_date(value)

    def _value_as_date_changed(self, value, old) -> None:
        if self.is_deriving:
            return
        epoch_ms, _ = from_datetime(value, self.offset_minutes, self._time_only, self._local_tz)
        if epoch_ms is None:
            self.reset_date()
            return
        self.set_date(epoch_ms)

    def _default_changed(self, value, old) -> None:
        if value is None:
            return
        if is_unset(self.value_as_number):
            self.reset_date()

    def _clamp_changed(self, clamp, old) -> None:
        if clamp is None:
            return
        if to_clamp_unit(clamp) is None:
            fallback = old if to_clamp_unit(old) is not None else None
            warnings.warn(f"Unknown clamp unit: {clamp!r}, keeping {fallback!r}")
            self.clamp = fallback
            return
        if is_set(self.value_as_number):
            self.set_date(self.value_as_number)

    def _resolve_bound(self, value) -> Optional[int]:
        epoch_ms, _ = from_datetime(value, self.offset_minutes, self._time_only, self._local_tz)
        return epoch_ms

    def _min_changed(self, value, old) -> None:
        if self._update_source is UpdateSource.BOUNDS:
            return
        epoch_ms = self._resolve_bound(value)
        if epoch_ms is None:
            self.min_value = None
            return
        if is_set(self.max_value) and epoch_ms > self.max_value:
            log.debug("min %r is after max %r, swapping", value, self.max)
            with self._deriving(UpdateSource.BOUNDS):
                self.set_properties(min=self.max, max=value, min_value=self.max_value, max_value=epoch_ms)
            return
        self.min_value = epoch_ms

    def _max_changed(self, value, old) -> None:
        if self._update_source is UpdateSource.BOUNDS:
            return
        epoch_ms = self._resolve_bound(value)
        if epoch_ms is None:
            self.max_value = None
            return
        if is_set(self.min_value) and epoch_ms < self.min_value:
            log.debug("max %r is before min %r, swapping", value, self.min)
            with self._deriving(UpdateSource.BOUNDS):
                self.set_properties(min=value, max=self.min, min_value=epoch_ms, max_value=self.min_value)
            return
        self.max_value = epoch_ms

    def _min_max_value_changed(self) -> None:
        if is_set(self.value_as_number):
            self.set_date(self.value_as_number)

    def _hour12_changed(self, hour12, old) -> None:
        if self.is_deriving or is_unset(hour12):
            return
        self.hour = from_hour12(int(hour12), bool(self.is_am))

    def _is_am_changed(self, is_am, old) -> None:
        if self.is_deriving or is_am is None or is_unset(self.hour12):
            return
        self.hour = from_hour12(int(self.hour12), bool(is_am))

    def _refresh_datetime(self) -> None:
        """Keep the wall clock and move the instant into the current timezone."""
        if self.date and self.time and self.timezone:
            self.datetime = f"{self.date}T{self.time}{self.timezone}"

    def _timezone_changed(self, value, old) -> None:
        if self.is_deriving:
            return
        if value is None:
            if self.value_as_number is not None:
                self.reset_date()
            return
        props = compute_timezone_offset(value)
        if props is None:
            log.debug("Ignoring invalid timezone %r", value)
            fallback = compute_timezone_offset(old)
            if fallback is None:
                now = self.value_as_number if is_set(self.value_as_number) else None
                fallback = compute_timezone(self._local_offset(now))
            self._apply_timezone(fallback)
            return
        if props.timezone != value or not same_value(props.offset_minutes, self.offset_minutes):
            self._apply_timezone(props)
        self._refresh_datetime()

    def _offset_minutes_changed(self, value, old) -> None:
        if self.is_deriving or is_unset(value):
            return
        self._apply_timezone(compute_timezone(value))
        self._refresh_datetime()

    def _timezone_hours_minutes_changed(self) -> None:
        if self.is_deriving:
            return
        props = timezone_from_hours_minutes(self.timezone_hours, self.timezone_minutes)
        if props is None:
            return
        self._apply_timezone(props)
        self._refresh_datetime()
