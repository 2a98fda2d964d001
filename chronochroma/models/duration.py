from __future__ import annotations
import logging
from datetime import datetime, timedelta, tzinfo
from typing import Any, Optional

from ..core.observable import Observable, ObservedProperty, UpdateSource
from ..dates import from_datetime, to_duration_number, to_duration_string
from ..utils.num_utils import is_unset

log = logging.getLogger(__name__)


class DurationModel(Observable):
    """
    The span between two instants, in milliseconds and as ``1d2h30m`` text.

    ``start`` and ``end`` take anything :func:`~chronochroma.dates.from_datetime`
    accepts. A missing end is derived from ``start`` and ``value`` (and the
    other way round); an end before the start swaps the two.
    """

    start = ObservedProperty()
    end = ObservedProperty()
    value = ObservedProperty(observer="_value_changed")
    value_as_string = ObservedProperty(observer="_value_as_string_changed")

    observers = (("_start_end_changed", ("start", "end")),)

    def __init__(self, local_tz: Optional[tzinfo] = None, **values: Any) -> None:
        self._local_tz = local_tz
        super().__init__(**values)

    def _resolve(self, value) -> Optional[int]:
        epoch_ms, _ = from_datetime(value, local_tz=self._local_tz)
        return epoch_ms

    @staticmethod
    def _shifted(reference, reference_ms: int, delta: float):
        """Move ``reference`` by ``delta`` ms; datetimes stay datetimes, the rest become numbers."""
        if isinstance(reference, datetime):
            return reference + timedelta(milliseconds=delta)
        return reference_ms + delta

    def _start_end_changed(self) -> None:
        start, end = self._resolve(self.start), self._resolve(self.end)
        if start is None and end is None:
            self.set_properties(value=None)
            return
        if end is None and not is_unset(self.value):
            self.end = self._shifted(self.start, start, self.value)
            return
        if start is None and not is_unset(self.value):
            self.start = self._shifted(self.end, end, -self.value)
            return
        if start is None or end is None:
            return
        if end < start:
            log.debug("end %r is before start %r, swapping", self.end, self.start)
            self.set_properties(start=self.end, end=self.start)
            return
        self.value = end - start

    def _value_changed(self, value, old) -> None:
        if is_unset(value):
            self._write_string(None)
            return
        if value < 0:
            self.value = -value
            return

        start, end = self._resolve(self.start), self._resolve(self.end)
        if start is not None and end is None:
            self.end = self._shifted(self.start, start, value)
        elif end is not None and start is None:
            self.start = self._shifted(self.end, end, -value)
        elif start is not None and end is not None:
            if end < start:
                self.set_properties(start=self.end, end=self.start)
            elif end - start != value:
                self.end = self._shifted(self.start, start, value)
        self._write_string(to_duration_string(self.value))

    def _write_string(self, text: Optional[str]) -> None:
        with self._deriving(UpdateSource.DERIVED):
            self.value_as_string = text

    def _value_as_string_changed(self, text, old) -> None:
        if self._update_source is UpdateSource.DERIVED:
            return
        if not text:
            self.value = None
            return
        value = to_duration_number(text)
        if value is None:
            log.debug("Ignoring unparseable duration %r", text)
            self._write_string(to_duration_string(self.value))
            return
        self.value = value
