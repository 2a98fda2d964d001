from __future__ import annotations
import logging
import math
from typing import Any

from ..core.observable import Observable, ObservedProperty
from ..utils.num_utils import is_negative0, is_number, is_set, is_unset, round_half_up, safe_add, safe_mult, same_value

log = logging.getLogger(__name__)


class RangeModel(Observable):
    """
    A number bounded by ``min``/``max`` and snapped to ``step``.

    Stepping past one bound wraps to the other unless ``saturate`` is set.
    With ``use_negative_zero``, ``0`` and ``-0.0`` are distinct values and
    stepping down from ``0`` first goes to ``-0.0``.
    """

    min = ObservedProperty()
    max = ObservedProperty()
    step = ObservedProperty(observer="_step_changed")
    # first value when stepping from an unset value
    start_at = ObservedProperty()
    value_as_number = ObservedProperty(observer="_value_as_number_changed")
    default = ObservedProperty(observer="_default_changed")
    saturate = ObservedProperty(False, observer="_options_changed")
    use_negative_zero = ObservedProperty(False, observer="_options_changed")
    no_clamp = ObservedProperty(False, observer="_options_changed")

    observers = (("_min_max_changed", ("min", "max")),)

    def _should_property_change(self, name: str, value: Any, old: Any) -> bool:
        if is_number(value) and is_number(old) and value == 0 and old == 0:
            return bool(self.use_negative_zero) and is_negative0(value) != is_negative0(old)
        return not same_value(value, old)

    # ---- public operations ----

    def increase(self) -> None:
        self._increment(self.step or 1)

    def decrease(self) -> None:
        self._increment(-(self.step or 1))

    def _increment(self, step) -> None:
        value = self.value_as_number
        if self.use_negative_zero and is_number(value) and value == 0:
            if not is_negative0(value):
                if step < 0:
                    self.value_as_number = -0.0
                    return
            elif step > 0:
                self.value_as_number = 0
                return

        value = safe_add(value, step) if is_set(value) else math.nan
        if is_unset(value):
            if is_set(self.start_at):
                self.value_as_number = self.start_at
            elif is_set(self.default):
                self.value_as_number = self.default
            else:
                self.value_as_number = self.min if is_set(self.min) and self.min > 0 else 0
        elif self.use_negative_zero and value == 0:
            # zero coming from above is +0, from below -0
            self.value_as_number = 0 if step < 0 else -0.0
        else:
            self.value_as_number = value

    # ---- normalization ----

    def _check_value_as_number(self, value, old):
        if is_unset(value):
            return self.default if is_set(self.default) else value

        lower, upper = self.min, self.max
        if is_set(lower) and value <= lower:
            if self.saturate or value == lower or is_unset(upper) or not same_value(old, lower):
                return lower
            return upper
        if is_set(upper) and value >= upper:
            if self.saturate or value == upper or is_unset(lower) or not same_value(old, upper):
                return upper
            return lower
        if self.no_clamp:
            return value
        return self._check_step(value, self.step)

    def _check_step(self, value, step):
        if not step:
            return value
        negative_zero = bool(self.use_negative_zero) and is_negative0(value)
        if is_set(self.default):
            value = safe_add(safe_mult(round_half_up((value - self.default) / step), step), self.default)
        elif is_set(self.min):
            value = safe_add(safe_mult(round_half_up((value - self.min) / step), step), self.min)
        elif is_set(self.max):
            value = safe_add(safe_mult(-round_half_up((self.max - value) / step), step), self.max)
        else:
            value = safe_mult(round_half_up(value / step), step)
        return -0.0 if negative_zero and value == 0 else value

    def _update_value_as_number(self) -> None:
        if all(is_unset(v) for v in (self.value_as_number, self.default, self.min, self.max)):
            return
        self._value_as_number_changed(self.value_as_number, self.value_as_number)

    # ---- observers ----

    def _value_as_number_changed(self, value, old) -> None:
        checked = self._check_value_as_number(value, old)
        if not same_value(checked, value):
            self.value_as_number = checked

    def _default_changed(self, default, old) -> None:
        if is_unset(default):
            return
        if is_unset(self.value_as_number):
            self.value_as_number = default

    def _min_max_changed(self) -> None:
        if is_set(self.min) and is_set(self.max) and self.max < self.min:
            log.debug("min %r is above max %r, swapping", self.min, self.max)
            self.set_properties(min=self.max, max=self.min)
            return
        self._update_value_as_number()

    def _step_changed(self, step, old) -> None:
        step = step or 0
        if step < 0:
            self.step = abs(step)
            return
        self._update_value_as_number()

    def _options_changed(self, value, old) -> None:
        self._update_value_as_number()
