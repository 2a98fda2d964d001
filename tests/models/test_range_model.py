import math

from chronochroma.models import RangeModel


def is_negative_zero(value):
    return value == 0 and math.copysign(1.0, value) < 0


def test_negative_zero_stepping():
    value = RangeModel(min=-1, max=1, step=0.5, use_negative_zero=True, value_as_number=0)
    seen = []
    value.add_listener("value_as_number", lambda name, new, old: seen.append(new))

    value.decrease()
    assert is_negative_zero(value.value_as_number)

    value.decrease()
    assert value.value_as_number == -0.5

    value.increase()
    assert is_negative_zero(value.value_as_number)

    value.increase()
    assert value.value_as_number == 0
    assert not is_negative_zero(value.value_as_number)

    assert len(seen) == 4


def test_negative_zero_is_ignored_by_default():
    value = RangeModel(value_as_number=0)
    seen = []
    value.add_listener("value_as_number", lambda *args: seen.append(args))

    value.value_as_number = -0.0
    assert seen == []
    assert not is_negative_zero(value.value_as_number)

    value.decrease()
    assert value.value_as_number == -1


def test_stepping_past_max_wraps():
    value = RangeModel(min=0, max=10, step=1, value_as_number=10)
    value.increase()
    assert value.value_as_number == 0

    value.decrease()
    assert value.value_as_number == 10


def test_jump_past_max_clamps():
    value = RangeModel(min=0, max=10, value_as_number=5)
    value.value_as_number = 20
    assert value.value_as_number == 10


def test_saturate():
    value = RangeModel(min=0, max=10, step=1, saturate=True, value_as_number=10)
    value.increase()
    assert value.value_as_number == 10

    value.value_as_number = 0
    value.decrease()
    assert value.value_as_number == 0


def test_decimal_step():
    value = RangeModel(step=0.1, value_as_number=0.33)
    assert value.value_as_number == 0.3

    value.increase()
    assert value.value_as_number == 0.4


def test_step_relative_to_default():
    value = RangeModel(default=1, step=2, value_as_number=4.2)
    assert value.value_as_number == 5


def test_step_relative_to_min():
    value = RangeModel(min=0.5, step=1, value_as_number=2.2)
    assert value.value_as_number == 2.5


def test_negative_step_is_made_positive():
    value = RangeModel(step=-2)
    assert value.step == 2


def test_min_above_max_swaps():
    value = RangeModel(min=10, max=0)
    assert (value.min, value.max) == (0, 10)


def test_increment_from_unset_value():
    assert _stepped(RangeModel(start_at=3)) == 3
    assert _stepped(RangeModel(min=2)) == 2
    assert _stepped(RangeModel(min=-5)) == 0
    assert _stepped(RangeModel()) == 0


def _stepped(value):
    value.increase()
    return value.value_as_number


def test_default_fills_unset_value():
    value = RangeModel(default=7)
    assert value.value_as_number == 7

    value.value_as_number = None
    assert value.value_as_number == 7


def test_no_clamp_skips_step():
    value = RangeModel(step=1, no_clamp=True, value_as_number=2.5)
    assert value.value_as_number == 2.5

    bounded = RangeModel(min=0, max=10, no_clamp=True, value_as_number=12)
    assert bounded.value_as_number == 10


def test_bounds_change_rechecks_value():
    value = RangeModel(value_as_number=50)
    value.max = 10
    assert value.value_as_number == 10
