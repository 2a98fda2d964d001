import math

import numpy as np
import pytest

from chronochroma.conversions import CSSColorResolver, rgb_to_hex
from chronochroma.models import ColorModel
from chronochroma.types import ColorFormat


def test_decode_rgba_string():
    color = ColorModel(color_string="rgba(255, 0, 0, 0.5)")

    assert (color.r, color.g, color.b) == (255, 0, 0)
    assert color.alpha == 0.5
    assert color.alpha_mode is True
    assert color.input_format == ColorFormat.RGB
    assert (color.h, color.s, color.l) == (0, 1, 0.5)
    assert color.hex == "#ff0000"
    # auto format keeps the written string
    assert color.format == ColorFormat.AUTO
    assert color.color_string == "rgba(255, 0, 0, 0.5)"


def test_achromatic_rgb_keeps_hue():
    color = ColorModel(h=200, s=0.5, l=0.5)
    color.set_properties(r=128, g=128, b=128)

    assert color.h == 200
    assert color.s == 0
    assert color.l == 0.5


def test_hsl_write_derives_rgb_and_hex():
    color = ColorModel(h=120, s=1, l=0.5)

    assert color.rgb == (0, 255, 0)
    assert color.hex == "#00ff00"
    assert color.color_string == "#00ff00"


def test_rgb_write_keeps_notation():
    color = ColorModel(color_string="rgb(255, 0, 0)")
    color.g = 128

    assert color.color_string == "rgb(255, 128, 0)"
    assert color.h == 30
    assert color.hex == "#ff8000"


def test_hsl_string_follows_hsl_write():
    color = ColorModel(color_string="hsl(0, 100%, 50%)")
    color.h = 120

    assert color.color_string == "hsl(120, 100%, 50%)"
    assert color.rgb == (0, 255, 0)


def test_named_color_stays_until_color_changes():
    color = ColorModel(color_string="red")

    assert color.rgb == (255, 0, 0)
    assert color.input_format == ColorFormat.AUTO
    assert color.color_string == "red"

    color.hex = "#00ff00"
    assert color.color_string == "#00ff00"


def test_format_converts_color_string():
    color = ColorModel(color_string="#ff0000")

    color.format = "hsl"
    assert color.color_string == "hsl(0, 100%, 50%)"

    color.format = ColorFormat.RGB
    assert color.color_string == "rgb(255, 0, 0)"


def test_format_follows_written_notation():
    color = ColorModel(color_string="#ff0000", format="rgb")
    assert color.format == ColorFormat.HEX

    color.color_string = "hsl(120, 100%, 50%)"
    assert color.format == ColorFormat.HSL


def test_fixed_format():
    color = ColorModel(color_string="#ff0000", format="rgb", fixed_format=True)

    assert color.format == ColorFormat.RGB
    assert color.input_format == ColorFormat.HEX
    assert color.color_string == "rgb(255, 0, 0)"


def test_named_color_switches_format_to_auto():
    color = ColorModel(color_string="#ff0000", format="hex")
    color.color_string = "blue"
    assert color.format == ColorFormat.AUTO


def test_invalid_format_reverts():
    color = ColorModel()
    with pytest.warns(UserWarning):
        color.format = "cmyk"
    assert color.format == ColorFormat.AUTO


def test_alpha_write():
    color = ColorModel(color_string="#ff0000")
    color.alpha = 0.5

    assert color.alpha_mode is True
    assert color.color_string == "#ff000080"


def test_alpha_is_clamped():
    color = ColorModel(color_string="#ff0000")
    color.alpha = 2
    assert color.alpha == 1
    color.alpha = -1
    assert color.alpha == 0


def test_without_alpha():
    color = ColorModel(without_alpha=True, color_string="rgba(255, 0, 0, 0.5)")
    assert color.alpha == 1
    assert color.alpha_mode is False

    color.alpha = 0.5
    assert color.alpha == 1


def test_without_alpha_drops_existing_alpha():
    color = ColorModel(color_string="rgba(255, 0, 0, 0.5)")
    color.without_alpha = True
    assert color.alpha == 1
    assert color.alpha_mode is False
    assert color.color_string == "rgb(255, 0, 0)"


def test_hex_alpha_unsupported_falls_back_to_rgba():
    color = ColorModel(resolver=CSSColorResolver(hex_alpha_supported=False), color_string="#ff000080")

    assert not color.hex_alpha_supported
    assert color.input_format == ColorFormat.HEX
    assert color.alpha == 0.5
    assert color.color_string == "rgba(255, 0, 0, 0.5)"


def test_empty_color_string_resets():
    color = ColorModel(color_string="#ff0000")
    color.color_string = ""

    assert color.rgb is None
    assert color.hsl is None
    assert color.hex is None
    assert color.color_string is None


def test_nan_triple_resets():
    color = ColorModel(color_string="#ff0000")
    color.set_properties(r=math.nan, g=math.nan, b=math.nan)

    assert color.r is None
    assert color.h is None
    assert color.color_string is None


def test_partial_rgb_waits():
    color = ColorModel()
    color.r = 10

    assert color.h is None
    assert color.hex is None


def test_rgb_wraps():
    color = ColorModel()
    color.set_properties(r=256, g=-1, b=0)
    assert color.rgb == (0, 255, 0)


def test_hex_write():
    color = ColorModel()
    color.hex = "#ABC"

    assert color.hex == "#aabbcc"
    assert color.rgb == (170, 187, 204)


def test_hex_write_with_alpha():
    color = ColorModel(color_string="#ff0000")
    color.hex = "#00ff0080"

    assert color.hex == "#00ff00"
    assert color.rgb == (0, 255, 0)
    assert color.alpha == 0.5
    assert color.color_string == "#00ff0080"


def test_short_hex_write_with_alpha():
    color = ColorModel()
    color.hex = "#f008"

    assert color.hex == "#ff0000"
    assert color.alpha == 0.53


def test_hex_alpha_ignored_without_alpha():
    color = ColorModel(without_alpha=True, color_string="#ff0000")
    color.hex = "#00ff0080"

    assert color.rgb == (0, 255, 0)
    assert color.alpha == 1


def test_invalid_hex_resets():
    color = ColorModel(color_string="#ff0000")
    color.hex = "zzz"
    assert color.rgb is None


def test_hsl_precision():
    color = ColorModel(hsl_precision=2, r=255, g=128, b=0)
    assert color.h == 30.12

    from_hsl = ColorModel(hsl_precision=2, h=30.12, s=1, l=0.5)
    assert from_hsl.rgb == (255, 128, 0)


def test_listener_notified_once():
    color = ColorModel()
    seen = []
    color.add_listener("r", lambda name, value, old: seen.append((value, old)))

    color.color_string = "rgb(1, 2, 3)"
    assert seen == [(1, None)]


def test_random_color():
    color = ColorModel()
    color.random_color(np.random.default_rng(42))

    assert all(0 <= c <= 255 for c in color.rgb)
    assert color.hex == rgb_to_hex(color.rgb)
    assert color.hsl is not None


def test_reset_color():
    color = ColorModel(color_string="rgba(1, 2, 3, 0.5)")
    color.reset_color()

    assert color.get_properties()["color_string"] is None
    assert color.rgb is None
    assert color.input_format is None
