import math

import pytest

from chronochroma.conversions.color_string import (
    hex_string,
    hsl_string,
    infer_format,
    parse_color_string,
    rgb_string,
    to_number,
)
from chronochroma.types import ColorFormat


def test_parse_rgba():
    parsed = parse_color_string("rgba(255, 0, 0, 0.5)")

    assert parsed.format == ColorFormat.RGB
    assert parsed.format == "rgb"
    assert parsed.rgb == (255, 0, 0)
    assert parsed.alpha == 0.5
    assert parsed.alpha_mode is True
    assert parsed.hsl is None and parsed.hex is None


def test_parse_rgb_wraps_channels():
    parsed = parse_color_string("rgb(300, -1, 0)")
    assert parsed.rgb == (44, 255, 0)
    assert parsed.alpha == 1
    assert parsed.alpha_mode is False


def test_parse_hsl_percentages():
    parsed = parse_color_string("hsl(120, 100%, 50%)")

    assert parsed.format == ColorFormat.HSL
    assert parsed.hsl == (120, 1, 0.5)
    assert parsed.alpha_mode is False


def test_parse_hsla_fractions():
    parsed = parse_color_string("hsla(120, 0.5, 0.25, 0.3)")
    assert parsed.hsl == (120, 0.5, 0.25)
    assert parsed.alpha == 0.3
    assert parsed.alpha_mode is True


def test_parse_hsl_precision():
    parsed = parse_color_string("hsl(30.1176, 100%, 50%)", hsl_precision=2)
    assert parsed.hsl.h == 30.12


def test_parse_hex():
    parsed = parse_color_string("#f00")
    assert parsed.format == ColorFormat.HEX
    assert parsed.hex == "#f00"
    assert parsed.alpha == 1
    assert parsed.alpha_mode is False


def test_parse_hex_alpha():
    parsed = parse_color_string("#ff000080")
    assert parsed.format == ColorFormat.HEX
    assert parsed.hex == "#ff0000"
    assert parsed.alpha == 0.5
    assert parsed.alpha_mode is True
    assert parsed.unfix_format is False


def test_parse_hex_alpha_without_support_downgrades_to_rgb():
    parsed = parse_color_string("#ff000080", hex_alpha_supported=False)
    assert parsed.format == ColorFormat.RGB
    assert parsed.grammar == ColorFormat.HEX
    assert parsed.alpha == 0.5
    assert parsed.unfix_format is True


def test_parse_without_alpha():
    parsed = parse_color_string("rgba(1, 2, 3, 0.5)", without_alpha=True)
    assert parsed.alpha == 1
    assert parsed.alpha_mode is False

    parsed = parse_color_string("#ff000080", without_alpha=True)
    assert parsed.alpha == 1
    assert parsed.alpha_mode is False


@pytest.mark.parametrize("text", ["red", "rgb(1, 2)", "hsl(a, b, c)", "#ff000", "", "#gggggg"])
def test_parse_unstructured(text):
    assert parse_color_string(text) is None


def test_to_number():
    assert to_number("") == 0
    assert to_number(" 1.5 ") == 1.5
    assert math.isnan(to_number("abc"))
    assert math.isnan(to_number(None))


def test_rgb_string():
    assert rgb_string((1, 2, 3)) == "rgb(1, 2, 3)"
    assert rgb_string((1, 2, 3), 0.5) == "rgba(1, 2, 3, 0.5)"


def test_hsl_string():
    assert hsl_string((120, 0.5, 0.25)) == "hsl(120, 50%, 25%)"
    assert hsl_string((120, 0.5, 0.25), 1) == "hsla(120, 50%, 25%, 1)"
    assert hsl_string((30.12, 0.1235, 0.5)) == "hsl(30.12, 12.35%, 50%)"


def test_hex_string():
    assert hex_string("#ff0000") == "#ff0000"
    assert hex_string("#ff0000", 0.5) == "#ff000080"
    assert hex_string("#f00", 0.5) == "#f008"


def test_infer_format():
    assert infer_format("hsl(0, 0%, 0%)") == ColorFormat.HSL
    assert infer_format("rgba(0, 0, 0, 1)") == ColorFormat.RGB
    assert infer_format("#fff") == ColorFormat.HEX
    assert infer_format("red") == ColorFormat.HEX
    assert infer_format(None) == ColorFormat.HEX
