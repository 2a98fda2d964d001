from __future__ import annotations
import logging
import re
import warnings
from typing import Any, Optional

import numpy as np

from ..conversions import (
    CSSColorResolver,
    ColorResolver,
    hex_string,
    hex_to_alpha,
    hex_to_rgb,
    hsl_string,
    hsl_to_rgb,
    infer_format,
    normalize_hsl,
    normalize_rgb,
    parse_color_string,
    rgb_string,
    rgb_to_hex,
    rgb_to_hsl,
)
from ..core.observable import Observable, ObservedProperty, UpdateSource
from ..types.color_types import HSL, RGB
from ..types.format_type import ColorFormat, DEFAULT_HSL_PRECISION, is_valid_format
from ..utils.num_utils import is_set, is_unset, normalized_clamp, same_value

log = logging.getLogger(__name__)

_hex_pattern = re.compile(r"#?(?:[0-9A-Fa-f]{3,4}|[0-9A-Fa-f]{6}|[0-9A-Fa-f]{8})")


def _triple_is_set(values) -> bool:
    return values is not None and all(is_set(v) for v in values)


def _same_triple(a, b) -> bool:
    return all(same_value(x, y) for x, y in zip(a, b))


class ColorModel(Observable):
    """
    A color observable as RGB, HSL, hex, alpha and a CSS color string.

    Writing any one view updates all others. ``color_string`` converts
    between ``rgb()``, ``hsl()`` and hex notation according to ``format``;
    with ``format="auto"`` a written string is kept as long as it still
    describes the color.

    Args:
        resolver: renders arbitrary color strings (named colors and other
            notations outside the structured grammars); it is also probed
            once for ``#rrggbbaa`` support
        **values: initial property values

    Example:
        >>> color = ColorModel(color_string="rgba(255, 0, 0, 0.5)")
        >>> (color.h, color.s, color.l)
        (0.0, 1.0, 0.5)
        >>> color.r = 0
        >>> color.color_string
        'rgba(0, 0, 0, 0.5)'
    """

    hex = ObservedProperty(observer="_hex_changed")
    r = ObservedProperty()
    g = ObservedProperty()
    b = ObservedProperty()
    h = ObservedProperty()
    s = ObservedProperty()
    l = ObservedProperty()
    alpha = ObservedProperty(1, observer="_alpha_changed")
    # True if the color string carries alpha
    alpha_mode = ObservedProperty(observer="_alpha_mode_changed")
    without_alpha = ObservedProperty(observer="_without_alpha_changed")
    hsl_precision = ObservedProperty(DEFAULT_HSL_PRECISION)
    format = ObservedProperty(ColorFormat.AUTO, observer="_format_changed")
    # the format does not follow the notation of written color strings
    fixed_format = ObservedProperty(False)
    color_string = ObservedProperty(observer="_color_string_changed")
    # notation of the last written color string
    input_format = ObservedProperty(readonly=True)

    observers = (
        ("_rgb_changed", ("r", "g", "b")),
        ("_hsl_changed", ("h", "s", "l")),
    )

    def __init__(self, resolver: Optional[ColorResolver] = None, **values: Any) -> None:
        self._resolver = resolver if resolver is not None else CSSColorResolver()
        self._hex_alpha_supported = self._resolver.resolve("#00000000").alpha == 0
        super().__init__(**values)

    @property
    def hex_alpha_supported(self) -> bool:
        return self._hex_alpha_supported

    @property
    def rgb(self) -> Optional[RGB]:
        values = (self.r, self.g, self.b)
        return RGB(*values) if _triple_is_set(values) else None

    @property
    def hsl(self) -> Optional[HSL]:
        values = (self.h, self.s, self.l)
        return HSL(*values) if _triple_is_set(values) else None

    # ---- public operations ----

    def random_color(self, rng: Optional[np.random.Generator] = None) -> None:
        """Set a random RGB color; alpha is left untouched."""
        rng = rng if rng is not None else np.random.default_rng()
        r, g, b = (int(v) for v in rng.integers(0, 256, size=3))
        self.set_properties(r=r, g=g, b=b)

    def reset_color(self) -> None:
        """Clear every view of the color."""
        if self._update_source is UpdateSource.RESET:
            return
        with self._deriving(UpdateSource.RESET):
            self.set_properties(
                {
                    "color_string": None,
                    "r": None,
                    "g": None,
                    "b": None,
                    "h": None,
                    "s": None,
                    "l": None,
                    "hex": None,
                    "alpha": None,
                    "input_format": None,
                },
                readonly=True,
            )

    # ---- color string ----

    def _color_string_changed(self, color_string, old) -> None:
        if self._update_source is UpdateSource.COLOR_PROPERTIES:
            return
        if not color_string or not isinstance(color_string, str):
            self.reset_color()
            return

        fixed_format = bool(self.fixed_format)
        parsed = parse_color_string(
            color_string,
            self.hsl_precision or 0,
            bool(self.without_alpha),
            self._hex_alpha_supported,
        )
        to_set: dict = {}
        if parsed is None:
            color_format = ColorFormat.AUTO
            resolved = self._resolver.resolve(color_string)
            log.debug("Resolved %r as %s", color_string, resolved)
            to_set.update(alpha=resolved.alpha, alpha_mode=resolved.alpha_mode, r=resolved.r, g=resolved.g, b=resolved.b)
        else:
            color_format = parsed.format
            if parsed.unfix_format:
                fixed_format = False
            to_set.update(alpha=parsed.alpha, alpha_mode=parsed.alpha_mode)
            if parsed.hsl is not None:
                to_set.update(parsed.hsl._asdict())
            elif parsed.rgb is not None:
                to_set.update(parsed.rgb._asdict())
            else:
                to_set["hex"] = parsed.hex

        if self.format != color_format and self.format != ColorFormat.AUTO and not fixed_format:
            to_set["format"] = color_format
        to_set["input_format"] = parsed.grammar if parsed is not None else color_format

        with self._deriving(UpdateSource.COLOR_STRING):
            self.set_properties(to_set, readonly=True)
        # alpha-only changes do not pass through the rgb/hsl observers
        self._refresh_color_string()

    def _compute_color_string(self, rgb, hsl, hex_value, old_color: Optional[str]) -> Optional[str]:
        alpha = 1 if is_unset(self.alpha) else self.alpha
        alpha_mode = not self.without_alpha and (self.alpha_mode is True or alpha != 1)
        color_format = self.format
        rgb = rgb if _triple_is_set(rgb) else None
        hsl = hsl if _triple_is_set(hsl) else None

        if color_format == ColorFormat.AUTO:
            if old_color:
                rendered = self._resolver.resolve(old_color)
                if not alpha_mode and not rendered.alpha_mode and (rgb is None or _same_rgb(rgb, rendered.rgb)):
                    # keep the written string while it still describes the color
                    return old_color
                if rgb is None:
                    rgb = rendered.rgb
                color_format = infer_format(old_color)
            else:
                color_format = ColorFormat.HEX

        alpha_arg = alpha if alpha_mode else None

        if color_format == ColorFormat.HSL:
            if hsl is None and rgb is not None:
                hsl = normalize_hsl(rgb_to_hsl(rgb, self.h), self.hsl_precision or 0)
            if hsl is not None:
                return hsl_string(hsl, alpha_arg)
            color_format = ColorFormat.HEX

        if color_format == ColorFormat.HEX:
            if not hex_value:
                if rgb is None and hsl is not None:
                    rgb = normalize_rgb(hsl_to_rgb(hsl))
                hex_value = rgb_to_hex(rgb) if rgb is not None else None
            if hex_value:
                if not alpha_mode:
                    return hex_value
                if self._hex_alpha_supported:
                    return hex_string(hex_value, alpha)
                # no #rrggbbaa support, fall back to rgba()

        if rgb is None and hsl is not None:
            rgb = normalize_rgb(hsl_to_rgb(hsl))
        if rgb is not None:
            return rgb_string(rgb, alpha_arg)
        return None

    def _current_color_string(self) -> Optional[str]:
        return self._compute_color_string(
            (self.r, self.g, self.b),
            (self.h, self.s, self.l),
            self.hex,
            self.color_string,
        )

    def _refresh_color_string(self) -> None:
        if self._update_source is UpdateSource.COLOR_STRING or not self.color_string:
            return
        color_string = self._current_color_string()
        if color_string is not None and color_string != self.color_string:
            with self._deriving(UpdateSource.COLOR_PROPERTIES):
                self.color_string = color_string

    # ---- hex / rgb / hsl ----

    def _hex_changed(self, hex_value, old) -> None:
        if not hex_value:
            self.reset_color()
            return
        if not isinstance(hex_value, str) or not _hex_pattern.fullmatch(hex_value):
            log.debug("Invalid hex color %r, resetting", hex_value)
            self.reset_color()
            return

        digits = hex_value.lstrip("#")
        alpha_digits = None
        if len(digits) in (4, 8):
            split = len(digits) // 4 * 3
            digits, alpha_digits = digits[:split], digits[split:]
        rgb = hex_to_rgb("#" + digits)
        normalized = rgb_to_hex(rgb)
        if normalized != self.hex:
            to_set = {"hex": normalized}
            if alpha_digits is not None and not self.without_alpha:
                to_set["alpha"] = hex_to_alpha(alpha_digits, len(alpha_digits))
            self.set_properties(to_set)
            return

        if not _same_triple(rgb, (self.r, self.g, self.b)):
            self.set_properties(rgb._asdict())

    def _rgb_changed(self) -> None:
        r, g, b = self.r, self.g, self.b
        if is_unset(r) and is_unset(g) and is_unset(b):
            self.reset_color()
            return
        if is_unset(r) or is_unset(g) or is_unset(b):
            # a single channel can be set without deriving anything
            return

        rgb = normalize_rgb((r, g, b))
        if not _same_triple(rgb, (r, g, b)):
            self.set_properties(rgb._asdict())
            return

        if self._update_source is UpdateSource.COLOR_PROPERTIES:
            return

        hsl = normalize_hsl(rgb_to_hsl(rgb, self.h), self.hsl_precision or 0)
        hex_value = rgb_to_hex(rgb)
        to_set: dict = {}
        if not _same_triple(hsl, (self.h, self.s, self.l)):
            to_set.update(hsl._asdict())
        if hex_value != self.hex:
            to_set["hex"] = hex_value
        if self._update_source is not UpdateSource.COLOR_STRING:
            color_string = self._compute_color_string(rgb, hsl, hex_value, self.color_string)
            if color_string != self.color_string:
                to_set["color_string"] = color_string

        with self._deriving(UpdateSource.COLOR_PROPERTIES):
            self.set_properties(to_set)

    def _hsl_changed(self) -> None:
        h, s, l = self.h, self.s, self.l
        if is_unset(h) and is_unset(s) and is_unset(l):
            self.reset_color()
            return
        if is_unset(h) or is_unset(s) or is_unset(l):
            return

        hsl = normalize_hsl((h, s, l), self.hsl_precision or 0)
        if not _same_triple(hsl, (h, s, l)):
            self.set_properties(hsl._asdict())
            return

        if self._update_source is UpdateSource.COLOR_PROPERTIES:
            return

        rgb = normalize_rgb(hsl_to_rgb(hsl))
        hex_value = rgb_to_hex(rgb)
        to_set: dict = {}
        if not _same_triple(rgb, (self.r, self.g, self.b)):
            to_set.update(rgb._asdict())
        if hex_value != self.hex:
            to_set["hex"] = hex_value
        if self._update_source is not UpdateSource.COLOR_STRING:
            color_string = self._compute_color_string(rgb, hsl, hex_value, self.color_string)
            if color_string != self.color_string:
                to_set["color_string"] = color_string

        with self._deriving(UpdateSource.COLOR_PROPERTIES):
            self.set_properties(to_set)

    # ---- alpha and format ----

    def _format_changed(self, color_format, old) -> None:
        if not is_valid_format(color_format):
            fallback = old if is_valid_format(old) else ColorFormat.AUTO
            warnings.warn(f"Unknown color format: {color_format!r}, keeping {fallback!r}")
            self.format = fallback
            return
        self._refresh_color_string()

    def _alpha_changed(self, alpha, old) -> None:
        if alpha is None:
            return
        if is_unset(alpha):
            self.alpha = 1
            return
        clamped = normalized_clamp(alpha)
        if clamped != alpha:
            self.alpha = clamped
            return
        if self.without_alpha and (alpha != 1 or self.alpha_mode):
            self.set_properties(alpha=1, alpha_mode=False)
            return
        if not self.without_alpha and alpha != 1 and not self.alpha_mode:
            self.alpha_mode = True
            return
        self._refresh_color_string()

    def _alpha_mode_changed(self, alpha_mode, old) -> None:
        if alpha_mode is None:
            return
        if self.without_alpha and (self.alpha != 1 or alpha_mode):
            self.set_properties(alpha=1, alpha_mode=False)
            return
        if not alpha_mode and self.alpha != 1:
            self.alpha = 1
            return
        self._refresh_color_string()

    def _without_alpha_changed(self, without_alpha, old) -> None:
        if without_alpha and (self.alpha != 1 or self.alpha_mode):
            self.set_properties(alpha=1, alpha_mode=False)


def _same_rgb(a, b) -> bool:
    return all(x == y for x, y in zip(a, b))
