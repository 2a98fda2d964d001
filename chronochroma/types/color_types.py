from __future__ import annotations
from typing import NamedTuple, Optional, Tuple, Union
from numpy import ndarray

from .format_type import ColorFormat

Scalar = int | float
ScalarTriple = Tuple[Scalar, Scalar, Scalar]
ColorArray = ndarray  # shape (..., 3)


class RGB(NamedTuple):
    r: float
    g: float
    b: float


class HSL(NamedTuple):
    h: float
    s: float
    l: float


class ParsedColor(NamedTuple):
    """
    Result of decoding one of the structured color string grammars.

    Exactly one of ``rgb``, ``hsl`` or ``hex`` is set, depending on the
    grammar that matched. ``format`` is the format the string should be
    reported as, which differs from the grammar when a hex alpha cannot be
    represented in the current environment.
    """
    format: ColorFormat
    grammar: ColorFormat
    alpha: float
    alpha_mode: bool
    rgb: Optional[RGB] = None
    hsl: Optional[HSL] = None
    hex: Optional[str] = None
    unfix_format: bool = False


class ResolvedColor(NamedTuple):
    """The rendered rgba quadruple of a color string."""
    r: int
    g: int
    b: int
    alpha: float
    alpha_mode: bool

    @property
    def rgb(self) -> RGB:
        return RGB(self.r, self.g, self.b)


RGBLike = Union[RGB, ScalarTriple]
HSLLike = Union[HSL, ScalarTriple]
