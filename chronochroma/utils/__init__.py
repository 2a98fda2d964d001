from .num_utils import (
    decimal_precision,
    safe_add,
    safe_mult,
    math_mod,
    normalized_clamp,
    is_negative,
    is_negative0,
    is_unset,
    is_set,
    is_number,
    same_value,
    round_half_up,
    to_fixed,
    format_number,
)
from .logging import setup_default_logging

__all__ = [
    "decimal_precision",
    "safe_add",
    "safe_mult",
    "math_mod",
    "normalized_clamp",
    "is_negative",
    "is_negative0",
    "is_unset",
    "is_set",
    "is_number",
    "same_value",
    "round_half_up",
    "to_fixed",
    "format_number",
    "setup_default_logging",
]
