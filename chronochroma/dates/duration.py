from __future__ import annotations
import re
from typing import Optional

from ..types.datetime_types import MS_PER_DAY, MS_PER_HOUR, MS_PER_MINUTE, MS_PER_SECOND, MS_PER_WEEK, MS_PER_YEAR
from ..utils.num_utils import format_number, is_unset

regexp_duration = re.compile(
    r"^(-)?(?:(\d+)y)?(?:(\d+)w)?(?:(\d+)d)?(?:(\d+)h)?(?:(\d+)m(?!s))?(?:(\d+)s)?(?:(\d+)ms)?$"
)

# unit suffix and length, largest first
DURATION_UNITS = (
    ("y", MS_PER_YEAR),
    ("w", MS_PER_WEEK),
    ("d", MS_PER_DAY),
    ("h", MS_PER_HOUR),
    ("m", MS_PER_MINUTE),
    ("s", MS_PER_SECOND),
    ("ms", 1),
)


def to_duration_string(value: Optional[float]) -> Optional[str]:
    """
    Format milliseconds as ``1y2w3d4h5m6s7ms``, omitting empty units.

    A year is 365.25 days. Zero formats as an empty string.
    """
    if is_unset(value):
        return None
    sign = "-" if value < 0 else ""
    rest = abs(value)
    text = ""
    for suffix, length in DURATION_UNITS:
        if length == 1:
            amount = rest
        else:
            amount, rest = divmod(rest, length)
        if amount:
            text += format_number(amount) + suffix
    return sign + text if text else ""


def to_duration_number(text: Optional[str]) -> Optional[int]:
    """Milliseconds of a duration string; None when it does not follow the grammar."""
    if not text:
        return None
    match = regexp_duration.match(text.strip())
    if match is None or not any(match.groups()[1:]):
        return None
    total = sum(int(amount) * length for amount, (_, length) in zip(match.groups()[1:], DURATION_UNITS) if amount)
    return -total if match.group(1) else total
