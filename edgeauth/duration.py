"""
Go-style duration strings ("300s", "15m", "1h30m", "1.5h", "500ms").

A duration is an optional sign followed by one or more decimal numbers,
each with an optional fraction and a mandatory unit suffix.
"""

import re
from typing import Final

from edgeauth.errors import InvalidDurationError

NANOSECOND: Final[int] = 1
MICROSECOND: Final[int] = 1000 * NANOSECOND
MILLISECOND: Final[int] = 1000 * MICROSECOND
SECOND: Final[int] = 1000 * MILLISECOND
MINUTE: Final[int] = 60 * SECOND
HOUR: Final[int] = 60 * MINUTE

# Durations share Go's int64 nanosecond range.
MAX_DURATION: Final[int] = 2**63 - 1

# Longest digit run that can still fit in MAX_DURATION; fraction digits
# beyond it are below nanosecond resolution.
_MAX_DIGITS: Final[int] = len(str(MAX_DURATION))

_UNITS = {
    "ns": NANOSECOND,
    "us": MICROSECOND,
    "µs": MICROSECOND,  # micro sign
    "μs": MICROSECOND,  # greek mu
    "ms": MILLISECOND,
    "s": SECOND,
    "m": MINUTE,
    "h": HOUR,
}

_SEGMENT = re.compile(r"([0-9]*)(?:\.([0-9]*))?(ns|us|µs|μs|ms|s|m|h)")


def parse_duration(text: str) -> int:
    """
    Parse a duration string into a signed number of nanoseconds.

    Args:
        text: Duration such as ``"300s"``, ``"-1.5h"`` or ``"1h15m30s"``.

    Returns:
        The duration in nanoseconds.

    Raises:
        InvalidDurationError: If the string is empty, has a number without a
            unit, uses an unknown unit or overflows.
    """
    original = text
    negative = False
    if text[:1] in ("-", "+"):
        negative = text[0] == "-"
        text = text[1:]

    if text == "0":
        return 0
    if not text:
        raise InvalidDurationError(f"invalid --duration: time: invalid duration {original!r}")

    total = 0
    pos = 0
    while pos < len(text):
        match = _SEGMENT.match(text, pos)
        if not match or not (match.group(1) or match.group(2)):
            raise InvalidDurationError(
                f"invalid --duration: time: invalid duration {original!r}"
            )
        whole, fraction, unit = match.groups()
        whole = whole.lstrip("0")
        fraction = (fraction or "")[:_MAX_DIGITS]
        scale = _UNITS[unit]
        if len(whole) > _MAX_DIGITS:
            raise InvalidDurationError(
                f"invalid --duration: time: invalid duration {original!r}"
            )
        total += int(whole or "0") * scale
        if fraction:
            total += int(fraction) * scale // 10 ** len(fraction)
        if total > MAX_DURATION:
            raise InvalidDurationError(
                f"invalid --duration: time: invalid duration {original!r}"
            )
        pos = match.end()

    return -total if negative else total


def to_seconds(nanoseconds: int) -> int:
    """Whole seconds in a duration, truncated toward zero."""
    if nanoseconds < 0:
        return -(-nanoseconds // SECOND)
    return nanoseconds // SECOND
