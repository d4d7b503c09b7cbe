"""Integer parsing and formatting."""

from __future__ import annotations

import operator
import sys
from typing import TextIO

_LEADING_SPACE = "\t\n\v\f\r "
_DIGITS = "0123456789"


def atoi(text: str) -> int:
    """Parse a leading decimal integer the way C ``atoi`` does.

    Leading whitespace is skipped, one optional sign is accepted, and digits
    are read until the first non-digit. Text without digits gives 0.
    """
    rest = text.lstrip(_LEADING_SPACE)
    sign = 1
    if rest[:1] in ("-", "+"):
        if rest[0] == "-":
            sign = -1
        rest = rest[1:]
    value = 0
    for ch in rest:
        if ch not in _DIGITS:
            break
        value = value * 10 + (ord(ch) - 48)
    return sign * value


def itoa(n: int) -> str:
    """Format an integer in decimal."""
    return str(operator.index(n))


def putnbr(n: int, stream: TextIO | None = None) -> None:
    """Write an integer in decimal to ``stream`` (standard output by default)."""
    (stream if stream is not None else sys.stdout).write(itoa(n))