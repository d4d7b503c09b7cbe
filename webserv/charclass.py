"""ASCII character classification and case conversion.

Each function accepts either an integer character code or a one-character
string. Only the ASCII ranges are considered; other characters never count
as letters or digits and are left unchanged by case conversion.
"""

from __future__ import annotations

from typing import Union

CharLike = Union[int, str]


def _code(c: CharLike) -> int:
    if isinstance(c, str):
        if len(c) != 1:
            raise ValueError(f"expected a single character, got {len(c)} characters")
        return ord(c)
    if isinstance(c, bool) or not isinstance(c, int):
        raise TypeError(f"expected an int or a one-character str, got {type(c).__name__}")
    return c


def isalpha(c: CharLike) -> bool:
    """Return True for an ASCII letter."""
    code = _code(c)
    return 97 <= code <= 122 or 65 <= code <= 90


def isdigit(c: CharLike) -> bool:
    """Return True for an ASCII decimal digit."""
    return 48 <= _code(c) <= 57


def isalnum(c: CharLike) -> bool:
    """Return True for an ASCII letter or digit."""
    return isalpha(c) or isdigit(c)


def isascii(c: CharLike) -> bool:
    """Return True for a code in the 7-bit ASCII range."""
    return 0 <= _code(c) <= 127


def isprint(c: CharLike) -> bool:
    """Return True for a printable ASCII character, space included."""
    return 32 <= _code(c) <= 126


def toupper(c: CharLike) -> CharLike:
    """Convert an ASCII lowercase letter to uppercase; return the same kind of value."""
    code = _code(c)
    if 97 <= code <= 122:
        code -= 32
    return chr(code) if isinstance(c, str) else code


def tolower(c: CharLike) -> CharLike:
    """Convert an ASCII uppercase letter to lowercase; return the same kind of value."""
    code = _code(c)
    if 65 <= code <= 90:
        code += 32
    return chr(code) if isinstance(c, str) else code