"""String and byte helpers modelled on the classic C library routines.

Searches return an index, or ``None`` when nothing is found. Comparisons
return the difference between the first pair of differing character codes,
or 0 when the compared parts are equal. A string ends where the text ends,
and that end compares as code 0.
"""

from __future__ import annotations

from collections.abc import Callable
from itertools import islice, zip_longest


def _single_char(value: str, name: str) -> str:
    if not isinstance(value, str):
        raise TypeError(f"{name} must be a str, got {type(value).__name__}")
    if len(value) != 1:
        raise ValueError(f"{name} must be a single character, got {len(value)} characters")
    return value


def _non_negative(value: int, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an int, got {type(value).__name__}")
    if value < 0:
        raise ValueError(f"{name} must not be negative, got {value}")
    return value


def _first_difference(pairs) -> int:
    for a, b in pairs:
        if a != b:
            return a - b
    return 0


def split(text: str, sep: str) -> list[str]:
    """Split ``text`` on the character ``sep``, dropping empty pieces."""
    _single_char(sep, "sep")
    return [piece for piece in text.split(sep) if piece]


def strtrim(text: str, charset: str) -> str:
    """Remove characters found in ``charset`` from both ends of ``text``."""
    return text.strip(charset)


def substr(text: str, start: int, length: int) -> str:
    """Return at most ``length`` characters of ``text`` from ``start`` on.

    A start at or past the end gives an empty string.
    """
    _non_negative(start, "start")
    _non_negative(length, "length")
    if start >= len(text):
        return ""
    return text[start:start + length]


def strnstr(haystack: str, needle: str, length: int) -> int | None:
    """Find ``needle`` lying wholly within the first ``length`` characters.

    An empty needle is found at index 0.
    """
    _non_negative(length, "length")
    if not needle:
        return 0
    index = haystack.find(needle, 0, length)
    return None if index < 0 else index


def strncmp(s1: str, s2: str, n: int) -> int:
    """Compare at most ``n`` characters of two strings."""
    _non_negative(n, "n")
    pairs = zip_longest(map(ord, s1), map(ord, s2), fillvalue=0)
    return _first_difference(islice(pairs, n))


def strcmp(s1: str, s2: str) -> int:
    """Compare two strings character by character."""
    return _first_difference(zip_longest(map(ord, s1), map(ord, s2), fillvalue=0))


def memcmp(b1: bytes, b2: bytes, n: int) -> int:
    """Compare the first ``n`` bytes of two byte sequences."""
    _non_negative(n, "n")
    if n > len(b1) or n > len(b2):
        raise ValueError(f"cannot compare {n} bytes: inputs hold {len(b1)} and {len(b2)}")
    return _first_difference(zip(b1[:n], b2[:n]))


def memchr(data: bytes, byte: int, n: int) -> int | None:
    """Find ``byte`` (taken modulo 256) among the first ``n`` bytes of ``data``."""
    _non_negative(n, "n")
    if n > len(data):
        raise ValueError(f"cannot search {n} bytes: input holds {len(data)}")
    index = bytes(data).find(byte & 0xFF, 0, n)
    return None if index < 0 else index


def strchr(text: str, char: str) -> int | None:
    """Index of the first ``char`` in ``text``; a NUL character matches the end."""
    _single_char(char, "char")
    if char == "\0":
        return len(text)
    index = text.find(char)
    return None if index < 0 else index


def strrchr(text: str, char: str) -> int | None:
    """Index of the last ``char`` in ``text``; a NUL character matches the end."""
    _single_char(char, "char")
    if char == "\0":
        return len(text)
    index = text.rfind(char)
    return None if index < 0 else index


def strmapi(text: str, func: Callable[[int, str], str]) -> str:
    """Build a new string from ``func(index, char)`` for every character."""
    return "".join(func(index, ch) for index, ch in enumerate(text))


def strlcat(dst: str, src: str, size: int) -> tuple[str, int]:
    """Append ``src`` to ``dst`` within a buffer of ``size`` characters.

    ``size`` counts the terminating NUL, so at most ``size - len(dst) - 1``
    characters are appended. Returns the new string and the length that the
    full concatenation would have had; when ``dst`` already fills the buffer
    that length is ``size + len(src)`` and ``dst`` comes back unchanged.
    """
    _non_negative(size, "size")
    dst_len = min(len(dst), size)
    if dst_len < size:
        room = size - dst_len - 1
        result = dst + src[:room]
    else:
        result = dst
    return result, dst_len + len(src)