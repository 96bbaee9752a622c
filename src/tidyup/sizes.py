"""Coarse human-readable byte counts."""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator

_UNITS: tuple[tuple[int, str], ...] = (
    (1024**3, "G"),
    (1024**2, "M"),
    (1024, "K"),
)


def format_size(num: int) -> str:
    """Render a byte count in the largest unit where it is at least 1.

    The quotient is truncated, so 2548 bytes is "2K" and 1023 is "1023b".
    """
    for factor, suffix in _UNITS:
        if num >= factor:
            return f"{num // factor}{suffix}"
    return f"{num}b"


def humanize_line(line: str, min_digits: int = 4) -> str:
    """Replace every run of at least min_digits digits with its formatted size."""
    pattern = re.compile(rf"(?<![\d.])\d{{{min_digits},}}(?![\d.])")
    return pattern.sub(lambda m: format_size(int(m.group(0))), line)


def humanize_lines(lines: Iterable[str], min_digits: int = 4) -> Iterator[str]:
    """Apply humanize_line to a stream of lines, e.g. ``du -b`` output."""
    for line in lines:
        yield humanize_line(line, min_digits)
