"""Fixed-width text helpers shared by the table renderers."""
from __future__ import annotations

ELLIPSIS = "…"


def truncate_middle(text: str, width: int) -> str:
    """Shorten ``text`` to ``width`` characters by eliding its middle.

    ``truncate_middle("VeryLongNameHere", 13)`` is ``"VeryLo…meHere"``; the
    left part gets the smaller half when the kept length is odd.
    """
    if width <= 0:
        return ""
    if len(text) <= width:
        return text
    if width == 1:
        return ELLIPSIS
    keep = width - 1
    left = keep // 2
    right = keep - left
    return text[:left] + ELLIPSIS + text[len(text) - right:]


def pad_right(text: str, width: int) -> str:
    return text if len(text) >= width else text + " " * (width - len(text))


def adaptive_width(lengths, minimum: int, cap: int, default: int) -> int:
    """Column width fitting the longest value, clamped to [minimum, cap]."""
    longest = max(lengths, default=default)
    return min(max(minimum, longest), cap)
