from __future__ import annotations

import math
import re

CHARS_PER_TOKEN = 4
CHARS_PER_PAGE = 3500

_HORIZONTAL_WHITESPACE = re.compile(r"[^\S\n]+")
_SPACE_AROUND_NEWLINE = re.compile(r" ?\n ?")
_EXCESS_NEWLINES = re.compile(r"\n{3,}")


def normalize_text(raw_text: str) -> str:
    """Clean extraction artifacts while keeping paragraph breaks.

    Form feeds become newlines, null bytes are dropped, other whitespace runs
    collapse to one space, and three or more newlines collapse to a blank line.
    """

    if not raw_text:
        return ""

    text = raw_text.replace("\r\n", "\n").replace("\r", "\n")
    text = text.replace("\f", "\n").replace("\x00", "")
    text = _HORIZONTAL_WHITESPACE.sub(" ", text)
    text = _SPACE_AROUND_NEWLINE.sub("\n", text)
    text = _EXCESS_NEWLINES.sub("\n\n", text)
    return text.strip()


def estimate_tokens(text: str) -> int:
    """Rough token count: one token per four characters."""

    return math.ceil(len(text) / CHARS_PER_TOKEN)


def estimate_pages(text: str) -> int:
    return math.ceil(len(text) / CHARS_PER_PAGE)
