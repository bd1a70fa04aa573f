"""Whitespace-delimited tokenization shared by diffing and sectioning."""

from __future__ import annotations

import re

_WHITESPACE_SPLIT_RE = re.compile(r"(\s+)")


def tokenize(text: str) -> list[str]:
    """Split text into alternating whitespace and non-whitespace runs.

    Joining the result reproduces `text` exactly. Empty runs are dropped, so
    an empty string yields no tokens.
    """

    return [token for token in _WHITESPACE_SPLIT_RE.split(text) if token]


def split_words(text: str) -> list[str]:
    """Return the non-whitespace runs of `text` in order."""

    return text.split()


def count_words(text: str) -> int:
    """Return the number of whitespace-delimited words in `text`."""

    return len(split_words(text))
