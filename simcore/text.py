"""Shared text normalization for the profiler and the CLI.

Every document goes through the same two steps, so two documents only
share a token when both spell it identically after case folding.
Only ASCII letters and digits count as word characters.
"""

from __future__ import annotations

import re

DEFAULT_STOP_WORDS = frozenset({"A", "AND", "AN", "OF", "IN", "THE"})

_SEPARATOR_RE = re.compile(r"[^A-Za-z0-9]")


def normalize(text: str) -> str:
    """Uppercase ASCII alphanumerics, every other character becomes one space."""
    return _SEPARATOR_RE.sub(" ", text).upper()


def tokenize(normalized: str) -> list[str]:
    return normalized.split()
