"""Frequency profiling: counts, relative frequencies, and top-K selection.

A document's profile is its K most frequent non-stop words together with
their relative frequencies.  Frequencies are taken over every non-stop
token of the document, so a profile's frequencies usually sum to less
than 1.0 once truncated.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from loguru import logger

from simcore.config import ComparisonConfig
from simcore.errors import ConfigurationError, EmptyProfileError
from simcore.text import DEFAULT_STOP_WORDS, normalize, tokenize

Profile = tuple[tuple[str, float], ...]


@dataclass(frozen=True)
class Document:
    name: str
    text: str


@dataclass(frozen=True)
class DocumentProfile:
    name: str
    total_tokens: int
    distinct_tokens: int
    top_words: Profile

    @property
    def is_empty(self) -> bool:
        return not self.top_words

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "total_tokens": self.total_tokens,
            "distinct_tokens": self.distinct_tokens,
            "top_words": [[w, round(f, 6)] for w, f in self.top_words],
        }


# ── Counting ────────────────────────────────────────────────────────

def count_words(
    normalized: str,
    stop_words: Iterable[str] = DEFAULT_STOP_WORDS,
) -> dict[str, int]:
    """Count non-stop tokens.  Keys come back in ascending token order."""
    stop = stop_words if isinstance(stop_words, frozenset) else frozenset(stop_words)
    counts = Counter(t for t in tokenize(normalized) if t not in stop)
    return {token: counts[token] for token in sorted(counts)}


def normalize_frequencies(counts: Mapping[str, int], total: int) -> dict[str, float]:
    """Divide each count by `total`, the document's non-stop token count."""
    if total < 0:
        raise ValueError(f"total must be non-negative, got {total}")
    if total == 0:
        raise EmptyProfileError("document has no tokens left after stop-word removal")
    return {token: count / total for token, count in counts.items()}


# ── Top-K ───────────────────────────────────────────────────────────

def top_k(freqs: Mapping[str, float], k: int = 100) -> Profile:
    """Highest frequencies first; equal frequencies in ascending token order."""
    if k <= 0:
        raise ConfigurationError(f"top_k must be positive, got {k}.")
    ranked = sorted(freqs.items(), key=lambda item: (-item[1], item[0]))
    return tuple(ranked[:k])


# ── Per-document pipeline ───────────────────────────────────────────

def build_profile(document: Document, config: ComparisonConfig) -> DocumentProfile:
    """normalize → count → frequencies → top-K for a single document."""
    counts = count_words(normalize(document.text), config.stop_words)
    total = sum(counts.values())

    try:
        freqs = normalize_frequencies(counts, total)
    except EmptyProfileError:
        logger.warning(
            "Document {} has no words outside the stop-word list; it will score 0.0 against every other document",
            document.name,
        )
        return DocumentProfile(document.name, 0, 0, ())

    top_words = top_k(freqs, config.top_k)
    logger.debug(
        "Profiled {}: {} tokens, {} distinct, kept {}",
        document.name,
        total,
        len(counts),
        len(top_words),
    )
    return DocumentProfile(document.name, total, len(counts), top_words)
