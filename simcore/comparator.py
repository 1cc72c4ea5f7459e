"""Corpus comparison: profile every document, score every pair, rank.

The top-level `compare_corpus()` function orchestrates the pipeline:
validate → profile (per document) → score (per pair) → rank → top-M.
Both the profiling and the scoring stage can run on a process pool;
`executor.map` hands results back in submission order, so a parallel run
ranks exactly like a serial one.
"""

from __future__ import annotations

from collections.abc import Sequence
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass
from functools import partial

from loguru import logger

from simcore.config import ComparisonConfig, check_config, check_corpus_size
from simcore.profiler import Document, DocumentProfile, Profile, build_profile
from simcore.scorer import similarity_score


@dataclass(frozen=True)
class SimilarPair:
    first: int
    second: int
    first_name: str
    second_name: str
    score: float
    rank: int = 0

    def describe(self) -> str:
        return (
            f"Pair {self.rank}: ({self.first_name}, {self.second_name}) "
            f"- Similarity: {self.score:.6f}"
        )

    def to_dict(self) -> dict:
        return {
            "rank": self.rank,
            "first": self.first_name,
            "second": self.second_name,
            "score": round(self.score, 6),
        }


@dataclass(frozen=True)
class ComparisonResult:
    pairs: tuple[SimilarPair, ...]
    profiles: tuple[DocumentProfile, ...]
    pairs_scored: int

    @property
    def document_count(self) -> int:
        return len(self.profiles)


# ── Profiling ───────────────────────────────────────────────────────

def profile_corpus(
    documents: Sequence[Document],
    config: ComparisonConfig,
) -> tuple[DocumentProfile, ...]:
    """Profile each document once.  Output order matches input order."""
    if config.workers > 1 and len(documents) > 1:
        with ProcessPoolExecutor(max_workers=config.workers) as executor:
            profiles = executor.map(partial(build_profile, config=config), documents)
            return tuple(profiles)
    return tuple(build_profile(doc, config) for doc in documents)


# ── Scoring ─────────────────────────────────────────────────────────

_shared_profiles: tuple[Profile, ...] = ()


def _init_scoring_worker(profiles: tuple[Profile, ...]) -> None:
    global _shared_profiles
    _shared_profiles = profiles


def _score_row(i: int, profiles: Sequence[Profile] | None = None) -> list[tuple[int, int, float]]:
    """Scores of document i against every later document."""
    if profiles is None:
        profiles = _shared_profiles
    return [
        (i, j, similarity_score(profiles[i], profiles[j]))
        for j in range(i + 1, len(profiles))
    ]


def rank_pairs(
    profiles: Sequence[DocumentProfile],
    workers: int = 1,
) -> list[SimilarPair]:
    """Score every unordered pair and rank by descending score.

    Equal scores keep ascending (first, second) index order.
    """
    top_words = tuple(p.top_words for p in profiles)
    rows = range(len(top_words) - 1)

    if workers > 1 and len(top_words) > 2:
        with ProcessPoolExecutor(
            max_workers=workers,
            initializer=_init_scoring_worker,
            initargs=(top_words,),
        ) as executor:
            scored = [t for row in executor.map(_score_row, rows) for t in row]
    else:
        scored = [t for i in rows for t in _score_row(i, top_words)]

    scored.sort(key=lambda t: (-t[2], t[0], t[1]))
    return [
        SimilarPair(
            first=i,
            second=j,
            first_name=profiles[i].name,
            second_name=profiles[j].name,
            score=score,
            rank=rank,
        )
        for rank, (i, j, score) in enumerate(scored, 1)
    ]


# ── Top-level orchestrator ──────────────────────────────────────────

def compare_corpus(
    documents: Sequence[Document],
    config: ComparisonConfig | None = None,
) -> ComparisonResult:
    """Run the full comparison for a corpus and keep the top-M pairs."""
    config = config or ComparisonConfig()
    check_config(config)
    check_corpus_size(len(documents))

    profiles = profile_corpus(documents, config)
    empty = sum(1 for p in profiles if p.is_empty)
    if empty:
        logger.warning("{} of {} documents have an empty profile", empty, len(profiles))

    ranked = rank_pairs(profiles, workers=config.workers)
    logger.info(
        "Compared {} documents ({} pairs, top_k={}, workers={})",
        len(profiles),
        len(ranked),
        config.top_k,
        config.workers,
    )
    return ComparisonResult(
        pairs=tuple(ranked[: config.top_m]),
        profiles=profiles,
        pairs_scored=len(ranked),
    )
