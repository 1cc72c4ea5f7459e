"""Similarity between two top-K profiles.

The score is the sum of both frequencies over every word the two profiles
share.  It is not normalized: two profiles with nothing in common score
0.0 and the ceiling is 2.0.
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from simcore.profiler import Profile


def similarity_score(profile_a: Profile, profile_b: Profile) -> float:
    """Sum freq_a + freq_b over the words both profiles contain.

    Shared words are visited in ascending order so that swapping the
    arguments yields the same float, bit for bit.
    """
    freqs_a = dict(profile_a)
    freqs_b = dict(profile_b)
    if len(freqs_a) > len(freqs_b):
        freqs_a, freqs_b = freqs_b, freqs_a

    shared = sorted(word for word in freqs_a if word in freqs_b)
    score = 0.0
    for word in shared:
        score += freqs_a[word] + freqs_b[word]
    return score


def similarity_matrix(profiles: Sequence[Profile]) -> np.ndarray:
    """N×N matrix of pairwise scores with a zero diagonal."""
    n = len(profiles)
    matrix = np.zeros((n, n), dtype=np.float64)
    for i in range(n):
        for j in range(i + 1, n):
            matrix[i, j] = matrix[j, i] = similarity_score(profiles[i], profiles[j])
    return matrix
