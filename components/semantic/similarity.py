"""
Vector similarity helpers.
"""

from typing import List, Sequence, Tuple

import numpy as np


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """
    Cosine similarity dot(a, b) / (|a| * |b|).

    Returns 0.0 when the vectors differ in length, are empty, or either
    has zero magnitude.
    """
    if len(a) != len(b) or len(a) == 0:
        return 0.0

    va = np.asarray(a, dtype=np.float64)
    vb = np.asarray(b, dtype=np.float64)

    norm_a = np.linalg.norm(va)
    norm_b = np.linalg.norm(vb)
    if norm_a == 0.0 or norm_b == 0.0:
        return 0.0

    return float(np.dot(va, vb) / (norm_a * norm_b))


def rank_by_similarity(
    query: Sequence[float],
    candidates: Sequence[Tuple[str, Sequence[float]]],
) -> List[Tuple[str, float]]:
    """
    Score every (label, vector) candidate against query, best first.

    Ties keep candidate order.
    """
    scored = [(label, cosine_similarity(query, vector)) for label, vector in candidates]
    return sorted(scored, key=lambda item: item[1], reverse=True)
