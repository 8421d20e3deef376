"""
Similarity primitives over sparse weighted vectors

Algorithm:
    cos(a, b) = (a · b) / (||a|| × ||b||)   over the union of keys
              = 0                          if either norm is zero
"""

from typing import Dict, Hashable, List, Mapping, Sequence, Set, Tuple

import numpy as np
from scipy import sparse
from sklearn.metrics.pairwise import cosine_similarity


def cosine(a: Mapping[Hashable, float], b: Mapping[Hashable, float]) -> float:
    """
    Cosine similarity between two sparse vectors

    Args:
        a, b: key -> weight mappings (tokens or item ids)

    Returns:
        Similarity in [-1, 1]; 0.0 when either vector has zero norm
    """
    if not a or not b:
        return 0.0
    return float(cosine_to_many(a, [b])[0])


def to_sparse_rows(
    vectors: Sequence[Mapping[Hashable, float]]
) -> Tuple[sparse.csr_matrix, Dict[Hashable, int]]:
    """
    Stack sparse vectors into a CSR matrix (one row per vector)

    Returns:
        (matrix, key2col) where key2col maps vector keys to column indices
    """
    key2col: Dict[Hashable, int] = {}
    rows, cols, data = [], [], []

    for row, vec in enumerate(vectors):
        for key, weight in vec.items():
            col = key2col.setdefault(key, len(key2col))
            rows.append(row)
            cols.append(col)
            data.append(float(weight))

    matrix = sparse.csr_matrix(
        (data, (rows, cols)),
        shape=(len(vectors), max(len(key2col), 1)),
    )
    return matrix, key2col


def cosine_to_many(
    target: Mapping[Hashable, float],
    others: Sequence[Mapping[Hashable, float]]
) -> np.ndarray:
    """
    Cosine similarity of one vector against many, vectorised

    Same semantics as cosine(): zero-norm rows score 0.0.
    """
    if not others:
        return np.zeros(0)

    matrix, _ = to_sparse_rows([target] + list(others))
    # sklearn normalizes rows and leaves all-zero rows at zero
    sims = cosine_similarity(matrix[0], matrix[1:])
    return sims.flatten()


def jaccard(a: Set[Hashable], b: Set[Hashable]) -> float:
    """|a ∩ b| / |a ∪ b|, 0.0 for two empty sets"""
    union = len(a | b)
    if union == 0:
        return 0.0
    return len(a & b) / union


def top_k(scores: Mapping[Hashable, float], k: int) -> List[Tuple[Hashable, float]]:
    """Sort by score descending (stable: ties keep encounter order) and truncate"""
    ranked = sorted(scores.items(), key=lambda x: x[1], reverse=True)
    return ranked[:k] if k > 0 else ranked
