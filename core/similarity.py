# core/similarity.py
from typing import List
import logging
import numpy as np
from core.entities import RankedResult
from util.errors import DimensionMismatchError
from util.types import EmbeddingMap, Vector

logger = logging.getLogger(__name__)


def vector_similarity(x: Vector, y: Vector) -> float:
    """
    Inner product. Vectors from the embedding model are already unit length,
    so this equals cosine similarity without re-normalizing here.
    """
    a = np.asarray(x, dtype=np.float64)
    b = np.asarray(y, dtype=np.float64)
    if a.shape != b.shape:
        raise DimensionMismatchError(a.size, b.size)
    return float(np.dot(a, b))


def rank(query_vector: Vector, embeddings: EmbeddingMap) -> List[RankedResult]:
    """
    Score every page against the query and return all of them, most similar
    first. Equal scores keep the store's iteration order.
    """
    scored = [
        RankedResult(similarity=vector_similarity(vec, query_vector), identifier=title)
        for title, vec in embeddings.items()
    ]
    # sorted() is stable with reverse=True, ties stay in insertion order
    ranked = sorted(scored, key=lambda r: r.similarity, reverse=True)
    if ranked:
        logger.debug(
            "rank.top id=%s sim=%.4f n=%d",
            ranked[0].identifier,
            ranked[0].similarity,
            len(ranked),
        )
    return ranked
