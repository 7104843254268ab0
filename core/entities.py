# core/entities.py
from dataclasses import dataclass, field
from typing import Dict
from util.types import EmbeddingMap


@dataclass(frozen=True)
class PageRecord:
    identifier: str  # e.g. "Page 12"
    content: str
    token_length: int


@dataclass(frozen=True)
class RankedResult:
    similarity: float
    identifier: str


@dataclass(frozen=True)
class ContextSection:
    text: str


@dataclass
class Book:
    """
    Page table plus embedding store for one indexed document.
    Every page has exactly one embedding; extra embeddings are tolerated.
    """

    pages: Dict[str, PageRecord]
    embeddings: EmbeddingMap = field(repr=False)

    @property
    def dimension(self) -> int:
        for vec in self.embeddings.values():
            return int(vec.shape[0])
        return 0
