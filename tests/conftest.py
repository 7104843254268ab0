# tests/conftest.py
import os

# Settings are read at import time; seed them before any app module loads.
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("OPENAI_API_KEY", "sk-test")
os.environ.setdefault("REDIS_URL", "redis://localhost:6379/15")

from typing import Dict, List, Optional  # noqa: E402
import fitz  # noqa: E402
import numpy as np  # noqa: E402
import pytest  # noqa: E402
from core.entities import Book, PageRecord  # noqa: E402
from model.question import Question  # noqa: E402
from util.errors import CompletionError, EmbeddingError  # noqa: E402


class FakeQuestions:
    def __init__(self) -> None:
        self.rows: Dict[str, Question] = {}
        self.created: List[str] = []

    async def find(self, question: str) -> Optional[Question]:
        row = self.rows.get(question)
        return row.model_copy() if row else None

    async def increment(self, question: str) -> int:
        row = self.rows[question]
        row.ask_count += 1
        return row.ask_count

    async def create(self, question: str, answer: str, context: str) -> Question:
        row = Question(
            id=len(self.rows) + 1, question=question, answer=answer, context=context
        )
        self.rows[question] = row
        self.created.append(question)
        return row.model_copy()


class FakeBooks:
    def __init__(self, book: Book) -> None:
        self.book = book
        self.loads = 0

    def load(self) -> Book:
        self.loads += 1
        return self.book


class FakeEmbedder:
    def __init__(self, vector=(1.0, 0.0), error: Optional[Exception] = None) -> None:
        self.vector = np.asarray(vector, dtype=np.float64)
        self.error = error
        self.calls: List[str] = []

    async def embed(self, text: str):
        self.calls.append(text)
        if self.error is not None:
            raise self.error
        return self.vector


class FakeGenerator:
    def __init__(self, answer: str = "Relationships matter more.", error=None) -> None:
        self.answer = answer
        self.error = error
        self.prompts: List[str] = []

    async def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.answer


def make_book(vectors: Dict[str, list], tokens: int = 10) -> Book:
    pages = {
        title: PageRecord(identifier=title, content=f"content of {title}", token_length=tokens)
        for title in vectors
    }
    embeddings = {t: np.asarray(v, dtype=np.float64) for t, v in vectors.items()}
    return Book(pages=pages, embeddings=embeddings)


@pytest.fixture
def two_page_book() -> Book:
    return make_book({"Page 1": [1.0, 0.0], "Page 2": [0.0, 1.0]})


@pytest.fixture
def questions() -> FakeQuestions:
    return FakeQuestions()


@pytest.fixture
def embedder() -> FakeEmbedder:
    return FakeEmbedder()


@pytest.fixture
def generator() -> FakeGenerator:
    return FakeGenerator()


@pytest.fixture
def failing_embedder() -> FakeEmbedder:
    return FakeEmbedder(error=EmbeddingError("provider down"))


@pytest.fixture
def failing_generator() -> FakeGenerator:
    return FakeGenerator(error=CompletionError("provider down"))


def make_pdf(*page_texts: str) -> bytes:
    doc = fitz.open()
    for text in page_texts:
        page = doc.new_page()
        if text:
            page.insert_text((72, 72), text)
    data = doc.tobytes()
    doc.close()
    return data
