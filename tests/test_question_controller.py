# tests/test_question_controller.py
import pytest
from fastapi.testclient import TestClient
from conftest import FakeBooks, FakeEmbedder, FakeGenerator, FakeQuestions, make_book
from controller.controller_dependencies import get_question_service
from controller.question_controller import ask_rate_limiter
from main import app
from service.question_service import QuestionService
from util.errors import CompletionError, LoadError


@pytest.fixture
def client_for():
    def _make(service: QuestionService) -> TestClient:
        app.dependency_overrides[get_question_service] = lambda: service
        app.dependency_overrides[ask_rate_limiter] = lambda: None
        # no context manager: lifespan (Redis) is not started
        return TestClient(app)

    yield _make
    app.dependency_overrides.clear()


def _service(embedder=None, generator=None, books=None, questions=None):
    return QuestionService(
        questions or FakeQuestions(),
        books or FakeBooks(make_book({"Page 1": [1.0, 0.0], "Page 2": [0.0, 1.0]})),
        embedder or FakeEmbedder(),
        generator or FakeGenerator(),
    )


def test_ask_returns_answer_and_id(client_for):
    client = client_for(_service())
    res = client.post("/api/v1/ask", json={"question": "Is money important"})
    assert res.status_code == 200
    assert res.json() == {
        "question": "Is money important?",
        "answer": "Relationships matter more.",
        "id": 1,
    }


def test_repeat_ask_is_cached(client_for):
    questions = FakeQuestions()
    generator = FakeGenerator()
    client = client_for(_service(generator=generator, questions=questions))
    client.post("/api/v1/ask", json={"question": "Is money important?"})
    res = client.post("/api/v1/ask", json={"question": "Is money important?"})
    assert res.status_code == 200
    assert len(generator.prompts) == 1
    assert questions.rows["Is money important?"].ask_count == 2


def test_provider_failure_is_not_found(client_for):
    client = client_for(_service(generator=FakeGenerator(error=CompletionError("x"))))
    res = client.post("/api/v1/ask", json={"question": "Why"})
    assert res.status_code == 404
    assert res.json() == {"question": "Why?", "answer": None}


def test_empty_question_is_bad_request(client_for):
    client = client_for(_service())
    res = client.post("/api/v1/ask", json={"question": "  "})
    assert res.status_code == 400
    assert res.json() == {"error": "Question must not be empty"}


def test_internal_error_is_generic(client_for):
    class BrokenBooks:
        def load(self):
            raise LoadError("/secret/path/book_pages.csv is missing")

    client = client_for(_service(books=BrokenBooks()))
    res = client.post("/api/v1/ask", json={"question": "Why?"})
    assert res.status_code == 500
    assert res.json() == {"error": "Internal Error"}


def test_healthz():
    assert TestClient(app).get("/healthz").json() == {"ok": True}
