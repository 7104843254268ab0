# tests/test_openai_client.py
import asyncio
import json
import httpx
import numpy as np
import pytest
from core.openai_client import OpenAIAnswerGenerator, OpenAIEmbedder
from util.errors import CompletionError, EmbeddingError


def _transport(status=200, body=None, raise_exc=None, seen=None):
    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        if raise_exc is not None:
            raise raise_exc
        return httpx.Response(status, json=body if body is not None else {})

    return httpx.MockTransport(handler)


def test_embed_posts_model_and_input():
    seen = []
    embedder = OpenAIEmbedder(
        api_key="sk-abc",
        base_url="https://example.test/v1/",
        model="text-embedding-ada-002",
        transport=_transport(body={"data": [{"embedding": [0.6, 0.8]}]}, seen=seen),
    )
    vec = asyncio.run(embedder.embed("Can money buy happiness?"))

    np.testing.assert_allclose(vec, [0.6, 0.8])
    request = seen[0]
    assert str(request.url) == "https://example.test/v1/embeddings"
    assert request.headers["authorization"] == "Bearer sk-abc"
    assert json.loads(request.content) == {
        "model": "text-embedding-ada-002",
        "input": "Can money buy happiness?",
    }


@pytest.mark.parametrize(
    "kwargs",
    [
        {"status": 500, "body": {"error": "boom"}},
        {"raise_exc": httpx.ReadTimeout("slow")},
        {"raise_exc": httpx.ConnectError("down")},
        {"body": {"data": []}},
        {"body": {"data": [{"embedding": []}]}},
    ],
    ids=["http-500", "timeout", "connect", "no-data", "empty-vector"],
)
def test_embed_failures_raise_embedding_error(kwargs):
    embedder = OpenAIEmbedder(api_key="k", transport=_transport(**kwargs))
    with pytest.raises(EmbeddingError):
        asyncio.run(embedder.embed("q"))


def test_complete_returns_message_content():
    seen = []
    body = {"choices": [{"message": {"role": "assistant", "content": "Not directly."}}]}
    generator = OpenAIAnswerGenerator(
        api_key="k",
        base_url="https://example.test/v1",
        model="gpt-3.5-turbo",
        transport=_transport(body=body, seen=seen),
    )
    assert asyncio.run(generator.complete("PROMPT")) == "Not directly."
    sent = json.loads(seen[0].content)
    assert str(seen[0].url) == "https://example.test/v1/chat/completions"
    assert sent["model"] == "gpt-3.5-turbo"
    assert sent["messages"] == [{"role": "user", "content": "PROMPT"}]


@pytest.mark.parametrize(
    "kwargs",
    [
        {"status": 429, "body": {"error": "rate"}},
        {"raise_exc": httpx.ReadTimeout("slow")},
        {"body": {"choices": []}},
        {"body": {"choices": [{"message": {"content": "  "}}]}},
        {"body": {"choices": [{"message": {"content": None}}]}},
    ],
    ids=["http-429", "timeout", "no-choices", "blank", "null"],
)
def test_complete_failures_raise_completion_error(kwargs):
    generator = OpenAIAnswerGenerator(api_key="k", transport=_transport(**kwargs))
    with pytest.raises(CompletionError):
        asyncio.run(generator.complete("PROMPT"))
