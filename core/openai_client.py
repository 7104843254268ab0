# core/openai_client.py
from typing import Any, Dict, Optional
import logging
import httpx
import numpy as np
from config.settings import settings
from util.constants import ExternalURIs
from util.errors import CompletionError, EmbeddingError
from util.timing import timed
from util.types import Vector

logger = logging.getLogger(__name__)


async def _post_json(
    url: str,
    headers: Dict[str, str],
    payload: Dict[str, Any],
    timeout: float,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Dict[str, Any]:
    """
    JSON POST to `url`. Raises httpx errors for transport failures and non-2xx.
    """
    async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
        r = await client.post(url, headers=headers, json=payload)
        r.raise_for_status()
        return r.json()


class _OpenAIBase:
    def __init__(
        self,
        *,
        api_key: str = settings.OPENAI_API_KEY,
        base_url: str = settings.OPENAI_API_URL,
        model: str,
        timeout: float = settings.OPENAI_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._model = model
        self._timeout = timeout
        self._transport = transport

    @property
    def model(self) -> str:
        return self._model

    def _headers(self) -> Dict[str, str]:
        return {
            "authorization": f"Bearer {self._api_key}",
            "content-type": "application/json",
        }


class OpenAIEmbedder(_OpenAIBase):
    """
    Query/page embeddings through the OpenAI embeddings endpoint.
    """

    def __init__(self, *, model: str = settings.EMBEDDING_MODEL, **kw: Any) -> None:
        super().__init__(model=model, **kw)

    async def embed(self, text: str) -> Vector:
        payload = {"model": self._model, "input": text}
        try:
            with timed(logger, "ai.embed", model=self._model, chars=len(text)):
                data = await _post_json(
                    self._base_url + ExternalURIs.EMBEDDINGS,
                    self._headers(),
                    payload,
                    self._timeout,
                    self._transport,
                )
        except httpx.HTTPStatusError as e:
            logger.error("ai.embed.bad_status status=%d", e.response.status_code)
            raise EmbeddingError(f"embedding request failed: {e.response.status_code}") from e
        except httpx.HTTPError as e:
            logger.error("ai.embed.request_error err=%s", type(e).__name__)
            raise EmbeddingError(f"embedding request failed: {type(e).__name__}") from e
        except ValueError as e:
            logger.error("ai.embed.bad_json")
            raise EmbeddingError("embedding response is not json") from e

        try:
            values = data["data"][0]["embedding"]
            vec = np.asarray(values, dtype=np.float64)
        except (KeyError, IndexError, TypeError, ValueError) as e:
            logger.error("ai.embed.malformed")
            raise EmbeddingError("embedding response has no vector") from e
        if vec.ndim != 1 or vec.size == 0:
            raise EmbeddingError("embedding response has no vector")
        return vec


class OpenAIAnswerGenerator(_OpenAIBase):
    """
    Single-turn chat completion; the whole prompt goes in one user message.
    """

    def __init__(self, *, model: str = settings.COMPLETION_MODEL, **kw: Any) -> None:
        super().__init__(model=model, **kw)

    async def complete(self, prompt: str) -> str:
        payload = {
            "model": self._model,
            "messages": [{"role": "user", "content": prompt}],
        }
        try:
            with timed(logger, "ai.complete", model=self._model, chars=len(prompt)):
                data = await _post_json(
                    self._base_url + ExternalURIs.CHAT_COMPLETIONS,
                    self._headers(),
                    payload,
                    self._timeout,
                    self._transport,
                )
        except httpx.HTTPStatusError as e:
            logger.error("ai.complete.bad_status status=%d", e.response.status_code)
            raise CompletionError(f"completion request failed: {e.response.status_code}") from e
        except httpx.HTTPError as e:
            logger.error("ai.complete.request_error err=%s", type(e).__name__)
            raise CompletionError(f"completion request failed: {type(e).__name__}") from e
        except ValueError as e:
            logger.error("ai.complete.bad_json")
            raise CompletionError("completion response is not json") from e

        try:
            answer = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            logger.error("ai.complete.malformed")
            raise CompletionError("completion response has no message") from e
        if not isinstance(answer, str) or not answer.strip():
            logger.warning("ai.complete.empty")
            raise CompletionError("completion returned an empty answer")
        logger.info("ai.complete.ok chars=%d", len(answer))
        return answer
