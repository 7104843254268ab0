# repository/question_repository.py
import hashlib
from typing import Dict, Final, Optional
from redis.asyncio import Redis
from config.cache import get_redis
from model.question import Question
from repository.namespaces import QUESTION_IDS, QUESTIONS

KEY_PREFIX: Final[str] = QUESTIONS


class QuestionRepository:
    """
    Flow:
    - One Redis hash per exact (normalized) question text.
    - Hits bump ask_count with HINCRBY so concurrent repeats never lose an update.
    - Rows are created once (HSETNX on id) and never expire or get deleted here.
    """

    @staticmethod
    async def _client() -> Redis:
        return await get_redis()

    @staticmethod
    def _key(question: str) -> str:
        # Hash keeps keys bounded; the text itself is stored in the row.
        digest = hashlib.sha256(question.encode("utf-8")).hexdigest()
        return f"{KEY_PREFIX}:{digest}"

    @staticmethod
    def _decode(h: Dict) -> Dict[str, str]:
        return {
            (k.decode("utf-8") if isinstance(k, (bytes, bytearray)) else str(k)): (
                v.decode("utf-8") if isinstance(v, (bytes, bytearray)) else str(v)
            )
            for k, v in h.items()
        }

    async def find(self, question: str) -> Optional[Question]:
        r = await self._client()
        h = self._decode(await r.hgetall(self._key(question)))
        # A row without an answer is still being written by a concurrent miss.
        if not h or "answer" not in h:
            return None
        return Question(
            id=int(h["id"]),
            question=h.get("question", question),
            answer=h["answer"],
            context=h.get("context", ""),
            ask_count=int(h.get("ask_count", "0") or 0),
        )

    async def increment(self, question: str) -> int:
        r = await self._client()
        return int(await r.hincrby(self._key(question), "ask_count", 1))

    async def create(self, question: str, answer: str, context: str) -> Question:
        """
        Insert a new row with ask_count=1. If a concurrent miss created the same
        question first, its row is kept and counted as a repeat ask.
        """
        r = await self._client()
        key = self._key(question)
        new_id = int(await r.incr(QUESTION_IDS))
        created = await r.hsetnx(key, "id", str(new_id))
        if not created:
            await r.hincrby(key, "ask_count", 1)
            existing = await self.find(question)
            if existing is not None:
                return existing
            # Winner has not stored its answer yet; ours fills the row.

        async with r.pipeline(transaction=True) as pipe:
            pipe.hset(
                key,
                mapping={"question": question, "answer": answer, "context": context},
            )
            if created:
                pipe.hincrby(key, "ask_count", 1)
            await pipe.execute()

        saved = await self.find(question)
        if saved is None:
            raise RuntimeError(f"question row missing after write key={key}")
        return saved
