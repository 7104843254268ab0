# service/question_service.py
import asyncio
import logging
from dataclasses import dataclass
from typing import Optional, Tuple
from config.settings import settings
from core import prompt_builder, section_packer, similarity
from core.entities import Book
from model.question import Question
from util import functions
from util.errors import CompletionError, EmbeddingError, ValidationError
from util.timing import timed

logger = logging.getLogger(__name__)


@dataclass
class PackingOptions:
    token_budget: int = settings.MAX_SECTION_TOKENS
    separator: str = settings.SEPARATOR
    separator_overhead: int = settings.SEPARATOR_TOKENS
    stop_on_overflow: bool = settings.PACK_STOP_ON_OVERFLOW


@dataclass
class AskOutcome:
    question: str
    entry: Optional[Question]  # None when no answer could be produced


class QuestionService:
    """
    Answer a question about the indexed book, reusing exact-match cached answers.

    Collaborators are injected:
      questions  - find / increment / create cache rows
      books      - load() -> Book
      embedder   - async embed(text) -> vector
      generator  - async complete(prompt) -> str
    """

    def __init__(
        self,
        questions,
        books,
        embedder,
        generator,
        packing: Optional[PackingOptions] = None,
    ) -> None:
        self._questions = questions
        self._books = books
        self._embedder = embedder
        self._generator = generator
        self._packing = packing or PackingOptions()

    async def ask(self, raw_question: str) -> AskOutcome:
        if not raw_question or not raw_question.strip():
            raise ValidationError("question must not be empty")
        question = functions.normalize_question(raw_question)
        preview = functions.clip_words(question)

        cached = await self._questions.find(question)
        if cached is not None:
            cached.ask_count = await self._questions.increment(question)
            logger.info("ask.cache.hit id=%d count=%d", cached.id, cached.ask_count)
            return AskOutcome(question=question, entry=cached)

        logger.info("ask.cache.miss q=%r", preview)
        # CSV parsing is blocking; keep it off the event loop
        book = await asyncio.to_thread(self._books.load)
        try:
            answer, context = await self.answer_with_context(question, book)
        except (EmbeddingError, CompletionError) as e:
            # No row is written so a later ask retries the providers.
            logger.warning("ask.no_answer err=%s msg=%s", type(e).__name__, e)
            return AskOutcome(question=question, entry=None)

        entry = await self._questions.create(question, answer, context)
        logger.info("ask.answered id=%d", entry.id)
        return AskOutcome(question=question, entry=entry)

    async def answer_with_context(self, question: str, book: Book) -> Tuple[str, str]:
        prompt, context = await self.construct_prompt(question, book)
        answer = await self._generator.complete(prompt)
        return answer, context

    async def construct_prompt(self, question: str, book: Book) -> Tuple[str, str]:
        """
        embed -> rank -> pack -> render. Returns (prompt, context).
        """
        query_vector = await self._embedder.embed(question)

        with timed(logger, "ask.rank", n=len(book.embeddings)):
            ranked = similarity.rank(query_vector, book.embeddings)

        opts = self._packing
        sections = section_packer.pack(
            ranked,
            book.pages,
            opts.token_budget,
            separator=opts.separator,
            separator_overhead=opts.separator_overhead,
            stop_on_overflow=opts.stop_on_overflow,
        )
        return prompt_builder.build(question, sections)
