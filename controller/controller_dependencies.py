# controller/controller_dependencies.py
from functools import lru_cache
from core.openai_client import OpenAIAnswerGenerator, OpenAIEmbedder
from repository.book_repository import CsvBookRepository
from repository.question_repository import QuestionRepository
from service.question_service import QuestionService


@lru_cache(maxsize=1)
def get_book_repository() -> CsvBookRepository:
    # Shared so the parsed book survives between requests.
    return CsvBookRepository()


def get_question_service() -> QuestionService:
    return QuestionService(
        questions=QuestionRepository(),
        books=get_book_repository(),
        embedder=OpenAIEmbedder(),
        generator=OpenAIAnswerGenerator(),
    )
