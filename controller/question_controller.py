# controller/question_controller.py
import logging
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from fastapi_limiter.depends import RateLimiter
from config.settings import settings
from controller.controller_dependencies import get_question_service
from model.api import AskRequest, AskResponse, ErrorResponse, NoAnswerResponse
from service.question_service import QuestionService
from util.constants import InternalURIs
from util.enums import ErrorMessage
from util.errors import ValidationError

logger = logging.getLogger(__name__)

ask_rate_limiter = RateLimiter(
    times=settings.RATE_LIMIT_TIMES, seconds=settings.RATE_LIMIT_SECONDS
)

question_router = APIRouter(dependencies=[Depends(ask_rate_limiter)])


def _error(info: ErrorMessage) -> JSONResponse:
    return JSONResponse(
        status_code=info.value.http_status,
        content=ErrorResponse(error=info.value.message).model_dump(),
    )


@question_router.post(
    InternalURIs.ASK,
    response_model=AskResponse,
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_404_NOT_FOUND: {"model": NoAnswerResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
    },
)
async def ask(
    payload: AskRequest,
    service: QuestionService = Depends(get_question_service),
):
    try:
        outcome = await service.ask(payload.question)
    except ValidationError:
        return _error(ErrorMessage.EMPTY_QUESTION)
    except Exception:
        # Internal details stay in the log.
        logger.exception("ask.error")
        return _error(ErrorMessage.INTERNAL_ERROR)

    if outcome.entry is None:
        return JSONResponse(
            status_code=ErrorMessage.NO_ANSWER.value.http_status,
            content=NoAnswerResponse(question=outcome.question).model_dump(),
        )

    entry = outcome.entry
    return AskResponse(question=entry.question, answer=entry.answer, id=entry.id)
