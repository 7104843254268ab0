# model/api.py
from pydantic import BaseModel


class AskRequest(BaseModel):
    question: str = ""


class AskResponse(BaseModel):
    question: str
    answer: str
    id: int


class NoAnswerResponse(BaseModel):
    question: str
    answer: None = None


class ErrorResponse(BaseModel):
    error: str
