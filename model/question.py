# model/question.py
from pydantic import BaseModel, Field


class Question(BaseModel):
    """Cached answer for one exact question string."""

    id: int
    question: str = Field(min_length=1)
    answer: str
    context: str = ""
    ask_count: int = Field(default=1, ge=0)
