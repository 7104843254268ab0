# util/enums.py
from enum import Enum
from typing import NamedTuple
from fastapi import status


class Color(str, Enum):
    RESET = "\033[0m"
    RED = "\033[31m"
    GREEN = "\033[32m"
    BLUE = "\033[34m"

    def __str__(self):
        return self.value


class Environment(str, Enum):
    DEV = "dev"
    PROD = "prod"


class ErrorInfo(NamedTuple):
    message: str
    http_status: int


class ErrorMessage(Enum):
    EMPTY_QUESTION = ErrorInfo("Question must not be empty", status.HTTP_400_BAD_REQUEST)
    NO_ANSWER = ErrorInfo("No answer could be produced", status.HTTP_404_NOT_FOUND)
    INTERNAL_ERROR = ErrorInfo("Internal Error", status.HTTP_500_INTERNAL_SERVER_ERROR)
