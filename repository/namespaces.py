# repository/namespaces.py
from typing import Final

ROOT: Final[str] = "askbook"

QUESTIONS: Final[str] = f"{ROOT}:questions"  # one hash per exact question text
QUESTION_IDS: Final[str] = f"{QUESTIONS}:next_id"
