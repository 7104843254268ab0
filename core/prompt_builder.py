# core/prompt_builder.py
from typing import Sequence, Tuple
from config.prompts import EXAMPLE_QA, HEADER, QA_TEMPLATE
from core.entities import ContextSection


def _examples() -> str:
    return "".join(
        QA_TEMPLATE.format(question=q) + " " + a for q, a in EXAMPLE_QA
    )


def build(question: str, sections: Sequence[ContextSection]) -> Tuple[str, str]:
    """
    Render the completion prompt.
    Returns (prompt, context); context is the joined sections alone, which is
    what gets stored next to the answer.
    """
    context = "".join(s.text for s in sections)
    prompt = HEADER + context + _examples() + QA_TEMPLATE.format(question=question)
    return prompt, context
