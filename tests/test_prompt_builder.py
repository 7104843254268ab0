# tests/test_prompt_builder.py
from config.prompts import EXAMPLE_QA, HEADER
from core.entities import ContextSection
from core.prompt_builder import build


def test_prompt_layout():
    sections = [ContextSection("\n* first page"), ContextSection("\n* second page")]
    prompt, context = build("Is money important?", sections)

    assert context == "\n* first page\n* second page"
    assert prompt.startswith(HEADER + context + "\n\n\nQ: ")
    assert prompt.endswith("\n\n\nQ: Is money important?\n\nA:")


def test_prompt_contains_all_ten_examples_in_order():
    prompt, _ = build("Why?", [])
    assert len(EXAMPLE_QA) == 10
    positions = [prompt.index(f"Q: {q}\n\nA: {a}") for q, a in EXAMPLE_QA]
    assert positions == sorted(positions)
    # ten examples plus the user's question
    assert prompt.count("\n\n\nQ: ") == 11


def test_build_is_deterministic():
    sections = [ContextSection("\n* page")]
    assert build("Can money buy happiness?", sections) == build(
        "Can money buy happiness?", sections
    )


def test_empty_context_still_renders():
    prompt, context = build("Anything?", [])
    assert context == ""
    assert prompt.startswith(HEADER + "\n\n\nQ: What inspired you")
