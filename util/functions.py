# util/functions.py
def clip_words(text: str, max_words: int = 12) -> str:
    """
    - Trim 'text' to at most `max_words` tokens separated by whitespace.
    - Adds an ellipsis when trimming occurs.
    Used to keep user questions short in log lines.
    """
    words = text.split()
    if len(words) <= max_words:
        return text
    return " ".join(words[:max_words]) + " …"


def normalize_question(raw: str) -> str:
    """
    Exact-match cache key: the question as typed, with a trailing '?' forced.
    Near-duplicate phrasings intentionally map to different keys.
    """
    question = raw or ""
    if not question.endswith("?"):
        question += "?"
    return question


def collapse_whitespace(text: str) -> str:
    return " ".join(text.split())
