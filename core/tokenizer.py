# core/tokenizer.py
from functools import lru_cache
import logging
import tiktoken
from config.settings import settings

logger = logging.getLogger(__name__)


@lru_cache(maxsize=4)
def _encoding(model: str) -> tiktoken.Encoding:
    try:
        return tiktoken.encoding_for_model(model)
    except KeyError:
        logger.warning("tokenizer.unknown_model model=%s fallback=cl100k_base", model)
        return tiktoken.get_encoding("cl100k_base")


def count_tokens(text: str, model: str = settings.EMBEDDING_MODEL) -> int:
    return len(_encoding(model).encode(text))
