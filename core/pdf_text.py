# core/pdf_text.py
from typing import Callable, List, Tuple
import fitz
from core.entities import PageRecord
from util.errors import LoadError
from util.functions import collapse_whitespace
from util.timing import timed
import logging

logger = logging.getLogger(__name__)

# Per-page overhead added to the raw token count before it is stored.
PAGE_TOKEN_OVERHEAD = 4


def extract_pages_texts(file_bytes: bytes) -> List[Tuple[int, str]]:
    """
    Return [(page_number, page_text)] for the whole PDF, 1-based.
    Unparseable input raises LoadError.
    """
    out: List[Tuple[int, str]] = []
    try:
        with timed(logger, "pdf.open"):
            doc = fitz.open(stream=file_bytes, filetype="pdf")
    except Exception as e:
        # do not log payloads
        logger.error("pdf.parse.error err=%s", type(e).__name__)
        raise LoadError(f"cannot open pdf: {e}") from e

    with doc:
        pages = doc.page_count
        with timed(logger, "pdf.parse", pages=pages):
            for i in range(pages):
                page = doc.load_page(i)
                out.append((i + 1, page.get_text("text") or ""))
    logger.info("pdf.pages count=%d", len(out))
    return out


def build_page_records(
    pages: List[Tuple[int, str]],
    count_tokens: Callable[[str], int],
    max_tokens: int,
) -> List[PageRecord]:
    """
    Normalize whitespace and keep pages that fit the embedding model.
    Empty pages and pages over max_tokens (overhead included) are dropped.
    """
    records: List[PageRecord] = []
    dropped = 0
    for number, raw in pages:
        content = collapse_whitespace(raw)
        if not content:
            dropped += 1
            continue
        tokens = count_tokens(content) + PAGE_TOKEN_OVERHEAD
        if tokens > max_tokens:
            logger.warning("pdf.page.too_long page=%d tokens=%d", number, tokens)
            dropped += 1
            continue
        records.append(
            PageRecord(identifier=f"Page {number}", content=content, token_length=tokens)
        )
    logger.info("pdf.records kept=%d dropped=%d", len(records), dropped)
    return records
