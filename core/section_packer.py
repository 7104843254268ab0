# core/section_packer.py
from typing import List, Mapping, Sequence
import logging
from core.entities import ContextSection, PageRecord, RankedResult

logger = logging.getLogger(__name__)

SEPARATOR = "\n* "
SEPARATOR_OVERHEAD = 4
DEFAULT_TOKEN_BUDGET = 1000


def pack(
    ranked_results: Sequence[RankedResult],
    page_table: Mapping[str, PageRecord],
    token_budget: int = DEFAULT_TOKEN_BUDGET,
    *,
    separator: str = SEPARATOR,
    separator_overhead: int = SEPARATOR_OVERHEAD,
    stop_on_overflow: bool = False,
) -> List[ContextSection]:
    """
    Greedily fill the context with page contents in ranked order.

    Each page costs token_length + separator_overhead. Once the running total
    passes token_budget, the page content is cut to
    token_budget - consumed - separator_overhead characters (never below zero).

    By default every remaining ranked page is still visited and gets the same
    overflow cut, so late pages contribute bare separators. This matches the
    behaviour the service has always had and is probably unintended; pass
    stop_on_overflow=True to end packing after the first overflowing page.
    """
    sections: List[ContextSection] = []
    consumed = 0
    skipped = 0
    truncated = 0

    for result in ranked_results:
        page = page_table.get(result.identifier)
        if page is None:
            skipped += 1
            continue

        consumed += page.token_length + separator_overhead
        overflow = consumed > token_budget
        if overflow:
            keep = max(0, token_budget - consumed - separator_overhead)
            content = page.content[:keep]
            truncated += 1
        else:
            content = page.content

        sections.append(ContextSection(text=separator + content))

        if overflow and stop_on_overflow:
            break

    logger.info(
        "pack.done sections=%d truncated=%d skipped=%d tokens=%d budget=%d",
        len(sections),
        truncated,
        skipped,
        consumed,
        token_budget,
    )
    return sections
