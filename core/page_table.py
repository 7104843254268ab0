# core/page_table.py
import csv
import io
import logging
from typing import Dict, Iterable, TextIO
from core.embedding_store import Source, read_source
from core.entities import PageRecord
from util.errors import LoadError

logger = logging.getLogger(__name__)

COLUMNS = ("title", "content", "tokens")


def load(source: Source) -> Dict[str, PageRecord]:
    """
    Parse a page table (title,content,tokens) keyed by title, file order kept.
    """
    reader = csv.DictReader(io.StringIO(read_source(source)))
    try:
        fields = reader.fieldnames or []
        missing = [c for c in COLUMNS if c not in fields]
        if missing:
            raise LoadError(f"page table missing columns: {missing}")

        pages: Dict[str, PageRecord] = {}
        for line_no, row in enumerate(reader, start=2):
            title = row["title"]
            if title is None or row["content"] is None or row["tokens"] is None:
                raise LoadError(f"row {line_no}: short row")
            try:
                tokens = int(row["tokens"])
            except ValueError as e:
                raise LoadError(f"row {line_no}: tokens is not an integer") from e
            if tokens < 0:
                raise LoadError(f"row {line_no}: negative tokens {tokens}")
            if title in pages:
                raise LoadError(f"row {line_no}: duplicate title {title!r}")
            pages[title] = PageRecord(
                identifier=title, content=row["content"], token_length=tokens
            )
    except csv.Error as e:
        raise LoadError(f"page table is not valid csv: {e}") from e

    logger.info("pages.loaded n=%d", len(pages))
    return pages


def write(records: Iterable[PageRecord], fh: TextIO) -> int:
    writer = csv.writer(fh)
    writer.writerow(COLUMNS)
    n = 0
    for r in records:
        writer.writerow([r.identifier, r.content, r.token_length])
        n += 1
    return n
