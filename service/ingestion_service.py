# service/ingestion_service.py
import logging
import os
from typing import Callable, List
from tqdm import tqdm
from config.settings import settings
from core import embedding_store, page_table
from core.entities import PageRecord
from core.pdf_text import build_page_records, extract_pages_texts
from core.tokenizer import count_tokens
from util.errors import LoadError
from util.timing import timed
from util.types import EmbeddingMap

logger = logging.getLogger(__name__)


class IngestionService:
    """
    Offline: PDF -> pages -> per-page embeddings -> page table + embedding CSVs.
    """

    def __init__(
        self,
        embedder,
        pages_path: str = settings.BOOK_PAGES_PATH,
        embeddings_path: str = settings.BOOK_EMBEDDINGS_PATH,
        max_page_tokens: int = settings.INGEST_MAX_PAGE_TOKENS,
        token_counter: Callable[[str], int] = count_tokens,
        show_progress: bool = True,
    ) -> None:
        self._embedder = embedder
        self._pages_path = pages_path
        self._embeddings_path = embeddings_path
        self._max_page_tokens = max_page_tokens
        self._count_tokens = token_counter
        self._show_progress = show_progress

    def read_pages(self, pdf_path: str) -> List[PageRecord]:
        if not (os.path.isfile(pdf_path) and os.access(pdf_path, os.R_OK)):
            logger.error("ingest.pdf.unreadable path=%s", pdf_path)
            raise LoadError(f"file does not exist or is not readable: {pdf_path}")
        with open(pdf_path, "rb") as fh:
            data = fh.read()
        return build_page_records(
            extract_pages_texts(data), self._count_tokens, self._max_page_tokens
        )

    async def embed_pages(self, records: List[PageRecord]) -> EmbeddingMap:
        embeddings: EmbeddingMap = {}
        bar = tqdm(records, desc="Embedding", unit="page", disable=not self._show_progress)
        with timed(logger, "ingest.embed", n=len(records)):
            for record in bar:
                embeddings[record.identifier] = await self._embedder.embed(record.content)
        return embeddings

    async def run(self, pdf_path: str) -> int:
        """
        Returns the number of pages written. Errors are logged and re-raised.
        Both book files are replaced only after every page is embedded, so a
        failed run leaves the previous book intact.
        """
        logger.info("ingest.start path=%s", pdf_path)
        try:
            records = self.read_pages(pdf_path)
            if not records:
                raise LoadError(f"no usable pages in {pdf_path}")

            embeddings = await self.embed_pages(records)

            pages_tmp = _write_temp(self._pages_path, page_table.write, records)
            try:
                embeddings_tmp = _write_temp(
                    self._embeddings_path, embedding_store.write, embeddings
                )
            except Exception:
                os.remove(pages_tmp)
                raise
            os.replace(embeddings_tmp, self._embeddings_path)
            os.replace(pages_tmp, self._pages_path)
            logger.info(
                "ingest.book.written pages=%d pages_path=%s embeddings_path=%s",
                len(records),
                self._pages_path,
                self._embeddings_path,
            )
        except Exception:
            logger.error("ingest.failed path=%s", pdf_path, exc_info=True)
            raise
        return len(records)


def _write_temp(path: str, writer, rows) -> str:
    """
    Write next to `path` (same filesystem, so os.replace is atomic) and return
    the temp file name.
    """
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)
    tmp = f"{path}.tmp"
    try:
        with open(tmp, "w", encoding="utf-8", newline="") as fh:
            writer(rows, fh)
    except Exception:
        if os.path.exists(tmp):
            os.remove(tmp)
        raise
    return tmp
