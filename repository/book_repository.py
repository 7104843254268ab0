# repository/book_repository.py
import os
from typing import Optional, Tuple
import logging
from config.settings import settings
from core import embedding_store, page_table
from core.entities import Book
from util.errors import LoadError
from util.timing import timed

logger = logging.getLogger(__name__)


def assemble_book(pages, embeddings) -> Book:
    """
    Join page table and embedding store. Every page needs exactly one vector;
    vectors without a page are allowed and later skipped by the packer.
    """
    missing = [title for title in pages if title not in embeddings]
    if missing:
        raise LoadError(
            f"{len(missing)} page(s) have no embedding, first: {missing[0]!r}"
        )
    return Book(pages=pages, embeddings=embeddings)


class CsvBookRepository:
    """
    Page table + embedding table read from the CSV files ingest.py writes.

    The parsed book is kept until either file's mtime changes, so a re-ingest
    is picked up without restarting the server.
    """

    def __init__(
        self,
        pages_path: str = settings.BOOK_PAGES_PATH,
        embeddings_path: str = settings.BOOK_EMBEDDINGS_PATH,
    ) -> None:
        self._pages_path = pages_path
        self._embeddings_path = embeddings_path
        self._stamp: Optional[Tuple[int, int]] = None
        self._book: Optional[Book] = None

    def _mtimes(self) -> Tuple[int, int]:
        try:
            return (
                os.stat(self._pages_path).st_mtime_ns,
                os.stat(self._embeddings_path).st_mtime_ns,
            )
        except OSError as e:
            raise LoadError(f"book files unavailable: {e}") from e

    def load(self) -> Book:
        stamp = self._mtimes()
        if self._book is not None and stamp == self._stamp:
            return self._book

        with timed(logger, "book.load", pages=self._pages_path):
            pages = page_table.load(self._pages_path)
            embeddings = embedding_store.load(self._embeddings_path)
            book = assemble_book(pages, embeddings)

        self._book, self._stamp = book, stamp
        logger.info(
            "book.ready pages=%d vectors=%d d=%d",
            len(book.pages),
            len(book.embeddings),
            book.dimension,
        )
        return book
