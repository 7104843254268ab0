# ingest.py
"""
Build the book files the API answers from.

Usage:
  python ingest.py path/to/book.pdf
  python ingest.py book.pdf --pages tmp/book_pages.csv --embeddings tmp/book_embeddings.csv
Requires OPENAI_API_KEY in the environment or .env.
"""
import argparse
import asyncio
import sys
from config.settings import settings
from core.openai_client import OpenAIEmbedder
from service.ingestion_service import IngestionService
from util.enums import Color
from util.logger import init_logger


def _parse_args(argv=None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="Split a PDF into pages and embed them.")
    ap.add_argument("pdf", help="PDF file to ingest")
    ap.add_argument("--pages", default=settings.BOOK_PAGES_PATH, help="page table CSV out")
    ap.add_argument(
        "--embeddings", default=settings.BOOK_EMBEDDINGS_PATH, help="embedding CSV out"
    )
    ap.add_argument("--no-progress", action="store_true", help="hide the progress bar")
    return ap.parse_args(argv)


def main(argv=None) -> int:
    args = _parse_args(argv)
    logger = init_logger()
    service = IngestionService(
        OpenAIEmbedder(),
        pages_path=args.pages,
        embeddings_path=args.embeddings,
        show_progress=not args.no_progress,
    )
    try:
        n = asyncio.run(service.run(args.pdf))
    except Exception as e:
        print(f"{Color.RED}Ingestion failed:{Color.RESET} {e}", file=sys.stderr)
        return 1
    logger.info("ingest.done pages=%d", n)
    print(f"{Color.GREEN}Wrote {n} pages{Color.RESET}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
