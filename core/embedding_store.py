# core/embedding_store.py
import csv
import io
import logging
import os
from typing import Dict, List, Union
import numpy as np
from util.errors import LoadError
from util.timing import timed
from util.types import EmbeddingMap

logger = logging.getLogger(__name__)

TITLE_COLUMN = "title"

Source = Union[str, os.PathLike, bytes]


def read_source(source: Source) -> str:
    """
    Accept a path or raw CSV bytes. Missing/unreadable files become LoadError.
    """
    if isinstance(source, bytes):
        try:
            return source.decode("utf-8")
        except UnicodeDecodeError as e:
            raise LoadError(f"source is not utf-8: {e}") from e
    try:
        with open(source, "r", encoding="utf-8", newline="") as fh:
            return fh.read()
    except OSError as e:
        raise LoadError(f"cannot read {source}: {e}") from e


def _column_layout(header: List[str]) -> Dict[int, int]:
    """
    Map vector index -> CSV column position. The dimension is the widest index
    present plus one; every index below it must exist.
    """
    if TITLE_COLUMN not in header:
        raise LoadError("embedding source has no 'title' column")

    positions: Dict[int, int] = {}
    for pos, name in enumerate(header):
        name = name.strip()
        if name == TITLE_COLUMN:
            continue
        if not name.isdecimal():
            raise LoadError(f"unexpected embedding column {name!r}")
        idx = int(name)
        if idx in positions:
            raise LoadError(f"duplicate embedding column {idx}")
        positions[idx] = pos

    if not positions:
        raise LoadError("embedding source has no numeric columns")

    dimension = max(positions) + 1
    missing = [i for i in range(dimension) if i not in positions]
    if missing:
        raise LoadError(
            f"embedding columns missing below dimension {dimension}: {missing[:5]}"
        )
    return positions


def load(source: Source) -> EmbeddingMap:
    """
    Parse an embedding table (title,0,1,...,d-1) into {title: vector}.
    Any malformed row is fatal; nothing is skipped.
    """
    text = read_source(source)
    rows = csv.reader(io.StringIO(text))
    try:
        header = next(rows)
    except StopIteration:
        raise LoadError("embedding source is empty") from None
    except csv.Error as e:
        raise LoadError(f"embedding source is not valid csv: {e}") from e

    positions = _column_layout(header)
    title_pos = header.index(TITLE_COLUMN)
    dimension = len(positions)
    order = [positions[i] for i in range(dimension)]

    embeddings: EmbeddingMap = {}
    with timed(logger, "embeddings.parse", d=dimension):
        try:
            for line_no, row in enumerate(rows, start=2):
                if not row:
                    continue
                if len(row) != len(header):
                    raise LoadError(
                        f"row {line_no}: expected {len(header)} cells, got {len(row)}"
                    )
                title = row[title_pos]
                if title in embeddings:
                    raise LoadError(f"row {line_no}: duplicate title {title!r}")
                try:
                    vec = np.array([float(row[p]) for p in order], dtype=np.float64)
                except ValueError as e:
                    raise LoadError(f"row {line_no}: {e}") from e
                if not np.isfinite(vec).all():
                    raise LoadError(f"row {line_no}: non-finite value for {title!r}")
                embeddings[title] = vec
        except csv.Error as e:
            raise LoadError(f"embedding source is not valid csv: {e}") from e

    logger.info("embeddings.loaded n=%d d=%d", len(embeddings), dimension)
    return embeddings


def write(embeddings: EmbeddingMap, fh) -> int:
    """
    Write {title: vector} as title,0..d-1. All vectors must share one width.
    """
    writer = csv.writer(fh)
    dimension = None
    for title, vec in embeddings.items():
        if dimension is None:
            dimension = int(vec.shape[0])
            writer.writerow([TITLE_COLUMN] + list(range(dimension)))
        elif vec.shape[0] != dimension:
            raise LoadError(f"{title}: width {vec.shape[0]} != {dimension}")
        writer.writerow([title] + [repr(float(v)) for v in vec])
    if dimension is None:
        writer.writerow([TITLE_COLUMN])
    return len(embeddings)
