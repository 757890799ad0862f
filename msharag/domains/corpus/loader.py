"""
Corpus Loader - Read line-delimited JSON corpus files into a CorpusStore.

Every file is optional; the server runs on whatever subset exists.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TypeVar

from pydantic import BaseModel, ValidationError

from msharag.config import CorpusLoadError

from .models import Chunk, Source, Vector
from .store import CorpusStore

logger = logging.getLogger(__name__)

__all__ = ["load_corpus", "read_jsonl"]

RecordT = TypeVar("RecordT", bound=BaseModel)


def read_jsonl(path: Path, model: type[RecordT]) -> list[RecordT]:
    """
    Parse one record per non-blank line.

    Args:
        path: JSONL file
        model: Record type for each line

    Returns:
        Records in file order, empty if the file does not exist

    Raises:
        CorpusLoadError: File unreadable or a line is malformed
    """
    if not path.exists():
        logger.warning("Corpus file not found, skipping: %s", path)
        return []

    try:
        lines = path.read_text(encoding="utf-8").splitlines()
    except OSError as e:
        raise CorpusLoadError(f"Cannot read {path}", {"path": str(path)}) from e

    records: list[RecordT] = []
    for line_no, line in enumerate(lines, 1):
        if not line.strip():
            continue
        try:
            records.append(model.model_validate(json.loads(line)))
        except (json.JSONDecodeError, ValidationError) as e:
            raise CorpusLoadError(
                f"Malformed record in {path.name} at line {line_no}",
                {"path": str(path), "line": line_no, "reason": str(e)},
            ) from e

    return records


def load_corpus(
    chunks_path: Path,
    vectors_path: Path,
    sources_path: Path,
) -> CorpusStore:
    """
    Load sources, chunks and vectors and build the store.

    Args:
        chunks_path: chunks.jsonl
        vectors_path: vectors.jsonl
        sources_path: sources.jsonl

    Returns:
        Populated CorpusStore
    """
    sources = read_jsonl(sources_path, Source)
    logger.info("Loaded %d sources", len(sources))

    chunks = read_jsonl(chunks_path, Chunk)
    vectors = read_jsonl(vectors_path, Vector)
    logger.info("Loaded %d chunks, %d vectors", len(chunks), len(vectors))

    return CorpusStore(sources=sources, chunks=chunks, vectors=vectors)
