"""
Corpus Domain - Read-only chunk, source and vector storage.

This domain handles:
- Corpus records (sources, chunks, vectors)
- In-memory lookup by identifier
- JSONL loading at start-up
"""

from .contracts import CorpusReader
from .loader import load_corpus, read_jsonl
from .models import Chunk, CorpusStats, Source, Vector
from .store import CorpusStore

__all__ = [
    "CorpusReader",
    "CorpusStore",
    "Chunk",
    "Source",
    "Vector",
    "CorpusStats",
    "load_corpus",
    "read_jsonl",
]
