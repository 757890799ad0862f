"""
MSHA RAG - Retrieval-augmented answers over mine safety regulations and guidance.

Example:
    >>> from pathlib import Path
    >>> from msharag.domains.corpus import load_corpus
    >>> from msharag.domains.search import RetrievalEngine
    >>> corpus = load_corpus(
    ...     Path("data/chunks.jsonl"), Path("data/vectors.jsonl"), Path("sources.jsonl")
    ... )
    >>> engine = RetrievalEngine(corpus)
    >>> response = engine.search("hard hats", mode="keyword")
"""

__version__ = "1.0.0"
__all__ = ["__version__"]
