"""
Prompt Templates - Grounding prompt for MSHA compliance answers.
"""

from __future__ import annotations

from collections.abc import Sequence

from msharag.domains.search import EnrichedResult

__all__ = ["NO_DOCUMENTS_PLACEHOLDER", "SYSTEM_PROMPT", "build_context", "build_prompt"]

SYSTEM_PROMPT = """You are an MSHA (Mine Safety and Health Administration) compliance expert assistant.
Answer questions about mine safety regulations, training requirements, and compliance procedures.

Use the following retrieved document excerpts to inform your answer. Cite sources using [Source N] notation.
If the documents don't contain relevant information, say so and provide general guidance.

Keep responses clear, practical, and actionable for mine operators.

RETRIEVED DOCUMENTS:
{context}"""

NO_DOCUMENTS_PLACEHOLDER = (
    "No specific documents found. Please answer based on general MSHA knowledge."
)


def build_context(results: Sequence[EnrichedResult]) -> str:
    """Label each result [Source N] in retrieval order."""
    return "\n\n".join(f"[Source {i}]: {r.text}" for i, r in enumerate(results, 1))


def build_prompt(question: str, results: Sequence[EnrichedResult]) -> str:
    """
    Compose the full generator input.

    Args:
        question: User question, appended verbatim
        results: Retrieved context

    Returns:
        System instruction, retrieved documents, then the question
    """
    context = build_context(results) or NO_DOCUMENTS_PLACEHOLDER
    return f"{SYSTEM_PROMPT.format(context=context)}\n\nUser Question: {question}"
