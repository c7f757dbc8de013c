from __future__ import annotations

from typing import Iterable, List, Sequence

from assessment.core.models import DocumentChunk, SectionType

_MAIN_CONTENT_SECTIONS = {SectionType.METHODOLOGY, SectionType.RESULTS, SectionType.OTHER}


def select_relevant_chunks(chunks: Sequence[DocumentChunk], max_tokens: int = 10000) -> List[DocumentChunk]:
    """Pick a token-budgeted subset of *chunks* for downstream analysis.

    Introduction chunks are always kept, even past the budget. Methodology,
    results and uncategorised chunks are then added greedily while they fit,
    followed by conclusion chunks. The selection is returned in document
    order.
    """

    selected: List[DocumentChunk] = [chunk for chunk in chunks if chunk.is_introduction]
    total_tokens = sum(chunk.token_estimate for chunk in selected)

    main_content = (
        chunk
        for chunk in chunks
        if not chunk.is_introduction
        and not chunk.is_conclusion
        and chunk.section_type in _MAIN_CONTENT_SECTIONS
    )
    total_tokens = _add_within_budget(selected, main_content, total_tokens, max_tokens)

    conclusions = (chunk for chunk in chunks if chunk.is_conclusion)
    _add_within_budget(selected, conclusions, total_tokens, max_tokens)

    return sorted(selected, key=lambda chunk: chunk.chunk_index)


def _add_within_budget(
    selected: List[DocumentChunk],
    candidates: Iterable[DocumentChunk],
    total_tokens: int,
    max_tokens: int,
) -> int:
    for chunk in candidates:
        if total_tokens + chunk.token_estimate <= max_tokens:
            selected.append(chunk)
            total_tokens += chunk.token_estimate
    return total_tokens


def join_chunks(chunks: Iterable[DocumentChunk]) -> str:
    return "\n\n".join(chunk.text for chunk in chunks)
