"""Split normalized document text into bounded, section-typed chunks."""

from __future__ import annotations

import math
import re
from typing import List, Sequence

from assessment.core.models import DocumentChunk, SectionType
from assessment.extraction.normalize import CHARS_PER_PAGE, CHARS_PER_TOKEN, estimate_tokens

PARAGRAPH_SEPARATOR = "\n\n"

# Checked in order; the first match wins.
_SECTION_PATTERNS: Sequence[tuple[SectionType, re.Pattern[str]]] = (
    (SectionType.ABSTRACT, re.compile(r"abstract")),
    (SectionType.INTRODUCTION, re.compile(r"introduction|background|literature|related\s+work")),
    (SectionType.METHODOLOGY, re.compile(r"method|methodology|approach|design|procedure")),
    (SectionType.RESULTS, re.compile(r"result|finding|outcome|conclusion|discussion")),
    (SectionType.DISCUSSION, re.compile(r"discussion|implication|limitation|future\s+work")),
    (SectionType.CONCLUSION, re.compile(r"conclusion|summary|concluding|final")),
    (SectionType.REFERENCES, re.compile(r"reference|bibliography|citation")),
)

_INTRODUCTION_SECTIONS = {SectionType.ABSTRACT, SectionType.INTRODUCTION}
_CONCLUSION_SECTIONS = {SectionType.CONCLUSION, SectionType.DISCUSSION}


def detect_section_type(text: str) -> SectionType:
    lowered = text.lower()
    for section_type, pattern in _SECTION_PATTERNS:
        if pattern.search(lowered):
            return section_type
    return SectionType.OTHER


def chunk_document(
    text: str,
    max_chunk_tokens: int = 3000,
    overlap_tokens: int = 500,
) -> List[DocumentChunk]:
    """Accumulate paragraphs into chunks of roughly ``max_chunk_tokens``.

    When the next paragraph would overflow a non-empty buffer, the buffer is
    closed and the next one is seeded with the last ``overlap_tokens`` worth
    of its text, followed by that paragraph. The seed is not counted against
    the bound, so a chunk opened this way can exceed ``max_chunk_tokens`` by
    up to the overlap. Paragraphs longer than a whole chunk are split on
    whitespace first. Page spans assume ``CHARS_PER_PAGE`` characters per
    page of the source text.
    """

    if max_chunk_tokens <= 0:
        raise ValueError("max_chunk_tokens must be positive")
    if overlap_tokens < 0:
        raise ValueError("overlap_tokens must not be negative")

    max_chars = max_chunk_tokens * CHARS_PER_TOKEN
    overlap_chars = min(overlap_tokens * CHARS_PER_TOKEN, max_chars // 2)

    chunks: List[DocumentChunk] = []
    buffer = ""
    buffer_start = 0
    offset = 0

    for paragraph in _paragraphs(text, max_chars):
        if buffer and len(buffer) + len(PARAGRAPH_SEPARATOR) + len(paragraph) > max_chars:
            chunks.append(_build_chunk(buffer, len(chunks), buffer_start, offset))
            overlap = _tail(buffer, overlap_chars)
            buffer = f"{overlap}{PARAGRAPH_SEPARATOR}{paragraph}" if overlap else paragraph
            buffer_start = offset
        else:
            buffer = f"{buffer}{PARAGRAPH_SEPARATOR}{paragraph}" if buffer else paragraph
        offset += len(paragraph) + len(PARAGRAPH_SEPARATOR)

    if buffer.strip():
        chunks.append(_build_chunk(buffer, len(chunks), buffer_start, offset))

    return chunks


def _paragraphs(text: str, max_chars: int) -> List[str]:
    parts: List[str] = []
    for paragraph in text.split(PARAGRAPH_SEPARATOR):
        trimmed = paragraph.strip()
        if not trimmed:
            continue
        if len(trimmed) <= max_chars:
            parts.append(trimmed)
        else:
            parts.extend(_split_by_whitespace(trimmed, max_chars))
    return parts


def _split_by_whitespace(text: str, max_chars: int) -> List[str]:
    chunks: List[str] = []
    current_words: List[str] = []
    current_length = 0
    for word in text.split():
        added = len(word) + (1 if current_words else 0)
        if current_words and current_length + added > max_chars:
            chunks.append(" ".join(current_words))
            current_words = [word]
            current_length = len(word)
        else:
            current_words.append(word)
            current_length += added

    if current_words:
        chunks.append(" ".join(current_words))
    return chunks


def _tail(text: str, length: int) -> str:
    """Last ``length`` characters of *text*, starting on a word boundary."""

    if length <= 0:
        return ""
    if len(text) <= length:
        return text.strip()
    tail = text[-length:]
    boundary = re.search(r"\s", tail)
    if boundary:
        tail = tail[boundary.end():]
    return tail.strip()


def _build_chunk(buffer: str, chunk_index: int, start_offset: int, end_offset: int) -> DocumentChunk:
    text = buffer.strip()
    section_type = detect_section_type(text)
    page_start = start_offset // CHARS_PER_PAGE + 1
    page_end = max(page_start, math.ceil(end_offset / CHARS_PER_PAGE))
    return DocumentChunk(
        text=text,
        page_start=page_start,
        page_end=page_end,
        chunk_index=chunk_index,
        token_estimate=estimate_tokens(text),
        is_introduction=section_type in _INTRODUCTION_SECTIONS,
        is_conclusion=section_type in _CONCLUSION_SECTIONS,
        section_type=section_type,
    )
