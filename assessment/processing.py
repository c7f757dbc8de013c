"""Turn raw text or fetched documents into :class:`ProcessedDocument` values."""

from __future__ import annotations

from dataclasses import replace
from typing import Optional

from assessment.chunking.chunker import chunk_document
from assessment.core.models import DocumentMetadata, FetchedDocument, OriginalFormat, ProcessedDocument
from assessment.extraction.extractor import DocumentFormat, extract
from assessment.extraction.normalize import estimate_pages, estimate_tokens, normalize_text

TEXT_CONFIDENCE = 0.7
PDF_CONFIDENCE = 0.85


def process_text_document(text: str, metadata: Optional[DocumentMetadata] = None) -> ProcessedDocument:
    """Normalize and chunk plain text."""

    full_text = normalize_text(text)
    metadata = metadata or DocumentMetadata(original_format=OriginalFormat.TEXT, confidence=TEXT_CONFIDENCE)
    return ProcessedDocument(
        full_text=full_text,
        chunks=tuple(chunk_document(full_text)),
        metadata=metadata,
        page_count=estimate_pages(full_text),
        token_estimate=estimate_tokens(full_text),
    )


def process_bytes(
    content: bytes,
    mime_type: Optional[str],
    file_name: Optional[str],
    metadata: Optional[DocumentMetadata] = None,
) -> ProcessedDocument:
    """Extract, normalize and chunk a binary payload.

    PDF page counts come from the reader; other formats estimate pages from
    the text length.
    """

    result = extract(content, mime_type, file_name)
    is_pdf = result.format is DocumentFormat.PDF
    base = metadata or DocumentMetadata()
    metadata = replace(
        base,
        original_format=OriginalFormat.PDF if is_pdf else OriginalFormat.TEXT,
        confidence=base.confidence if metadata else (PDF_CONFIDENCE if is_pdf else TEXT_CONFIDENCE),
    )

    processed = process_text_document(result.text, metadata)
    if is_pdf:
        processed = replace(processed, page_count=result.page_count)
    return processed


def process_fetched_document(
    document: FetchedDocument, metadata: Optional[DocumentMetadata] = None
) -> ProcessedDocument:
    return process_bytes(document.content, document.mime_type, document.file_name, metadata)
