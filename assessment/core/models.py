from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional, Tuple


class SourceType(str, Enum):
    """Retrieval path that produced a fetched document."""

    REGISTRY_DOI = "registry-doi"
    PREPRINT_SERVER = "preprint-server"
    OPEN_ACCESS_FINDER = "open-access-finder"
    BIBLIOGRAPHIC_DATABASE = "bibliographic-database"
    DIRECT_LINK = "direct-link"


class SectionType(str, Enum):
    """Coarse section label inferred for a chunk of text."""

    ABSTRACT = "abstract"
    INTRODUCTION = "introduction"
    METHODOLOGY = "methodology"
    RESULTS = "results"
    DISCUSSION = "discussion"
    CONCLUSION = "conclusion"
    REFERENCES = "references"
    OTHER = "other"


class OriginalFormat(str, Enum):
    PDF = "pdf"
    TEXT = "text"
    HTML = "html"


@dataclass(frozen=True)
class DocumentIdentifiers:
    """Bibliographic identifiers a caller knows about a document."""

    preprint_id: Optional[str] = None
    doi: Optional[str] = None
    url: Optional[str] = None
    abstract: Optional[str] = None

    def is_empty(self) -> bool:
        return not (self.preprint_id or self.doi or self.url)


@dataclass(frozen=True)
class DocumentSource:
    type: SourceType
    url: str
    confidence: float


@dataclass(frozen=True)
class FetchedDocument:
    """Raw bytes of a retrieved document and where they came from."""

    content: bytes = field(repr=False)
    source: DocumentSource
    file_name: str
    mime_type: str
    size_bytes: int


@dataclass(frozen=True)
class DocumentChunk:
    """A bounded, section-typed slice of normalized document text.

    ``chunk_index`` is zero-based and gap-free across one chunking run and
    defines the total order of chunks.
    """

    text: str
    page_start: int
    page_end: int
    chunk_index: int
    token_estimate: int
    is_introduction: bool
    is_conclusion: bool
    section_type: SectionType


@dataclass(frozen=True)
class DocumentMetadata:
    title: Optional[str] = None
    authors: Optional[List[str]] = None
    abstract: Optional[str] = None
    keywords: Optional[List[str]] = None
    extraction_timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    original_format: OriginalFormat = OriginalFormat.TEXT
    confidence: float = 0.7


@dataclass(frozen=True)
class ProcessedDocument:
    full_text: str
    chunks: Tuple[DocumentChunk, ...]
    metadata: DocumentMetadata
    page_count: int
    token_estimate: int


__all__ = [
    "DocumentChunk",
    "DocumentIdentifiers",
    "DocumentMetadata",
    "DocumentSource",
    "FetchedDocument",
    "OriginalFormat",
    "ProcessedDocument",
    "SectionType",
    "SourceType",
]
