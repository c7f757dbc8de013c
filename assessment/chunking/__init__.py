"""Section-aware chunking and token-budgeted chunk selection."""

from .chunker import chunk_document, detect_section_type
from .selection import join_chunks, select_relevant_chunks

__all__ = ["chunk_document", "detect_section_type", "join_chunks", "select_relevant_chunks"]
