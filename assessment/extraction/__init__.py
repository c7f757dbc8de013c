"""Text extraction and normalization."""

from .extractor import DocumentFormat, ExtractionResult, extract, extract_text, title_from_file_name
from .normalize import estimate_tokens, normalize_text

__all__ = [
    "DocumentFormat",
    "ExtractionResult",
    "estimate_tokens",
    "extract",
    "extract_text",
    "normalize_text",
    "title_from_file_name",
]
