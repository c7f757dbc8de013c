"""Credibility assessment of scholarly documents.

The pipeline acquires a document, extracts and chunks its text, classifies
it by type and academic field, derives an adaptive scoring framework and
validates the score an external language model returns against it.
"""

from __future__ import annotations

from .acquisition import AcquisitionChain, acquire
from .analysis import AnalysisPipeline, AnalysisResult, Paper
from .chunking import chunk_document, select_relevant_chunks
from .classification import AcademicField, DocumentType, classify, classify_academic_field, classify_document_type
from .config import AssessmentConfig
from .core.models import DocumentIdentifiers, FetchedDocument, ProcessedDocument
from .extraction import extract_text, normalize_text
from .framework import FrameworkGuidelines, get_framework_guidelines
from .processing import process_bytes, process_text_document
from .scoring import CredibilityScore, Rating, validate_credibility

__all__ = [
    "AcademicField",
    "AcquisitionChain",
    "AnalysisPipeline",
    "AnalysisResult",
    "AssessmentConfig",
    "CredibilityScore",
    "DocumentIdentifiers",
    "DocumentType",
    "FetchedDocument",
    "FrameworkGuidelines",
    "Paper",
    "ProcessedDocument",
    "Rating",
    "acquire",
    "chunk_document",
    "classify",
    "classify_academic_field",
    "classify_document_type",
    "extract_text",
    "get_framework_guidelines",
    "normalize_text",
    "process_bytes",
    "process_text_document",
    "select_relevant_chunks",
    "validate_credibility",
]
