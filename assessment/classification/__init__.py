"""Keyword-heuristic classification by document type and academic field."""

from .classifier import ClassificationResult, classify
from .document_type import TypeMatch, classify_document_type, match_document_type
from .field import classify_academic_field, score_fields
from .taxonomy import AcademicField, DocumentType

__all__ = [
    "AcademicField",
    "ClassificationResult",
    "DocumentType",
    "TypeMatch",
    "classify",
    "classify_academic_field",
    "classify_document_type",
    "match_document_type",
    "score_fields",
]
