from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional

from assessment.classification.document_type import match_document_type
from assessment.classification.field import pick_field, score_fields
from assessment.classification.taxonomy import AcademicField, DocumentType


@dataclass(frozen=True)
class ClassificationResult:
    """Document type and field with heuristic confidences in ``[0, 1]``.

    ``type_confidence`` is fixed per cascade rule (explicit markers rank
    above structural or length-based guesses). ``field_confidence`` is the
    winning field's share of all keyword points, or, for an
    interdisciplinary result, the share held by the fields other than the
    leader; it is 0 when no keywords matched at all.
    """

    document_type: DocumentType
    field: AcademicField
    type_confidence: float
    field_confidence: float
    type_rule: str
    field_scores: Dict[AcademicField, int] = field(default_factory=dict)


def classify(text: str, title: Optional[str] = None) -> ClassificationResult:
    type_match = match_document_type(text, title)
    scores = score_fields(text, title)
    academic_field = pick_field(scores)

    return ClassificationResult(
        document_type=type_match.document_type,
        field=academic_field,
        type_confidence=type_match.confidence,
        field_confidence=_field_confidence(scores, academic_field),
        type_rule=type_match.rule,
        field_scores=scores,
    )


def _field_confidence(scores: Dict[AcademicField, int], chosen: AcademicField) -> float:
    total = sum(scores.values())
    if total == 0:
        return 0.0
    if chosen is not AcademicField.INTERDISCIPLINARY:
        return round(scores[chosen] / total, 3)
    return round(1 - max(scores.values()) / total, 3)
