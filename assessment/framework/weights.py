"""Adaptive component weights keyed by document type and academic field.

Each document type has a base allocation of the six credibility components;
the academic field adds a small sparse delta on top. Every component is then
capped at its fixed maximum, so the grand total can never exceed
``WEIGHT_BUDGET`` unless the maximums themselves change.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Dict, Mapping

from assessment.classification.taxonomy import AcademicField, DocumentType
from assessment.exceptions import FrameworkInvariantError

logger = logging.getLogger(__name__)

WEIGHT_BUDGET = 10.0
BUDGET_TOLERANCE = 0.01


@dataclass(frozen=True)
class FrameworkWeights:
    """Maximum points per credibility component for one (type, field) pair."""

    methodological_rigor: float
    data_transparency: float
    source_quality: float
    author_credibility: float
    statistical_validity: float
    logical_consistency: float

    @property
    def total(self) -> float:
        return sum(self.as_dict().values())

    def as_dict(self) -> Dict[str, float]:
        return asdict(self)

    def as_camel_case(self) -> Dict[str, float]:
        """Component maximums keyed the way the language-model JSON names them."""

        return {COMPONENT_KEYS[name]: value for name, value in self.as_dict().items()}


COMPONENT_KEYS: Mapping[str, str] = {
    "methodological_rigor": "methodologicalRigor",
    "data_transparency": "dataTransparency",
    "source_quality": "sourceQuality",
    "author_credibility": "authorCredibility",
    "statistical_validity": "statisticalValidity",
    "logical_consistency": "logicalConsistency",
}

COMPONENT_MAXIMUMS = FrameworkWeights(
    methodological_rigor=2.5,
    data_transparency=2.0,
    source_quality=1.5,
    author_credibility=1.5,
    statistical_validity=1.5,
    logical_consistency=1.0,
)

BASE_WEIGHTS: Mapping[DocumentType, FrameworkWeights] = {
    DocumentType.ARTICLE: FrameworkWeights(2.5, 2.0, 1.5, 1.0, 1.5, 0.5),
    DocumentType.REVIEW: FrameworkWeights(1.0, 1.5, 2.5, 1.5, 0.5, 1.5),
    DocumentType.BOOK: FrameworkWeights(1.5, 1.5, 2.0, 2.0, 0.5, 1.0),
    DocumentType.DISSERTATION: FrameworkWeights(2.5, 2.0, 1.5, 0.5, 1.5, 1.0),
    DocumentType.PROPOSAL: FrameworkWeights(2.0, 1.5, 1.5, 1.0, 0.5, 1.5),
    DocumentType.CASE_STUDY: FrameworkWeights(1.5, 2.0, 1.5, 1.0, 1.0, 1.5),
    DocumentType.ESSAY: FrameworkWeights(0.5, 1.0, 2.0, 2.0, 0.5, 1.0),
    DocumentType.THEORETICAL: FrameworkWeights(0.5, 1.0, 1.5, 1.5, 0.5, 1.0),
    DocumentType.PREPRINT: FrameworkWeights(2.0, 1.5, 1.0, 1.0, 1.5, 1.0),
    DocumentType.CONFERENCE: FrameworkWeights(2.0, 1.5, 1.5, 0.8, 1.3, 1.0),
    DocumentType.UNKNOWN: FrameworkWeights(1.5, 1.5, 1.5, 1.5, 1.0, 1.0),
}

# Sparse deltas added on top of the base weights; absent components are unchanged.
FIELD_ADJUSTMENTS: Mapping[AcademicField, Mapping[str, float]] = {
    AcademicField.NATURAL_SCIENCES: {"methodological_rigor": 0.3, "statistical_validity": 0.2},
    AcademicField.ENGINEERING: {"methodological_rigor": 0.2, "data_transparency": 0.2},
    AcademicField.MEDICAL: {"methodological_rigor": 0.3, "statistical_validity": 0.3},
    AcademicField.AGRICULTURAL: {"methodological_rigor": 0.2, "statistical_validity": 0.1},
    AcademicField.SOCIAL_SCIENCES: {"methodological_rigor": 0.1, "logical_consistency": 0.1},
    AcademicField.HUMANITIES: {"source_quality": 0.2, "logical_consistency": 0.0},
    AcademicField.FORMAL_SCIENCES: {"logical_consistency": 0.0, "statistical_validity": 0.2},
    AcademicField.INTERDISCIPLINARY: {},
}


def compute_weights(
    document_type: DocumentType,
    field: AcademicField,
    *,
    strict: bool = False,
) -> FrameworkWeights:
    """Base weights for *document_type* plus the *field* delta, capped per component."""

    base = BASE_WEIGHTS.get(document_type, BASE_WEIGHTS[DocumentType.UNKNOWN])
    adjustment = FIELD_ADJUSTMENTS.get(field, {})
    maximums = COMPONENT_MAXIMUMS.as_dict()

    capped = {
        name: round(min(value + adjustment.get(name, 0.0), maximums[name]), 2)
        for name, value in base.as_dict().items()
    }
    weights = FrameworkWeights(**capped)
    check_weight_budget(weights, label=f"{document_type.value}/{field.value}", strict=strict)
    return weights


def check_weight_budget(weights: FrameworkWeights, *, label: str, strict: bool = False) -> None:
    """Report weights whose total exceeds the 10-point budget.

    The overflow is logged; with ``strict`` it raises
    :class:`FrameworkInvariantError` instead.
    """

    total = weights.total
    if total <= WEIGHT_BUDGET + BUDGET_TOLERANCE:
        return

    message = f"Total weights exceed {WEIGHT_BUDGET:.1f} for {label}: {total:.2f}"
    if strict:
        raise FrameworkInvariantError(message)
    logger.warning("[Weight Validation] %s. This should not occur.", message)
