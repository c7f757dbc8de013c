"""Validation of the credibility block of a language-model analysis.

The model is an untrusted collaborator: its total may overflow the framework
maximum, its rating may disagree with its own numbers, and components may
claim more points than the framework allows. Only a missing total is fatal.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Mapping, Optional

from pydantic import ValidationError

from assessment.exceptions import InvalidAnalysisResponse
from assessment.framework.guidelines import FrameworkGuidelines
from assessment.framework.weights import COMPONENT_KEYS
from assessment.scoring.models import CredibilityComponent, CredibilityScore, Rating

logger = logging.getLogger(__name__)

RATING_THRESHOLDS = (
    (95.0, Rating.EXEMPLARY),
    (75.0, Rating.STRONG),
    (55.0, Rating.MODERATE),
    (35.0, Rating.WEAK),
)


def rating_for_percentage(percentage: float) -> Rating:
    """Map a score percentage onto its rating band (lower bounds inclusive)."""

    for threshold, rating in RATING_THRESHOLDS:
        if percentage >= threshold:
            return rating
    if percentage > 0:
        return Rating.VERY_POOR
    return Rating.INVALID


def validate_credibility(raw: Optional[Mapping[str, Any]], framework: FrameworkGuidelines) -> CredibilityScore:
    """Validate *raw* credibility JSON against *framework*.

    Raises:
        InvalidAnalysisResponse: if the credibility block or its ``totalScore``
            is missing or not a number.
    """

    if not isinstance(raw, Mapping):
        raise InvalidAnalysisResponse("Invalid analysis response: missing credibility assessment")

    max_weight = framework.weights.total
    total_score = _require_total_score(raw)

    if total_score > max_weight:
        logger.warning(
            "[Score Validation] Credibility score %.2f exceeds maximum weight %.2f by %.2f. Capping to maximum.",
            total_score,
            max_weight,
            total_score - max_weight,
        )
        total_score = max_weight

    components = {
        name: _validate_component(raw.get(COMPONENT_KEYS[name]), COMPONENT_KEYS[name], maximum)
        for name, maximum in framework.weights.as_dict().items()
    }

    percentage = total_score * 100 / max_weight if max_weight > 0 else 0.0
    rating = rating_for_percentage(percentage)
    claimed = raw.get("rating")
    if claimed is not None and claimed != rating.value:
        logger.info("Replacing reported rating %r with %s (%.1f%%)", claimed, rating.value, percentage)

    return CredibilityScore(
        **components,
        total_score=total_score,
        max_total_score=max_weight,
        rating=rating,
        overall_confidence=_overall_confidence(raw, components.values()),
    )


def _require_total_score(raw: Mapping[str, Any]) -> float:
    value = raw.get("totalScore")
    if value is None or isinstance(value, bool):
        logger.error("Missing totalScore in credibility data: %s", raw)
        raise InvalidAnalysisResponse("Invalid analysis response: missing credibility totalScore")
    try:
        total = float(value)
    except (TypeError, ValueError) as exc:
        raise InvalidAnalysisResponse(f"Invalid analysis response: totalScore {value!r} is not a number") from exc
    if math.isnan(total):
        raise InvalidAnalysisResponse("Invalid analysis response: totalScore is not a number")
    return total


def _validate_component(raw: Any, key: str, maximum: float) -> CredibilityComponent:
    if not isinstance(raw, Mapping):
        logger.warning("Credibility component %s missing from analysis response", key)
        raw = {}

    try:
        component = CredibilityComponent.model_validate(raw)
    except ValidationError as exc:
        invalid = _invalid_fields(exc)
        logger.warning("Resetting malformed fields %s of credibility component %s", sorted(invalid), key)
        component = CredibilityComponent.model_validate(
            {field: value for field, value in raw.items() if field not in invalid}
        )

    score = 0.0 if math.isnan(component.score) else component.score
    if score > maximum:
        logger.warning("Capping %s score %.2f to framework maximum %.2f", key, score, maximum)
        score = maximum
    return component.model_copy(update={"score": score, "max_score": maximum, "name": component.name or key})


def _invalid_fields(exc: ValidationError) -> set:
    """Input keys (field names and aliases) named by the errors in *exc*."""

    invalid = {str(error["loc"][0]) for error in exc.errors() if error["loc"]}
    for name, info in CredibilityComponent.model_fields.items():
        if name in invalid or info.alias in invalid:
            invalid.update(key for key in (name, info.alias) if key)
    return invalid


def _overall_confidence(raw: Mapping[str, Any], components) -> float:
    reported = raw.get("overallConfidence")
    if isinstance(reported, (int, float)) and not isinstance(reported, bool):
        return min(max(float(reported), 0.0), 100.0)
    confidences = [component.confidence for component in components]
    return round(sum(confidences) / len(confidences), 1) if confidences else 0.0
