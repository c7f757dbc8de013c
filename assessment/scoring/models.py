"""Pydantic models for the credibility score returned by the language model."""

from __future__ import annotations

import math
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Rating(str, Enum):
    """Qualitative band derived from the score percentage."""

    EXEMPLARY = "Exemplary"
    STRONG = "Strong"
    MODERATE = "Moderate"
    WEAK = "Weak"
    VERY_POOR = "Very Poor"
    INVALID = "Invalid"


class CredibilityComponent(BaseModel):
    """Score for one of the six credibility components."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str | None = None
    score: float = 0.0
    max_score: float = Field(default=0.0, alias="maxScore")
    description: str = ""
    evidence: list[str] = Field(default_factory=list)
    confidence: float = 0.0  # 0-100
    reasoning: str = ""

    @field_validator("confidence")
    @classmethod
    def _clamp_confidence(cls, value: float) -> float:
        if math.isnan(value):
            return 0.0
        return min(max(value, 0.0), 100.0)

    @field_validator("evidence", mode="before")
    @classmethod
    def _coerce_evidence(cls, value: object) -> object:
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        return value


class CredibilityScore(BaseModel):
    """Validated credibility assessment; ``total_score`` never exceeds ``max_total_score``."""

    model_config = ConfigDict(populate_by_name=True)

    methodological_rigor: CredibilityComponent = Field(alias="methodologicalRigor")
    data_transparency: CredibilityComponent = Field(alias="dataTransparency")
    source_quality: CredibilityComponent = Field(alias="sourceQuality")
    author_credibility: CredibilityComponent = Field(alias="authorCredibility")
    statistical_validity: CredibilityComponent = Field(alias="statisticalValidity")
    logical_consistency: CredibilityComponent = Field(alias="logicalConsistency")
    total_score: float = Field(alias="totalScore")
    max_total_score: float = Field(alias="maxTotalScore")
    rating: Rating
    overall_confidence: float = Field(default=0.0, alias="overallConfidence")

    @property
    def percentage(self) -> float:
        if self.max_total_score <= 0:
            return 0.0
        return self.total_score / self.max_total_score * 100

    def to_payload(self) -> dict:
        """JSON-ready dict using the camelCase keys of the analysis response."""

        return self.model_dump(mode="json", by_alias=True)
