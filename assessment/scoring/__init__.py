"""Credibility score models, validation and display helpers."""

from .models import CredibilityComponent, CredibilityScore, Rating
from .normalize import format_normalized_score, normalized_score, score_percentage
from .validator import rating_for_percentage, validate_credibility

__all__ = [
    "CredibilityComponent",
    "CredibilityScore",
    "Rating",
    "format_normalized_score",
    "normalized_score",
    "rating_for_percentage",
    "score_percentage",
    "validate_credibility",
]
