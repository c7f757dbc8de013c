"""Display helpers that rescale a score against its framework maximum."""

from __future__ import annotations

import math


def normalized_score(total_score: float, max_total_score: float) -> float:
    """Rescale *total_score* out of *max_total_score* onto a 0-10 scale.

    Invalid input (non-positive maximum, NaN) yields 0.
    """

    try:
        score = float(total_score or 0)
        maximum = float(max_total_score or 0)
    except (TypeError, ValueError):
        return 0.0
    if maximum <= 0 or math.isnan(score) or math.isnan(maximum):
        return 0.0
    return score / maximum * 10


def score_percentage(total_score: float, max_total_score: float) -> int:
    if max_total_score <= 0:
        return 0
    return math.floor(total_score / max_total_score * 100 + 0.5)


def format_normalized_score(total_score: float, max_total_score: float, decimals: int = 1) -> str:
    """Format as ``"8.9/10"``."""

    return f"{normalized_score(total_score, max_total_score):.{decimals}f}/10"
