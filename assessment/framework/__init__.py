"""Adaptive assessment framework: component weights and guidance lists."""

from .guidelines import FrameworkGuidelines, get_framework_guidelines
from .weights import (
    BASE_WEIGHTS,
    COMPONENT_MAXIMUMS,
    FIELD_ADJUSTMENTS,
    WEIGHT_BUDGET,
    FrameworkWeights,
    check_weight_budget,
    compute_weights,
)

__all__ = [
    "BASE_WEIGHTS",
    "COMPONENT_MAXIMUMS",
    "FIELD_ADJUSTMENTS",
    "FrameworkGuidelines",
    "FrameworkWeights",
    "WEIGHT_BUDGET",
    "check_weight_budget",
    "compute_weights",
    "get_framework_guidelines",
]
