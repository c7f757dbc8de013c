"""Orchestration of a full assessment around an injected language model."""

from .pipeline import AnalysisPipeline, AnalysisResult, Paper, PreparedAnalysis
from .prompts import PromptContext, build_abstract_only_prompt, build_assessment_prompt
from .response import extract_json_payload

__all__ = [
    "AnalysisPipeline",
    "AnalysisResult",
    "Paper",
    "PreparedAnalysis",
    "PromptContext",
    "build_abstract_only_prompt",
    "build_assessment_prompt",
    "extract_json_payload",
]
