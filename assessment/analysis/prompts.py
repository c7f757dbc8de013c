"""Prompt construction for the external language-model assessment.

The prompts carry the classified type and field, the adaptive framework and
the document text, and describe the JSON object the model must return.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence

from assessment.chunking import join_chunks
from assessment.classification.taxonomy import AcademicField, DocumentType
from assessment.core.models import DocumentChunk
from assessment.framework.guidelines import FrameworkGuidelines, get_framework_guidelines
from assessment.framework.weights import COMPONENT_KEYS

MAX_PROMPT_TEXT_CHARS = 150_000
TRUNCATION_MARKER = "[... document continues ...]"

COMPONENT_LABELS = {
    "methodological_rigor": "Methodological Rigor",
    "data_transparency": "Data Transparency",
    "source_quality": "Source Quality",
    "author_credibility": "Author Credibility",
    "statistical_validity": "Statistical Validity",
    "logical_consistency": "Logical Consistency",
}

TYPE_DESCRIPTIONS = {
    DocumentType.ARTICLE: "peer-reviewed empirical research article",
    DocumentType.REVIEW: "synthesis of existing literature",
    DocumentType.BOOK: "book or book chapter",
    DocumentType.DISSERTATION: "doctoral or master's thesis",
    DocumentType.PROPOSAL: "proposal for research not yet carried out",
    DocumentType.CASE_STUDY: "in-depth study of a single case",
    DocumentType.ESSAY: "argumentative or opinion piece",
    DocumentType.THEORETICAL: "conceptual or theoretical contribution",
    DocumentType.PREPRINT: "manuscript not yet peer reviewed",
    DocumentType.CONFERENCE: "conference paper or proceedings contribution",
    DocumentType.UNKNOWN: "document of unclear genre",
}

RATING_CHOICES = "<Exemplary|Strong|Moderate|Weak|Very Poor|Invalid>"

RESPONSE_RULES = (
    "Return only the JSON object, with no text before or after it.",
    "Each component score must lie between 0 and its maxScore.",
    "totalScore is the sum of the component scores and must not exceed {max_total:.1f}.",
    "Explain in each component's reasoning which evidence supports the score.",
    "List every claim you cannot check against the text under limitations.unverifiableClaims.",
)


@dataclass(frozen=True)
class PromptContext:
    """Everything the full-text assessment prompt is built from."""

    document_type: DocumentType
    field: AcademicField
    framework: FrameworkGuidelines
    full_text: str
    title: Optional[str] = None
    abstract: Optional[str] = None
    chunks: Sequence[DocumentChunk] = ()

    @property
    def body(self) -> str:
        return join_chunks(self.chunks) if self.chunks else self.full_text


def response_template(framework: FrameworkGuidelines, *, title: Optional[str], document_type: DocumentType) -> Dict[str, Any]:
    """JSON skeleton describing the expected analysis response."""

    credibility: Dict[str, Any] = {}
    for name, maximum in framework.weights.as_dict().items():
        credibility[COMPONENT_KEYS[name]] = {
            "score": f"<0-{maximum}>",
            "maxScore": maximum,
            "description": "<what the assessment of this component found>",
            "evidence": ["<specific evidence from the text>"],
            "confidence": "<0-100>",
            "reasoning": "<why this score was given>",
        }
    credibility["totalScore"] = f"<sum of component scores, at most {framework.max_total_score:.1f}>"
    credibility["rating"] = RATING_CHOICES
    credibility["overallConfidence"] = "<0-100>"

    return {
        "credibility": credibility,
        "bias": {
            "biases": [
                {
                    "type": "<Selection|Confirmation|Publication|Reporting|Funding|Citation|Demographic|Measurement>",
                    "evidence": "<evidence from the text>",
                    "severity": "<Low|Medium|High>",
                    "confidence": "<0-100>",
                    "verifiable": "<true|false>",
                }
            ],
            "overallLevel": "<Low|Medium|High>",
            "justification": "<synthesis of the identified biases>",
        },
        "keyFindings": {
            "fundamentals": {
                "title": title or "Unknown",
                "authors": ["<author>"],
                "journal": "<journal or publisher>",
                "doi": "<DOI if available>",
                "publicationDate": "<YYYY-MM-DD>",
                "articleType": document_type.label,
            },
            "researchQuestion": "<main research question>",
            "methodology": {"studyDesign": "<design>", "sampleSize": "<size if applicable>"},
            "findings": {"primaryFindings": ["<finding>"], "effectSizes": ["<effect size>"]},
            "conclusions": {"primaryConclusion": "<conclusion>", "supportedByData": "<true|false>"},
        },
        "perspective": {
            "theoreticalFramework": "<framework or 'Not specified'>",
            "paradigm": "<Positivist|Interpretivist|Critical|Pragmatic|Not clear>",
            "assumptions": {"stated": ["<assumption>"], "unstated": ["<assumption>"]},
        },
        "limitations": {
            "unverifiableClaims": [{"claim": "<claim>", "reason": "<reason>", "section": "<section>"}],
            "dataLimitations": ["<limitation of the supplied text>"],
            "uncertainties": ["<area of low confidence>"],
            "aiConfidenceNote": "<note on the reliability of this analysis>",
        },
    }


def build_assessment_prompt(context: PromptContext) -> str:
    """Full-text prompt; the body is truncated to ``MAX_PROMPT_TEXT_CHARS``."""

    framework = context.framework
    text = context.body
    if len(text) > MAX_PROMPT_TEXT_CHARS:
        text = f"{text[:MAX_PROMPT_TEXT_CHARS]} {TRUNCATION_MARKER}"

    sections = [
        "Assess the credibility of the academic document below using the adaptive framework provided.",
        _document_section(context.title, context.document_type, context.field),
        _weights_section(framework),
        _bullets("Assessment focus", framework.assessment_focus),
        _bullets("Bias concerns for this field", framework.bias_priorities),
        _bullets("Typical limitations of this document type", framework.limitations),
        _bullets("Common assumptions in this field", framework.assumptions),
    ]
    if context.abstract:
        sections.append(f"Abstract:\n{context.abstract}")
    sections.append(f"Document text:\n{text}")
    sections.append(_response_section(framework, context.title, context.document_type))
    return "\n\n".join(sections)


def build_abstract_only_prompt(
    title: Optional[str],
    abstract: str,
    document_type: DocumentType,
    field: AcademicField,
    framework: Optional[FrameworkGuidelines] = None,
) -> str:
    """Prompt for when only an abstract (or other short text) is available."""

    framework = framework or get_framework_guidelines(document_type, field)
    sections = [
        "Assess the credibility of the academic document below from its abstract alone.",
        _document_section(title, document_type, field),
        (
            "Only the abstract is available. Score conservatively, since most components cannot be "
            "fully judged from an abstract, and say in the evidence fields where the full text is needed."
        ),
        _weights_section(framework),
        f"Abstract:\n{abstract}",
        _response_section(framework, title, document_type),
    ]
    return "\n\n".join(sections)


def _document_section(title: Optional[str], document_type: DocumentType, field: AcademicField) -> str:
    description = TYPE_DESCRIPTIONS.get(document_type, TYPE_DESCRIPTIONS[DocumentType.UNKNOWN])
    return (
        "Document:\n"
        f"- Title: {title or 'Unknown'}\n"
        f"- Type: {document_type.label} ({description})\n"
        f"- Field: {field.label}"
    )


def _weights_section(framework: FrameworkGuidelines) -> str:
    lines = [f"Credibility components (total possible: {framework.max_total_score:.1f} points):"]
    for name, maximum in framework.weights.as_dict().items():
        lines.append(f"- {COMPONENT_LABELS[name]}: maximum {maximum}")
    return "\n".join(lines)


def _bullets(heading: str, items: Sequence[str]) -> str:
    return heading + ":\n" + "\n".join(f"- {item}" for item in items)


def _response_section(framework: FrameworkGuidelines, title: Optional[str], document_type: DocumentType) -> str:
    template = response_template(framework, title=title, document_type=document_type)
    rules = "\n".join(
        f"{index}. {rule.format(max_total=framework.max_total_score)}"
        for index, rule in enumerate(RESPONSE_RULES, start=1)
    )
    return f"Respond with JSON of this shape:\n{json.dumps(template, indent=2)}\n\nRules:\n{rules}"
