"""Assessment guidance lists and the combined framework lookup.

Bias priorities and assumptions depend only on the field; assessment focus
and typical limitations depend only on the document type.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Tuple

from assessment.classification.taxonomy import AcademicField, DocumentType
from assessment.framework.weights import FrameworkWeights, compute_weights

BIAS_PRIORITIES: Mapping[AcademicField, Tuple[str, ...]] = {
    AcademicField.NATURAL_SCIENCES: (
        "Selection bias in experimental design",
        "Measurement bias from instrumentation",
        "Publication bias for significant results",
        "Funding source influence",
    ),
    AcademicField.ENGINEERING: (
        "Confirmation bias in design choices",
        "Incomplete testing of edge cases",
        "Scalability assumptions not verified",
        "Cost-benefit bias in recommendations",
    ),
    AcademicField.MEDICAL: (
        "Patient selection bias",
        "Placebo effect (if applicable)",
        "Publication bias for efficacy claims",
        "Conflict of interest from pharmaceutical funding",
        "Reporting bias on adverse effects",
    ),
    AcademicField.AGRICULTURAL: (
        "Environmental variation not controlled",
        "Seasonal/temporal bias",
        "Economic incentive bias",
        "Publication bias for positive results",
    ),
    AcademicField.SOCIAL_SCIENCES: (
        "Demographic sampling bias",
        "Social desirability bias",
        "Researcher's cultural assumptions",
        "Selection effects in self-report",
    ),
    AcademicField.HUMANITIES: (
        "Interpretive bias based on author's perspective",
        "Selective evidence citation",
        "Presentist bias (applying modern standards)",
        "Source authenticity concerns",
    ),
    AcademicField.FORMAL_SCIENCES: (
        "Assumption validity in axioms",
        "Proof completeness",
        "Generalizability of abstract results",
        "Computational bias (approximation errors)",
    ),
    AcademicField.INTERDISCIPLINARY: (
        "Disciplinary assumption conflicts",
        "Method appropriateness across domains",
        "Oversimplification of complexity",
    ),
}

ASSESSMENT_FOCUS: Mapping[DocumentType, Tuple[str, ...]] = {
    DocumentType.ARTICLE: (
        "Study design appropriateness",
        "Sample size adequacy",
        "Statistical power",
        "Conflict of interest disclosure",
        "Reproducibility information",
    ),
    DocumentType.REVIEW: (
        "Comprehensiveness of literature search",
        "Selection criteria for included papers",
        "Quality assessment of source papers",
        "Synthesis methodology",
        "Currency of sources",
    ),
    DocumentType.BOOK: (
        "Author credentials and expertise",
        "Evidence quality for claims",
        "Comprehensive treatment of topic",
        "Logical flow and organization",
        "Academic rigor vs. accessibility",
    ),
    DocumentType.DISSERTATION: (
        "Research novelty and contribution",
        "Methodological rigor",
        "Committee credentials",
        "Data integrity and security",
        "Ethical approval documentation",
    ),
    DocumentType.PROPOSAL: (
        "Feasibility of proposed work",
        "Timeline and resource realism",
        "Preliminary evidence quality",
        "Budget justification",
        "Contingency planning",
    ),
    DocumentType.CASE_STUDY: (
        "Case selection justification",
        "Data collection rigor",
        "Triangulation methods",
        "Researcher reflexivity",
        "Transferability limitations",
    ),
    DocumentType.ESSAY: (
        "Argument logical coherence",
        "Evidence quality for claims",
        "Author's expertise in topic",
        "Acknowledgment of counterarguments",
        "Writing clarity and organization",
    ),
    DocumentType.THEORETICAL: (
        "Internal consistency of theory",
        "Logical rigor of definitions",
        "Falsifiability of propositions",
        "Practical application potential",
        "Clarity of theoretical framework",
    ),
    DocumentType.PREPRINT: (
        "Preliminary validation available",
        "Preprint server reputation",
        "Author's publication history",
        "Clear indication of peer review status",
        "Date of posting",
    ),
    DocumentType.CONFERENCE: (
        "Conference selectivity/reputation",
        "Peer review process quality",
        "Extended abstract detail level",
        "Author presentation quality",
        "Citation impact potential",
    ),
    DocumentType.UNKNOWN: (
        "Document format and completeness",
        "Author identification",
        "Claims substantiation",
        "Logical coherence",
        "Appropriate evidence quality",
    ),
}

TYPICAL_LIMITATIONS: Mapping[DocumentType, Tuple[str, ...]] = {
    DocumentType.ARTICLE: (
        "Limited to single study outcomes",
        "Generalizability constraints from sample",
        "Temporal limitations of single timepoint",
    ),
    DocumentType.REVIEW: (
        "Dependent on quality of included studies",
        "Publication bias in source papers",
        "Subjective selection of sources",
        "Rapid field evolution may date review",
    ),
    DocumentType.BOOK: (
        "Lack of peer review process",
        "Single author perspective",
        "Potential outdated information",
    ),
    DocumentType.DISSERTATION: (
        "Limited publication scrutiny",
        "Focused scope for degree requirement",
        "May emphasize methodology over breadth",
    ),
    DocumentType.PROPOSAL: (
        "Speculative nature of unfunded research",
        "Uncertainty in execution",
        "May overestimate feasibility",
    ),
    DocumentType.CASE_STUDY: (
        "Limited generalizability",
        "Potential for selection bias",
        "Subjective interpretation risk",
        "Context-dependent findings",
    ),
    DocumentType.ESSAY: (
        "Author opinion influence",
        "Limited empirical evidence",
        "Subjective argumentation",
    ),
    DocumentType.THEORETICAL: (
        "Lack of empirical validation",
        "Abstract applicability",
        "Testability limitations",
    ),
    DocumentType.PREPRINT: (
        "Lack of formal peer review",
        "Potential substantial revisions pending",
        "Uncertain publication timeline",
    ),
    DocumentType.CONFERENCE: (
        "Space limitations on depth",
        "Varying peer review rigor",
        "Often preliminary work",
    ),
    DocumentType.UNKNOWN: (
        "Unclear publication/credibility standard",
        "Uncertain peer review status",
        "Source verification needed",
    ),
}

COMMON_ASSUMPTIONS: Mapping[AcademicField, Tuple[str, ...]] = {
    AcademicField.NATURAL_SCIENCES: (
        "Replicability of results under controlled conditions",
        "Objectivity of measurements",
        "Universal applicability of laws discovered",
        "Predictability based on established principles",
    ),
    AcademicField.ENGINEERING: (
        "Technical feasibility of proposed designs",
        "Performance predictability from models",
        "Scalability of lab results",
        "Resource availability for implementation",
    ),
    AcademicField.MEDICAL: (
        "Biological mechanisms are consistent across populations",
        "Clinical outcomes correlate with biomarkers",
        "Beneficence justifies research risks",
        "Informed consent adequately protects subjects",
    ),
    AcademicField.AGRICULTURAL: (
        "Environmental conditions can be generalized",
        "Agricultural systems are manageable variables",
        "Economic models reflect farmer behavior",
        "Sustainability is achievable with intervention",
    ),
    AcademicField.SOCIAL_SCIENCES: (
        "Human behavior is systematic and predictable",
        "Self-report data reflects actual behavior",
        "Context can be sufficiently controlled",
        "Causality can be inferred from association",
    ),
    AcademicField.HUMANITIES: (
        "Texts have stable, discoverable meanings",
        "Historical sources reflect reality",
        "Interpretation can be validated",
        "Values are not entirely subjective",
    ),
    AcademicField.FORMAL_SCIENCES: (
        "Axioms are self-evident truths",
        "Logical deduction produces certainty",
        "Infinite sets can be meaningfully discussed",
        "Proofs are indisputable once accepted",
    ),
    AcademicField.INTERDISCIPLINARY: (
        "Concepts translate across disciplines",
        "Methods from one field apply to another",
        "Interdisciplinary synthesis adds value",
        "Disciplinary boundaries are not essential",
    ),
}


@dataclass(frozen=True)
class FrameworkGuidelines:
    """Scoring maximums and guidance for one (document type, field) pair."""

    document_type: DocumentType
    field: AcademicField
    weights: FrameworkWeights
    bias_priorities: Tuple[str, ...]
    assessment_focus: Tuple[str, ...]
    limitations: Tuple[str, ...]
    assumptions: Tuple[str, ...]

    @property
    def max_total_score(self) -> float:
        return self.weights.total


def get_framework_guidelines(
    document_type: DocumentType,
    field: AcademicField,
    *,
    strict: bool = False,
) -> FrameworkGuidelines:
    """Compute the assessment framework for a classified document.

    Pure function of its arguments; nothing is cached or persisted.
    """

    return FrameworkGuidelines(
        document_type=document_type,
        field=field,
        weights=compute_weights(document_type, field, strict=strict),
        bias_priorities=BIAS_PRIORITIES.get(field, BIAS_PRIORITIES[AcademicField.INTERDISCIPLINARY]),
        assessment_focus=ASSESSMENT_FOCUS.get(document_type, ASSESSMENT_FOCUS[DocumentType.UNKNOWN]),
        limitations=TYPICAL_LIMITATIONS.get(document_type, TYPICAL_LIMITATIONS[DocumentType.UNKNOWN]),
        assumptions=COMMON_ASSUMPTIONS.get(field, COMMON_ASSUMPTIONS[AcademicField.INTERDISCIPLINARY]),
    )
