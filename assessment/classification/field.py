"""Additive keyword scoring for the academic field of a document."""

from __future__ import annotations

import re
from typing import Dict, Mapping, Optional, Tuple

from assessment.classification.document_type import combine
from assessment.classification.taxonomy import AcademicField

STRONG_MATCH_POINTS = 3
WEAK_MATCH_POINTS = 1
# The leading field must beat the runner-up by more than this many points.
MINIMUM_MARGIN = 2


def _words(*alternatives: str) -> re.Pattern[str]:
    return re.compile(r"\b(" + "|".join(alternatives) + r")\b")


# Per field: (strong keyword class, weak keyword class).
FIELD_PATTERNS: Mapping[AcademicField, Tuple[re.Pattern[str], re.Pattern[str]]] = {
    AcademicField.NATURAL_SCIENCES: (
        _words(
            "physics", "chemistry", "biology", "quantum", "molecular", "atomic", "particle", "astronomy",
            "astrophysics", "geology", "botany", "zoology", "oceanography", "mineralogy", "petrology",
            "seismology", "meteorology",
        ),
        _words(
            "nuclei", "electron", "photon", "energy", "wavelength", "frequency", "atom", "molecule",
            "organic", "inorganic", "reaction", "compound", "isotope", "element", "mineral", "rock",
            "fossil", "species", "organism", "cell", "gene", "protein", "dna", "enzyme", "metabolism",
            "photosynthesis", "evolution", "natural selection",
        ),
    ),
    AcademicField.ENGINEERING: (
        _words(
            "engineering", "software", "algorithm", "circuit", "mechanical", "electrical", "civil",
            "computer science", "programming", "coding", "database", "system", "network", "automation",
            "manufacturing", "construction", "infrastructure", "hardware", "firmware", "application",
            "framework", "api", "design pattern", "agile", "devops", "cloud",
        ),
        _words(
            "mechanical", "structural", "thermal", "fluid", "stress", "strength", "load", "efficiency",
            "optimization", "control", "signal", "processing", "encryption", "architecture", "module",
            "component", "integration", "testing", "deployment", "scalability",
        ),
    ),
    AcademicField.MEDICAL: (
        _words(
            "medical", "clinical", "pharmaceutical", "medicine", "health", "disease", "patient",
            "treatment", "diagnosis", "therapy", "surgery", "nursing", "hospital", "prescription",
            "medication", "drug", "vaccine", "infection", "inflammation", "symptom", "pathology",
            "anatomy", "physiology", "oncology", "cardiology", "neurology", "psychiatry", "dermatology",
            "pediatrics", "geriatrics",
        ),
        _words(
            "therapeutic", "intervention", "efficacy", "safety", "adverse event", "complication",
            "prognosis", "remission", "relapse", "comorbidity", "biomarker", "clinical trial",
            "randomized controlled", "double blind", "placebo", "cohort", "retrospective", "prospective",
            "case control",
        ),
    ),
    AcademicField.AGRICULTURAL: (
        _words(
            "agriculture", "environmental", "climate", "forestry", "fisheries", "sustainable",
            "conservation", "ecology", "ecosystem", "crop", "soil", "water", "pollution", "biodiversity",
            "habitat", "species protection", "renewable", "green", "carbon", "emission",
            "environmental impact", "sustainability",
        ),
        _words(
            "agricultural practice", "farming", "livestock", "irrigation", "pest management",
            "soil quality", "water quality", "watershed", "endangered", "conservation strategy",
            "environmental assessment", "climate change impact", "ecological restoration",
        ),
    ),
    AcademicField.SOCIAL_SCIENCES: (
        _words(
            "psychology", "sociology", "economics", "political", "anthropology", "behavior", "society",
            "social", "culture", "institution", "demographic", "survey", "questionnaire", "interview",
            "participant", "respondent", "statistical analysis", "correlation", "regression",
            "hypothesis testing", "sample", "population", "variables",
        ),
        _words(
            "cognitive", "emotion", "motivation", "perception", "learning", "memory", "personality",
            "development", "relationship", "family", "group", "organization", "management", "leadership",
            "decision making", "economic theory", "market", "trade", "finance", "political system",
            "governance", "law", "education", "welfare",
        ),
    ),
    AcademicField.HUMANITIES: (
        _words(
            "history", "philosophy", "literature", "language", "linguistics", "humanities", "art",
            "culture", "civilization", "classic", "ancient", "medieval", "renaissance", "period", "era",
            "dynasty", "empire", "author", "poet", "writer", "literary", "linguistic", "semantic",
            "syntax", "dialect", "etymology", "translation",
        ),
        _words(
            "historical context", "philosophical argument", "literary analysis", "linguistic structure",
            "cultural meaning", "artistic expression", "interpretation", "critique", "textual",
            "manuscript", "archive", "historical document", "cultural heritage", "intellectual history",
            "moral theory", "aesthetics", "hermeneutics",
        ),
    ),
    AcademicField.FORMAL_SCIENCES: (
        _words(
            "mathematics", "mathematical", "geometry", "algebra", "logic", "statistics", "formal", "proof",
            "theorem", "axiom", "equation", "calculus", "topology", "set theory", "number theory",
            "abstract algebra", "linear algebra", "group theory", "ring theory", "field theory",
            "probability", "distribution", "hypothesis test", "confidence interval", "variance",
            "covariance",
        ),
        _words(
            "mathematical model", "algorithm analysis", "computational complexity", "theorem proving",
            "formal verification", "discrete mathematics", "combinatorics", "graph theory", "function",
            "mapping", "transformation", "sequence", "series", "limit", "derivative", "integral",
            "matrix", "vector", "eigenvalue", "optimization", "constraint satisfaction",
        ),
    ),
}


def score_fields(text: str, title: Optional[str] = None) -> Dict[AcademicField, int]:
    """Score every concrete field against *text*.

    Each keyword class counts once: a field gains 3 points when any strong
    keyword occurs and 1 point when any weak keyword occurs.
    """

    combined = combine(text, title)
    scores: Dict[AcademicField, int] = {}
    for field, (strong, weak) in FIELD_PATTERNS.items():
        score = 0
        if strong.search(combined):
            score += STRONG_MATCH_POINTS
        if weak.search(combined):
            score += WEAK_MATCH_POINTS
        scores[field] = score
    return scores


def pick_field(scores: Mapping[AcademicField, int]) -> AcademicField:
    """Return the leading field, or interdisciplinary when no field clearly leads."""

    ranked = sorted(scores.items(), key=lambda item: item[1], reverse=True)
    if not ranked or ranked[0][1] == 0:
        return AcademicField.INTERDISCIPLINARY

    top_field, top_score = ranked[0]
    second_score = ranked[1][1] if len(ranked) > 1 else 0
    if top_score > second_score + MINIMUM_MARGIN:
        return top_field
    return AcademicField.INTERDISCIPLINARY


def classify_academic_field(text: str, title: Optional[str] = None) -> AcademicField:
    return pick_field(score_fields(text, title))
