"""Heuristic document type classification.

The checks form a priority cascade: the first rule that matches decides the
type, so rule order is also the tie-break between overlapping signals.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from assessment.classification.taxonomy import DocumentType

DISSERTATION_LENGTH = 500_000
BOOK_LENGTH = 300_000
SUBSTANTIAL_DOCUMENT_LENGTH = 5000

_METHODOLOGY = re.compile(r"method|procedure|approach|design|protocol|experiment|test|sample|variable|hypothesis")
_RESULTS = re.compile(r"result|finding|outcome|data|show|demonstrate|evidence|conclude")
_DISCUSSION = re.compile(r"discussion|implication|limitation|interpret|analyse|analyze|significance")
_CONCLUSION = re.compile(r"conclusion|summary|concluding|conclude|final remark|future work|implication")

_PREPRINT = re.compile(r"preprint|arxiv|not peer-reviewed|eprint")
_CONFERENCE = re.compile(
    r"\b(conference|proceeding|workshop|symposium|proceedings|conference paper|conference abstract)\b"
)
_DISSERTATION = re.compile(
    r"\b(dissertation|thesis|doctoral dissertation|master.?s thesis|phd dissertation)\b"
)
_BOOK = re.compile(r"\b(book|chapter|volume|edited collection|edited book|textbook|monograph)\b")
_CASE_STUDY = re.compile(
    r"\b(case study|case analysis|case report|case presentation|single case|case example)\b"
)
_PROPOSAL = re.compile(
    r"\b(proposal|propose|proposed|propose to|proposal for|aims to|objectives|will conduct|research plan)\b"
)
_ESSAY = re.compile(
    r"\b(essay|perspective|opinion|commentary|editorial|viewpoint|reflective essay|critical essay)\b"
)
_THEORETICAL = re.compile(
    r"\b(theory|theoretical|conceptual|theoretical framework|concept|model|philosophical|conceptual model)\b"
)
_REVIEW = re.compile(
    r"\b(review|survey|systematic review|meta-analysis|scoping review|narrative review|literature review"
    r"|examination of|synthesis of literature|state of the art)\b"
)


@dataclass(frozen=True)
class TypeMatch:
    """Winning rule of the cascade and the confidence attached to it."""

    document_type: DocumentType
    rule: str
    confidence: float


def combine(text: str, title: Optional[str]) -> str:
    return f"{title or ''} {text}".lower()


def match_document_type(text: str, title: Optional[str] = None) -> TypeMatch:
    combined = combine(text, title)

    has_abstract = "abstract" in combined
    has_introduction = "introduction" in combined
    has_methodology = bool(_METHODOLOGY.search(combined))
    has_results = bool(_RESULTS.search(combined))
    has_discussion = bool(_DISCUSSION.search(combined))
    has_conclusion = bool(_CONCLUSION.search(combined))

    if _PREPRINT.search(combined):
        return TypeMatch(DocumentType.PREPRINT, "preprint-marker", 0.9)
    if _CONFERENCE.search(combined):
        return TypeMatch(DocumentType.CONFERENCE, "conference-marker", 0.85)
    if _DISSERTATION.search(combined):
        return TypeMatch(DocumentType.DISSERTATION, "dissertation-marker", 0.85)
    if len(combined) > DISSERTATION_LENGTH:
        return TypeMatch(DocumentType.DISSERTATION, "dissertation-length", 0.6)
    if _BOOK.search(combined):
        return TypeMatch(DocumentType.BOOK, "book-marker", 0.8)
    if len(combined) > BOOK_LENGTH:
        return TypeMatch(DocumentType.BOOK, "book-length", 0.6)
    if _CASE_STUDY.search(combined):
        return TypeMatch(DocumentType.CASE_STUDY, "case-study-marker", 0.8)
    if _PROPOSAL.search(combined) and not has_results:
        return TypeMatch(DocumentType.PROPOSAL, "proposal-language", 0.75)
    if _ESSAY.search(combined) and not has_methodology:
        return TypeMatch(DocumentType.ESSAY, "essay-marker", 0.75)
    if _THEORETICAL.search(combined) and not has_methodology:
        return TypeMatch(DocumentType.THEORETICAL, "theory-language", 0.7)
    if _REVIEW.search(combined) and not has_methodology:
        return TypeMatch(DocumentType.REVIEW, "review-marker", 0.75)

    if (has_abstract or has_introduction) and has_methodology and has_results:
        return TypeMatch(DocumentType.ARTICLE, "full-article-structure", 0.8)
    if has_methodology and has_results and (has_discussion or has_conclusion):
        return TypeMatch(DocumentType.ARTICLE, "empirical-structure", 0.75)
    if has_methodology and has_results:
        return TypeMatch(DocumentType.ARTICLE, "methods-and-results", 0.7)
    if (has_abstract or has_introduction) and has_conclusion:
        return TypeMatch(DocumentType.ARTICLE, "research-structure", 0.6)
    if len(text) > SUBSTANTIAL_DOCUMENT_LENGTH:
        return TypeMatch(DocumentType.ARTICLE, "substantial-length", 0.4)

    return TypeMatch(DocumentType.UNKNOWN, "no-match", 0.0)


def classify_document_type(text: str, title: Optional[str] = None) -> DocumentType:
    """Return the document type of *text* (optionally with its *title*)."""

    return match_document_type(text, title).document_type
