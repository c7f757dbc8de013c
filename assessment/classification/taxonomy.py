from __future__ import annotations

from enum import Enum


class DocumentType(str, Enum):
    """Structural or genre classification of a scholarly work."""

    ARTICLE = "article"
    REVIEW = "review"
    BOOK = "book"
    DISSERTATION = "dissertation"
    PROPOSAL = "proposal"
    CASE_STUDY = "case-study"
    ESSAY = "essay"
    THEORETICAL = "theoretical"
    PREPRINT = "preprint"
    CONFERENCE = "conference"
    UNKNOWN = "unknown"

    @property
    def label(self) -> str:
        return self.value.replace("-", " ")


class AcademicField(str, Enum):
    """Coarse discipline classification."""

    NATURAL_SCIENCES = "natural-sciences"
    ENGINEERING = "engineering"
    MEDICAL = "medical"
    AGRICULTURAL = "agricultural"
    SOCIAL_SCIENCES = "social-sciences"
    HUMANITIES = "humanities"
    FORMAL_SCIENCES = "formal-sciences"
    INTERDISCIPLINARY = "interdisciplinary"

    @property
    def label(self) -> str:
        return self.value.replace("-", " ")
