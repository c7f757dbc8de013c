"""End-to-end assessment of a paper or an uploaded file.

The language model is an injected callable taking the prompt and returning
its raw reply, so the pipeline never talks to a model provider itself.
"""

from __future__ import annotations

import hashlib
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from assessment.acquisition.chain import AcquisitionChain
from assessment.analysis.prompts import PromptContext, build_abstract_only_prompt, build_assessment_prompt
from assessment.analysis.response import extract_json_payload
from assessment.chunking import select_relevant_chunks
from assessment.classification import AcademicField, ClassificationResult, DocumentType, classify
from assessment.config import AssessmentConfig, load_config
from assessment.core.models import DocumentIdentifiers, DocumentMetadata
from assessment.exceptions import InvalidAnalysisResponse
from assessment.extraction import extract_text, title_from_file_name
from assessment.framework import FrameworkGuidelines, get_framework_guidelines
from assessment.processing import process_fetched_document, process_text_document
from assessment.scoring import CredibilityScore, validate_credibility

logger = logging.getLogger(__name__)

LanguageModel = Callable[[str], str]

# Texts at or below this length get the abstract-only prompt.
FULL_PROMPT_MIN_CHARS = 1000
UPLOAD_ABSTRACT_CHARS = 1000
UPLOAD_AUTHOR = "Uploaded Document"


def default_limitations() -> Dict[str, Any]:
    return {
        "unverifiableClaims": [],
        "dataLimitations": [],
        "uncertainties": [],
        "aiConfidenceNote": "Analysis completed with available information",
    }


class Paper(BaseModel):
    """Bibliographic record of the work being assessed."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str
    title: str
    authors: list[str] = Field(default_factory=list)
    journal: str | None = None
    doi: str | None = None
    abstract: str | None = None
    url: str | None = None
    year: int | None = None
    preprint_id: str | None = Field(default=None, alias="preprintId")
    openalex_id: str | None = Field(default=None, alias="openAlexId")
    document_type: str | None = Field(default=None, alias="documentType")
    field: str | None = None

    def identifiers(self) -> DocumentIdentifiers:
        """Acquisition identifiers; the OpenAlex id stands in for a missing preprint id."""

        return DocumentIdentifiers(
            preprint_id=self.preprint_id or self.openalex_id,
            doi=self.doi,
            url=self.url,
            abstract=self.abstract,
        )

    def has_locator(self) -> bool:
        return bool(self.doi or self.url or self.preprint_id or self.openalex_id)


class AnalysisResult(BaseModel):
    """Validated credibility plus the pass-through sections of the model reply."""

    model_config = ConfigDict(populate_by_name=True)

    paper: Paper
    credibility: CredibilityScore
    bias: Any = None
    key_findings: Any = Field(default=None, alias="keyFindings")
    perspective: Any = None
    limitations: Dict[str, Any] = Field(default_factory=default_limitations)
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def to_payload(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


@dataclass(frozen=True)
class PreparedAnalysis:
    """Classification, framework and prompt for one document, before the model is called."""

    text: str
    classification: ClassificationResult
    framework: FrameworkGuidelines
    prompt: str
    full_prompt: bool

    @property
    def document_type(self) -> DocumentType:
        return self.classification.document_type

    @property
    def field(self) -> AcademicField:
        return self.classification.field


class AnalysisPipeline:
    """Acquire, classify, prompt and validate."""

    def __init__(
        self,
        llm: LanguageModel,
        *,
        config: Optional[AssessmentConfig] = None,
        acquisition_chain: Optional[AcquisitionChain] = None,
    ) -> None:
        self.llm = llm
        self.config = config or load_config()
        self._acquisition_chain = acquisition_chain

    @property
    def acquisition_chain(self) -> AcquisitionChain:
        if self._acquisition_chain is None:
            self._acquisition_chain = AcquisitionChain.from_config(self.config)
        return self._acquisition_chain

    def analyze_paper(self, paper: Paper, full_text: Optional[str] = None) -> AnalysisResult:
        """Assess *paper*, fetching its document when no text is supplied."""

        logger.info("Analyzing paper: %s", paper.title)
        text = full_text or self._acquire_text(paper) or paper.abstract or ""
        prepared = self.prepare(text, title=paper.title, abstract=paper.abstract)
        return self.finalize(paper, prepared, self.llm(prepared.prompt))

    def analyze_upload(self, content: bytes, mime_type: Optional[str], file_name: str) -> AnalysisResult:
        """Assess an uploaded file; the file name stands in when no text can be extracted."""

        title = title_from_file_name(file_name)
        text = extract_text(content, mime_type, file_name)
        if not text:
            logger.warning("Text extraction failed, using file name only: %r", title)
            text = title

        paper = Paper(
            id=upload_id(file_name),
            title=title,
            authors=[UPLOAD_AUTHOR],
            abstract=text[:UPLOAD_ABSTRACT_CHARS],
            year=datetime.now(timezone.utc).year,
        )
        prepared = self.prepare(text, title=title)
        return self.finalize(paper, prepared, self.llm(prepared.prompt))

    def prepare(self, text: str, *, title: Optional[str] = None, abstract: Optional[str] = None) -> PreparedAnalysis:
        """Classify *text*, build its framework and choose the prompt."""

        classification = classify(text, title)
        framework = get_framework_guidelines(
            classification.document_type,
            classification.field,
            strict=self.config.strict_weights,
        )
        logger.info(
            "Document classified as %s in %s",
            classification.document_type.value,
            classification.field.value,
        )

        full_prompt = len(text) > FULL_PROMPT_MIN_CHARS
        if full_prompt:
            processed = process_text_document(text)
            chunks = select_relevant_chunks(processed.chunks, self.config.max_context_tokens)
            prompt = build_assessment_prompt(
                PromptContext(
                    document_type=classification.document_type,
                    field=classification.field,
                    framework=framework,
                    full_text=processed.full_text,
                    title=title,
                    abstract=abstract,
                    chunks=tuple(chunks),
                )
            )
        else:
            prompt = build_abstract_only_prompt(
                title,
                abstract or text,
                classification.document_type,
                classification.field,
                framework,
            )
        logger.debug("Prompt mode: %s (%d chars of text)", "full" if full_prompt else "abstract-only", len(text))

        return PreparedAnalysis(
            text=text,
            classification=classification,
            framework=framework,
            prompt=prompt,
            full_prompt=full_prompt,
        )

    def finalize(self, paper: Paper, prepared: PreparedAnalysis, response_text: str) -> AnalysisResult:
        """Parse and validate the model reply for *prepared*.

        Raises:
            InvalidAnalysisResponse: if the reply has no parseable JSON, no
                credibility block or no total score.
        """

        payload = extract_json_payload(response_text)
        credibility = payload.get("credibility")
        if credibility is None:
            logger.error("Missing credibility data in analysis response")
            raise InvalidAnalysisResponse("Invalid analysis response: missing credibility assessment")

        score = validate_credibility(credibility, prepared.framework)
        classified = paper.model_copy(
            update={
                "document_type": prepared.document_type.value,
                "field": prepared.field.value,
            }
        )
        logger.info(
            "Analysis complete for %s: %.2f/%.2f (%s)",
            paper.title,
            score.total_score,
            score.max_total_score,
            score.rating.value,
        )
        return AnalysisResult(
            paper=classified,
            credibility=score,
            bias=payload.get("bias"),
            key_findings=payload.get("keyFindings"),
            perspective=payload.get("perspective"),
            limitations=payload.get("limitations") or default_limitations(),
        )

    def _acquire_text(self, paper: Paper) -> str:
        if not paper.has_locator():
            return ""

        document = self.acquisition_chain.acquire(paper.identifiers())
        if document is None:
            logger.info("Could not fetch full document for %s, using abstract", paper.id)
            return ""

        metadata = DocumentMetadata(title=paper.title, authors=list(paper.authors), abstract=paper.abstract)
        return process_fetched_document(document, metadata).full_text


def upload_id(file_name: str) -> str:
    """Stable identifier for an uploaded file derived from its name."""

    digest = hashlib.sha1(file_name.encode("utf-8")).hexdigest()[:12]
    return f"file-{digest}"
