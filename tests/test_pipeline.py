import json
from typing import List, Optional

import pytest

from assessment.acquisition.strategies import PreprintStrategy
from assessment.analysis import AnalysisPipeline, Paper
from assessment.classification import AcademicField, DocumentType, classify
from assessment.config import AssessmentConfig
from assessment.core.models import DocumentIdentifiers, DocumentSource, FetchedDocument, SourceType
from assessment.exceptions import InvalidAnalysisResponse
from assessment.framework import FrameworkWeights, get_framework_guidelines
from assessment.scoring import Rating

CLINICAL_PARAGRAPH = (
    "This clinical investigation followed each patient enrolled at two hospitals. "
    "The methodology describes a randomized controlled clinical trial of a new drug for chronic disease. "
    "Results showed fewer symptoms after treatment. "
    "The discussion covers adverse event rates and remission."
)


def clinical_article(length: int = 200_000) -> str:
    repeats = length // (len(CLINICAL_PARAGRAPH) + 2) + 1
    body = "\n\n".join([CLINICAL_PARAGRAPH] * repeats)
    return f"Introduction\n\n{body}"[:length]


def model_reply(total_score: float, **sections) -> str:
    payload = {
        "credibility": {
            "methodologicalRigor": {"score": 2.0, "confidence": 70},
            "dataTransparency": {"score": 1.5, "confidence": 70},
            "sourceQuality": {"score": 1.0, "confidence": 70},
            "authorCredibility": {"score": 1.0, "confidence": 70},
            "statisticalValidity": {"score": 1.0, "confidence": 70},
            "logicalConsistency": {"score": 0.5, "confidence": 70},
            "totalScore": total_score,
            "rating": "Strong",
        },
        "bias": {"biases": [], "overallLevel": "Low", "justification": "None found"},
        "keyFindings": {"researchQuestion": "Does the drug help?"},
        "perspective": {"paradigm": "Positivist"},
    }
    payload.update(sections)
    return f"```json\n{json.dumps(payload)}\n```"


class RecordingModel:
    def __init__(self, reply: str) -> None:
        self.reply = reply
        self.prompts: List[str] = []

    def __call__(self, prompt: str) -> str:
        self.prompts.append(prompt)
        return self.reply


class StubChain:
    def __init__(self, document: Optional[FetchedDocument] = None) -> None:
        self.document = document
        self.requests: List[DocumentIdentifiers] = []

    def acquire(self, identifiers: DocumentIdentifiers) -> Optional[FetchedDocument]:
        self.requests.append(identifiers)
        return self.document


def test_long_clinical_article_scenario() -> None:
    text = clinical_article()
    assert len(text) == 200_000

    result = classify(text)
    framework = get_framework_guidelines(result.document_type, result.field)

    assert result.document_type is DocumentType.ARTICLE
    assert result.field is AcademicField.MEDICAL
    assert framework.weights == FrameworkWeights(2.5, 2.0, 1.5, 1.0, 1.5, 0.5)
    assert framework.weights.total <= 10.0


def test_analyze_paper_with_full_text(config: AssessmentConfig) -> None:
    model = RecordingModel(model_reply(12.0))
    chain = StubChain()
    pipeline = AnalysisPipeline(model, config=config, acquisition_chain=chain)
    paper = Paper(id="W1", title="Drug trial outcomes", doi="10.1/x", abstract="A trial.")

    analysis = pipeline.analyze_paper(paper, full_text=clinical_article(20_000))

    assert chain.requests == []
    assert analysis.paper.document_type == "article"
    assert analysis.paper.field == "medical"
    assert analysis.credibility.total_score == pytest.approx(9.0)
    assert analysis.credibility.max_total_score == pytest.approx(9.0)
    assert analysis.credibility.rating is Rating.EXEMPLARY
    assert analysis.bias["overallLevel"] == "Low"
    assert analysis.limitations["aiConfidenceNote"] == "Analysis completed with available information"
    assert "Document text:" in model.prompts[0]


def test_prompt_text_is_bounded_by_context_budget(config: AssessmentConfig) -> None:
    model = RecordingModel(model_reply(5.0))
    pipeline = AnalysisPipeline(model, config=config.model_copy(update={"max_context_tokens": 2000}))

    pipeline.analyze_paper(Paper(id="W1", title="Drug trial outcomes"), full_text=clinical_article())

    assert len(model.prompts[0]) < 30_000


def test_analyze_paper_falls_back_to_abstract_when_acquisition_fails(config: AssessmentConfig) -> None:
    model = RecordingModel(model_reply(4.0))
    chain = StubChain()
    pipeline = AnalysisPipeline(model, config=config, acquisition_chain=chain)
    paper = Paper(id="W2", title="Short study", doi="10.1/y", abstract="Patients improved after therapy.")

    analysis = pipeline.analyze_paper(paper)

    assert chain.requests == [DocumentIdentifiers(doi="10.1/y", abstract="Patients improved after therapy.")]
    assert "from its abstract alone" in model.prompts[0]
    assert "Patients improved after therapy." in model.prompts[0]
    assert analysis.credibility.total_score == 4.0


def test_analyze_paper_uses_acquired_document(config: AssessmentConfig) -> None:
    body = clinical_article(5_000).encode("utf-8")
    document = FetchedDocument(
        content=body,
        source=DocumentSource(type=SourceType.DIRECT_LINK, url="https://host/article/1", confidence=0.75),
        file_name="1",
        mime_type="text/plain",
        size_bytes=len(body),
    )
    model = RecordingModel(model_reply(6.0))
    pipeline = AnalysisPipeline(model, config=config, acquisition_chain=StubChain(document))

    analysis = pipeline.analyze_paper(Paper(id="W3", title="Fetched", url="https://host/article/1"))

    assert "Document text:" in model.prompts[0]
    assert analysis.paper.field == "medical"


def test_paper_without_locator_skips_acquisition(config: AssessmentConfig) -> None:
    chain = StubChain()
    pipeline = AnalysisPipeline(RecordingModel(model_reply(1.0)), config=config, acquisition_chain=chain)

    pipeline.analyze_paper(Paper(id="W4", title="Untraceable", abstract="Only an abstract."))

    assert chain.requests == []


def test_openalex_id_is_offered_as_preprint_identifier(config: AssessmentConfig) -> None:
    chain = StubChain()
    pipeline = AnalysisPipeline(RecordingModel(model_reply(1.0)), config=config, acquisition_chain=chain)
    paper = Paper.model_validate({"id": "W9", "title": "Preprint", "openAlexId": "arXiv:2401.12345"})

    pipeline.analyze_paper(paper)

    assert chain.requests == [DocumentIdentifiers(preprint_id="arXiv:2401.12345")]
    assert PreprintStrategy._resolve_id(chain.requests[0]) == "2401.12345"


def test_analyze_upload_uses_extracted_text(config: AssessmentConfig) -> None:
    model = RecordingModel(model_reply(7.0))
    pipeline = AnalysisPipeline(model, config=config, acquisition_chain=StubChain())

    analysis = pipeline.analyze_upload(clinical_article(3_000).encode("utf-8"), "text/plain", "trial.txt")

    assert analysis.paper.title == "trial"
    assert analysis.paper.authors == ["Uploaded Document"]
    assert analysis.paper.id.startswith("file-")
    assert len(analysis.paper.abstract) == 1000
    assert analysis.paper.document_type == "article"


def test_analyze_upload_falls_back_to_file_name(config: AssessmentConfig) -> None:
    model = RecordingModel(model_reply(2.0))
    pipeline = AnalysisPipeline(model, config=config, acquisition_chain=StubChain())

    analysis = pipeline.analyze_upload(b"\x89PNG", "image/png", "Scanned notes.png")

    assert analysis.paper.title == "Scanned notes"
    assert analysis.paper.abstract == "Scanned notes"
    assert "from its abstract alone" in model.prompts[0]


def test_model_supplied_limitations_are_passed_through(config: AssessmentConfig) -> None:
    limitations = {"unverifiableClaims": [], "dataLimitations": ["abstract only"], "uncertainties": [], "aiConfidenceNote": "low"}
    pipeline = AnalysisPipeline(
        RecordingModel(model_reply(3.0, limitations=limitations)), config=config, acquisition_chain=StubChain()
    )

    analysis = pipeline.analyze_paper(Paper(id="W5", title="T"), full_text="Some text.")

    assert analysis.limitations == limitations
    assert analysis.to_payload()["keyFindings"] == {"researchQuestion": "Does the drug help?"}


def test_reply_without_credibility_is_rejected(config: AssessmentConfig) -> None:
    pipeline = AnalysisPipeline(RecordingModel('{"bias": {}}'), config=config, acquisition_chain=StubChain())

    with pytest.raises(InvalidAnalysisResponse):
        pipeline.analyze_paper(Paper(id="W6", title="T"), full_text="Some text.")


def test_reply_without_json_is_rejected(config: AssessmentConfig) -> None:
    pipeline = AnalysisPipeline(RecordingModel("I cannot help with that."), config=config, acquisition_chain=StubChain())

    with pytest.raises(InvalidAnalysisResponse, match="Failed to parse analysis response"):
        pipeline.analyze_paper(Paper(id="W7", title="T"), full_text="Some text.")
