from __future__ import annotations

import argparse
import json
import logging
import mimetypes
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Any, Optional, Sequence

from assessment.acquisition import AcquisitionChain
from assessment.analysis.response import extract_json_payload
from assessment.classification import AcademicField, DocumentType, classify
from assessment.config import load_config
from assessment.core.identifiers import clean_doi
from assessment.core.models import DocumentIdentifiers
from assessment.exceptions import AssessmentError
from assessment.extraction import extract
from assessment.framework import FrameworkGuidelines, get_framework_guidelines
from assessment.scoring import format_normalized_score, validate_credibility

logger = logging.getLogger(__name__)


def _print_json(payload: Any) -> None:
    print(json.dumps(payload, indent=2, ensure_ascii=False, default=str))


def _read_document(path: Path, mime_type: Optional[str]) -> tuple[bytes, Optional[str]]:
    guessed, _ = mimetypes.guess_type(path.name)
    return path.read_bytes(), mime_type or guessed


def _serialize_framework(framework: FrameworkGuidelines) -> dict[str, Any]:
    return {
        "documentType": framework.document_type.value,
        "field": framework.field.value,
        "weights": framework.weights.as_camel_case(),
        "maxTotalScore": round(framework.max_total_score, 2),
        "biasPriorities": list(framework.bias_priorities),
        "assessmentFocus": list(framework.assessment_focus),
        "limitations": list(framework.limitations),
        "assumptions": list(framework.assumptions),
    }


def handle_fetch(args: argparse.Namespace) -> int:
    config = load_config()
    identifiers = DocumentIdentifiers(
        preprint_id=args.preprint_id,
        doi=clean_doi(args.doi) if args.doi else None,
        url=args.url,
    )
    if identifiers.is_empty():
        logger.error("Provide at least one of --doi, --url or --preprint-id")
        return 2

    report = AcquisitionChain.from_config(config).attempt(identifiers)
    payload: dict[str, Any] = {"attempts": [asdict(attempt) for attempt in report.attempts], "document": None}
    document = report.document
    if document is not None:
        payload["document"] = {
            "source": asdict(document.source),
            "fileName": document.file_name,
            "mimeType": document.mime_type,
            "sizeBytes": document.size_bytes,
        }
        if args.output:
            Path(args.output).write_bytes(document.content)
            payload["document"]["savedTo"] = args.output

    _print_json(payload)
    return 0 if document is not None else 1


def handle_extract(args: argparse.Namespace) -> int:
    path = Path(args.path)
    content, mime_type = _read_document(path, args.mime_type)
    result = extract(content, mime_type, path.name)
    _print_json(
        {
            "format": result.format.value,
            "pageCount": result.page_count,
            "characters": len(result.text),
            "diagnostics": list(result.diagnostics),
            "text": result.text,
        }
    )
    return 0 if result.text else 1


def handle_classify(args: argparse.Namespace) -> int:
    path = Path(args.path)
    content, mime_type = _read_document(path, args.mime_type)
    text = extract(content, mime_type, path.name).text
    result = classify(text, args.title)
    _print_json(
        {
            "documentType": result.document_type.value,
            "field": result.field.value,
            "typeConfidence": result.type_confidence,
            "fieldConfidence": result.field_confidence,
            "typeRule": result.type_rule,
            "fieldScores": {field.value: score for field, score in result.field_scores.items()},
        }
    )
    return 0


def handle_framework(args: argparse.Namespace) -> int:
    config = load_config()
    framework = get_framework_guidelines(
        DocumentType(args.document_type),
        AcademicField(args.field),
        strict=args.strict or config.strict_weights,
    )
    _print_json(_serialize_framework(framework))
    return 0


def handle_validate(args: argparse.Namespace) -> int:
    payload = extract_json_payload(Path(args.path).read_text(encoding="utf-8"))
    framework = get_framework_guidelines(DocumentType(args.document_type), AcademicField(args.field))
    score = validate_credibility(payload.get("credibility"), framework)
    output = score.to_payload()
    output["normalized"] = format_normalized_score(score.total_score, score.max_total_score)
    _print_json(output)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Scholarly document assessment CLI")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    fetch_parser = subparsers.add_parser("fetch", help="Acquire the full text of a document")
    fetch_parser.add_argument("--doi", help="DOI of the work")
    fetch_parser.add_argument("--url", help="Landing page or PDF URL")
    fetch_parser.add_argument("--preprint-id", help="arXiv identifier")
    fetch_parser.add_argument("--output", help="Write the fetched bytes to this path")
    fetch_parser.set_defaults(func=handle_fetch)

    extract_parser = subparsers.add_parser("extract", help="Extract text from a local PDF, DOCX or text file")
    extract_parser.add_argument("path", help="Document path")
    extract_parser.add_argument("--mime-type", help="Override the MIME type guessed from the file name")
    extract_parser.set_defaults(func=handle_extract)

    classify_parser = subparsers.add_parser("classify", help="Classify a document by type and field")
    classify_parser.add_argument("path", help="Document path")
    classify_parser.add_argument("--title", help="Document title")
    classify_parser.add_argument("--mime-type", help="Override the MIME type guessed from the file name")
    classify_parser.set_defaults(func=handle_classify)

    type_choices = [item.value for item in DocumentType]
    field_choices = [item.value for item in AcademicField]

    framework_parser = subparsers.add_parser("framework", help="Show the framework for a type and field")
    framework_parser.add_argument("document_type", choices=type_choices)
    framework_parser.add_argument("field", choices=field_choices)
    framework_parser.add_argument("--strict", action="store_true", help="Fail if weights exceed 10 points")
    framework_parser.set_defaults(func=handle_framework)

    validate_parser = subparsers.add_parser("validate", help="Validate a saved language-model response")
    validate_parser.add_argument("path", help="File holding the model response")
    validate_parser.add_argument("document_type", choices=type_choices)
    validate_parser.add_argument("field", choices=field_choices)
    validate_parser.set_defaults(func=handle_validate)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    try:
        return args.func(args)
    except AssessmentError as exc:
        logger.error("%s", exc)
        return 1


if __name__ == "__main__":
    sys.exit(main())
