"""Text extraction from uploaded or fetched document bytes.

Dispatch order is plain text, then PDF, then Word (``.docx``) packages. Every
failure is contained here: callers always get a (possibly empty) string back
and fall back to the file name or abstract themselves.
"""

from __future__ import annotations

import io
import logging
import re
import zipfile
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from lxml import etree
from pypdf import PdfReader
from pypdf.errors import PyPdfError

from assessment.exceptions import ExtractionError

logger = logging.getLogger(__name__)

LOW_TEXT_THRESHOLD = 500
LOW_TEXT_RATIO_PERCENT = 10.0

DOCX_BODY_PATH = "word/document.xml"
WORD_NAMESPACE = "http://schemas.openxmlformats.org/wordprocessingml/2006/main"
_WHITESPACE = re.compile(r"\s+")
_XML_PARSER = etree.XMLParser(resolve_entities=False, no_network=True, huge_tree=True)


class DocumentFormat(str, Enum):
    TEXT = "text"
    PDF = "pdf"
    DOCX = "docx"
    UNSUPPORTED = "unsupported"


@dataclass
class ExtractionResult:
    text: str
    format: DocumentFormat
    page_count: int = 0
    diagnostics: List[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.text.strip()


def detect_format(mime_type: Optional[str], file_name: Optional[str]) -> DocumentFormat:
    mime = (mime_type or "").lower()
    name = (file_name or "").lower()

    if "text" in mime or name.endswith(".txt"):
        return DocumentFormat.TEXT
    if "pdf" in mime or name.endswith(".pdf"):
        return DocumentFormat.PDF
    if "wordprocessingml" in mime or "ms-word" in mime or name.endswith(".docx"):
        return DocumentFormat.DOCX
    return DocumentFormat.UNSUPPORTED


def extract(content: bytes, mime_type: Optional[str], file_name: Optional[str]) -> ExtractionResult:
    """Extract text and diagnostics from *content*; never raises."""

    document_format = detect_format(mime_type, file_name)
    logger.debug(
        "Extracting %s (%s, %d bytes) as %s", file_name, mime_type, len(content), document_format.value
    )

    try:
        if document_format is DocumentFormat.TEXT:
            return ExtractionResult(text=decode_text(content), format=document_format)
        if document_format is DocumentFormat.PDF:
            return extract_pdf(content)
        if document_format is DocumentFormat.DOCX:
            return ExtractionResult(text=extract_docx(content), format=document_format)
    except ExtractionError as exc:
        logger.error("Extraction failed for %s: %s", file_name, exc)
        return ExtractionResult(text="", format=document_format)
    except Exception:  # pragma: no cover - parser specific failures on corrupt input
        logger.exception("Unexpected error extracting %s", file_name)
        return ExtractionResult(text="", format=document_format)

    logger.warning("Unsupported format - MIME: %s, filename: %s", mime_type, file_name)
    return ExtractionResult(text="", format=document_format)


def extract_text(content: bytes, mime_type: Optional[str], file_name: Optional[str]) -> str:
    return extract(content, mime_type, file_name).text


def decode_text(content: bytes) -> str:
    return content.decode("utf-8", errors="replace")


def extract_pdf(content: bytes) -> ExtractionResult:
    """Extract the text layer of a PDF with :mod:`pypdf`.

    Very little text relative to the file size usually means a scanned or
    image-heavy PDF; that is reported as a diagnostic, not an error.
    """

    try:
        reader = PdfReader(io.BytesIO(content))
        pages = [page.extract_text() or "" for page in reader.pages]
    except (PyPdfError, ValueError, KeyError, TypeError, OSError) as exc:
        raise ExtractionError(f"Unreadable PDF: {exc}") from exc

    text = "\n\n".join(page for page in pages if page.strip())
    result = ExtractionResult(text=text, format=DocumentFormat.PDF, page_count=len(pages))

    ratio = (len(text) / len(content) * 100) if content else 0.0
    if len(text) < LOW_TEXT_THRESHOLD:
        result.diagnostics.append(
            f"Very low text extraction ({len(text)} chars); possibly scan-based or image-heavy, OCR required"
        )
    elif ratio < LOW_TEXT_RATIO_PERCENT:
        result.diagnostics.append(
            f"Low text-to-size ratio ({ratio:.2f}%); file may contain images or diagrams not extracted"
        )

    for diagnostic in result.diagnostics:
        logger.warning("PDF extraction diagnostic: %s", diagnostic)
    logger.info("Extracted %d chars from %d PDF pages", len(text), len(pages))
    return result


def extract_docx(content: bytes) -> str:
    """Return the body text of a ``.docx`` package, one line per paragraph."""

    try:
        with zipfile.ZipFile(io.BytesIO(content)) as package:
            try:
                body = package.read(DOCX_BODY_PATH)
            except KeyError:
                logger.error("DOCX package has no %s", DOCX_BODY_PATH)
                return ""
    except (zipfile.BadZipFile, OSError) as exc:
        raise ExtractionError(f"Invalid DOCX package: {exc}") from exc

    try:
        root = etree.fromstring(body, parser=_XML_PARSER)
    except etree.XMLSyntaxError as exc:
        raise ExtractionError(f"Malformed DOCX body: {exc}") from exc

    paragraphs = []
    for paragraph in root.iter(f"{{{WORD_NAMESPACE}}}p"):
        text = "".join(node.text or "" for node in paragraph.iter(f"{{{WORD_NAMESPACE}}}t"))
        text = _WHITESPACE.sub(" ", text).strip()
        if text:
            paragraphs.append(text)
    return "\n".join(paragraphs)


def title_from_file_name(file_name: str) -> str:
    """File name without its extension, used when no text could be extracted."""

    return re.sub(r"\.[^/.]+$", "", file_name)
