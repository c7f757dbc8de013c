from __future__ import annotations

import re
from urllib.parse import urlparse

_DOI_PREFIX_PATTERN = re.compile(r"^(https?://)?(dx\.)?doi\.org/", re.IGNORECASE)
_ARXIV_ID_PATTERN = re.compile(r"\d[\d.]*\.\d+(?:v\d+)?")
_ARXIV_MARKER = "arxiv"
_VERSION_SUFFIX_PATTERN = re.compile(r"v\d+$")


def clean_doi(doi: str | None) -> str | None:
    """Strip resolver prefixes (``https://doi.org/``, ``doi:``) from a DOI.

    Unlike a catalogue key the DOI keeps its original case, since it is sent
    verbatim to the open-access lookup service. Empty values return ``None``.
    """

    if not doi:
        return None

    cleaned = doi.strip()
    cleaned = _DOI_PREFIX_PATTERN.sub("", cleaned)
    if cleaned.lower().startswith("doi:"):
        cleaned = cleaned.split(":", 1)[1]
    cleaned = cleaned.strip()

    return cleaned or None


def extract_arxiv_id(value: str | None) -> str | None:
    """Extract a preprint-server id, dropping any ``vN`` version suffix.

    Accepts bare ids (``2401.12345v2``), abstract URLs
    (``https://arxiv.org/abs/2401.12345``) and arXiv DOIs
    (``10.48550/arXiv.2401.12345``). When the value names arXiv, only the text
    after that name is searched.
    """

    if not value:
        return None

    marker = value.lower().rfind(_ARXIV_MARKER)
    if marker != -1:
        value = value[marker + len(_ARXIV_MARKER) :]

    match = _ARXIV_ID_PATTERN.search(value)
    if not match:
        return None
    return _VERSION_SUFFIX_PATTERN.sub("", match.group(0))


def doi_file_name(doi: str) -> str:
    return f"{doi.replace('/', '_')}.pdf"


def file_name_from_url(url: str, default: str = "document.pdf") -> str:
    """Return the last path segment of *url*, or *default* when there is none."""

    path = urlparse(url).path
    segment = path.rstrip("/").rsplit("/", 1)[-1] if path else ""
    return segment or default


def looks_like_pdf_url(url: str | None) -> bool:
    if not url:
        return False
    return ".pdf" in url.lower()
