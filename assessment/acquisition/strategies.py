"""Document retrieval strategies tried in order by the acquisition chain.

Each strategy either returns a :class:`FetchedDocument`, returns ``None`` when
it does not apply to the given identifiers, or raises :class:`DownloadError`
when it applied but the fetch failed.
"""

from __future__ import annotations

import logging
from typing import Optional, Protocol

import requests

from assessment.acquisition.downloader import (
    DocumentDownloader,
    DocumentTooLargeError,
    DownloadError,
    accepts_pdf_or_text,
)
from assessment.acquisition.unpaywall import UnpaywallClient
from assessment.core.identifiers import (
    clean_doi,
    doi_file_name,
    extract_arxiv_id,
    file_name_from_url,
    looks_like_pdf_url,
)
from assessment.core.models import DocumentIdentifiers, DocumentSource, FetchedDocument, SourceType

logger = logging.getLogger(__name__)

PDF_MIME_TYPE = "application/pdf"


class AcquisitionStrategy(Protocol):
    name: str

    def fetch(self, identifiers: DocumentIdentifiers) -> Optional[FetchedDocument]:
        ...


class UnpaywallStrategy:
    """Resolve a DOI through Unpaywall and fetch the open-access PDF."""

    name = "unpaywall"
    best_confidence = 0.9
    alternate_confidence = 0.85

    def __init__(self, unpaywall_client: UnpaywallClient, downloader: DocumentDownloader) -> None:
        self.unpaywall_client = unpaywall_client
        self.downloader = downloader

    def fetch(self, identifiers: DocumentIdentifiers) -> Optional[FetchedDocument]:
        doi = clean_doi(identifiers.doi)
        if not doi:
            return None
        try:
            record = self.unpaywall_client.get_record(doi)
        except requests.RequestException as exc:
            raise DownloadError(f"Unpaywall lookup failed for {doi}: {exc}") from exc

        file_name = doi_file_name(doi)
        last_error: Optional[DownloadError] = None

        if record.best_pdf_url:
            try:
                return self._fetch_pdf(
                    record.best_pdf_url, file_name, SourceType.OPEN_ACCESS_FINDER, self.best_confidence
                )
            except DocumentTooLargeError:
                raise
            except DownloadError as exc:
                logger.debug("Best open-access location failed for %s: %s", doi, exc)
                last_error = exc

        for pdf_url in record.alternate_pdf_urls():
            try:
                return self._fetch_pdf(pdf_url, file_name, SourceType.REGISTRY_DOI, self.alternate_confidence)
            except DocumentTooLargeError:
                raise
            except DownloadError as exc:
                logger.debug("Alternate open-access location %s failed: %s", pdf_url, exc)
                last_error = exc

        if last_error is not None:
            raise last_error
        raise DownloadError(f"No open-access PDF location reported for {doi}")

    def _fetch_pdf(
        self, url: str, file_name: str, source_type: SourceType, confidence: float
    ) -> FetchedDocument:
        downloaded = self.downloader.fetch(url)
        return FetchedDocument(
            content=downloaded.content,
            source=DocumentSource(type=source_type, url=url, confidence=confidence),
            file_name=file_name,
            mime_type=PDF_MIME_TYPE,
            size_bytes=downloaded.size_bytes,
        )


class BibliographicPdfStrategy:
    """Fetch a PDF link reported by the bibliographic database."""

    name = "bibliographic-pdf"
    confidence = 0.88

    def __init__(self, downloader: DocumentDownloader) -> None:
        self.downloader = downloader

    def fetch(self, identifiers: DocumentIdentifiers) -> Optional[FetchedDocument]:
        url = identifiers.url
        if not url or not looks_like_pdf_url(url):
            return None

        downloaded = self.downloader.fetch(url)
        return FetchedDocument(
            content=downloaded.content,
            source=DocumentSource(type=SourceType.BIBLIOGRAPHIC_DATABASE, url=url, confidence=self.confidence),
            file_name=file_name_from_url(url),
            mime_type=downloaded.content_type or PDF_MIME_TYPE,
            size_bytes=downloaded.size_bytes,
        )


class PreprintStrategy:
    """Fetch the canonical arXiv PDF for a preprint id."""

    name = "preprint"
    confidence = 0.95
    BASE_URL = "https://arxiv.org/pdf"

    def __init__(self, downloader: DocumentDownloader, *, base_url: Optional[str] = None) -> None:
        self.downloader = downloader
        self.base_url = (base_url or self.BASE_URL).rstrip("/")

    def fetch(self, identifiers: DocumentIdentifiers) -> Optional[FetchedDocument]:
        arxiv_id = self._resolve_id(identifiers)
        if not arxiv_id:
            return None

        url = f"{self.base_url}/{arxiv_id}.pdf"
        downloaded = self.downloader.fetch(url)
        return FetchedDocument(
            content=downloaded.content,
            source=DocumentSource(type=SourceType.PREPRINT_SERVER, url=url, confidence=self.confidence),
            file_name=f"{arxiv_id}.pdf",
            mime_type=PDF_MIME_TYPE,
            size_bytes=downloaded.size_bytes,
        )

    @staticmethod
    def _resolve_id(identifiers: DocumentIdentifiers) -> Optional[str]:
        arxiv_id = extract_arxiv_id(identifiers.preprint_id)
        if arxiv_id:
            return arxiv_id
        url = identifiers.url or ""
        if "arxiv.org/" in url.lower():
            return extract_arxiv_id(url)
        return None


class DirectLinkStrategy:
    """Generic fetch of a URL, keeping only PDF or text responses.

    With ``pdf_links=False`` (the default) only non-PDF links are tried; the
    landing-page variant sets it to ``True`` to retry a PDF link whose
    bibliographic fetch failed, this time gated on the response content type.
    """

    confidence = 0.75

    def __init__(self, downloader: DocumentDownloader, *, pdf_links: bool = False) -> None:
        self.downloader = downloader
        self.pdf_links = pdf_links
        self.name = "landing-page" if pdf_links else "direct-link"

    def fetch(self, identifiers: DocumentIdentifiers) -> Optional[FetchedDocument]:
        url = identifiers.url
        if not url or looks_like_pdf_url(url) != self.pdf_links:
            return None

        downloaded = self.downloader.fetch(url, accept=accepts_pdf_or_text)
        return FetchedDocument(
            content=downloaded.content,
            source=DocumentSource(type=SourceType.DIRECT_LINK, url=url, confidence=self.confidence),
            file_name=file_name_from_url(url),
            mime_type=downloaded.content_type or "application/octet-stream",
            size_bytes=downloaded.size_bytes,
        )
