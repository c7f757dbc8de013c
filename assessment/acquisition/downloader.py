"""Single-attempt document downloader with size limits."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

import requests

from assessment.exceptions import AcquisitionError

ContentTypePredicate = Callable[[Optional[str]], bool]


class DownloadError(AcquisitionError):
    """Raised when a document cannot be safely downloaded."""


class DocumentTooLargeError(DownloadError):
    """Raised when a payload exceeds the configured size cap."""


@dataclass
class DownloadedDocument:
    """Downloaded payload and the response metadata used downstream."""

    content: bytes
    content_type: Optional[str]
    url: str

    @property
    def size_bytes(self) -> int:
        return len(self.content)


def accepts_pdf_or_text(content_type: Optional[str]) -> bool:
    """Content-type gate used for generic links: PDF or any text type."""

    if not content_type:
        return False
    lowered = content_type.lower()
    return "pdf" in lowered or "text" in lowered


class DocumentDownloader:
    """Stream a document with one attempt and a hard size cap.

    A failed attempt is terminal: callers fall through to their next source
    rather than retrying the same URL.
    """

    def __init__(
        self,
        *,
        session: Optional[requests.Session] = None,
        timeout: float = 30.0,
        max_size: int = 50 * 1024 * 1024,
        chunk_size: int = 64 * 1024,
    ) -> None:
        if max_size <= 0:
            raise ValueError("max_size must be positive")

        self.session = session or requests.Session()
        self.timeout = timeout
        self.max_size = max_size
        self.chunk_size = chunk_size

    def fetch(self, url: str, *, accept: Optional[ContentTypePredicate] = None) -> DownloadedDocument:
        """Download *url*, optionally rejecting content types *accept* refuses."""

        try:
            response = self.session.get(url, stream=True, timeout=self.timeout, allow_redirects=True)
        except requests.RequestException as exc:
            raise DownloadError(f"Request failed for {url}: {exc}") from exc

        try:
            if not response.ok:
                raise DownloadError(f"Unexpected status {response.status_code} for {url}")

            content_type = response.headers.get("Content-Type")
            if accept is not None and not accept(content_type):
                raise DownloadError(f"Unsupported content type {content_type!r} for {url}")

            content = self._consume_response(response)
        except requests.RequestException as exc:
            raise DownloadError(f"Download interrupted for {url}: {exc}") from exc
        finally:
            response.close()

        return DownloadedDocument(content=content, content_type=content_type, url=url)

    def _consume_response(self, response: requests.Response) -> bytes:
        content_length_header = response.headers.get("Content-Length")
        if content_length_header and content_length_header.isdigit():
            if int(content_length_header) > self.max_size:
                raise DocumentTooLargeError("Document exceeds maximum allowed size")

        chunks: list[bytes] = []
        total = 0
        for chunk in response.iter_content(chunk_size=self.chunk_size):
            if not chunk:
                continue
            total += len(chunk)
            if total > self.max_size:
                raise DocumentTooLargeError("Document exceeds maximum allowed size")
            chunks.append(chunk)

        payload = b"".join(chunks)
        if not payload:
            raise DownloadError("Empty response body")
        return payload
