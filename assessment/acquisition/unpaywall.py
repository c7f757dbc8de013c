"""Open-access location lookup through the Unpaywall REST API."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional

import requests


@dataclass
class OpenAccessLocation:
    """One host Unpaywall reports for a work."""

    url: str
    url_for_pdf: Optional[str]
    host_type: Optional[str] = None

    @classmethod
    def from_payload(cls, data: dict) -> "OpenAccessLocation":
        pdf_url = data.get("url_for_pdf")
        return cls(
            url=data.get("url") or "",
            url_for_pdf=pdf_url if isinstance(pdf_url, str) and pdf_url else None,
            host_type=data.get("host_type"),
        )


def _locations(data: Any) -> List[OpenAccessLocation]:
    if not isinstance(data, list):
        return []
    return [OpenAccessLocation.from_payload(item) for item in data if isinstance(item, dict)]


@dataclass
class UnpaywallRecord:
    """Open-access status and candidate locations for a DOI.

    Unexpected payload shapes produce an empty record (``is_oa`` false, no
    locations) instead of an error: the service is treated as untrusted.
    """

    doi: str
    is_oa: bool = False
    best_oa_location: Optional[OpenAccessLocation] = None
    oa_locations: List[OpenAccessLocation] = field(default_factory=list)
    published_oa_locations: List[OpenAccessLocation] = field(default_factory=list)

    @classmethod
    def from_payload(cls, doi: str, payload: Any) -> "UnpaywallRecord":
        if not isinstance(payload, dict):
            return cls(doi=doi)

        best = payload.get("best_oa_location")
        return cls(
            doi=payload.get("doi") or doi,
            is_oa=payload.get("is_oa") is True,
            best_oa_location=OpenAccessLocation.from_payload(best) if isinstance(best, dict) else None,
            oa_locations=_locations(payload.get("oa_locations")),
            published_oa_locations=_locations(payload.get("published_oa_locations")),
        )

    @property
    def best_pdf_url(self) -> Optional[str]:
        """PDF URL of the best location, only when the work is open access."""

        if self.is_oa and self.best_oa_location:
            return self.best_oa_location.url_for_pdf
        return None

    def alternate_pdf_urls(self) -> List[str]:
        """PDF URLs from the remaining locations, in reported order, deduplicated."""

        best = self.best_pdf_url
        seen: set[str] = {best} if best else set()
        urls: List[str] = []
        for location in [*self.published_oa_locations, *self.oa_locations]:
            pdf_url = location.url_for_pdf
            if not pdf_url or pdf_url in seen:
                continue
            seen.add(pdf_url)
            urls.append(pdf_url)
        return urls


class UnpaywallClient:
    """Looks up a DOI on Unpaywall; the API requires a contact email."""

    BASE_URL = "https://api.unpaywall.org/v2"

    def __init__(
        self,
        email: str,
        *,
        session: Optional[requests.Session] = None,
        base_url: Optional[str] = None,
        timeout: float = 30.0,
    ) -> None:
        if "@" not in email:
            raise ValueError(f"Unpaywall needs a contact email address, got {email!r}")

        self.email = email
        self.base_url = (base_url or self.BASE_URL).rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def get_record(self, doi: str) -> UnpaywallRecord:
        """Return the record for *doi*; HTTP errors propagate as ``requests`` exceptions."""

        response = self.session.get(
            f"{self.base_url}/{doi}",
            params={"email": self.email},
            timeout=self.timeout,
        )
        response.raise_for_status()
        try:
            payload = response.json()
        except ValueError:
            return UnpaywallRecord(doi=doi)
        return UnpaywallRecord.from_payload(doi, payload)
