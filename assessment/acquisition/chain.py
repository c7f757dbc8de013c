"""Ordered, first-success-wins document acquisition."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence

import requests

from assessment.acquisition.downloader import DocumentDownloader, DocumentTooLargeError, DownloadError
from assessment.acquisition.strategies import (
    AcquisitionStrategy,
    BibliographicPdfStrategy,
    DirectLinkStrategy,
    PreprintStrategy,
    UnpaywallStrategy,
)
from assessment.acquisition.unpaywall import UnpaywallClient
from assessment.config import DEFAULT_MAX_DOCUMENT_BYTES, AssessmentConfig, load_config
from assessment.core.models import DocumentIdentifiers, FetchedDocument

logger = logging.getLogger(__name__)


class AttemptStatus(str, Enum):
    SKIPPED = "skipped"
    FAILED = "failed"
    OVERSIZED = "oversized"
    SUCCEEDED = "succeeded"


@dataclass(frozen=True)
class StrategyAttempt:
    strategy: str
    status: AttemptStatus
    detail: Optional[str] = None


@dataclass
class AcquisitionReport:
    """Outcome of one acquisition run.

    ``attempts`` distinguishes strategies that did not apply (``skipped``)
    from those that were tried and failed, which a bare ``None`` cannot.
    """

    document: Optional[FetchedDocument] = None
    attempts: List[StrategyAttempt] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return self.document is not None


class AcquisitionChain:
    """Try each strategy sequentially and keep the first document fetched."""

    def __init__(
        self,
        strategies: Sequence[AcquisitionStrategy],
        *,
        size_cap_bytes: int = DEFAULT_MAX_DOCUMENT_BYTES,
    ) -> None:
        if size_cap_bytes <= 0:
            raise ValueError("size_cap_bytes must be positive")
        self.strategies = list(strategies)
        self.size_cap_bytes = size_cap_bytes

    @classmethod
    def from_config(
        cls,
        config: Optional[AssessmentConfig] = None,
        *,
        session: Optional[requests.Session] = None,
        size_cap_bytes: Optional[int] = None,
    ) -> "AcquisitionChain":
        config = config or load_config()
        session = config.build_session(session)
        cap = size_cap_bytes or config.max_document_bytes
        downloader = DocumentDownloader(session=session, timeout=config.request_timeout_s, max_size=cap)

        unpaywall_client = UnpaywallClient(
            config.contact_email,
            session=session,
            base_url=config.unpaywall_base_url,
            timeout=config.request_timeout_s,
        )

        strategies: List[AcquisitionStrategy] = [
            UnpaywallStrategy(unpaywall_client, downloader),
            BibliographicPdfStrategy(downloader),
            PreprintStrategy(downloader, base_url=config.arxiv_pdf_base_url),
            DirectLinkStrategy(downloader),
            DirectLinkStrategy(downloader, pdf_links=True),
        ]
        return cls(strategies, size_cap_bytes=cap)

    def attempt(self, identifiers: DocumentIdentifiers) -> AcquisitionReport:
        report = AcquisitionReport()
        for strategy in self.strategies:
            try:
                document = strategy.fetch(identifiers)
            except DocumentTooLargeError as exc:
                logger.warning("Document from %s too large, skipping: %s", strategy.name, exc)
                report.attempts.append(StrategyAttempt(strategy.name, AttemptStatus.OVERSIZED, str(exc)))
                return report
            except DownloadError as exc:
                logger.debug("Strategy %s failed: %s", strategy.name, exc)
                report.attempts.append(StrategyAttempt(strategy.name, AttemptStatus.FAILED, str(exc)))
                continue

            if document is None:
                report.attempts.append(StrategyAttempt(strategy.name, AttemptStatus.SKIPPED))
                continue

            if document.size_bytes > self.size_cap_bytes:
                logger.warning(
                    "Document too large (%d bytes > %d), skipping", document.size_bytes, self.size_cap_bytes
                )
                report.attempts.append(
                    StrategyAttempt(strategy.name, AttemptStatus.OVERSIZED, f"{document.size_bytes} bytes")
                )
                return report

            logger.info(
                "Fetched document (%d bytes) from %s via %s",
                document.size_bytes,
                document.source.type.value,
                strategy.name,
            )
            report.attempts.append(StrategyAttempt(strategy.name, AttemptStatus.SUCCEEDED, document.source.url))
            report.document = document
            return report

        logger.info("No strategy produced a document; falling back to abstract-only analysis")
        return report

    def acquire(self, identifiers: DocumentIdentifiers) -> Optional[FetchedDocument]:
        return self.attempt(identifiers).document


def acquire(
    identifiers: DocumentIdentifiers,
    size_cap_bytes: int = DEFAULT_MAX_DOCUMENT_BYTES,
    *,
    config: Optional[AssessmentConfig] = None,
    session: Optional[requests.Session] = None,
) -> Optional[FetchedDocument]:
    """Fetch the source document for *identifiers*, or ``None``.

    Never raises for network or payload problems; ``None`` tells the caller
    to continue with abstract-only analysis.
    """

    chain = AcquisitionChain.from_config(config, session=session, size_cap_bytes=size_cap_bytes)
    return chain.acquire(identifiers)
