"""Document acquisition: Unpaywall, bibliographic links, arXiv, direct URLs."""

from .chain import AcquisitionChain, AcquisitionReport, AttemptStatus, StrategyAttempt, acquire
from .downloader import DocumentDownloader, DocumentTooLargeError, DownloadError
from .unpaywall import OpenAccessLocation, UnpaywallClient, UnpaywallRecord

__all__ = [
    "AcquisitionChain",
    "AcquisitionReport",
    "AttemptStatus",
    "DocumentDownloader",
    "DocumentTooLargeError",
    "DownloadError",
    "OpenAccessLocation",
    "StrategyAttempt",
    "UnpaywallClient",
    "UnpaywallRecord",
    "acquire",
]
