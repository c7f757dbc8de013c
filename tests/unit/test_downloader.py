import pytest
import requests
import responses

from assessment.acquisition.downloader import (
    DocumentDownloader,
    DocumentTooLargeError,
    DownloadError,
    accepts_pdf_or_text,
)


@responses.activate
def test_fetch_returns_bytes_and_content_type() -> None:
    url = "http://example.com/sample.pdf"
    body = b"%PDF-1.4\nexample content"
    responses.add(
        responses.GET,
        url,
        body=body,
        status=200,
        headers={"Content-Type": "application/pdf", "Content-Length": str(len(body))},
    )

    result = DocumentDownloader(max_size=1024).fetch(url)

    assert result.content == body
    assert result.content_type == "application/pdf"
    assert result.size_bytes == len(body)
    assert result.url == url


@responses.activate
def test_fetch_rejects_content_type_refused_by_predicate() -> None:
    url = "http://example.com/landing"
    responses.add(responses.GET, url, body=b"<html>oops</html>", status=200, headers={"Content-Type": "image/png"})

    with pytest.raises(DownloadError):
        DocumentDownloader(max_size=1024).fetch(url, accept=accepts_pdf_or_text)


@responses.activate
def test_fetch_rejects_when_content_length_exceeds_max() -> None:
    url = "http://example.com/too-large.pdf"
    body = b"%PDF-1.4\n" + b"0" * 2048
    responses.add(
        responses.GET,
        url,
        body=body,
        status=200,
        headers={"Content-Type": "application/pdf", "Content-Length": str(len(body))},
    )

    with pytest.raises(DocumentTooLargeError):
        DocumentDownloader(max_size=1024).fetch(url)


@responses.activate
def test_fetch_rejects_streamed_body_over_max_without_length_header() -> None:
    url = "http://example.com/streamed.pdf"

    def callback(request):
        return 200, {"Content-Type": "application/pdf"}, b"0" * 4096

    responses.add_callback(responses.GET, url, callback=callback)

    with pytest.raises(DocumentTooLargeError):
        DocumentDownloader(max_size=1024, chunk_size=256).fetch(url)


@responses.activate
def test_fetch_makes_a_single_attempt_on_server_error() -> None:
    url = "http://example.com/flaky.pdf"
    responses.add(responses.GET, url, status=500)

    with pytest.raises(DownloadError):
        DocumentDownloader(max_size=1024).fetch(url)

    assert len(responses.calls) == 1


@responses.activate
def test_fetch_wraps_transport_errors() -> None:
    url = "http://example.com/down.pdf"
    responses.add(responses.GET, url, body=requests.ConnectionError("refused"))

    with pytest.raises(DownloadError) as excinfo:
        DocumentDownloader().fetch(url)

    assert not isinstance(excinfo.value, DocumentTooLargeError)


@responses.activate
def test_fetch_rejects_empty_body() -> None:
    url = "http://example.com/empty.pdf"
    responses.add(responses.GET, url, body=b"", status=200, headers={"Content-Type": "application/pdf"})

    with pytest.raises(DownloadError):
        DocumentDownloader().fetch(url)


def test_downloader_requires_positive_size_cap() -> None:
    with pytest.raises(ValueError):
        DocumentDownloader(max_size=0)


@pytest.mark.parametrize(
    "content_type, accepted",
    [
        ("application/pdf", True),
        ("text/plain; charset=utf-8", True),
        ("text/html", True),
        ("image/png", False),
        (None, False),
    ],
)
def test_accepts_pdf_or_text(content_type, accepted) -> None:
    assert accepts_pdf_or_text(content_type) is accepted
