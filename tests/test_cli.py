import json
from pathlib import Path

import pytest
import responses

from assessment.cli import main


def _read_output(capsys: pytest.CaptureFixture[str]) -> dict:
    return json.loads(capsys.readouterr().out)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("ASSESSMENT_CONTACT_EMAIL", "test@example.com")
    monkeypatch.delenv("ASSESSMENT_STRICT_WEIGHTS", raising=False)


def test_framework_command_prints_weights(capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = main(["framework", "article", "medical"])

    payload = _read_output(capsys)
    assert exit_code == 0
    assert payload["weights"]["methodologicalRigor"] == 2.5
    assert payload["weights"]["statisticalValidity"] == 1.5
    assert payload["maxTotalScore"] == 9.0
    assert "Patient selection bias" in payload["biasPriorities"]


def test_classify_command_reads_text_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    document = tmp_path / "paper.txt"
    document.write_text(
        "Introduction\n\nWe describe our method and report the results for each patient in the clinical trial.",
        encoding="utf-8",
    )

    exit_code = main(["classify", str(document)])

    payload = _read_output(capsys)
    assert exit_code == 0
    assert payload["documentType"] == "article"
    assert payload["field"] == "medical"
    assert payload["fieldScores"]["medical"] == 4


def test_extract_command_reports_empty_text(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    document = tmp_path / "scan.png"
    document.write_bytes(b"\x89PNG\r\n")

    exit_code = main(["extract", str(document)])

    payload = _read_output(capsys)
    assert exit_code == 1
    assert payload["characters"] == 0


def test_validate_command_caps_total(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    reply = tmp_path / "reply.txt"
    reply.write_text(
        'Here is the analysis:\n{"credibility": {"totalScore": 9.5, "methodologicalRigor": {"score": 3}}}',
        encoding="utf-8",
    )

    exit_code = main(["validate", str(reply), "article", "medical"])

    payload = _read_output(capsys)
    assert exit_code == 0
    assert payload["totalScore"] == 9.0
    assert payload["methodologicalRigor"]["score"] == 2.5
    assert payload["rating"] == "Exemplary"
    assert payload["normalized"] == "10.0/10"


def test_validate_command_rejects_unparseable_reply(tmp_path: Path) -> None:
    reply = tmp_path / "reply.txt"
    reply.write_text("no json here", encoding="utf-8")

    assert main(["validate", str(reply), "essay", "humanities"]) == 1


def test_fetch_without_identifiers_is_usage_error() -> None:
    assert main(["fetch"]) == 2


@responses.activate
def test_fetch_writes_preprint(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    responses.add(
        responses.GET,
        "https://arxiv.org/pdf/2101.00001.pdf",
        body=b"%PDF-1.4 sample",
        status=200,
        content_type="application/pdf",
    )
    target = tmp_path / "out.pdf"

    exit_code = main(["fetch", "--preprint-id", "2101.00001", "--output", str(target)])

    payload = _read_output(capsys)
    assert exit_code == 0
    assert payload["document"]["source"]["type"] == "preprint-server"
    assert target.read_bytes() == b"%PDF-1.4 sample"
