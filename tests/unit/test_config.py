import pytest
from pydantic import ValidationError

from assessment.config import DEFAULT_MAX_DOCUMENT_BYTES, AssessmentConfig, load_config
from assessment.exceptions import ConfigError


def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    import os

    for name in list(os.environ):
        if name.startswith("ASSESSMENT_"):
            monkeypatch.delenv(name, raising=False)


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    _clean_env(monkeypatch)

    config = AssessmentConfig(_env_file=None, contact_email="desk@example.org")

    assert config.request_timeout_s == 30.0
    assert config.max_document_bytes == DEFAULT_MAX_DOCUMENT_BYTES == 50 * 1024 * 1024
    assert config.strict_weights is False
    assert config.max_context_tokens == 10000
    assert config.client_identifier == "Research-Analysis-Platform (desk@example.org)"


def test_environment_prefix(monkeypatch: pytest.MonkeyPatch) -> None:
    _clean_env(monkeypatch)
    monkeypatch.setenv("ASSESSMENT_CONTACT_EMAIL", "Research Desk <desk@example.org>")
    monkeypatch.setenv("ASSESSMENT_STRICT_WEIGHTS", "true")
    monkeypatch.setenv("ASSESSMENT_REQUEST_TIMEOUT_S", "5")

    config = AssessmentConfig(_env_file=None)

    assert config.contact_email == "desk@example.org"
    assert config.strict_weights is True
    assert config.request_timeout_s == 5.0


def test_invalid_contact_email_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    _clean_env(monkeypatch)

    with pytest.raises(ValidationError):
        AssessmentConfig(_env_file=None, contact_email="nobody")


@pytest.mark.parametrize("field", ["request_timeout_s", "max_document_bytes", "max_context_tokens"])
def test_non_positive_limits_rejected(monkeypatch: pytest.MonkeyPatch, field) -> None:
    _clean_env(monkeypatch)

    with pytest.raises(ValidationError):
        AssessmentConfig(_env_file=None, **{field: 0})


def test_session_carries_client_identifier(config: AssessmentConfig) -> None:
    session = config.build_session()

    assert session.headers["User-Agent"] == "Research-Analysis-Platform (test@example.com)"


def test_load_config_wraps_validation_errors(monkeypatch: pytest.MonkeyPatch) -> None:
    _clean_env(monkeypatch)
    monkeypatch.setenv("ASSESSMENT_REQUEST_TIMEOUT_S", "-1")

    with pytest.raises(ConfigError, match="Invalid assessment configuration"):
        load_config(_env_file=None)


def test_contact_email_is_required(monkeypatch: pytest.MonkeyPatch) -> None:
    _clean_env(monkeypatch)

    with pytest.raises(ConfigError, match="contact_email"):
        load_config(_env_file=None)
