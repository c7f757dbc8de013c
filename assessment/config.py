"""Application configuration for the assessment pipeline."""

from typing import Optional

from email.utils import parseaddr

import requests
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from assessment.exceptions import ConfigError

DEFAULT_USER_AGENT = "Research-Analysis-Platform"
DEFAULT_MAX_DOCUMENT_BYTES = 50 * 1024 * 1024


class AssessmentConfig(BaseSettings):  # type: ignore[misc]
    """Settings controlling outbound requests and scoring policy."""

    contact_email: str = Field(..., description="Contact email sent to Unpaywall and in the User-Agent")
    user_agent: str = Field(DEFAULT_USER_AGENT, description="Client identifier for HTTP requests")
    request_timeout_s: float = Field(
        30.0, description="Timeout (in seconds) for every outbound HTTP request"
    )
    max_document_bytes: int = Field(
        DEFAULT_MAX_DOCUMENT_BYTES, description="Fetched documents larger than this are discarded"
    )
    unpaywall_base_url: str = Field("https://api.unpaywall.org/v2", description="Unpaywall API root")
    arxiv_pdf_base_url: str = Field("https://arxiv.org/pdf", description="arXiv PDF root")
    strict_weights: bool = Field(
        False, description="Raise instead of logging when framework weights exceed 10.0"
    )
    max_context_tokens: int = Field(
        10000, description="Token budget for chunks forwarded to the language model"
    )

    model_config = SettingsConfigDict(env_prefix="ASSESSMENT_", env_file=".env", extra="ignore")

    @field_validator("contact_email")
    @classmethod
    def validate_contact_email(cls, value: str) -> str:
        name, addr = parseaddr(value)
        if "@" not in addr:
            raise ValueError("contact_email must contain a valid email address")
        return addr

    @field_validator("request_timeout_s", "max_document_bytes", "max_context_tokens")
    @classmethod
    def validate_positive(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("value must be positive")
        return value

    @property
    def client_identifier(self) -> str:
        """User-Agent string carrying the contact email."""

        return f"{self.user_agent} ({self.contact_email})"

    def build_session(self, session: Optional[requests.Session] = None) -> requests.Session:
        """Return a :class:`requests.Session` carrying the client identifier."""

        session = session or requests.Session()
        session.headers["User-Agent"] = self.client_identifier
        return session


def load_config(**overrides: object) -> AssessmentConfig:
    """Build :class:`AssessmentConfig` from the environment plus *overrides*."""

    try:
        return AssessmentConfig(**overrides)
    except ValidationError as exc:
        raise ConfigError(f"Invalid assessment configuration: {exc}") from exc
