import os
import sys
from pathlib import Path

import pytest

# Ensure repository root is on the import path for local package imports during tests.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from assessment.config import AssessmentConfig  # noqa: E402


@pytest.fixture
def config(monkeypatch: pytest.MonkeyPatch) -> AssessmentConfig:
    """Configuration isolated from the developer's environment and ``.env`` file."""

    for name in list(os.environ):
        if name.startswith("ASSESSMENT_"):
            monkeypatch.delenv(name, raising=False)
    return AssessmentConfig(_env_file=None, contact_email="test@example.com", max_document_bytes=1024)
