"""Parsing of the raw language-model reply."""

from __future__ import annotations

import json
import logging
from typing import Any, Dict

from assessment.exceptions import InvalidAnalysisResponse

logger = logging.getLogger(__name__)

PARSE_FAILURE = "Failed to parse analysis response"


def extract_json_payload(text: str) -> Dict[str, Any]:
    """Return the JSON object spanning the first ``{`` to the last ``}`` of *text*.

    Models sometimes wrap the object in prose or code fences; anything outside
    the outermost braces is ignored.
    """

    start = text.find("{") if text else -1
    end = text.rfind("}") if text else -1
    if start == -1 or end < start:
        logger.error("Could not find a JSON object in analysis response: %.200s", text)
        raise InvalidAnalysisResponse(PARSE_FAILURE)

    try:
        payload = json.loads(text[start : end + 1])
    except json.JSONDecodeError as exc:
        logger.error("Analysis response is not valid JSON: %s", exc)
        raise InvalidAnalysisResponse(PARSE_FAILURE) from exc

    if not isinstance(payload, dict):
        raise InvalidAnalysisResponse(PARSE_FAILURE)
    return payload
