import json
import logging
import re

from pydantic import ValidationError

from studyguardian.exceptions import MalformedResponseError
from studyguardian.models.analysis import AnalysisResult

logger = logging.getLogger(__name__)

INVALID_FORMAT_MESSAGE = "AI response was not in valid JSON format."

_FENCE_RE = re.compile(r"^```(?:json)?\s*\n?(.*?)\n?```$", re.DOTALL | re.IGNORECASE)


def _strip_code_fence(text: str) -> str:
    text = text.strip()
    match = _FENCE_RE.match(text)
    return match.group(1).strip() if match else text


def parse_result(text: str, used_model: str) -> AnalysisResult:
    """Parse the model's raw reply into an AnalysisResult tagged with the model id.

    Only the top-level shape is checked; missing fields fall back to empty values.
    """
    try:
        data = json.loads(_strip_code_fence(text))
    except json.JSONDecodeError as e:
        logger.error("Failed to parse Gemini JSON from %s: %s", used_model, text)
        raise MalformedResponseError(INVALID_FORMAT_MESSAGE) from e

    if not isinstance(data, dict):
        logger.error("Gemini JSON from %s is not an object: %s", used_model, text)
        raise MalformedResponseError(INVALID_FORMAT_MESSAGE)

    data["usedModel"] = used_model
    try:
        return AnalysisResult.model_validate(data)
    except ValidationError as e:
        logger.error("Gemini JSON from %s has unusable fields: %s", used_model, e)
        raise MalformedResponseError(INVALID_FORMAT_MESSAGE) from e
