from fastmcp import FastMCP

from studyguardian.exceptions import (
    AuthenticationError,
    InvalidInputError,
    MalformedResponseError,
    RateLimitError,
    StudyGuardianError,
    UpstreamError,
)
from studyguardian.services import analysis as analysis_service

mcp = FastMCP("StudyGuardian")


def _handle_mcp_error(e: Exception) -> dict:
    """Convert exceptions to agent-friendly error dicts."""
    if isinstance(e, InvalidInputError):
        return {"error": "invalid_input", "message": str(e), "action": "Provide non-empty text and a supported language"}
    if isinstance(e, AuthenticationError):
        return {"error": "auth_error", "message": str(e), "action": "Ask user to set GEMINI_API_KEY in .env"}
    if isinstance(e, RateLimitError):
        return {"error": "rate_limit", "message": str(e), "action": "Wait a moment and retry"}
    if isinstance(e, UpstreamError):
        return {"error": "upstream_error", "message": str(e)}
    if isinstance(e, MalformedResponseError):
        return {"error": "invalid_response", "message": str(e), "action": "Retry the analysis"}
    return {"error": "unknown_error", "message": str(e)}


@mcp.tool
def analyze_text(text: str, language: str = "english") -> dict:
    """Generate a study guide (summary, 5 exam questions, simple explanation, 3-day study plan)
    from lecture notes or any pasted study material. language is 'english' or 'arabic'."""
    try:
        result = analysis_service.analyze_upload(text=text, language=language)
        return result.model_dump(by_alias=True)
    except StudyGuardianError as e:
        return _handle_mcp_error(e)


@mcp.tool
def last_result() -> dict:
    """Return the most recently generated study guide, if any."""
    result = analysis_service.get_last_result()
    if result is None:
        return {"error": "not_found", "message": "No study guide has been generated yet."}
    return result.model_dump(by_alias=True)
