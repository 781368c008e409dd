"""End-to-end analysis: assemble the request, call Gemini, validate, cache."""

import logging

from studyguardian.config import get_settings
from studyguardian.models.analysis import AnalysisRequest, AnalysisResult, Language
from studyguardian.services import gemini
from studyguardian.services.assembler import assemble_parts, build_request
from studyguardian.services.result_cache import get_result_cache
from studyguardian.services.validator import parse_result

logger = logging.getLogger(__name__)


def analyze(request: AnalysisRequest) -> AnalysisResult:
    settings = get_settings()
    parts = assemble_parts(request, pdf_mode=settings.pdf_mode)
    reply = gemini.invoke(
        parts,
        models=settings.gemini_models,
        key_ring=gemini.get_key_ring(),
        temperature=settings.temperature,
    )
    result = parse_result(reply.text, used_model=reply.model)

    cache = get_result_cache()
    try:
        cache.save(result, request.language)
    except OSError as e:
        logger.warning("Could not write result cache %s: %s", cache.path, e)
    return result


def analyze_upload(
    data: bytes | None = None,
    mime_type: str | None = None,
    text: str | None = None,
    language: str | None = None,
) -> AnalysisResult:
    """Validate raw form input, then run analyze()."""
    max_bytes = get_settings().max_upload_mb * 1024 * 1024
    request = build_request(data, mime_type, text, language, max_bytes=max_bytes)
    return analyze(request)


def get_last_result() -> AnalysisResult | None:
    return get_result_cache().load_result()


def get_language() -> Language:
    return get_result_cache().load_language()
