import logging

from fastapi import APIRouter, File, Form, HTTPException, UploadFile
from fastapi.responses import PlainTextResponse

from studyguardian.config import get_settings
from studyguardian.exceptions import StudyGuardianError, UnexpectedError
from studyguardian.models.analysis import AnalysisResult
from studyguardian.services import analysis as analysis_service
from studyguardian.services.export import render_markdown

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["analysis"])


@router.post("/analyze")
def analyze(
    file: UploadFile | None = File(None),
    text: str | None = Form(None),
    language: str | None = Form(None),
) -> AnalysisResult:
    try:
        # One byte past the limit is enough for build_request to reject it
        limit = get_settings().max_upload_mb * 1024 * 1024
        data = file.file.read(limit + 1) if file is not None else None
        mime_type = file.content_type if file is not None else None
        return analysis_service.analyze_upload(
            data=data, mime_type=mime_type, text=text, language=language,
        )
    except StudyGuardianError:
        raise
    except Exception as e:
        logger.exception("API Error")
        raise UnexpectedError(f"Internal Server Error: {e}") from e


def _last_result() -> AnalysisResult:
    result = analysis_service.get_last_result()
    if result is None:
        raise HTTPException(status_code=404, detail="No study guide has been generated yet.")
    return result


@router.get("/results/latest")
def latest_result() -> AnalysisResult:
    return _last_result()


@router.get("/results/latest/markdown", response_class=PlainTextResponse)
def latest_result_markdown() -> PlainTextResponse:
    return PlainTextResponse(render_markdown(_last_result()), media_type="text/markdown")
