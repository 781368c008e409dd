import logging

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.applications import Starlette
from starlette.routing import Mount

from studyguardian.config import get_settings
from studyguardian.exceptions import InvalidInputError, StudyGuardianError
from studyguardian.mcp_server import mcp
from studyguardian.models.common import ErrorResponse, StatusResponse
from studyguardian.routers.analysis import router as analysis_router
from studyguardian.services.gemini import get_key_ring


# --- FastAPI app ---

api = FastAPI(title="StudyGuardian", version="0.1.0")
api.include_router(analysis_router)


@api.get("/api/status")
def api_status() -> StatusResponse:
    settings = get_settings()
    key_count = len(get_key_ring())
    return StatusResponse(
        models=settings.gemini_models,
        api_keys_configured=key_count,
        pdf_mode=settings.pdf_mode,
        ready=key_count > 0 and bool(settings.gemini_models),
    )


# --- Exception handlers ---

def _error_response(status_code: int, exc: StudyGuardianError) -> JSONResponse:
    body = ErrorResponse(error=str(exc), error_code=exc.error_code, hint=exc.hint)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


@api.exception_handler(InvalidInputError)
async def invalid_input_handler(request: Request, exc: InvalidInputError):
    return _error_response(400, exc)


@api.exception_handler(StudyGuardianError)
async def analysis_error_handler(request: Request, exc: StudyGuardianError):
    return _error_response(500, exc)


# --- Starlette root app ---

mcp_app = mcp.http_app(path="/", stateless_http=True)

app = Starlette(
    routes=[
        Mount("/mcp", app=mcp_app),
        Mount("/", app=api),
    ],
    lifespan=mcp_app.lifespan,
)


def run():
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    get_key_ring()  # warn about missing keys at startup
    uvicorn.run(
        "studyguardian.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
