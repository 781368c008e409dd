from pydantic import BaseModel


class ErrorResponse(BaseModel):
    error: str
    error_code: str
    hint: str | None = None


class StatusResponse(BaseModel):
    models: list[str]
    api_keys_configured: int
    pdf_mode: str
    ready: bool
