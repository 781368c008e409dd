"""Turns form input into an AnalysisRequest and then into Gemini request parts.

Nothing here touches the network.
"""

from google.genai import types

from studyguardian.exceptions import InvalidInputError
from studyguardian.models.analysis import (
    AnalysisRequest,
    InlineDocument,
    Language,
    PlainText,
)
from studyguardian.services import pdf_text
from studyguardian.services.prompts import CONTENT_DELIMITER, build_instructions

PDF_MIME_TYPE = "application/pdf"


def is_supported_mime_type(mime_type: str | None) -> bool:
    if not mime_type:
        return False
    return mime_type == PDF_MIME_TYPE or mime_type.startswith("image/")


def parse_language(value: str | None) -> Language:
    if not value or not value.strip():
        return Language.ENGLISH
    try:
        return Language(value.strip().lower())
    except ValueError:
        allowed = ", ".join(lang.value for lang in Language)
        raise InvalidInputError(f"Unsupported language '{value}'. Use one of: {allowed}.")


def build_request(
    data: bytes | None = None,
    mime_type: str | None = None,
    text: str | None = None,
    language: str | None = None,
    max_bytes: int | None = None,
) -> AnalysisRequest:
    """Validate raw input. Exactly one of file data or text must be present."""
    has_file = bool(data)
    has_text = bool(text and text.strip())

    if not has_file and not has_text:
        raise InvalidInputError("Please provide either a file or text content.")
    if has_file and has_text:
        raise InvalidInputError("Please provide either a file or text content, not both.")

    lang = parse_language(language)

    if has_file:
        if not is_supported_mime_type(mime_type):
            raise InvalidInputError("Unsupported file type. Please upload a PDF or Image.")
        if max_bytes is not None and len(data) > max_bytes:
            raise InvalidInputError(
                f"File is too large. Maximum size is {max_bytes // (1024 * 1024)} MB."
            )
        return AnalysisRequest(
            content=InlineDocument(data=data, mime_type=mime_type),
            language=lang,
        )

    return AnalysisRequest(content=PlainText(text=text), language=lang)


def assemble_parts(request: AnalysisRequest, pdf_mode: str = "inline") -> list[types.Part]:
    """Instruction block first, then the content as inline data or delimited text."""
    parts = [types.Part.from_text(text=build_instructions(request.language))]
    content = request.content

    if isinstance(content, InlineDocument):
        if pdf_mode == "extract" and content.mime_type == PDF_MIME_TYPE:
            extracted = pdf_text.extract_text(content.data)
            parts.append(types.Part.from_text(text=f"{CONTENT_DELIMITER}{extracted}"))
        else:
            # The SDK base64-encodes inline bytes when serializing the request
            parts.append(types.Part.from_bytes(data=content.data, mime_type=content.mime_type))
    else:
        parts.append(types.Part.from_text(text=f"{CONTENT_DELIMITER}{content.text}"))

    return parts
