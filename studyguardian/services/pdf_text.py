"""Local PDF text extraction, used when PDF_MODE=extract."""

import io
import logging

from pypdf import PdfReader
from pypdf.errors import PdfReadError

from studyguardian.exceptions import InvalidInputError

logger = logging.getLogger(__name__)

PDF_HINT = "Could not read the PDF. Ensure it's not encrypted or corrupted."


def extract_text(data: bytes) -> str:
    """Return the text of every page joined by newlines.

    Raises InvalidInputError when the file cannot be parsed, is encrypted,
    or contains no extractable text (e.g. a scanned PDF).
    """
    try:
        reader = PdfReader(io.BytesIO(data))
        if reader.is_encrypted:
            raise InvalidInputError("Encrypted PDF files are not supported.", hint=PDF_HINT)
        text = "\n".join(page.extract_text() or "" for page in reader.pages)
    except PdfReadError as e:
        logger.warning("PDF parse failed: %s", e)
        raise InvalidInputError(f"Failed to parse pdf: {e}", hint=PDF_HINT) from e

    if not text.strip():
        raise InvalidInputError("No readable text found in PDF.", hint=PDF_HINT)
    return text
