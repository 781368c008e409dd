"""Gemini invocation with ordered model fallback and round-robin API keys."""

import logging
import threading
from dataclasses import dataclass
from functools import lru_cache
from typing import Callable, Union

from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from studyguardian.config import get_settings
from studyguardian.exceptions import (
    AuthenticationError,
    RateLimitError,
    UpstreamError,
)
from studyguardian.models.analysis import ModelReply
from studyguardian.services.pdf_text import PDF_HINT

logger = logging.getLogger(__name__)

NO_RESPONSE_MESSAGE = "AI model failed to respond."

# Lecture content is never filtered: BLOCK_NONE for every category
HARM_CATEGORIES = (
    types.HarmCategory.HARM_CATEGORY_HARASSMENT,
    types.HarmCategory.HARM_CATEGORY_HATE_SPEECH,
    types.HarmCategory.HARM_CATEGORY_SEXUALLY_EXPLICIT,
    types.HarmCategory.HARM_CATEGORY_DANGEROUS_CONTENT,
)


class KeyRing:
    """Round-robin over the configured Gemini API keys."""

    def __init__(self, keys: list[str]):
        self.keys = [k for k in keys if k]
        self._index = 0
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self.keys)

    def next_key(self) -> str:
        if not self.keys:
            raise AuthenticationError(
                "Gemini API key not configured. Get one at "
                "https://aistudio.google.com/apikey and set GEMINI_API_KEY in .env"
            )
        with self._lock:
            index = self._index
            self._index = (index + 1) % len(self.keys)
        logger.debug("Using API key index %d (total keys: %d)", index, len(self.keys))
        return self.keys[index]


@lru_cache
def get_key_ring() -> KeyRing:
    keys = get_settings().gemini_api_keys
    if not keys:
        logger.warning("No Gemini API keys found; every analysis request will fail.")
    return KeyRing(keys)


@dataclass(frozen=True)
class Success:
    text: str
    model: str


@dataclass(frozen=True)
class Failure:
    model: str
    error: Exception


Attempt = Union[Success, Failure]


def safety_settings() -> list[types.SafetySetting]:
    return [
        types.SafetySetting(category=category, threshold=types.HarmBlockThreshold.BLOCK_NONE)
        for category in HARM_CATEGORIES
    ]


def _generation_config(temperature: float) -> types.GenerateContentConfig:
    return types.GenerateContentConfig(
        response_mime_type="application/json",
        temperature=temperature,
        safety_settings=safety_settings(),
    )


def _attempt(
    model: str,
    parts: list[types.Part],
    key_ring: KeyRing,
    temperature: float,
    client_factory: Callable[..., genai.Client],
) -> Attempt:
    try:
        client = client_factory(api_key=key_ring.next_key())
        response = client.models.generate_content(
            model=model,
            contents=[types.Content(role="user", parts=parts)],
            config=_generation_config(temperature),
        )
        text = response.text
        if not text:
            raise UpstreamError(f"Model {model} returned an empty response.")
        return Success(text=text, model=model)
    except AuthenticationError:
        raise
    except Exception as e:
        logger.error("Failed with %s: %s", model, e)
        return Failure(model=model, error=e)


def _to_upstream_error(failure: Failure | None) -> UpstreamError:
    if failure is None:
        return UpstreamError(NO_RESPONSE_MESSAGE)
    error = failure.error
    if isinstance(error, UpstreamError):
        return error
    message = str(error) or NO_RESPONSE_MESSAGE
    hint = PDF_HINT if "pdf" in message.lower() else None
    if isinstance(error, genai_errors.APIError):
        if error.code == 429:
            return RateLimitError(message, status_code=429)
        return UpstreamError(message, status_code=error.code, hint=hint)
    return UpstreamError(message, hint=hint)


def invoke(
    parts: list[types.Part],
    models: list[str],
    key_ring: KeyRing,
    temperature: float = 0.7,
    client_factory: Callable[..., genai.Client] | None = None,
) -> ModelReply:
    """Try each model in order and return the first successful reply.

    Candidates are tried one at a time. When all of them fail, the error from
    the first candidate is raised; later errors are only logged.
    """
    if not len(key_ring):
        key_ring.next_key()  # raises AuthenticationError
    factory = client_factory or genai.Client

    logger.info("Starting analysis with %d candidate model(s)", len(models))
    first_failure: Failure | None = None
    for model in models:
        logger.info("Attempting analysis with model: %s", model)
        attempt = _attempt(model, parts, key_ring, temperature, factory)
        if isinstance(attempt, Success):
            logger.info("Success! Connected to: %s", model)
            return ModelReply(text=attempt.text, model=attempt.model)
        if first_failure is None:
            first_failure = attempt

    logger.error("Analysis failed on all candidate models.")
    raise _to_upstream_error(first_failure)
