import json

import pytest
from unittest.mock import MagicMock

from fastapi.testclient import TestClient

from studyguardian.config import get_settings
from studyguardian.services.gemini import get_key_ring


# --- Canned Gemini replies ---

STUDY_GUIDE = {
    "summary": "- Mitosis splits one cell into two identical daughter cells.",
    "examQuestions": [
        "What are the phases of mitosis?",
        "What happens during anaphase?",
        "How does mitosis differ from meiosis?",
        "Why is the spindle apparatus important?",
        "What is cytokinesis?",
    ],
    "explanation": "Think of a cell photocopying itself, then splitting in half.",
    "studyPlan": "- Day 1: phases\n- Day 2: diagrams\n- Day 3: practice questions",
}

STUDY_GUIDE_JSON = json.dumps(STUDY_GUIDE)


def gemini_response(text):
    return MagicMock(text=text)


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """Fresh settings per test: one fake key, one model, cache under tmp_path."""
    monkeypatch.setenv("GEMINI_API_KEY", "test-key")
    monkeypatch.setenv("GEMINI_API_KEY_BACKUP", "")
    monkeypatch.setenv("GEMINI_MODELS", '["gemini-2.5-flash"]')
    monkeypatch.setenv("PDF_MODE", "inline")
    monkeypatch.setenv("CACHE_FILE", str(tmp_path / "cache.json"))
    get_settings.cache_clear()
    get_key_ring.cache_clear()
    yield get_settings()
    get_settings.cache_clear()
    get_key_ring.cache_clear()


@pytest.fixture
def mock_genai_class(mocker):
    return mocker.patch("studyguardian.services.gemini.genai.Client")


@pytest.fixture
def mock_genai_client(mock_genai_class):
    """Client instance returned for every key; generate_content replies with STUDY_GUIDE_JSON."""
    client = mock_genai_class.return_value
    client.models.generate_content.return_value = gemini_response(STUDY_GUIDE_JSON)
    return client


@pytest.fixture
def api_client():
    """FastAPI TestClient for router tests."""
    from studyguardian.main import api
    return TestClient(api)
