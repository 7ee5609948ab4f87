# tests/conftest.py
import pytest

from app.config import settings
from models.extraction_models import ExtractionResult
from services.textrazor_client import AdapterUnavailable


@pytest.fixture(autouse=True)
def no_textrazor_key(monkeypatch):
    # Keep every test offline, whatever the local .env says.
    monkeypatch.setattr(settings, "textrazor_api_key", None)
    monkeypatch.setattr(settings, "environment", "development")


@pytest.fixture
def failing_extractor():
    calls = []

    def _extract(text):
        calls.append(text)
        raise AdapterUnavailable("service down")

    _extract.calls = calls
    return _extract


@pytest.fixture
def make_extractor():
    def _factory(payload):
        result = ExtractionResult.model_validate(payload)

        def _extract(text):
            return result

        return _extract

    return _factory


@pytest.fixture
def sample_payload():
    return {
        "entities": [
            {
                "entityId": "Python (programming language)",
                "matchedText": "Python",
                "relevanceScore": 0.92,
                "type": ["ProgrammingLanguage", "Software"],
                "frequency": 3,
            },
            {
                "entityId": "Guido van Rossum",
                "matchedText": "Guido",
                "relevanceScore": 0.7,
                "type": [],
            },
        ],
        "topics": [
            {"label": "Computer programming", "score": 0.81},
        ],
        "phrases": [
            {"relevanceScore": 0.4, "words": [{"token": "dynamic"}, {"token": "typing"}]},
        ],
    }
