"""Pytest configuration and fixtures."""

from unittest.mock import MagicMock, patch

from fastapi.testclient import TestClient
import pytest

from app.core.config import Settings, get_settings
from app.main import create_app
from app.models.srt import SRTEntry

# ============================================================================
# Settings / Client Fixtures
# ============================================================================


@pytest.fixture
def test_settings():
    """Settings with a Google API key and no service authentication."""
    return Settings(google_api_key="test_api_key", api_key=None, default_max_chars=100)


@pytest.fixture
def unconfigured_settings():
    """Settings without a Google API key."""
    return Settings(google_api_key=None, api_key=None, default_max_chars=100)


def _make_client(settings: Settings) -> TestClient:
    app = create_app()
    app.dependency_overrides[get_settings] = lambda: settings
    return TestClient(app)


@pytest.fixture
def client(test_settings):
    """Create test client without authentication."""
    return _make_client(test_settings)


@pytest.fixture
def client_unconfigured(unconfigured_settings):
    """Create test client whose settings lack a Google API key."""
    return _make_client(unconfigured_settings)


# ============================================================================
# Authentication/Security Fixtures
# ============================================================================


@pytest.fixture
def client_no_auth(test_settings):
    """Client with no API key configured."""
    with patch("app.core.security.settings") as mock_settings:
        mock_settings.api_key = None
        yield _make_client(test_settings)


@pytest.fixture
def client_with_auth(test_settings):
    """Client with API key configured (no default headers)."""
    with patch("app.core.security.settings") as mock_settings:
        mock_settings.api_key = "test_secret_key_12345"
        yield _make_client(test_settings)


# ============================================================================
# Sample Data Fixtures
# ============================================================================


@pytest.fixture
def sample_srt_content():
    """Sample valid SRT content."""
    return """1
00:00:01,000 --> 00:00:04,000
Hello world

2
00:00:05,000 --> 00:00:08,000
How are you?"""


@pytest.fixture
def raw_entries():
    """Raw aligned entries with one broken start and one overlapping pair."""
    return [
        SRTEntry(1, "00:00:01,000", "00:00:03,000", "Hello world"),
        SRTEntry(2, "bad", "00:00:05,000", "How are you?"),
        SRTEntry(3, "00:00:05,000", "00:00:07,000", "Fine, thanks."),
    ]


@pytest.fixture
def raw_entries_payload():
    """The camelCase JSON shape the alignment model returns."""
    return [
        {"index": 1, "startTime": "00:00:01,000", "endTime": "00:00:03,000", "text": "Hello"},
        {"index": 2, "startTime": "00:00:03,000", "endTime": "oops", "text": "world"},
    ]


# ============================================================================
# Helpers
# ============================================================================


def create_genai_response(text_parts, include_thoughts=False):
    """Create a mock Google GenAI API response.

    Args:
        text_parts: List of text strings or single text string to return
        include_thoughts: Whether to include a thought part (should be filtered)

    Returns:
        Mock response object matching Google GenAI structure
    """
    if isinstance(text_parts, str):
        text_parts = [text_parts]

    parts = []

    if include_thoughts:
        thought_part = MagicMock()
        thought_part.text = "Internal reasoning..."
        thought_part.thought = True
        parts.append(thought_part)

    for text in text_parts:
        text_part = MagicMock()
        text_part.text = text
        text_part.thought = False
        parts.append(text_part)

    response = MagicMock()
    response.candidates = [MagicMock(content=MagicMock(parts=parts))]
    return response


def get_mock_target(function_name, target_module):
    """Get the correct import path for mocking a function.

    Patch where a function is IMPORTED, not where it is DEFINED:
    ``get_mock_target("align_script_to_audio", "app.api.v1.alignment")``.
    """
    return f"{target_module}.{function_name}"


def srt_blocks(srt_content: str) -> list[list[str]]:
    """Split serialized SRT into blocks of lines."""
    return [block.split("\n") for block in srt_content.split("\n\n") if block]
