"""Tests for the Google GenAI alignment client."""

import json
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from app.core.config import Settings
from app.models.srt import SRTEntry
from app.services.alignment import (
    AlignmentError,
    align_script_to_audio,
    build_alignment_prompt,
    decode_alignment_response,
)
from app.services.pipeline import NoAlignmentDataError
from tests.conftest import create_genai_response


@pytest.fixture
def mock_genai_client():
    """Mock Google GenAI client."""
    with patch("app.services.alignment.genai.Client") as mock_client:
        yield mock_client


@pytest.fixture
def genai_instance(mock_genai_client):
    """Client instance whose generate_content is an AsyncMock."""
    instance = MagicMock()
    instance.aio.models.generate_content = AsyncMock()
    mock_genai_client.return_value = instance
    return instance


class TestDecodeAlignmentResponse:
    """Tests for decode_alignment_response function."""

    def test_decode_json_array(self, raw_entries_payload):
        """Test the camelCase JSON array decodes into entries."""
        entries = decode_alignment_response(json.dumps(raw_entries_payload))
        assert entries == [
            SRTEntry(1, "00:00:01,000", "00:00:03,000", "Hello"),
            SRTEntry(2, "00:00:03,000", "oops", "world"),
        ]

    def test_decode_code_fenced_json(self, raw_entries_payload):
        """Test markdown code fences around the JSON are ignored."""
        content = "```json\n" + json.dumps(raw_entries_payload) + "\n```"
        assert len(decode_alignment_response(content)) == 2

    def test_missing_fields_become_empty(self):
        """Test absent timestamps and index are kept empty for repair."""
        entries = decode_alignment_response('[{"text": "Hello"}]')
        assert entries == [SRTEntry(0, "", "", "Hello")]

    def test_undecodable_items_skipped(self):
        """Test items that are not entry objects are dropped."""
        entries = decode_alignment_response('["junk", {"text": "Kept", "index": 3}]')
        assert [e.text for e in entries] == ["Kept"]

    def test_numeric_timestamps_kept_for_repair(self):
        """Test non-string timestamps keep their entry and are left for repair."""
        content = json.dumps(
            [
                {"index": 1, "startTime": "00:00:01,000", "endTime": "00:00:02,000", "text": "One"},
                {"index": 2, "startTime": 3000, "endTime": None, "text": "Two"},
            ]
        )
        entries = decode_alignment_response(content)
        assert entries == [
            SRTEntry(1, "00:00:01,000", "00:00:02,000", "One"),
            SRTEntry(2, "3000", "", "Two"),
        ]

    @pytest.mark.parametrize("index", ["n/a", 1.5, True, [1]])
    def test_junk_index_becomes_zero(self, index):
        """Test an index that is not a whole number does not drop the entry."""
        content = json.dumps(
            [{"index": index, "startTime": "00:00:01,000", "endTime": "00:00:02,000", "text": "One"}]
        )
        assert decode_alignment_response(content) == [
            SRTEntry(0, "00:00:01,000", "00:00:02,000", "One")
        ]

    def test_numeric_string_index_accepted(self):
        """Test an index sent as a digit string is read as a number."""
        entries = decode_alignment_response('[{"index": "4", "text": "Four"}]')
        assert entries == [SRTEntry(4, "", "", "Four")]

    def test_non_string_text_skipped(self):
        """Test items whose text is not a string are dropped."""
        entries = decode_alignment_response('[{"text": 42}, {"text": "Kept"}]')
        assert [e.text for e in entries] == ["Kept"]

    @pytest.mark.parametrize("content", ["[]", "{}", '{"entries": []}', '"text"', '["junk"]'])
    def test_no_data(self, content):
        """Test non-array or empty payloads report no alignment data."""
        with pytest.raises(NoAlignmentDataError):
            decode_alignment_response(content)

    def test_not_json(self):
        """Test an undecodable reply is an alignment error."""
        with pytest.raises(AlignmentError, match="not valid JSON"):
            decode_alignment_response("Sorry, I cannot help with that.")

    def test_srt_text_fallback(self):
        """Test an SRT-shaped reply is parsed leniently."""
        entries = decode_alignment_response("1\n00:00:01,000 --> 00:00:02,000\nHello")
        assert entries == [SRTEntry(1, "00:00:01,000", "00:00:02,000", "Hello")]


class TestAlignScriptToAudio:
    """Tests for align_script_to_audio function."""

    async def test_align_success(self, genai_instance, mock_genai_client, raw_entries_payload):
        """Test a successful call returns decoded raw entries."""
        genai_instance.aio.models.generate_content.return_value = create_genai_response(
            json.dumps(raw_entries_payload)
        )
        settings = Settings(google_api_key="test_api_key")

        entries = await align_script_to_audio(b"audio", "Hello world", settings=settings)

        assert [e.text for e in entries] == ["Hello", "world"]
        mock_genai_client.assert_called_once_with(api_key="test_api_key")
        call_kwargs = genai_instance.aio.models.generate_content.call_args.kwargs
        assert call_kwargs["model"] == "gemini-2.5-flash"
        assert "Hello world" in call_kwargs["contents"][1]

    async def test_model_override(self, genai_instance, raw_entries_payload):
        """Test an explicit model is passed through."""
        genai_instance.aio.models.generate_content.return_value = create_genai_response(
            json.dumps(raw_entries_payload)
        )
        settings = Settings(google_api_key="test_api_key")

        await align_script_to_audio(b"audio", "Hi", model="gemini-2.5-pro", settings=settings)

        call_kwargs = genai_instance.aio.models.generate_content.call_args.kwargs
        assert call_kwargs["model"] == "gemini-2.5-pro"

    async def test_thoughts_filtered(self, genai_instance, raw_entries_payload):
        """Test thought parts are not decoded as the reply."""
        genai_instance.aio.models.generate_content.return_value = create_genai_response(
            json.dumps(raw_entries_payload), include_thoughts=True
        )
        settings = Settings(google_api_key="test_api_key")

        entries = await align_script_to_audio(b"audio", "Hello world", settings=settings)
        assert len(entries) == 2

    async def test_no_api_key(self, mock_genai_client):
        """Test alignment refuses to run without an API key."""
        with pytest.raises(ValueError, match="GOOGLE_API_KEY not found"):
            await align_script_to_audio(b"audio", "Hi", settings=Settings(google_api_key=None))
        mock_genai_client.assert_not_called()

    async def test_api_error_wrapped(self, genai_instance):
        """Test client exceptions surface as AlignmentError."""
        genai_instance.aio.models.generate_content.side_effect = Exception("quota exceeded")
        settings = Settings(google_api_key="test_api_key")

        with pytest.raises(AlignmentError, match="quota exceeded"):
            await align_script_to_audio(b"audio", "Hi", settings=settings)

    async def test_invalid_response_structure(self, genai_instance):
        """Test a response without candidates is an alignment error."""
        response = MagicMock()
        response.candidates = []
        genai_instance.aio.models.generate_content.return_value = response
        settings = Settings(google_api_key="test_api_key")

        with pytest.raises(AlignmentError, match="Invalid response structure"):
            await align_script_to_audio(b"audio", "Hi", settings=settings)

    async def test_empty_array_reply(self, genai_instance):
        """Test an empty JSON array reports no alignment data."""
        genai_instance.aio.models.generate_content.return_value = create_genai_response("[]")
        settings = Settings(google_api_key="test_api_key")

        with pytest.raises(NoAlignmentDataError):
            await align_script_to_audio(b"audio", "Hi", settings=settings)


class TestBuildAlignmentPrompt:
    """Tests for build_alignment_prompt function."""

    def test_script_embedded_between_markers(self):
        """Test the script is placed between the start and end markers."""
        prompt = build_alignment_prompt("Line one.\nLine two.")
        assert "--- SCRIPT START ---\nLine one.\nLine two.\n--- SCRIPT END ---" in prompt
        assert "startTime" in prompt
