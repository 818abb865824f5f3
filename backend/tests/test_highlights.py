"""
BlackPeopleEats Backend — Highlights Tests (Mocked Gemini)
============================================================

What:  Reply parsing, the static fallback table, and the Gemini provider
       with its model replaced by mocks.
Why:   Tests must not call the real API (costs money, requires network).

What we test:
    ✅ Markdown fences are stripped before parsing
    ✅ Non-JSON, non-array, empty and malformed replies are rejected
    ✅ Any provider failure serves the table row for the city
    ✅ Unknown cities get the Atlanta row
    ✅ Search degrades to the canned answer
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from blackpeopleeats.config import GEMINI_KEY_PLACEHOLDER, settings
from blackpeopleeats.exceptions import HighlightsServiceError
from blackpeopleeats.services.gemini_service import (
    SEARCH_FAILED_TEXT,
    GeminiHighlightsService,
    parse_highlights,
    strip_code_fences,
)
from blackpeopleeats.services.highlights_base import HighlightsProvider
from blackpeopleeats.services.highlights_fallback import (
    FALLBACK_HIGHLIGHTS,
    FallbackHighlightsService,
    fallback_highlights,
)

VALID_REPLY = (
    '[{"name": "Sweet Georgia\'s Juke Joint", "category": "Southern", '
    '"reason": "Live music and shrimp & grits."}]'
)


class StubProvider(HighlightsProvider):
    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.calls = []

    async def fetch_highlights(self, city):
        self.calls.append(city)
        if self.error is not None:
            raise self.error
        return self.result


def _gemini_with_reply(text=None, error=None):
    service = GeminiHighlightsService(api_key="test-key", model_name="gemini-test")
    service.model = MagicMock()
    if error is not None:
        service.model.generate_content_async = AsyncMock(side_effect=error)
    else:
        service.model.generate_content_async = AsyncMock(return_value=MagicMock(text=text))
    return service


class TestParseHighlights:
    """Tests for turning a model reply into Highlight models."""

    def test_strips_fences(self):
        """Both ```json and ``` markers are removed."""
        assert strip_code_fences("```json\n[1]\n```") == "[1]"

    def test_parses_fenced_reply(self):
        """A fenced JSON array parses into Highlight models."""
        highlights = parse_highlights(f"```json\n{VALID_REPLY}\n```")
        assert len(highlights) == 1
        assert highlights[0].name == "Sweet Georgia's Juke Joint"
        assert highlights[0].category == "Southern"

    def test_rejects_prose(self):
        """Plain prose is not JSON and is rejected."""
        with pytest.raises(HighlightsServiceError):
            parse_highlights("Here are some great places to eat!")

    def test_rejects_object(self):
        """A single object instead of an array is rejected."""
        with pytest.raises(HighlightsServiceError):
            parse_highlights('{"name": "x", "category": "y", "reason": "z"}')

    def test_rejects_empty_array(self):
        """An empty array counts as no highlights."""
        with pytest.raises(HighlightsServiceError):
            parse_highlights("[]")

    def test_rejects_empty_text(self):
        """An empty reply is rejected."""
        with pytest.raises(HighlightsServiceError):
            parse_highlights("")

    def test_rejects_entry_missing_reason(self):
        """One malformed entry rejects the whole reply."""
        with pytest.raises(HighlightsServiceError):
            parse_highlights('[{"name": "x", "category": "y"}]')


class TestFallbackTable:
    """Tests for the static per-city table."""

    @pytest.mark.parametrize("city", sorted(FALLBACK_HIGHLIGHTS))
    def test_every_city_has_five_entries(self, city):
        """Each table city has exactly five entries."""
        assert len(fallback_highlights(city)) == 5

    def test_unknown_city_uses_atlanta(self):
        """A city missing from the table gets Atlanta's row."""
        names = [h.name for h in fallback_highlights("Boise")]
        assert names[0] == "Slutty Vegan"
        assert names == [row["name"] for row in FALLBACK_HIGHLIGHTS["Atlanta"]]

    def test_lookup_is_exact(self):
        """Table lookup is case-sensitive like the restaurant filter."""
        assert fallback_highlights("chicago")[0].name == "Slutty Vegan"

    def test_returns_fresh_lists(self):
        """Mutating a returned list does not change the table."""
        first = fallback_highlights("Houston")
        first.clear()
        assert len(fallback_highlights("Houston")) == 5


class TestFallbackHighlightsService:
    """Tests for the wrapper that substitutes the table on failure."""

    @pytest.mark.asyncio
    async def test_passes_through_success(self):
        """A non-empty provider result is returned untouched."""
        result = parse_highlights(VALID_REPLY)
        service = FallbackHighlightsService(StubProvider(result=result), default_city="Atlanta")

        assert await service.fetch_highlights("Atlanta") == result

    @pytest.mark.asyncio
    async def test_provider_error_serves_table(self):
        """Any provider exception serves the city's table row."""
        service = FallbackHighlightsService(
            StubProvider(error=RuntimeError("quota exceeded")), default_city="Atlanta"
        )
        highlights = await service.fetch_highlights("Atlanta")

        assert len(highlights) == 5
        assert highlights[0].name == "Slutty Vegan"

    @pytest.mark.asyncio
    async def test_empty_result_serves_table(self):
        """An empty provider result serves the city's table row."""
        service = FallbackHighlightsService(StubProvider(result=[]), default_city="Atlanta")
        highlights = await service.fetch_highlights("Detroit")

        assert [h.name for h in highlights][0] == "Kuzzo's Chicken & Waffles"

    @pytest.mark.asyncio
    async def test_unknown_city_failure_serves_default_city(self):
        """Failure for an unknown city serves the default city's row."""
        service = FallbackHighlightsService(
            StubProvider(error=HighlightsServiceError("bad json")), default_city="Atlanta"
        )
        highlights = await service.fetch_highlights("Boise")
        assert highlights[0].name == "Slutty Vegan"


class TestGeminiHighlightsService:
    """Tests for the Gemini provider with its model mocked."""

    @pytest.mark.asyncio
    async def test_unconfigured_raises_without_calling_api(self):
        """Without a key no request is sent and the call raises."""
        service = GeminiHighlightsService(api_key="")
        service.model = MagicMock()
        service.model.generate_content_async = AsyncMock()

        with pytest.raises(HighlightsServiceError):
            await service.fetch_highlights("Atlanta")
        service.model.generate_content_async.assert_not_called()

    def test_placeholder_key_counts_as_unconfigured(self):
        """The sample .env placeholder key is treated as no key."""
        with patch.object(settings, "gemini_api_key", GEMINI_KEY_PLACEHOLDER):
            service = GeminiHighlightsService()
        assert service.configured is False

    @pytest.mark.asyncio
    async def test_successful_reply(self):
        """A valid reply is parsed and the prompt names the city."""
        service = _gemini_with_reply(text=f"```json{VALID_REPLY}```")
        highlights = await service.fetch_highlights("Atlanta")

        assert len(highlights) == 1
        prompt = service.model.generate_content_async.call_args.args[0]
        assert "Atlanta" in prompt

    @pytest.mark.asyncio
    async def test_api_failure_raises(self):
        """SDK exceptions become HighlightsServiceError with the cause type."""
        service = _gemini_with_reply(error=RuntimeError("503 unavailable"))

        with pytest.raises(HighlightsServiceError) as exc_info:
            await service.fetch_highlights("Chicago")
        assert exc_info.value.context["error_type"] == "RuntimeError"

    @pytest.mark.asyncio
    async def test_unparsable_reply_falls_back_through_wrapper(self):
        """Prose from Gemini ends in the static table via the wrapper."""
        service = FallbackHighlightsService(
            _gemini_with_reply(text="Sorry, I can't help with that."),
            default_city="Atlanta",
        )
        highlights = await service.fetch_highlights("Houston")
        assert highlights[0].name == "The Breakfast Klub"

    @pytest.mark.asyncio
    async def test_search_returns_text(self):
        """Search returns the model text and puts query and location in the prompt."""
        service = _gemini_with_reply(text="Try Slutty Vegan.")
        service.model.generate_content_async.return_value.candidates = []

        result = await service.search_restaurants("vegan burgers", lat=33.7, lng=-84.4)

        assert result.text == "Try Slutty Vegan."
        assert result.sources == []
        prompt = service.model.generate_content_async.call_args.args[0]
        assert "vegan burgers" in prompt
        assert "33.7" in prompt

    @pytest.mark.asyncio
    async def test_search_failure_returns_canned_text(self):
        """A failing search answers the canned text with no sources."""
        service = _gemini_with_reply(error=RuntimeError("boom"))
        result = await service.search_restaurants("oxtails")

        assert result.text == SEARCH_FAILED_TEXT
        assert result.sources == []

    @pytest.mark.asyncio
    async def test_search_unconfigured(self):
        """Search without a key answers the canned text."""
        result = await GeminiHighlightsService(api_key="").search_restaurants("oxtails")
        assert result.text == SEARCH_FAILED_TEXT
