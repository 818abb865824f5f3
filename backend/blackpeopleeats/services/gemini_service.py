"""
BlackPeopleEats Backend — Google Gemini Highlights & Search
=============================================================

What:  Concrete HighlightsProvider backed by Google Gemini, plus a free-text
       restaurant search.
How:   Sends a prompt asking for a JSON array, strips markdown fences from
       the reply and parses it. Every problem is raised as
       HighlightsServiceError for FallbackHighlightsService to absorb.
Who:   One instance is created at import; the highlights route reaches it
       through get_highlights_provider().

Response handling:
    The model is told not to wrap its answer in ```json fences, but it often
    does anyway. The fences are removed before json.loads(). A reply that is
    not a non-empty array of {name, category, reason} objects is rejected
    as a whole; partial lists are not salvaged.

No retry and no timeout: the provider is advisory, and the fallback table
is what guarantees the feed is never empty.
"""

import json
import logging
import time
import uuid
from typing import Any, Dict, List, Optional

import google.generativeai as genai
from pydantic import ValidationError as PydanticValidationError

from blackpeopleeats.config import settings
from blackpeopleeats.exceptions import HighlightsServiceError
from blackpeopleeats.schemas.highlights import Highlight, SearchResponse
from blackpeopleeats.services.highlights_base import HighlightsProvider
from blackpeopleeats.services.highlights_fallback import FallbackHighlightsService

logger = logging.getLogger(__name__)

SEARCH_FAILED_TEXT = "Could not find restaurants."


def strip_code_fences(text: str) -> str:
    """Removes ```json and ``` markers anywhere in the text and trims it."""
    return text.replace("```json", "").replace("```", "").strip()


def parse_highlights(text: str) -> List[Highlight]:
    """
    Parse a model reply into highlights.

    Raises:
        HighlightsServiceError: not JSON, not an array, empty array, or an
        entry missing name/category/reason
    """
    cleaned = strip_code_fences(text or "")
    try:
        parsed = json.loads(cleaned or "[]")
    except json.JSONDecodeError as e:
        raise HighlightsServiceError(
            message="Highlights response was not valid JSON",
            context={"error": str(e), "preview": cleaned[:200]},
        )

    if not isinstance(parsed, list) or not parsed:
        raise HighlightsServiceError(
            message="Highlights response was not a non-empty JSON array",
            context={"type": type(parsed).__name__},
        )

    try:
        return [Highlight.model_validate(item) for item in parsed]
    except PydanticValidationError as e:
        raise HighlightsServiceError(
            message="Highlights response contained malformed entries",
            context={"errors": e.error_count()},
        )


class GeminiHighlightsService(HighlightsProvider):
    """
    Google Gemini implementation of the highlights capability.

    The SDK keeps the API key in module-level state, so configure() runs
    once here when a key is present. Without a key no request is sent at
    all; fetch_highlights() raises immediately and the wrapper falls back.
    """

    HIGHLIGHTS_PROMPT = (
        "List 5 highly recommended restaurants in {city} that are popular within the "
        "Black community. For each, provide the name, category, and a brief reason why "
        "it's a staple. Format as a JSON array of objects with keys: name, category, "
        "reason. Do not include markdown formatting like ```json."
    )

    SEARCH_PROMPT = 'Find restaurants matching "{query}" that are popular in the Black community.'

    def __init__(self, api_key: Optional[str] = None, model_name: Optional[str] = None):
        if api_key is None:
            api_key = settings.gemini_api_key if settings.gemini_configured else ""
        self.api_key = api_key
        self.model_name = model_name or settings.gemini_model

        if self.configured:
            genai.configure(api_key=self.api_key)
        self.model = genai.GenerativeModel(self.model_name)

        logger.info(
            "GeminiHighlightsService initialized with model=%s (configured=%s)",
            self.model_name,
            self.configured,
        )

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    async def fetch_highlights(self, city: str) -> List[Highlight]:
        """
        Ask Gemini for five notable restaurants in city.

        Flow:
            1. Refuse early when no API key is configured
            2. generate_content_async() with the highlights prompt
            3. parse_highlights() on the reply text

        Raises:
            HighlightsServiceError: on any failure, with the cause in context
        """
        if not self.configured:
            raise HighlightsServiceError(
                message="Gemini API key is not configured",
                context={"city": city},
            )

        request_id = str(uuid.uuid4())[:8]
        start_time = time.time()
        logger.info("[%s] Requesting Gemini highlights for city=%s", request_id, city)

        try:
            response = await self.model.generate_content_async(
                self.HIGHLIGHTS_PROMPT.format(city=city)
            )
            text = response.text or "[]"
        except Exception as e:
            duration_ms = (time.time() - start_time) * 1000
            logger.error(
                "[%s] Gemini highlights call failed after %.0fms: %s",
                request_id,
                duration_ms,
                str(e),
            )
            raise HighlightsServiceError(
                message="Gemini highlights request failed",
                context={"request_id": request_id, "error_type": type(e).__name__},
            )

        try:
            highlights = parse_highlights(text)
        except HighlightsServiceError as e:
            logger.error("[%s] %s: %s", request_id, e.message, e.context)
            raise

        logger.info(
            "[%s] Gemini returned %d highlights in %.0fms",
            request_id,
            len(highlights),
            (time.time() - start_time) * 1000,
        )
        return highlights

    async def search_restaurants(
        self,
        query: str,
        lat: Optional[float] = None,
        lng: Optional[float] = None,
    ) -> SearchResponse:
        """
        Free-text restaurant search. Best-effort: any failure returns the
        canned "Could not find restaurants." answer with no sources.
        """
        if not self.configured:
            logger.warning("Search requested but Gemini API key is not configured")
            return SearchResponse(text=SEARCH_FAILED_TEXT, sources=[])

        prompt = self.SEARCH_PROMPT.format(query=query)
        if lat is not None and lng is not None:
            prompt += f" Prefer places near latitude {lat}, longitude {lng}."

        try:
            response = await self.model.generate_content_async(prompt)
            return SearchResponse(
                text=response.text or "",
                sources=self._grounding_sources(response),
            )
        except Exception as e:
            logger.error("Error searching restaurants for %r: %s", query, str(e))
            return SearchResponse(text=SEARCH_FAILED_TEXT, sources=[])

    @staticmethod
    def _grounding_sources(response: Any) -> List[Dict[str, Any]]:
        """Web sources from the first candidate's grounding metadata, if any."""
        candidates = getattr(response, "candidates", None) or []
        if not candidates:
            return []
        metadata = getattr(candidates[0], "grounding_metadata", None)
        chunks = getattr(metadata, "grounding_chunks", None) or []

        sources = []
        for chunk in chunks:
            web = getattr(chunk, "web", None)
            if web is not None:
                sources.append({"uri": getattr(web, "uri", ""), "title": getattr(web, "title", "")})
        return sources

    async def health_check(self) -> bool:
        return self.configured


gemini_service = GeminiHighlightsService()
highlights_service = FallbackHighlightsService(gemini_service)


def get_highlights_provider() -> HighlightsProvider:
    """FastAPI dependency returning the fallback-wrapped highlights provider."""
    return highlights_service


def get_search_service() -> GeminiHighlightsService:
    return gemini_service
