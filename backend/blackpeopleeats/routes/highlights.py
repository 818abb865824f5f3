"""
BlackPeopleEats Backend — City Highlights & Search Routes
===========================================================

What:  GET /api/highlights?city= and GET /api/search?q=
Why:   Keeps the Gemini key on the server; the client only sees results.

Both endpoints are best-effort and always answer 200:
    highlights → Gemini's list, or the static table for the city
    search     → Gemini's text, or "Could not find restaurants."
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from blackpeopleeats.config import settings
from blackpeopleeats.exceptions import ValidationError
from blackpeopleeats.schemas.highlights import Highlight, SearchResponse
from blackpeopleeats.services.gemini_service import (
    GeminiHighlightsService,
    get_highlights_provider,
    get_search_service,
)
from blackpeopleeats.services.highlights_base import HighlightsProvider

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Highlights"])


@router.get(
    "/highlights",
    response_model=List[Highlight],
    summary="AI-curated restaurant highlights for a city",
)
async def city_highlights(
    city: Optional[str] = Query(default=None, description="City name; defaults to DEFAULT_CITY"),
    provider: HighlightsProvider = Depends(get_highlights_provider),
) -> List[Highlight]:
    return await provider.fetch_highlights(city or settings.default_city)


@router.get(
    "/search",
    response_model=SearchResponse,
    summary="Free-text restaurant search",
)
async def search_restaurants(
    q: str = Query(min_length=1, description="What to look for, e.g. 'oxtails'"),
    lat: Optional[float] = Query(default=None, ge=-90, le=90),
    lng: Optional[float] = Query(default=None, ge=-180, le=180),
    search: GeminiHighlightsService = Depends(get_search_service),
) -> SearchResponse:
    if not q.strip():
        raise ValidationError(message="Search query must not be blank", field="q")
    return await search.search_restaurants(q.strip(), lat=lat, lng=lng)
