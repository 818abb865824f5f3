"""
BlackPeopleEats Backend — Highlights Provider Interface
=========================================================

What:  Abstract capability "given a city, return restaurant highlights".
Why:   The route depends on this interface, not on Gemini. The production
       object is a FallbackHighlightsService wrapping GeminiHighlightsService;
       tests substitute either layer.

Contract:
    fetch_highlights(city) -> List[Highlight]
    - Concrete providers raise HighlightsServiceError when they cannot
      produce a non-empty list of valid entries
    - The fallback wrapper never raises and never returns an empty list
"""

from abc import ABC, abstractmethod
from typing import List

from blackpeopleeats.schemas.highlights import Highlight


class HighlightsProvider(ABC):

    @abstractmethod
    async def fetch_highlights(self, city: str) -> List[Highlight]:
        """
        Return notable restaurants for a city as {name, category, reason}.

        Raises:
            HighlightsServiceError: provider unavailable or response unusable
        """
        ...

    async def health_check(self) -> bool:
        """True when the provider can be called at all (e.g. a key is configured)."""
        return True
