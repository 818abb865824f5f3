"""
BlackPeopleEats Backend — Static Highlights Table & Fallback Wrapper
======================================================================

What:  Five hand-picked highlights for each supported city, and the wrapper
       that serves them whenever the generative provider fails.
Why:   The highlights strip on the home page must never be empty because a
       third party is down, rate-limited, or returned prose instead of JSON.

Degradation Policy:
    Every failure mode (missing key, network error, unparsable text, empty
    array, unexpected exception) is handled identically: log it, return
    the table row for the city. Unknown cities get the default city's row.
    No caching and no retry.
"""

import logging
from typing import Dict, List, Optional

from blackpeopleeats.config import settings
from blackpeopleeats.schemas.highlights import Highlight
from blackpeopleeats.services.highlights_base import HighlightsProvider

logger = logging.getLogger(__name__)


FALLBACK_HIGHLIGHTS: Dict[str, List[Dict[str, str]]] = {
    "Atlanta": [
        {"name": "Slutty Vegan", "category": "Vegan",
         "reason": "A cultural phenomenon known for its incredible plant-based burgers and energetic atmosphere."},
        {"name": "Busy Bee Cafe", "category": "Soul Food",
         "reason": "An Atlanta institution serving legendary fried chicken and classic Southern sides since 1947."},
        {"name": "Paschal's", "category": "Southern",
         "reason": "Historic meeting place during the Civil Rights Movement, famous for its fried chicken."},
        {"name": "Old Lady Gang", "category": "Southern",
         "reason": "Owned by Kandi Burruss, offering authentic family recipes in a lively setting."},
        {"name": "The Seafood Menu", "category": "Seafood",
         "reason": "Known for their signature sauces and fresh seafood boils."},
    ],
    "Chicago": [
        {"name": "Harold's Chicken Shack", "category": "Chicken",
         "reason": "A Chicago staple famous for its fried chicken and signature mild sauce."},
        {"name": "Luella's Southern Kitchen", "category": "Southern",
         "reason": "Elevated Southern comfort food bringing a taste of the South to the North."},
        {"name": "Batter & Berries", "category": "Breakfast",
         "reason": "Famous for their French Toast flights and vibrant brunch atmosphere."},
        {"name": "Virtue", "category": "Southern",
         "reason": "Award-winning restaurant offering a sophisticated take on Southern cuisine."},
        {"name": "Majani", "category": "Vegan",
         "reason": "Plant-based soul food that doesn't compromise on flavor."},
    ],
    "Houston": [
        {"name": "The Breakfast Klub", "category": "Breakfast",
         "reason": "Legendary spot for wings & waffles and catfish & grits. The line is always worth it."},
        {"name": "Turkey Leg Hut", "category": "BBQ",
         "reason": "Famous for their massive, creatively stuffed turkey legs."},
        {"name": "Lucille's", "category": "Southern",
         "reason": "Refined Southern cuisine honoring the legacy of culinary pioneer Lucille B. Smith."},
        {"name": "Mico's Hot Chicken", "category": "Chicken",
         "reason": "Bringing authentic Nashville hot chicken to Houston."},
        {"name": "Gatlin's BBQ", "category": "BBQ",
         "reason": "Family-owned joint serving up some of the best craft BBQ in the city."},
    ],
    "New Orleans": [
        {"name": "Dooky Chase's", "category": "Creole",
         "reason": "Historic restaurant known for its gumbo and role in the Civil Rights Movement."},
        {"name": "Willie Mae's Scotch House", "category": "Southern",
         "reason": "Widely considered to have some of the best fried chicken in America."},
        {"name": "Neyow's Creole Cafe", "category": "Creole",
         "reason": "A local favorite for authentic Creole dishes and charbroiled oysters."},
        {"name": "Cafe Reconcile", "category": "Southern",
         "reason": "Great food with a mission, training at-risk youth in the culinary arts."},
        {"name": "Barrow's Catfish", "category": "Seafood",
         "reason": "Serving their legendary fried catfish recipe since 1943."},
    ],
    "Detroit": [
        {"name": "Kuzzo's Chicken & Waffles", "category": "Breakfast",
         "reason": "A staple for Southern comfort food in the Avenue of Fashion."},
        {"name": "Sweet Potato Sensations", "category": "Bakery",
         "reason": "Everything sweet potato, from pies to pancakes."},
        {"name": "Detroit Vegan Soul", "category": "Vegan",
         "reason": "Pioneering plant-based soul food in the Motor City."},
        {"name": "Ima", "category": "Noodles",
         "reason": "Award-winning udon and rice bowls."},
        {"name": "Beans & Cornbread", "category": "Soul Food",
         "reason": "Award-winning soul food with an upscale vibe."},
    ],
}

FALLBACK_DEFAULT_CITY = "Atlanta"


def fallback_highlights(city: str, default_city: Optional[str] = None) -> List[Highlight]:
    """
    Table row for city (exact key match), else the default city's row.

    A fresh list of models is built on every call so callers may mutate it.
    """
    default = default_city if default_city in FALLBACK_HIGHLIGHTS else FALLBACK_DEFAULT_CITY
    rows = FALLBACK_HIGHLIGHTS.get(city) or FALLBACK_HIGHLIGHTS[default]
    return [Highlight(**row) for row in rows]


class FallbackHighlightsService(HighlightsProvider):
    """
    Decorator around any HighlightsProvider that substitutes the static table
    on failure.

    Error Handling Chain:
        provider.fetch_highlights(city)
        → returns a non-empty list → passed through
        → raises anything / returns [] → logged, static table returned
    """

    def __init__(self, provider: HighlightsProvider, default_city: Optional[str] = None):
        self.provider = provider
        self.default_city = default_city or settings.default_city

    async def fetch_highlights(self, city: str) -> List[Highlight]:
        try:
            highlights = await self.provider.fetch_highlights(city)
        except Exception as e:
            logger.warning(
                "Highlights provider %s failed for city=%s (%s: %s); serving fallback table",
                type(self.provider).__name__,
                city,
                type(e).__name__,
                str(e),
            )
            return fallback_highlights(city, self.default_city)

        if not highlights:
            logger.warning("Highlights provider returned nothing for city=%s; serving fallback table", city)
            return fallback_highlights(city, self.default_city)
        return highlights

    async def health_check(self) -> bool:
        return await self.provider.health_check()
