"""
Schemas for the external collaborators: city highlights, restaurant search
and the checkout session.
"""

from typing import Any, Dict, List

from pydantic import BaseModel, Field


class Highlight(BaseModel):
    """A city-scoped restaurant suggestion. Never persisted."""
    name: str = Field(min_length=1)
    category: str
    reason: str


class SearchResponse(BaseModel):
    text: str
    sources: List[Dict[str, Any]] = Field(default_factory=list)


class CheckoutSessionResponse(BaseModel):
    url: str = Field(description="Redirect URL for the hosted checkout page")
