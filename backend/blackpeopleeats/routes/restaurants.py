"""
BlackPeopleEats Backend — Restaurant Route Handlers
=====================================================

What:  GET /api/restaurants (optionally one city) and GET /api/sponsors.
How:   Extracts query parameters, delegates to FeedService, returns JSON.
Who:   The home page's restaurant grid and the sponsor cards.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from blackpeopleeats.database import get_db_session
from blackpeopleeats.schemas.common import ErrorResponse
from blackpeopleeats.schemas.feed import RestaurantResponse, RestaurantWithRatingResponse
from blackpeopleeats.services.feed_service import feed_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Restaurants"])


@router.get(
    "/restaurants",
    response_model=List[RestaurantWithRatingResponse],
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="List restaurants with their average rating",
)
async def list_restaurants(
    city: Optional[str] = Query(
        default=None,
        description="Exact, case-sensitive city name. Omit for every city.",
    ),
    db: AsyncSession = Depends(get_db_session),
) -> List[RestaurantWithRatingResponse]:
    return await feed_service.list_restaurants(db=db, city=city)


@router.get(
    "/sponsors",
    response_model=List[RestaurantResponse],
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="List sponsored restaurants",
)
async def list_sponsors(
    db: AsyncSession = Depends(get_db_session),
) -> List[RestaurantResponse]:
    return await feed_service.list_sponsors(db=db)
