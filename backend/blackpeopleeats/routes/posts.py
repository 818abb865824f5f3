"""
BlackPeopleEats Backend — Post Route Handlers
===============================================

What:  GET /api/posts (feed) and POST /api/posts (new meal post).

Feed scoping:
    GET /api/posts            → every post, newest first
    GET /api/posts?userId=1   → posts by user 1 and by the users 1 follows
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from blackpeopleeats.database import get_db_session
from blackpeopleeats.schemas.common import ErrorResponse
from blackpeopleeats.schemas.feed import (
    INT32_MAX,
    PostCreateRequest,
    PostCreatedResponse,
    PostResponse,
)
from blackpeopleeats.services.feed_service import feed_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Posts"])


@router.get(
    "/posts",
    response_model=List[PostResponse],
    responses={
        400: {"description": "Non-numeric userId", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="List feed posts, newest first",
)
async def list_posts(
    user_id: Optional[int] = Query(
        default=None,
        alias="userId",
        ge=1,
        le=INT32_MAX,
        description="Viewer id: limit the feed to this user and the users they follow",
    ),
    db: AsyncSession = Depends(get_db_session),
) -> List[PostResponse]:
    return await feed_service.list_posts(db=db, viewer_id=user_id)


@router.post(
    "/posts",
    response_model=PostCreatedResponse,
    responses={
        400: {"description": "Malformed body", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Create a meal post",
    description=(
        "user_id defaults to 1 and rating to 5 when omitted. "
        "image_url may be a remote URL or an inline data URI."
    ),
)
async def create_post(
    payload: PostCreateRequest,
    db: AsyncSession = Depends(get_db_session),
) -> PostCreatedResponse:
    post_id = await feed_service.create_post(db=db, payload=payload)
    return PostCreatedResponse(id=post_id)
