"""
BlackPeopleEats Backend — User & Follow Route Handlers
========================================================

What:  GET/POST /api/users/{id} and POST /api/follow.

Behavior notes:
    - GET for an unknown id answers 200 with a JSON null body
    - POST overwrites username, bio and profile_pic together; it does not
      check that the user exists
    - POST /api/follow is idempotent
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Path
from sqlalchemy.ext.asyncio import AsyncSession

from blackpeopleeats.database import get_db_session
from blackpeopleeats.schemas.common import ErrorResponse
from blackpeopleeats.schemas.feed import (
    INT32_MAX,
    FollowRequest,
    SuccessResponse,
    UserResponse,
    UserUpdateRequest,
)
from blackpeopleeats.services.feed_service import feed_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Users"])


@router.get(
    "/users/{user_id}",
    response_model=Optional[UserResponse],
    responses={400: {"description": "Non-numeric id", "model": ErrorResponse}},
    summary="Get a user profile",
)
async def get_user(
    user_id: int = Path(ge=1, le=INT32_MAX, description="Numeric user id"),
    db: AsyncSession = Depends(get_db_session),
) -> Optional[UserResponse]:
    return await feed_service.get_user(db=db, user_id=user_id)


@router.post(
    "/users/{user_id}",
    response_model=SuccessResponse,
    responses={
        400: {"description": "Malformed body", "model": ErrorResponse},
        500: {"description": "Username already taken or server error", "model": ErrorResponse},
    },
    summary="Overwrite a user profile",
)
async def update_user(
    payload: UserUpdateRequest,
    user_id: int = Path(ge=1, le=INT32_MAX, description="Numeric user id"),
    db: AsyncSession = Depends(get_db_session),
) -> SuccessResponse:
    await feed_service.update_user(db=db, user_id=user_id, payload=payload)
    return SuccessResponse()


@router.post(
    "/follow",
    response_model=SuccessResponse,
    responses={400: {"description": "Malformed body", "model": ErrorResponse}},
    summary="Follow a user",
)
async def follow(
    payload: FollowRequest,
    db: AsyncSession = Depends(get_db_session),
) -> SuccessResponse:
    await feed_service.follow(db=db, payload=payload)
    return SuccessResponse()
