"""
BlackPeopleEats Backend — Pydantic Request/Response Schemas (feed)
====================================================================

What:  API contract for restaurants, users, follows and posts.
Why:   Every body and parameter is validated at the boundary, so malformed
       input is rejected with a 400 before it reaches the store.

Field names mirror the table columns (snake_case) because the web client
reads them directly, e.g. `is_sponsored`, `avg_rating`, `user_avatar`.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

# Columns are 32-bit INTEGER on every supported store
INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class RestaurantResponse(BaseModel):
    """A restaurant row as stored."""
    id: int
    name: str
    city: str
    address: Optional[str] = None
    lat: Optional[float] = None
    lng: Optional[float] = None
    category: Optional[str] = None
    is_black_owned: bool = False
    is_sponsored: bool = False

    model_config = {"from_attributes": True}


class RestaurantWithRatingResponse(RestaurantResponse):
    """
    What:  Restaurant plus the average rating of its posts.
    Who:   Returned by GET /api/restaurants.

    avg_rating is null for restaurants nobody has posted about yet
    (LEFT JOIN with no matching rows).
    """
    avg_rating: Optional[float] = Field(
        default=None,
        description="Mean post rating, null when the restaurant has no posts",
    )


class UserResponse(BaseModel):
    id: int
    username: str
    bio: Optional[str] = None
    profile_pic: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class PostResponse(BaseModel):
    """
    What:  One feed entry.
    Who:   Returned by GET /api/posts.

    restaurant_name, restaurant_city and user_avatar are joined in from the
    restaurants and users tables so the card renders without extra requests.
    """
    id: int
    restaurant_id: Optional[int] = None
    user_id: Optional[int] = None
    user_name: str
    meal_name: str
    image_url: Optional[str] = None
    review: Optional[str] = None
    rating: int
    created_at: datetime
    restaurant_name: Optional[str] = None
    restaurant_city: Optional[str] = None
    user_avatar: Optional[str] = None


class PostCreatedResponse(BaseModel):
    id: int = Field(description="Generated id of the new post")


class SuccessResponse(BaseModel):
    success: bool = True


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class UserUpdateRequest(BaseModel):
    """
    Full overwrite of a user's profile.

    There is no partial merge: omitting bio or profile_pic clears it.
    """
    username: str = Field(min_length=1, max_length=80)
    bio: Optional[str] = None
    profile_pic: Optional[str] = Field(
        default=None,
        description="Image URL or inline data URI",
    )


class FollowRequest(BaseModel):
    follower_id: int = Field(ge=1, le=INT32_MAX)
    followed_id: int = Field(ge=1, le=INT32_MAX)


class PostCreateRequest(BaseModel):
    """
    What:  Body of POST /api/posts.

    Defaults:
        user_id → 1 (the default user) when omitted or null
        rating  → 5 when omitted or null; any 32-bit integer is accepted

    Ids must be positive 32-bit integers; anything larger is rejected here
    instead of overflowing in the database driver.
    """
    restaurant_id: int = Field(ge=1, le=INT32_MAX)
    user_id: Optional[int] = Field(default=None, ge=1, le=INT32_MAX)
    user_name: str = Field(min_length=1, max_length=80)
    meal_name: str = Field(min_length=1, max_length=255)
    image_url: Optional[str] = Field(default=None, description="Image URL or inline data URI")
    review: Optional[str] = None
    rating: Optional[int] = Field(
        default=None,
        ge=INT32_MIN,
        le=INT32_MAX,
        description="Any integer that fits the column; no 1-5 range is enforced",
    )
