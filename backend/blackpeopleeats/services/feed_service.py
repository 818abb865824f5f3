"""
BlackPeopleEats Backend — Feed Service (Query/Command Layer)
==============================================================

What:  One method per API operation, each issuing a single parameterized
       statement against the store.
How:   Every method receives the AsyncSession as an argument. The service
       holds no state, so one instance is shared by all requests.
Who:   Called by the route handlers in routes/restaurants.py, users.py and
       posts.py.

Error Handling Strategy:
    SQLAlchemy errors are wrapped in DatabaseError (generic 500 to the
    client, original error type in the log). Input has already been
    validated by the request schemas, so nothing here re-checks types.
    Existence of referenced users/restaurants is not checked.

Feed Scoping:
    GET /api/posts?userId=V returns posts where
        user_id IN (SELECT followed_id FROM follows WHERE follower_id = V)
        OR user_id = V
    The viewer predicate is the whole WHERE clause; it is not combined with
    a city or restaurant filter.
"""

import logging
from typing import List, Optional

from sqlalchemy import func, or_, select, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from blackpeopleeats.exceptions import DatabaseError
from blackpeopleeats.models import Follow, Post, Restaurant, User
from blackpeopleeats.schemas.feed import (
    FollowRequest,
    PostCreateRequest,
    PostResponse,
    RestaurantResponse,
    RestaurantWithRatingResponse,
    UserResponse,
    UserUpdateRequest,
)
from blackpeopleeats.seed import DEFAULT_USER_ID

logger = logging.getLogger(__name__)

DEFAULT_RATING = 5


class FeedService:
    """
    Business logic layer for the feed's CRUD operations.

    Responsibilities:
        - list_restaurants(): city-filtered listing with average rating
        - list_sponsors(): sponsored restaurants
        - get_user() / update_user(): profile read and full overwrite
        - follow(): idempotent follow insert
        - list_posts() / create_post(): feed read and post insert
    """

    async def list_restaurants(
        self, db: AsyncSession, city: Optional[str] = None
    ) -> List[RestaurantWithRatingResponse]:
        """
        Every restaurant (optionally only one city) with its mean post rating.

        Query plan:
            SELECT r.*, AVG(p.rating) AS avg_rating
            FROM restaurants r LEFT JOIN posts p ON r.id = p.restaurant_id
            [WHERE r.city = :city]
            GROUP BY r.id ORDER BY r.id
        """
        avg_rating = func.avg(Post.rating).label("avg_rating")
        query = (
            select(Restaurant, avg_rating)
            .outerjoin(Post, Post.restaurant_id == Restaurant.id)
        )
        if city:
            query = query.where(Restaurant.city == city)
        query = query.group_by(Restaurant.id).order_by(Restaurant.id)

        try:
            result = await db.execute(query)
        except SQLAlchemyError as e:
            logger.error("Database error listing restaurants: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve restaurants. Please try again.",
                context={"city": city, "error_type": type(e).__name__},
            )

        return [
            RestaurantWithRatingResponse(
                **RestaurantResponse.model_validate(restaurant).model_dump(),
                avg_rating=float(rating) if rating is not None else None,
            )
            for restaurant, rating in result.all()
        ]

    async def list_sponsors(self, db: AsyncSession) -> List[RestaurantResponse]:
        try:
            result = await db.execute(
                select(Restaurant)
                .where(Restaurant.is_sponsored.is_(True))
                .order_by(Restaurant.id)
            )
        except SQLAlchemyError as e:
            logger.error("Database error listing sponsors: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve sponsored restaurants. Please try again.",
                context={"error_type": type(e).__name__},
            )
        return [RestaurantResponse.model_validate(r) for r in result.scalars().all()]

    async def get_user(self, db: AsyncSession, user_id: int) -> Optional[UserResponse]:
        """
        Returns the user, or None when no row has this id.

        A missing user is not an error here: the route answers 200 with a
        JSON null and the client treats it as "no profile".
        """
        try:
            user = await db.get(User, user_id)
        except SQLAlchemyError as e:
            logger.error("Database error fetching user %s: %s", user_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the user. Please try again.",
                context={"user_id": user_id},
            )
        if user is None:
            logger.debug("User %s not found", user_id)
            return None
        return UserResponse.model_validate(user)

    async def update_user(
        self, db: AsyncSession, user_id: int, payload: UserUpdateRequest
    ) -> None:
        """
        Overwrite username, bio and profile_pic for user_id.

        A single UPDATE ... WHERE id = :id; zero matched rows is not reported.
        """
        try:
            result = await db.execute(
                update(User)
                .where(User.id == user_id)
                .values(
                    username=payload.username,
                    bio=payload.bio,
                    profile_pic=payload.profile_pic,
                )
            )
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error updating user %s: %s", user_id, str(e))
            raise DatabaseError(
                message="Could not update the profile. Please try again.",
                context={"user_id": user_id, "error_type": type(e).__name__},
            )
        logger.info("User %s profile overwritten (%d row(s))", user_id, result.rowcount)

    async def follow(self, db: AsyncSession, payload: FollowRequest) -> None:
        """
        Record follower → followed, ignoring an existing pair.

        Uses the dialect's INSERT ... ON CONFLICT DO NOTHING so concurrent
        duplicate requests cannot both insert.
        """
        insert = pg_insert if db.get_bind().dialect.name == "postgresql" else sqlite_insert
        stmt = (
            insert(Follow)
            .values(follower_id=payload.follower_id, followed_id=payload.followed_id)
            .on_conflict_do_nothing(index_elements=["follower_id", "followed_id"])
        )
        try:
            await db.execute(stmt)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error(
                "Database error recording follow %s -> %s: %s",
                payload.follower_id,
                payload.followed_id,
                str(e),
            )
            raise DatabaseError(
                message="Could not record the follow. Please try again.",
                context={"error_type": type(e).__name__},
            )
        logger.info("User %s follows %s", payload.follower_id, payload.followed_id)

    async def list_posts(
        self, db: AsyncSession, viewer_id: Optional[int] = None
    ) -> List[PostResponse]:
        """
        Newest-first feed, optionally scoped to a viewer and the users they follow.

        Query plan:
            SELECT p.*, r.name, r.city, u.profile_pic
            FROM posts p JOIN restaurants r ON p.restaurant_id = r.id
                         JOIN users u ON p.user_id = u.id
            [WHERE p.user_id IN (SELECT followed_id FROM follows
                                 WHERE follower_id = :viewer)
                   OR p.user_id = :viewer]
            ORDER BY p.created_at DESC, p.id DESC

        Posts whose restaurant or author row is missing drop out of the
        inner joins.
        """
        query = (
            select(
                Post,
                Restaurant.name.label("restaurant_name"),
                Restaurant.city.label("restaurant_city"),
                User.profile_pic.label("user_avatar"),
            )
            .join(Restaurant, Post.restaurant_id == Restaurant.id)
            .join(User, Post.user_id == User.id)
        )
        if viewer_id is not None:
            followed = select(Follow.followed_id).where(Follow.follower_id == viewer_id)
            query = query.where(
                or_(Post.user_id.in_(followed), Post.user_id == viewer_id)
            )
        query = query.order_by(Post.created_at.desc(), Post.id.desc())

        try:
            result = await db.execute(query)
        except SQLAlchemyError as e:
            logger.error("Database error listing posts: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve posts. Please try again.",
                context={"viewer_id": viewer_id, "error_type": type(e).__name__},
            )

        return [
            PostResponse(
                id=post.id,
                restaurant_id=post.restaurant_id,
                user_id=post.user_id,
                user_name=post.user_name,
                meal_name=post.meal_name,
                image_url=post.image_url,
                review=post.review,
                rating=post.rating,
                created_at=post.created_at,
                restaurant_name=restaurant_name,
                restaurant_city=restaurant_city,
                user_avatar=user_avatar,
            )
            for post, restaurant_name, restaurant_city, user_avatar in result.all()
        ]

    async def create_post(self, db: AsyncSession, payload: PostCreateRequest) -> int:
        """
        Insert a post and return its generated id.

        Missing (absent or null) user_id falls back to the default user (1)
        and missing rating to 5. Only None triggers a default: an explicit
        rating 0 is stored as 0 (a falsy check would turn it into 5).
        Neither the restaurant nor the user is checked here; see
        models/post.py for what the store itself enforces.
        """
        post = Post(
            restaurant_id=payload.restaurant_id,
            user_id=payload.user_id if payload.user_id is not None else DEFAULT_USER_ID,
            user_name=payload.user_name,
            meal_name=payload.meal_name,
            image_url=payload.image_url,
            review=payload.review,
            rating=payload.rating if payload.rating is not None else DEFAULT_RATING,
        )
        try:
            db.add(post)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error creating post: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not save your post. Please try again.",
                context={"restaurant_id": payload.restaurant_id, "error_type": type(e).__name__},
            )
        logger.info(
            "Post %s created for restaurant %s by user %s",
            post.id,
            post.restaurant_id,
            post.user_id,
        )
        return post.id


feed_service = FeedService()
