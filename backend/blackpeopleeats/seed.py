"""
BlackPeopleEats Backend — Starter Dataset
===========================================

What:  Populates an empty store with five restaurants, the default user and
       two posts so a fresh install shows a non-empty feed.
When:  Application startup, after create_schema(); also used by the test
       fixtures to build the seeded in-memory store.

The trigger is an empty restaurants table. A store that already has
restaurants is left untouched, even if the default user was changed.
"""

import logging
from typing import Any, Dict, List

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from blackpeopleeats.models import Post, Restaurant, User

logger = logging.getLogger(__name__)


DEFAULT_USER_ID = 1

SEED_RESTAURANTS: List[Dict[str, Any]] = [
    {"name": "Slutty Vegan", "city": "Atlanta", "address": "154 Howell Mill Rd NW",
     "category": "Vegan", "is_black_owned": True, "is_sponsored": True},
    {"name": "Busy Bee Cafe", "city": "Atlanta", "address": "810 Martin Luther King Jr Dr SW",
     "category": "Soul Food", "is_black_owned": True, "is_sponsored": False},
    {"name": "Harold's Chicken Shack", "city": "Chicago", "address": "1208 E 53rd St",
     "category": "Chicken", "is_black_owned": True, "is_sponsored": False},
    {"name": "The Breakfast Klub", "city": "Houston", "address": "3711 Travis St",
     "category": "Breakfast", "is_black_owned": True, "is_sponsored": True},
    {"name": "Dooky Chase's", "city": "New Orleans", "address": "2301 Orleans Ave",
     "category": "Creole", "is_black_owned": True, "is_sponsored": False},
]

SEED_USER: Dict[str, Any] = {
    "id": DEFAULT_USER_ID,
    "username": "ChefBae",
    "bio": "Foodie & Explorer",
    "profile_pic": (
        "https://images.unsplash.com/photo-1531123897727-8f129e1bf98c"
        "?q=80&w=200&h=200&fit=crop"
    ),
}

# restaurant_id values refer to insertion order of SEED_RESTAURANTS (1-based)
SEED_POSTS: List[Dict[str, Any]] = [
    {"restaurant_id": 1, "user_id": DEFAULT_USER_ID, "user_name": "ChefBae",
     "meal_name": "One Night Stand Burger",
     "review": "The best vegan burger I've ever had. Period.", "rating": 5,
     "image_url": "https://images.unsplash.com/photo-1525059696034-4967a8e1dca2?q=80&w=600&h=450&fit=crop"},
    {"restaurant_id": 2, "user_id": DEFAULT_USER_ID, "user_name": "ChefBae",
     "meal_name": "Fried Chicken & Mac",
     "review": "Tastes like grandma's cooking. The line is worth it.", "rating": 4,
     "image_url": "https://images.unsplash.com/photo-1626645738196-c2a7c87a8f58?q=80&w=600&h=450&fit=crop"},
]


async def seed_if_empty(db: AsyncSession) -> bool:
    """
    Insert the starter dataset when the restaurants table is empty.

    Steps:
        1. COUNT restaurants; stop if any exist
        2. Insert restaurants and flush so their ids are assigned
        3. Insert the default user unless id 1 already exists
        4. Insert the two posts, pointing at the restaurants by their new ids

    The caller owns the transaction; this only flushes.

    Returns:
        True when rows were inserted, False when the store was already seeded.
    """
    count = (await db.execute(select(func.count(Restaurant.id)))).scalar() or 0
    if count:
        logger.debug("Store already holds %d restaurants; skipping seed", count)
        return False

    restaurants = [Restaurant(**row) for row in SEED_RESTAURANTS]
    db.add_all(restaurants)
    await db.flush()

    if await db.get(User, DEFAULT_USER_ID) is None:
        db.add(User(**SEED_USER))
        await db.flush()

    # Map the 1-based positions used in SEED_POSTS to the generated ids
    id_by_position = {position: r.id for position, r in enumerate(restaurants, start=1)}
    for row in SEED_POSTS:
        db.add(Post(**{**row, "restaurant_id": id_by_position[row["restaurant_id"]]}))
    await db.flush()

    logger.info(
        "Seeded %d restaurants, 1 user and %d posts",
        len(restaurants),
        len(SEED_POSTS),
    )
    return True
