"""
BlackPeopleEats Backend — Post SQLAlchemy Model
=================================================

What:  ORM model for the `posts` table (one meal review).

Table Design Rationale:
    - user_name is denormalized: the feed shows the name the author had when
      posting, even after a profile overwrite
    - image_url holds either a remote URL or an inline data URI (TEXT, no
      length limit); uploads are never processed server-side
    - rating defaults to 5 and is not range-checked
    - created_at drives newest-first ordering → idx_posts_created_at

Referential integrity depends on the store:
    restaurant_id and user_id are declared as foreign keys everywhere.
    SQLite (the default store) does not enforce them, so a post naming a
    missing restaurant or user is saved and drops out of the feed joins.
    PostgreSQL enforces them; such an insert fails with IntegrityError,
    which FeedService answers as DatabaseError (HTTP 500 server_error).
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, Text, func, text
from sqlalchemy.orm import Mapped, mapped_column

from blackpeopleeats.database import Base


class Post(Base):
    """
    A meal post in the feed.

    Query Patterns:
        - Feed: ORDER BY created_at DESC, id DESC
        - Viewer feed: WHERE user_id IN (followed) OR user_id = :viewer
          → idx_posts_user_id
        - Average rating per restaurant: GROUP BY restaurant_id
          → idx_posts_restaurant_id
    """

    __tablename__ = "posts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    restaurant_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("restaurants.id"), nullable=True
    )

    user_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=True
    )

    user_name: Mapped[str] = mapped_column(String(80), nullable=False)

    meal_name: Mapped[str] = mapped_column(String(255), nullable=False)

    image_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    review: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    rating: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=5,
        server_default=text("5"),
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=func.now(),
    )

    __table_args__ = (
        Index("idx_posts_created_at", created_at.desc()),
        Index("idx_posts_user_id", "user_id"),
        Index("idx_posts_restaurant_id", "restaurant_id"),
    )

    def __repr__(self) -> str:
        return (
            f"<Post(id={self.id}, restaurant_id={self.restaurant_id}, "
            f"user_id={self.user_id}, rating={self.rating})>"
        )
