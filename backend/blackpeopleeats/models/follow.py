"""
BlackPeopleEats Backend — Follow SQLAlchemy Model
===================================================

What:  Directed follower → followed relation between two users.
Why:   Only used to scope the post feed (GET /api/posts?userId=).

Invariant:
    The composite primary key makes (follower_id, followed_id) unique; the
    service inserts with ON CONFLICT DO NOTHING so repeating a follow is a
    no-op. Self-follows are allowed and there is no unfollow path.

Referential integrity depends on the store:
    SQLite (the default store) accepts a follow naming a user that does
    not exist. PostgreSQL enforces both foreign keys and the insert fails
    with DatabaseError (HTTP 500 server_error).
"""

from sqlalchemy import ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column

from blackpeopleeats.database import Base


class Follow(Base):
    __tablename__ = "follows"

    follower_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id"), primary_key=True
    )
    followed_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id"), primary_key=True
    )

    def __repr__(self) -> str:
        return f"<Follow({self.follower_id} -> {self.followed_id})>"
