"""
BlackPeopleEats Backend — User SQLAlchemy Model
=================================================

What:  ORM model for the `users` table.

Lifecycle:
    1. The seed loader inserts the default user (id 1)
    2. POST /api/users/{id} overwrites username, bio and profile_pic together
    3. Never deleted
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from blackpeopleeats.database import Base


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # UNIQUE: an overwrite that collides with another user's name fails in
    # the store and surfaces as a DatabaseError
    username: Mapped[str] = mapped_column(String(80), unique=True, nullable=False)

    bio: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # URL or inline data URI, stored verbatim
    profile_pic: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=func.now(),
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username='{self.username}')>"
