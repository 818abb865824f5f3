"""
ORM models. Importing this package registers every table on Base.metadata,
which is what create_schema() and Alembic's autogenerate read.
"""

from blackpeopleeats.models.follow import Follow
from blackpeopleeats.models.post import Post
from blackpeopleeats.models.restaurant import Restaurant
from blackpeopleeats.models.user import User

__all__ = ["Follow", "Post", "Restaurant", "User"]
