"""
BlackPeopleEats Backend — Restaurant SQLAlchemy Model
=======================================================

What:  ORM model for the `restaurants` table.
When:  Rows are written only by the seed loader; the API reads them.

Table Design Rationale:
    - Integer autoincrement id: posts reference restaurants by id and the
      web client links to them by id
    - lat/lng nullable: seed rows carry addresses only
    - is_sponsored: set out of band once a sponsorship payment clears;
      drives the GET /api/sponsors listing
    - No updated_at: there is no update endpoint in this version
"""

from typing import Optional

from sqlalchemy import Boolean, Float, Index, Integer, String, Text, false
from sqlalchemy.orm import Mapped, mapped_column

from blackpeopleeats.database import Base


class Restaurant(Base):
    """
    A restaurant listing.

    Query Patterns:
        - City listing: WHERE city = :city (exact, case-sensitive)
          → idx_restaurants_city
        - Sponsors: WHERE is_sponsored
    """

    __tablename__ = "restaurants"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    # Compared with = in the city filter, so "atlanta" does not match "Atlanta"
    city: Mapped[str] = mapped_column(String(120), nullable=False)

    address: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    lat: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    lng: Mapped[Optional[float]] = mapped_column(Float, nullable=True)

    category: Mapped[Optional[str]] = mapped_column(String(120), nullable=True)

    is_black_owned: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=false(),
    )

    is_sponsored: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=false(),
    )

    __table_args__ = (
        Index("idx_restaurants_city", "city"),
    )

    def __repr__(self) -> str:
        return f"<Restaurant(id={self.id}, name='{self.name}', city='{self.city}')>"
