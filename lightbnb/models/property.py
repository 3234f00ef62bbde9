"""
Property model for rental listings.
Prices are stored in minor currency units (cents).
"""

from sqlalchemy import String, Text, Integer, ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship
from lightbnb.database import Base
from typing import List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from lightbnb.models.user import User
    from lightbnb.models.reservation import Reservation
    from lightbnb.models.review import PropertyReview


class Property(Base):
    """
    Property model for managing rental listings.
    Holds the owner reference plus the fourteen descriptive columns that can be
    written on insert.
    """

    __tablename__ = "properties"

    owner_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="ID of the user who owns this property"
    )

    # Listing information
    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Property listing title"
    )

    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    thumbnail_photo_url: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    cover_photo_url: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    cost_per_night: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        index=True,
        comment="Nightly price in cents"
    )

    # Address
    street: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    city: Mapped[Optional[str]] = mapped_column(String(255), nullable=True, index=True)
    province: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    post_code: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    country: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    # Specifications
    parking_spaces: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    number_of_bathrooms: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    number_of_bedrooms: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    # Relationships
    owner: Mapped["User"] = relationship("User", back_populates="properties")

    reservations: Mapped[List["Reservation"]] = relationship(
        "Reservation",
        back_populates="property",
        cascade="all, delete-orphan",
    )

    reviews: Mapped[List["PropertyReview"]] = relationship(
        "PropertyReview",
        back_populates="property",
        cascade="all, delete-orphan",
    )

    __table_args__ = (
        Index("idx_property_city_cost", "city", "cost_per_night"),
    )

    def __repr__(self) -> str:
        """String representation of the property."""
        return f"<Property(id={self.id}, title={self.title}, cost_per_night={self.cost_per_night})>"
