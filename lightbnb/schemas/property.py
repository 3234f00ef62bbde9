"""
Pydantic schemas for property requests and responses.
Handles property creation, search options and search results.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from typing import Optional
from decimal import Decimal, ROUND_CEILING, ROUND_FLOOR, ROUND_HALF_EVEN


class PropertyBase(BaseModel):
    """The owner reference and the descriptive columns of a property."""

    owner_id: int = Field(..., gt=0, description="ID of the owning user")
    title: str = Field(..., min_length=1, max_length=255, description="Listing title")
    description: Optional[str] = None
    thumbnail_photo_url: Optional[str] = Field(None, max_length=255)
    cover_photo_url: Optional[str] = Field(None, max_length=255)
    cost_per_night: int = Field(..., ge=0, description="Nightly price in cents")
    street: Optional[str] = Field(None, max_length=255)
    city: Optional[str] = Field(None, max_length=255)
    province: Optional[str] = Field(None, max_length=255)
    post_code: Optional[str] = Field(None, max_length=255)
    country: Optional[str] = Field(None, max_length=255)
    parking_spaces: Optional[int] = Field(None, ge=0)
    number_of_bathrooms: Optional[int] = Field(None, ge=0)
    number_of_bedrooms: Optional[int] = Field(None, ge=0)


class PropertyCreate(PropertyBase):
    """Schema for inserting a property. Absent fields are stored as NULL."""

    @field_validator(
        "description",
        "thumbnail_photo_url",
        "cover_photo_url",
        "street",
        "city",
        "province",
        "post_code",
        "country",
        "parking_spaces",
        "number_of_bathrooms",
        "number_of_bedrooms",
        mode="before",
    )
    @classmethod
    def blank_to_none(cls, v):
        """Form submissions send empty strings for untouched inputs."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("title")
    @classmethod
    def validate_title(cls, v):
        """Validate and clean title."""
        if not v.strip():
            raise ValueError("Title cannot be empty")
        return v.strip()


class PropertyResponse(PropertyBase):
    """A properties row with its average review rating."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    average_rating: Optional[float] = None


class PropertySearchOptions(BaseModel):
    """
    Optional filters for property search.
    Prices are in major currency units; ``None`` or an empty string disables a filter.
    """

    city: Optional[str] = Field(None, max_length=255, description="Substring of the city name")
    owner_id: Optional[int] = Field(None, gt=0)
    minimum_price_per_night: Optional[Decimal] = Field(None, ge=0)
    maximum_price_per_night: Optional[Decimal] = Field(None, ge=0)
    minimum_rating: Optional[float] = Field(None, ge=0, le=5)

    @field_validator("*", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("city")
    @classmethod
    def strip_city(cls, v):
        return v.strip() if v is not None else v

    @model_validator(mode="after")
    def validate_price_range(self):
        """Validate that the price range is not inverted."""
        if (
            self.minimum_price_per_night is not None
            and self.maximum_price_per_night is not None
            and self.minimum_price_per_night > self.maximum_price_per_night
        ):
            raise ValueError("Minimum price cannot be greater than maximum price")
        return self

    @property
    def minimum_cost_per_night(self) -> Optional[int]:
        """Lower price bound in cents, rounded up so no cheaper listing matches."""
        return to_minor_units(self.minimum_price_per_night, ROUND_CEILING)

    @property
    def maximum_cost_per_night(self) -> Optional[int]:
        """Upper price bound in cents, rounded down so no dearer listing matches."""
        return to_minor_units(self.maximum_price_per_night, ROUND_FLOOR)


def to_minor_units(amount: Optional[Decimal], rounding: str = ROUND_HALF_EVEN) -> Optional[int]:
    """Convert a major-unit amount to whole cents."""
    if amount is None:
        return None
    return int((amount * 100).to_integral_value(rounding=rounding))
