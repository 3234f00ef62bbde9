"""
Pydantic schemas for user requests and responses.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from email_validator import validate_email, EmailNotValidError


class UserBase(BaseModel):
    """Base user schema with common fields."""

    name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="User's display name",
        examples=["Devin Sanders"]
    )

    email: str = Field(
        ...,
        max_length=255,
        description="User's email address",
        examples=["tristanjacobs@gmail.com"]
    )


class UserCreate(UserBase):
    """Schema for creating a new user."""

    password: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Password, usually already hashed by the caller"
    )

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        """Validate and clean name."""
        if not v.strip():
            raise ValueError("Name cannot be empty")
        return v.strip()

    @field_validator("email")
    @classmethod
    def validate_email_format(cls, v):
        """Check the address is well formed; the stored value is kept as given."""
        v = v.strip()
        try:
            validate_email(v, check_deliverability=False)
        except EmailNotValidError as e:
            raise ValueError(f"Invalid email format: {str(e)}")
        return v


class UserResponse(UserBase):
    """A row of the users table."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    password: str
