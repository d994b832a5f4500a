from datetime import datetime
from typing import Optional

from pydantic import Field as PydanticField
from sqlmodel import Field, SQLModel

from tracker.data.schemas.base import ApiModel, UtcDatetime, timestamp_column, utc_now

USERNAME_PATTERN = r"^[a-zA-Z0-9_]{3,20}$"
USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 20


class User(SQLModel, table=True):
    """Account row owned by the sign-in provider; the id is its subject claim."""

    __tablename__ = "users"

    id: str = Field(primary_key=True)
    name: str = Field(nullable=False)
    email: str = Field(nullable=False, unique=True)
    image: Optional[str] = Field(default=None, nullable=True)
    username: Optional[str] = Field(default=None, nullable=True, unique=True, index=True)
    created_at: datetime = Field(default_factory=utc_now, sa_column=timestamp_column())
    updated_at: datetime = Field(default_factory=utc_now, sa_column=timestamp_column())


class UserProfile(ApiModel):
    id: str
    name: str
    username: Optional[str] = None
    image: Optional[str] = None
    created_at: UtcDatetime


class UsernameUpdateRequest(ApiModel):
    username: str = PydanticField(
        ...,
        min_length=USERNAME_MIN_LENGTH,
        max_length=USERNAME_MAX_LENGTH,
        examples=["tourist_fan"],
    )


class UsernameUpdateResponse(ApiModel):
    success: bool = True
    username: str
