from pydantic import BaseModel, field_validator
from typing import Optional, List
from datetime import datetime
import re
from savorycircle.modules.foods.schemas import FoodResponse

USERNAME_PATTERN = re.compile(r"^[a-zA-Z0-9_]+$")


class ProfileUpdate(BaseModel):
    username: Optional[str] = None
    display_name: Optional[str] = None

    @field_validator("username")
    @classmethod
    def _validate_username(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        value = value.strip()
        if len(value) < 3:
            raise ValueError("Username must be at least 3 characters long")
        if not USERNAME_PATTERN.match(value):
            raise ValueError("Username can only contain letters, numbers, and underscores")
        return value


class ProfileResponse(BaseModel):
    id: str
    username: Optional[str] = None
    email: Optional[str] = None
    display_name: Optional[str] = None
    avatar_url: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class PublicProfileResponse(BaseModel):
    id: str
    username: Optional[str] = None
    display_name: Optional[str] = None
    avatar_url: Optional[str] = None
    foods: List[FoodResponse]


class UserSearchResult(BaseModel):
    id: str
    username: Optional[str] = None
    email: Optional[str] = None
    display_name: Optional[str] = None
    avatar_url: Optional[str] = None
