from pydantic import BaseModel, Field
from typing import Optional, List, Literal
from datetime import datetime
from savorycircle.modules.foods.schemas import FoodResponse


# Supabase user ids (uuid text)
USER_ID_PATTERN = r"^[A-Za-z0-9_-]{1,64}$"


class FriendRequestCreate(BaseModel):
    friend_id: str = Field(pattern=USER_ID_PATTERN)


class FriendRequestRespond(BaseModel):
    status: Literal["accepted", "rejected"]


class FriendRelationResponse(BaseModel):
    id: Optional[str] = None
    user_id: str
    friend_id: str
    status: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class FriendResponse(BaseModel):
    friend_id: str
    username: Optional[str] = None
    email: Optional[str] = None
    display_name: Optional[str] = None
    avatar_url: Optional[str] = None
    status: str
    is_sender: bool = False
    foods: List[FoodResponse] = []
