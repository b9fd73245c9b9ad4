from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class PostCreate(BaseModel):
    food_id: str
    caption: Optional[str] = Field(default=None, max_length=2000)
    image_url: Optional[str] = None
    is_explore: bool = True


class PostResponse(BaseModel):
    id: str
    user_id: str
    food_id: Optional[str] = None
    caption: Optional[str] = None
    image_url: Optional[str] = None
    is_explore: bool = True
    likes_count: int = 0
    comments_count: int = 0
    created_at: datetime

    class Config:
        from_attributes = True
        extra = "allow"  # feed RPCs join author and food columns


class CommentCreate(BaseModel):
    content: str = Field(min_length=1, max_length=2000)


class CommentResponse(BaseModel):
    id: str
    post_id: str
    user_id: str
    content: str
    created_at: datetime

    class Config:
        from_attributes = True


class LikeResponse(BaseModel):
    post_id: str
    user_id: str
    liked: bool


class ImageUploadResponse(BaseModel):
    url: str
