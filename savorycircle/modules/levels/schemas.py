from pydantic import BaseModel
from typing import Optional


class LevelInfo(BaseModel):
    title: str
    xp_required: int
    icon: str
    description: str
    division: str


class LevelProgressResponse(BaseModel):
    user_id: str
    current_xp: int
    level: LevelInfo
    next_level: Optional[LevelInfo] = None
    xp_needed: int
    progress_percent: float
