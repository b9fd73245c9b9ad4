from pydantic import BaseModel, Field
from typing import List, Optional
from savorycircle.modules.foods.schemas import FoodResponse


class SpinResponse(BaseModel):
    food: FoodResponse
    index: int
    rotation: float
    segments: int


class PointerSample(BaseModel):
    x: float
    t: float  # milliseconds


class SwipeRequest(BaseModel):
    food_id: str
    samples: List[PointerSample] = Field(min_length=1)


class SwipeResponse(BaseModel):
    food_id: str
    decision: str  # right | left | none
    action: str  # keep | skip | none
    offset: float
    velocity: float


class WheelPlanCreate(BaseModel):
    food_ids: List[str] = Field(min_length=1)
    name: Optional[str] = None
