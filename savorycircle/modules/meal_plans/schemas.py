from pydantic import BaseModel, Field, field_validator
from typing import Optional, List, Dict, Literal
from datetime import date, datetime

Slot = Literal["breakfast", "lunch", "dinner"]
Duration = Literal["one_week", "two_weeks"]


class MealRef(BaseModel):
    id: Optional[str] = None
    name: str


class DayMeals(BaseModel):
    breakfast: Optional[MealRef] = None
    lunch: Optional[MealRef] = None
    dinner: Optional[MealRef] = None


def _clean_plan_name(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("Please provide a name for your meal plan")
    return value


class MealPlanCreate(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    start_date: Optional[date] = None  # defaults to today
    end_date: Optional[date] = None
    duration: Optional[Duration] = None
    no_repeat: bool = False
    plan: Optional[Dict[str, DayMeals]] = None  # generated from favorites when omitted

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        return _clean_plan_name(value)


class MealPlanUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    plan: Optional[Dict[str, DayMeals]] = None
    no_repeat: Optional[bool] = None

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: Optional[str]) -> Optional[str]:
        return None if value is None else _clean_plan_name(value)


class SlotUpdate(BaseModel):
    food_id: Optional[str] = None  # None clears the slot


class MealPlanResponse(BaseModel):
    id: str
    user_id: str
    name: str
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    plan: Dict[str, DayMeals] = {}
    no_repeat: bool = False
    created_at: datetime

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def _date_only(cls, value):
        # older rows store full ISO timestamps
        if isinstance(value, str) and "T" in value:
            return value.split("T", 1)[0]
        return value

    @field_validator("plan", mode="before")
    @classmethod
    def _plan(cls, value):
        return value or {}

    class Config:
        from_attributes = True


class ShoppingListResponse(BaseModel):
    plan_id: str
    ingredients: List[str]
