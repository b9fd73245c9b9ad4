from fastapi import APIRouter, Depends
from savorycircle.modules.foods.schemas import FoodCreate, FoodUpdate, FoodResponse, MealType
from savorycircle.modules.foods.service import FoodService
from savorycircle.core.dependencies import get_current_user_id, get_user_supabase
from supabase import Client
from typing import List, Dict, Optional

router = APIRouter(prefix="/foods", tags=["foods"])


def get_food_service(supabase: Client = Depends(get_user_supabase)) -> FoodService:
    return FoodService(supabase)


@router.get("", response_model=List[FoodResponse])
async def list_foods(
    search: Optional[str] = None,
    meal_type: Optional[MealType] = None,
    user_data: Dict = Depends(get_current_user_id),
    service: FoodService = Depends(get_food_service)
):
    """List the caller's favorite foods, optionally filtered by name or meal type"""
    return service.list_foods(user_data["id"], search=search, meal_type=meal_type)


@router.post("", response_model=FoodResponse, status_code=201)
async def create_food(
    food_data: FoodCreate,
    user_data: Dict = Depends(get_current_user_id),
    service: FoodService = Depends(get_food_service)
):
    return service.create_food(food_data, user_data["id"])


@router.get("/{food_id}", response_model=FoodResponse)
async def get_food(
    food_id: str,
    user_data: Dict = Depends(get_current_user_id),
    service: FoodService = Depends(get_food_service)
):
    """Get one food; RLS decides whether the caller may see it"""
    return service.get_food(food_id)


@router.put("/{food_id}", response_model=FoodResponse)
async def update_food(
    food_id: str,
    food_data: FoodUpdate,
    user_data: Dict = Depends(get_current_user_id),
    service: FoodService = Depends(get_food_service)
):
    return service.update_food(food_id, food_data, user_data["id"])


@router.delete("/{food_id}", status_code=204)
async def delete_food(
    food_id: str,
    user_data: Dict = Depends(get_current_user_id),
    service: FoodService = Depends(get_food_service)
):
    service.delete_food(food_id, user_data["id"])
    return None


@router.post("/{food_id}/copy", response_model=FoodResponse, status_code=201)
async def copy_food(
    food_id: str,
    user_data: Dict = Depends(get_current_user_id),
    service: FoodService = Depends(get_food_service)
):
    """Add someone else's food to my favorites"""
    return service.copy_food(food_id, user_data["id"])
