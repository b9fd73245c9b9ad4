from fastapi import APIRouter, Depends
from savorycircle.modules.meal_plans.schemas import (
    MealPlanCreate, MealPlanUpdate, MealPlanResponse, ShoppingListResponse, SlotUpdate, Slot
)
from savorycircle.modules.meal_plans.service import MealPlanService
from savorycircle.core.dependencies import get_current_user_id, get_user_supabase
from supabase import Client
from typing import List, Dict, Optional

router = APIRouter(prefix="/meal-plans", tags=["meal-plans"])


def get_meal_plan_service(supabase: Client = Depends(get_user_supabase)) -> MealPlanService:
    return MealPlanService(supabase)


@router.get("", response_model=List[MealPlanResponse])
async def list_meal_plans(
    search: Optional[str] = None,
    user_data: Dict = Depends(get_current_user_id),
    service: MealPlanService = Depends(get_meal_plan_service)
):
    return service.list_plans(user_data["id"], search=search)


@router.post("", response_model=MealPlanResponse, status_code=201)
async def create_meal_plan(
    plan_data: MealPlanCreate,
    user_data: Dict = Depends(get_current_user_id),
    service: MealPlanService = Depends(get_meal_plan_service)
):
    """Create a meal plan. Without a `plan` body it is generated from the caller's favorite foods."""
    return service.create_plan(plan_data, user_data["id"])


@router.get("/{plan_id}", response_model=MealPlanResponse)
async def get_meal_plan(
    plan_id: str,
    user_data: Dict = Depends(get_current_user_id),
    service: MealPlanService = Depends(get_meal_plan_service)
):
    return service.get_plan(plan_id, user_data["id"])


@router.put("/{plan_id}", response_model=MealPlanResponse)
async def update_meal_plan(
    plan_id: str,
    plan_data: MealPlanUpdate,
    user_data: Dict = Depends(get_current_user_id),
    service: MealPlanService = Depends(get_meal_plan_service)
):
    return service.update_plan(plan_id, plan_data, user_data["id"])


@router.put("/{plan_id}/days/{day}/{slot}", response_model=MealPlanResponse)
async def set_meal_plan_slot(
    plan_id: str,
    day: str,
    slot: Slot,
    slot_data: SlotUpdate,
    user_data: Dict = Depends(get_current_user_id),
    service: MealPlanService = Depends(get_meal_plan_service)
):
    """Assign a favorite food to one slot of one day (food_id null clears it)"""
    return service.set_slot(plan_id, day, slot, slot_data.food_id, user_data["id"])


@router.delete("/{plan_id}", status_code=204)
async def delete_meal_plan(
    plan_id: str,
    user_data: Dict = Depends(get_current_user_id),
    service: MealPlanService = Depends(get_meal_plan_service)
):
    service.delete_plan(plan_id, user_data["id"])
    return None


@router.get("/{plan_id}/shopping-list", response_model=ShoppingListResponse)
async def get_shopping_list(
    plan_id: str,
    user_data: Dict = Depends(get_current_user_id),
    service: MealPlanService = Depends(get_meal_plan_service)
):
    return service.shopping_list(plan_id, user_data["id"])
