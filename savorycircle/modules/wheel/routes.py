from fastapi import APIRouter, Depends, HTTPException, Query
from savorycircle.modules.foods.schemas import MealType
from savorycircle.modules.foods.service import FoodService
from savorycircle.modules.meal_plans.schemas import MealPlanResponse
from savorycircle.modules.meal_plans.service import MealPlanService
from savorycircle.modules.wheel.picker import LEFT, RIGHT, decide_swipe, spin
from savorycircle.modules.wheel.schemas import SpinResponse, SwipeRequest, SwipeResponse, WheelPlanCreate
from savorycircle.core.dependencies import get_current_user_id, get_user_supabase
from supabase import Client
from typing import Dict, List, Optional

router = APIRouter(prefix="/wheel", tags=["wheel"])

_ACTIONS = {RIGHT: "keep", LEFT: "skip"}


def get_food_service(supabase: Client = Depends(get_user_supabase)) -> FoodService:
    return FoodService(supabase)


def get_meal_plan_service(supabase: Client = Depends(get_user_supabase)) -> MealPlanService:
    return MealPlanService(supabase)


@router.get("/spin", response_model=SpinResponse)
async def spin_wheel(
    exclude: Optional[List[str]] = Query(default=None),
    meal_type: Optional[MealType] = None,
    user_data: Dict = Depends(get_current_user_id),
    service: FoodService = Depends(get_food_service)
):
    """Pick a random favorite food. `exclude` drops foods already taken off the wheel."""
    excluded = set(exclude or [])
    foods = [f for f in service.list_foods(user_data["id"], meal_type=meal_type) if f.id not in excluded]
    if not foods:
        raise HTTPException(status_code=400, detail="You haven't added any favorite foods yet.")
    index, rotation = spin(len(foods))
    return SpinResponse(food=foods[index], index=index, rotation=rotation, segments=len(foods))


@router.post("/swipe", response_model=SwipeResponse)
async def swipe_card(
    swipe: SwipeRequest,
    user_data: Dict = Depends(get_current_user_id)
):
    """Classify a drag gesture on a suggestion card: right keeps the meal, left skips it."""
    decision, offset, velocity = decide_swipe([(s.x, s.t) for s in swipe.samples])
    return SwipeResponse(
        food_id=swipe.food_id,
        decision=decision,
        action=_ACTIONS.get(decision, "none"),
        offset=offset,
        velocity=velocity,
    )


@router.post("/plan", response_model=MealPlanResponse, status_code=201)
async def save_wheel_plan(
    plan_data: WheelPlanCreate,
    user_data: Dict = Depends(get_current_user_id),
    service: MealPlanService = Depends(get_meal_plan_service)
):
    """Save the meals picked on the wheel as a plan, three per day from today"""
    return service.create_from_picks(plan_data.food_ids, user_data["id"], name=plan_data.name)
