from supabase import Client
from savorycircle.modules.foods.service import FoodService
from savorycircle.modules.meal_plans.generator import (
    DURATION_DAYS, MAX_PLAN_DAYS, SLOTS, NotEnoughFoodsError,
    collect_ingredients, generate_plan, meal_ref, plan_food_ids, plan_from_picks,
)
from savorycircle.modules.meal_plans.schemas import (
    MealPlanCreate, MealPlanUpdate, MealPlanResponse, ShoppingListResponse
)
from typing import List, Optional
from fastapi import HTTPException
from datetime import date, timedelta
import random
import logging

logger = logging.getLogger(__name__)


def _plan_days(plan_data: MealPlanCreate, start: date) -> int:
    if plan_data.end_date is not None:
        if plan_data.end_date < start:
            raise HTTPException(status_code=400, detail="End date must not be before start date")
        days = (plan_data.end_date - start).days + 1
    else:
        days = DURATION_DAYS[plan_data.duration or "one_week"]
    if days > MAX_PLAN_DAYS:
        raise HTTPException(status_code=400, detail=f"Meal plans can span at most {MAX_PLAN_DAYS} days")
    return days


def _check_plan_dates(plan: dict, start: Optional[date], end: Optional[date]) -> None:
    """Every day key must be an ISO date inside start..end"""
    for day in plan:
        try:
            parsed = date.fromisoformat(day)
        except ValueError:
            raise HTTPException(status_code=400, detail=f"Invalid date in meal plan: {day}")
        if (start and parsed < start) or (end and parsed > end):
            raise HTTPException(status_code=400, detail=f"{day} is outside the meal plan's dates")


class MealPlanService:
    def __init__(self, supabase: Client, rng: Optional[random.Random] = None):
        self.supabase = supabase
        self.foods = FoodService(supabase)
        self.rng = rng or random.Random()

    def list_plans(self, user_id: str, search: Optional[str] = None) -> List[MealPlanResponse]:
        try:
            query = self.supabase.table("meal_plans")\
                .select("*")\
                .eq("user_id", user_id)
            if search:
                query = query.ilike("name", f"%{search}%")
            result = query.order("created_at", desc=True).execute()
            return [MealPlanResponse(**plan) for plan in result.data]
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=f"Failed to load meal plans: {e}")

    def get_plan(self, plan_id: str, user_id: str) -> MealPlanResponse:
        try:
            result = self.supabase.table("meal_plans")\
                .select("*")\
                .eq("id", plan_id)\
                .eq("user_id", user_id)\
                .maybe_single()\
                .execute()

            if not result or not result.data:
                raise HTTPException(status_code=404, detail="Meal plan not found")

            return MealPlanResponse(**result.data)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def _insert(self, payload: dict) -> MealPlanResponse:
        result = self.supabase.table("meal_plans").insert(payload).execute()
        if not result.data:
            raise HTTPException(status_code=500, detail="Failed to save meal plan")
        logger.info("Saved meal plan %s for user %s", result.data[0].get("id"), payload["user_id"])
        return MealPlanResponse(**result.data[0])

    def create_plan(self, plan_data: MealPlanCreate, user_id: str) -> MealPlanResponse:
        """Save an explicit plan, or generate one from the caller's favorite foods"""
        try:
            start = plan_data.start_date or date.today()
            days = _plan_days(plan_data, start)
            end = start + timedelta(days=days - 1)

            if plan_data.plan is not None:
                plan = {day: meals.model_dump() for day, meals in plan_data.plan.items()}
                _check_plan_dates(plan, start, end)
            else:
                foods = [food.model_dump() for food in self.foods.list_foods(user_id)]
                if not foods:
                    raise HTTPException(status_code=400, detail="Add some favorite foods before generating a meal plan")
                try:
                    plan = generate_plan(foods, start, days, no_repeat=plan_data.no_repeat, rng=self.rng)
                except NotEnoughFoodsError as e:
                    raise HTTPException(status_code=400, detail=str(e))

            return self._insert({
                "user_id": user_id,
                "name": plan_data.name,
                "start_date": start.isoformat(),
                "end_date": end.isoformat(),
                "plan": plan,
                "no_repeat": plan_data.no_repeat,
            })
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=f"Failed to save meal plan: {e}")

    def create_from_picks(self, food_ids: List[str], user_id: str, name: Optional[str] = None) -> MealPlanResponse:
        """Turn wheel picks (in pick order) into a plan starting today"""
        if not food_ids:
            raise HTTPException(status_code=400, detail="Add at least one meal to the plan")
        try:
            by_id = {food.id: food for food in self.foods.get_foods_by_ids(food_ids)}
            missing = [food_id for food_id in food_ids if food_id not in by_id]
            if missing:
                raise HTTPException(status_code=404, detail=f"Food not found: {missing[0]}")
            picks = [by_id[food_id].model_dump() for food_id in food_ids]
            today = date.today()
            plan, end = plan_from_picks(picks, today)
            return self._insert({
                "user_id": user_id,
                "name": name or f"Wheel Generated Plan - {today.isoformat()}",
                "start_date": today.isoformat(),
                "end_date": end.isoformat(),
                "plan": plan,
                "no_repeat": False,
            })
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=f"Failed to save meal plan: {e}")

    def update_plan(self, plan_id: str, plan_data: MealPlanUpdate, user_id: str) -> MealPlanResponse:
        try:
            update_data = {}
            if plan_data.name is not None:
                update_data["name"] = plan_data.name
            if plan_data.plan is not None:
                current = self.get_plan(plan_id, user_id)
                plan = {day: meals.model_dump() for day, meals in plan_data.plan.items()}
                _check_plan_dates(plan, current.start_date, current.end_date)
                update_data["plan"] = plan
            if plan_data.no_repeat is not None:
                update_data["no_repeat"] = plan_data.no_repeat
            if not update_data:
                raise HTTPException(status_code=400, detail="No fields to update")

            result = self.supabase.table("meal_plans")\
                .update(update_data)\
                .eq("id", plan_id)\
                .eq("user_id", user_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Meal plan not found")

            return MealPlanResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=f"Failed to update meal plan: {e}")

    def set_slot(self, plan_id: str, day: str, slot: str, food_id: Optional[str], user_id: str) -> MealPlanResponse:
        """Put a food into (or clear) one breakfast/lunch/dinner slot"""
        if slot not in SLOTS:
            raise HTTPException(status_code=400, detail=f"Unknown meal slot: {slot}")
        current = self.get_plan(plan_id, user_id)
        plan = {d: meals.model_dump() for d, meals in current.plan.items()}
        if day not in plan:
            raise HTTPException(status_code=400, detail=f"{day} is not part of this meal plan")
        plan[day][slot] = meal_ref(self.foods.get_food(food_id).model_dump()) if food_id else None
        try:
            result = self.supabase.table("meal_plans")\
                .update({"plan": plan})\
                .eq("id", plan_id)\
                .eq("user_id", user_id)\
                .execute()
            if not result.data:
                raise HTTPException(status_code=404, detail="Meal plan not found")
            return MealPlanResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=f"Failed to update meal plan: {e}")

    def delete_plan(self, plan_id: str, user_id: str) -> bool:
        try:
            result = self.supabase.table("meal_plans")\
                .delete()\
                .eq("id", plan_id)\
                .eq("user_id", user_id)\
                .execute()
            if not result.data:
                raise HTTPException(status_code=404, detail="Meal plan not found")
            return True
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=f"Failed to delete meal plan: {e}")

    def shopping_list(self, plan_id: str, user_id: str) -> ShoppingListResponse:
        """All ingredients needed for the foods referenced by the plan"""
        plan = self.get_plan(plan_id, user_id)
        ids = plan_food_ids({day: meals.model_dump() for day, meals in plan.plan.items()})
        foods = [food.model_dump() for food in self.foods.get_foods_by_ids(ids)]
        return ShoppingListResponse(plan_id=plan_id, ingredients=collect_ingredients(foods))
