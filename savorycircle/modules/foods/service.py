from supabase import Client
from savorycircle.core.recipe_text import normalize_instructions, split_ingredients
from savorycircle.modules.foods.schemas import FoodCreate, FoodUpdate, FoodResponse
from typing import List, Optional
from fastapi import HTTPException
from datetime import datetime, timezone
import logging

logger = logging.getLogger(__name__)

COPY_FIELDS = ("name", "ingredients", "recipe", "rating", "meal_types", "image_url")


class FoodService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_foods(
        self,
        user_id: str,
        search: Optional[str] = None,
        meal_type: Optional[str] = None
    ) -> List[FoodResponse]:
        """List a user's favorite foods, newest first"""
        try:
            query = self.supabase.table("favorite_foods")\
                .select("*")\
                .eq("user_id", user_id)
            if meal_type:
                query = query.contains("meal_types", [meal_type])
            if search:
                query = query.ilike("name", f"%{search}%")
            result = query.order("created_at", desc=True).execute()
            return [FoodResponse(**food) for food in result.data]
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def list_public_foods(self, user_id: str) -> List[FoodResponse]:
        """Foods another user has marked public"""
        try:
            result = self.supabase.table("favorite_foods")\
                .select("*")\
                .eq("user_id", user_id)\
                .eq("visibility", "public")\
                .order("created_at", desc=True)\
                .execute()
            return [FoodResponse(**food) for food in result.data]
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_food(self, food_id: str) -> FoodResponse:
        try:
            result = self.supabase.table("favorite_foods")\
                .select("*")\
                .eq("id", food_id)\
                .maybe_single()\
                .execute()

            if not result or not result.data:
                raise HTTPException(status_code=404, detail="Food not found")

            return FoodResponse(**result.data)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_foods_by_ids(self, food_ids: List[str]) -> List[FoodResponse]:
        if not food_ids:
            return []
        try:
            result = self.supabase.table("favorite_foods")\
                .select("*")\
                .in_("id", list(food_ids))\
                .execute()
            return [FoodResponse(**food) for food in result.data]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def create_food(self, food_data: FoodCreate, user_id: str) -> FoodResponse:
        """Create a favorite food; instructions are stored as an ordered list"""
        try:
            result = self.supabase.table("favorite_foods").insert({
                "user_id": user_id,
                "name": food_data.name.strip(),
                "ingredients": split_ingredients(food_data.ingredients),
                "recipe": normalize_instructions(food_data.recipe),
                "rating": food_data.rating,
                "meal_types": list(food_data.meal_types),
                "visibility": food_data.visibility,
                "image_url": food_data.image_url,
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to add food")

            logger.info("User %s added food %s", user_id, result.data[0].get("id"))
            return FoodResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_food(self, food_id: str, food_data: FoodUpdate, user_id: str) -> FoodResponse:
        try:
            update_data = {}
            if food_data.name is not None:
                update_data["name"] = food_data.name.strip()
            if food_data.ingredients is not None:
                update_data["ingredients"] = split_ingredients(food_data.ingredients)
            if food_data.recipe is not None:
                update_data["recipe"] = normalize_instructions(food_data.recipe)
            if food_data.rating is not None:
                update_data["rating"] = food_data.rating
            if food_data.meal_types is not None:
                update_data["meal_types"] = list(food_data.meal_types)
            if food_data.visibility is not None:
                update_data["visibility"] = food_data.visibility
            if food_data.image_url is not None:
                update_data["image_url"] = food_data.image_url

            if not update_data:
                raise HTTPException(status_code=400, detail="No fields to update")

            result = self.supabase.table("favorite_foods")\
                .update(update_data)\
                .eq("id", food_id)\
                .eq("user_id", user_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Food not found")

            return FoodResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def delete_food(self, food_id: str, user_id: str) -> bool:
        try:
            result = self.supabase.table("favorite_foods")\
                .delete()\
                .eq("id", food_id)\
                .eq("user_id", user_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Food not found")
            return True
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def copy_food(self, food_id: str, user_id: str) -> FoodResponse:
        """Add a friend's (or a public) food to the caller's favorites as a new private row"""
        source = self.get_food(food_id)
        if source.user_id == user_id:
            raise HTTPException(status_code=400, detail="This food is already in your favorites")
        try:
            payload = {field: getattr(source, field) for field in COPY_FIELDS}
            payload.update({
                "user_id": user_id,
                "visibility": "private",
                "created_at": datetime.now(timezone.utc).isoformat(),
            })
            result = self.supabase.table("favorite_foods").insert(payload).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to add food to your favorites")

            return FoodResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
