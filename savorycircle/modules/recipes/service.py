from datetime import datetime, timezone
from supabase import Client
from savorycircle.core.recipe_text import clean_summary, normalize_instructions, parse_nutrition_value
from savorycircle.modules.recipes.schemas import RecipeOfTheDayResponse
from savorycircle.modules.recipes.spoonacular import SpoonacularClient
from typing import Any, Dict, List, Optional
from fastapi import HTTPException
from bs4 import BeautifulSoup
import logging

logger = logging.getLogger(__name__)

TRACKED_NUTRIENTS = (
    ("Calories", "calories", "kcal"),
    ("Protein", "protein", "g"),
    ("Fat", "fat", "g"),
)

# Recipe of the day keyed by UTC date; only today's entry is kept
_RECIPE_CACHE: Dict[str, Dict[str, Any]] = {}


def utc_today() -> str:
    return datetime.now(timezone.utc).date().isoformat()


def clear_recipe_cache() -> None:
    _RECIPE_CACHE.clear()


def build_nutrition(nutrition_widget: Optional[Dict[str, Any]], detailed: Dict[str, Any]) -> Dict[str, Any]:
    """Prefer the nutrition widget values, falling back to the detailed nutrient list."""
    detailed_nutrients = (detailed.get("nutrition") or {}).get("nutrients") or []
    by_name = {
        str(n.get("name", "")).lower(): n.get("amount")
        for n in detailed_nutrients
        if isinstance(n, dict)
    }
    widget = nutrition_widget or {}

    nutrients = []
    for name, key, unit in TRACKED_NUTRIENTS:
        amount = parse_nutrition_value(widget.get(key)) or parse_nutrition_value(by_name.get(key)) or 0
        nutrients.append({"name": name, "amount": amount, "unit": unit})
    return {"nutrients": nutrients}


def _ingredients(recipe: Dict[str, Any]) -> List[str]:
    items = []
    for ingredient in recipe.get("extendedIngredients") or []:
        text = ingredient.get("original") or ingredient.get("name")
        if text:
            items.append(text.strip())
    return items


def _instructions(recipe: Dict[str, Any]) -> List[str]:
    analyzed = recipe.get("analyzedInstructions") or []
    if analyzed:
        steps = [s.get("step", "").strip() for s in analyzed[0].get("steps") or []]
        steps = [s for s in steps if s]
        if steps:
            return steps
    raw = recipe.get("instructions")
    if isinstance(raw, str):
        raw = BeautifulSoup(raw, "html.parser").get_text("\n")
    return normalize_instructions(raw)


def to_response(recipe_data: Dict[str, Any]) -> RecipeOfTheDayResponse:
    data = dict(recipe_data)
    data["summary"] = clean_summary(recipe_data.get("summary"))
    data["ingredients"] = _ingredients(recipe_data)
    data["instructions"] = _instructions(recipe_data)
    return RecipeOfTheDayResponse(**data)


class DailyRecipeService:
    """Fetches the daily recipe from Spoonacular and stores it with the service-role client"""

    def __init__(self, service_client: Client, spoonacular: Optional[SpoonacularClient] = None):
        self.supabase = service_client
        self.spoonacular = spoonacular or SpoonacularClient()

    async def refresh_daily_recipe(self) -> Dict[str, Any]:
        bundle = await self.spoonacular.fetch_daily_bundle()
        recipe = bundle["recipe"]
        detailed = bundle["detailed"]

        combined = {
            **recipe,
            **detailed,
            "nutrition": build_nutrition(bundle["nutrition_widget"], detailed),
        }
        today = utc_today()

        self.supabase.table("daily_recipes").upsert({
            "id": recipe["id"],
            "date": today,
            "recipe_data": combined
        }, on_conflict="date").execute()

        _RECIPE_CACHE.pop(today, None)
        logger.info("Stored daily recipe %s for %s", recipe["id"], today)
        return combined


class RecipeOfTheDayService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def get_recipe_of_the_day(self) -> RecipeOfTheDayResponse:
        today = utc_today()
        cached = _RECIPE_CACHE.get(today)
        if cached is not None:
            return to_response(cached)

        try:
            result = self.supabase.table("daily_recipes")\
                .select("recipe_data")\
                .eq("date", today)\
                .order("created_at", desc=True)\
                .limit(1)\
                .maybe_single()\
                .execute()
        except Exception as e:
            logger.error(f"Error fetching recipe: {e}")
            raise HTTPException(status_code=500, detail="Failed to fetch recipe")

        if not result or not result.data:
            raise HTTPException(status_code=404, detail="No recipe available for today")

        recipe_data = result.data["recipe_data"]
        _RECIPE_CACHE.clear()
        _RECIPE_CACHE[today] = recipe_data
        return to_response(recipe_data)
