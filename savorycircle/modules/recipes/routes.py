from fastapi import APIRouter, Depends, HTTPException
from savorycircle.database.supabase_client import get_supabase, get_service_supabase
from savorycircle.modules.recipes.schemas import RecipeOfTheDayResponse, CronResponse
from savorycircle.modules.recipes.service import DailyRecipeService, RecipeOfTheDayService
from savorycircle.core.dependencies import verify_cron_secret
from supabase import Client
import logging

logger = logging.getLogger(__name__)

router = APIRouter(tags=["recipes"])


def get_recipe_of_the_day_service(supabase: Client = Depends(get_supabase)) -> RecipeOfTheDayService:
    return RecipeOfTheDayService(supabase)


def get_daily_recipe_service(supabase: Client = Depends(get_service_supabase)) -> DailyRecipeService:
    return DailyRecipeService(supabase)


@router.get("/recipes/today", response_model=RecipeOfTheDayResponse)
async def recipe_of_the_day(
    service: RecipeOfTheDayService = Depends(get_recipe_of_the_day_service)
):
    return service.get_recipe_of_the_day()


@router.get("/cron/update-daily-recipe", response_model=CronResponse)
async def update_daily_recipe(
    _: None = Depends(verify_cron_secret),
    service: DailyRecipeService = Depends(get_daily_recipe_service)
):
    """Scheduled job entry point; guarded by the cron bearer secret"""
    try:
        await service.refresh_daily_recipe()
        return CronResponse(success=True)
    except Exception as e:
        logger.error(f"Error updating daily recipe: {e}")
        raise HTTPException(
            status_code=500,
            detail={"error": "Failed to update daily recipe", "details": str(e)}
        )
