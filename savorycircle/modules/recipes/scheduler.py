import asyncio
import logging
from savorycircle.config import settings
from savorycircle.database.supabase_client import get_service_supabase
from savorycircle.modules.recipes.service import DailyRecipeService

logger = logging.getLogger(__name__)


async def refresh_daily_recipe_job():
    """Fetch and store today's recipe; failures are logged and retried on the next tick."""
    try:
        service = DailyRecipeService(get_service_supabase())
        await service.refresh_daily_recipe()
    except Exception as e:
        logger.error(f"Error refreshing daily recipe: {str(e)}")


async def daily_recipe_scheduler_loop():
    """Background task that refreshes the recipe of the day on a fixed interval"""
    while True:
        await refresh_daily_recipe_job()
        await asyncio.sleep(settings.daily_recipe_interval_seconds)
