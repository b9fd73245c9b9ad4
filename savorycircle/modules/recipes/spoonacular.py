"""Thin async client for the Spoonacular recipe API."""
import logging
from typing import Any, Dict, Optional

import httpx

from savorycircle.config import settings

logger = logging.getLogger(__name__)


class SpoonacularError(Exception):
    """Raised when a required Spoonacular request fails."""


class SpoonacularClient:
    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self.api_key = api_key if api_key is not None else settings.spoonacular_api_key
        self.base_url = (base_url or settings.spoonacular_base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.spoonacular_timeout_seconds

    async def _get(self, client: httpx.AsyncClient, path: str, **params) -> httpx.Response:
        return await client.get(
            f"{self.base_url}{path}",
            params={"apiKey": self.api_key, **params},
            headers={"Content-Type": "application/json"},
        )

    async def fetch_daily_bundle(self) -> Dict[str, Any]:
        """Fetch a random main course plus its nutrition widget and detailed information.

        Returns a dict with keys ``recipe``, ``nutrition_widget`` (None when that
        optional call fails) and ``detailed``.
        """
        if not self.api_key:
            raise SpoonacularError("Spoonacular API key not configured")

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await self._get(client, "/recipes/random", number=1, tags="main course")
            if response.status_code != 200:
                raise SpoonacularError(
                    f"Spoonacular API request failed with status {response.status_code}: {response.text}"
                )
            recipes = response.json().get("recipes") or []
            if not recipes:
                raise SpoonacularError("Spoonacular returned no recipes")
            recipe = recipes[0]
            recipe_id = recipe["id"]
            logger.info("Random recipe fetched: %s", recipe.get("title"))

            nutrition_widget = None
            widget_response = await self._get(client, f"/recipes/{recipe_id}/nutritionWidget.json")
            if widget_response.status_code == 200:
                nutrition_widget = widget_response.json()
            else:
                logger.warning(
                    "Failed to fetch nutrition data for recipe %s: status %s",
                    recipe_id, widget_response.status_code
                )

            detailed_response = await self._get(
                client, f"/recipes/{recipe_id}/information", includeNutrition="true"
            )
            if detailed_response.status_code != 200:
                raise SpoonacularError(
                    f"Spoonacular API request failed with status {detailed_response.status_code}: "
                    f"{detailed_response.text}"
                )

        return {
            "recipe": recipe,
            "nutrition_widget": nutrition_widget,
            "detailed": detailed_response.json(),
        }
