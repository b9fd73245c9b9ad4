from savorycircle.config import settings
from savorycircle.modules.suggestions.openrouter import OpenRouterClient, OpenRouterError, MEAL_SYSTEM_PROMPT
from savorycircle.modules.suggestions.parser import parse_recipe_json, parse_meal_suggestions
from savorycircle.modules.suggestions.schemas import (
    RecipeSuggestion, MealSuggestion, MealSuggestionResponse
)
from typing import List, Optional
from fastapi import HTTPException
import httpx
import logging

logger = logging.getLogger(__name__)

RECIPE_PROMPT = """
Based on these favorite foods: {foods},
suggest {count} creative recipe(s) that incorporate some of these ingredients.

For each recipe, provide:
1. Recipe name
2. List of ingredients with measurements
3. Step-by-step cooking instructions
4. Preparation time
5. Cooking time
6. Number of servings

Format your response as a valid JSON array with objects containing:
{{
  "name": "Recipe Name",
  "ingredients": ["ingredient 1", "ingredient 2", ...],
  "instructions": ["step 1", "step 2", ...],
  "prepTime": "X minutes",
  "cookTime": "Y minutes",
  "servings": Z
}}
"""

TIMEOUT_MESSAGE = "Request took too long to complete. Please try again."


class SuggestionService:
    def __init__(self, client: Optional[OpenRouterClient] = None):
        self.client = client or OpenRouterClient()

    async def recipe_suggestions(self, favorite_foods: List[str], count: int = 1) -> List[RecipeSuggestion]:
        if not self.client.configured:
            raise HTTPException(status_code=500, detail="API configuration missing")
        if not favorite_foods:
            raise HTTPException(status_code=400, detail="Add some favorite foods to get recipe suggestions")

        prompt = RECIPE_PROMPT.format(foods=", ".join(favorite_foods), count=count)
        try:
            content = await self.client.chat(
                settings.openrouter_model,
                [{"role": "user", "content": prompt}]
            )
        except httpx.TimeoutException:
            raise HTTPException(status_code=408, detail=TIMEOUT_MESSAGE)
        except OpenRouterError as e:
            raise HTTPException(status_code=e.status_code, detail=str(e))

        try:
            recipes = parse_recipe_json(content)
            return [RecipeSuggestion(**recipe) for recipe in recipes]
        except Exception as e:
            logger.error(f"Failed to parse recipe JSON: {e}")
            raise HTTPException(status_code=500, detail="Failed to parse recipe JSON")

    async def meal_suggestions(self, prompt: str) -> MealSuggestionResponse:
        if not prompt or not prompt.strip():
            raise HTTPException(status_code=400, detail="Prompt is required")
        if not self.client.configured:
            raise HTTPException(status_code=500, detail="API configuration missing")

        logger.info("Sending request to OpenRouter API...")
        try:
            content = await self.client.chat(
                settings.openrouter_suggestion_model,
                [
                    {"role": "system", "content": MEAL_SYSTEM_PROMPT},
                    {"role": "user", "content": prompt.strip()},
                ],
                temperature=0.7,
                max_tokens=500,
            )
        except httpx.TimeoutException:
            raise HTTPException(status_code=408, detail=TIMEOUT_MESSAGE)
        except OpenRouterError as e:
            raise HTTPException(status_code=500, detail=str(e))
        except httpx.HTTPError as e:
            logger.error(f"AI Suggestion Error: {e}")
            raise HTTPException(status_code=500, detail="Failed to get AI suggestions")

        suggestions = parse_meal_suggestions(content)
        if not suggestions:
            raise HTTPException(
                status_code=500,
                detail="Could not parse any meal suggestions from the AI response"
            )
        return MealSuggestionResponse(
            suggestions=[MealSuggestion(**s) for s in suggestions],
            content=content
        )
