import logging
from typing import Any, Dict, List, Optional

import httpx

from savorycircle.config import settings

logger = logging.getLogger(__name__)

MEAL_SYSTEM_PROMPT = """You are a helpful culinary AI assistant. When suggesting meals, always format your response in the following structure:

Name: [Meal Name]
Description: [Brief description of the meal]
Ingredients:
- [ingredient 1]
- [ingredient 2]
- [ingredient 3]
- [continue listing all ingredients]
Recipe Instructions:
1. [First step]
2. [Second step]
3. [Continue with remaining steps]

IMPORTANT: You MUST include a comprehensive list of ingredients for each meal suggestion. List ingredients on separate lines using bullet points. For simpler queries (like "meal for dinner"), suggest popular, well-known dishes with common ingredients.

Even for basic requests like "I want a meal" or "suggest dinner ideas", always include a complete set of ingredients. Never leave the ingredients section empty or incomplete.

Provide 3 meal suggestions that match the user's request."""


class OpenRouterError(Exception):
    def __init__(self, message: str, status_code: int = 500):
        super().__init__(message)
        self.status_code = status_code


class OpenRouterClient:
    def __init__(
        self,
        api_key: Optional[str] = None,
        api_url: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self.api_key = api_key if api_key is not None else settings.openrouter_api_key
        self.api_url = api_url or settings.openrouter_api_url
        self.timeout = timeout if timeout is not None else settings.ai_request_timeout_seconds

    @property
    def configured(self) -> bool:
        return bool(self.api_key and self.api_url)

    async def chat(
        self,
        model: str,
        messages: List[Dict[str, str]],
        **options: Any,
    ) -> str:
        """Send a chat completion and return the first choice's message content.

        httpx.TimeoutException propagates so callers can map it to 408.
        """
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "HTTP-Referer": settings.site_url,
            "X-Title": "SavoryCircle",
            "Content-Type": "application/json",
        }
        payload = {"model": model, "messages": messages, **options}

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.post(self.api_url, headers=headers, json=payload)

        if response.status_code != 200:
            message = None
            try:
                message = (response.json().get("error") or {}).get("message")
            except ValueError:
                pass
            logger.error("OpenRouter API error: status %s", response.status_code)
            raise OpenRouterError(
                message or f"API request failed with status {response.status_code}",
                status_code=response.status_code,
            )

        data = response.json()
        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError):
            content = None
        if not content:
            raise OpenRouterError("Invalid response format from AI service")
        return content
