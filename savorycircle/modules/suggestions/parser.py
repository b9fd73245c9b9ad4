"""Parsers for the two AI response formats: a JSON recipe array and the
labelled ``Name:/Description:/Ingredients:/Recipe Instructions:`` text."""
import json
import re
from typing import Any, Dict, List

_FENCE = re.compile(r"^```(?:json)?\s*|\s*```$", re.IGNORECASE)
_NUMBERED_STEP = re.compile(r"^\d+\.\s*")
_BULLET = re.compile(r"^[-*•]\s*")


def parse_recipe_json(content: str) -> List[Dict[str, Any]]:
    """Decode the recipe array, tolerating a markdown code fence around it.

    Raises ValueError when the content is not JSON.
    """
    text = _FENCE.sub("", (content or "").strip())
    recipes = json.loads(text)
    if isinstance(recipes, dict):
        recipes = [recipes]
    if not isinstance(recipes, list):
        raise ValueError("Expected a JSON array of recipes")
    return recipes


def parse_meal_suggestions(content: str) -> List[Dict[str, Any]]:
    suggestions: List[Dict[str, Any]] = []
    current: Dict[str, Any] = {}
    section = None

    def flush():
        if current.get("name"):
            current.setdefault("description", "")
            current.setdefault("ingredients", [])
            current.setdefault("recipe", [])
            suggestions.append(dict(current))

    for raw_line in (content or "").split("\n"):
        line = raw_line.replace("**", "").strip()
        if not line:
            continue

        if line.startswith("Name:"):
            flush()
            current = {"name": line[len("Name:"):].strip(), "recipe": []}
            section = None
        elif line.startswith("Description:"):
            current["description"] = line[len("Description:"):].strip()
            section = None
        elif line.startswith("Ingredients:"):
            inline = line[len("Ingredients:"):]
            current["ingredients"] = [i.strip() for i in inline.split(",") if i.strip()]
            section = "ingredients"
        elif line.startswith("Recipe Instructions:"):
            section = "recipe"
        elif section == "ingredients" and _BULLET.match(line):
            current.setdefault("ingredients", []).append(_BULLET.sub("", line).strip())
        elif section == "recipe" and _NUMBERED_STEP.match(line):
            current.setdefault("recipe", []).append(_NUMBERED_STEP.sub("", line).strip())

    flush()
    return suggestions
