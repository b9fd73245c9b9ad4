"""
Cleanup helpers for recipe text coming from users, the AI suggestion endpoints
and Spoonacular.

Instructions are stored as a plain ordered list of steps. `normalize_instructions`
is applied when a food is written and when older rows (stored as a single string,
a JSON-encoded array, or an array holding one JSON-encoded array) are read back.
"""

import json
import re
from typing import Any, List, Optional, Union

from bs4 import BeautifulSoup

_EDGE_BRACKETS = re.compile(r"^\[|\]$")
_EDGE_QUOTES = re.compile(r'^"|"$')
_NUMBERED = re.compile(r"\d+\.")
_BEFORE_NUMBER = re.compile(r"(?=\d+\.)")
_STEP_NUMBER = re.compile(r"^\s*\d+\s*[.)]\s*")
_NON_NUMERIC = re.compile(r"[^\d.]")

_SUMMARY_NOISE = (
    "spoonacular score",
    "try similar recipes",
    "this recipe serves",
)

MIN_STEP_LENGTH = 3


def _strip_edges(step: str) -> str:
    return _EDGE_BRACKETS.sub("", _EDGE_QUOTES.sub("", step.strip()))


def _keep(steps: List[str], min_length: int = MIN_STEP_LENGTH) -> List[str]:
    return [s for s in steps if len(s) >= min_length]


def _split_text(text: str, split_newlines: bool) -> List[str]:
    if '","' in text:
        # flattened JSON array
        return _keep([_strip_edges(s) for s in text.split('","')])
    if _NUMBERED.search(text):
        return _keep([s.strip() for s in _BEFORE_NUMBER.split(text)])
    if ". " in text:
        steps = [s.strip() for s in text.split(". ")]
        return _keep([s if s.endswith(".") else s + "." for s in steps], min_length=6)
    if split_newlines and "\n" in text:
        return _keep([s.strip() for s in text.split("\n")])
    if "," in text:
        return _keep([s.strip() for s in text.split(",")])
    if split_newlines:
        return _keep([s.strip() for s in re.split(r"[\n.]+", text)])
    return _keep([text.strip()])


def _from_json_array(raw: str) -> List[str]:
    try:
        parsed = json.loads(raw)
    except ValueError:
        scrubbed = _EDGE_BRACKETS.sub("", raw).replace('\\"', '"').replace('"', "")
        return _split_text(scrubbed, split_newlines=False)
    if isinstance(parsed, list):
        return [_strip_edges(s) for s in parsed if isinstance(s, str) and _strip_edges(s)]
    return [_EDGE_BRACKETS.sub("", raw).replace('"', "")]


def _looks_like_json_array(value: str) -> bool:
    return value.startswith("[") and value.endswith("]")


def strip_step_number(step: str) -> str:
    """Remove a leading "1." / "2)" prefix from a step."""
    return _STEP_NUMBER.sub("", step)


def _final_cleanup(step: str) -> str:
    cleaned = step.strip()
    if len(cleaned) >= 2 and cleaned.startswith('"') and cleaned.endswith('"'):
        cleaned = cleaned[1:-1]
    cleaned = _EDGE_BRACKETS.sub("", cleaned)
    cleaned = cleaned.replace("\\", "")
    return strip_step_number(cleaned).strip()


def normalize_instructions(value: Union[None, str, List[Any]]) -> List[str]:
    """Coerce any stored or submitted instruction shape into an ordered list of steps.

    Best effort: malformed input degrades to splitting on punctuation rather than
    raising.
    """
    if not value:
        return []

    steps: List[str]
    if isinstance(value, list):
        strings = [item for item in value if isinstance(item, str)]
        if len(strings) == 1 and len(value) == 1 and _looks_like_json_array(strings[0].strip()):
            steps = _from_json_array(strings[0].strip())
        else:
            steps = []
            for item in strings:
                cleaned = item.strip()
                if len(cleaned) >= 2 and cleaned.startswith('"') and cleaned.endswith('"'):
                    cleaned = cleaned[1:-1]
                steps.append(_EDGE_BRACKETS.sub("", cleaned))
    elif isinstance(value, str):
        text = value.strip()
        if _looks_like_json_array(text):
            steps = _from_json_array(text)
        else:
            steps = _split_text(text, split_newlines=True)
    else:
        return []

    return _keep([_final_cleanup(s) for s in steps])


def split_ingredients(value: Union[None, str, List[Any]]) -> List[str]:
    """Ingredients arrive either as a list or as one comma-separated string."""
    if not value:
        return []
    if isinstance(value, str):
        items = value.split(",")
    else:
        items = [str(item) for item in value if item is not None]
    return [item.strip() for item in items if item.strip()]


def clean_summary(summary: Optional[str]) -> str:
    """Strip HTML from a Spoonacular summary and drop its marketing sentences."""
    if not summary:
        return ""
    text = BeautifulSoup(summary, "html.parser").get_text()
    sentences = [
        sentence for sentence in text.split(".")
        if sentence.strip()
        and not any(noise in sentence.lower() for noise in _SUMMARY_NOISE)
    ]
    return ". ".join(s.strip() for s in sentences)


def parse_nutrition_value(value: Any) -> float:
    """"123g" -> 123.0, numbers pass through, anything else is 0."""
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        numeric = _NON_NUMERIC.sub("", value)
        try:
            return float(numeric) if numeric else 0.0
        except ValueError:
            return 0.0
    return 0.0
