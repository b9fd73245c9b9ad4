"""Random meal plan generation and plan helpers that do not touch the database."""

import random
from datetime import date, timedelta
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

SLOTS = ("breakfast", "lunch", "dinner")
DURATION_DAYS = {"one_week": 7, "two_weeks": 14}
MAX_PLAN_DAYS = 31
WHEEL_PLAN_MIN_DAYS = 7

Plan = Dict[str, Dict[str, Optional[Dict[str, Any]]]]


class NotEnoughFoodsError(ValueError):
    def __init__(self, needed: int, available: int):
        self.needed = needed
        self.available = available
        super().__init__(
            f"Not enough foods for a no-repeat plan. You need at least {needed} different foods, "
            f"but you only have {available}."
        )


def meal_ref(food: Mapping[str, Any]) -> Dict[str, Any]:
    """What a plan slot stores for a food."""
    return {"id": food.get("id"), "name": food.get("name")}


def plan_dates(start: date, days: int) -> List[str]:
    return [(start + timedelta(days=offset)).isoformat() for offset in range(days)]


def empty_plan(start: date, days: int) -> Plan:
    return {day: {slot: None for slot in SLOTS} for day in plan_dates(start, days)}


def generate_plan(
    foods: Sequence[Mapping[str, Any]],
    start: date,
    days: int,
    no_repeat: bool = False,
    rng: Optional[random.Random] = None,
) -> Plan:
    """Fill every slot of `days` consecutive dates with a random favorite food.

    With `no_repeat` each food is used at most once, so at least 3 * days
    foods are required.
    """
    rng = rng or random.Random()
    needed = days * len(SLOTS)
    if no_repeat and len(foods) < needed:
        raise NotEnoughFoodsError(needed, len(foods))

    available = list(foods)
    plan: Plan = {}
    for day in plan_dates(start, days):
        meals: Dict[str, Optional[Dict[str, Any]]] = {}
        for slot in SLOTS:
            if not available:
                meals[slot] = None
                continue
            index = rng.randrange(len(available))
            meals[slot] = meal_ref(available[index])
            if no_repeat:
                available.pop(index)
        plan[day] = meals
    return plan


def plan_from_picks(picks: Sequence[Mapping[str, Any]], start: date) -> Tuple[Plan, date]:
    """Lay wheel picks out three per day (breakfast, lunch, dinner) starting at `start`.

    Returns the plan and its end date, which is never earlier than a week after start.
    """
    plan: Plan = {}
    for index, food in enumerate(picks):
        day = (start + timedelta(days=index // len(SLOTS))).isoformat()
        slot = SLOTS[index % len(SLOTS)]
        plan.setdefault(day, {s: None for s in SLOTS})[slot] = meal_ref(food)
    used_days = (len(picks) + len(SLOTS) - 1) // len(SLOTS)
    end = start + timedelta(days=max(WHEEL_PLAN_MIN_DAYS, used_days) - 1)
    return plan, end


def plan_food_ids(plan: Mapping[str, Mapping[str, Any]]) -> List[str]:
    ids: List[str] = []
    for meals in plan.values():
        for slot in SLOTS:
            ref = (meals or {}).get(slot)
            if ref and ref.get("id") and ref["id"] not in ids:
                ids.append(ref["id"])
    return ids


def collect_ingredients(foods: Iterable[Mapping[str, Any]]) -> List[str]:
    """Unique ingredients (case-insensitive), sorted alphabetically."""
    seen: Dict[str, str] = {}
    for food in foods:
        for ingredient in food.get("ingredients") or []:
            cleaned = ingredient.strip()
            if cleaned and cleaned.lower() not in seen:
                seen[cleaned.lower()] = cleaned
    return [seen[key] for key in sorted(seen)]
