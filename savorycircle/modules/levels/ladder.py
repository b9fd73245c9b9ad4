"""Static XP ladder for the gamified cooking levels.

Levels and XP come from the get_level_progress stored procedure; this table
describes each rung and fills in whatever the procedure row leaves out.
"""
from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class Level:
    title: str
    xp_required: int
    icon: str
    description: str
    division: str = "Division 1"


LEVELS: Tuple[Level, ...] = (
    Level("Kitchen Novice", 0, "👨‍🍳", "Welcome to SavoryCircle! Start your culinary journey."),
    Level("Apprentice Chef", 100, "🍳", "You're getting comfortable in the kitchen!"),
    Level("Home Cook", 2000, "🏠", "Your meal planning skills are impressive!"),
    Level("Culinary Enthusiast", 10000, "🌟", "A true meal planning master!"),
    Level("Master Chef", 50000, "👑", "Elite culinary master!"),
    Level("Gourmet Guru", 200000, "🎖️", "Elite culinary influencer!"),
    Level("Michelin Star", 500000, "⭐", "Elite status achieved! You're a SavoryCircle legend."),
)


def level_for_xp(xp: int) -> Level:
    current = LEVELS[0]
    for level in LEVELS:
        if xp >= level.xp_required:
            current = level
    return current


def next_level(level: Level) -> Optional[Level]:
    index = LEVELS.index(level)
    if index + 1 < len(LEVELS):
        return LEVELS[index + 1]
    return None


def progress_percent(xp: int, xp_to_next_level: int) -> float:
    """Share of the way to the next level, clamped to 0..100"""
    if xp_to_next_level <= 0:
        return 100.0
    total = xp + xp_to_next_level
    if total <= 0:
        return 0.0
    return clamp_percent(xp / total * 100)


def level_by_title(title: Optional[str]) -> Optional[Level]:
    for level in LEVELS:
        if level.title == title:
            return level
    return None


def clamp_percent(value: float) -> float:
    return min(100.0, max(0.0, float(value)))
