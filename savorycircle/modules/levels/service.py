from dataclasses import asdict
from supabase import Client
from savorycircle.modules.levels.ladder import (
    LEVELS, Level, level_by_title, level_for_xp, next_level, progress_percent, clamp_percent
)
from savorycircle.modules.levels.schemas import LevelInfo, LevelProgressResponse
from typing import Any, Dict, List
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


def _division_label(value: Any, fallback: str) -> str:
    if value is None or value == "":
        return fallback
    if isinstance(value, int) or str(value).isdigit():
        return f"Division {value}"
    return str(value)


def _current_level(row: Dict[str, Any], xp: int) -> tuple:
    """LevelInfo for the row's title, plus the ladder rung used for defaults"""
    rung: Level = level_by_title(row.get("current_title")) or level_for_xp(xp)
    info = LevelInfo(
        title=row.get("current_title") or rung.title,
        xp_required=rung.xp_required,
        icon=row.get("current_icon") or rung.icon,
        description=rung.description,
        division=_division_label(row.get("current_division"), rung.division)
    )
    return info, rung


class LevelService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def get_progress(self, user_id: str) -> LevelProgressResponse:
        """Level progress as reported by get_level_progress; the ladder only fills gaps."""
        try:
            result = self.supabase.rpc("get_level_progress", {"user_id": user_id}).execute()
            rows = result.data or []
            row = rows[0] if isinstance(rows, list) and rows else (rows if isinstance(rows, dict) else {})

            xp = int(row.get("current_xp") or 0)
            level, rung = _current_level(row, xp)
            upcoming = next_level(rung)

            next_threshold = row.get("xp_for_next_level")
            if next_threshold is None:
                next_threshold = upcoming.xp_required if upcoming else xp
            xp_needed = max(0, int(next_threshold) - xp)

            percentage = row.get("progress_percentage")
            if percentage is None:
                percentage = progress_percent(xp, xp_needed)

            return LevelProgressResponse(
                user_id=user_id,
                current_xp=xp,
                level=level,
                next_level=LevelInfo(**asdict(upcoming)) if upcoming else None,
                xp_needed=xp_needed,
                progress_percent=round(clamp_percent(percentage), 2)
            )
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error fetching level progress for {user_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    @staticmethod
    def ladder() -> List[LevelInfo]:
        return [LevelInfo(**asdict(level)) for level in LEVELS]
