from fastapi import APIRouter, Depends
from savorycircle.modules.levels.schemas import LevelInfo, LevelProgressResponse
from savorycircle.modules.levels.service import LevelService
from savorycircle.core.dependencies import get_current_user_id, get_user_supabase
from supabase import Client
from typing import List, Dict

router = APIRouter(prefix="/levels", tags=["levels"])


def get_level_service(supabase: Client = Depends(get_user_supabase)) -> LevelService:
    return LevelService(supabase)


@router.get("", response_model=List[LevelInfo])
async def list_levels():
    return LevelService.ladder()


@router.get("/me", response_model=LevelProgressResponse)
async def get_my_level(
    user_data: Dict = Depends(get_current_user_id),
    service: LevelService = Depends(get_level_service)
):
    return service.get_progress(user_data["id"])
