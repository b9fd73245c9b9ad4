from fastapi import APIRouter, Depends, File, UploadFile
from savorycircle.core.storage import ImageStorage, read_upload
from savorycircle.database.supabase_client import get_service_supabase
from savorycircle.modules.profiles.schemas import (
    ProfileUpdate, ProfileResponse, PublicProfileResponse, UserSearchResult
)
from savorycircle.modules.profiles.service import ProfileService
from savorycircle.core.dependencies import get_current_user_id, get_user_supabase
from supabase import Client
from typing import List, Dict

router = APIRouter(prefix="/profiles", tags=["profiles"])

AVATAR_BUCKET = "avatars"


def get_profile_service(
    supabase: Client = Depends(get_user_supabase),
    service_client: Client = Depends(get_service_supabase)
) -> ProfileService:
    return ProfileService(supabase, storage=ImageStorage(service_client, AVATAR_BUCKET))


@router.get("/me", response_model=ProfileResponse)
async def get_my_profile(
    user_data: Dict = Depends(get_current_user_id),
    service: ProfileService = Depends(get_profile_service)
):
    return service.get_profile(user_data["id"])


@router.put("/me", response_model=ProfileResponse)
async def update_my_profile(
    profile_data: ProfileUpdate,
    user_data: Dict = Depends(get_current_user_id),
    service: ProfileService = Depends(get_profile_service)
):
    return service.update_profile(user_data["id"], profile_data)


@router.post("/me/avatar", response_model=ProfileResponse)
async def upload_avatar(
    file: UploadFile = File(...),
    user_data: Dict = Depends(get_current_user_id),
    service: ProfileService = Depends(get_profile_service)
):
    content = await read_upload(file)
    return service.upload_avatar(user_data["id"], content, file.content_type)


@router.get("/search", response_model=List[UserSearchResult])
async def search_users(
    q: str = "",
    user_data: Dict = Depends(get_current_user_id),
    service: ProfileService = Depends(get_profile_service)
):
    """Find people to befriend by username or email (3+ characters)"""
    return service.search_users(q, user_data["id"])


@router.get("/{username}", response_model=PublicProfileResponse)
async def get_public_profile(
    username: str,
    user_data: Dict = Depends(get_current_user_id),
    service: ProfileService = Depends(get_profile_service)
):
    return service.get_public_profile(username)
