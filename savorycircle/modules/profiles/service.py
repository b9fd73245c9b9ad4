from supabase import Client
from savorycircle.core.storage import ImageStorage
from savorycircle.modules.foods.service import FoodService
from savorycircle.modules.profiles.schemas import (
    ProfileUpdate, ProfileResponse, PublicProfileResponse, UserSearchResult
)
from typing import List
from fastapi import HTTPException
from datetime import datetime, timezone
import logging

logger = logging.getLogger(__name__)

MIN_SEARCH_LENGTH = 3


class ProfileService:
    def __init__(self, supabase: Client, storage: ImageStorage = None):
        self.supabase = supabase
        self.storage = storage

    def get_profile(self, user_id: str) -> ProfileResponse:
        try:
            result = self.supabase.table("user_profiles")\
                .select("*")\
                .eq("id", user_id)\
                .maybe_single()\
                .execute()

            if not result or not result.data:
                raise HTTPException(status_code=404, detail="Profile not found")

            return ProfileResponse(**result.data)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_profile(self, user_id: str, profile_data: ProfileUpdate) -> ProfileResponse:
        try:
            update_data = {"updated_at": datetime.now(timezone.utc).isoformat()}
            if profile_data.username is not None:
                update_data["username"] = profile_data.username
            if profile_data.display_name is not None:
                update_data["display_name"] = profile_data.display_name.strip() or None

            result = self.supabase.table("user_profiles")\
                .update(update_data)\
                .eq("id", user_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Profile not found")

            return ProfileResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            message = str(e)
            if "duplicate" in message.lower() or "23505" in message:
                raise HTTPException(status_code=409, detail="Username is already taken")
            raise HTTPException(status_code=500, detail=f"Failed to update profile: {message}")

    def get_public_profile(self, username: str) -> PublicProfileResponse:
        """Profile page of another user, with their public foods"""
        try:
            result = self.supabase.table("user_profiles")\
                .select("*")\
                .eq("username", username)\
                .maybe_single()\
                .execute()
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

        if not result or not result.data:
            raise HTTPException(status_code=404, detail="User not found")

        profile = result.data
        foods = FoodService(self.supabase).list_public_foods(profile["id"])
        return PublicProfileResponse(
            id=profile["id"],
            username=profile.get("username"),
            display_name=profile.get("display_name"),
            avatar_url=profile.get("avatar_url"),
            foods=foods,
        )

    def search_users(self, query: str, current_user_id: str) -> List[UserSearchResult]:
        query = (query or "").strip()
        if len(query) < MIN_SEARCH_LENGTH:
            return []
        try:
            result = self.supabase.rpc("search_users", {
                "search_query": query,
                "current_user_id": current_user_id
            }).execute()
            return [UserSearchResult(**row) for row in (result.data or [])]
        except Exception as e:
            logger.error(f"Error searching users: {e}")
            raise HTTPException(status_code=500, detail="Failed to search users. Please try again.")

    def upload_avatar(self, user_id: str, file_content: bytes, content_type: str) -> ProfileResponse:
        if self.storage is None:
            raise HTTPException(status_code=500, detail="Storage is not configured")
        public_url = self.storage.upload_image(user_id, file_content, content_type)
        try:
            result = self.supabase.table("user_profiles")\
                .update({
                    "avatar_url": public_url,
                    "updated_at": datetime.now(timezone.utc).isoformat()
                })\
                .eq("id", user_id)\
                .execute()
            if not result.data:
                raise HTTPException(status_code=404, detail="Profile not found")
            return ProfileResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
