from supabase import Client
from savorycircle.modules.foods.service import FoodService
from savorycircle.modules.friends.schemas import FriendRelationResponse, FriendResponse
from typing import List
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


class FriendService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_friends(self, user_id: str) -> List[FriendResponse]:
        """Friends and pending requests; accepted friends come with their favorite foods"""
        try:
            result = self.supabase.rpc("get_friends", {"p_user_id": user_id}).execute()
        except Exception as e:
            logger.error(f"Error fetching friends: {e}")
            raise HTTPException(status_code=500, detail="Failed to load friends. Please try again.")

        foods = FoodService(self.supabase)
        friends = []
        for row in result.data or []:
            friend = FriendResponse(**row)
            if friend.status == "accepted":
                friend.foods = foods.list_foods(friend.friend_id)
            friends.append(friend)
        return friends

    def _existing_relation(self, user_id: str, friend_id: str) -> list:
        rows = []
        for sender, recipient in ((user_id, friend_id), (friend_id, user_id)):
            result = self.supabase.table("friends")\
                .select("*")\
                .match({"user_id": sender, "friend_id": recipient})\
                .execute()
            rows.extend(result.data or [])
        return rows

    def send_request(self, user_id: str, friend_id: str) -> FriendRelationResponse:
        if user_id == friend_id:
            raise HTTPException(status_code=400, detail="You cannot add yourself as a friend")
        try:
            if self._existing_relation(user_id, friend_id):
                raise HTTPException(status_code=400, detail="Friend request already exists")

            result = self.supabase.table("friends").insert({
                "user_id": user_id,
                "friend_id": friend_id,
                "status": "pending"
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to add friend. Please try again.")

            logger.info("Friend request %s -> %s", user_id, friend_id)
            return FriendRelationResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error adding friend: {e}")
            raise HTTPException(status_code=500, detail="Failed to add friend. Please try again.")

    def respond(self, user_id: str, friend_id: str, status: str) -> FriendRelationResponse:
        """Accept or reject a request that `friend_id` sent to `user_id`"""
        try:
            result = self.supabase.table("friends")\
                .update({"status": status})\
                .match({"friend_id": user_id, "user_id": friend_id})\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Friend request not found")

            return FriendRelationResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error updating friend request: {e}")
            raise HTTPException(status_code=500, detail="Failed to update friend request. Please try again.")

    def remove_friend(self, user_id: str, friend_id: str) -> bool:
        try:
            removed = []
            for sender, recipient in ((user_id, friend_id), (friend_id, user_id)):
                result = self.supabase.table("friends")\
                    .delete()\
                    .match({"user_id": sender, "friend_id": recipient})\
                    .execute()
                removed.extend(result.data or [])

            if not removed:
                raise HTTPException(status_code=404, detail="Friend not found")
            return True
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
