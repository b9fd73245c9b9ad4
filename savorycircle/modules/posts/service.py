from supabase import Client
from savorycircle.core.storage import ImageStorage
from savorycircle.modules.posts.schemas import (
    PostCreate, PostResponse, CommentResponse, LikeResponse
)
from typing import List, Optional
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


def _first_row(data):
    if isinstance(data, list):
        return data[0] if data else None
    return data


class PostService:
    def __init__(self, supabase: Client, storage: Optional[ImageStorage] = None):
        self.supabase = supabase
        self.storage = storage

    def create_post(self, post_data: PostCreate, user_id: str) -> PostResponse:
        """Share one of the caller's foods; XP is awarded by the database"""
        try:
            result = self.supabase.rpc("create_post", {
                "p_food_id": post_data.food_id,
                "p_caption": post_data.caption or None,
                "p_is_explore": post_data.is_explore
            }).execute()

            post = _first_row(result.data)
            if not post:
                raise HTTPException(status_code=500, detail="Failed to create post. Please try again.")

            if post_data.image_url:
                updated = self.supabase.table("posts")\
                    .update({"image_url": post_data.image_url})\
                    .eq("id", post["id"])\
                    .eq("user_id", user_id)\
                    .execute()
                if updated.data:
                    post = updated.data[0]

            logger.info("User %s created post %s", user_id, post.get("id"))
            return PostResponse(**post)
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error creating post: {e}")
            raise HTTPException(status_code=500, detail="Failed to create post. Please try again.")

    def _feed(self, rpc_name: str, error_message: str) -> List[PostResponse]:
        try:
            result = self.supabase.rpc(rpc_name).execute()
            return [PostResponse(**post) for post in (result.data or [])]
        except Exception as e:
            logger.error(f"Error loading {rpc_name}: {e}")
            raise HTTPException(status_code=500, detail=error_message)

    def explore_feed(self) -> List[PostResponse]:
        return self._feed("get_explore_posts", "Failed to load posts. Please try again.")

    def trending(self) -> List[PostResponse]:
        return self._feed("get_trending_posts", "Error loading trending posts")

    def like(self, post_id: str, user_id: str) -> LikeResponse:
        try:
            self.supabase.table("post_likes").insert({
                "post_id": post_id,
                "user_id": user_id
            }).execute()
            return LikeResponse(post_id=post_id, user_id=user_id, liked=True)
        except Exception as e:
            message = str(e)
            if getattr(e, "code", None) == "23505" or "duplicate" in message.lower():
                raise HTTPException(status_code=400, detail="You already liked this post")
            raise HTTPException(status_code=500, detail=message)

    def unlike(self, post_id: str, user_id: str) -> LikeResponse:
        try:
            self.supabase.table("post_likes")\
                .delete()\
                .eq("post_id", post_id)\
                .eq("user_id", user_id)\
                .execute()
            return LikeResponse(post_id=post_id, user_id=user_id, liked=False)
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def add_comment(self, post_id: str, user_id: str, content: str) -> CommentResponse:
        try:
            result = self.supabase.table("comments").insert({
                "post_id": post_id,
                "user_id": user_id,
                "content": content.strip()
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to add comment")

            return CommentResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def list_comments(self, post_id: str) -> List[CommentResponse]:
        try:
            result = self.supabase.table("comments")\
                .select("*")\
                .eq("post_id", post_id)\
                .order("created_at")\
                .execute()
            return [CommentResponse(**comment) for comment in result.data]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def upload_image(self, user_id: str, file_content: bytes, content_type: str) -> str:
        if self.storage is None:
            raise HTTPException(status_code=500, detail="Storage is not configured")
        return self.storage.upload_image(user_id, file_content, content_type)
