from fastapi import APIRouter, Depends, File, UploadFile
from savorycircle.core.storage import ImageStorage, read_upload
from savorycircle.database.supabase_client import get_service_supabase
from savorycircle.modules.posts.schemas import (
    PostCreate, PostResponse, CommentCreate, CommentResponse, LikeResponse, ImageUploadResponse
)
from savorycircle.modules.posts.service import PostService
from savorycircle.core.dependencies import get_current_user_id, get_user_supabase
from supabase import Client
from typing import List, Dict

router = APIRouter(prefix="/posts", tags=["posts"])

POST_IMAGE_BUCKET = "post-images"


def get_post_service(
    supabase: Client = Depends(get_user_supabase),
    service_client: Client = Depends(get_service_supabase)
) -> PostService:
    return PostService(supabase, storage=ImageStorage(service_client, POST_IMAGE_BUCKET))


@router.post("", response_model=PostResponse, status_code=201)
async def create_post(
    post_data: PostCreate,
    user_data: Dict = Depends(get_current_user_id),
    service: PostService = Depends(get_post_service)
):
    return service.create_post(post_data, user_data["id"])


@router.get("/explore", response_model=List[PostResponse])
async def explore_feed(
    user_data: Dict = Depends(get_current_user_id),
    service: PostService = Depends(get_post_service)
):
    return service.explore_feed()


@router.get("/trending", response_model=List[PostResponse])
async def trending_posts(
    user_data: Dict = Depends(get_current_user_id),
    service: PostService = Depends(get_post_service)
):
    return service.trending()


@router.post("/images", response_model=ImageUploadResponse, status_code=201)
async def upload_post_image(
    file: UploadFile = File(...),
    user_data: Dict = Depends(get_current_user_id),
    service: PostService = Depends(get_post_service)
):
    content = await read_upload(file)
    return ImageUploadResponse(url=service.upload_image(user_data["id"], content, file.content_type))


@router.post("/{post_id}/likes", response_model=LikeResponse, status_code=201)
async def like_post(
    post_id: str,
    user_data: Dict = Depends(get_current_user_id),
    service: PostService = Depends(get_post_service)
):
    return service.like(post_id, user_data["id"])


@router.delete("/{post_id}/likes", response_model=LikeResponse)
async def unlike_post(
    post_id: str,
    user_data: Dict = Depends(get_current_user_id),
    service: PostService = Depends(get_post_service)
):
    return service.unlike(post_id, user_data["id"])


@router.get("/{post_id}/comments", response_model=List[CommentResponse])
async def list_comments(
    post_id: str,
    user_data: Dict = Depends(get_current_user_id),
    service: PostService = Depends(get_post_service)
):
    return service.list_comments(post_id)


@router.post("/{post_id}/comments", response_model=CommentResponse, status_code=201)
async def add_comment(
    post_id: str,
    comment: CommentCreate,
    user_data: Dict = Depends(get_current_user_id),
    service: PostService = Depends(get_post_service)
):
    return service.add_comment(post_id, user_data["id"], comment.content)
