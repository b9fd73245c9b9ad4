from fastapi import APIRouter, Depends, Path
from savorycircle.modules.friends.schemas import (
    FriendRequestCreate, FriendRequestRespond, FriendRelationResponse, FriendResponse, USER_ID_PATTERN
)
from savorycircle.modules.friends.service import FriendService
from savorycircle.core.dependencies import get_current_user_id, get_user_supabase
from supabase import Client
from typing import List, Dict

router = APIRouter(prefix="/friends", tags=["friends"])


def get_friend_service(supabase: Client = Depends(get_user_supabase)) -> FriendService:
    return FriendService(supabase)


@router.get("", response_model=List[FriendResponse])
async def list_friends(
    user_data: Dict = Depends(get_current_user_id),
    service: FriendService = Depends(get_friend_service)
):
    return service.list_friends(user_data["id"])


@router.post("", response_model=FriendRelationResponse, status_code=201)
async def send_friend_request(
    request_data: FriendRequestCreate,
    user_data: Dict = Depends(get_current_user_id),
    service: FriendService = Depends(get_friend_service)
):
    return service.send_request(user_data["id"], request_data.friend_id)


@router.put("/{friend_id}", response_model=FriendRelationResponse)
async def respond_to_friend_request(
    response_data: FriendRequestRespond,
    friend_id: str = Path(pattern=USER_ID_PATTERN),
    user_data: Dict = Depends(get_current_user_id),
    service: FriendService = Depends(get_friend_service)
):
    """Accept or reject a pending request sent by `friend_id`"""
    return service.respond(user_data["id"], friend_id, response_data.status)


@router.delete("/{friend_id}", status_code=204)
async def remove_friend(
    friend_id: str = Path(pattern=USER_ID_PATTERN),
    user_data: Dict = Depends(get_current_user_id),
    service: FriendService = Depends(get_friend_service)
):
    service.remove_friend(user_data["id"], friend_id)
    return None
