from fastapi import APIRouter, Depends, Security
from fastapi.responses import RedirectResponse
from fastapi.security import HTTPAuthorizationCredentials
from savorycircle.config import settings
from savorycircle.modules.auth.schemas import (
    LoginRequest, RegisterRequest, RefreshRequest, TokenResponse, RegisterResponse
)
from savorycircle.modules.auth.service import AuthService
from savorycircle.core.dependencies import get_auth_service, get_current_user_id, get_user_supabase, security
from supabase import Client
from typing import Dict, Optional

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=RegisterResponse, status_code=201)
async def register(
    register_data: RegisterRequest,
    service: AuthService = Depends(get_auth_service)
):
    return service.register(register_data)


@router.post("/login", response_model=TokenResponse)
async def login(
    login_data: LoginRequest,
    service: AuthService = Depends(get_auth_service)
):
    return service.login(login_data)


@router.post("/refresh", response_model=TokenResponse)
async def refresh_session(
    refresh_data: RefreshRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Trade a refresh token for a new access token"""
    return service.refresh(refresh_data.refresh_token)


@router.post("/logout")
async def logout(
    credentials: HTTPAuthorizationCredentials = Security(security),
    service: AuthService = Depends(get_auth_service)
):
    service.logout(credentials.credentials)
    return {"message": "Logged out successfully"}


@router.get("/callback")
async def auth_callback(
    code: Optional[str] = None,
    service: AuthService = Depends(get_auth_service)
):
    """Landing point for confirmation emails and OAuth; always ends on the dashboard"""
    if code:
        service.exchange_code(code)
    return RedirectResponse(url=f"{settings.site_url.rstrip('/')}/dashboard", status_code=303)


@router.get("/me")
async def get_me(
    current_user: Dict = Depends(get_current_user_id),
    supabase: Client = Depends(get_user_supabase),
):
    """The signed-in user plus their user_profiles row (null until the signup trigger has run)"""
    result = supabase.table("user_profiles")\
        .select("*")\
        .eq("id", current_user["id"])\
        .maybe_single()\
        .execute()
    user = {key: value for key, value in current_user.items() if key != "access_token"}
    return {**user, "profile": result.data if result else None}
