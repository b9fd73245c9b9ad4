"""
Core dependencies for route protection and per-user BaaS access
"""

import hmac
from fastapi import Depends, HTTPException, Security, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from savorycircle.config import settings
from savorycircle.database.supabase_client import SupabaseClient, get_supabase
from savorycircle.modules.auth.service import AuthService
from supabase import Client
from typing import Optional
import logging

logger = logging.getLogger(__name__)

security = HTTPBearer()
optional_security = HTTPBearer(auto_error=False)


def get_auth_service(supabase: Client = Depends(get_supabase)) -> AuthService:
    return AuthService(supabase)


def get_current_user_id(
    credentials: HTTPAuthorizationCredentials = Security(security),
    auth_service: AuthService = Depends(get_auth_service)
) -> dict:
    """Extract current user info from JWT token"""
    token = credentials.credentials
    user_data = auth_service.get_current_user(token)
    return user_data


def get_user_supabase(
    user_data: dict = Depends(get_current_user_id)
) -> Client:
    """Supabase client scoped to the caller's JWT; all reads/writes go through RLS."""
    return SupabaseClient.get_user_client(user_data["access_token"])


def verify_cron_secret(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(optional_security)
) -> None:
    """Allow the request only when it carries `Authorization: Bearer <cron_secret_key>`."""
    expected = settings.cron_secret_key
    if not expected:
        logger.error("CRON_SECRET_KEY is not configured; rejecting cron request")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
    if credentials is None or not hmac.compare_digest(credentials.credentials, expected):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
