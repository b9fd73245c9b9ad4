import hashlib
import logging
import time
from supabase import Client
from savorycircle.modules.auth.schemas import LoginRequest, RegisterRequest, TokenResponse, RegisterResponse
from fastapi import HTTPException
from typing import Dict, Any, Optional

logger = logging.getLogger(__name__)

# Validated tokens, keyed by sha256 of the JWT: (user dict, expiry on the monotonic clock)
_AUTH_USER_CACHE: Dict[str, tuple] = {}
_AUTH_CACHE_TTL_SEC = 60
_AUTH_CACHE_MAX_SIZE = 500


def _cache_key(token: str) -> str:
    return hashlib.sha256(token.encode()).hexdigest()


def _cached_user(token: str) -> Optional[Dict[str, Any]]:
    key = _cache_key(token)
    entry = _AUTH_USER_CACHE.get(key)
    if entry is None:
        return None
    user_data, expires_at = entry
    if time.monotonic() >= expires_at:
        del _AUTH_USER_CACHE[key]
        return None
    return user_data


def _remember_user(token: str, user_data: Dict[str, Any]) -> None:
    if len(_AUTH_USER_CACHE) < _AUTH_CACHE_MAX_SIZE:
        _AUTH_USER_CACHE[_cache_key(token)] = (user_data, time.monotonic() + _AUTH_CACHE_TTL_SEC)


def clear_auth_cache() -> None:
    _AUTH_USER_CACHE.clear()


def _session_tokens(auth_response, fallback_email: str = "") -> TokenResponse:
    return TokenResponse(
        access_token=auth_response.session.access_token,
        refresh_token=auth_response.session.refresh_token,
        token_type="bearer",
        user_id=auth_response.user.id,
        email=auth_response.user.email or fallback_email
    )


class AuthService:
    """Supabase Auth wrapper for sign up, sessions and bearer-token validation."""

    def __init__(self, supabase: Client):
        self.supabase = supabase

    def register(self, register_data: RegisterRequest) -> RegisterResponse:
        profile_fields = {
            key: value
            for key, value in (("username", register_data.username), ("display_name", register_data.display_name))
            if value
        }
        try:
            auth_response = self.supabase.auth.sign_up({
                "email": register_data.email,
                "password": register_data.password,
                "options": {"data": profile_fields}
            })
        except Exception as e:
            message = str(e).lower()
            if "already registered" in message or "already exists" in message:
                raise HTTPException(status_code=400, detail="User already exists")
            raise HTTPException(status_code=500, detail=f"Registration failed: {e}")

        if not auth_response.user:
            raise HTTPException(status_code=400, detail="Failed to register user")

        logger.info("Registered user %s", auth_response.user.id)
        return RegisterResponse(
            user_id=auth_response.user.id,
            email=auth_response.user.email or register_data.email,
            message="User registered successfully. Check your email to confirm your account."
        )

    def login(self, login_data: LoginRequest) -> TokenResponse:
        try:
            auth_response = self.supabase.auth.sign_in_with_password({
                "email": login_data.email,
                "password": login_data.password
            })
        except Exception as e:
            message = str(e).lower()
            if "invalid" in message or "credentials" in message:
                raise HTTPException(status_code=401, detail="Invalid email or password")
            raise HTTPException(status_code=500, detail=f"Login failed: {e}")

        if not auth_response.user or not auth_response.session:
            raise HTTPException(status_code=401, detail="Invalid credentials")
        return _session_tokens(auth_response, login_data.email)

    def exchange_code(self, code: str) -> TokenResponse:
        """Finish an email-confirmation or OAuth redirect"""
        try:
            auth_response = self.supabase.auth.exchange_code_for_session({"auth_code": code})
        except Exception as e:
            logger.error(f"Code exchange failed: {e}")
            raise HTTPException(status_code=401, detail="Invalid or expired code")

        if not auth_response.user or not auth_response.session:
            raise HTTPException(status_code=401, detail="Invalid or expired code")
        return _session_tokens(auth_response)

    def refresh(self, refresh_token: str) -> TokenResponse:
        try:
            auth_response = self.supabase.auth.refresh_session(refresh_token)
        except Exception as e:
            logger.warning(f"Session refresh failed: {e}")
            raise HTTPException(status_code=401, detail="Session expired. Please log in again.")

        if not auth_response.user or not auth_response.session:
            raise HTTPException(status_code=401, detail="Session expired. Please log in again.")
        return _session_tokens(auth_response)

    def get_current_user(self, token: str) -> Dict[str, Any]:
        """Resolve a bearer token to the Supabase user; results are cached briefly per token."""
        cached = _cached_user(token)
        if cached is not None:
            return cached

        try:
            user_response = self.supabase.auth.get_user(jwt=token)
        except Exception as e:
            message = str(e)
            if "JWT" in message or "expired" in message.lower() or "invalid" in message.lower():
                raise HTTPException(status_code=401, detail="Invalid or expired token")
            raise HTTPException(status_code=401, detail="Authentication failed")

        if not user_response or not user_response.user:
            raise HTTPException(status_code=401, detail="Invalid or expired token")

        user = user_response.user
        user_data = {
            "id": user.id,
            "email": user.email,
            "user_metadata": user.user_metadata or {},
            "created_at": user.created_at,
            "updated_at": user.updated_at,
            "access_token": token,
        }
        _remember_user(token, user_data)
        return user_data

    def logout(self, token: str) -> bool:
        _AUTH_USER_CACHE.pop(_cache_key(token), None)
        try:
            # JWTs stay valid until they expire; this only ends the server-side session
            self.supabase.auth.sign_out()
            return True
        except Exception as e:
            logger.warning(f"Sign out failed: {e}")
            return False
