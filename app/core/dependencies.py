"""
Core dependencies for configuration checks and session protection
"""

from fastapi import Depends, Security
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from app.config.settings import Settings, get_settings
from app.core.errors import ApiError, truncate
from app.database.supabase_client import get_supabase
from supabase import Client
from typing import Any, Dict, Optional
import logging

logger = logging.getLogger(__name__)

# auto_error=False so a missing header becomes "no_token" instead of a bare 403
security = HTTPBearer(auto_error=False)


def require_settings(*fields: str, error: str = "missing_env"):
    """Factory for a dependency that refuses to run when any of `fields` is unset."""
    def check_settings(settings: Settings = Depends(get_settings)) -> Settings:
        missing = settings.missing(*fields)
        if missing:
            logger.error(f"Refusing request, missing configuration: {', '.join(missing)}")
            raise ApiError(500, error, missing=missing)
        return settings
    return check_settings


def get_bearer_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(security)
) -> str:
    """Extract the bearer token from the Authorization header"""
    if credentials is None or not credentials.credentials.strip():
        raise ApiError(401, "no_token")
    return credentials.credentials.strip()


def get_current_user(
    token: str = Depends(get_bearer_token),
    supabase: Client = Depends(get_supabase),
) -> Dict[str, Any]:
    """Resolve the session owner by asking Supabase Auth who the token belongs to"""
    try:
        user_response = supabase.auth.get_user(jwt=token)
    except Exception as e:
        logger.info(f"Token rejected by identity provider: {e}")
        extra = {}
        status = getattr(e, "status", None)
        if status is not None:
            extra["status"] = status
        raise ApiError(
            401,
            "invalid_session",
            detail=truncate(getattr(e, "message", None) or str(e)),
            **extra,
        )
    user = getattr(user_response, "user", None)
    if not user:
        raise ApiError(401, "invalid_session", detail="user_not_found")
    return {"id": user.id, "email": user.email}
