from fastapi import APIRouter, Depends, Request
from supabase import Client

from app.config.settings import Settings, SERVICE_FIELDS, get_settings
from app.core.dependencies import require_settings
from app.core.rate_limit import limiter, AUTH_RATE_LIMIT
from app.database.supabase_client import get_service_supabase
from app.modules.password.schemas import ForgotPasswordRequest, ForgotPasswordResponse
from app.modules.password.service import PasswordService

router = APIRouter(tags=["password"])


def get_password_service(
    _settings: Settings = Depends(require_settings(*SERVICE_FIELDS, error="missing_supabase_env")),
    supabase: Client = Depends(get_service_supabase),
) -> PasswordService:
    return PasswordService(supabase)


def reset_redirect_target(request: Request, settings: Settings) -> str:
    if settings.reset_redirect_to:
        return settings.reset_redirect_to
    origin = settings.resolve_origin(request.headers.get("origin"), request.headers.get("host"))
    return f"{origin}/reset/reset.html"


@router.post("/forgot-password", response_model=ForgotPasswordResponse)
@limiter.limit(AUTH_RATE_LIMIT)
def forgot_password(
    request: Request,
    body: ForgotPasswordRequest,
    service: PasswordService = Depends(get_password_service),
    settings: Settings = Depends(get_settings),
):
    """Send a password recovery link; always ok for unknown addresses"""
    return service.request_reset(body.email, reset_redirect_target(request, settings))
