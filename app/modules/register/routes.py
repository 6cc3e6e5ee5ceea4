from fastapi import APIRouter, Depends, Request
from supabase import Client
import httpx

from app.config.settings import Settings, SUPABASE_FIELDS, SHEETS_FIELDS, get_settings
from app.core.dependencies import require_settings
from app.core.http import get_http_client
from app.core.rate_limit import limiter, AUTH_RATE_LIMIT
from app.database.supabase_client import get_supabase, get_service_supabase
from app.modules.licenses.service import LicenseLedger
from app.modules.register.schemas import RegisterRequest, RegisterResponse
from app.modules.register.service import RegistrationService

router = APIRouter(tags=["register"])


def get_registration_service(
    settings: Settings = Depends(require_settings(*SUPABASE_FIELDS, error="missing_supabase_env")),
    _sheets: Settings = Depends(require_settings(*SHEETS_FIELDS, error="missing_sheets_env")),
    supabase: Client = Depends(get_supabase),
    service_supabase: Client = Depends(get_service_supabase),
    http_client: httpx.Client = Depends(get_http_client),
) -> RegistrationService:
    ledger = LicenseLedger(http_client, settings.gs_webapp_url, settings.hub_secret)
    return RegistrationService(supabase, service_supabase, ledger)


def email_redirect_target(request: Request, settings: Settings) -> str:
    if settings.email_redirect_to:
        return settings.email_redirect_to
    origin = settings.resolve_origin(request.headers.get("origin"), request.headers.get("host"))
    return f"{origin}/login/login.html"


@router.post("/register", response_model=RegisterResponse)
@limiter.limit(AUTH_RATE_LIMIT)
def register(
    request: Request,
    register_data: RegisterRequest,
    service: RegistrationService = Depends(get_registration_service),
    settings: Settings = Depends(get_settings),
):
    """Create account, profile and license; rolls the account back if a later step fails"""
    return service.register(register_data, email_redirect_target(request, settings))
