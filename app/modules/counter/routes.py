from fastapi import APIRouter, Depends
from fastapi.responses import RedirectResponse
from supabase import Client

from app.config.settings import Settings, SERVICE_FIELDS
from app.core.dependencies import require_settings
from app.core.errors import ApiError
from app.database.supabase_client import get_service_supabase
from app.modules.counter.service import CounterService

router = APIRouter(tags=["counter"])


def get_counter_service(
    settings: Settings = Depends(require_settings(*SERVICE_FIELDS)),
    supabase: Client = Depends(get_service_supabase),
) -> CounterService:
    return CounterService(supabase, settings.counter_targets())


def require_app(app: str = "") -> str:
    if not app.strip():
        raise ApiError(400, "missing_app")
    return app.strip()


@router.get("/contador")
def contador(
    app: str = Depends(require_app),
    service: CounterService = Depends(get_counter_service),
):
    """Count a visit to `app` and redirect to its configured URL"""
    target = service.resolve_target(app)
    service.increment(app)
    return RedirectResponse(url=target, status_code=302)
