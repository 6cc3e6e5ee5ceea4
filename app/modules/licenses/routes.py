from fastapi import APIRouter, Depends
import httpx

from app.config.settings import Settings, SHEETS_FIELDS
from app.core.dependencies import require_settings
from app.core.errors import ApiError
from app.core.http import get_http_client
from app.modules.licenses.schemas import LedgerProbeResponse
from app.modules.licenses.service import LicenseLedger

router = APIRouter(tags=["licenses"])


@router.get("/test-sheets", response_model=LedgerProbeResponse)
def test_sheets(
    settings: Settings = Depends(require_settings(*SHEETS_FIELDS)),
    http_client: httpx.Client = Depends(get_http_client),
):
    """Diagnostic: push a probe license to the ledger and echo the raw answer"""
    if settings.is_production:
        raise ApiError(404, "not_found")
    ledger = LicenseLedger(http_client, settings.gs_webapp_url, settings.hub_secret)
    try:
        return ledger.probe()
    except httpx.HTTPError as e:
        raise ApiError(500, "server_error", detail=str(e))
