import time
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

import httpx

from app.modules.licenses.schemas import LicenseStatus, LicenseUpsert, LedgerProbeResponse

logger = logging.getLogger(__name__)


class LedgerError(Exception):
    """The ledger webapp did not confirm the upsert."""

    def __init__(self, detail: Any, status: Optional[int] = None):
        super().__init__(str(detail))
        self.detail = detail
        self.status = status


def _parse_json(response: httpx.Response) -> Optional[Any]:
    try:
        return response.json()
    except ValueError:
        return None


class LicenseLedger:
    """Client for the Google Sheets (Apps Script) license ledger, keyed by email."""

    def __init__(self, http_client: httpx.Client, webapp_url: str, secret: str):
        self.http_client = http_client
        self.webapp_url = webapp_url
        self.secret = secret

    def _post(self, payload: LicenseUpsert) -> httpx.Response:
        return self.http_client.post(self.webapp_url, json=payload.model_dump(mode="json"))

    def upsert_license(
        self,
        email: str,
        status: LicenseStatus = LicenseStatus.ACTIVE,
        max_devices: int = 1,
    ) -> Dict[str, Any]:
        """Create or refresh the license row for `email`. Raises LedgerError unless the webapp answers ok."""
        payload = LicenseUpsert(
            secret=self.secret,
            email=email,
            status=status,
            max_devices=max_devices,
            created_at=datetime.now(timezone.utc).isoformat(),
        )
        try:
            response = self._post(payload)
        except httpx.HTTPError as e:
            raise LedgerError(f"transport_error: {e}")

        data = _parse_json(response)
        if not response.is_success or not isinstance(data, dict) or not data.get("ok"):
            logger.error(f"Sheets upsert failed ({response.status_code}): {data or response.text}")
            raise LedgerError(data if data is not None else response.text, status=response.status_code)
        return data

    def probe(self) -> LedgerProbeResponse:
        """Send a throwaway upsert and report exactly what the webapp answered."""
        payload = LicenseUpsert(
            secret=self.secret,
            email=f"teste_{int(time.time() * 1000)}@gmail.com",
            created_at=datetime.now(timezone.utc).isoformat(),
        )
        response = self._post(payload)
        return LedgerProbeResponse(
            status=response.status_code,
            raw=response.text,
            parsed=_parse_json(response),
        )
