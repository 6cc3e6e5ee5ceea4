from enum import Enum
from pydantic import BaseModel
from typing import Any, Optional


class LicenseStatus(str, Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"


class LicenseUpsert(BaseModel):
    action: str = "upsert_license"
    secret: str
    email: str
    status: LicenseStatus = LicenseStatus.ACTIVE
    max_devices: int = 1
    created_at: str


class LedgerProbeResponse(BaseModel):
    ok: bool = True
    status: int
    raw: str
    parsed: Optional[Any] = None
