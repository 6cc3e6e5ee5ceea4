import logging
from typing import Dict

from supabase import Client

from app.core.errors import ApiError

logger = logging.getLogger(__name__)

INCREMENT_RPC = "increment_access"


class CounterService:
    def __init__(self, supabase: Client, targets: Dict[str, str]):
        self.supabase = supabase
        self.targets = targets

    def resolve_target(self, app: str) -> str:
        app = (app or "").strip()
        if not app:
            raise ApiError(400, "missing_app")
        target = self.targets.get(app)
        if not target:
            raise ApiError(400, "unknown_app")
        return target

    def increment(self, app: str) -> bool:
        """Atomic increment through the `increment_access` function; a failure never blocks the redirect."""
        try:
            self.supabase.rpc(INCREMENT_RPC, {"p_name": app}).execute()
            return True
        except Exception as e:
            logger.warning(f"increment_access failed for '{app}': {e}")
            return False
