import logging

from supabase import Client

from app.core.errors import ApiError, truncate
from app.modules.password.schemas import ForgotPasswordResponse

logger = logging.getLogger(__name__)


class PasswordService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def request_reset(self, email: str, redirect_to: str) -> ForgotPasswordResponse:
        """Ask Supabase Auth to mail a recovery link. The answer never reveals whether the email exists."""
        try:
            self.supabase.auth.reset_password_for_email(email, {"redirect_to": redirect_to})
        except Exception as e:
            status = getattr(e, "status", None)
            logger.warning(f"Password recovery request rejected ({status}): {e}")
            if not status or status < 400:
                status = 502
            raise ApiError(
                status,
                "recover_failed",
                detail=truncate(getattr(e, "message", None) or str(e)),
            )
        return ForgotPasswordResponse()
