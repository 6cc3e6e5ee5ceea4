"""
Error taxonomy shared by every route.

Every failure leaves the API as ``{"ok": false, "error": <code>}`` plus an
optional ``detail``, a localized ``message`` and any extra fields.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import settings
from app.core.messages import message_for

logger = logging.getLogger(__name__)

STATUS_CODES = {
    404: "not_found",
    405: "method_not_allowed",
    429: "rate_limited",
}


class ApiError(HTTPException):
    def __init__(
        self,
        status_code: int,
        error: str,
        detail: Any = None,
        headers: Optional[Dict[str, str]] = None,
        **extra: Any,
    ):
        super().__init__(status_code=status_code, detail=error, headers=headers)
        self.error = error
        self.error_detail = detail
        self.extra = extra

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"ok": False, "error": self.error}
        if self.error_detail is not None:
            body["detail"] = self.error_detail
        detail_text = self.error_detail if isinstance(self.error_detail, str) else None
        body["message"] = message_for(self.error, detail_text)
        body.update(self.extra)
        return body

    def __str__(self) -> str:
        if self.error_detail is None:
            return self.error
        return f"{self.error}: {self.error_detail}"


def truncate(value: Any, limit: Optional[int] = None) -> str:
    """Bound provider text echoed back to callers."""
    limit = limit or settings.error_detail_max_length
    text = value if isinstance(value, str) else str(value)
    if len(text) <= limit:
        return text
    return text[:limit] + "..."


def error_response(exc: ApiError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=exc.headers)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if not isinstance(exc, ApiError):
        code = STATUS_CODES.get(exc.status_code, "http_error")
        detail = exc.detail if code == "http_error" else None
        exc = ApiError(exc.status_code, code, detail=detail, headers=getattr(exc, "headers", None))
    return error_response(exc)


def _is_missing(error: Dict[str, Any]) -> bool:
    if error.get("type") in ("missing", "string_too_short"):
        return True
    return error.get("input") in ("", None)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    fields = [".".join(str(p) for p in e.get("loc", ()) if p != "body") for e in errors]
    code = "missing_fields" if any(_is_missing(e) for e in errors) else "invalid_fields"
    return error_response(ApiError(400, code, fields=fields))


async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    logger.warning(f"Rate limit exceeded for {request.url.path}: {exc.detail}")
    response = error_response(ApiError(429, "rate_limited", detail=str(exc.detail)))
    view_rate_limit = getattr(request.state, "view_rate_limit", None)
    if view_rate_limit is not None:
        response = request.app.state.limiter._inject_headers(response, view_rate_limit)
    return response


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled exception: %s", exc)
    detail = None if settings.is_production else str(exc)
    return error_response(ApiError(500, "server_error", detail=detail))
