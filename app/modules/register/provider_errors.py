"""
Map Supabase Auth sign-up failures onto the register error codes.

Supabase only reports a free-text message here, so the mapping is a plain
substring table. When the provider rewords a message, update the table.
"""

from typing import Optional, Tuple

# (lowercase substring, code), first match wins
SIGNUP_ERROR_TABLE: Tuple[Tuple[str, str], ...] = (
    ("user already registered", "email_exists"),
    ("already registered", "email_exists"),
    ("already been registered", "email_exists"),
    ("already exists", "email_exists"),
    ("email_exists", "email_exists"),
    ("rate limit", "rate_limited"),
    ("too many", "rate_limited"),
    ("weak_password", "weak_password"),
    ("password should", "weak_password"),
    ("password is", "weak_password"),
    ("weak password", "weak_password"),
)

SIGNUP_ERROR_STATUS = {
    "email_exists": 409,
    "weak_password": 422,
    "rate_limited": 429,
}


def classify_signup_error(message: Optional[str], status: Optional[int] = None) -> str:
    if status == 429:
        return "rate_limited"
    text = str(message or "").lower()
    for pattern, code in SIGNUP_ERROR_TABLE:
        if pattern in text:
            return code
    return "auth_error"


def signup_error_status(code: str, provider_status: Optional[int] = None) -> int:
    if code in SIGNUP_ERROR_STATUS:
        return SIGNUP_ERROR_STATUS[code]
    if provider_status and 400 <= provider_status < 500:
        return provider_status
    return 400
