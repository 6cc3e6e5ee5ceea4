from slowapi import Limiter
from slowapi.util import get_remote_address

from app.config import settings

limiter = Limiter(key_func=get_remote_address, default_limits=[settings.rate_limit])

# Tighter limit for the unauthenticated account endpoints
AUTH_RATE_LIMIT = settings.auth_rate_limit
