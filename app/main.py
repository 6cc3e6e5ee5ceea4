import logging
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import settings
from app.config.settings import FEATURE_FIELDS
from app.core.errors import (
    global_exception_handler,
    http_exception_handler,
    rate_limit_exceeded_handler,
    validation_exception_handler,
)
from app.core.http import HttpClient
from app.core.rate_limit import limiter
from app.modules.register import routes as register_routes
from app.modules.agent import routes as agent_routes
from app.modules.counter import routes as counter_routes
from app.modules.password import routes as password_routes
from app.modules.public_config import routes as public_config_routes
from app.modules.licenses import routes as licenses_routes

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.app_name,
    debug=settings.debug,
    redirect_slashes=False,
)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, global_exception_handler)


class SecurityHeadersMiddleware:
    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        async def send_with_headers(message):
            if message["type"] == "http.response.start":
                message.setdefault("headers", [])
                message["headers"].extend([
                    (b"X-Content-Type-Options", b"nosniff"),
                    (b"X-Frame-Options", b"DENY"),
                    (b"X-XSS-Protection", b"1; mode=block"),
                ])
            await send(message)

        await self.app(scope, receive, send_with_headers)


app.add_middleware(SlowAPIMiddleware)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins_list(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include module routes
app.include_router(register_routes.router, prefix="/api")
app.include_router(agent_routes.router, prefix="/api")
app.include_router(counter_routes.router, prefix="/api")
app.include_router(password_routes.router, prefix="/api")
app.include_router(public_config_routes.router, prefix="/api")
app.include_router(licenses_routes.router, prefix="/api")


def configuration_gaps():
    """Features that will refuse requests because their settings are incomplete."""
    gaps = {feature: settings.missing(*fields) for feature, fields in FEATURE_FIELDS.items()}
    return {feature: missing for feature, missing in gaps.items() if missing}


@app.on_event("startup")
async def startup_event():
    logger.info("Application startup")
    for feature, missing in configuration_gaps().items():
        logger.warning(f"/api/{feature} disabled until configured: missing {', '.join(missing)}")


@app.on_event("shutdown")
async def shutdown_event():
    HttpClient.close()
    logger.info("Application shutdown")


@app.get("/")
async def root():
    return {"message": f"Welcome to {settings.app_name}", "status": "healthy"}


@app.get("/health")
@limiter.exempt
async def health():
    return {"status": "healthy"}


@app.get("/ready")
@limiter.exempt
async def ready():
    """Readiness probe: ready once every feature has its configuration."""
    gaps = configuration_gaps()
    return {"status": "ready" if not gaps else "degraded", "missing": gaps}
