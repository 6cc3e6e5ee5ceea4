from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, List, Dict


class Settings(BaseSettings):
    # Supabase
    supabase_url: Optional[str] = None
    supabase_anon_key: Optional[str] = None
    supabase_service_role_key: Optional[str] = None  # Required for profile updates and admin deletes

    # Google Sheets license ledger (Apps Script webapp)
    gs_webapp_url: Optional[str] = None
    hub_secret: Optional[str] = None

    # n8n workflow that answers the chat
    n8n_webhook_url: Optional[str] = None

    # Redirects / public routing
    app_origin: Optional[str] = None
    email_redirect_to: Optional[str] = None
    reset_redirect_to: Optional[str] = None
    login_url: str = "/login/login.html"
    agent_chat_url: str = "/agent-chat/agent"
    agent_proxy_url: str = "/api/agent"

    # Counter targets (app=desktop / app=agent)
    target_desktop_url: Optional[str] = None
    target_agent_url: Optional[str] = None

    # App
    app_name: str = "avance-hub"
    debug: bool = False
    environment: str = "development"  # development | staging | production
    log_level: str = "INFO"
    cors_origins: str = "http://localhost:3000,http://localhost:5173,http://127.0.0.1:3000,http://127.0.0.1:5173"
    rate_limit: str = "100/minute"  # slowapi format, e.g. "100/minute"
    auth_rate_limit: str = "10/minute"  # register + forgot-password
    http_timeout_seconds: float = 60.0
    error_detail_max_length: int = 500

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def get_cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    def missing(self, *fields: str) -> List[str]:
        """Env var names of the given fields that are unset or blank."""
        return [f.upper() for f in fields if not (getattr(self, f) or "").strip()]

    def counter_targets(self) -> Dict[str, str]:
        targets = {
            "desktop": self.target_desktop_url,
            "agent": self.target_agent_url,
        }
        return {app: url for app, url in targets.items() if url}

    def resolve_origin(self, origin_header: Optional[str] = None, host: Optional[str] = None) -> str:
        if self.app_origin:
            return self.app_origin.rstrip("/")
        if origin_header:
            return origin_header.rstrip("/")
        return f"https://{host}" if host else ""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="",  # No prefix needed
        extra="ignore",
        frozen=True,
    )


# Settings groups checked by the routes that need them
SUPABASE_FIELDS = ("supabase_url", "supabase_service_role_key", "supabase_anon_key")
SHEETS_FIELDS = ("gs_webapp_url", "hub_secret")
AGENT_FIELDS = ("supabase_url", "supabase_anon_key", "n8n_webhook_url")
SERVICE_FIELDS = ("supabase_url", "supabase_service_role_key")
PUBLIC_SUPABASE_FIELDS = ("supabase_url", "supabase_anon_key")

FEATURE_FIELDS = {
    "register": SUPABASE_FIELDS + SHEETS_FIELDS,
    "agent": AGENT_FIELDS,
    "forgot-password": SERVICE_FIELDS,
    "contador": SERVICE_FIELDS,
}


settings = Settings()


def get_settings() -> Settings:
    return settings
