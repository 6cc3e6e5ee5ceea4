from fastapi import APIRouter, Depends

from app.config.settings import Settings, PUBLIC_SUPABASE_FIELDS
from app.core.dependencies import require_settings
from app.modules.chat.state import storage_layout

router = APIRouter(tags=["public-config"])


@router.get("/public-agent-config")
async def public_agent_config(
    settings: Settings = Depends(require_settings("login_url", "agent_chat_url")),
):
    """Routing URLs and transcript storage layout the chat page needs; nothing secret"""
    return {
        "ok": True,
        "loginUrl": settings.login_url,
        "agentChatUrl": settings.agent_chat_url,
        "agentProxyUrl": settings.agent_proxy_url,
        "chatStorage": storage_layout(),
    }


@router.get("/public-supabase-config")
async def public_supabase_config(
    settings: Settings = Depends(require_settings(*PUBLIC_SUPABASE_FIELDS)),
):
    """Project URL and anon key for supabase-js in the browser"""
    return {
        "ok": True,
        "supabaseUrl": settings.supabase_url,
        "supabaseAnonKey": settings.supabase_anon_key,
    }
