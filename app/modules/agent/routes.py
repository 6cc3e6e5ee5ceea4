from fastapi import APIRouter, Depends
from typing import Dict
import httpx

from app.config.settings import Settings, AGENT_FIELDS
from app.core.dependencies import require_settings, get_current_user
from app.core.http import get_http_client
from app.modules.agent.schemas import AgentRequest
from app.modules.agent.service import AgentService

router = APIRouter(tags=["agent"])


def get_agent_service(
    settings: Settings = Depends(require_settings(*AGENT_FIELDS)),
    http_client: httpx.Client = Depends(get_http_client),
) -> AgentService:
    return AgentService(http_client, settings.n8n_webhook_url)


@router.post("/agent")
def agent(
    agent_request: AgentRequest,
    service: AgentService = Depends(get_agent_service),
    current_user: Dict = Depends(get_current_user),
):
    """Relay a chat turn to n8n on behalf of the session owner"""
    return service.forward(agent_request, current_user["email"])
