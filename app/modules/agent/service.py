import logging
from typing import Any, Dict

import httpx
from fastapi import Response

from app.core.errors import ApiError, truncate
from app.modules.agent.schemas import AgentRequest

logger = logging.getLogger(__name__)


class AgentService:
    """Forwards authenticated chat turns to the n8n workflow and relays its answer."""

    def __init__(self, http_client: httpx.Client, webhook_url: str):
        self.http_client = http_client
        self.webhook_url = webhook_url

    def build_payload(self, request: AgentRequest, email: str) -> Dict[str, Any]:
        payload = request.model_dump(by_alias=True, exclude={"email"})
        # The email always comes from the verified token, never from the client body
        payload["email"] = email
        return payload

    def forward(self, request: AgentRequest, email: str) -> Response:
        payload = self.build_payload(request, email)
        try:
            upstream = self.http_client.post(self.webhook_url, json=payload)
        except httpx.HTTPError as e:
            logger.error(f"n8n unreachable: {e}")
            raise ApiError(502, "n8n_error", detail=truncate(str(e)))

        if not upstream.is_success:
            logger.error(f"n8n answered {upstream.status_code} for session {request.session_id}")
            raise ApiError(502, "n8n_error", detail=truncate(upstream.text), status=upstream.status_code)

        return Response(
            content=upstream.content,
            status_code=200,
            media_type=upstream.headers.get("content-type", "text/plain"),
            headers={"Cache-Control": "no-store"},
        )
