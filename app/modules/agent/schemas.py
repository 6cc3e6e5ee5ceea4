from pydantic import BaseModel, ConfigDict, Field
from typing import Any


class AgentRequest(BaseModel):
    """Chat turn sent by the browser. Extra keys are forwarded to n8n as-is."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    chat_input: str = Field(alias="chatInput", min_length=1)
    session_id: str = Field(alias="sessionId", min_length=1)
    email: Any = None  # ignored; always replaced by the token owner
