"""
Per-tab chat transcript layout, kept by the browser in sessionStorage.

The server never stores transcripts. It only publishes the storage layout
(`agente_chat_state:<email>` -> {sessionId, messages}) so the chat page and
the API agree on key names.
"""

from typing import Any, Dict, List, Literal, get_args

from pydantic import BaseModel, ConfigDict, Field

STATE_KEY_PREFIX = "agente_chat_state:"
THEME_KEY = "theme"
FALLBACK_REPLY = "Desculpe, não entendi."

ChatRole = Literal["user", "bot"]


class ChatMessage(BaseModel):
    role: ChatRole
    text: str


class ChatState(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    session_id: str = Field(alias="sessionId")
    messages: List[ChatMessage] = Field(default_factory=list)


def storage_layout() -> Dict[str, Any]:
    return {
        "stateKeyPrefix": STATE_KEY_PREFIX,
        "themeKey": THEME_KEY,
        "stateFields": [field.alias or name for name, field in ChatState.model_fields.items()],
        "roles": list(get_args(ChatRole)),
        "fallbackReply": FALLBACK_REPLY,
    }
