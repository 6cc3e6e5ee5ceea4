"""Public configuration endpoints read by the static pages."""

from __future__ import annotations


def test_agent_config(client) -> None:
    response = client.get("/api/public-agent-config")

    assert response.status_code == 200
    body = response.json()
    assert body["ok"] is True
    assert body["loginUrl"] == "/login/login.html"
    assert body["agentChatUrl"] == "/agent-chat/agent"
    assert body["agentProxyUrl"] == "/api/agent"


def test_agent_config_publishes_chat_storage_layout(client) -> None:
    storage = client.get("/api/public-agent-config").json()["chatStorage"]

    assert storage == {
        "stateKeyPrefix": "agente_chat_state:",
        "themeKey": "theme",
        "stateFields": ["sessionId", "messages"],
        "roles": ["user", "bot"],
        "fallbackReply": "Desculpe, não entendi.",
    }


def test_agent_config_overrides(client, use_settings) -> None:
    use_settings(login_url="https://hub.example.com/entrar")

    assert client.get("/api/public-agent-config").json()["loginUrl"] == "https://hub.example.com/entrar"


def test_agent_config_missing(client, use_settings) -> None:
    use_settings(agent_chat_url="")

    response = client.get("/api/public-agent-config")

    assert response.status_code == 500
    assert response.json()["missing"] == ["AGENT_CHAT_URL"]


def test_supabase_config_exposes_only_public_values(client) -> None:
    response = client.get("/api/public-supabase-config")

    assert response.status_code == 200
    body = response.json()
    assert body == {"ok": True, "supabaseUrl": "https://project.supabase.co", "supabaseAnonKey": "anon-key"}
    assert "service-role-key" not in response.text
    assert "hub-secret" not in response.text


def test_supabase_config_missing(client, use_settings) -> None:
    use_settings(supabase_url=None, supabase_anon_key=None)

    response = client.get("/api/public-supabase-config")

    assert response.status_code == 500
    assert response.json()["error"] == "missing_env"
    assert response.json()["missing"] == ["SUPABASE_URL", "SUPABASE_ANON_KEY"]
