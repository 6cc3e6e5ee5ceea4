"""Shared fixtures: configured settings, fake Supabase, fake upstream HTTP and a TestClient."""

from __future__ import annotations

from typing import Iterator

import httpx
import pytest
from fastapi.testclient import TestClient

from app.config.settings import Settings, get_settings
from app.core.http import get_http_client
from app.core.rate_limit import limiter
from app.database.supabase_client import get_service_supabase, get_supabase
from app.main import app
from tests.fakes.fake_http import FakeUpstream
from tests.fakes.fake_supabase import FakeSupabase

SHEETS_URL = "https://script.google.com/macros/s/hub/exec"
N8N_URL = "https://n8n.example.com/webhook/agente"
DESKTOP_URL = "https://downloads.example.com/desktop"
AGENT_URL = "https://hub.example.com/agent-chat/agent"


def make_settings(**overrides) -> Settings:
    values = dict(
        supabase_url="https://project.supabase.co",
        supabase_anon_key="anon-key",
        supabase_service_role_key="service-role-key",
        gs_webapp_url=SHEETS_URL,
        hub_secret="hub-secret",
        n8n_webhook_url=N8N_URL,
        app_origin="https://hub.example.com",
        email_redirect_to=None,
        reset_redirect_to=None,
        target_desktop_url=DESKTOP_URL,
        target_agent_url=AGENT_URL,
        environment="development",
    )
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def events() -> list:
    return []


@pytest.fixture
def test_settings() -> Settings:
    return make_settings()


@pytest.fixture
def fake_supabase(events: list) -> FakeSupabase:
    return FakeSupabase(events)


@pytest.fixture
def upstream(events: list) -> FakeUpstream:
    fake = FakeUpstream(events)
    fake.json_route(SHEETS_URL, 200, {"ok": True})
    fake.route(N8N_URL, lambda _req: httpx.Response(200, json={"output": "Olá!"}))
    return fake


@pytest.fixture
def client(test_settings: Settings, fake_supabase: FakeSupabase, upstream: FakeUpstream) -> Iterator[TestClient]:
    http_client = upstream.client()
    app.dependency_overrides[get_settings] = lambda: test_settings
    app.dependency_overrides[get_supabase] = lambda: fake_supabase
    app.dependency_overrides[get_service_supabase] = lambda: fake_supabase
    app.dependency_overrides[get_http_client] = lambda: http_client
    limiter.enabled = False
    try:
        with TestClient(app) as c:
            yield c
    finally:
        limiter.enabled = True
        app.dependency_overrides.clear()
        http_client.close()


@pytest.fixture
def use_settings(client: TestClient):
    """Swap the settings seen by routes, e.g. use_settings(n8n_webhook_url=None)."""
    def _use(**overrides) -> Settings:
        new_settings = make_settings(**overrides)
        app.dependency_overrides[get_settings] = lambda: new_settings
        return new_settings
    return _use
