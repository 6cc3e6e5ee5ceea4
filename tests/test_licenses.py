"""Sheets license ledger client and the /api/test-sheets probe."""

from __future__ import annotations

import httpx
import pytest

from app.modules.licenses.schemas import LicenseStatus
from app.modules.licenses.service import LedgerError, LicenseLedger
from tests.conftest import SHEETS_URL


@pytest.fixture
def ledger(upstream) -> LicenseLedger:
    return LicenseLedger(upstream.client(), SHEETS_URL, "hub-secret")


def test_upsert_payload(ledger, upstream) -> None:
    assert ledger.upsert_license("a@b.com") == {"ok": True}

    [sent] = upstream.json_sent_to(SHEETS_URL)
    assert sent["action"] == "upsert_license"
    assert sent["secret"] == "hub-secret"
    assert sent["email"] == "a@b.com"
    assert sent["status"] == "ACTIVE"
    assert sent["max_devices"] == 1
    assert sent["created_at"].endswith("+00:00")


def test_upsert_inactive(ledger, upstream) -> None:
    ledger.upsert_license("a@b.com", status=LicenseStatus.INACTIVE, max_devices=3)

    [sent] = upstream.json_sent_to(SHEETS_URL)
    assert sent["status"] == "INACTIVE"
    assert sent["max_devices"] == 3


def test_apps_script_redirect_is_followed(ledger, upstream) -> None:
    echo_url = "https://script.googleusercontent.com/macros/echo?id=1"
    upstream.route(SHEETS_URL, lambda _req: httpx.Response(302, headers={"location": echo_url}))
    upstream.json_route(echo_url, 200, {"ok": True, "updated": True})

    assert ledger.upsert_license("a@b.com")["updated"] is True


@pytest.mark.parametrize(
    "response,status",
    [
        (httpx.Response(403, json={"ok": False, "error": "forbidden"}), 403),
        (httpx.Response(200, json={"ok": False, "error": "bad_secret"}), 200),
        (httpx.Response(200, json=["ok"]), 200),
        (httpx.Response(200, text="<html>login</html>"), 200),
    ],
)
def test_anything_but_ok_is_a_failure(ledger, upstream, response, status) -> None:
    upstream.route(SHEETS_URL, lambda _req: response)

    with pytest.raises(LedgerError) as exc_info:
        ledger.upsert_license("a@b.com")

    assert exc_info.value.status == status


def test_transport_error(ledger, upstream) -> None:
    def boom(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("dns failure", request=request)

    upstream.route(SHEETS_URL, boom)

    with pytest.raises(LedgerError, match="transport_error"):
        ledger.upsert_license("a@b.com")


def test_probe_route_echoes_answer(client, upstream) -> None:
    response = client.get("/api/test-sheets")

    assert response.status_code == 200
    body = response.json()
    assert body["ok"] is True
    assert body["status"] == 200
    assert body["parsed"] == {"ok": True}
    [sent] = upstream.json_sent_to(SHEETS_URL)
    assert sent["email"].startswith("teste_") and sent["email"].endswith("@gmail.com")


def test_probe_route_reports_non_json(client, upstream) -> None:
    upstream.route(SHEETS_URL, lambda _req: httpx.Response(500, text="Script error"))

    body = client.get("/api/test-sheets").json()

    assert body["status"] == 500
    assert body["raw"] == "Script error"
    assert body["parsed"] is None


def test_probe_route_hidden_in_production(client, use_settings, upstream) -> None:
    use_settings(environment="production")

    response = client.get("/api/test-sheets")

    assert response.status_code == 404
    assert upstream.requests == []


def test_probe_route_missing_configuration(client, use_settings) -> None:
    use_settings(gs_webapp_url=None)

    response = client.get("/api/test-sheets")

    assert response.status_code == 500
    assert response.json()["missing"] == ["GS_WEBAPP_URL"]
