from typing import Any, Callable, Iterable

import httpx
import pytest
from starlette.testclient import TestClient

from app.app import create_app
from domain.gateway import WebhookGateway
from domain.repository import RecipeCatalog
from tests.helpers import respond


MakeGateway = Callable[..., WebhookGateway]


class BrokenGateway(WebhookGateway):
    async def ask(
        self, transcript: str, *, known_names: Iterable[str] = ()
    ) -> dict[str, Any]:
        raise RuntimeError("boom")


def client_for(catalog: RecipeCatalog, gateway: WebhookGateway) -> TestClient:
    return TestClient(create_app(catalog=catalog, gateway=gateway))


@pytest.mark.parametrize(
    "kwargs",
    (
        {"json": {"text": ""}},
        {"json": {"text": "   "}},
        {"json": {}},
        {"json": {"text": 42}},
        {"json": ["Pad Thai"]},
        {"content": b"{not json", "headers": {"Content-Type": "application/json"}},
    ),
)
def test_missing_input(
    kwargs: dict[str, Any], catalog: RecipeCatalog, make_gateway: MakeGateway
) -> None:
    with client_for(catalog, make_gateway(respond())) as client:
        resp = client.post("/api/voice", **kwargs)
    assert resp.status_code == 400
    body = resp.json()
    assert "answer" not in body
    assert body["error"]


def test_local_hit(catalog: RecipeCatalog, make_gateway: MakeGateway) -> None:
    with client_for(catalog, make_gateway(respond(500))) as client:
        resp = client.post("/api/voice", json={"text": "ขอสูตรผัดไทยหน่อย"})
    assert resp.status_code == 200
    assert resp.json() == {
        "transcript": "ขอสูตรผัดไทยหน่อย",
        "answer": catalog.get("pad-thai").answer.model_dump(),
        "source": "local",
    }


def test_soft_miss_without_webhook(catalog: RecipeCatalog) -> None:
    with client_for(catalog, WebhookGateway(None)) as client:
        resp = client.post("/api/voice", json={"text": "beef wellington"})
    assert resp.status_code == 200
    body = resp.json()
    assert set(body) == {"transcript", "error"}
    assert all(name in body["error"] for name in catalog.names)


def test_external_free_text(catalog: RecipeCatalog, make_gateway: MakeGateway) -> None:
    gateway = make_gateway(respond(200, {"output": "Boil noodles\n\nAdd curry"}))
    with client_for(catalog, gateway) as client:
        resp = client.post("/api/voice", json={"text": "Khao Soi"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["source"] == "external"
    assert body["answer"]["steps"] == ["Boil noodles", "Add curry"]
    assert "error" not in body


def test_upstream_error(catalog: RecipeCatalog, make_gateway: MakeGateway) -> None:
    with client_for(catalog, make_gateway(respond(500))) as client:
        resp = client.post("/api/voice", json={"text": "Khao Soi"})
    assert resp.status_code == 502
    body = resp.json()
    assert body["transcript"] == "Khao Soi"
    assert "500" in body["error"]
    assert "answer" not in body


def test_unreachable(catalog: RecipeCatalog, make_gateway: MakeGateway) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("Connection refused", request=request)

    with client_for(catalog, make_gateway(handler)) as client:
        resp = client.post("/api/voice", json={"text": "Khao Soi"})
    assert resp.status_code == 502


def test_server_error(catalog: RecipeCatalog) -> None:
    with client_for(catalog, BrokenGateway("https://example.com/hook")) as client:
        resp = client.post("/api/voice", json={"text": "Khao Soi"})
    assert resp.status_code == 500
    assert resp.json() == {"error": "Server error"}


def test_same_request_twice(catalog: RecipeCatalog, make_gateway: MakeGateway) -> None:
    with client_for(catalog, make_gateway(respond())) as client:
        first = client.post("/api/voice", json={"text": "tom yum"})
        second = client.post("/api/voice", json={"text": "tom yum"})
    assert first.status_code == second.status_code == 200
    assert first.json() == second.json()


def test_recipes(catalog: RecipeCatalog) -> None:
    with client_for(catalog, WebhookGateway(None)) as client:
        resp = client.get("/api/recipes")
    assert resp.status_code == 200
    assert [r["name"] for r in resp.json()["recipes"]] == catalog.names


def test_health(catalog: RecipeCatalog, make_gateway: MakeGateway) -> None:
    with client_for(catalog, make_gateway(respond())) as client:
        resp = client.get("/health")
    assert resp.json() == {"status": "healthy", "recipes": 6, "fallback": True}


def test_get_not_allowed_on_voice(catalog: RecipeCatalog) -> None:
    with client_for(catalog, WebhookGateway(None)) as client:
        resp = client.get("/api/voice")
    assert resp.status_code == 405
