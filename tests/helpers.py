import json
from pathlib import Path
from typing import Any, Callable

import httpx


CATALOG_PATH = Path(__file__).parent.parent / "assets" / "recipes.json"
WEBHOOK_URL = "https://automation.example.com/webhook/recipes"


Handler = Callable[[httpx.Request], httpx.Response]


def respond(status_code: int = 200, body: Any = None) -> Handler:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, json={} if body is None else body)

    return handler


def request_json(request: httpx.Request) -> dict[str, Any]:
    return json.loads(request.content)
