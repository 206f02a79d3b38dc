from typing import Callable

import httpx
import pytest

from domain.gateway import WebhookGateway
from domain.repository import RecipeCatalog
from tests.helpers import CATALOG_PATH, WEBHOOK_URL, Handler


@pytest.fixture
def catalog() -> RecipeCatalog:
    return RecipeCatalog.from_path(CATALOG_PATH)


@pytest.fixture
def make_gateway() -> Callable[..., WebhookGateway]:
    def factory(handler: Handler, url: str = WEBHOOK_URL) -> WebhookGateway:
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return WebhookGateway(url, client=client)

    return factory
