import logging
from typing import Any, Iterable

import httpx


logger = logging.getLogger(__name__)


DEFAULT_TIMEOUT = 10.0


class GatewayError(Exception):
    pass


class GatewayNotConfigured(GatewayError):
    pass


class GatewayUnreachable(GatewayError):
    pass


class UpstreamError(GatewayError):
    def __init__(self, status_code: int, detail: str | None = None) -> None:
        self.status_code = status_code
        self.detail = detail
        msg = f"Recipe service returned an error (status {status_code})"
        super().__init__(f"{msg}: {detail}" if detail else msg)


class WebhookGateway:
    """Asks the recipe automation webhook when the catalog has no answer."""

    def __init__(
        self,
        url: str | None,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        language: str = "th",
        domain: str = "recipe",
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.url = (url or "").strip()
        self.language = language
        self.domain = domain
        self._owns_client = client is None
        self.client = (
            httpx.AsyncClient(
                headers={"Content-Type": "application/json"},
                timeout=timeout,
            )
            if client is None
            else client
        )

    @property
    def configured(self) -> bool:
        return bool(self.url)

    def payload(self, transcript: str, known_names: Iterable[str]) -> dict[str, Any]:
        return {
            "transcript": transcript,
            "lang": self.language,
            "domain": self.domain,
            "knownNames": list(known_names),
        }

    async def ask(
        self, transcript: str, *, known_names: Iterable[str] = ()
    ) -> dict[str, Any]:
        if not self.configured:
            raise GatewayNotConfigured("No recipe webhook URL configured.")

        logger.info("Asking recipe webhook about %r", transcript)
        try:
            resp = await self.client.post(
                self.url, json=self.payload(transcript, known_names)
            )
        except httpx.TimeoutException as e:
            logger.error("Recipe webhook timed out: %r", e)
            raise GatewayUnreachable("Recipe service unreachable (timed out).") from e
        except httpx.TransportError as e:
            logger.error("Recipe webhook unreachable: %r", e)
            raise GatewayUnreachable("Recipe service unreachable.") from e

        data = parse_body(resp)

        if not resp.is_success:
            logger.warning("Recipe webhook answered %d", resp.status_code)
            detail = data.get("error")
            raise UpstreamError(
                resp.status_code, detail if isinstance(detail, str) else None
            )

        return data

    async def aclose(self) -> None:
        if self._owns_client:
            await self.client.aclose()


def parse_body(resp: httpx.Response) -> dict[str, Any]:
    """JSON object body, or {} for anything else."""
    try:
        data = resp.json()
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}
