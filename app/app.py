import contextlib
import logging
from typing import AsyncIterator

import uvicorn
from rich.logging import RichHandler
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from app import config
from domain.gateway import WebhookGateway
from domain.repository import RecipeCatalog
from domain.services import MissingTranscript, answer_query


CONFIG = config.Config()


logging.basicConfig(
    level=CONFIG.log_level,
    format="%(message)s",
    handlers=[RichHandler(rich_tracebacks=True)],
)
logger = logging.getLogger(__name__)


def gateway_from_config(cfg: config.Config) -> WebhookGateway:
    return WebhookGateway(
        cfg.webhook_url,
        timeout=cfg.webhook_timeout,
        language=cfg.language,
        domain=cfg.domain_hint,
    )


async def transcript_from_request(request: Request) -> str | None:
    """The `text` field of a JSON body, or None if there isn't a usable one."""
    try:
        body = await request.json()
    except ValueError:
        return None
    if not isinstance(body, dict):
        return None
    text = body.get("text")
    return text if isinstance(text, str) else None


async def voice(request: Request) -> JSONResponse:
    try:
        text = await transcript_from_request(request)
        result = await answer_query(
            text,
            catalog=request.app.state.catalog,
            gateway=request.app.state.gateway,
        )
    except MissingTranscript as e:
        return JSONResponse({"error": str(e)}, status_code=400)
    except Exception:
        logger.exception("Error in /api/voice")
        return JSONResponse({"error": "Server error"}, status_code=500)

    return JSONResponse(result.to_dict(), status_code=result.status_code)


async def recipes(request: Request) -> JSONResponse:
    catalog: RecipeCatalog = request.app.state.catalog
    return JSONResponse(
        {"recipes": [{"id": r.id, "name": r.name} for r in catalog]}
    )


async def health(request: Request) -> JSONResponse:
    return JSONResponse(
        {
            "status": "healthy",
            "recipes": len(request.app.state.catalog),
            "fallback": request.app.state.gateway.configured,
        }
    )


def create_app(
    cfg: config.Config | None = None,
    *,
    catalog: RecipeCatalog | None = None,
    gateway: WebhookGateway | None = None,
) -> Starlette:
    cfg = CONFIG if cfg is None else cfg

    @contextlib.asynccontextmanager
    async def lifespan(app: Starlette) -> AsyncIterator[None]:
        # A broken catalog stops startup.
        app.state.catalog = (
            RecipeCatalog.from_path(cfg.catalog_path) if catalog is None else catalog
        )
        app.state.gateway = gateway_from_config(cfg) if gateway is None else gateway
        if not app.state.gateway.configured:
            logger.warning("WEBHOOK_URL not set, unmatched questions get suggestions.")
        yield
        await app.state.gateway.aclose()

    return Starlette(
        debug=True if cfg.env == config.Env.local else False,
        routes=[
            Route("/api/voice", voice, methods=["POST"]),
            Route("/api/recipes", recipes, methods=["GET"]),
            Route("/health", health, methods=["GET"]),
        ],
        lifespan=lifespan,
    )


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "app.app:app",
        host=CONFIG.host,
        port=CONFIG.port,
        reload=CONFIG.env == config.Env.local,
        log_level=CONFIG.log_level.lower(),
    )
