"""Functionality behind the routes."""

import logging

from domain.gateway import (
    GatewayNotConfigured,
    GatewayUnreachable,
    UpstreamError,
    WebhookGateway,
)
from domain.matcher import match_recipe
from domain.models import QueryResult, Source
from domain.normalizer import normalize_answer
from domain.repository import RecipeCatalog


logger = logging.getLogger(__name__)


class MissingTranscript(ValueError):
    pass


def no_recipe_message(names: list[str]) -> str:
    return f"No recipe found. Try asking for one of: {', '.join(names)}"


async def answer_query(
    text: str | None,
    *,
    catalog: RecipeCatalog,
    gateway: WebhookGateway,
) -> QueryResult:
    transcript = (text or "").strip()
    if not transcript:
        raise MissingTranscript("No speech text received.")

    answer = match_recipe(transcript.lower(), catalog)
    if answer is not None:
        logger.info("Local match for %r: %s", transcript, answer.name)
        return QueryResult.found(transcript, answer, Source.local)

    try:
        payload = await gateway.ask(transcript, known_names=catalog.names)
    except GatewayNotConfigured:
        logger.info("No local match for %r and no webhook configured", transcript)
        return QueryResult.failed(
            no_recipe_message(catalog.names), transcript=transcript
        )
    except (UpstreamError, GatewayUnreachable) as e:
        return QueryResult.failed(str(e), transcript=transcript, status_code=502)

    answer = normalize_answer(payload)
    if answer is None:
        upstream_error = payload.get("error")
        if isinstance(upstream_error, str) and upstream_error.strip():
            error = upstream_error
        else:
            error = f"Could not find a recipe for: {transcript}"
        return QueryResult.failed(error, transcript=transcript)

    return QueryResult.found(transcript, answer, Source.external)
