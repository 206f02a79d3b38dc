"""Ask the recipe service from a terminal, one transcript at a time."""

import asyncio

from rich import print

from app import config
from app.app import gateway_from_config
from domain.gateway import WebhookGateway
from domain.repository import RecipeCatalog
from domain.services import MissingTranscript, answer_query


QUIT = ("q", "quit", "exit")


async def main(
    cfg: config.Config | None = None,
    *,
    catalog: RecipeCatalog | None = None,
    gateway: WebhookGateway | None = None,
) -> None:
    cfg = config.Config() if cfg is None else cfg
    catalog = RecipeCatalog.from_path(cfg.catalog_path) if catalog is None else catalog
    gateway = gateway_from_config(cfg) if gateway is None else gateway

    try:
        while True:
            qu = input("Qu: ")
            if qu.strip().lower() in QUIT:
                break
            try:
                result = await answer_query(qu, catalog=catalog, gateway=gateway)
            except MissingTranscript as e:
                print(f"[red]{e}[/red]")
                continue

            if result.answer is None:
                print(f"[red]{result.error}[/red]")
                continue

            print(f"[bold]{result.answer.name}[/bold] ({result.source.value})")
            for ingredient in result.answer.ingredients:
                print(f"  - {ingredient}")
            for i, step in enumerate(result.answer.steps, start=1):
                print(f"  {i}. {step}")
    finally:
        await gateway.aclose()


if __name__ == "__main__":
    asyncio.run(main())
