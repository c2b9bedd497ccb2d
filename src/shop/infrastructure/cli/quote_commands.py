"""CLI commands for pricing a product."""

from __future__ import annotations

import asyncio
import json
from typing import IO, Any

import click

from shop.application.create_product import CreateProductHandler
from shop.application.dto import PriceQuoteDTO
from shop.application.quote_price import QuotePriceHandler
from shop.domain.exceptions import DomainException
from shop.infrastructure.bootstrap import build_container


def load_json(raw: str | None, file: IO[str] | None, what: str) -> Any:
    """Parse JSON given inline or through an open file."""
    if (raw is None) == (file is None):
        raise click.UsageError(f"Provide exactly one of --{what} or --{what}-file.")
    text = raw if raw is not None else file.read()  # type: ignore[union-attr]
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise click.BadParameter(f"Invalid JSON: {exc}") from exc


@click.command("quote")
@click.option("--variant", required=True, help="STANDARD, DIGITAL or NATURAL.")
@click.option("--payload", default=None, help="Product fields as a JSON object.")
@click.option("--payload-file", type=click.File("r"), default=None, help="File with the JSON payload.")
def quote(variant: str, payload: str | None, payload_file: IO[str] | None) -> None:
    """Build a product and show its tax-inclusive price."""
    data = load_json(payload, payload_file, "payload")
    if not isinstance(data, dict):
        raise click.BadParameter("The payload must be a JSON object.")

    container = build_container()
    creator = CreateProductHandler(container.product_repository, container.product_factory)
    handler = QuotePriceHandler(
        container.product_repository,
        general_tax_rate=container.settings.general_tax_rate,
        digital_tax_rate=container.settings.digital_tax_rate,
    )

    async def run() -> PriceQuoteDTO:
        created = await creator.handle(variant, data)
        return await handler.handle(created.id)

    try:
        dto = asyncio.run(run())
    except DomainException as exc:
        raise click.ClickException(str(exc))

    print_quote(dto)


def print_quote(dto: PriceQuoteDTO) -> None:
    click.echo(f"{dto.name}  ({dto.variant})")
    click.echo(f"  {'Base price':<18} {dto.base_price:>16}")
    click.echo(f"  {'Discount':<18} {dto.discount + '%':>16}")
    click.echo(f"  {'After discount':<18} {dto.discounted_price:>16}")
    click.echo(f"  {'Tax rate':<18} {dto.tax_rate + '%':>16}")
    click.echo(f"  {'-'*35}")
    click.echo(f"  {'Final price':<18} {dto.final_price:>16}")
