"""CLI commands for the Cart aggregate."""

from __future__ import annotations

import asyncio
from typing import IO

import click

from shop.application.add_to_cart import AddToCartHandler
from shop.application.create_product import CreateProductHandler
from shop.application.dto import CartDTO
from shop.application.show_cart import ShowCartHandler
from shop.domain.exceptions import DomainException
from shop.infrastructure.bootstrap import build_container
from shop.infrastructure.cli.quote_commands import load_json


def _display_cart(dto: CartDTO) -> None:
    click.echo(f"  {'Product':<24} {'Qty':>5} {'Price':>14} {'Total':>14}")
    click.echo(f"  {'-'*60}")
    for item in dto.items:
        click.echo(
            f"  {item.product_name:<24} {item.quantity:>5} {item.unit_price:>14} {item.line_total:>14}"
        )
    click.echo(f"  {'-'*60}")
    click.echo(f"  {'Cart Total':<30} {dto.total:>29}")


@click.command("total")
@click.option("--items", default=None, help="Cart lines as a JSON list.")
@click.option("--items-file", type=click.File("r"), default=None, help="File with the JSON cart lines.")
def cart_total(items: str | None, items_file: IO[str] | None) -> None:
    """Fill a cart from JSON lines and show its total.

    Each line is {"variant": ..., "payload": {...}, "quantity": n}.
    """
    lines = load_json(items, items_file, "items")
    if not isinstance(lines, list):
        raise click.BadParameter("The cart lines must be a JSON list.")

    container = build_container()
    cart = container.new_cart()
    creator = CreateProductHandler(container.product_repository, container.product_factory)
    adder = AddToCartHandler(container.product_repository, cart)

    async def run() -> None:
        for line in lines:
            if not isinstance(line, dict):
                raise click.BadParameter("Each cart line must be a JSON object.")
            created = await creator.handle(line.get("variant", ""), line.get("payload") or {})
            await adder.handle(created.id, line.get("quantity", 1))

    try:
        asyncio.run(run())
        dto = ShowCartHandler(cart).handle()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not dto.items:
        click.echo("Cart is empty.")
        return
    _display_cart(dto)
