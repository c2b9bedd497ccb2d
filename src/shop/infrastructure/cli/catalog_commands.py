"""CLI commands for the product catalog.

The catalog is read from a JSON file into the in-memory repository on every
invocation; each entry is ``{"variant": ..., "payload": {...}}``.  Changing
commands print the resulting product and do not write the file back.
"""

from __future__ import annotations

import asyncio
from typing import IO, Any

import click

from shop.application.adjust_stock import AdjustStockHandler
from shop.application.create_product import CreateProductHandler
from shop.application.delete_product import DeleteProductHandler
from shop.application.dto import ProductDTO, ProductUpdate
from shop.application.get_product import GetProductHandler
from shop.application.list_products import ListProductsHandler
from shop.application.quote_price import QuotePriceHandler
from shop.application.update_product import UpdateProductHandler
from shop.domain.exceptions import DomainException
from shop.domain.model.product import Product, ProductVariant
from shop.infrastructure.bootstrap import Container, build_container
from shop.infrastructure.cli.quote_commands import load_json, print_quote


async def load_catalog(container: Container, entries: Any) -> None:
    """Create every catalog entry through the Create Product use case."""
    if not isinstance(entries, list):
        raise click.BadParameter("The catalog must be a JSON list.")
    handler = CreateProductHandler(container.product_repository, container.product_factory)
    for entry in entries:
        if not isinstance(entry, dict):
            raise click.BadParameter("Each catalog entry must be a JSON object.")
        await handler.handle(entry.get("variant", ""), entry.get("payload") or {})


def _catalog_container(catalog_file: IO[str]) -> tuple[Container, Any]:
    return build_container(), load_json(None, catalog_file, "catalog")


def _display_product(dto: ProductDTO) -> None:
    stock = "unlimited" if dto.stock == -1 else str(dto.stock)
    click.echo(f"{dto.name}  ({dto.variant}, id {dto.id})")
    click.echo(f"  {'Price':<14} {dto.price:>16}")
    click.echo(f"  {'Discount':<14} {dto.discount + '%':>16}")
    click.echo(f"  {'Final price':<14} {dto.final_price:>16}")
    click.echo(f"  {'Stock':<14} {stock:>16}")
    click.echo(f"  {'Available':<14} {'yes' if dto.available else 'no':>16}")


catalog_file_option = click.option(
    "--catalog-file", type=click.File("r"), required=True, help="JSON catalog to load."
)


@click.command("list")
@catalog_file_option
@click.option("--category", default=None, help="Only products of this category.")
@click.option("--featured", is_flag=True, help="Only featured products.")
def catalog_list(catalog_file: IO[str], category: str | None, featured: bool) -> None:
    """List the products of a catalog."""
    container, entries = _catalog_container(catalog_file)

    async def run() -> list[ProductDTO]:
        await load_catalog(container, entries)
        return await ListProductsHandler(container.product_repository).handle(
            category_id=category, featured_only=featured
        )

    try:
        products = asyncio.run(run())
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<38} {'Variant':<9} {'Name':<24} {'Final price':>14}")
    click.echo("-" * 88)
    for p in products:
        click.echo(f"{p.id:<38} {p.variant:<9} {p.name:<24} {p.final_price:>14}")


@click.command("show")
@click.argument("product_id")
@catalog_file_option
def catalog_show(product_id: str, catalog_file: IO[str]) -> None:
    """Show one product and its tax-inclusive price."""
    container, entries = _catalog_container(catalog_file)
    settings = container.settings

    async def run() -> Product:
        await load_catalog(container, entries)
        return await GetProductHandler(container.product_repository).handle(product_id)

    try:
        product = asyncio.run(run())
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if product.variant is ProductVariant.NULL:
        raise click.ClickException(f"Product with ID '{product_id}' not found")
    print_quote(
        QuotePriceHandler(
            container.product_repository,
            general_tax_rate=settings.general_tax_rate,
            digital_tax_rate=settings.digital_tax_rate,
        ).quote(product)
    )


@click.command("update")
@click.argument("product_id")
@catalog_file_option
@click.option("--name", default=None, help="New name.")
@click.option("--description", default=None, help="New description.")
@click.option("--price", default=None, help="New price (e.g. 29.99).")
@click.option("--stock", type=int, default=None, help="New stock level.")
@click.option("--image-url", default=None, help="New image URL.")
@click.option("--discount", type=float, default=None, help="New discount percentage.")
@click.option("--featured/--not-featured", default=None, help="Feature or unfeature.")
def catalog_update(
    product_id: str,
    catalog_file: IO[str],
    name: str | None,
    description: str | None,
    price: str | None,
    stock: int | None,
    image_url: str | None,
    discount: float | None,
    featured: bool | None,
) -> None:
    """Change fields of one product."""
    container, entries = _catalog_container(catalog_file)
    changes = ProductUpdate(
        name=name,
        description=description,
        price=price,
        stock=stock,
        image_url=image_url,
        discount=discount,
        featured=featured,
    )

    async def run() -> ProductDTO:
        await load_catalog(container, entries)
        return await UpdateProductHandler(container.product_repository).handle(
            product_id, changes
        )

    try:
        dto = asyncio.run(run())
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_product(dto)


@click.command("adjust-stock", context_settings={"ignore_unknown_options": True})
@click.argument("product_id")
@click.argument("delta", type=int)
@catalog_file_option
def catalog_adjust_stock(product_id: str, delta: int, catalog_file: IO[str]) -> None:
    """Add (positive DELTA) or take out (negative DELTA) units of stock."""
    container, entries = _catalog_container(catalog_file)

    async def run() -> ProductDTO:
        await load_catalog(container, entries)
        return await AdjustStockHandler(container.product_repository).handle(
            product_id, delta
        )

    try:
        dto = asyncio.run(run())
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_product(dto)


@click.command("delete")
@click.argument("product_id")
@catalog_file_option
def catalog_delete(product_id: str, catalog_file: IO[str]) -> None:
    """Remove one product from the catalog."""
    container, entries = _catalog_container(catalog_file)

    async def run() -> bool:
        await load_catalog(container, entries)
        return await DeleteProductHandler(container.product_repository).handle(product_id)

    try:
        removed = asyncio.run(run())
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not removed:
        raise click.ClickException(f"Product with ID '{product_id}' not found")
    click.echo(f"Product {product_id} removed.")
