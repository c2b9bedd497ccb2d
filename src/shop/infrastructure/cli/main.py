import click

from shop.infrastructure.bootstrap import configure_logging
from shop.infrastructure.cli.cart_commands import cart_total
from shop.infrastructure.cli.catalog_commands import (
    catalog_adjust_stock,
    catalog_delete,
    catalog_list,
    catalog_show,
    catalog_update,
)
from shop.infrastructure.cli.quote_commands import quote
from shop.infrastructure.config import Settings


@click.group()
def cli() -> None:
    """Shop — product catalog and cart"""
    configure_logging(Settings.from_env().log_level)


@cli.group()
def catalog() -> None:
    """Browse and change a product catalog."""


@cli.group()
def cart() -> None:
    """Work with carts."""


# Register subcommands
cli.add_command(quote)
catalog.add_command(catalog_adjust_stock)
catalog.add_command(catalog_delete)
catalog.add_command(catalog_list)
catalog.add_command(catalog_show)
catalog.add_command(catalog_update)
cart.add_command(cart_total)
