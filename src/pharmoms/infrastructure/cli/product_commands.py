"""CLI commands for the Product catalog."""

from __future__ import annotations

import click

from pharmoms.application.list_products import ListProductsHandler
from pharmoms.application.set_product_stock import SetProductStockHandler
from pharmoms.application.update_product import UpdateProductPriceHandler
from pharmoms.domain.exceptions import DomainException
from pharmoms.infrastructure.bootstrap import product_repository


@click.command("list")
def product_list() -> None:
    """List all products in the catalog."""
    products = ListProductsHandler(product_repo=product_repository()).handle()

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<10} {'Name':<24} {'Price':>10} {'Stock':>7} {'Active':>7}")
    click.echo("-" * 62)
    for p in products:
        active = "yes" if p.is_active else "no"
        click.echo(f"{p.id:<10} {p.name:<24} {p.price:>10} {p.stock:>7} {active:>7}")


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--price", required=True, help="New price (e.g. 129.50).")
def product_update(product_id: str, price: str) -> None:
    """Update a product's price."""
    handler = UpdateProductPriceHandler(product_repo=product_repository())

    try:
        handler.handle(product_id=product_id, new_price=price)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product_id} price updated to {price}")


@click.command("stock")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--qty", "quantity", required=True, type=int, help="Units on hand.")
def product_stock(product_id: str, quantity: int) -> None:
    """Set the stock level of a product."""
    handler = SetProductStockHandler(product_repo=product_repository())

    try:
        handler.handle(product_id=product_id, quantity=quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product_id} stock set to {quantity}")
