"""CLI commands for the Cart aggregate."""

from __future__ import annotations

import click

from pharmoms.application.add_to_cart import AddToCartHandler
from pharmoms.application.clear_cart import ClearCartHandler
from pharmoms.application.dto import CartDTO
from pharmoms.application.remove_cart_item import RemoveCartItemHandler
from pharmoms.application.show_cart import ShowCartHandler
from pharmoms.application.update_cart_item import UpdateCartItemHandler
from pharmoms.domain.exceptions import DomainException
from pharmoms.infrastructure.bootstrap import (
    cart_repository,
    medicine_repository,
    pricing_engine,
    product_repository,
)
from pharmoms.infrastructure.cli.errors import unexpected_error


def _display_cart(dto: CartDTO) -> None:
    if not dto.items:
        click.echo("Your cart is empty.")
        return

    click.echo(f"  {'Item ID':<34} {'Name':<20} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*83}")
    for item in dto.items:
        click.echo(
            f"  {item.id:<34} {item.name:<20} {item.quantity:>5} "
            f"{item.unit_price:>10} {item.line_total:>10}"
        )
    click.echo(f"  {'-'*83}")
    click.echo(f"  {'Subtotal':<62} {dto.subtotal:>20}")
    click.echo(f"  {'Delivery':<62} {dto.delivery_fee:>20}")
    click.echo(f"  {'Tax':<62} {dto.tax:>20}")
    click.echo(f"  {'Total':<62} {dto.total:>20}")


@click.command("show")
@click.option("--user", "owner_id", required=True, help="Cart owner ID.")
def cart_show(owner_id: str) -> None:
    """Show the cart with its current totals."""
    handler = ShowCartHandler(cart_repo=cart_repository(), pricing=pricing_engine())

    try:
        dto = handler.handle(owner_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))
    except Exception as exc:
        raise unexpected_error("fetch cart", exc) from exc

    _display_cart(dto)


@click.command("add")
@click.option("--user", "owner_id", required=True, help="Cart owner ID.")
@click.option("--product", "product_id", default=None, help="Product ID to add.")
@click.option("--medicine", "medicine_id", default=None, help="Medicine ID to add.")
@click.option("--qty", "quantity", default=1, show_default=True, type=int, help="Quantity.")
def cart_add(
    owner_id: str, product_id: str | None, medicine_id: str | None, quantity: int
) -> None:
    """Add a product or a medicine to the cart."""
    if bool(product_id) == bool(medicine_id):
        raise click.UsageError("Provide exactly one of --product or --medicine")

    handler = AddToCartHandler(
        cart_repo=cart_repository(),
        product_repo=product_repository(),
        medicine_repo=medicine_repository(),
        pricing=pricing_engine(),
    )
    kind, reference_id = ("medicine", medicine_id) if medicine_id else ("product", product_id)

    try:
        dto = handler.handle(owner_id, kind, reference_id, quantity)  # type: ignore[arg-type]
    except DomainException as exc:
        raise click.ClickException(str(exc))
    except Exception as exc:
        raise unexpected_error("add item to cart", exc) from exc

    click.echo("Item added to cart.")
    _display_cart(dto)


@click.command("update")
@click.option("--user", "owner_id", required=True, help="Cart owner ID.")
@click.option("--item", "cart_item_id", required=True, help="Cart item ID.")
@click.option("--qty", "quantity", required=True, type=int, help="New quantity (0 removes).")
def cart_update(owner_id: str, cart_item_id: str, quantity: int) -> None:
    """Change the quantity of a cart line."""
    handler = UpdateCartItemHandler(cart_repo=cart_repository(), pricing=pricing_engine())

    try:
        dto = handler.handle(owner_id, cart_item_id, quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))
    except Exception as exc:
        raise unexpected_error("update cart", exc) from exc

    _display_cart(dto)


@click.command("remove")
@click.option("--user", "owner_id", required=True, help="Cart owner ID.")
@click.option("--item", "cart_item_id", required=True, help="Cart item ID.")
def cart_remove(owner_id: str, cart_item_id: str) -> None:
    """Remove a line from the cart."""
    handler = RemoveCartItemHandler(cart_repo=cart_repository(), pricing=pricing_engine())

    try:
        dto = handler.handle(owner_id, cart_item_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))
    except Exception as exc:
        raise unexpected_error("remove item from cart", exc) from exc

    click.echo("Item removed from cart.")
    _display_cart(dto)


@click.command("clear")
@click.option("--user", "owner_id", required=True, help="Cart owner ID.")
def cart_clear(owner_id: str) -> None:
    """Remove every line from the cart."""
    handler = ClearCartHandler(cart_repo=cart_repository(), pricing=pricing_engine())

    try:
        handler.handle(owner_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))
    except Exception as exc:
        raise unexpected_error("clear cart", exc) from exc

    click.echo("Cart cleared.")
