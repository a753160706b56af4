import click

from pharmoms.infrastructure.cli.cart_commands import (
    cart_add,
    cart_clear,
    cart_remove,
    cart_show,
    cart_update,
)
from pharmoms.infrastructure.cli.order_commands import (
    order_assign,
    order_checkout,
    order_list,
    order_show,
    order_status,
    order_track,
)
from pharmoms.infrastructure.cli.product_commands import (
    product_list,
    product_stock,
    product_update,
)
from pharmoms.infrastructure.cli.reconciliation_commands import (
    reconciliation_list,
    reconciliation_resolve,
)
from pharmoms.infrastructure.config import get_settings
from pharmoms.infrastructure.logging import configure_logging


@click.group()
def cli() -> None:
    """PharmOMS: pharmacy order fulfillment"""
    configure_logging(get_settings())


@cli.group()
def cart() -> None:
    """Manage a buyer's cart."""


@cli.group()
def order() -> None:
    """Place and manage orders."""


@cli.group()
def product() -> None:
    """Manage products."""


@cli.group()
def reconciliation() -> None:
    """Review post-checkout failures."""


# Register subcommands
cart.add_command(cart_add)
cart.add_command(cart_clear)
cart.add_command(cart_remove)
cart.add_command(cart_show)
cart.add_command(cart_update)
order.add_command(order_assign)
order.add_command(order_checkout)
order.add_command(order_list)
order.add_command(order_show)
order.add_command(order_status)
order.add_command(order_track)
product.add_command(product_list)
product.add_command(product_stock)
product.add_command(product_update)
reconciliation.add_command(reconciliation_list)
reconciliation.add_command(reconciliation_resolve)
