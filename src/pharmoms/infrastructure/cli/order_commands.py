"""CLI commands for the Order aggregate."""

from __future__ import annotations

from datetime import datetime

import click

from pharmoms.application.assign_order import AssignOrderHandler
from pharmoms.application.checkout import CheckoutHandler
from pharmoms.application.dto import OrderDTO, Requester
from pharmoms.application.list_orders import ListOrdersHandler
from pharmoms.application.record_tracking import RecordTrackingHandler
from pharmoms.application.show_order import ShowOrderHandler
from pharmoms.application.transition_order_status import TransitionOrderStatusHandler
from pharmoms.domain.exceptions import DomainException
from pharmoms.domain.service.selection_resolver import SelectionItem
from pharmoms.infrastructure.bootstrap import (
    cart_repository,
    order_factory,
    order_repository,
    prescription_repository,
    pricing_engine,
    product_repository,
    reconciliation_repository,
)
from pharmoms.infrastructure.cli.errors import unexpected_error

_SELECTION_KINDS = ("line", "product", "medicine")


def _parse_selection(raw: str) -> list[SelectionItem]:
    """Parse 'line:<id>:2,product:<id>' into SelectionItem list.

    ``line`` picks a cart line by its ID; ``product`` and ``medicine`` pick
    the cart line holding that catalog item. A missing quantity buys the
    whole line.
    """
    selection: list[SelectionItem] = []
    for entry in raw.split(","):
        entry = entry.strip()
        parts = [p.strip() for p in entry.split(":")]
        if len(parts) not in (2, 3) or parts[0] not in _SELECTION_KINDS:
            raise click.BadParameter(
                f"Invalid item format '{entry}'. Expected 'line|product|medicine:ID[:Qty]'."
            )
        kind, reference = parts[0], parts[1]
        quantity = None
        if len(parts) == 3:
            try:
                quantity = int(parts[2])
            except ValueError:
                raise click.BadParameter(
                    f"Invalid quantity '{parts[2]}' for item '{reference}'."
                )
        if kind == "line":
            selection.append(SelectionItem(cart_item_id=reference, quantity=quantity))
        else:
            selection.append(
                SelectionItem(item_kind=kind, reference_id=reference, quantity=quantity)
            )
    return selection


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order {dto.order_number} (#{dto.id})  (status={dto.status})")
    click.echo(f"Placed:   {dto.created_at}")
    click.echo(f"Items:    {dto.total_items}")
    click.echo(f"Payment:  {dto.payment_method} ({dto.payment_status})")
    address = dto.shipping_address
    click.echo(
        f"Ship to:  {address['name']}, {address['address']}, {address['city']} "
        f"{address['pincode']}"
    )
    if dto.prescription_id:
        click.echo(f"Prescription: {dto.prescription_id}")
    if dto.assignee_id:
        click.echo(f"Assigned to:  {dto.assignee_id}")
    if dto.tracking_number or dto.delivery_date:
        click.echo(f"Tracking: {dto.tracking_number or '-'}  delivery {dto.delivery_date or '-'}")
    click.echo()

    click.echo(f"  {'Item':<20} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*47}")
    for item in dto.items:
        click.echo(
            f"  {item.name:<20} {item.quantity:>5} {item.unit_price:>10} {item.line_total:>10}"
        )
    click.echo(f"  {'-'*47}")
    click.echo(f"  {'Subtotal':<27} {dto.subtotal:>20}")
    click.echo(f"  {'Delivery':<27} {dto.delivery_fee:>20}")
    click.echo(f"  {'Tax':<27} {dto.tax:>20}")
    click.echo(f"  {'Order Total':<27} {dto.total:>20}")


@click.command("checkout")
@click.option("--user", "owner_id", required=True, help="Buyer ID.")
@click.option("--items", required=True, help="Items as 'line|product|medicine:ID[:Qty],...'.")
@click.option("--name", required=True, help="Recipient name.")
@click.option("--phone", required=True, help="Recipient phone number.")
@click.option("--address", required=True, help="Street address.")
@click.option("--city", required=True)
@click.option("--state", required=True)
@click.option("--pincode", required=True)
@click.option("--landmark", default="")
@click.option("--payment", "payment_method", default=None, help="cod, online or wallet (default cod).")
@click.option("--prescription", "prescription_id", default=None, help="Prescription being fulfilled.")
def order_checkout(
    owner_id: str,
    items: str,
    name: str,
    phone: str,
    address: str,
    city: str,
    state: str,
    pincode: str,
    landmark: str,
    payment_method: str | None,
    prescription_id: str | None,
) -> None:
    """Place an order for selected cart items."""
    selection = _parse_selection(items)

    order_repo = order_repository()
    handler = CheckoutHandler(
        cart_repo=cart_repository(),
        product_repo=product_repository(),
        order_repo=order_repo,
        prescription_repo=prescription_repository(),
        issue_repo=reconciliation_repository(),
        pricing=pricing_engine(),
        order_factory=order_factory(order_repo),
    )
    shipping_address = {
        "name": name,
        "phone_number": phone,
        "address": address,
        "city": city,
        "state": state,
        "pincode": pincode,
        "landmark": landmark,
    }

    try:
        result = handler.handle(
            requester=Requester(owner_id=owner_id),
            shipping_address=shipping_address,
            payment_method=payment_method,
            selection=selection,
            prescription_id=prescription_id,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))
    except Exception as exc:
        raise unexpected_error("place order", exc) from exc

    click.echo("Order placed successfully.")
    _display_order(result.order)
    if result.needs_reconciliation:
        click.echo()
        click.echo(
            f"Warning: {len(result.issues)} follow-up step(s) failed and were "
            "queued for reconciliation.",
            err=True,
        )


@click.command("list")
@click.option("--user", "owner_id", required=True, help="Buyer ID.")
def order_list(owner_id: str) -> None:
    """List the buyer's orders, newest first."""
    handler = ListOrdersHandler(order_repo=order_repository())

    try:
        orders = handler.handle(owner_id)
    except Exception as exc:
        raise unexpected_error("fetch orders", exc) from exc

    if not orders:
        click.echo("No orders found.")
        return

    click.echo(f"{'ID':<6} {'Number':<12} {'Status':<18} {'Items':>6} {'Total':>12} {'Placed':>22}")
    click.echo("-" * 81)
    for dto in orders:
        click.echo(
            f"{dto.id:<6} {dto.order_number:<12} {dto.status:<18} {dto.total_items:>6} {dto.total:>12} {dto.created_at:>22}"
        )


@click.command("show")
@click.option("--user", "owner_id", required=True, help="Buyer ID.")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
def order_show(owner_id: str, order_id: int) -> None:
    """Show details of an existing order."""
    handler = ShowOrderHandler(order_repo=order_repository())

    try:
        dto = handler.handle(owner_id, order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))
    except Exception as exc:
        raise unexpected_error("fetch order", exc) from exc

    _display_order(dto)


@click.command("status")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
@click.option("--to", "new_status", required=True, help="processing, out-for-delivery, delivered or cancelled.")
@click.option("--actor", "actor_id", required=True, help="Operator ID.")
@click.option("--note", default=None, help="Note for the status history.")
def order_status(order_id: int, new_status: str, actor_id: str, note: str | None) -> None:
    """Move an order to a new status (operators)."""
    handler = TransitionOrderStatusHandler(
        order_repo=order_repository(),
        prescription_repo=prescription_repository(),
        issue_repo=reconciliation_repository(),
    )

    try:
        dto = handler.handle(order_id, new_status, actor_id, note)
    except DomainException as exc:
        raise click.ClickException(str(exc))
    except Exception as exc:
        raise unexpected_error("update order status", exc) from exc

    click.echo(f"Order {dto.order_number} is now {dto.status}.")


@click.command("assign")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
@click.option("--to", "assignee_id", required=True, help="Delivery agent ID.")
@click.option("--actor", "actor_id", required=True, help="Operator ID.")
def order_assign(order_id: int, assignee_id: str, actor_id: str) -> None:
    """Assign an order to a delivery agent (operators)."""
    handler = AssignOrderHandler(
        order_repo=order_repository(),
        prescription_repo=prescription_repository(),
        issue_repo=reconciliation_repository(),
    )

    try:
        dto = handler.handle(order_id, assignee_id, actor_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))
    except Exception as exc:
        raise unexpected_error("assign order", exc) from exc

    click.echo(f"Order {dto.order_number} assigned to {assignee_id} (status={dto.status}).")


@click.command("track")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
@click.option("--number", "tracking_number", default=None, help="Carrier tracking number.")
@click.option(
    "--date",
    "delivery_date",
    default=None,
    type=click.DateTime(formats=["%Y-%m-%d"]),
    help="Expected delivery date (YYYY-MM-DD).",
)
def order_track(
    order_id: int, tracking_number: str | None, delivery_date: datetime | None
) -> None:
    """Record tracking details for an order (operators)."""
    if tracking_number is None and delivery_date is None:
        raise click.UsageError("Provide --number and/or --date")

    handler = RecordTrackingHandler(order_repo=order_repository())

    try:
        dto = handler.handle(
            order_id,
            tracking_number=tracking_number,
            delivery_date=delivery_date.date() if delivery_date else None,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))
    except Exception as exc:
        raise unexpected_error("update tracking", exc) from exc

    click.echo(f"Order {dto.order_number} tracking updated.")
