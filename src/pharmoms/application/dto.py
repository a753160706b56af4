"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI (or any other transport) and the
application layer without exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from pharmoms.domain.model.cart import Cart
from pharmoms.domain.model.catalog import Product
from pharmoms.domain.model.order import Order
from pharmoms.domain.model.reconciliation import ReconciliationIssue

_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M UTC"


@dataclass(frozen=True)
class Requester:
    """Input: who is calling, as established by the identity layer."""

    owner_id: str
    is_blocked: bool = False


@dataclass(frozen=True)
class OrderLineDTO:
    kind: str
    reference_id: str
    name: str
    quantity: int
    unit_price: str  # formatted, e.g. "₹100.00"
    line_total: str
    image: str = ""


@dataclass(frozen=True)
class StatusChangeDTO:
    status: str
    actor: str | None
    note: str | None
    changed_at: str


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as displayed to the user."""

    id: int
    order_number: str
    owner_id: str
    status: str
    items: list[OrderLineDTO]
    total_items: int
    subtotal: str
    delivery_fee: str
    tax: str
    total: str
    payment_method: str
    payment_status: str
    shipping_address: dict[str, str]
    status_history: list[StatusChangeDTO]
    created_at: str
    prescription_id: str | None = None
    tracking_number: str | None = None
    delivery_date: str | None = None
    assignee_id: str | None = None


@dataclass(frozen=True)
class ReconciliationIssueDTO:
    id: int | None
    order_number: str
    step: str
    reason: str
    reference_id: str | None
    quantity: int | None
    resolved: bool
    recorded_at: str


@dataclass(frozen=True)
class CheckoutResultDTO:
    """Output of a checkout: the placed order plus any follow-up work."""

    order: OrderDTO
    issues: list[ReconciliationIssueDTO] = field(default_factory=list)

    @property
    def needs_reconciliation(self) -> bool:
        return bool(self.issues)


@dataclass(frozen=True)
class ProductDTO:
    id: str
    name: str
    price: str
    stock: int
    is_active: bool


@dataclass(frozen=True)
class CartLineDTO:
    id: str
    kind: str
    reference_id: str
    name: str
    quantity: int
    unit_price: str
    line_total: str


@dataclass(frozen=True)
class CartDTO:
    owner_id: str
    items: list[CartLineDTO]
    subtotal: str
    delivery_fee: str
    tax: str
    total: str


# --- Mapping ------------------------------------------------------------------


def to_order_dto(order: Order) -> OrderDTO:
    return OrderDTO(
        id=order.id,  # type: ignore[arg-type]
        order_number=order.order_number,
        owner_id=order.owner_id,
        status=order.status.value,
        items=[
            OrderLineDTO(
                kind=item.kind.value,
                reference_id=item.reference_id,
                name=item.name,
                quantity=item.quantity.value,
                unit_price=str(item.unit_price),
                line_total=str(item.line_total),
                image=item.image,
            )
            for item in order.items
        ],
        total_items=order.total_items,
        subtotal=str(order.subtotal),
        delivery_fee=str(order.delivery_fee),
        tax=str(order.tax),
        total=str(order.total),
        payment_method=order.payment_method.value,
        payment_status=order.payment_status.value,
        shipping_address=order.shipping_address.to_raw(),
        status_history=[
            StatusChangeDTO(
                status=change.status.value,
                actor=change.actor,
                note=change.note,
                changed_at=change.changed_at.strftime(_TIMESTAMP_FORMAT),
            )
            for change in order.status_history
        ],
        created_at=order.created_at.strftime(_TIMESTAMP_FORMAT),
        prescription_id=order.prescription_id,
        tracking_number=order.tracking_number,
        delivery_date=order.delivery_date.isoformat() if order.delivery_date else None,
        assignee_id=order.assignee_id,
    )


def to_issue_dto(issue: ReconciliationIssue) -> ReconciliationIssueDTO:
    return ReconciliationIssueDTO(
        id=issue.id,
        order_number=issue.order_number,
        step=issue.step.value,
        reason=issue.reason,
        reference_id=issue.reference_id,
        quantity=issue.quantity,
        resolved=issue.resolved,
        recorded_at=issue.recorded_at.strftime(_TIMESTAMP_FORMAT),
    )


def to_cart_dto(cart: Cart) -> CartDTO:
    return CartDTO(
        owner_id=cart.owner_id,
        items=[
            CartLineDTO(
                id=line.id,
                kind=line.kind.value,
                reference_id=line.reference_id,
                name=line.name,
                quantity=line.quantity,
                unit_price=str(line.unit_price),
                line_total=str(line.line_total),
            )
            for line in cart.lines
        ],
        subtotal=str(cart.subtotal),
        delivery_fee=str(cart.delivery_fee),
        tax=str(cart.tax),
        total=str(cart.total),
    )


def to_product_dto(product: Product) -> ProductDTO:
    return ProductDTO(
        id=product.id,
        name=product.name,
        price=str(product.price),
        stock=product.stock,
        is_active=product.is_active,
    )
