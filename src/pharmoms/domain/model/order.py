"""Order aggregate: the durable record of one checkout.

The Order owns a snapshot of what was bought and at which price; later
catalog changes never reach it. After placement it only changes through
status transitions and a handful of fulfillment fields.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import Enum

from pharmoms.domain.exceptions import (
    InvalidOrderStatus,
    InvalidStatusTransition,
    ValidationError,
)
from pharmoms.domain.model.value_objects import (
    ItemKind,
    Money,
    PaymentMethod,
    PaymentStatus,
    Quantity,
    ShippingAddress,
)


class OrderStatus(Enum):
    PROCESSING = "processing"
    OUT_FOR_DELIVERY = "out-for-delivery"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in (OrderStatus.DELIVERED, OrderStatus.CANCELLED)

    @staticmethod
    def parse(value: str | OrderStatus) -> OrderStatus:
        """Accept ``out for delivery``, ``OUT_FOR_DELIVERY`` and friends."""
        if isinstance(value, OrderStatus):
            return value
        normalized = "-".join(str(value).strip().lower().replace("_", " ").split())
        try:
            return OrderStatus(normalized)
        except ValueError as exc:
            raise InvalidOrderStatus(f"Invalid order status: {value!r}") from exc


@dataclass(frozen=True)
class OrderLine:
    """Price snapshot of one purchased item, frozen at checkout."""

    kind: ItemKind
    reference_id: str
    quantity: Quantity
    unit_price: Money
    name: str
    image: str = ""

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value


@dataclass(frozen=True)
class StatusChange:
    status: OrderStatus
    actor: str | None
    note: str | None
    changed_at: datetime


@dataclass
class Order:
    """Aggregate root for purchase orders.

    Use ``Order.place()`` for new orders; it enforces the pricing and
    content invariants. The ``__init__`` is intentionally simple so the
    repository can reconstitute persisted orders without re-validating.
    """

    id: int | None
    order_number: str
    owner_id: str
    items: list[OrderLine]
    subtotal: Money
    delivery_fee: Money
    tax: Money
    total: Money
    shipping_address: ShippingAddress
    payment_method: PaymentMethod = PaymentMethod.COD
    payment_status: PaymentStatus = PaymentStatus.PENDING
    status: OrderStatus = OrderStatus.PROCESSING
    status_history: list[StatusChange] = field(default_factory=list)
    prescription_id: str | None = None
    tracking_number: str | None = None
    delivery_date: date | None = None
    assignee_id: str | None = None
    assigned_at: datetime | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def place(
        order_number: str,
        owner_id: str,
        items: list[OrderLine],
        subtotal: Money,
        delivery_fee: Money,
        tax: Money,
        total: Money,
        shipping_address: ShippingAddress,
        payment_method: PaymentMethod,
        prescription_id: str | None = None,
        at: datetime | None = None,
    ) -> Order:
        """Create a new order in ``processing``, enforcing all invariants."""
        if not owner_id:
            raise ValidationError("Order owner is required")

        if not items:
            raise ValidationError("Order must contain at least one item")

        line_sum = Money.zero(subtotal.currency)
        for item in items:
            line_sum = line_sum + item.line_total
        if line_sum != subtotal:
            raise ValidationError(
                f"Order subtotal {subtotal} does not match its lines ({line_sum})"
            )
        if subtotal + delivery_fee + tax != total:
            raise ValidationError(
                f"Order total {total} does not equal subtotal + delivery fee + tax"
            )

        placed_at = at or datetime.now(timezone.utc)
        return Order(
            id=None,
            order_number=order_number,
            owner_id=owner_id,
            items=list(items),
            subtotal=subtotal,
            delivery_fee=delivery_fee,
            tax=tax,
            total=total,
            shipping_address=shipping_address,
            payment_method=payment_method,
            prescription_id=prescription_id,
            status_history=[
                StatusChange(
                    status=OrderStatus.PROCESSING,
                    actor=owner_id,
                    note="Order placed",
                    changed_at=placed_at,
                )
            ],
            created_at=placed_at,
        )

    # --- State transitions ----------------------------------------------------

    def transition_to(
        self,
        new_status: OrderStatus,
        actor: str | None,
        note: str | None = None,
        at: datetime | None = None,
    ) -> None:
        """Move to ``new_status`` and append the change to the history.

        Delivered and cancelled orders are final. Between the other states
        any move is allowed so operators can correct a mistaken status.
        """
        if self.is_final:
            raise InvalidStatusTransition(
                f"Cannot move order {self.order_number} from {self.status.value} "
                f"to {new_status.value}; {self.status.value} is final"
            )
        self.status = new_status
        self.status_history.append(
            StatusChange(
                status=new_status,
                actor=actor,
                note=note,
                changed_at=at or datetime.now(timezone.utc),
            )
        )

    # --- Fulfillment fields ---------------------------------------------------

    def assign(self, assignee_id: str, actor: str | None, at: datetime | None = None) -> None:
        """Hand the order to a delivery agent.

        A ``processing`` order goes out for delivery as part of the hand-off.
        """
        if self.is_final:
            raise InvalidStatusTransition(
                f"Cannot assign order {self.order_number} in {self.status.value} status"
            )
        assigned_at = at or datetime.now(timezone.utc)
        self.assignee_id = assignee_id
        self.assigned_at = assigned_at
        if self.status == OrderStatus.PROCESSING:
            self.transition_to(
                OrderStatus.OUT_FOR_DELIVERY,
                actor,
                note=f"Assigned to {assignee_id}",
                at=assigned_at,
            )

    def record_tracking(
        self,
        tracking_number: str | None = None,
        delivery_date: date | None = None,
    ) -> None:
        if self.status == OrderStatus.CANCELLED:
            raise InvalidStatusTransition(
                f"Cannot update tracking for cancelled order {self.order_number}"
            )
        if tracking_number is not None:
            self.tracking_number = tracking_number.strip() or None
        if delivery_date is not None:
            self.delivery_date = delivery_date

    # --- Computed properties --------------------------------------------------

    @property
    def total_items(self) -> int:
        return sum(item.quantity.value for item in self.items)

    @property
    def is_final(self) -> bool:
        return self.status.is_terminal
