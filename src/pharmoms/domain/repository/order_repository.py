"""Abstract repository for Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from pharmoms.domain.model.order import Order


class OrderRepository(ABC):

    @abstractmethod
    def next_sequence(self) -> int:
        """Advance and return the order-number counter.

        The counter is monotonic but may be stale (behind numbers already
        in use); ``save`` is the uniqueness check.
        """

    @abstractmethod
    def get_by_id(self, order_id: int) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def list_by_owner(self, owner_id: str) -> list[Order]:
        """Return the owner's orders, newest first."""

    @abstractmethod
    def save(self, order: Order) -> None:
        """Persist a new or updated order.

        New orders (``id is None``) get an ID assigned. Raises
        DuplicateOrderNumberError when a new order reuses a taken number.
        """
