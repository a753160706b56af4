"""Abstract repository for the Cart aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from pharmoms.domain.model.cart import Cart


class CartRepository(ABC):

    @abstractmethod
    def get_by_owner(self, owner_id: str) -> Cart | None:
        """Return the owner's cart, or None if they never had one."""

    @abstractmethod
    def save(self, cart: Cart) -> None:
        """Replace the owner's cart with this one."""
