"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.

Checkout failures additionally carry a stable ``code`` and a ``meta`` dict
so a transport layer can return structured, client-correctable errors.
"""

from __future__ import annotations

from typing import Any


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class AuthorizationError(DomainException):
    """The caller is not allowed to perform the operation."""


class DuplicateOrderNumberError(DomainException):
    """An order number was already taken when the order was persisted."""


# ---------------------------------------------------------------------------
# Checkout taxonomy
# ---------------------------------------------------------------------------


class CheckoutError(ValidationError):
    """A pre-commit checkout failure. Nothing has been persisted yet."""

    code = "CHECKOUT_VALIDATION"
    default_message = "Checkout failed"

    def __init__(self, message: str | None = None, **meta: Any) -> None:
        super().__init__(message or self.default_message)
        self.meta = meta


class ItemsRequired(CheckoutError):
    code = "ITEMS_REQUIRED"
    default_message = "No items selected for checkout"


class IdentifierRequired(CheckoutError):
    code = "IDENTIFIER_REQUIRED"
    default_message = "Each selected item must include a cart item id or a reference id"


class ItemNotFound(CheckoutError):
    code = "ITEM_NOT_FOUND"
    default_message = "Selected item is not present in your cart"


class DuplicateSelection(CheckoutError):
    code = "DUPLICATE_SELECTION"
    default_message = "Duplicate cart selection detected"


class InvalidQuantity(CheckoutError):
    code = "INVALID_QUANTITY"
    default_message = "Quantity must be a positive integer"


class QuantityExceedsCart(CheckoutError):
    code = "QUANTITY_EXCEEDS_CART"
    default_message = "Selected quantity exceeds what is in your cart"


class ProductUnavailable(CheckoutError):
    code = "PRODUCT_UNAVAILABLE"
    default_message = "Selected product is no longer available"


class InsufficientStock(CheckoutError):
    code = "INSUFFICIENT_STOCK"
    default_message = "Insufficient stock"


class InvalidAmount(CheckoutError):
    code = "INVALID_AMOUNT"
    default_message = "Selected items have invalid pricing"


class CartEmpty(CheckoutError):
    code = "CART_EMPTY"
    default_message = "Your cart is empty"


class PrescriptionNotFound(CheckoutError):
    code = "PRESCRIPTION_NOT_FOUND"
    default_message = "Prescription not found"


class PrescriptionUnauthorized(CheckoutError):
    code = "PRESCRIPTION_UNAUTHORIZED"
    default_message = "Prescription does not belong to this account"


class UserBlocked(AuthorizationError):
    code = "USER_BLOCKED"

    def __init__(self, message: str = "Your account is blocked") -> None:
        super().__init__(message)


# ---------------------------------------------------------------------------
# Order lifecycle
# ---------------------------------------------------------------------------


class OrderNotFound(EntityNotFoundError):
    """The order does not exist (or is not visible to the caller)."""


class InvalidOrderStatus(ValidationError):
    """The requested status is not part of the order lifecycle."""


class InvalidStatusTransition(ValidationError):
    """The order cannot move from its current status to the requested one."""
