"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from pathlib import Path

from pharmoms.domain.service.order_factory import OrderFactory
from pharmoms.domain.service.pricing import PricingEngine, PricingPolicy
from pharmoms.infrastructure.config import get_settings
from pharmoms.infrastructure.persistence.json_cart_repository import JsonCartRepository
from pharmoms.infrastructure.persistence.json_catalog_repository import (
    JsonMedicineRepository,
    JsonProductRepository,
)
from pharmoms.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)
from pharmoms.infrastructure.persistence.json_prescription_repository import (
    JsonPrescriptionRepository,
)
from pharmoms.infrastructure.persistence.json_reconciliation_repository import (
    JsonReconciliationRepository,
)


def _data_dir() -> Path:
    return get_settings().data_dir


def cart_repository() -> JsonCartRepository:
    return JsonCartRepository(_data_dir() / "carts.json")


def product_repository() -> JsonProductRepository:
    return JsonProductRepository(_data_dir() / "products.json", get_settings().currency)


def medicine_repository() -> JsonMedicineRepository:
    return JsonMedicineRepository(_data_dir() / "medicines.json", get_settings().currency)


def order_repository() -> JsonOrderRepository:
    return JsonOrderRepository(_data_dir() / "orders.json")


def prescription_repository() -> JsonPrescriptionRepository:
    return JsonPrescriptionRepository(_data_dir() / "prescriptions.json")


def reconciliation_repository() -> JsonReconciliationRepository:
    return JsonReconciliationRepository(_data_dir() / "reconciliation.json")


def pricing_engine() -> PricingEngine:
    settings = get_settings()
    return PricingEngine(
        PricingPolicy(
            delivery_fee=settings.delivery_fee,
            free_delivery_threshold=settings.free_delivery_threshold,
            tax_rate=settings.tax_rate,
            tax_quantum=settings.tax_quantum,
            currency=settings.currency,
        )
    )


def order_factory(order_repo: JsonOrderRepository) -> OrderFactory:
    settings = get_settings()
    return OrderFactory(
        order_repo,
        prefix=settings.order_number_prefix,
        max_attempts=settings.order_number_attempts,
    )
