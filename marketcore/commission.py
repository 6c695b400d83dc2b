"""Commission calculation for order items."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from marketcore.models import OrderItem, ServiceError, ValidationError

MARGIN = "margin"
MARKUP = "markup"
PLATFORM_DEFAULT_RATE = 0.05


@dataclass(frozen=True)
class CommissionConfig:
    """The commission model and rate that were applied."""

    commission_model: str = ""
    commission_rate: float = 0.0


def _calculate_by_model(unit_price: float, quantity: int, model: str, rate: float) -> float:
    """Commission on ``unit_price * quantity``; unknown models use the margin formula."""
    subtotal = unit_price * quantity
    if model == MARKUP:
        return subtotal / (1 + rate) * (1 - (1 / (1 + rate)))
    return subtotal * rate


class CommissionService:
    """Works out commissions: category settings win over vendor settings,
    which win over the platform default (5% margin)."""

    def __init__(self, product_repo: Any) -> None:
        self._product_repo = product_repo

    def _category_config(self, order_item: OrderItem) -> CommissionConfig | None:
        product = order_item.product
        if product is None or product.category_id <= 0:
            return None
        try:
            category = self._product_repo.get_category(product.category_id)
        except (ServiceError, LookupError):
            return None
        if category is None or not category.commission_model or category.commission_rate is None:
            return None
        return CommissionConfig(category.commission_model, category.commission_rate)

    def calculate_commission(
        self,
        order_item: OrderItem | None,
        vendor_commission_model: str,
        vendor_commission_rate: float,
    ) -> tuple[float, CommissionConfig]:
        """Return the commission for ``order_item`` and the configuration used."""
        if order_item is None:
            raise ValidationError("order item is required")

        config = self._category_config(order_item)
        if config is None:
            if vendor_commission_model:
                config = CommissionConfig(vendor_commission_model, vendor_commission_rate)
            else:
                config = CommissionConfig(MARGIN, PLATFORM_DEFAULT_RATE)

        amount = _calculate_by_model(
            order_item.unit_price,
            order_item.quantity,
            config.commission_model,
            config.commission_rate,
        )
        return amount, config

    def validate_commission_rate(self, rate: float, model: str) -> None:
        """Raise ValidationError unless ``rate`` lies in [0, 1]."""
        if rate < 0 or rate > 1:
            raise ValidationError(f"commission rate must be between 0 and 1, got {rate:f}")
        if model == MARKUP and rate < 0:
            raise ValidationError("markup rate cannot be negative")

    def get_category_commission(self, category_id: int) -> CommissionConfig:
        """Commission settings of a category; a missing rate reads as 0."""
        category = self._product_repo.get_category(category_id)
        rate = category.commission_rate if category.commission_rate is not None else 0.0
        return CommissionConfig(category.commission_model, rate)