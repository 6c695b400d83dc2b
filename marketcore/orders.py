"""Order handling: per-vendor splitting, stock checks and promotions."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from contextlib import suppress
from datetime import timedelta
from typing import Any

from marketcore.cache import CacheError, CacheManager
from marketcore.commission import CommissionService
from marketcore.models import (
    CartItem,
    NotFoundError,
    Order,
    OrderItem,
    Promotion,
    ServiceError,
    SubOrder,
    ValidationError,
)

PROMOTION_CACHE_TTL = timedelta(hours=1)


def _is_promotion_valid(promo: Promotion | None) -> bool:
    return promo is not None


def _calculate_discount(subtotal: float, promo: Promotion) -> float:
    if promo.discount_type == "percent":
        return subtotal * (promo.discount_value / 100)
    return promo.discount_value


class OrderService:
    """Operations on orders that span several vendors."""

    def __init__(
        self,
        order_repo: Any,
        product_repo: Any,
        promotion_repo: Any,
        vendor_repo: Any,
        cache: CacheManager,
    ) -> None:
        self._order_repo = order_repo
        self._product_repo = product_repo
        self._promotion_repo = promotion_repo
        self._vendor_repo = vendor_repo
        self._cache = cache
        self._commission = CommissionService(product_repo)

    def get_order_by_id(self, order_id: int) -> Order:
        return self._order_repo.get_order_by_id(order_id)

    def list_orders(self, limit: int, offset: int) -> tuple[list[Order], int]:
        return self._order_repo.list_all_orders(limit, offset)

    def split_order(self, order: Order | None, cart_items: Sequence[CartItem]) -> list[SubOrder]:
        """Build one pending sub-order per vendor and roll the totals up into ``order``."""
        if order is None:
            raise ValidationError("order is required")
        if not cart_items:
            raise ValidationError("cart items cannot be empty")

        by_vendor: dict[int, list[CartItem]] = {}
        for item in cart_items:
            if item.product is None:
                raise ValidationError(f"cart item {item.id} has no product")
            by_vendor.setdefault(item.product.vendor_id, []).append(item)

        sub_orders = []
        for vendor_id, items in by_vendor.items():
            try:
                vendor = self._vendor_repo.get_by_id(vendor_id)
            except (ServiceError, LookupError) as exc:
                raise NotFoundError(f"vendor {vendor_id} not found: {exc}") from exc

            subtotal = 0.0
            commission_total = 0.0
            for item in items:
                subtotal += item.unit_price * item.quantity
                commission, _ = self._commission.calculate_commission(
                    OrderItem(product=item.product, unit_price=item.unit_price, quantity=item.quantity),
                    vendor.commission_model,
                    vendor.commission_rate,
                )
                commission_total += commission

            sub_orders.append(
                SubOrder(
                    order_id=order.id,
                    vendor_id=vendor_id,
                    status="pending",
                    subtotal=subtotal,
                    commission_amount=commission_total,
                    vendor_earning=subtotal - commission_total,
                )
            )

        order.subtotal += sum(sub.subtotal for sub in sub_orders)
        order.grand_total = order.subtotal - order.discount_total + order.shipping_total
        return sub_orders

    def validate_stock(self, cart_items: Iterable[CartItem]) -> None:
        """Raise ValidationError for the first item whose variant is short of stock."""
        for item in cart_items:
            if item.variant is None or item.variant.stock < item.quantity:
                variant_id = item.variant_id if item.variant_id is not None else 0
                raise ValidationError(f"insufficient stock for product variant {variant_id}")

    def _cached_promotion(self, key: str) -> Promotion | None:
        try:
            return Promotion.from_dict(self._cache.get(key))
        except (CacheError, TypeError, ValueError, AttributeError):
            return None

    def apply_promotions(self, order: Order, promo_codes: Iterable[str]) -> float:
        """Total discount the given promotion codes grant on ``order``."""
        total_discount = 0.0
        for code in promo_codes:
            cache_key = f"promo:{code}"
            promo = self._cached_promotion(cache_key)
            if _is_promotion_valid(promo):
                total_discount += _calculate_discount(order.subtotal, promo)
                continue

            try:
                promo = self._promotion_repo.get_by_code(code)
            except (ServiceError, LookupError) as exc:
                raise NotFoundError(f"promotion code {code} not found") from exc
            if not _is_promotion_valid(promo):
                raise ValidationError(f"promotion code {code} is not valid")

            with suppress(CacheError):
                self._cache.set(cache_key, promo, PROMOTION_CACHE_TTL)

            total_discount += _calculate_discount(order.subtotal, promo)
        return total_discount