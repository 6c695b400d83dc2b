"""Product catalogue operations: validation, review workflow and cached reads."""

from __future__ import annotations

from collections.abc import Callable
from contextlib import suppress
from datetime import timedelta
from typing import Any, TypeVar

from marketcore.cache import CacheError, CacheManager
from marketcore.models import Category, Product, ValidationError

T = TypeVar("T")

PRODUCT_CACHE_TTL = timedelta(minutes=5)
CATEGORY_CACHE_TTL = timedelta(hours=24)
CATEGORIES_KEY = "categories"

MIN_NAME_BYTES = 3
MAX_NAME_BYTES = 255

STATUS_ACTIVE = "active"
STATUS_DRAFT = "draft"
STATUS_PUBLISHED = "published"
STATUS_PENDING_APPROVAL = "pending_approval"
STATUS_REJECTED = "rejected"


def _product_key(product_id: int) -> str:
    return f"product:{product_id}"


class ProductService:
    """Product reads go through the cache; writes validate and invalidate it."""

    def __init__(self, product_repo: Any, vendor_repo: Any, cache: CacheManager) -> None:
        self._product_repo = product_repo
        self._vendor_repo = vendor_repo
        self._cache = cache

    def _cached(self, key: str, decode: Callable[[Any], T]) -> T | None:
        try:
            return decode(self._cache.get(key))
        except (CacheError, TypeError, ValueError, AttributeError, KeyError):
            return None

    def _store(self, key: str, value: Any, ttl: timedelta) -> None:
        with suppress(CacheError):
            self._cache.set(key, value, ttl)

    def _forget(self, *keys: str) -> None:
        with suppress(CacheError):
            self._cache.delete(*keys)

    def get_product_by_id(self, product_id: int) -> Product:
        key = _product_key(product_id)
        cached = self._cached(key, Product.from_dict)
        if cached is not None:
            return cached
        product = self._product_repo.get_by_id(product_id)
        self._store(key, product, PRODUCT_CACHE_TTL)
        return product

    def list_products(self, search: str, limit: int, offset: int) -> tuple[list[Product], int]:
        """Search active products when ``search`` is given, else list them all."""
        if search:
            return self._product_repo.search_products(search, limit, offset)
        return self._product_repo.list(STATUS_ACTIVE, 0, limit, offset)

    def list_vendor_products(
        self, vendor_id: int, limit: int, offset: int
    ) -> tuple[list[Product], int]:
        return self._product_repo.list_by_vendor(vendor_id, limit, offset)

    def get_product_by_slug(self, slug: str) -> Product:
        key = f"product:slug:{slug}"
        cached = self._cached(key, Product.from_dict)
        if cached is not None:
            return cached
        product = self._product_repo.get_by_slug(slug)
        self._store(key, product, PRODUCT_CACHE_TTL)
        return product

    def create_product(self, product: Product) -> None:
        """Validate and store a new product; it starts as a draft."""
        self.validate_product(product)
        product.status = STATUS_DRAFT
        self._product_repo.create(product)
        self._forget(CATEGORIES_KEY)

    def update_product(self, product: Product) -> None:
        """Validate and save; a published product goes back to review."""
        self.validate_product(product)
        if product.status == STATUS_PUBLISHED:
            product.status = STATUS_PENDING_APPROVAL
        self._product_repo.update(product)
        self._forget(_product_key(product.id), CATEGORIES_KEY)

    def approve_product(self, product_id: int) -> None:
        self._product_repo.update_status(product_id, STATUS_PUBLISHED)
        self._forget(_product_key(product_id))

    def reject_product(self, product_id: int, reason: str) -> None:
        self._product_repo.update_status(product_id, STATUS_REJECTED)
        self._forget(_product_key(product_id))

    def get_categories(self) -> list[Category]:
        cached = self._cached(
            CATEGORIES_KEY, lambda raw: [Category.from_dict(item) for item in raw]
        )
        if cached is not None:
            return cached
        categories = self._product_repo.list_categories()
        self._store(CATEGORIES_KEY, categories, CATEGORY_CACHE_TTL)
        return categories

    def list_pending_approval(self, limit: int, offset: int) -> tuple[list[Product], int]:
        return self._product_repo.list_pending_approval(limit, offset)

    def validate_product(self, product: Product | None) -> None:
        """Raise ValidationError if the product breaks a catalogue rule."""
        if product is None:
            raise ValidationError("product is required")
        name_bytes = len(product.name.encode("utf-8"))
        if not MIN_NAME_BYTES <= name_bytes <= MAX_NAME_BYTES:
            raise ValidationError("product name must be 3-255 characters")
        if product.vendor_id == 0:
            raise ValidationError("vendor ID is required")
        if product.category_id == 0:
            raise ValidationError("category ID is required")
        if product.base_price <= 0:
            raise ValidationError("base price must be greater than 0")
        if product.cost_price is not None:
            if product.cost_price < 0:
                raise ValidationError("cost price cannot be negative")
            if product.cost_price >= product.base_price:
                raise ValidationError("cost price must be less than base price")
        if product.is_returnable and product.return_window_days <= 0:
            raise ValidationError("return window days must be greater than 0")