"""Read-only product repository backed by a JSON catalogue."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence

from marketcore.jsonloader import JSONLoader, ProductData
from marketcore.models import (
    Category,
    NotFoundError,
    Product,
    ProductImage,
    ProductVariant,
    ServiceError,
)


class UnsupportedOperationError(ServiceError):
    """Raised for operations the JSON catalogue cannot perform."""


def _page(items: Sequence[ProductData], limit: int, offset: int) -> tuple[list[Product], int]:
    if limit < 0 or offset < 0:
        raise ValueError("limit and offset must not be negative")
    window = items[offset:offset + limit]
    return [item.to_model() for item in window], len(items)


def _refuse(operation: str) -> None:
    raise UnsupportedOperationError(f"{operation} operation not supported in JSON mode")


class JSONProductRepository:
    """Serves products from a JSONLoader; writes are refused."""

    def __init__(self, loader: JSONLoader) -> None:
        self._loader = loader

    def _select(
        self, keep: Callable[[ProductData], bool], limit: int, offset: int
    ) -> tuple[list[Product], int]:
        return _page([p for p in self._loader.products() if keep(p)], limit, offset)

    def create(self, product: Product) -> None:
        _refuse("create")

    def get_by_id(self, product_id: int) -> Product:
        data = self._loader.product_by_id(product_id)
        if data is None:
            raise NotFoundError("product not found")
        return data.to_model()

    def get_by_slug(self, slug: str) -> Product:
        data = self._loader.product_by_slug(slug)
        if data is None:
            raise NotFoundError("product not found")
        return data.to_model()

    def list_by_vendor(self, vendor_id: int, limit: int, offset: int) -> tuple[list[Product], int]:
        """Active and draft products of one vendor."""
        return self._select(
            lambda p: p.vendor_id == vendor_id and p.status in ("active", "draft"), limit, offset
        )

    def list(
        self, status: str, category_id: int, limit: int, offset: int
    ) -> tuple[list[Product], int]:
        """Active products, optionally of one category; ``status`` is not consulted."""
        return self._select(
            lambda p: p.status == "active" and (category_id <= 0 or p.category_id == category_id),
            limit,
            offset,
        )

    def list_by_vendor_and_status(
        self, vendor_id: int, status: str, limit: int, offset: int
    ) -> tuple[list[Product], int]:
        """Products of one vendor, in any status when ``status`` is empty."""
        return self._select(
            lambda p: p.vendor_id == vendor_id and (not status or p.status == status),
            limit,
            offset,
        )

    def update(self, product: Product) -> None:
        _refuse("update")

    def update_status(self, product_id: int, status: str) -> None:
        _refuse("update")

    def get_by_ids(self, ids: Iterable[int]) -> list[Product]:
        """Products for the given ids, in the order asked; unknown ids are skipped."""
        found = (self._loader.product_by_id(product_id) for product_id in ids)
        return [data.to_model() for data in found if data is not None]

    def search_products(self, query: str, limit: int, offset: int) -> tuple[list[Product], int]:
        """Active products whose name, description or SKU contains ``query``, ignoring case."""
        needle = query.lower()
        return self._select(
            lambda p: p.status == "active"
            and any(needle in text.lower() for text in (p.name, p.description, p.sku)),
            limit,
            offset,
        )

    def list_pending_approval(self, limit: int, offset: int) -> tuple[list[Product], int]:
        """Draft products awaiting review."""
        return self._select(lambda p: p.status == "draft", limit, offset)

    def create_image(self, image: ProductImage) -> None:
        _refuse("create image")

    def get_images(self, product_id: int) -> list[ProductImage]:
        data = self._loader.product_by_id(product_id)
        return [] if data is None else data.to_model().images

    def create_variant(self, variant: ProductVariant) -> None:
        _refuse("create variant")

    def get_variants(self, product_id: int) -> list[ProductVariant]:
        data = self._loader.product_by_id(product_id)
        return [] if data is None else data.to_model().variants

    def get_category(self, category_id: int) -> Category:
        _refuse("get category")
        raise AssertionError("unreachable")

    def list_categories(self) -> list[Category]:
        return []