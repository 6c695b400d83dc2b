"""Read-only product catalogue loaded from a JSON file."""

from __future__ import annotations

import dataclasses
import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any

from marketcore.models import Product, ProductImage, ProductVariant


class LoaderError(Exception):
    """Raised when the catalogue file cannot be read or decoded."""


def _get(data: Mapping[str, Any], key: str, kinds: tuple[type, ...], default: Any) -> Any:
    value = data.get(key)
    if value is None:
        return default
    if not isinstance(value, kinds) or (isinstance(value, bool) and bool not in kinds):
        raise LoaderError(f"field {key!r} has the wrong type: {value!r}")
    return value


def _uint(data: Mapping[str, Any], key: str, default: int | None = 0) -> int | None:
    value = _get(data, key, (int,), default)
    if value is not None and value < 0:
        raise LoaderError(f"field {key!r} must not be negative, got {value!r}")
    return value


def _object(value: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise LoaderError(f"{what} must be a JSON object")
    return value


def _objects(data: Mapping[str, Any], key: str) -> list[Mapping[str, Any]]:
    return [_object(item, f"entry of {key!r}") for item in _get(data, key, (list,), [])]


def _parse_rfc3339(text: str) -> datetime | None:
    """Parse an RFC 3339 timestamp; anything else yields None."""
    if text[-1:] in ("Z", "z"):
        text = text[:-1] + "+00:00"
    try:
        moment = datetime.fromisoformat(text)
    except ValueError:
        return None
    return moment if moment.tzinfo is not None else None


@dataclass
class VendorData:
    id: int = 0
    business_name: str = ""
    logo: str | None = None


@dataclass
class ProductImageData:
    id: int = 0
    product_id: int = 0
    url: str = ""
    is_primary: bool = False
    sort_order: int = 0


@dataclass
class ProductVariantData:
    id: int = 0
    product_id: int = 0
    sku: str = ""
    price: float = 0.0
    stock: int = 0


@dataclass
class ProductData:
    """One product entry as it appears in the catalogue file."""

    id: int = 0
    name: str = ""
    slug: str = ""
    description: str = ""
    base_price: float = 0.0
    sku: str = ""
    category_id: int = 0
    brand_id: int | None = None
    vendor_id: int = 0
    status: str = ""
    vendor: VendorData | None = None
    images: list[ProductImageData] = field(default_factory=list)
    variants: list[ProductVariantData] = field(default_factory=list)
    created_at: str = ""
    updated_at: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ProductData:
        """Decode a product entry; the price is read from the ``price`` key."""
        data = _object(data, "product")
        text = (str,)
        vendor = data.get("vendor")
        if vendor is not None:
            vendor = _object(vendor, "vendor")
            vendor = VendorData(
                id=_uint(vendor, "id"),
                business_name=_get(vendor, "business_name", text, ""),
                logo=_get(vendor, "logo", text, None),
            )
        return cls(
            id=_uint(data, "id"),
            name=_get(data, "name", text, ""),
            slug=_get(data, "slug", text, ""),
            description=_get(data, "description", text, ""),
            base_price=float(_get(data, "price", (int, float), 0.0)),
            sku=_get(data, "sku", text, ""),
            category_id=_uint(data, "category_id"),
            brand_id=_uint(data, "brand_id", None),
            vendor_id=_uint(data, "vendor_id"),
            status=_get(data, "status", text, ""),
            vendor=vendor,
            images=[
                ProductImageData(
                    id=_uint(img, "id"),
                    product_id=_uint(img, "product_id"),
                    url=_get(img, "url", text, ""),
                    is_primary=_get(img, "is_primary", (bool,), False),
                    sort_order=_get(img, "sort_order", (int,), 0),
                )
                for img in _objects(data, "images")
            ],
            variants=[
                ProductVariantData(
                    id=_uint(var, "id"),
                    product_id=_uint(var, "product_id"),
                    sku=_get(var, "sku", text, ""),
                    price=float(_get(var, "price", (int, float), 0.0)),
                    stock=_get(var, "stock", (int,), 0),
                )
                for var in _objects(data, "variants")
            ],
            created_at=_get(data, "created_at", text, ""),
            updated_at=_get(data, "updated_at", text, ""),
        )

    def to_model(self) -> Product:
        """Convert to a Product; unparsable timestamps become None."""
        return Product(
            id=self.id,
            name=self.name,
            slug=self.slug,
            description=self.description,
            base_price=self.base_price,
            sku=self.sku,
            category_id=self.category_id,
            brand_id=self.brand_id,
            vendor_id=self.vendor_id,
            status=self.status,
            created_at=_parse_rfc3339(self.created_at),
            updated_at=_parse_rfc3339(self.updated_at),
            images=[ProductImage(**dataclasses.asdict(img)) for img in self.images],
            variants=[ProductVariant(**dataclasses.asdict(var)) for var in self.variants],
        )


class JSONLoader:
    """Holds the products of a ``{"products": [...]}`` file in memory."""

    def __init__(self, file_path: str | Path) -> None:
        self.file_path = Path(file_path)
        self._products: list[ProductData] = []
        self.load()

    def load(self) -> None:
        """(Re)read the file; relative paths are resolved from the working directory."""
        path = self.file_path if self.file_path.is_absolute() else Path.cwd() / self.file_path
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise LoaderError(f"failed to read JSON file {path}: {exc}") from exc
        try:
            raw = json.loads(text)
        except json.JSONDecodeError as exc:
            raise LoaderError(f"failed to unmarshal JSON: {exc}") from exc
        raw = _object(raw, "catalogue file")
        self._products = [ProductData.from_dict(item) for item in _objects(raw, "products")]

    def products(self) -> list[ProductData]:
        return list(self._products)

    def product_by_id(self, product_id: int) -> ProductData | None:
        return next((p for p in self._products if p.id == product_id), None)

    def product_by_slug(self, slug: str) -> ProductData | None:
        return next((p for p in self._products if p.slug == slug), None)