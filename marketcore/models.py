"""Domain records shared by the repositories and services."""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


class ServiceError(Exception):
    """Base class for errors raised by repositories and services."""


class ValidationError(ServiceError, ValueError):
    """Raised when input data breaks a business rule."""


class NotFoundError(ServiceError, LookupError):
    """Raised when a requested record does not exist."""


def _parse_time(value: Any) -> datetime | None:
    if value is None or isinstance(value, datetime):
        return value
    text = str(value)
    if text[-1:] in ("Z", "z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


def _known(cls: type, data: Mapping[str, Any]) -> dict[str, Any]:
    return {f.name: data[f.name] for f in dataclasses.fields(cls) if f.name in data}


def _record_to_dict(record: Any, times: tuple[str, ...]) -> dict[str, Any]:
    body = dataclasses.asdict(record)
    for name in times:
        if body[name] is not None:
            body[name] = body[name].isoformat()
    return body


def _record_values(cls: type, data: Mapping[str, Any], times: tuple[str, ...]) -> dict[str, Any]:
    values = _known(cls, data)
    for name in times:
        if name in values:
            values[name] = _parse_time(values[name])
    return values


_PRODUCT_TIMES = ("created_at", "updated_at")
_VENDOR_TIMES = ("agreement_accepted_at",)
_PROMOTION_TIMES = ("valid_from", "valid_to")


@dataclass
class ProductImage:
    id: int = 0
    product_id: int = 0
    url: str = ""
    is_primary: bool = False
    sort_order: int = 0


@dataclass
class ProductVariant:
    id: int = 0
    product_id: int = 0
    sku: str = ""
    price: float = 0.0
    stock: int = 0


@dataclass
class Product:
    id: int = 0
    name: str = ""
    slug: str = ""
    description: str = ""
    base_price: float = 0.0
    cost_price: float | None = None
    sku: str = ""
    category_id: int = 0
    brand_id: int | None = None
    vendor_id: int = 0
    status: str = ""
    is_returnable: bool = False
    return_window_days: int = 0
    images: list[ProductImage] = field(default_factory=list)
    variants: list[ProductVariant] = field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return the product as a plain dict; times become ISO strings."""
        return _record_to_dict(self, _PRODUCT_TIMES)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Product:
        """Build a product from a dict as produced by ``to_dict``."""
        values = _record_values(cls, data, _PRODUCT_TIMES)
        values["images"] = [
            ProductImage(**_known(ProductImage, i)) for i in data.get("images") or []
        ]
        values["variants"] = [
            ProductVariant(**_known(ProductVariant, v)) for v in data.get("variants") or []
        ]
        return cls(**values)


@dataclass
class Category:
    id: int = 0
    name: str = ""
    commission_model: str = ""
    commission_rate: float | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return the category as a plain dict."""
        return _record_to_dict(self, ())

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Category:
        """Build a category from a dict as produced by ``to_dict``."""
        return cls(**_record_values(cls, data, ()))


@dataclass
class Vendor:
    id: int = 0
    user_id: int = 0
    store_name: str = ""
    store_slug: str = ""
    status: str = ""
    commission_model: str = ""
    commission_rate: float = 0.0
    agreement_accepted_at: datetime | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return the vendor as a plain dict; times become ISO strings."""
        return _record_to_dict(self, _VENDOR_TIMES)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Vendor:
        """Build a vendor from a dict as produced by ``to_dict``."""
        return cls(**_record_values(cls, data, _VENDOR_TIMES))


@dataclass
class VendorBankDetails:
    vendor_id: int = 0
    account_name: str = ""
    account_number: str = ""
    bank_name: str = ""
    branch_name: str = ""


@dataclass
class VendorWallet:
    id: int = 0
    vendor_id: int = 0
    balance: float = 0.0


@dataclass
class OrderItem:
    id: int = 0
    product: Product | None = None
    unit_price: float = 0.0
    quantity: int = 0


@dataclass
class CartItem:
    id: int = 0
    product: Product | None = None
    variant_id: int | None = None
    variant: ProductVariant | None = None
    unit_price: float = 0.0
    quantity: int = 0


@dataclass
class Order:
    id: int = 0
    status: str = ""
    subtotal: float = 0.0
    discount_total: float = 0.0
    shipping_total: float = 0.0
    grand_total: float = 0.0


@dataclass
class SubOrder:
    order_id: int = 0
    vendor_id: int = 0
    status: str = ""
    subtotal: float = 0.0
    commission_amount: float = 0.0
    vendor_earning: float = 0.0


@dataclass
class Promotion:
    id: int = 0
    code: str = ""
    type: str = ""
    funding_type: str = ""
    discount_type: str = ""
    discount_value: float = 0.0
    is_active: bool = False
    valid_from: datetime | None = None
    valid_to: datetime | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return the promotion as a plain dict; times become ISO strings."""
        return _record_to_dict(self, _PROMOTION_TIMES)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Promotion:
        """Build a promotion from a dict as produced by ``to_dict``."""
        return cls(**_record_values(cls, data, _PROMOTION_TIMES))