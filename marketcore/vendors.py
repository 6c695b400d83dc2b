"""Vendor management: review workflow, eligibility checks and bank details."""

from __future__ import annotations

from contextlib import suppress
from datetime import timedelta
from typing import Any

from marketcore.cache import CacheError, CacheManager
from marketcore.models import Vendor, VendorBankDetails, VendorWallet, ValidationError

VENDOR_CACHE_TTL = timedelta(hours=1)
COMMISSION_MODELS = ("margin", "markup")


def _vendor_key(vendor_id: int) -> str:
    return f"vendor:{vendor_id}"


class VendorService:
    """Vendor reads go through the cache; status and detail changes invalidate it."""

    def __init__(
        self,
        vendor_repo: Any,
        user_repo: Any,
        storage: Any = None,
        cache: CacheManager | None = None,
    ) -> None:
        self._vendor_repo = vendor_repo
        self._user_repo = user_repo
        self._storage = storage
        self._cache = cache if cache is not None else CacheManager()

    def _forget(self, vendor_id: int) -> None:
        with suppress(CacheError):
            self._cache.delete(_vendor_key(vendor_id))

    def get_vendor_by_id(self, vendor_id: int) -> Vendor:
        key = _vendor_key(vendor_id)
        try:
            return Vendor.from_dict(self._cache.get(key))
        except (CacheError, TypeError, ValueError, AttributeError):
            pass
        vendor = self._vendor_repo.get_by_id(vendor_id)
        with suppress(CacheError):
            self._cache.set(key, vendor, VENDOR_CACHE_TTL)
        return vendor

    def list_vendors(self, status: str, limit: int, offset: int) -> tuple[list[Vendor], int]:
        return self._vendor_repo.list(status, limit, offset)

    def _set_status(self, vendor_id: int, status: str) -> None:
        self._vendor_repo.update_status(vendor_id, status)
        self._forget(vendor_id)

    def approve_vendor(self, vendor_id: int) -> None:
        self._set_status(vendor_id, "approved")

    def reject_vendor(self, vendor_id: int) -> None:
        self._set_status(vendor_id, "rejected")

    def suspend_vendor(self, vendor_id: int) -> None:
        self._set_status(vendor_id, "suspended")

    def can_list_products(self, vendor_id: int) -> bool:
        """Return True if the vendor is approved and has accepted the agreement.

        Raises ValidationError explaining why listing is blocked otherwise.
        """
        vendor = self.get_vendor_by_id(vendor_id)
        if vendor.status != "approved":
            raise ValidationError(f"vendor status is {vendor.status}, not approved")
        if vendor.agreement_accepted_at is None:
            raise ValidationError("vendor has not agreed to terms")
        return True

    def validate_vendor(self, vendor: Vendor | None) -> None:
        """Raise ValidationError if required fields are missing or out of range."""
        if vendor is None:
            raise ValidationError("vendor is required")
        if vendor.user_id == 0:
            raise ValidationError("user ID is required")
        if len(vendor.store_name.encode("utf-8")) < 3:
            raise ValidationError("store name must be at least 3 characters")
        if not vendor.store_slug:
            raise ValidationError("store slug is required")
        if vendor.commission_model not in COMMISSION_MODELS:
            raise ValidationError("commission model must be 'margin' or 'markup'")
        if vendor.commission_rate < 0 or vendor.commission_rate > 1:
            raise ValidationError("commission rate must be between 0 and 1")

    def get_vendor_wallet(self, vendor_id: int) -> VendorWallet:
        return self._vendor_repo.get_wallet(vendor_id)

    def update_bank_details(
        self,
        vendor_id: int,
        account_name: str,
        account_number: str,
        bank_name: str,
        branch_name: str,
    ) -> None:
        details = VendorBankDetails(
            vendor_id=vendor_id,
            account_name=account_name,
            account_number=account_number,
            bank_name=bank_name,
            branch_name=branch_name,
        )
        self._vendor_repo.update_bank_details(details)
        self._forget(vendor_id)