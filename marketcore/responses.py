"""JSON response envelopes returned by the API layer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

Reply = tuple[int, dict[str, Any]]


@dataclass(frozen=True)
class PaginationMeta:
    """Totals describing one page of a listing."""

    total: int
    page: int
    page_size: int
    total_pages: int

    def to_dict(self) -> dict[str, int]:
        return {
            "total": self.total,
            "page": self.page,
            "pageSize": self.page_size,
            "totalPages": self.total_pages,
        }


@dataclass(frozen=True)
class APIResponse:
    """Standard envelope; ``data`` and ``errors`` are left out when None."""

    success: bool
    message: str
    data: Any = None
    errors: Any = None

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"success": self.success, "message": self.message}
        if self.data is not None:
            body["data"] = self.data
        if self.errors is not None:
            body["errors"] = self.errors
        return body


@dataclass(frozen=True)
class PaginatedResponse:
    """Envelope for a page of results with its metadata."""

    success: bool
    message: str
    data: Any
    meta: PaginationMeta

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "message": self.message,
            "data": self.data,
            "meta": self.meta.to_dict(),
        }


def success_response(status_code: int, message: str, data: Any = None) -> Reply:
    return status_code, APIResponse(True, message, data=data).to_dict()


def success_paginated_response(
    status_code: int, message: str, data: Any, meta: PaginationMeta
) -> Reply:
    return status_code, PaginatedResponse(True, message, data, meta).to_dict()


def error_response(status_code: int, message: str, errors: Any = None) -> Reply:
    return status_code, APIResponse(False, message, errors=errors).to_dict()


def bad_request(message: str) -> Reply:
    return error_response(400, message)


def unauthorized(message: str) -> Reply:
    return error_response(401, message)


def forbidden(message: str) -> Reply:
    return error_response(403, message)


def not_found(message: str) -> Reply:
    return error_response(404, message)


def internal_server_error(message: str) -> Reply:
    return error_response(500, message)