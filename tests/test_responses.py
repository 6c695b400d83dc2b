import pytest

from marketcore.responses import (
    APIResponse,
    PaginatedResponse,
    PaginationMeta,
    bad_request,
    error_response,
    forbidden,
    internal_server_error,
    not_found,
    success_paginated_response,
    success_response,
    unauthorized,
)


def test_success_response_carries_data_and_no_errors():
    status, body = success_response(201, "created", {"id": 7})
    assert status == 201
    assert body == {"success": True, "message": "created", "data": {"id": 7}}


def test_success_response_without_data_omits_key():
    _, body = success_response(200, "ok", None)
    assert body == {"success": True, "message": "ok"}


def test_empty_data_is_kept():
    assert APIResponse(True, "ok", data=[]).to_dict()["data"] == []


def test_error_response_includes_errors():
    status, body = error_response(422, "invalid", {"email": "required"})
    assert status == 422
    assert body == {"success": False, "message": "invalid", "errors": {"email": "required"}}


@pytest.mark.parametrize(
    "helper,status",
    [
        (bad_request, 400),
        (unauthorized, 401),
        (forbidden, 403),
        (not_found, 404),
        (internal_server_error, 500),
    ],
)
def test_error_helpers(helper, status):
    code, body = helper("nope")
    assert code == status
    assert body == {"success": False, "message": "nope"}


def test_paginated_response_uses_camel_case_meta():
    meta = PaginationMeta(total=45, page=2, page_size=20, total_pages=3)
    status, body = success_paginated_response(200, "ok", [1, 2], meta)
    assert status == 200
    assert body["data"] == [1, 2]
    assert body["success"] is True
    assert body["meta"] == {"total": 45, "page": 2, "pageSize": 20, "totalPages": 3}


def test_paginated_response_keeps_none_data():
    meta = PaginationMeta(total=0, page=1, page_size=20, total_pages=0)
    body = PaginatedResponse(True, "empty", None, meta).to_dict()
    assert "data" in body and body["data"] is None