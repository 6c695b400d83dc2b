import pytest

from marketcore.pagination import (
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    PaginationParams,
    calculate_pagination_meta,
    get_pagination_params,
    paginate,
)


def test_defaults_when_query_is_empty():
    params = get_pagination_params({})
    assert params.page == 1
    assert params.page_size == DEFAULT_PAGE_SIZE == 20
    assert params.sort == ""


def test_explicit_values_are_used():
    params = get_pagination_params({"page": "3", "pageSize": "50", "sort": "name"})
    assert params == PaginationParams(page=3, page_size=50, sort="name")


def test_page_size_is_capped():
    params = get_pagination_params({"pageSize": "500"})
    assert params.page_size == MAX_PAGE_SIZE == 100


@pytest.mark.parametrize("raw", ["abc", "-1", "0", "", "1.5", "+4", " 7"])
def test_malformed_numbers_fall_back_to_defaults(raw):
    params = get_pagination_params({"page": raw, "pageSize": raw})
    assert params.page == 1
    assert params.page_size == DEFAULT_PAGE_SIZE


def test_first_page_has_no_offset():
    assert PaginationParams(page=1, page_size=10).offset() == 0


def test_second_page_starts_after_one_page():
    params = PaginationParams(page=2, page_size=15)
    assert params.offset() == params.page_size


def test_paginate_pages_cover_all_items_in_order():
    items = list(range(45))
    collected = []
    page = 1
    while chunk := paginate(PaginationParams(page=page, page_size=10), items):
        assert len(chunk) <= 10
        collected.extend(chunk)
        page += 1
    assert collected == items


def test_paginate_past_the_end_is_empty():
    assert paginate(PaginationParams(page=10, page_size=10), list(range(5))) == []


@pytest.mark.parametrize("total,page_size", [(45, 20), (40, 20), (1, 100), (99, 7)])
def test_meta_total_pages_rounds_up(total, page_size):
    meta = calculate_pagination_meta(total, 2, page_size)
    assert meta.total == total
    assert meta.page == 2
    assert meta.page_size == page_size
    assert meta.total_pages * page_size >= total
    assert (meta.total_pages - 1) * page_size < total


def test_meta_with_no_items_has_no_pages():
    assert calculate_pagination_meta(0, 1, 20).total_pages == 0


def test_meta_rejects_zero_page_size():
    with pytest.raises(ValueError):
        calculate_pagination_meta(10, 1, 0)