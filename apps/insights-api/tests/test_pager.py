import pytest

from insights_api.pager import Page, paginate, with_tie_breaker
from insights_api.predicates import MATCH_ALL, Contains
from insights_api.records import FACILITIES
from insights_api.store import SortKey

from insights_samples import sample_store


def test_page_pagination_fields() -> None:
    page = Page(items=[1, 2], total=3, limit=2, offset=0)
    assert page.pagination() == {"total": 3, "limit": 2, "offset": 0, "hasMore": True}
    assert page.pagination(include_pages=True)["pages"] == 2


def test_tie_breaker_is_appended_once() -> None:
    assert with_tie_breaker([SortKey("price")]) == [SortKey("price"), SortKey("id")]
    assert with_tie_breaker([SortKey("id", descending=True)]) == [SortKey("id", descending=True)]


@pytest.mark.asyncio
async def test_paginate_returns_page_and_total() -> None:
    page = await paginate(
        sample_store(), FACILITIES, Contains("classification", "hospital"), [SortKey("id")], 2, 0, max_limit=500
    )
    assert [item.id for item in page.items] == [1, 2]
    assert page.total == 3
    assert page.has_more is True


@pytest.mark.asyncio
async def test_offset_past_total_is_an_empty_page() -> None:
    page = await paginate(sample_store(), FACILITIES, MATCH_ALL, [], 10, 50, max_limit=500)
    assert page.items == []
    assert page.total == 8
    assert page.has_more is False


@pytest.mark.asyncio
async def test_limit_is_clamped_to_the_ceiling() -> None:
    page = await paginate(sample_store(), FACILITIES, MATCH_ALL, [], 1000, 0, max_limit=5)
    assert page.limit == 5
    assert len(page.items) == 5


@pytest.mark.asyncio
async def test_consecutive_pages_do_not_overlap() -> None:
    store = sample_store()
    first = await paginate(store, FACILITIES, MATCH_ALL, [], 3, 0, max_limit=500)
    second = await paginate(store, FACILITIES, MATCH_ALL, [], 3, 3, max_limit=500)
    assert not {item.id for item in first.items} & {item.id for item in second.items}
