from __future__ import annotations

import asyncio
import math
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from insights_api.predicates import Predicate
from insights_api.store import DocumentStore, SortKey

FACILITY_LIST_MAX_LIMIT = 500
NEAR_MAX_LIMIT = 100
SEARCH_MAX_LIMIT = 100
RENTAL_LIST_MAX_LIMIT = 100
RENTAL_SEARCH_MAX_LIMIT = 50


@dataclass(frozen=True)
class Page:
    items: list[Any] = field(default_factory=list)
    total: int = 0
    limit: int = 0
    offset: int = 0

    @property
    def has_more(self) -> bool:
        return self.offset + self.limit < self.total

    @property
    def pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0

    def pagination(self, include_pages: bool = False) -> dict[str, object]:
        payload: dict[str, object] = {
            "total": self.total,
            "limit": self.limit,
            "offset": self.offset,
            "hasMore": self.has_more,
        }
        if include_pages:
            payload["pages"] = self.pages
        return payload


def with_tie_breaker(sort: Sequence[SortKey]) -> list[SortKey]:
    keys = list(sort)
    if not any(key.field == "id" for key in keys):
        keys.append(SortKey("id"))
    return keys


async def paginate(
    store: DocumentStore,
    collection: str,
    predicate: Predicate,
    sort: Sequence[SortKey],
    limit: int,
    offset: int,
    max_limit: int,
) -> Page:
    """Fetch one page and the total count concurrently.

    The two reads are independent; a write landing between them can make
    ``total`` and ``items`` disagree.
    """
    bounded = max(1, min(limit, max_limit))
    offset = max(0, offset)
    items, total = await asyncio.gather(
        store.find(collection, predicate, with_tie_breaker(sort), bounded, offset),
        store.count(collection, predicate),
    )
    return Page(items=items, total=total, limit=bounded, offset=offset)
