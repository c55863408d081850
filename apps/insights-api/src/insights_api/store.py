from __future__ import annotations

import asyncio
import dataclasses
import logging
from collections.abc import Awaitable, Iterable, Sequence
from dataclasses import dataclass
from typing import Any, Protocol, TypeVar

from devkit.db import AsyncDatabaseManager, Base, create_all_tables
from sqlalchemy import JSON, Boolean, Float, Integer, String, Text, func, select, update
from sqlalchemy.orm import Mapped, mapped_column

from insights_api.errors import ApiError, StoreError
from insights_api.predicates import MATCH_ALL, Near, Predicate
from insights_api.records import FACILITIES, RENTALS, Facility, Record, RentalListing

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class SortKey:
    field: str
    descending: bool = False


class DocumentStore(Protocol):
    async def find(
        self,
        collection: str,
        predicate: Predicate = MATCH_ALL,
        sort: Sequence[SortKey] = (),
        limit: int | None = None,
        offset: int = 0,
    ) -> list[Any]: ...

    async def count(self, collection: str, predicate: Predicate = MATCH_ALL) -> int: ...

    async def get(self, collection: str, record_id: Any) -> Any | None: ...

    async def near(self, collection: str, near: Near, limit: int) -> list[tuple[Any, float]]: ...

    async def increment_view_count(self, rental_id: str) -> bool: ...

    async def close(self) -> None: ...


def _missing_last(item: Any, name: str, flip: bool = False) -> tuple[bool, Any]:
    value = getattr(item, name, None)
    return ((value is not None) if flip else (value is None), value)


def sort_records(records: Iterable[T], sort: Sequence[SortKey]) -> list[T]:
    """Stable multi-key sort; missing values go last in either direction."""
    ordered = list(records)
    for key in reversed(sort):
        if key.descending:
            ordered.sort(key=lambda item, name=key.field: _missing_last(item, name, flip=True), reverse=True)
        else:
            ordered.sort(key=lambda item, name=key.field: _missing_last(item, name))
    return ordered


def rank_nearest(near: Near, records: Iterable[T], limit: int) -> list[tuple[T, float]]:
    by_id = sorted(records, key=lambda item: getattr(item, "id"))
    return near.query.rank(by_id, point_of=lambda item: getattr(item, "point", None))[:limit]


class InMemoryDocumentStore:
    def __init__(
        self,
        facilities: Iterable[Facility] = (),
        rentals: Iterable[RentalListing] = (),
    ) -> None:
        self._collections: dict[str, dict[Any, Record]] = {
            FACILITIES: {item.id: item for item in facilities},
            RENTALS: {item.id: item for item in rentals},
        }

    def _records(self, collection: str) -> dict[Any, Record]:
        try:
            return self._collections[collection]
        except KeyError as exc:
            raise StoreError() from exc

    async def find(
        self,
        collection: str,
        predicate: Predicate = MATCH_ALL,
        sort: Sequence[SortKey] = (),
        limit: int | None = None,
        offset: int = 0,
    ) -> list[Any]:
        matched = [item for item in self._records(collection).values() if predicate.matches(item)]
        ordered = sort_records(matched, sort)
        end = None if limit is None else offset + limit
        return ordered[offset:end]

    async def count(self, collection: str, predicate: Predicate = MATCH_ALL) -> int:
        return sum(1 for item in self._records(collection).values() if predicate.matches(item))

    async def get(self, collection: str, record_id: Any) -> Any | None:
        return self._records(collection).get(record_id)

    async def near(self, collection: str, near: Near, limit: int) -> list[tuple[Any, float]]:
        return rank_nearest(near, self._records(collection).values(), limit)

    async def increment_view_count(self, rental_id: str) -> bool:
        rentals = self._records(RENTALS)
        current = rentals.get(rental_id)
        if current is None:
            return False
        rentals[rental_id] = dataclasses.replace(current, view_count=current.view_count + 1)
        return True

    async def close(self) -> None:
        return None


class FacilityORM(Base):
    __tablename__ = "facilities"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    classification: Mapped[str | None] = mapped_column(String(64), index=True, nullable=True)
    province: Mapped[str | None] = mapped_column(String(128), nullable=True)
    district: Mapped[str | None] = mapped_column(String(128), index=True, nullable=True)
    town: Mapped[str | None] = mapped_column(String(128), nullable=True)
    status: Mapped[str | None] = mapped_column(String(32), nullable=True)
    contact: Mapped[str | None] = mapped_column(String(64), nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    open_days: Mapped[str | None] = mapped_column(String(128), nullable=True)
    open_time: Mapped[str | None] = mapped_column(String(128), nullable=True)
    lng: Mapped[float | None] = mapped_column(Float, nullable=True)
    lat: Mapped[float | None] = mapped_column(Float, nullable=True)


class RentalORM(Base):
    __tablename__ = "rentals"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    location: Mapped[str] = mapped_column(String(128), index=True, nullable=False)
    price: Mapped[int] = mapped_column(Integer, index=True, nullable=False)
    bedrooms: Mapped[int] = mapped_column(Integer, nullable=False)
    bathrooms: Mapped[int] = mapped_column(Integer, nullable=False)
    property_type: Mapped[str] = mapped_column(String(32), nullable=False)
    category: Mapped[str] = mapped_column(String(32), nullable=False)
    furnished: Mapped[str] = mapped_column(String(32), nullable=False)
    features: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    available: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    parking: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    floor_size: Mapped[float | None] = mapped_column(Float, nullable=True)
    view_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[str] = mapped_column(String(64), nullable=False)
    lng: Mapped[float | None] = mapped_column(Float, nullable=True)
    lat: Mapped[float | None] = mapped_column(Float, nullable=True)


_MODELS: dict[str, type[Base]] = {FACILITIES: FacilityORM, RENTALS: RentalORM}


class SqlDocumentStore:
    """Document store over SQLAlchemy; creates and optionally seeds tables on first use."""

    def __init__(
        self,
        db: AsyncDatabaseManager,
        seed_facilities: Iterable[Facility] = (),
        seed_rentals: Iterable[RentalListing] = (),
    ) -> None:
        self._db = db
        self._seed_facilities = list(seed_facilities)
        self._seed_rentals = list(seed_rentals)
        self._orm_ready = False
        self._ready_lock = asyncio.Lock()

    def _model(self, collection: str) -> Any:
        try:
            return _MODELS[collection]
        except KeyError as exc:
            raise StoreError() from exc

    async def find(
        self,
        collection: str,
        predicate: Predicate = MATCH_ALL,
        sort: Sequence[SortKey] = (),
        limit: int | None = None,
        offset: int = 0,
    ) -> list[Any]:
        await self._ensure_orm_ready()
        model = self._model(collection)

        async def _run(session):
            stmt = select(model).where(predicate.to_clause(model))
            for key in sort:
                column = getattr(model, key.field)
                stmt = stmt.order_by(column.desc().nulls_last() if key.descending else column.asc().nulls_last())
            if predicate.exact_in_sql:
                if offset:
                    stmt = stmt.offset(offset)
                if limit is not None:
                    stmt = stmt.limit(limit)
                rows = (await session.scalars(stmt)).all()
                return [self._to_entity(collection, row) for row in rows]
            rows = (await session.scalars(stmt)).all()
            matched = [item for item in (self._to_entity(collection, row) for row in rows) if predicate.matches(item)]
            end = None if limit is None else offset + limit
            return matched[offset:end]

        return await self._db.run_with_session(_run)

    async def count(self, collection: str, predicate: Predicate = MATCH_ALL) -> int:
        if not predicate.exact_in_sql:
            return len(await self.find(collection, predicate))
        await self._ensure_orm_ready()
        model = self._model(collection)

        async def _run(session):
            stmt = select(func.count()).select_from(model).where(predicate.to_clause(model))
            return int((await session.scalar(stmt)) or 0)

        return await self._db.run_with_session(_run)

    async def get(self, collection: str, record_id: Any) -> Any | None:
        await self._ensure_orm_ready()
        model = self._model(collection)

        async def _run(session):
            row = await session.get(model, record_id)
            return self._to_entity(collection, row) if row else None

        return await self._db.run_with_session(_run)

    async def near(self, collection: str, near: Near, limit: int) -> list[tuple[Any, float]]:
        candidates = await self.find(collection, near)
        return rank_nearest(near, candidates, limit)

    async def increment_view_count(self, rental_id: str) -> bool:
        await self._ensure_orm_ready()

        async def _run(session):
            stmt = (
                update(RentalORM)
                .where(RentalORM.id == rental_id)
                .values(view_count=RentalORM.view_count + 1)
            )
            result = await session.execute(stmt)
            return bool(result.rowcount)

        return await self._db.run_with_session(_run)

    async def close(self) -> None:
        await self._db.disconnect()

    async def _ensure_orm_ready(self) -> None:
        if self._orm_ready:
            return
        async with self._ready_lock:
            if self._orm_ready:
                return
            await self._db.connect()
            await create_all_tables(self._db.engine, Base.metadata)

            async def _seed_if_empty(session):
                count = int((await session.scalar(select(func.count()).select_from(FacilityORM))) or 0)
                if count == 0:
                    session.add_all(FacilityORM(**dataclasses.asdict(item)) for item in self._seed_facilities)
                count = int((await session.scalar(select(func.count()).select_from(RentalORM))) or 0)
                if count == 0:
                    for item in self._seed_rentals:
                        values = dataclasses.asdict(item)
                        values["features"] = list(item.features)
                        session.add(RentalORM(**values))

            await self._db.run_with_session(_seed_if_empty)
            logger.info("document_store_ready", extra={"component": "insights_api", "backend": "sql"})
            self._orm_ready = True

    def _to_entity(self, collection: str, row: Any) -> Record:
        if collection == FACILITIES:
            return Facility(
                id=row.id,
                name=row.name,
                classification=row.classification,
                province=row.province,
                district=row.district,
                town=row.town,
                status=row.status,
                contact=row.contact,
                email=row.email,
                open_days=row.open_days,
                open_time=row.open_time,
                lng=row.lng,
                lat=row.lat,
            )
        return RentalListing(
            id=row.id,
            title=row.title,
            description=row.description,
            location=row.location,
            price=row.price,
            bedrooms=row.bedrooms,
            bathrooms=row.bathrooms,
            property_type=row.property_type,
            category=row.category,
            furnished=row.furnished,
            features=tuple(row.features or ()),
            available=row.available,
            parking=row.parking,
            floor_size=row.floor_size,
            view_count=row.view_count,
            created_at=row.created_at,
            lng=row.lng,
            lat=row.lat,
        )


class TimedDocumentStore:
    """Bounds every round-trip of the wrapped store and maps faults to StoreError."""

    def __init__(self, inner: DocumentStore, timeout_seconds: float = 5.0) -> None:
        self._inner = inner
        self._timeout_seconds = timeout_seconds

    async def _guard(self, operation: str, call: Awaitable[T]) -> T:
        try:
            return await asyncio.wait_for(call, timeout=self._timeout_seconds)
        except ApiError:
            raise
        except TimeoutError as exc:
            logger.error(
                "store_timeout",
                extra={"component": "insights_api", "operation": operation, "timeout_seconds": self._timeout_seconds},
            )
            raise StoreError() from exc
        except Exception as exc:
            logger.exception("store_failure", extra={"component": "insights_api", "operation": operation})
            raise StoreError() from exc

    async def find(
        self,
        collection: str,
        predicate: Predicate = MATCH_ALL,
        sort: Sequence[SortKey] = (),
        limit: int | None = None,
        offset: int = 0,
    ) -> list[Any]:
        return await self._guard("find", self._inner.find(collection, predicate, sort, limit, offset))

    async def count(self, collection: str, predicate: Predicate = MATCH_ALL) -> int:
        return await self._guard("count", self._inner.count(collection, predicate))

    async def get(self, collection: str, record_id: Any) -> Any | None:
        return await self._guard("get", self._inner.get(collection, record_id))

    async def near(self, collection: str, near: Near, limit: int) -> list[tuple[Any, float]]:
        return await self._guard("near", self._inner.near(collection, near, limit))

    async def increment_view_count(self, rental_id: str) -> bool:
        return await self._guard("increment_view_count", self._inner.increment_view_count(rental_id))

    async def close(self) -> None:
        await self._inner.close()
