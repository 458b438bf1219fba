"""Shared record-store operations.

``EntityRepository`` is the data-access pass-through used by the services:
find by id, save (insert or overwrite), delete by id and paged listing. It
does not commit; the request-scoped session is committed by ``get_db``.
"""

from __future__ import annotations

from typing import Generic, TypeVar

from sqlalchemy import Select, delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from patient_service.database import Base
from patient_service.schemas.pagination import Page, Pageable, SortOrder

ModelT = TypeVar("ModelT", bound=Base)


class InvalidSortError(ValueError):
    """Raised when a sort property does not name a column of the entity."""

    pass


class EntityRepository(Generic[ModelT]):
    """Repository for a single entity type keyed by an integer id."""

    model: type[ModelT]

    def __init__(self, db: AsyncSession):
        """Initialize repository with database session.

        Args:
            db: Async SQLAlchemy session.
        """
        self.db = db

    async def find_by_id(self, entity_id: int) -> ModelT | None:
        """Get a record by id, or None if absent."""
        return await self.db.get(self.model, entity_id)

    async def save(self, entity: ModelT) -> ModelT:
        """Insert the record, or overwrite the stored row with the same id.

        A record whose id is not in the store is inserted under a new,
        store-assigned id; ids are never chosen by the caller.

        Args:
            entity: Transient record. An id of None lets the store assign one.

        Returns:
            The persistent record with its id populated.
        """
        if entity.id is not None and await self.find_by_id(entity.id) is None:
            entity.id = None
        if entity.id is None:
            self.db.add(entity)
        else:
            entity = await self.db.merge(entity)
        await self.db.flush()
        return entity

    async def delete_by_id(self, entity_id: int) -> None:
        """Delete a record by id. Deleting an absent id is a no-op."""
        await self.db.execute(delete(self.model).where(self.model.id == entity_id))

    async def count(self) -> int:
        result = await self.db.execute(select(func.count()).select_from(self.model))
        return result.scalar() or 0

    async def find_all(self, pageable: Pageable) -> Page[ModelT]:
        """Get one page of records in the requested order."""
        total = await self.count()
        query = self._apply_ordering(select(self.model), pageable.sort)
        query = query.offset(pageable.offset).limit(pageable.size)
        result = await self.db.execute(query)
        return Page(
            content=list(result.scalars().all()),
            total=total,
            page=pageable.page,
            size=pageable.size,
            sort=pageable.sort,
        )

    def _apply_ordering(
        self, query: Select[tuple[ModelT]], sort: tuple[SortOrder, ...]
    ) -> Select[tuple[ModelT]]:
        """Apply requested ordering, always ending with id for a stable order."""
        columns = self.model.__table__.columns
        clauses = []
        for order in sort:
            column_name = _to_column_name(order.property)
            if column_name not in columns:
                raise InvalidSortError(f"Cannot sort {self.model.__name__} by '{order.property}'")
            column = columns[column_name]
            clauses.append(column.desc() if order.descending else column.asc())
        if not any(_to_column_name(o.property) == "id" for o in sort):
            clauses.append(self.model.id.asc())
        return query.order_by(*clauses)


def _to_column_name(prop: str) -> str:
    """Translate a camelCase API property name into its snake_case column."""
    return "".join(f"_{c.lower()}" if c.isupper() else c for c in prop)
