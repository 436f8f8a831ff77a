"""SQLAlchemy implementation of the entity store."""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any, Sequence

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from giving_server.core.errors import ServerError, ValidationError
from giving_server.db import models as orm
from giving_server.modules.entities.models import AnyOf, AtLeast, AtMost, Condition, Entity, EntityType, Mutation, generate_guid
from giving_server.modules.entities.registry import EntitySchema, get_schema
from giving_server.modules.entities.repository import Filter

logger = logging.getLogger(__name__)

_TABLES: dict[EntityType, type[orm.ObjectColumns]] = {
    EntityType.USER: orm.User,
    EntityType.CHARITY: orm.Charity,
    EntityType.CAMPAIGN: orm.Campaign,
    EntityType.POST: orm.Post,
    EntityType.DONATION: orm.Donation,
    EntityType.UPDATE: orm.Update,
}


class SqlEntityStore:
    """Entity store backed by SQLAlchemy models.

    Every call runs in its own transaction, so each ``upsert`` is an
    independent atomic unit. Mutations are compiled into a single UPDATE keyed
    by GUID that re-checks the filter's scalar conditions, which makes guarded
    relative changes such as ``balance = balance - n WHERE balance >= n``
    indivisible.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def find_one(
        self,
        entity_type: EntityType,
        filter: Filter,
        *,
        include_erased: bool = False,
    ) -> Entity | None:
        rows = await self.find_many(entity_type, filter, include_erased=include_erased, limit=1)
        return rows[0] if rows else None

    async def find_many(
        self,
        entity_type: EntityType,
        filter: Filter,
        *,
        include_erased: bool = False,
        limit: int | None = None,
        offset: int = 0,
        sort_key: str = "date_created",
        descending: bool = False,
    ) -> Sequence[Entity]:
        schema = get_schema(entity_type)
        model = _TABLES[entity_type]
        if sort_key not in schema.scalar_fields:
            raise ValidationError(f"Cannot sort {schema.label} by {sort_key}", "sortKey")

        column = getattr(model, sort_key)
        order = (column.desc(), model.id.desc()) if descending else (column.asc(), model.id.asc())
        stmt = (
            select(model)
            .where(*self._clauses(schema, model, filter, include_erased))
            .order_by(*order)
            .offset(offset)
        )
        if limit is not None:
            stmt = stmt.limit(limit)

        async with self._transaction("find") as session:
            result = await session.execute(stmt)
            rows = result.scalars().all()
            lists = await self._load_lists(session, schema, [row.guid for row in rows])
            return [self._to_record(schema, row, lists.get(row.guid)) for row in rows]

    async def count(
        self,
        entity_type: EntityType,
        filter: Filter,
        *,
        include_erased: bool = False,
    ) -> int:
        schema = get_schema(entity_type)
        model = _TABLES[entity_type]
        stmt = select(func.count()).select_from(model).where(
            *self._clauses(schema, model, filter, include_erased)
        )
        async with self._transaction("count") as session:
            result = await session.execute(stmt)
            return int(result.scalar_one())

    async def upsert(
        self,
        entity_type: EntityType,
        filter: Filter,
        mutation: Mutation,
        *,
        upsert: bool = True,
    ) -> Entity | None:
        schema = get_schema(entity_type)
        model = _TABLES[entity_type]
        match = select(model.guid).where(*self._clauses(schema, model, filter, False)).limit(1)

        async with self._transaction("upsert") as session:
            guid = (await session.execute(match)).scalar_one_or_none()
            if guid is None:
                if not upsert:
                    return None
                guid = await self._insert(session, schema, model, filter, mutation)
            elif not await self._update(session, schema, model, guid, filter, mutation):
                # the document stopped matching between the lookup and the write
                return None

            for name, ref in mutation.appends.items():
                session.add(
                    orm.EntityReference(
                        entity_type=schema.label,
                        entity_guid=guid,
                        field=name,
                        ref_guid=ref,
                    )
                )
            await session.flush()

            stmt = select(model).where(model.guid == guid).execution_options(populate_existing=True)
            row = (await session.execute(stmt)).scalar_one()
            lists = await self._load_lists(session, schema, [guid])
            return self._to_record(schema, row, lists.get(guid))

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    @asynccontextmanager
    async def _transaction(self, operation: str) -> AsyncIterator[AsyncSession]:
        async with self._session_factory() as session:
            try:
                async with session.begin():
                    yield session
            except IntegrityError as exc:
                logger.warning("Entity store %s rejected by constraint: %s", operation, exc.orig)
                raise ValidationError("Update violates a field constraint") from exc
            except OverflowError as exc:
                # the driver cannot bind the integer at all
                logger.warning("Entity store %s rejected an out of range value: %s", operation, exc)
                raise ValidationError("Value is out of range") from exc
            except SQLAlchemyError as exc:
                logger.error("Entity store %s failed: %s", operation, exc)
                raise ServerError(f"Entity store {operation} failed: {exc}") from exc

    async def _insert(
        self,
        session: AsyncSession,
        schema: EntitySchema,
        model: type[orm.ObjectColumns],
        filter: Filter,
        mutation: Mutation,
    ) -> str:
        values: dict[str, Any] = {
            name: value
            for name, value in filter.items()
            if name in schema.scalar_fields and not isinstance(value, Condition)
        }
        values.update(mutation.set_values)
        for name, delta in mutation.increments.items():
            values[name] = values.get(name, 0) + delta
        values.setdefault("guid", generate_guid())
        values.setdefault("date_created", orm.utcnow())
        schema.validate_insert(values)
        schema.validate_appends(mutation)

        session.add(model(**values))
        await session.flush()
        return values["guid"]

    async def _update(
        self,
        session: AsyncSession,
        schema: EntitySchema,
        model: type[orm.ObjectColumns],
        guid: str,
        filter: Filter,
        mutation: Mutation,
    ) -> bool:
        schema.validate_update(mutation)
        values: dict[str, Any] = dict(mutation.set_values)
        for name, delta in mutation.increments.items():
            values[name] = getattr(model, name) + delta
        values["last_modified"] = orm.utcnow()

        stmt = (
            update(model)
            .where(model.guid == guid, *self._scalar_clauses(schema, model, filter))
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        result = await session.execute(stmt)
        return result.rowcount > 0

    def _clauses(
        self,
        schema: EntitySchema,
        model: type[orm.ObjectColumns],
        filter: Filter,
        include_erased: bool,
    ) -> list[Any]:
        clauses = [] if include_erased else [model.erased.is_(False)]
        clauses.extend(self._scalar_clauses(schema, model, filter))
        for name, value in filter.items():
            if name in schema.list_fields:
                clauses.append(
                    select(orm.EntityReference.id)
                    .where(
                        orm.EntityReference.entity_type == schema.label,
                        orm.EntityReference.entity_guid == model.guid,
                        orm.EntityReference.field == name,
                        orm.EntityReference.ref_guid == value,
                    )
                    .exists()
                )
        return clauses

    @staticmethod
    def _scalar_clauses(schema: EntitySchema, model: type[orm.ObjectColumns], filter: Filter) -> list[Any]:
        clauses = []
        for name, value in filter.items():
            if name in schema.list_fields:
                continue
            if name not in schema.scalar_fields:
                raise ValidationError(f"Unknown {schema.label} field: {name}", name)
            column = getattr(model, name)
            if isinstance(value, AtLeast):
                clauses.append(column >= value.value)
            elif isinstance(value, AtMost):
                clauses.append(column <= value.value)
            elif isinstance(value, AnyOf):
                clauses.append(column.in_(value.values))
            elif value is None:
                clauses.append(column.is_(None))
            else:
                clauses.append(column == value)
        return clauses

    @staticmethod
    async def _load_lists(
        session: AsyncSession,
        schema: EntitySchema,
        guids: list[str],
    ) -> dict[str, dict[str, list[str]]]:
        if not schema.list_fields or not guids:
            return {}
        stmt = (
            select(orm.EntityReference)
            .where(
                orm.EntityReference.entity_type == schema.label,
                orm.EntityReference.entity_guid.in_(guids),
            )
            .order_by(orm.EntityReference.id)
        )
        result = await session.execute(stmt)
        lists: dict[str, dict[str, list[str]]] = defaultdict(lambda: defaultdict(list))
        for ref in result.scalars():
            lists[ref.entity_guid][ref.field].append(ref.ref_guid)
        return lists

    @staticmethod
    def _to_record(schema: EntitySchema, row: orm.ObjectColumns, lists: dict[str, list[str]] | None) -> Entity:
        values = {name: getattr(row, name) for name in schema.scalar_fields}
        return schema.build(values, lists)


__all__ = ["SqlEntityStore"]
