"""Repository protocol for entity persistence."""

from __future__ import annotations

from typing import Any, Mapping, Protocol, Sequence

from .models import Entity, EntityType, Mutation

Filter = Mapping[str, Any]


class EntityStore(Protocol):
    """Document-style store over the ledger entities.

    Filters match scalar fields by equality (``None`` matches null), reference
    list fields by membership, ``AtLeast`` and ``AtMost`` values as bounds and
    ``AnyOf`` values as a set of allowed values. Erased documents are skipped unless
    ``include_erased`` is set.
    """

    async def find_one(
        self,
        entity_type: EntityType,
        filter: Filter,
        *,
        include_erased: bool = False,
    ) -> Entity | None:
        ...

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
        ...

    async def count(
        self,
        entity_type: EntityType,
        filter: Filter,
        *,
        include_erased: bool = False,
    ) -> int:
        ...

    async def upsert(
        self,
        entity_type: EntityType,
        filter: Filter,
        mutation: Mutation,
        *,
        upsert: bool = True,
    ) -> Entity | None:
        """Atomically find one matching document and apply ``mutation``.

        When nothing matches and ``upsert`` is true, a document is inserted from
        the filter's equality fields and ``mutation.set_values``; otherwise
        ``None`` is returned.
        """
        ...
