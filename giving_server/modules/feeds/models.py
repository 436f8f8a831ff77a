"""Feed entries: one entity tagged with its type."""

from __future__ import annotations

from dataclasses import dataclass

from giving_server.modules.entities.models import Entity, EntityType


@dataclass(frozen=True, slots=True)
class FeedItem:
    entity_type: EntityType
    entity: Entity


__all__ = ["FeedItem"]
