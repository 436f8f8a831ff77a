"""Ledger entity exports"""

from .models import (
    AnyOf,
    AtLeast,
    AtMost,
    Campaign,
    Charity,
    Condition,
    Donation,
    Entity,
    EntityType,
    Mutation,
    Post,
    Update,
    User,
    generate_guid,
)
from .registry import ENTITY_SCHEMAS, MAX_CENTS, EntitySchema, get_schema
from .repository import EntityStore, Filter

__all__ = [
    "AnyOf",
    "AtLeast",
    "AtMost",
    "Campaign",
    "Charity",
    "Condition",
    "Donation",
    "Entity",
    "EntityType",
    "Mutation",
    "Post",
    "Update",
    "User",
    "generate_guid",
    "ENTITY_SCHEMAS",
    "MAX_CENTS",
    "EntitySchema",
    "get_schema",
    "EntityStore",
    "Filter",
]
