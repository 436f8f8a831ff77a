"""Ledger entity records and the primitives used to query and mutate them."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Optional


def generate_guid() -> str:
    return str(uuid.uuid4())


class EntityType(str, Enum):
    USER = "user"
    CHARITY = "charity"
    CAMPAIGN = "campaign"
    POST = "post"
    DONATION = "donation"
    UPDATE = "update"


@dataclass(slots=True, kw_only=True)
class Entity:
    guid: str
    date_created: Optional[datetime] = None
    last_modified: Optional[datetime] = None
    erased: bool = False


@dataclass(slots=True, kw_only=True)
class User(Entity):
    email: str
    name: str
    password_hash: str = field(default="", repr=False)
    bio: str = ""
    charity: Optional[str] = None
    balance: int = 0
    donations: list[str] = field(default_factory=list)
    posts: list[str] = field(default_factory=list)
    following_charities: list[str] = field(default_factory=list)


@dataclass(slots=True, kw_only=True)
class Charity(Entity):
    name: str
    description: str = ""
    users: list[str] = field(default_factory=list)
    campaigns: list[str] = field(default_factory=list)
    donations: list[str] = field(default_factory=list)
    updates: list[str] = field(default_factory=list)


@dataclass(slots=True, kw_only=True)
class Campaign(Entity):
    charity: str
    name: str
    description: str = ""
    donations: list[str] = field(default_factory=list)
    posts: list[str] = field(default_factory=list)


@dataclass(slots=True, kw_only=True)
class Post(Entity):
    user: str
    campaign: str
    charity: str
    caption: str = ""
    donations: list[str] = field(default_factory=list)


@dataclass(slots=True, kw_only=True)
class Donation(Entity):
    user: str
    charity: str
    amount: int
    campaign: Optional[str] = None
    post: Optional[str] = None


@dataclass(slots=True, kw_only=True)
class Update(Entity):
    """A news item a charity publishes to its followers."""

    charity: str
    name: str
    description: str = ""


class Condition:
    """Base for filter values that are not plain equality."""

    __slots__ = ()


@dataclass(frozen=True, slots=True)
class AtLeast(Condition):
    """Filter guard: the field must be greater than or equal to ``value``."""

    value: int


@dataclass(frozen=True, slots=True)
class AtMost(Condition):
    """Filter guard: the field must be less than or equal to ``value``."""

    value: int


@dataclass(frozen=True, slots=True)
class AnyOf(Condition):
    """The field must equal one of ``values``. An empty tuple matches nothing."""

    values: tuple[str, ...]


@dataclass(slots=True)
class Mutation:
    """An atomic change to one document.

    ``increments`` are applied relative to the stored value, never computed
    from a previously read copy. ``appends`` push one GUID onto a reference list.
    """

    set_values: dict[str, Any] = field(default_factory=dict)
    increments: dict[str, int] = field(default_factory=dict)
    appends: dict[str, str] = field(default_factory=dict)


__all__ = [
    "generate_guid",
    "EntityType",
    "Entity",
    "User",
    "Charity",
    "Campaign",
    "Post",
    "Donation",
    "Update",
    "Condition",
    "AtLeast",
    "AtMost",
    "AnyOf",
    "Mutation",
]
