"""Static description of every entity type, resolved once at import time.

The registry is the single place that knows which record class backs an
``EntityType``, which of its fields are reference lists, and which fields the
store must refuse to change. Write-time validation is driven from here so the
SQL store and any in-memory store enforce identical rules.
"""

from __future__ import annotations

from dataclasses import dataclass, fields, MISSING
from typing import Any, Mapping

from giving_server.core.errors import ValidationError

from .models import Campaign, Charity, Donation, Entity, EntityType, Mutation, Post, Update, User

BASE_IMMUTABLE = frozenset({"guid", "date_created"})

# largest integer a JSON client can hold exactly; every stored amount of cents stays within it
MAX_CENTS = 2**53 - 1


@dataclass(frozen=True, slots=True)
class EntitySchema:
    entity_type: EntityType
    record: type[Entity]
    list_fields: frozenset[str]
    integer_fields: frozenset[str] = frozenset()
    immutable_fields: frozenset[str] = frozenset()
    minimums: Mapping[str, int] | None = None
    maximums: Mapping[str, int] | None = None

    @property
    def label(self) -> str:
        return self.entity_type.value

    @property
    def field_names(self) -> frozenset[str]:
        return frozenset(f.name for f in fields(self.record))

    @property
    def scalar_fields(self) -> frozenset[str]:
        return self.field_names - self.list_fields

    @property
    def required_fields(self) -> frozenset[str]:
        return frozenset(
            f.name
            for f in fields(self.record)
            if f.default is MISSING and f.default_factory is MISSING
        )

    def build(self, values: Mapping[str, Any], lists: Mapping[str, list[str]] | None = None) -> Entity:
        kwargs = {name: values[name] for name in self.scalar_fields if name in values}
        for name in self.list_fields:
            kwargs[name] = list((lists or {}).get(name, ()))
        return self.record(**kwargs)

    # ------------------------------------------------------------------
    # Write-time validation
    # ------------------------------------------------------------------
    def validate_insert(self, values: Mapping[str, Any]) -> None:
        unknown = set(values) - self.scalar_fields
        if unknown:
            raise ValidationError(f"Unknown {self.label} field: {sorted(unknown)[0]}", sorted(unknown)[0])
        for name in sorted(self.required_fields):
            value = values.get(name)
            if value is None or (isinstance(value, str) and not value.strip()):
                raise ValidationError(f"{self.label.capitalize()} {name} is required", name)
        self._validate_values(values)

    def validate_update(self, mutation: Mutation) -> None:
        for name in mutation.set_values:
            if name not in self.scalar_fields:
                raise ValidationError(f"Unknown {self.label} field: {name}", name)
            if name in BASE_IMMUTABLE or name in self.immutable_fields:
                raise ValidationError(f"{self.label.capitalize()} {name} cannot be changed", name)
        for name in mutation.increments:
            if name not in self.integer_fields:
                raise ValidationError(f"{self.label.capitalize()} {name} is not a numeric field", name)
            if name in self.immutable_fields:
                raise ValidationError(f"{self.label.capitalize()} {name} cannot be changed", name)
        self.validate_appends(mutation)
        self._validate_values(mutation.set_values)
        for name, delta in mutation.increments.items():
            if not _is_int(delta):
                raise ValidationError(f"{self.label.capitalize()} {name} must be an integer", name)
            maximum = (self.maximums or {}).get(name)
            if maximum is not None and abs(delta) > maximum:
                raise ValidationError(f"{self.label.capitalize()} {name} change must be at most {maximum}", name)

    def validate_appends(self, mutation: Mutation) -> None:
        for name, ref in mutation.appends.items():
            if name not in self.list_fields:
                raise ValidationError(f"{self.label.capitalize()} {name} is not a list field", name)
            if not isinstance(ref, str) or not ref:
                raise ValidationError(f"{self.label.capitalize()} {name} entries must be GUID strings", name)

    def check_bounds(self, values: Mapping[str, Any]) -> None:
        for name, minimum in (self.minimums or {}).items():
            value = values.get(name)
            if value is not None and value < minimum:
                raise ValidationError(f"{self.label.capitalize()} {name} must be at least {minimum}", name)
        for name, maximum in (self.maximums or {}).items():
            value = values.get(name)
            if value is not None and value > maximum:
                raise ValidationError(f"{self.label.capitalize()} {name} must be at most {maximum}", name)

    def _validate_values(self, values: Mapping[str, Any]) -> None:
        for name, value in values.items():
            if name in self.integer_fields and not _is_int(value):
                raise ValidationError(f"{self.label.capitalize()} {name} must be an integer", name)
            if name == "erased" and not isinstance(value, bool):
                raise ValidationError(f"{self.label.capitalize()} erased must be a boolean", name)
        self.check_bounds(values)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


ENTITY_SCHEMAS: dict[EntityType, EntitySchema] = {
    EntityType.USER: EntitySchema(
        entity_type=EntityType.USER,
        record=User,
        list_fields=frozenset({"donations", "posts", "following_charities"}),
        integer_fields=frozenset({"balance"}),
        immutable_fields=frozenset({"email"}),
        minimums={"balance": 0},
        maximums={"balance": MAX_CENTS},
    ),
    EntityType.CHARITY: EntitySchema(
        entity_type=EntityType.CHARITY,
        record=Charity,
        list_fields=frozenset({"users", "campaigns", "donations", "updates"}),
    ),
    EntityType.CAMPAIGN: EntitySchema(
        entity_type=EntityType.CAMPAIGN,
        record=Campaign,
        list_fields=frozenset({"donations", "posts"}),
        immutable_fields=frozenset({"charity"}),
    ),
    EntityType.POST: EntitySchema(
        entity_type=EntityType.POST,
        record=Post,
        list_fields=frozenset({"donations"}),
        immutable_fields=frozenset({"user", "campaign", "charity"}),
    ),
    EntityType.DONATION: EntitySchema(
        entity_type=EntityType.DONATION,
        record=Donation,
        list_fields=frozenset(),
        integer_fields=frozenset({"amount"}),
        immutable_fields=frozenset({"user", "charity", "campaign", "post", "amount"}),
        minimums={"amount": 1},
        maximums={"amount": MAX_CENTS},
    ),
    EntityType.UPDATE: EntitySchema(
        entity_type=EntityType.UPDATE,
        record=Update,
        list_fields=frozenset(),
        immutable_fields=frozenset({"charity"}),
    ),
}


def get_schema(entity_type: EntityType) -> EntitySchema:
    return ENTITY_SCHEMAS[entity_type]


__all__ = ["BASE_IMMUTABLE", "MAX_CENTS", "EntitySchema", "ENTITY_SCHEMAS", "get_schema"]
