"""Paging options shared by the list endpoints."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from giving_server.core.errors import ValidationError
from giving_server.modules.entities.models import EntityType
from giving_server.modules.entities.registry import get_schema

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100

SORT_KEYS = {
    "dateCreated": "date_created",
    "lastModified": "last_modified",
    "amount": "amount",
    "name": "name",
}


@dataclass(slots=True)
class PageRequest:
    page_size: int = DEFAULT_PAGE_SIZE
    page: int = 0
    sort: str = "asc"
    sort_key: str = "dateCreated"

    def store_options(self, entity_type: EntityType, max_page_size: int = MAX_PAGE_SIZE) -> dict[str, Any]:
        """Translate into ``find_many`` keyword arguments for ``entity_type``."""
        if not 1 <= self.page_size <= max_page_size:
            raise ValidationError(f"Page size must be between 1 and {max_page_size}", "pageSize")
        if self.page < 0:
            raise ValidationError("Page must not be negative", "page")
        if self.sort not in ("asc", "desc"):
            raise ValidationError("Sort must be asc or desc", "sort")

        field = SORT_KEYS.get(self.sort_key)
        if field is None or field not in get_schema(entity_type).scalar_fields:
            raise ValidationError(f"Sort key {self.sort_key} is invalid", "sortKey")

        return {
            "limit": self.page_size,
            "offset": self.page * self.page_size,
            "sort_key": field,
            "descending": self.sort == "desc",
        }


__all__ = ["DEFAULT_PAGE_SIZE", "MAX_PAGE_SIZE", "SORT_KEYS", "PageRequest"]
