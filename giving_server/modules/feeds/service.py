"""Mixed-type feeds for the home screen.

The causes feed pages campaigns and updates together, the people feed pages
donations and posts together. A signed-in viewer only sees entries for the
charities they follow; an anonymous viewer sees everything.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Sequence, cast

from giving_server.core.errors import NotFoundError
from giving_server.modules.common.paging import PageRequest
from giving_server.modules.entities.models import AnyOf, EntityType, User
from giving_server.modules.entities.repository import EntityStore, Filter

from .models import FeedItem

CAUSES = (EntityType.CAMPAIGN, EntityType.UPDATE)
PEOPLE = (EntityType.DONATION, EntityType.POST)


@dataclass(slots=True)
class FeedService:
    store: EntityStore

    async def causes_feed(self, viewer: Optional[str], page: PageRequest, max_page_size: int = 100) -> list[FeedItem]:
        return await self._page(CAUSES, await self._filter_for(viewer), page, max_page_size)

    async def people_feed(self, viewer: Optional[str], page: PageRequest, max_page_size: int = 100) -> list[FeedItem]:
        return await self._page(PEOPLE, await self._filter_for(viewer), page, max_page_size)

    async def _filter_for(self, viewer: Optional[str]) -> Filter:
        if viewer is None:
            return {}
        user = await self.store.find_one(EntityType.USER, {"guid": viewer})
        if user is None:
            raise NotFoundError("user", viewer)
        return {"charity": AnyOf(tuple(cast(User, user).following_charities))}

    async def _page(
        self,
        kinds: Sequence[EntityType],
        filter: Filter,
        page: PageRequest,
        max_page_size: int,
    ) -> list[FeedItem]:
        # every type is read up to the end of the requested page, then merged
        items: list[FeedItem] = []
        options: dict[str, Any] = {}
        for kind in kinds:
            options = page.store_options(kind, max_page_size)
            rows = await self.store.find_many(
                kind,
                filter,
                limit=options["offset"] + options["limit"],
                sort_key=options["sort_key"],
                descending=options["descending"],
            )
            items.extend(FeedItem(kind, row) for row in rows)

        sort_key = options["sort_key"]
        items.sort(key=lambda item: _sort_value(item, sort_key), reverse=options["descending"])
        return items[options["offset"]:options["offset"] + options["limit"]]


def _sort_value(item: FeedItem, sort_key: str) -> tuple[bool, Any]:
    value = getattr(item.entity, sort_key)
    return value is not None, value


__all__ = ["CAUSES", "PEOPLE", "FeedService"]
