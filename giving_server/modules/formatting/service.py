"""Read-time views of entities enriched with derived fields.

Derived fields are point lookups through the entity store. When a referenced
entity is missing or erased the derived field is left out of the view rather
than failing the request.
"""

from __future__ import annotations

from dataclasses import fields
from typing import Any, Awaitable, Callable, Iterable, Optional

from giving_server.modules.donations.models import DonationResult
from giving_server.modules.feeds.models import FeedItem
from giving_server.modules.entities.models import (
    Campaign,
    Charity,
    Donation,
    Entity,
    EntityType,
    Post,
    Update,
    User,
)
from giving_server.modules.entities.repository import EntityStore, Filter

# never leaves the server
HIDDEN_FIELDS = frozenset({"password_hash", "email"})

View = dict[str, Any]


class EntityFormatter:
    def __init__(self, store: EntityStore) -> None:
        self._store = store
        self._enrichers: dict[EntityType, Callable[[Any, View], Awaitable[None]]] = {
            EntityType.USER: self._enrich_user,
            EntityType.CHARITY: self._enrich_charity,
            EntityType.CAMPAIGN: self._enrich_campaign,
            EntityType.POST: self._enrich_post,
            EntityType.DONATION: self._enrich_donation,
            EntityType.UPDATE: self._enrich_update,
        }

    async def format(self, entity_type: EntityType, entity: Entity) -> View:
        view = self.base_view(entity)
        await self._enrichers[entity_type](entity, view)
        return view

    async def format_many(self, entity_type: EntityType, entities: Iterable[Entity]) -> list[View]:
        return [await self.format(entity_type, entity) for entity in entities]

    async def format_result(self, result: DonationResult) -> dict[str, View]:
        return {
            entity_type.value: await self.format(entity_type, entity)
            for entity_type, entity in result.entities()
        }

    async def format_feed(self, items: Iterable[FeedItem]) -> list[View]:
        """Format mixed entries, tagging each view with ``object_type``."""
        return [
            {"object_type": item.entity_type.value, **await self.format(item.entity_type, item.entity)}
            for item in items
        ]

    @staticmethod
    def base_view(entity: Entity) -> View:
        view: View = {}
        for item in fields(entity):
            if item.name in HIDDEN_FIELDS:
                continue
            value = getattr(entity, item.name)
            view[item.name] = list(value) if isinstance(value, list) else value
        return view

    # ------------------------------------------------------------------
    # Per-type enrichment
    # ------------------------------------------------------------------
    async def _enrich_user(self, user: User, view: View) -> None:
        view["total_donation_amount"] = await self._total_donated({"user": user.guid})

    async def _enrich_charity(self, charity: Charity, view: View) -> None:
        view["followers"] = await self._store.count(EntityType.USER, {"following_charities": charity.guid})
        view["total_donation_amount"] = await self._total_donated({"charity": charity.guid})

    async def _enrich_campaign(self, campaign: Campaign, view: View) -> None:
        self._put(view, "charity_name", await self._name_of(EntityType.CHARITY, campaign.charity))
        view["total_donation_amount"] = await self._total_donated({"campaign": campaign.guid})

    async def _enrich_post(self, post: Post, view: View) -> None:
        self._put(view, "charity_name", await self._name_of(EntityType.CHARITY, post.charity))
        self._put(view, "campaign_name", await self._name_of(EntityType.CAMPAIGN, post.campaign))
        self._put(view, "user_name", await self._name_of(EntityType.USER, post.user))

    async def _enrich_donation(self, donation: Donation, view: View) -> None:
        self._put(view, "charity_name", await self._name_of(EntityType.CHARITY, donation.charity))
        self._put(view, "campaign_name", await self._name_of(EntityType.CAMPAIGN, donation.campaign))
        self._put(view, "user_name", await self._name_of(EntityType.USER, donation.user))
        if donation.post:
            post = await self._store.find_one(EntityType.POST, {"guid": donation.post})
            if post is not None:
                self._put(view, "posting_user_name", await self._name_of(EntityType.USER, post.user))

    async def _enrich_update(self, update: Update, view: View) -> None:
        self._put(view, "charity_name", await self._name_of(EntityType.CHARITY, update.charity))

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------
    async def _name_of(self, entity_type: EntityType, guid: Optional[str]) -> Optional[str]:
        if not guid:
            return None
        entity = await self._store.find_one(entity_type, {"guid": guid})
        return getattr(entity, "name", None) if entity is not None else None

    async def _total_donated(self, filter: Filter) -> int:
        donations = await self._store.find_many(EntityType.DONATION, filter)
        return sum(donation.amount for donation in donations)

    @staticmethod
    def _put(view: View, key: str, value: Any) -> None:
        if value is not None:
            view[key] = value


__all__ = ["EntityFormatter", "HIDDEN_FIELDS"]
