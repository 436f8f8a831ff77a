"""Resolution of a donation target into its full ownership chain."""

from __future__ import annotations

from typing import cast

from giving_server.core.errors import NotFoundError, RequestError
from giving_server.modules.entities.models import Campaign, Charity, EntityType, Post
from giving_server.modules.entities.repository import EntityStore

from .models import DonationTarget, TargetChain

MISSING_TARGET_MESSAGE = "You must specify one of post, campaign, or charity to make a donation"
MULTIPLE_TARGETS_MESSAGE = "Specify only one of post, campaign, or charity to make a donation"


class TargetResolver:
    """Loads post -> campaign -> charity, following the references stored on each."""

    def __init__(self, store: EntityStore) -> None:
        self._store = store

    @staticmethod
    def check(target: DonationTarget) -> EntityType:
        """Return the kind of target requested, rejecting none or several."""
        kinds = target.provided()
        if not kinds:
            raise RequestError(MISSING_TARGET_MESSAGE)
        if len(kinds) > 1:
            raise RequestError(MULTIPLE_TARGETS_MESSAGE)
        return kinds[0]

    async def resolve(self, target: DonationTarget) -> TargetChain:
        kind = self.check(target)

        post = None
        campaign = None
        if kind is EntityType.POST:
            post = cast(Post, await self._load(EntityType.POST, target.post))
            campaign = cast(Campaign, await self._load(EntityType.CAMPAIGN, post.campaign))
            charity_guid = campaign.charity
        elif kind is EntityType.CAMPAIGN:
            campaign = cast(Campaign, await self._load(EntityType.CAMPAIGN, target.campaign))
            charity_guid = campaign.charity
        else:
            charity_guid = target.charity

        charity = cast(Charity, await self._load(EntityType.CHARITY, charity_guid))
        return TargetChain(charity=charity, campaign=campaign, post=post)

    async def _load(self, entity_type: EntityType, guid: str | None):
        entity = await self._store.find_one(entity_type, {"guid": guid}) if guid else None
        if entity is None:
            raise NotFoundError(entity_type.value, guid)
        return entity


__all__ = ["MISSING_TARGET_MESSAGE", "MULTIPLE_TARGETS_MESSAGE", "TargetResolver"]
