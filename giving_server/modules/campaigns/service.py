"""Campaign domain service."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence, cast

from giving_server.core.errors import AuthError, NotFoundError, ValidationError
from giving_server.modules.common.edits import collect_edits
from giving_server.modules.common.paging import PageRequest
from giving_server.modules.entities.models import Campaign, Charity, EntityType, Mutation, User, generate_guid
from giving_server.modules.entities.repository import EntityStore

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CampaignCreateInput:
    name: str
    description: str = ""


@dataclass(slots=True)
class CampaignEditInput:
    name: Optional[str] = None
    description: Optional[str] = None


@dataclass(slots=True)
class CampaignService:
    store: EntityStore

    async def get_campaign(self, guid: str) -> Campaign:
        campaign = await self.store.find_one(EntityType.CAMPAIGN, {"guid": guid})
        if campaign is None:
            raise NotFoundError("campaign", guid)
        return cast(Campaign, campaign)

    async def list_campaigns(
        self,
        page: PageRequest,
        charity: Optional[str] = None,
        max_page_size: int = 100,
    ) -> Sequence[Campaign]:
        filter = {"charity": charity} if charity else {}
        rows = await self.store.find_many(
            EntityType.CAMPAIGN,
            filter,
            **page.store_options(EntityType.CAMPAIGN, max_page_size),
        )
        return cast(Sequence[Campaign], rows)

    async def create_campaign(self, user_guid: str, payload: CampaignCreateInput) -> tuple[Campaign, Charity]:
        """Create a campaign for the charity the user administers."""
        if not payload.name.strip():
            raise ValidationError("Campaign name is required", "name")

        user = await self.store.find_one(EntityType.USER, {"guid": user_guid})
        if user is None:
            raise NotFoundError("user", user_guid)
        charity_guid = cast(User, user).charity
        if not charity_guid:
            raise AuthError("Only charity users can create campaigns")
        charity = await self.store.find_one(EntityType.CHARITY, {"guid": charity_guid})
        if charity is None:
            raise NotFoundError("charity", charity_guid)

        campaign = await self.store.upsert(
            EntityType.CAMPAIGN,
            {"guid": generate_guid()},
            Mutation(
                set_values={
                    "charity": charity_guid,
                    "name": payload.name.strip(),
                    "description": payload.description,
                }
            ),
        )
        updated_charity = await self.store.upsert(
            EntityType.CHARITY,
            {"guid": charity_guid},
            Mutation(appends={"campaigns": campaign.guid}),
            upsert=False,
        )
        logger.info("Campaign %s created for charity %s", campaign.guid, charity_guid)
        return cast(Campaign, campaign), cast(Charity, updated_charity or charity)

    async def edit_campaign(self, user_guid: str, campaign_guid: str, payload: CampaignEditInput) -> Campaign:
        values = collect_edits("campaign", {"name": payload.name, "description": payload.description})
        campaign = await self.get_campaign(campaign_guid)
        user = await self.store.find_one(EntityType.USER, {"guid": user_guid})
        if user is None:
            raise NotFoundError("user", user_guid)
        if cast(User, user).charity != campaign.charity:
            raise AuthError("You do not have access to this campaign")

        updated = await self.store.upsert(
            EntityType.CAMPAIGN,
            {"guid": campaign.guid, "charity": campaign.charity},
            Mutation(set_values=values),
            upsert=False,
        )
        if updated is None:
            raise NotFoundError("campaign", campaign_guid)
        logger.info("Campaign %s edited by user %s", campaign.guid, user_guid)
        return cast(Campaign, updated)
