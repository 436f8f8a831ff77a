"""Post domain service."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence, cast

from giving_server.core.errors import AuthError, NotFoundError
from giving_server.modules.common.edits import collect_edits
from giving_server.modules.common.paging import PageRequest
from giving_server.modules.entities.models import Campaign, EntityType, Mutation, Post, User, generate_guid
from giving_server.modules.entities.repository import EntityStore

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class PostCreateInput:
    campaign: str
    caption: str = ""


@dataclass(slots=True)
class PostEditInput:
    caption: Optional[str] = None


@dataclass(slots=True)
class PostQuery:
    user: Optional[str] = None
    campaign: Optional[str] = None
    charity: Optional[str] = None

    def to_filter(self) -> dict[str, str]:
        return {
            name: value
            for name, value in (("user", self.user), ("campaign", self.campaign), ("charity", self.charity))
            if value
        }


@dataclass(slots=True)
class PostService:
    store: EntityStore

    async def get_post(self, guid: str) -> Post:
        post = await self.store.find_one(EntityType.POST, {"guid": guid})
        if post is None:
            raise NotFoundError("post", guid)
        return cast(Post, post)

    async def list_posts(self, query: PostQuery, page: PageRequest, max_page_size: int = 100) -> Sequence[Post]:
        rows = await self.store.find_many(
            EntityType.POST,
            query.to_filter(),
            **page.store_options(EntityType.POST, max_page_size),
        )
        return cast(Sequence[Post], rows)

    async def create_post(self, user_guid: str, payload: PostCreateInput) -> tuple[Post, User]:
        """Create a post under a campaign; the post's charity is the campaign's."""
        user = await self.store.find_one(EntityType.USER, {"guid": user_guid})
        if user is None:
            raise NotFoundError("user", user_guid)
        campaign = await self.store.find_one(EntityType.CAMPAIGN, {"guid": payload.campaign})
        if campaign is None:
            raise NotFoundError("campaign", payload.campaign)
        campaign = cast(Campaign, campaign)

        post = await self.store.upsert(
            EntityType.POST,
            {"guid": generate_guid()},
            Mutation(
                set_values={
                    "user": user_guid,
                    "campaign": campaign.guid,
                    "charity": campaign.charity,
                    "caption": payload.caption,
                }
            ),
        )
        updated_user = await self.store.upsert(
            EntityType.USER,
            {"guid": user_guid},
            Mutation(appends={"posts": post.guid}),
            upsert=False,
        )
        await self.store.upsert(
            EntityType.CAMPAIGN,
            {"guid": campaign.guid},
            Mutation(appends={"posts": post.guid}),
            upsert=False,
        )
        logger.info("Post %s created by user %s in campaign %s", post.guid, user_guid, campaign.guid)
        return cast(Post, post), cast(User, updated_user or user)

    async def edit_post(self, user_guid: str, post_guid: str, payload: PostEditInput) -> Post:
        """Only the author may edit a post; its campaign and charity never change."""
        values = collect_edits("post", {"caption": payload.caption}, required=())
        post = await self.get_post(post_guid)
        if post.user != user_guid:
            raise AuthError("You do not have access to this post")

        updated = await self.store.upsert(
            EntityType.POST,
            {"guid": post.guid, "user": user_guid},
            Mutation(set_values=values),
            upsert=False,
        )
        if updated is None:
            raise NotFoundError("post", post_guid)
        return cast(Post, updated)
