"""Charity domain service."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence, cast

from giving_server.core.errors import AuthError, ConflictError, NotFoundError, ValidationError
from giving_server.modules.common.edits import collect_edits
from giving_server.modules.common.paging import PageRequest
from giving_server.modules.entities.models import Charity, EntityType, Mutation, User, generate_guid
from giving_server.modules.entities.repository import EntityStore

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CharityCreateInput:
    name: str
    description: str = ""


@dataclass(slots=True)
class CharityEditInput:
    name: Optional[str] = None
    description: Optional[str] = None


@dataclass(slots=True)
class CharityService:
    store: EntityStore

    async def get_charity(self, guid: str) -> Charity:
        charity = await self.store.find_one(EntityType.CHARITY, {"guid": guid})
        if charity is None:
            raise NotFoundError("charity", guid)
        return cast(Charity, charity)

    async def list_charities(self, page: PageRequest, max_page_size: int = 100) -> Sequence[Charity]:
        rows = await self.store.find_many(
            EntityType.CHARITY,
            {},
            **page.store_options(EntityType.CHARITY, max_page_size),
        )
        return cast(Sequence[Charity], rows)

    async def create_charity(self, user_guid: str, payload: CharityCreateInput) -> tuple[Charity, User]:
        """Create a charity administered by ``user_guid`` and link both sides."""
        if not payload.name.strip():
            raise ValidationError("Charity name is required", "name")

        user = await self.store.find_one(EntityType.USER, {"guid": user_guid})
        if user is None:
            raise NotFoundError("user", user_guid)
        if cast(User, user).charity:
            raise ConflictError("You already belong to a charity")

        charity = await self.store.upsert(
            EntityType.CHARITY,
            {"guid": generate_guid()},
            Mutation(
                set_values={"name": payload.name.strip(), "description": payload.description},
                appends={"users": user_guid},
            ),
        )
        updated_user = await self.store.upsert(
            EntityType.USER,
            {"guid": user_guid, "charity": None},
            Mutation(set_values={"charity": charity.guid}),
            upsert=False,
        )
        if updated_user is None:
            raise ConflictError("You already belong to a charity")
        logger.info("Charity %s created by user %s", charity.guid, user_guid)
        return cast(Charity, charity), cast(User, updated_user)

    async def edit_charity(self, user_guid: str, payload: CharityEditInput) -> Charity:
        """Change the name or description of the charity ``user_guid`` administers."""
        values = collect_edits("charity", {"name": payload.name, "description": payload.description})
        user = await self.store.find_one(EntityType.USER, {"guid": user_guid})
        if user is None:
            raise NotFoundError("user", user_guid)
        charity_guid = cast(User, user).charity
        if not charity_guid:
            raise AuthError("Only charity users can edit a charity")

        charity = await self.store.upsert(
            EntityType.CHARITY,
            {"guid": charity_guid},
            Mutation(set_values=values),
            upsert=False,
        )
        if charity is None:
            raise NotFoundError("charity", charity_guid)
        logger.info("Charity %s edited by user %s", charity_guid, user_guid)
        return cast(Charity, charity)
