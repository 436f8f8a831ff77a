"""Charity updates: short news items published to followers."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence, cast

from giving_server.core.errors import AuthError, NotFoundError, ValidationError
from giving_server.modules.common.edits import collect_edits
from giving_server.modules.common.paging import PageRequest
from giving_server.modules.entities.models import Charity, EntityType, Mutation, Update, User, generate_guid
from giving_server.modules.entities.repository import EntityStore

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class UpdateCreateInput:
    name: str
    description: str = ""


@dataclass(slots=True)
class UpdateEditInput:
    name: Optional[str] = None
    description: Optional[str] = None


@dataclass(slots=True)
class UpdateService:
    store: EntityStore

    async def get_update(self, guid: str) -> Update:
        update = await self.store.find_one(EntityType.UPDATE, {"guid": guid})
        if update is None:
            raise NotFoundError("update", guid)
        return cast(Update, update)

    async def list_updates(
        self,
        page: PageRequest,
        charity: Optional[str] = None,
        max_page_size: int = 100,
    ) -> Sequence[Update]:
        rows = await self.store.find_many(
            EntityType.UPDATE,
            {"charity": charity} if charity else {},
            **page.store_options(EntityType.UPDATE, max_page_size),
        )
        return cast(Sequence[Update], rows)

    async def create_update(self, user_guid: str, payload: UpdateCreateInput) -> tuple[Update, Charity]:
        """Publish an update for the charity the user administers and link it to the charity."""
        if not payload.name.strip():
            raise ValidationError("Update name is required", "name")
        charity = await self._charity_of(user_guid, "Only charity users can post updates")

        update = await self.store.upsert(
            EntityType.UPDATE,
            {"guid": generate_guid()},
            Mutation(
                set_values={
                    "charity": charity.guid,
                    "name": payload.name.strip(),
                    "description": payload.description,
                }
            ),
        )
        updated_charity = await self.store.upsert(
            EntityType.CHARITY,
            {"guid": charity.guid},
            Mutation(appends={"updates": update.guid}),
            upsert=False,
        )
        logger.info("Update %s published for charity %s", update.guid, charity.guid)
        return cast(Update, update), cast(Charity, updated_charity or charity)

    async def edit_update(self, user_guid: str, update_guid: str, payload: UpdateEditInput) -> Update:
        values = collect_edits("update", {"name": payload.name, "description": payload.description})
        update = await self.get_update(update_guid)
        charity = await self._charity_of(user_guid, "You do not have access to this update")
        if charity.guid != update.charity:
            raise AuthError("You do not have access to this update")

        edited = await self.store.upsert(
            EntityType.UPDATE,
            {"guid": update.guid, "charity": charity.guid},
            Mutation(set_values=values),
            upsert=False,
        )
        if edited is None:
            raise NotFoundError("update", update_guid)
        return cast(Update, edited)

    async def _charity_of(self, user_guid: str, denied: str) -> Charity:
        user = await self.store.find_one(EntityType.USER, {"guid": user_guid})
        if user is None:
            raise NotFoundError("user", user_guid)
        charity_guid = cast(User, user).charity
        if not charity_guid:
            raise AuthError(denied)
        charity = await self.store.find_one(EntityType.CHARITY, {"guid": charity_guid})
        if charity is None:
            raise NotFoundError("charity", charity_guid)
        return cast(Charity, charity)
