"""Donation domain service: the balance-transfer workflow."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Sequence, cast

from giving_server.core.errors import FanOutError, GivingError, InsufficientFundsError, NotFoundError
from giving_server.modules.common.amounts import validate_amount
from giving_server.modules.common.paging import PageRequest
from giving_server.modules.entities.models import AtLeast, Donation, Entity, EntityType, Mutation, User, generate_guid
from giving_server.modules.entities.repository import EntityStore

from .models import DonationQuery, DonationResult, DonationTarget, TargetChain
from .targets import TargetResolver

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class DonationService:
    """Moves funds from a user's balance into a donation and fans it out.

    ``donate`` is a strict sequential pipeline. Nothing is written until the
    request, the user, the balance and the target chain have all checked out.
    The balance is debited before the donation exists, and once the donation
    exists it is never removed: a failed backlink append surfaces as
    ``FanOutError`` while the debit and the donation stay committed.
    ``donate`` is not idempotent.
    """

    store: EntityStore
    targets: TargetResolver = field(init=False)

    def __post_init__(self) -> None:
        self.targets = TargetResolver(self.store)

    async def donate(self, *, user_guid: str, amount_cents: int, target: DonationTarget) -> DonationResult:
        validate_amount(amount_cents)
        self.targets.check(target)

        user = await self._load_user(user_guid)
        if amount_cents > user.balance:
            raise InsufficientFundsError(user.balance, amount_cents)

        chain = await self.targets.resolve(target)
        user = await self._debit(user, amount_cents)
        donation = await self._create_donation(user, chain, amount_cents)
        logger.info(
            "Donation %s of %s cents from user %s to charity %s committed",
            donation.guid,
            donation.amount,
            user.guid,
            donation.charity,
            extra={"donation_guid": donation.guid, "user_guid": user.guid},
        )

        result = DonationResult(
            donation=donation,
            user=user,
            charity=chain.charity,
            campaign=chain.campaign,
            post=chain.post,
        )
        result.user = cast(User, await self._append(EntityType.USER, user.guid, donation))
        for entity_type, member in chain.members():
            setattr(result, entity_type.value, await self._append(entity_type, member.guid, donation))
        return result

    async def get_donation(self, guid: str) -> Donation:
        donation = await self.store.find_one(EntityType.DONATION, {"guid": guid})
        if donation is None:
            raise NotFoundError("donation", guid)
        return cast(Donation, donation)

    async def list_donations(self, query: DonationQuery, page: PageRequest, max_page_size: int = 100) -> Sequence[Donation]:
        rows = await self.store.find_many(
            EntityType.DONATION,
            query.to_filter(),
            **page.store_options(EntityType.DONATION, max_page_size),
        )
        return cast(Sequence[Donation], rows)

    # ------------------------------------------------------------------
    # Pipeline steps
    # ------------------------------------------------------------------
    async def _load_user(self, user_guid: str) -> User:
        user = await self.store.find_one(EntityType.USER, {"guid": user_guid})
        if user is None:
            raise NotFoundError("user", user_guid)
        return cast(User, user)

    async def _debit(self, user: User, amount_cents: int) -> User:
        updated = await self.store.upsert(
            EntityType.USER,
            {"guid": user.guid, "balance": AtLeast(amount_cents)},
            Mutation(increments={"balance": -amount_cents}),
            upsert=False,
        )
        if updated is not None:
            return cast(User, updated)

        # the guard failed: tell a vanished user apart from a drained balance
        current = await self.store.find_one(EntityType.USER, {"guid": user.guid})
        if current is None:
            raise NotFoundError("user", user.guid)
        logger.info(
            "Debit of %s cents for user %s lost to a concurrent change (balance %s)",
            amount_cents,
            user.guid,
            cast(User, current).balance,
        )
        raise InsufficientFundsError(cast(User, current).balance, amount_cents)

    async def _create_donation(self, user: User, chain: TargetChain, amount_cents: int) -> Donation:
        values = {
            "user": user.guid,
            "charity": chain.charity.guid,
            "campaign": chain.campaign.guid if chain.campaign is not None else None,
            "post": chain.post.guid if chain.post is not None else None,
            "amount": amount_cents,
        }
        try:
            donation = await self.store.upsert(
                EntityType.DONATION,
                {"guid": generate_guid()},
                Mutation(set_values=values),
            )
        except Exception:
            # no donation is visible to anyone yet, so the debit can be returned
            logger.error(
                "Donation record for user %s failed; refunding %s cents",
                user.guid,
                amount_cents,
                exc_info=True,
            )
            await self.store.upsert(
                EntityType.USER,
                {"guid": user.guid},
                Mutation(increments={"balance": amount_cents}),
                upsert=False,
            )
            raise
        return cast(Donation, donation)

    async def _append(self, entity_type: EntityType, guid: str, donation: Donation) -> Entity:
        try:
            updated = await self.store.upsert(
                entity_type,
                {"guid": guid},
                Mutation(appends={"donations": donation.guid}),
                upsert=False,
            )
        except GivingError as exc:
            logger.error(
                "Donation %s could not be appended to %s %s: %s",
                donation.guid,
                entity_type.value,
                guid,
                exc.message,
                extra={"donation_guid": donation.guid, "entity_type": entity_type.value, "entity_guid": guid},
            )
            raise FanOutError(donation.guid, entity_type.value, guid) from exc

        if updated is None:
            logger.error(
                "Donation %s could not be appended to %s %s: document no longer exists",
                donation.guid,
                entity_type.value,
                guid,
                extra={"donation_guid": donation.guid, "entity_type": entity_type.value, "entity_guid": guid},
            )
            raise FanOutError(donation.guid, entity_type.value, guid)
        return updated
