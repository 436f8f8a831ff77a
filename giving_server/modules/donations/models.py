"""Domain models for the donation workflow."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional

from giving_server.modules.entities.models import Campaign, Charity, Donation, Entity, EntityType, Post, User


@dataclass(frozen=True, slots=True)
class DonationTarget:
    """What a donation request points at; exactly one field should be set."""

    post: Optional[str] = None
    campaign: Optional[str] = None
    charity: Optional[str] = None

    def provided(self) -> list[EntityType]:
        kinds = []
        if self.post:
            kinds.append(EntityType.POST)
        if self.campaign:
            kinds.append(EntityType.CAMPAIGN)
        if self.charity:
            kinds.append(EntityType.CHARITY)
        return kinds


@dataclass(frozen=True, slots=True)
class TargetChain:
    """The resolved ownership chain a donation fans out to."""

    charity: Charity
    campaign: Optional[Campaign] = None
    post: Optional[Post] = None

    def members(self) -> Iterator[tuple[EntityType, Entity]]:
        """Yield chain members in fan-out order: post, campaign, charity."""
        if self.post is not None:
            yield EntityType.POST, self.post
        if self.campaign is not None:
            yield EntityType.CAMPAIGN, self.campaign
        yield EntityType.CHARITY, self.charity


@dataclass(slots=True)
class DonationResult:
    donation: Donation
    user: User
    charity: Charity
    campaign: Optional[Campaign] = None
    post: Optional[Post] = None

    def entities(self) -> Iterator[tuple[EntityType, Entity]]:
        yield EntityType.DONATION, self.donation
        yield EntityType.USER, self.user
        if self.post is not None:
            yield EntityType.POST, self.post
        if self.campaign is not None:
            yield EntityType.CAMPAIGN, self.campaign
        yield EntityType.CHARITY, self.charity


@dataclass(slots=True)
class DonationQuery:
    user: Optional[str] = None
    charity: Optional[str] = None
    campaign: Optional[str] = None
    post: Optional[str] = None

    def to_filter(self) -> dict[str, str]:
        return {
            name: value
            for name, value in (
                ("user", self.user),
                ("charity", self.charity),
                ("campaign", self.campaign),
                ("post", self.post),
            )
            if value
        }
