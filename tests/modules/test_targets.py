"""Target resolution follows stored references post -> campaign -> charity."""

import pytest

from giving_server.core.errors import NotFoundError, RequestError
from giving_server.modules.donations import DonationTarget, TargetResolver
from giving_server.modules.donations.targets import MISSING_TARGET_MESSAGE, MULTIPLE_TARGETS_MESSAGE
from giving_server.modules.entities import EntityType

from tests.fakes import seed_campaign, seed_charity, seed_post, seed_user


async def test_post_resolves_full_chain(memory_store):
    author = await seed_user(memory_store)
    charity = await seed_charity(memory_store)
    campaign = await seed_campaign(memory_store, charity)
    post = await seed_post(memory_store, campaign, author)

    chain = await TargetResolver(memory_store).resolve(DonationTarget(post=post.guid))

    assert chain.post.guid == post.guid
    assert chain.campaign.guid == campaign.guid
    assert chain.charity.guid == charity.guid
    assert [kind for kind, _ in chain.members()] == [EntityType.POST, EntityType.CAMPAIGN, EntityType.CHARITY]


async def test_campaign_resolves_without_post(memory_store):
    charity = await seed_charity(memory_store)
    campaign = await seed_campaign(memory_store, charity)

    chain = await TargetResolver(memory_store).resolve(DonationTarget(campaign=campaign.guid))

    assert chain.post is None
    assert chain.campaign.guid == campaign.guid
    assert chain.charity.guid == charity.guid


async def test_charity_resolves_alone(memory_store):
    charity = await seed_charity(memory_store)

    chain = await TargetResolver(memory_store).resolve(DonationTarget(charity=charity.guid))

    assert chain.post is None and chain.campaign is None
    assert [kind for kind, _ in chain.members()] == [EntityType.CHARITY]


async def test_post_with_missing_campaign_is_not_found(memory_store):
    author = await seed_user(memory_store)
    charity = await seed_charity(memory_store)
    campaign = await seed_campaign(memory_store, charity)
    post = await seed_post(memory_store, campaign, author)
    memory_store.erase(EntityType.CAMPAIGN, campaign.guid)

    with pytest.raises(NotFoundError) as excinfo:
        await TargetResolver(memory_store).resolve(DonationTarget(post=post.guid))

    assert excinfo.value.object_type == "campaign"
    assert excinfo.value.message == "Campaign not found"


def test_check_requires_exactly_one_target():
    with pytest.raises(RequestError, match=MISSING_TARGET_MESSAGE):
        TargetResolver.check(DonationTarget())
    with pytest.raises(RequestError, match=MULTIPLE_TARGETS_MESSAGE):
        TargetResolver.check(DonationTarget(post="p", charity="c"))
    assert TargetResolver.check(DonationTarget(campaign="c")) is EntityType.CAMPAIGN


def test_empty_strings_count_as_absent():
    assert DonationTarget(post="", campaign="", charity="x").provided() == [EntityType.CHARITY]
