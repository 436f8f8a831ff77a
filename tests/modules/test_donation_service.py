"""Donation workflow: balance transfer, target chain and fan-out.

Invariants:
    - Balance never goes negative; final balance equals initial minus the sum
      of successful donations, also under concurrency
    - Every failure before the debit leaves the store untouched
    - Donation amount equals the amount taken from the balance
    - A donation's post, campaign and charity always form one ownership chain
    - donate is not idempotent
    - A failed backlink append keeps the debit and the donation
    - A failed donation insert returns the debit, whatever the error type
"""

import asyncio

import pytest

from giving_server.core.errors import (
    FanOutError,
    InsufficientFundsError,
    NotFoundError,
    RequestError,
    ServerError,
    ValidationError,
)
from giving_server.modules.common import MAX_AMOUNT_CENTS
from giving_server.modules.donations import DonationService, DonationTarget
from giving_server.modules.entities import EntityType

from tests.fakes import seed_campaign, seed_charity, seed_post, seed_user


@pytest.fixture
def service(memory_store):
    return DonationService(memory_store)


async def test_scenario_a_charity_donation_drains_balance(service, memory_store):
    user = await seed_user(memory_store, balance=500)
    charity = await seed_charity(memory_store)

    result = await service.donate(user_guid=user.guid, amount_cents=500, target=DonationTarget(charity=charity.guid))

    donation = result.donation
    assert donation.amount == 500
    assert donation.charity == charity.guid
    assert donation.campaign is None
    assert donation.post is None
    assert result.user.balance == 0
    assert memory_store.raw(EntityType.USER, user.guid)["balance"] == 0
    assert memory_store.raw(EntityType.USER, user.guid)["donations"] == [donation.guid]
    assert memory_store.raw(EntityType.CHARITY, charity.guid)["donations"] == [donation.guid]
    assert result.campaign is None and result.post is None


async def test_scenario_b_post_donation_fans_out_to_whole_chain(service, memory_store):
    author = await seed_user(memory_store, name="Author")
    user = await seed_user(memory_store, balance=1000)
    charity = await seed_charity(memory_store)
    campaign = await seed_campaign(memory_store, charity)
    post = await seed_post(memory_store, campaign, author)

    result = await service.donate(user_guid=user.guid, amount_cents=300, target=DonationTarget(post=post.guid))

    donation = result.donation
    assert (donation.post, donation.campaign, donation.charity, donation.amount) == (
        post.guid,
        campaign.guid,
        charity.guid,
        300,
    )
    assert memory_store.raw(EntityType.USER, user.guid)["balance"] == 700
    for entity_type, guid in (
        (EntityType.USER, user.guid),
        (EntityType.POST, post.guid),
        (EntityType.CAMPAIGN, campaign.guid),
        (EntityType.CHARITY, charity.guid),
    ):
        assert donation.guid in memory_store.raw(entity_type, guid)["donations"]
    assert result.post.donations == [donation.guid]
    assert result.campaign.donations == [donation.guid]


async def test_campaign_donation_derives_charity_from_campaign(service, memory_store):
    user = await seed_user(memory_store, balance=100)
    charity = await seed_charity(memory_store)
    campaign = await seed_campaign(memory_store, charity)

    result = await service.donate(user_guid=user.guid, amount_cents=40, target=DonationTarget(campaign=campaign.guid))

    assert result.donation.charity == charity.guid
    assert result.donation.campaign == campaign.guid
    assert result.donation.post is None
    assert memory_store.raw(EntityType.CAMPAIGN, campaign.guid)["donations"] == [result.donation.guid]


async def test_scenario_c_insufficient_funds_mutates_nothing(service, memory_store):
    user = await seed_user(memory_store, balance=100)
    charity = await seed_charity(memory_store)
    writes_before = len(memory_store.writes)

    with pytest.raises(InsufficientFundsError):
        await service.donate(user_guid=user.guid, amount_cents=150, target=DonationTarget(charity=charity.guid))

    assert memory_store.raw(EntityType.USER, user.guid)["balance"] == 100
    assert memory_store.all(EntityType.DONATION) == []
    assert memory_store.raw(EntityType.CHARITY, charity.guid)["donations"] == []
    assert len(memory_store.writes) == writes_before


async def test_scenario_d_unknown_campaign_mutates_nothing(service, memory_store):
    user = await seed_user(memory_store, balance=100)
    writes_before = len(memory_store.writes)

    with pytest.raises(NotFoundError) as excinfo:
        await service.donate(user_guid=user.guid, amount_cents=50, target=DonationTarget(campaign="nonexistent-guid"))

    assert excinfo.value.status_code == 409
    assert memory_store.raw(EntityType.USER, user.guid)["balance"] == 100
    assert len(memory_store.writes) == writes_before


async def test_exact_balance_succeeds_and_leaves_zero(service, memory_store):
    user = await seed_user(memory_store, balance=250)
    charity = await seed_charity(memory_store)

    result = await service.donate(user_guid=user.guid, amount_cents=250, target=DonationTarget(charity=charity.guid))

    assert result.user.balance == 0


async def test_balance_plus_one_fails(service, memory_store):
    user = await seed_user(memory_store, balance=250)
    charity = await seed_charity(memory_store)

    with pytest.raises(InsufficientFundsError):
        await service.donate(user_guid=user.guid, amount_cents=251, target=DonationTarget(charity=charity.guid))

    assert memory_store.raw(EntityType.USER, user.guid)["balance"] == 250


async def test_missing_target_is_rejected_before_any_store_call(service, memory_store):
    user = await seed_user(memory_store, balance=100)
    writes_before = len(memory_store.writes)

    with pytest.raises(RequestError) as excinfo:
        await service.donate(user_guid=user.guid, amount_cents=10, target=DonationTarget())

    assert "post, campaign, or charity" in excinfo.value.message
    assert excinfo.value.status_code == 400
    assert len(memory_store.writes) == writes_before
    assert memory_store.raw(EntityType.USER, user.guid)["balance"] == 100


async def test_several_targets_are_rejected(service, memory_store):
    user = await seed_user(memory_store, balance=100)
    charity = await seed_charity(memory_store)
    campaign = await seed_campaign(memory_store, charity)

    with pytest.raises(RequestError):
        await service.donate(
            user_guid=user.guid,
            amount_cents=10,
            target=DonationTarget(campaign=campaign.guid, charity=charity.guid),
        )

    assert memory_store.all(EntityType.DONATION) == []


@pytest.mark.parametrize("amount", [0, -5, True, 1.5, "10"])
async def test_invalid_amounts_are_rejected(service, memory_store, amount):
    user = await seed_user(memory_store, balance=100)
    charity = await seed_charity(memory_store)

    with pytest.raises(ValidationError):
        await service.donate(user_guid=user.guid, amount_cents=amount, target=DonationTarget(charity=charity.guid))

    assert memory_store.raw(EntityType.USER, user.guid)["balance"] == 100


async def test_unknown_user_is_not_found(service, memory_store):
    charity = await seed_charity(memory_store)

    with pytest.raises(NotFoundError):
        await service.donate(user_guid="missing", amount_cents=10, target=DonationTarget(charity=charity.guid))


async def test_erased_charity_is_not_a_valid_target(service, memory_store):
    user = await seed_user(memory_store, balance=100)
    charity = await seed_charity(memory_store)
    memory_store.erase(EntityType.CHARITY, charity.guid)

    with pytest.raises(NotFoundError):
        await service.donate(user_guid=user.guid, amount_cents=10, target=DonationTarget(charity=charity.guid))

    assert memory_store.raw(EntityType.USER, user.guid)["balance"] == 100


async def test_donate_is_not_idempotent(service, memory_store):
    user = await seed_user(memory_store, balance=100)
    charity = await seed_charity(memory_store)
    target = DonationTarget(charity=charity.guid)

    first = await service.donate(user_guid=user.guid, amount_cents=30, target=target)
    second = await service.donate(user_guid=user.guid, amount_cents=30, target=target)

    assert first.donation.guid != second.donation.guid
    assert memory_store.raw(EntityType.USER, user.guid)["balance"] == 40
    assert memory_store.raw(EntityType.USER, user.guid)["donations"] == [first.donation.guid, second.donation.guid]


async def test_concurrent_donations_never_overdraw(service, memory_store):
    user = await seed_user(memory_store, balance=1000)
    charity = await seed_charity(memory_store)
    target = DonationTarget(charity=charity.guid)

    outcomes = await asyncio.gather(
        *(service.donate(user_guid=user.guid, amount_cents=300, target=target) for _ in range(6)),
        return_exceptions=True,
    )

    succeeded = [outcome for outcome in outcomes if not isinstance(outcome, Exception)]
    failed = [outcome for outcome in outcomes if isinstance(outcome, Exception)]
    assert len(succeeded) == 3
    assert all(isinstance(error, InsufficientFundsError) for error in failed)

    balance = memory_store.raw(EntityType.USER, user.guid)["balance"]
    assert balance == 1000 - sum(result.donation.amount for result in succeeded)
    assert balance >= 0
    assert len(memory_store.all(EntityType.DONATION)) == 3
    assert len(memory_store.raw(EntityType.CHARITY, charity.guid)["donations"]) == 3


async def test_fan_out_failure_keeps_debit_and_donation(service, memory_store, caplog):
    user = await seed_user(memory_store, balance=100)
    charity = await seed_charity(memory_store)
    memory_store.fail_appends.add((EntityType.CHARITY, charity.guid))

    with caplog.at_level("ERROR", logger="giving_server.modules.donations.service"):
        with pytest.raises(FanOutError) as excinfo:
            await service.donate(user_guid=user.guid, amount_cents=60, target=DonationTarget(charity=charity.guid))

    error = excinfo.value
    assert isinstance(error, ServerError)
    assert error.status_code == 500
    assert error.public_message == "A server error occurred"
    assert error.entity_type == "charity"
    assert error.entity_guid == charity.guid

    donations = memory_store.all(EntityType.DONATION)
    assert [doc["guid"] for doc in donations] == [error.donation_guid]
    assert memory_store.raw(EntityType.USER, user.guid)["balance"] == 40
    assert memory_store.raw(EntityType.USER, user.guid)["donations"] == [error.donation_guid]
    assert memory_store.raw(EntityType.CHARITY, charity.guid)["donations"] == []
    assert error.donation_guid in caplog.text


async def test_donation_record_failure_refunds_balance(service, memory_store):
    user = await seed_user(memory_store, balance=100)
    charity = await seed_charity(memory_store)
    memory_store.fail_inserts.add(EntityType.DONATION)

    with pytest.raises(ServerError):
        await service.donate(user_guid=user.guid, amount_cents=60, target=DonationTarget(charity=charity.guid))

    assert memory_store.raw(EntityType.USER, user.guid)["balance"] == 100
    assert memory_store.raw(EntityType.USER, user.guid)["donations"] == []


async def test_untranslated_record_failure_still_refunds_balance(service, memory_store):
    user = await seed_user(memory_store, balance=100)
    charity = await seed_charity(memory_store)
    memory_store.fail_inserts.add(EntityType.DONATION)
    memory_store.insert_failure = OverflowError

    with pytest.raises(OverflowError):
        await service.donate(user_guid=user.guid, amount_cents=60, target=DonationTarget(charity=charity.guid))

    assert memory_store.raw(EntityType.USER, user.guid)["balance"] == 100
    assert memory_store.all(EntityType.DONATION) == []


async def test_amount_above_limit_is_rejected_before_any_write(service, memory_store):
    user = await seed_user(memory_store, balance=100)
    charity = await seed_charity(memory_store)
    writes = list(memory_store.writes)

    with pytest.raises(ValidationError) as excinfo:
        await service.donate(user_guid=user.guid, amount_cents=MAX_AMOUNT_CENTS + 1, target=DonationTarget(charity=charity.guid))

    assert excinfo.value.field == "amount"
    assert memory_store.writes == writes


async def test_list_donations_filters_by_campaign(service, memory_store):
    user = await seed_user(memory_store, balance=100)
    charity = await seed_charity(memory_store)
    campaign = await seed_campaign(memory_store, charity)
    await service.donate(user_guid=user.guid, amount_cents=10, target=DonationTarget(charity=charity.guid))
    in_campaign = await service.donate(user_guid=user.guid, amount_cents=20, target=DonationTarget(campaign=campaign.guid))

    from giving_server.modules.common import PageRequest
    from giving_server.modules.donations import DonationQuery

    rows = await service.list_donations(DonationQuery(campaign=campaign.guid), PageRequest())
    by_charity = await service.list_donations(DonationQuery(charity=charity.guid), PageRequest(sort="desc"))

    assert [row.guid for row in rows] == [in_campaign.donation.guid]
    assert len(by_charity) == 2
    assert by_charity[0].guid == in_campaign.donation.guid


async def test_get_donation_not_found(service):
    with pytest.raises(NotFoundError):
        await service.get_donation("missing")
