"""Users, charities, campaigns, updates and posts."""

import pytest

from giving_server.core.errors import AuthError, ConflictError, NotFoundError, ValidationError
from giving_server.modules.campaigns import CampaignCreateInput, CampaignEditInput, CampaignService
from giving_server.modules.charities import CharityCreateInput, CharityEditInput, CharityService
from giving_server.modules.common import MAX_AMOUNT_CENTS, PageRequest
from giving_server.modules.entities import EntityType
from giving_server.modules.posts import PostCreateInput, PostEditInput, PostQuery, PostService
from giving_server.modules.updates import UpdateCreateInput, UpdateEditInput, UpdateService
from giving_server.modules.users import UserCreateInput, UserService

from tests.fakes import seed_user


def _signup(email="ada@example.org", password="lovelace1", name="Ada"):
    return UserCreateInput(email=email, password=password, name=name)


async def test_register_hashes_password_and_normalizes_email(memory_store):
    users = UserService(memory_store)

    user = await users.register(_signup(email="  Ada@Example.org "))

    assert user.email == "ada@example.org"
    assert user.balance == 0
    assert user.password_hash and user.password_hash != "lovelace1"
    assert await users.authenticate("ADA@example.org", "lovelace1") is not None
    assert await users.authenticate("ada@example.org", "wrong-pass1") is None


async def test_register_rejects_duplicate_email(memory_store):
    users = UserService(memory_store)
    await users.register(_signup())

    with pytest.raises(ConflictError):
        await users.register(_signup(name="Other"))


@pytest.mark.parametrize(
    ("email", "password", "field"),
    [
        ("not-an-email", "lovelace1", "email"),
        ("ada@example.org", "short1", "password"),
        ("ada@example.org", "lettersonly", "password"),
        ("ada@example.org", "12345678", "password"),
    ],
)
async def test_register_validates_input(memory_store, email, password, field):
    with pytest.raises(ValidationError) as excinfo:
        await UserService(memory_store).register(_signup(email=email, password=password))

    assert excinfo.value.field == field
    assert memory_store.all(EntityType.USER) == []


async def test_deposit_credits_balance(memory_store):
    user = await seed_user(memory_store, balance=5)
    users = UserService(memory_store)

    updated = await users.deposit(user.guid, 95)

    assert updated.balance == 100
    with pytest.raises(ValidationError):
        await users.deposit(user.guid, 0)
    with pytest.raises(NotFoundError):
        await users.deposit("missing", 10)


async def test_follow_charity_is_idempotent(memory_store):
    user = await seed_user(memory_store)
    owner = await seed_user(memory_store)
    charity, _ = await CharityService(memory_store).create_charity(owner.guid, CharityCreateInput(name="Trees"))
    users = UserService(memory_store)

    await users.follow_charity(user.guid, charity.guid)
    updated, _ = await users.follow_charity(user.guid, charity.guid)

    assert updated.following_charities == [charity.guid]


async def test_create_charity_links_administrator(memory_store):
    owner = await seed_user(memory_store)
    charities = CharityService(memory_store)

    charity, user = await charities.create_charity(owner.guid, CharityCreateInput(name=" Trees ", description="Plant"))

    assert charity.name == "Trees"
    assert charity.users == [owner.guid]
    assert user.charity == charity.guid
    with pytest.raises(ConflictError):
        await charities.create_charity(owner.guid, CharityCreateInput(name="Second"))


async def test_campaign_requires_charity_administrator(memory_store):
    outsider = await seed_user(memory_store)
    owner = await seed_user(memory_store)
    charity, _ = await CharityService(memory_store).create_charity(owner.guid, CharityCreateInput(name="Trees"))
    campaigns = CampaignService(memory_store)

    with pytest.raises(AuthError):
        await campaigns.create_campaign(outsider.guid, CampaignCreateInput(name="Spring"))

    campaign, updated_charity = await campaigns.create_campaign(owner.guid, CampaignCreateInput(name="Spring"))

    assert campaign.charity == charity.guid
    assert updated_charity.campaigns == [campaign.guid]
    listed = await campaigns.list_campaigns(PageRequest(), charity=charity.guid)
    assert [row.guid for row in listed] == [campaign.guid]


async def test_post_takes_charity_from_campaign(memory_store):
    owner = await seed_user(memory_store)
    author = await seed_user(memory_store)
    charity, _ = await CharityService(memory_store).create_charity(owner.guid, CharityCreateInput(name="Trees"))
    campaign, _ = await CampaignService(memory_store).create_campaign(owner.guid, CampaignCreateInput(name="Spring"))
    posts = PostService(memory_store)

    post, user = await posts.create_post(author.guid, PostCreateInput(campaign=campaign.guid, caption="Planted"))

    assert post.charity == charity.guid
    assert user.posts == [post.guid]
    assert memory_store.raw(EntityType.CAMPAIGN, campaign.guid)["posts"] == [post.guid]
    by_author = await posts.list_posts(PostQuery(user=author.guid), PageRequest())
    assert [row.guid for row in by_author] == [post.guid]
    with pytest.raises(NotFoundError):
        await posts.create_post(author.guid, PostCreateInput(campaign="missing"))


async def test_deposit_cannot_exceed_the_cents_limit(memory_store):
    user = await seed_user(memory_store, balance=MAX_AMOUNT_CENTS - 10)
    users = UserService(memory_store)

    with pytest.raises(ValidationError) as excinfo:
        await users.deposit(user.guid, 11)
    with pytest.raises(ValidationError):
        await users.deposit(user.guid, MAX_AMOUNT_CENTS + 1)

    assert excinfo.value.field == "amount"
    assert memory_store.raw(EntityType.USER, user.guid)["balance"] == MAX_AMOUNT_CENTS - 10
    assert (await users.deposit(user.guid, 10)).balance == MAX_AMOUNT_CENTS


async def _charity_with_campaign(store):
    owner = await seed_user(store, name="Owner")
    charity, _ = await CharityService(store).create_charity(owner.guid, CharityCreateInput(name="Trees"))
    campaign, _ = await CampaignService(store).create_campaign(owner.guid, CampaignCreateInput(name="Spring"))
    return owner, charity, campaign


async def test_edit_charity_changes_only_sent_fields(memory_store):
    owner, charity, _ = await _charity_with_campaign(memory_store)
    outsider = await seed_user(memory_store)
    charities = CharityService(memory_store)

    edited = await charities.edit_charity(owner.guid, CharityEditInput(description="Planting trees"))

    assert edited.name == "Trees"
    assert edited.description == "Planting trees"
    assert edited.last_modified is not None
    with pytest.raises(AuthError):
        await charities.edit_charity(outsider.guid, CharityEditInput(name="Mine"))
    with pytest.raises(ValidationError) as excinfo:
        await charities.edit_charity(owner.guid, CharityEditInput(name="  "))
    assert excinfo.value.field == "name"


async def test_edit_campaign_is_limited_to_its_charity(memory_store):
    owner, charity, campaign = await _charity_with_campaign(memory_store)
    rival = await seed_user(memory_store)
    await CharityService(memory_store).create_charity(rival.guid, CharityCreateInput(name="Rivers"))
    campaigns = CampaignService(memory_store)

    with pytest.raises(AuthError):
        await campaigns.edit_campaign(rival.guid, campaign.guid, CampaignEditInput(name="Taken"))
    edited = await campaigns.edit_campaign(owner.guid, campaign.guid, CampaignEditInput(name=" Summer "))

    assert edited.name == "Summer"
    assert edited.charity == charity.guid
    with pytest.raises(NotFoundError):
        await campaigns.edit_campaign(owner.guid, "missing", CampaignEditInput(name="x"))


async def test_edit_post_is_limited_to_its_author(memory_store):
    owner, _, campaign = await _charity_with_campaign(memory_store)
    author = await seed_user(memory_store)
    posts = PostService(memory_store)
    post, _ = await posts.create_post(author.guid, PostCreateInput(campaign=campaign.guid, caption="Planted"))

    with pytest.raises(AuthError):
        await posts.edit_post(owner.guid, post.guid, PostEditInput(caption="Mine now"))
    edited = await posts.edit_post(author.guid, post.guid, PostEditInput(caption="Planted 40 trees"))

    assert edited.caption == "Planted 40 trees"
    assert edited.campaign == campaign.guid


async def test_updates_are_published_and_edited_by_their_charity(memory_store):
    owner, charity, _ = await _charity_with_campaign(memory_store)
    outsider = await seed_user(memory_store)
    updates = UpdateService(memory_store)

    with pytest.raises(AuthError):
        await updates.create_update(outsider.guid, UpdateCreateInput(name="Hello"))
    update, updated_charity = await updates.create_update(owner.guid, UpdateCreateInput(name="Hello", description="First"))

    assert update.charity == charity.guid
    assert updated_charity.updates == [update.guid]

    with pytest.raises(AuthError):
        await updates.edit_update(outsider.guid, update.guid, UpdateEditInput(name="Hijacked"))
    edited = await updates.edit_update(owner.guid, update.guid, UpdateEditInput(description="Second"))

    assert (edited.name, edited.description) == ("Hello", "Second")
    listed = await updates.list_updates(PageRequest(), charity=charity.guid)
    assert [row.guid for row in listed] == [update.guid]
    with pytest.raises(NotFoundError):
        await updates.get_update("missing")
