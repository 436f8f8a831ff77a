"""
Create a funded demo account with a charity, a campaign and an update, so
both home feeds have something to show.
"""
import asyncio

from giving_server.core.config import get_settings
from giving_server.core.logging_config import setup_logging
from giving_server.infrastructure.database import dispose_engine, get_session_factory, init_db
from giving_server.infrastructure.database.repositories import SqlEntityStore
from giving_server.modules.campaigns import CampaignCreateInput, CampaignService
from giving_server.modules.charities import CharityCreateInput, CharityService
from giving_server.modules.updates import UpdateCreateInput, UpdateService
from giving_server.modules.users import UserCreateInput, UserService

DEMO_EMAIL = "demo@example.org"
DEMO_PASSWORD = "givingdemo1"
DEMO_BALANCE_CENTS = 10_000


async def create_demo_account() -> None:
    settings = get_settings()
    setup_logging(settings.logging.level, settings.logging.format)
    await init_db()

    store = SqlEntityStore(get_session_factory())
    users = UserService(store)

    existing = await users.get_by_email(DEMO_EMAIL)
    if existing:
        print(f"Demo account already exists: {DEMO_EMAIL}")
        return

    user = await users.register(UserCreateInput(email=DEMO_EMAIL, password=DEMO_PASSWORD, name="Demo Donor"))
    await users.deposit(user.guid, DEMO_BALANCE_CENTS)
    charity, _ = await CharityService(store).create_charity(
        user.guid, CharityCreateInput(name="Demo Charity", description="A charity for trying out donations")
    )
    campaign, _ = await CampaignService(store).create_campaign(
        user.guid, CampaignCreateInput(name="Demo Campaign")
    )
    await UpdateService(store).create_update(user.guid, UpdateCreateInput(name="Welcome", description="Thanks for visiting"))
    await users.follow_charity(user.guid, charity.guid)

    print(f"Demo account created: {DEMO_EMAIL} / {DEMO_PASSWORD}")
    print(f"Balance: {DEMO_BALANCE_CENTS} cents, charity {charity.guid}, campaign {campaign.guid}")


async def main() -> None:
    try:
        await create_demo_account()
    finally:
        await dispose_engine()


if __name__ == "__main__":
    asyncio.run(main())
