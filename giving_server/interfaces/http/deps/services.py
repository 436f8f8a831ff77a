"""Domain service dependency providers."""

from fastapi import Depends

from giving_server.core.config import PagingSettings, Settings, get_settings
from giving_server.modules.campaigns import CampaignService
from giving_server.modules.charities import CharityService
from giving_server.modules.common import PageRequest
from giving_server.modules.donations import DonationService
from giving_server.modules.entities.repository import EntityStore
from giving_server.modules.feeds import FeedService
from giving_server.modules.formatting import EntityFormatter
from giving_server.modules.posts import PostService
from giving_server.modules.updates import UpdateService
from giving_server.modules.users import UserService
from giving_server.schemas import PagingRequest

from .database import get_entity_store


def get_user_service(store: EntityStore = Depends(get_entity_store)) -> UserService:
    return UserService(store)


def get_charity_service(store: EntityStore = Depends(get_entity_store)) -> CharityService:
    return CharityService(store)


def get_campaign_service(store: EntityStore = Depends(get_entity_store)) -> CampaignService:
    return CampaignService(store)


def get_post_service(store: EntityStore = Depends(get_entity_store)) -> PostService:
    return PostService(store)


def get_donation_service(store: EntityStore = Depends(get_entity_store)) -> DonationService:
    return DonationService(store)


def get_update_service(store: EntityStore = Depends(get_entity_store)) -> UpdateService:
    return UpdateService(store)


def get_feed_service(store: EntityStore = Depends(get_entity_store)) -> FeedService:
    return FeedService(store)


def get_formatter(store: EntityStore = Depends(get_entity_store)) -> EntityFormatter:
    return EntityFormatter(store)


def get_paging_settings(settings: Settings = Depends(get_settings)) -> PagingSettings:
    return settings.paging


def page_request(payload: PagingRequest, paging: PagingSettings) -> PageRequest:
    """Build a PageRequest, falling back to the configured page size when none was sent."""
    page_size = payload.page_size if "page_size" in payload.model_fields_set else paging.default_page_size
    return PageRequest(
        page_size=page_size,
        page=payload.page,
        sort=payload.sort,
        sort_key=payload.sort_key,
    )


__all__ = [
    "get_user_service",
    "get_charity_service",
    "get_campaign_service",
    "get_post_service",
    "get_donation_service",
    "get_update_service",
    "get_feed_service",
    "get_formatter",
    "get_paging_settings",
    "page_request",
]
