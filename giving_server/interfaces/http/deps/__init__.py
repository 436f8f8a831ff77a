"""Reusable FastAPI dependencies."""

from .database import get_entity_store
from .services import (
    get_campaign_service,
    get_charity_service,
    get_donation_service,
    get_feed_service,
    get_formatter,
    get_paging_settings,
    get_post_service,
    get_update_service,
    get_user_service,
    page_request,
)

__all__ = [
    "get_entity_store",
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
