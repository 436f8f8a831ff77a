"""Home feeds. Open to anonymous callers; a signed-in caller sees followed charities only."""
from typing import Optional

from fastapi import APIRouter, Depends

from giving_server.core.config import PagingSettings
from giving_server.core.security import get_optional_principal
from giving_server.interfaces.http.deps import get_feed_service, get_formatter, get_paging_settings, page_request
from giving_server.modules.feeds import FeedService
from giving_server.modules.formatting import EntityFormatter
from giving_server.schemas import CausesFeedResponse, FeedRequest, PeopleFeedResponse, TokenData

router = APIRouter()


@router.post("/list.causesFeed", response_model=CausesFeedResponse, response_model_exclude_unset=True, summary="Campaigns and updates")
async def causes_feed(
    payload: FeedRequest,
    principal: Optional[TokenData] = Depends(get_optional_principal),
    paging: PagingSettings = Depends(get_paging_settings),
    feed_service: FeedService = Depends(get_feed_service),
    formatter: EntityFormatter = Depends(get_formatter),
):
    items = await feed_service.causes_feed(
        principal.user_guid if principal else None,
        page_request(payload, paging),
        paging.max_page_size,
    )
    return {"message": "Success", "causes_feed": await formatter.format_feed(items)}


@router.post("/list.peopleFeed", response_model=PeopleFeedResponse, response_model_exclude_unset=True, summary="Donations and posts")
async def people_feed(
    payload: FeedRequest,
    principal: Optional[TokenData] = Depends(get_optional_principal),
    paging: PagingSettings = Depends(get_paging_settings),
    feed_service: FeedService = Depends(get_feed_service),
    formatter: EntityFormatter = Depends(get_formatter),
):
    items = await feed_service.people_feed(
        principal.user_guid if principal else None,
        page_request(payload, paging),
        paging.max_page_size,
    )
    return {"message": "Success", "people_feed": await formatter.format_feed(items)}
