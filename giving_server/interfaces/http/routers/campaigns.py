"""Campaign endpoints."""
from fastapi import APIRouter, Depends

from giving_server.core.config import PagingSettings
from giving_server.core.security import get_current_principal
from giving_server.interfaces.http.deps import get_campaign_service, get_formatter, get_paging_settings, page_request
from giving_server.modules.campaigns import CampaignCreateInput, CampaignEditInput, CampaignService
from giving_server.modules.entities import EntityType
from giving_server.modules.formatting import EntityFormatter
from giving_server.schemas import (
    CampaignCreateRequest,
    CampaignEditRequest,
    CampaignListRequest,
    CampaignListResponse,
    CampaignResponse,
    GuidRequest,
    TokenData,
)

router = APIRouter()


@router.post("/campaign.create", response_model=CampaignResponse, response_model_exclude_unset=True, summary="Create a campaign for the caller's charity")
async def create_campaign(
    payload: CampaignCreateRequest,
    principal: TokenData = Depends(get_current_principal),
    campaign_service: CampaignService = Depends(get_campaign_service),
    formatter: EntityFormatter = Depends(get_formatter),
):
    campaign, charity = await campaign_service.create_campaign(
        principal.user_guid,
        CampaignCreateInput(name=payload.name, description=payload.description),
    )
    return {
        "message": "Success",
        "campaign": await formatter.format(EntityType.CAMPAIGN, campaign),
        "charity": await formatter.format(EntityType.CHARITY, charity),
    }


@router.post("/campaign.edit", response_model=CampaignResponse, response_model_exclude_unset=True, summary="Edit a campaign of the caller's charity")
async def edit_campaign(
    payload: CampaignEditRequest,
    principal: TokenData = Depends(get_current_principal),
    campaign_service: CampaignService = Depends(get_campaign_service),
    formatter: EntityFormatter = Depends(get_formatter),
):
    campaign = await campaign_service.edit_campaign(
        principal.user_guid,
        payload.campaign,
        CampaignEditInput(name=payload.name, description=payload.description),
    )
    return {"message": "Success", "campaign": await formatter.format(EntityType.CAMPAIGN, campaign)}


@router.post("/campaign", response_model=CampaignResponse, response_model_exclude_unset=True, summary="Fetch a campaign")
async def get_campaign(
    payload: GuidRequest,
    campaign_service: CampaignService = Depends(get_campaign_service),
    formatter: EntityFormatter = Depends(get_formatter),
):
    campaign = await campaign_service.get_campaign(payload.guid)
    return {"message": "Success", "campaign": await formatter.format(EntityType.CAMPAIGN, campaign)}


@router.post("/campaigns", response_model=CampaignListResponse, response_model_exclude_unset=True, summary="List campaigns")
async def list_campaigns(
    payload: CampaignListRequest,
    paging: PagingSettings = Depends(get_paging_settings),
    campaign_service: CampaignService = Depends(get_campaign_service),
    formatter: EntityFormatter = Depends(get_formatter),
):
    campaigns = await campaign_service.list_campaigns(page_request(payload, paging), payload.charity, paging.max_page_size)
    return {"message": "Success", "campaigns": await formatter.format_many(EntityType.CAMPAIGN, campaigns)}
