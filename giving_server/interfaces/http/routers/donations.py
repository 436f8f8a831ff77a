"""Donation endpoints, including the balance-transfer workflow."""
from fastapi import APIRouter, Depends

from giving_server.core.config import PagingSettings
from giving_server.core.security import get_current_principal
from giving_server.interfaces.http.deps import get_donation_service, get_formatter, get_paging_settings, page_request
from giving_server.modules.donations import DonationQuery, DonationService, DonationTarget
from giving_server.modules.entities import EntityType
from giving_server.modules.formatting import EntityFormatter
from giving_server.schemas import (
    DonationCreateRequest,
    DonationCreateResponse,
    DonationListRequest,
    DonationListResponse,
    DonationResponse,
    GuidRequest,
    TokenData,
)

router = APIRouter()


@router.post("/donation.create", response_model=DonationCreateResponse, response_model_exclude_unset=True, summary="Donate from the caller's balance")
async def create_donation(
    payload: DonationCreateRequest,
    principal: TokenData = Depends(get_current_principal),
    donation_service: DonationService = Depends(get_donation_service),
    formatter: EntityFormatter = Depends(get_formatter),
):
    result = await donation_service.donate(
        user_guid=principal.user_guid,
        amount_cents=payload.amount,
        target=DonationTarget(post=payload.post, campaign=payload.campaign, charity=payload.charity),
    )
    return {"message": "Success", **await formatter.format_result(result)}


@router.post("/donation", response_model=DonationResponse, response_model_exclude_unset=True, summary="Fetch a donation")
async def get_donation(
    payload: GuidRequest,
    donation_service: DonationService = Depends(get_donation_service),
    formatter: EntityFormatter = Depends(get_formatter),
):
    donation = await donation_service.get_donation(payload.guid)
    return {"message": "Success", "donation": await formatter.format(EntityType.DONATION, donation)}


@router.post("/donations", response_model=DonationListResponse, response_model_exclude_unset=True, summary="List donations")
async def list_donations(
    payload: DonationListRequest,
    paging: PagingSettings = Depends(get_paging_settings),
    donation_service: DonationService = Depends(get_donation_service),
    formatter: EntityFormatter = Depends(get_formatter),
):
    query = DonationQuery(
        user=payload.user,
        charity=payload.charity,
        campaign=payload.campaign,
        post=payload.post,
    )
    donations = await donation_service.list_donations(query, page_request(payload, paging), paging.max_page_size)
    return {"message": "Success", "donations": await formatter.format_many(EntityType.DONATION, donations)}
