"""Charity endpoints."""
from fastapi import APIRouter, Depends

from giving_server.core.config import PagingSettings
from giving_server.core.security import get_current_principal
from giving_server.interfaces.http.deps import get_charity_service, get_formatter, get_paging_settings, page_request
from giving_server.modules.charities import CharityCreateInput, CharityEditInput, CharityService
from giving_server.modules.entities import EntityType
from giving_server.modules.formatting import EntityFormatter
from giving_server.schemas import (
    CharityCreateRequest,
    CharityEditRequest,
    CharityListRequest,
    CharityListResponse,
    CharityResponse,
    GuidRequest,
    TokenData,
    UserCharityResponse,
)

router = APIRouter()


@router.post("/charity.create", response_model=UserCharityResponse, response_model_exclude_unset=True, summary="Create a charity")
async def create_charity(
    payload: CharityCreateRequest,
    principal: TokenData = Depends(get_current_principal),
    charity_service: CharityService = Depends(get_charity_service),
    formatter: EntityFormatter = Depends(get_formatter),
):
    charity, user = await charity_service.create_charity(
        principal.user_guid,
        CharityCreateInput(name=payload.name, description=payload.description),
    )
    return {
        "message": "Success",
        "user": await formatter.format(EntityType.USER, user),
        "charity": await formatter.format(EntityType.CHARITY, charity),
    }


@router.post("/charity.edit", response_model=CharityResponse, response_model_exclude_unset=True, summary="Edit the caller's charity")
async def edit_charity(
    payload: CharityEditRequest,
    principal: TokenData = Depends(get_current_principal),
    charity_service: CharityService = Depends(get_charity_service),
    formatter: EntityFormatter = Depends(get_formatter),
):
    charity = await charity_service.edit_charity(
        principal.user_guid,
        CharityEditInput(name=payload.name, description=payload.description),
    )
    return {"message": "Success", "charity": await formatter.format(EntityType.CHARITY, charity)}


@router.post("/charity", response_model=CharityResponse, response_model_exclude_unset=True, summary="Fetch a charity")
async def get_charity(
    payload: GuidRequest,
    charity_service: CharityService = Depends(get_charity_service),
    formatter: EntityFormatter = Depends(get_formatter),
):
    charity = await charity_service.get_charity(payload.guid)
    return {"message": "Success", "charity": await formatter.format(EntityType.CHARITY, charity)}


@router.post("/charities", response_model=CharityListResponse, response_model_exclude_unset=True, summary="List charities")
async def list_charities(
    payload: CharityListRequest,
    paging: PagingSettings = Depends(get_paging_settings),
    charity_service: CharityService = Depends(get_charity_service),
    formatter: EntityFormatter = Depends(get_formatter),
):
    charities = await charity_service.list_charities(page_request(payload, paging), paging.max_page_size)
    return {"message": "Success", "charities": await formatter.format_many(EntityType.CHARITY, charities)}
