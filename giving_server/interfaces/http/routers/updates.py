"""Charity update endpoints."""
from fastapi import APIRouter, Depends

from giving_server.core.config import PagingSettings
from giving_server.core.security import get_current_principal
from giving_server.interfaces.http.deps import get_formatter, get_paging_settings, get_update_service, page_request
from giving_server.modules.entities import EntityType
from giving_server.modules.formatting import EntityFormatter
from giving_server.modules.updates import UpdateCreateInput, UpdateEditInput, UpdateService
from giving_server.schemas import (
    GuidRequest,
    TokenData,
    UpdateCreateRequest,
    UpdateEditRequest,
    UpdateListRequest,
    UpdateListResponse,
    UpdateResponse,
)

router = APIRouter()


@router.post("/update.create", response_model=UpdateResponse, response_model_exclude_unset=True, summary="Publish an update for the caller's charity")
async def create_update(
    payload: UpdateCreateRequest,
    principal: TokenData = Depends(get_current_principal),
    update_service: UpdateService = Depends(get_update_service),
    formatter: EntityFormatter = Depends(get_formatter),
):
    update, charity = await update_service.create_update(
        principal.user_guid,
        UpdateCreateInput(name=payload.name, description=payload.description),
    )
    return {
        "message": "Success",
        "update": await formatter.format(EntityType.UPDATE, update),
        "charity": await formatter.format(EntityType.CHARITY, charity),
    }


@router.post("/update.edit", response_model=UpdateResponse, response_model_exclude_unset=True, summary="Edit an update of the caller's charity")
async def edit_update(
    payload: UpdateEditRequest,
    principal: TokenData = Depends(get_current_principal),
    update_service: UpdateService = Depends(get_update_service),
    formatter: EntityFormatter = Depends(get_formatter),
):
    update = await update_service.edit_update(
        principal.user_guid,
        payload.update,
        UpdateEditInput(name=payload.name, description=payload.description),
    )
    return {"message": "Success", "update": await formatter.format(EntityType.UPDATE, update)}


@router.post("/update", response_model=UpdateResponse, response_model_exclude_unset=True, summary="Fetch an update")
async def get_update(
    payload: GuidRequest,
    update_service: UpdateService = Depends(get_update_service),
    formatter: EntityFormatter = Depends(get_formatter),
):
    update = await update_service.get_update(payload.guid)
    return {"message": "Success", "update": await formatter.format(EntityType.UPDATE, update)}


@router.post("/updates", response_model=UpdateListResponse, response_model_exclude_unset=True, summary="List updates")
async def list_updates(
    payload: UpdateListRequest,
    paging: PagingSettings = Depends(get_paging_settings),
    update_service: UpdateService = Depends(get_update_service),
    formatter: EntityFormatter = Depends(get_formatter),
):
    updates = await update_service.list_updates(page_request(payload, paging), payload.charity, paging.max_page_size)
    return {"message": "Success", "updates": await formatter.format_many(EntityType.UPDATE, updates)}
