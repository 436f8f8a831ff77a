"""Post endpoints."""
from fastapi import APIRouter, Depends

from giving_server.core.config import PagingSettings
from giving_server.core.security import get_current_principal
from giving_server.interfaces.http.deps import get_formatter, get_paging_settings, get_post_service, page_request
from giving_server.modules.entities import EntityType
from giving_server.modules.formatting import EntityFormatter
from giving_server.modules.posts import PostCreateInput, PostEditInput, PostQuery, PostService
from giving_server.schemas import (
    GuidRequest,
    PostCreateRequest,
    PostEditRequest,
    PostListRequest,
    PostListResponse,
    PostResponse,
    TokenData,
)

router = APIRouter()


@router.post("/post.create", response_model=PostResponse, response_model_exclude_unset=True, summary="Create a post under a campaign")
async def create_post(
    payload: PostCreateRequest,
    principal: TokenData = Depends(get_current_principal),
    post_service: PostService = Depends(get_post_service),
    formatter: EntityFormatter = Depends(get_formatter),
):
    post, user = await post_service.create_post(
        principal.user_guid,
        PostCreateInput(campaign=payload.campaign, caption=payload.caption),
    )
    return {
        "message": "Success",
        "post": await formatter.format(EntityType.POST, post),
        "user": await formatter.format(EntityType.USER, user),
    }


@router.post("/post.edit", response_model=PostResponse, response_model_exclude_unset=True, summary="Edit one of the caller's posts")
async def edit_post(
    payload: PostEditRequest,
    principal: TokenData = Depends(get_current_principal),
    post_service: PostService = Depends(get_post_service),
    formatter: EntityFormatter = Depends(get_formatter),
):
    post = await post_service.edit_post(principal.user_guid, payload.post, PostEditInput(caption=payload.caption))
    return {"message": "Success", "post": await formatter.format(EntityType.POST, post)}


@router.post("/post", response_model=PostResponse, response_model_exclude_unset=True, summary="Fetch a post")
async def get_post(
    payload: GuidRequest,
    post_service: PostService = Depends(get_post_service),
    formatter: EntityFormatter = Depends(get_formatter),
):
    post = await post_service.get_post(payload.guid)
    return {"message": "Success", "post": await formatter.format(EntityType.POST, post)}


@router.post("/posts", response_model=PostListResponse, response_model_exclude_unset=True, summary="List posts")
async def list_posts(
    payload: PostListRequest,
    paging: PagingSettings = Depends(get_paging_settings),
    post_service: PostService = Depends(get_post_service),
    formatter: EntityFormatter = Depends(get_formatter),
):
    query = PostQuery(user=payload.user, campaign=payload.campaign, charity=payload.charity)
    posts = await post_service.list_posts(query, page_request(payload, paging), paging.max_page_size)
    return {"message": "Success", "posts": await formatter.format_many(EntityType.POST, posts)}
