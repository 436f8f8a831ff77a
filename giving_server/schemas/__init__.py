"""Pydantic schemas used across the project.

Request and response bodies use camelCase keys on the wire and snake_case
attributes in Python.
"""
from datetime import datetime
from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictInt
from pydantic.alias_generators import to_camel

from giving_server.modules.common.amounts import MAX_AMOUNT_CENTS


class ApiModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class TokenData(BaseModel):
    user_guid: str
    charity: Optional[str] = None


# ----------------------------------------------------------------------
# Requests
# ----------------------------------------------------------------------
class GuidRequest(ApiModel):
    guid: str = Field(..., min_length=1)


class PagingRequest(ApiModel):
    page_size: int = Field(default=20, ge=1)
    page: int = Field(default=0, ge=0)
    sort: Literal["asc", "desc"] = "asc"
    sort_key: str = "dateCreated"


class UserCreateRequest(ApiModel):
    email: str = Field(..., min_length=3, max_length=255)
    password: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=100)
    bio: str = ""


class LoginRequest(ApiModel):
    email: str
    password: str


class DepositRequest(ApiModel):
    amount: StrictInt = Field(..., gt=0, le=MAX_AMOUNT_CENTS)


class CharityCreateRequest(ApiModel):
    name: str = Field(..., min_length=1, max_length=150)
    description: str = ""


class CharityEditRequest(ApiModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=150)
    description: Optional[str] = None


class CharityListRequest(PagingRequest):
    pass


class CampaignCreateRequest(ApiModel):
    name: str = Field(..., min_length=1, max_length=150)
    description: str = ""


class CampaignEditRequest(ApiModel):
    campaign: str = Field(..., min_length=1)
    name: Optional[str] = Field(default=None, min_length=1, max_length=150)
    description: Optional[str] = None


class CampaignListRequest(PagingRequest):
    charity: Optional[str] = None


class PostCreateRequest(ApiModel):
    campaign: str = Field(..., min_length=1)
    caption: str = ""


class PostEditRequest(ApiModel):
    post: str = Field(..., min_length=1)
    caption: Optional[str] = None


class PostListRequest(PagingRequest):
    user: Optional[str] = None
    campaign: Optional[str] = None
    charity: Optional[str] = None


class DonationCreateRequest(ApiModel):
    amount: StrictInt = Field(..., gt=0, le=MAX_AMOUNT_CENTS)
    post: Optional[str] = None
    campaign: Optional[str] = None
    charity: Optional[str] = None


class DonationListRequest(PagingRequest):
    user: Optional[str] = None
    charity: Optional[str] = None
    campaign: Optional[str] = None
    post: Optional[str] = None


class UpdateCreateRequest(ApiModel):
    name: str = Field(..., min_length=1, max_length=150)
    description: str = ""


class UpdateEditRequest(ApiModel):
    update: str = Field(..., min_length=1)
    name: Optional[str] = Field(default=None, min_length=1, max_length=150)
    description: Optional[str] = None


class UpdateListRequest(PagingRequest):
    charity: Optional[str] = None


class FeedRequest(PagingRequest):
    pass


# ----------------------------------------------------------------------
# Entity views
# ----------------------------------------------------------------------
class EntityView(ApiModel):
    guid: str
    date_created: Optional[datetime] = None
    last_modified: Optional[datetime] = None
    erased: bool = False


class UserView(EntityView):
    name: str
    bio: str = ""
    charity: Optional[str] = None
    balance: int = 0
    donations: list[str] = Field(default_factory=list)
    posts: list[str] = Field(default_factory=list)
    following_charities: list[str] = Field(default_factory=list)
    total_donation_amount: Optional[int] = None


class CharityView(EntityView):
    name: str
    description: str = ""
    users: list[str] = Field(default_factory=list)
    campaigns: list[str] = Field(default_factory=list)
    donations: list[str] = Field(default_factory=list)
    updates: list[str] = Field(default_factory=list)
    followers: Optional[int] = None
    total_donation_amount: Optional[int] = None


class CampaignView(EntityView):
    charity: str
    name: str
    description: str = ""
    donations: list[str] = Field(default_factory=list)
    posts: list[str] = Field(default_factory=list)
    charity_name: Optional[str] = None
    total_donation_amount: Optional[int] = None


class PostView(EntityView):
    user: str
    campaign: str
    charity: str
    caption: str = ""
    donations: list[str] = Field(default_factory=list)
    charity_name: Optional[str] = None
    campaign_name: Optional[str] = None
    user_name: Optional[str] = None


class DonationView(EntityView):
    user: str
    charity: str
    amount: int
    campaign: Optional[str] = None
    post: Optional[str] = None
    charity_name: Optional[str] = None
    campaign_name: Optional[str] = None
    user_name: Optional[str] = None
    posting_user_name: Optional[str] = None


class UpdateView(EntityView):
    charity: str
    name: str
    description: str = ""
    charity_name: Optional[str] = None


class CampaignFeedView(CampaignView):
    object_type: Literal["campaign"]


class UpdateFeedView(UpdateView):
    object_type: Literal["update"]


class DonationFeedView(DonationView):
    object_type: Literal["donation"]


class PostFeedView(PostView):
    object_type: Literal["post"]


# ----------------------------------------------------------------------
# Responses
# ----------------------------------------------------------------------
class MessageResponse(ApiModel):
    message: str = "Success"


class UserAuthResponse(MessageResponse):
    token: str
    token_type: str = "bearer"
    user: UserView


class UserResponse(MessageResponse):
    user: UserView


class UserCharityResponse(MessageResponse):
    user: UserView
    charity: CharityView


class CharityResponse(MessageResponse):
    charity: CharityView


class CharityListResponse(MessageResponse):
    charities: list[CharityView]


class CampaignResponse(MessageResponse):
    campaign: CampaignView
    charity: Optional[CharityView] = None


class CampaignListResponse(MessageResponse):
    campaigns: list[CampaignView]


class PostResponse(MessageResponse):
    post: PostView
    user: Optional[UserView] = None


class PostListResponse(MessageResponse):
    posts: list[PostView]


class DonationResponse(MessageResponse):
    donation: DonationView


class DonationListResponse(MessageResponse):
    donations: list[DonationView]


class DonationCreateResponse(MessageResponse):
    donation: DonationView
    user: UserView
    charity: CharityView
    campaign: Optional[CampaignView] = None
    post: Optional[PostView] = None


class UpdateResponse(MessageResponse):
    update: UpdateView
    charity: Optional[CharityView] = None


class UpdateListResponse(MessageResponse):
    updates: list[UpdateView]


class CausesFeedResponse(MessageResponse):
    causes_feed: list[Union[CampaignFeedView, UpdateFeedView]]


class PeopleFeedResponse(MessageResponse):
    people_feed: list[Union[DonationFeedView, PostFeedView]]


__all__ = [
    "ApiModel",
    "TokenData",
    "GuidRequest",
    "PagingRequest",
    "UserCreateRequest",
    "LoginRequest",
    "DepositRequest",
    "CharityCreateRequest",
    "CharityEditRequest",
    "CharityListRequest",
    "CampaignCreateRequest",
    "CampaignEditRequest",
    "CampaignListRequest",
    "PostCreateRequest",
    "PostEditRequest",
    "PostListRequest",
    "DonationCreateRequest",
    "DonationListRequest",
    "UpdateCreateRequest",
    "UpdateEditRequest",
    "UpdateListRequest",
    "FeedRequest",
    "EntityView",
    "UserView",
    "CharityView",
    "CampaignView",
    "PostView",
    "DonationView",
    "UpdateView",
    "CampaignFeedView",
    "UpdateFeedView",
    "DonationFeedView",
    "PostFeedView",
    "MessageResponse",
    "UserAuthResponse",
    "UserResponse",
    "UserCharityResponse",
    "CharityResponse",
    "CharityListResponse",
    "CampaignResponse",
    "CampaignListResponse",
    "PostResponse",
    "PostListResponse",
    "DonationResponse",
    "DonationListResponse",
    "DonationCreateResponse",
    "UpdateResponse",
    "UpdateListResponse",
    "CausesFeedResponse",
    "PeopleFeedResponse",
]
