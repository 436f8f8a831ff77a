"""Account endpoints: registration, login, profile lookup and deposits."""
from fastapi import APIRouter, Depends

from giving_server.core.errors import AuthError
from giving_server.core.security import create_access_token, get_current_principal
from giving_server.interfaces.http.deps import get_charity_service, get_formatter, get_user_service
from giving_server.modules.charities import CharityService
from giving_server.modules.entities import EntityType
from giving_server.modules.formatting import EntityFormatter
from giving_server.modules.users import UserCreateInput, UserService
from giving_server.schemas import (
    DepositRequest,
    GuidRequest,
    LoginRequest,
    TokenData,
    UserAuthResponse,
    UserCharityResponse,
    UserCreateRequest,
    UserResponse,
)

router = APIRouter()


@router.post("/user.create", response_model=UserAuthResponse, response_model_exclude_unset=True, summary="Register an account")
async def create_user(
    payload: UserCreateRequest,
    user_service: UserService = Depends(get_user_service),
    formatter: EntityFormatter = Depends(get_formatter),
):
    user = await user_service.register(
        UserCreateInput(
            email=payload.email,
            password=payload.password,
            name=payload.name,
            bio=payload.bio,
        )
    )
    return {
        "message": "Success",
        "token": create_access_token(user.guid, user.charity),
        "user": await formatter.format(EntityType.USER, user),
    }


@router.post("/user.login", response_model=UserAuthResponse, response_model_exclude_unset=True, summary="Exchange credentials for a token")
async def login(
    payload: LoginRequest,
    user_service: UserService = Depends(get_user_service),
    formatter: EntityFormatter = Depends(get_formatter),
):
    user = await user_service.authenticate(payload.email, payload.password)
    if user is None:
        raise AuthError("Invalid email or password")
    return {
        "message": "Success",
        "token": create_access_token(user.guid, user.charity),
        "user": await formatter.format(EntityType.USER, user),
    }


@router.post("/user", response_model=UserResponse, response_model_exclude_unset=True, summary="Fetch a user")
async def get_user(
    payload: GuidRequest,
    user_service: UserService = Depends(get_user_service),
    formatter: EntityFormatter = Depends(get_formatter),
):
    user = await user_service.get_user(payload.guid)
    return {"message": "Success", "user": await formatter.format(EntityType.USER, user)}


@router.post("/user.deposit", response_model=UserResponse, response_model_exclude_unset=True, summary="Credit the caller's balance")
async def deposit(
    payload: DepositRequest,
    principal: TokenData = Depends(get_current_principal),
    user_service: UserService = Depends(get_user_service),
    formatter: EntityFormatter = Depends(get_formatter),
):
    user = await user_service.deposit(principal.user_guid, payload.amount)
    return {"message": "Success", "user": await formatter.format(EntityType.USER, user)}


@router.post("/charity.follow", response_model=UserCharityResponse, response_model_exclude_unset=True, summary="Follow a charity")
async def follow_charity(
    payload: GuidRequest,
    principal: TokenData = Depends(get_current_principal),
    user_service: UserService = Depends(get_user_service),
    charity_service: CharityService = Depends(get_charity_service),
    formatter: EntityFormatter = Depends(get_formatter),
):
    user, _ = await user_service.follow_charity(principal.user_guid, payload.guid)
    # re-read so the follower count includes this user
    charity = await charity_service.get_charity(payload.guid)
    return {
        "message": "Success",
        "user": await formatter.format(EntityType.USER, user),
        "charity": await formatter.format(EntityType.CHARITY, charity),
    }
