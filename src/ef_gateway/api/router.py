"""Account API router: register, login, own profile, public profile.

All endpoints return ApiResponse. request_id is read from request.state
(injected by RequestLogMiddleware).
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, status

from src.ef_common.response import ApiResponse, respond
from src.ef_gateway.account.schemas import (
    AuthResponse,
    LoginRequest,
    PublicUserInfo,
    RegisterRequest,
    UpdateProfileRequest,
    UserInfo,
)
from src.ef_gateway.account.service import AccountService
from src.ef_gateway.auth.dependencies import get_current_account_id
from src.ef_gateway.auth.jwt_handler import token_lifetime_seconds
from src.ef_store.memory import InMemoryStore, get_store

router = APIRouter(prefix="/accounts", tags=["accounts"])
_service = AccountService()


@router.post(
    "",
    status_code=status.HTTP_200_OK,
    response_model=ApiResponse,
    summary="Register a new account",
)
async def register(
    request: Request,
    body: RegisterRequest,
    store: Annotated[InMemoryStore, Depends(get_store)],
) -> ApiResponse:
    account, token = await _service.register(store, body.name, body.email, body.password)
    data = AuthResponse(
        user=UserInfo.from_domain(account),
        token=token,
        expires_in=token_lifetime_seconds(),
    )
    return respond(request, data.model_dump(), "User registered successfully")


@router.post(
    "/session",
    status_code=status.HTTP_200_OK,
    response_model=ApiResponse,
    summary="Log in",
)
async def login(
    request: Request,
    body: LoginRequest,
    store: Annotated[InMemoryStore, Depends(get_store)],
) -> ApiResponse:
    account, token = await _service.login(store, body.email, body.password)
    data = AuthResponse(
        user=UserInfo.from_domain(account),
        token=token,
        expires_in=token_lifetime_seconds(),
    )
    return respond(request, data.model_dump(), "Login successful")


@router.get("/me", response_model=ApiResponse, summary="Own profile")
async def get_me(
    request: Request,
    account_id: Annotated[str, Depends(get_current_account_id)],
    store: Annotated[InMemoryStore, Depends(get_store)],
) -> ApiResponse:
    account = await _service.get_account(store, account_id)
    return respond(request, {"user": UserInfo.from_domain(account).model_dump()})


@router.put("/me", response_model=ApiResponse, summary="Update own profile")
async def update_me(
    request: Request,
    body: UpdateProfileRequest,
    account_id: Annotated[str, Depends(get_current_account_id)],
    store: Annotated[InMemoryStore, Depends(get_store)],
) -> ApiResponse:
    account = await _service.update_profile(store, account_id, body)
    return respond(request, {"user": UserInfo.from_domain(account).model_dump()})


@router.get("/{account_id}", response_model=ApiResponse, summary="Public profile")
async def get_account(
    account_id: str,
    request: Request,
    store: Annotated[InMemoryStore, Depends(get_store)],
) -> ApiResponse:
    account = await _service.get_account(store, account_id)
    return respond(request, {"user": PublicUserInfo.from_domain(account).model_dump()})
