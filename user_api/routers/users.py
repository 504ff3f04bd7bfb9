from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Header, Request, Response

from user_api.schemas import (
    ErrorResponse,
    MessageResponse,
    UserLoginRequest,
    UserLoginResponse,
    UserProfileResponse,
    UserRegisterRequest,
    UserRegisterResponse,
    UserUpdateRequest,
)
from user_api.services.account_service import AccountService

router = APIRouter(prefix="/user", tags=["user"])


def get_account_service(request: Request) -> AccountService:
    service = getattr(request.app.state, "account_service", None)
    if service is None:
        raise RuntimeError("AccountService is not configured on app.state")
    return service


@router.post(
    "/register",
    status_code=201,
    response_model=UserRegisterResponse,
    responses={400: {"model": ErrorResponse}, 422: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def register(body: UserRegisterRequest, service: AccountService = Depends(get_account_service)):
    result = service.register(body.phone_number, body.password, body.full_name)
    return UserRegisterResponse(id=result.id)


@router.post(
    "/login",
    response_model=UserLoginResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def login(body: UserLoginRequest, service: AccountService = Depends(get_account_service)):
    result = service.login(body.phone_number, body.password)
    return UserLoginResponse(id=result.id, token=result.token)


@router.get(
    "/profile",
    response_model=UserProfileResponse,
    responses={403: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def get_profile(
    authorization: Optional[str] = Header(default=None),
    service: AccountService = Depends(get_account_service),
):
    profile = service.get_profile(authorization)
    return UserProfileResponse(full_name=profile.full_name, phone_number=profile.phone_number)


@router.patch(
    "/profile",
    response_model=MessageResponse,
    responses={
        204: {"description": "Nothing changed"},
        400: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
def update_profile(
    body: UserUpdateRequest,
    authorization: Optional[str] = Header(default=None),
    service: AccountService = Depends(get_account_service),
):
    result = service.update_profile(authorization, phone_number=body.phone_number, full_name=body.full_name)
    if not result.changed:
        return Response(status_code=204)
    return MessageResponse(message=result.message)
