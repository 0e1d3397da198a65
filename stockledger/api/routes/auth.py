"""Authentication endpoints."""

from fastapi import APIRouter, Depends

from stockledger.api.dependencies import get_current_user, get_login_use_case
from stockledger.application.dto.requests import LoginRequest
from stockledger.application.dto.responses import (
    CurrentUserResponse,
    ErrorResponse,
    LoginResponse,
    UserResponse,
)
from stockledger.application.use_cases import LoginUseCase
from stockledger.core.entities.user import User

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={401: {"model": ErrorResponse}},
)
async def login(
    request: LoginRequest,
    use_case: LoginUseCase = Depends(get_login_use_case),
) -> LoginResponse:
    """Exchange username and password for a bearer token."""
    result = await use_case.execute(request)
    return use_case.to_response(result)


@router.get(
    "/me",
    response_model=CurrentUserResponse,
    responses={401: {"model": ErrorResponse}},
)
async def me(user: User = Depends(get_current_user)) -> CurrentUserResponse:
    """Echo the signed-in account."""
    return CurrentUserResponse(user=UserResponse.from_entity(user))
