"""User administration endpoints (admin only)."""

from fastapi import APIRouter, Depends, Path, status

from stockledger.api.dependencies import (
    MAX_ROW_ID,
    get_create_user_use_case,
    get_delete_user_use_case,
    get_list_users_use_case,
    get_update_user_use_case,
    require_admin,
)
from stockledger.application.dto.requests import CreateUserRequest, UpdateUserRequest
from stockledger.application.dto.responses import (
    ErrorResponse,
    MessageResponse,
    UserDetailResponse,
)
from stockledger.application.use_cases import (
    CreateUserUseCase,
    DeleteUserUseCase,
    ListUsersUseCase,
    UpdateUserUseCase,
)
from stockledger.core.entities.user import User

router = APIRouter(
    prefix="/api/users",
    tags=["users"],
    responses={401: {"model": ErrorResponse}, 403: {"model": ErrorResponse}},
)


@router.get("", response_model=list[UserDetailResponse], dependencies=[Depends(require_admin)])
async def list_users(
    use_case: ListUsersUseCase = Depends(get_list_users_use_case),
) -> list[UserDetailResponse]:
    """List every account."""
    users = await use_case.execute()
    return use_case.to_response(users)


@router.post(
    "",
    response_model=UserDetailResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
    responses={400: {"model": ErrorResponse}},
)
async def create_user(
    request: CreateUserRequest,
    use_case: CreateUserUseCase = Depends(get_create_user_use_case),
) -> UserDetailResponse:
    """Create an account. Role defaults to user."""
    user = await use_case.execute(request)
    return use_case.to_response(user)


@router.put(
    "/{user_id}",
    response_model=UserDetailResponse,
    dependencies=[Depends(require_admin)],
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def update_user(
    request: UpdateUserRequest,
    user_id: int = Path(ge=1, le=MAX_ROW_ID),
    use_case: UpdateUserUseCase = Depends(get_update_user_use_case),
) -> UserDetailResponse:
    """Change username, role or password."""
    user = await use_case.execute(user_id, request)
    return use_case.to_response(user)


@router.delete(
    "/{user_id}",
    response_model=MessageResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def delete_user(
    user_id: int = Path(ge=1, le=MAX_ROW_ID),
    current_user: User = Depends(require_admin),
    use_case: DeleteUserUseCase = Depends(get_delete_user_use_case),
) -> MessageResponse:
    """Delete an account. Admins cannot delete themselves."""
    await use_case.execute(user_id, current_user)
    return use_case.to_response()
