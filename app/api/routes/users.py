"""Admin user management: list, create and delete ordinary users."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends

from app.api.routes.auth import require_admin
from app.core.dependencies import CredentialStoreDep, SettingsDep
from app.core.exceptions import NotFoundError
from app.core.security import hash_password
from app.schemas.auth import CurrentUser, MessageResponse
from app.schemas.users import UserCreateRequest, UserCreateResponse, UsersListResponse

logger = logging.getLogger(__name__)
router = APIRouter()

AdminDep = Annotated[CurrentUser, Depends(require_admin)]


@router.get("", response_model=UsersListResponse)
def list_users(_admin: AdminDep, credentials: CredentialStoreDep) -> UsersListResponse:
    """List every non-admin user (admin only)."""
    return UsersListResponse(users=credentials.list_all_except_admin())


@router.post("", response_model=UserCreateResponse, status_code=201)
def create_user(
    body: UserCreateRequest,
    admin: AdminDep,
    credentials: CredentialStoreDep,
    settings: SettingsDep,
) -> UserCreateResponse:
    """Create an ordinary user. 400 if the username is taken."""
    account = credentials.create(
        body.username,
        hash_password(body.password, rounds=settings.BCRYPT_ROUNDS),
    )
    logger.info("Admin %s created user %s", admin.id, account.id)
    return UserCreateResponse(user=account)


@router.delete("/{user_id}", response_model=MessageResponse)
def delete_user(
    user_id: int,
    admin: AdminDep,
    credentials: CredentialStoreDep,
) -> MessageResponse:
    """Delete an ordinary user; admins cannot be deleted."""
    if not credentials.delete(user_id):
        raise NotFoundError("User not found or cannot be deleted")
    logger.info("Admin %s deleted user %s", admin.id, user_id)
    return MessageResponse(message="User deleted successfully")
