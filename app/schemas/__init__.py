"""Pydantic request/response schemas."""

from app.schemas.auth import (
    AuthCheckResponse,
    CurrentUser,
    LoginRequest,
    LoginResponse,
    MessageResponse,
)
from app.schemas.health import HealthResponse
from app.schemas.records import (
    AdminRecordItem,
    AdminRecordsResponse,
    AssignedUser,
    RecordCreateRequest,
    RecordItem,
    RecordMutationResponse,
    RecordStatus,
    RecordUpdateRequest,
    UserRecordsResponse,
)
from app.schemas.upload import UploadResponse
from app.schemas.users import (
    UserAccount,
    UserCreateRequest,
    UserCreateResponse,
    UsersListResponse,
)

__all__ = [
    "AdminRecordItem",
    "AdminRecordsResponse",
    "AssignedUser",
    "AuthCheckResponse",
    "CurrentUser",
    "HealthResponse",
    "LoginRequest",
    "LoginResponse",
    "MessageResponse",
    "RecordCreateRequest",
    "RecordItem",
    "RecordMutationResponse",
    "RecordStatus",
    "RecordUpdateRequest",
    "UploadResponse",
    "UserAccount",
    "UserCreateRequest",
    "UserCreateResponse",
    "UsersListResponse",
]
