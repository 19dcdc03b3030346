"""Endpoints for ordinary users: their assigned records and receipt downloads."""

from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import FileResponse

from app.api.routes.auth import require_user
from app.core.dependencies import ReceiptStorageDep, RecordStoreDep
from app.schemas.auth import CurrentUser
from app.schemas.records import RecordItem, UserRecordsResponse
from app.services.access_control import check_access, enforce

router = APIRouter()

UserDep = Annotated[CurrentUser, Depends(require_user)]


@router.get("/data", response_model=UserRecordsResponse)
def list_my_records(user: UserDep, store: RecordStoreDep) -> UserRecordsResponse:
    """Records assigned to the caller, newest first."""
    records = store.list_for_user(user.id)
    return UserRecordsResponse(records=[RecordItem.model_validate(r) for r in records])


@router.get("/download/{filename:path}", response_class=FileResponse)
def download_receipt(
    filename: str,
    user: UserDep,
    store: RecordStoreDep,
    storage: ReceiptStorageDep,
) -> FileResponse:
    """
    Download a receipt. Admins may fetch any receipt; users only receipts of
    records assigned to them (403 otherwise, even if the file exists).
    """
    path = storage.resolve(filename)
    enforce(
        check_access(
            user,
            owner_check=lambda: store.user_can_access_receipt(user.id, filename),
        )
    )
    return FileResponse(path, filename=filename)
