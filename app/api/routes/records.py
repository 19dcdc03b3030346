"""Admin record management: CRUD, assignments and receipt upload."""

from typing import Annotated

from fastapi import APIRouter, Depends, File, UploadFile

from app.api.routes.auth import require_admin
from app.core.dependencies import ReceiptStorageDep, RecordStoreDep
from app.core.exceptions import ValidationError
from app.schemas.auth import CurrentUser, MessageResponse
from app.schemas.records import (
    AdminRecordItem,
    AdminRecordsResponse,
    RecordCreateRequest,
    RecordItem,
    RecordMutationResponse,
    RecordUpdateRequest,
)
from app.schemas.upload import UploadResponse
from app.services.receipts import upload_receipt

router = APIRouter()

AdminDep = Annotated[CurrentUser, Depends(require_admin)]


@router.get("", response_model=AdminRecordsResponse)
def list_records(_admin: AdminDep, store: RecordStoreDep) -> AdminRecordsResponse:
    """All records, newest first, each with the users it is assigned to."""
    records = store.list_all()
    assignments = store.assignments_for([r.id for r in records])
    items = [
        AdminRecordItem.model_validate(r).model_copy(
            update={"assigned_users": assignments.get(r.id, [])}
        )
        for r in records
    ]
    return AdminRecordsResponse(records=items)


@router.post("", response_model=RecordMutationResponse, status_code=201)
def create_record(
    body: RecordCreateRequest,
    _admin: AdminDep,
    store: RecordStoreDep,
) -> RecordMutationResponse:
    """Create a record (status defaults to Pending) and assign it to the given users."""
    record = store.create(body, body.assigned_users)
    return RecordMutationResponse(
        message="Data record created successfully",
        record=RecordItem.model_validate(record),
    )


@router.put("/{record_id}", response_model=RecordMutationResponse)
def update_record(
    record_id: int,
    body: RecordUpdateRequest,
    _admin: AdminDep,
    store: RecordStoreDep,
) -> RecordMutationResponse:
    """
    Replace a record's fields and its whole assignment set.
    Send assigned_users=[] to unassign everyone.
    """
    record = store.update(record_id, body, body.assigned_users)
    return RecordMutationResponse(
        message="Data record updated successfully",
        record=RecordItem.model_validate(record),
    )


@router.delete("/{record_id}", response_model=MessageResponse)
def delete_record(
    record_id: int,
    _admin: AdminDep,
    store: RecordStoreDep,
    storage: ReceiptStorageDep,
) -> MessageResponse:
    """Delete a record, its assignments and (best-effort) its receipt file."""
    receipt = store.delete(record_id)
    if receipt:
        storage.discard(receipt)
    return MessageResponse(message="Data record deleted successfully")


@router.post("/{record_id}/upload", response_model=UploadResponse)
def upload_record_receipt(
    record_id: int,
    _admin: AdminDep,
    store: RecordStoreDep,
    storage: ReceiptStorageDep,
    receipt: Annotated[UploadFile | None, File()] = None,
) -> UploadResponse:
    """
    Attach a receipt (jpg, jpeg, png, gif or pdf; at most 5 MB by default) to a record.
    Send it as multipart/form-data in a field named `receipt`.
    Replaces and deletes any previous receipt.
    """
    if receipt is None or not receipt.filename:
        raise ValidationError("No file uploaded")
    filename = upload_receipt(
        store,
        storage,
        record_id,
        receipt.file,
        receipt.filename,
        receipt.content_type,
        size=receipt.size,
    )
    return UploadResponse(filename=filename)
