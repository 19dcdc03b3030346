"""Request/response schemas for data records and their assignments."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

RecordStatus = Literal["Pending", "Approved", "Rejected"]

AADHAAR_PATTERN = r"^\d{12}$"


def _strip(v: object) -> object:
    return v.strip() if isinstance(v, str) else v


class RecordFields(BaseModel):
    """Scalar fields an admin edits on a record."""

    name: str = Field(..., min_length=1, max_length=100)
    aadhaar_number: str = Field(
        ...,
        pattern=AADHAAR_PATTERN,
        description="Exactly 12 digits",
    )
    srn: str = Field(..., min_length=1, max_length=50)
    status: RecordStatus

    @field_validator("name", "aadhaar_number", "srn", mode="before")
    @classmethod
    def strip_text(cls, v: object) -> object:
        return _strip(v)


class RecordCreateRequest(RecordFields):
    """Body for POST /admin/data. Status defaults to Pending."""

    status: RecordStatus = "Pending"
    assigned_users: list[int] = Field(default_factory=list)


class RecordUpdateRequest(RecordFields):
    """
    Body for PUT /admin/data/{id}.

    assigned_users replaces the whole assignment set; an empty list unassigns everyone.
    """

    assigned_users: list[int] = Field(default_factory=list)


class AssignedUser(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str


class RecordItem(BaseModel):
    """A record as returned to clients."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    aadhaar_number: str
    srn: str
    status: str
    receipt_filename: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class AdminRecordItem(RecordItem):
    """Record plus the users it is assigned to (admin table)."""

    assigned_users: list[AssignedUser] = Field(default_factory=list)


class AdminRecordsResponse(BaseModel):
    success: bool = True
    records: list[AdminRecordItem]


class UserRecordsResponse(BaseModel):
    success: bool = True
    records: list[RecordItem]


class RecordMutationResponse(BaseModel):
    success: bool = True
    message: str
    record: RecordItem | None = None
