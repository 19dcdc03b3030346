"""Record store: data records and the user <-> record assignment relation."""

import logging

from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundError, ValidationError
from app.models import DataRecord, User, UserAccess
from app.models.record import DEFAULT_RECORD_STATUS
from app.schemas.records import AssignedUser, RecordFields
from app.services.credential_store import CredentialStore

logger = logging.getLogger(__name__)


def dedupe_ids(ids: list[int]) -> list[int]:
    """Drop repeated ids, keeping the first occurrence of each."""
    return list(dict.fromkeys(ids))


class RecordStore:
    """
    CRUD over data_records plus assignment queries over user_access.

    Writes that touch a record and its assignments commit once, so readers never
    see a record with a half-replaced assignment set.
    """

    def __init__(self, db: Session, credentials: CredentialStore | None = None) -> None:
        self.db = db
        self.credentials = credentials or CredentialStore(db)

    def _resolve_assignees(self, user_ids: list[int]) -> list[int]:
        """Validate assignee ids against the users table; return them de-duplicated in order."""
        ordered = dedupe_ids(user_ids)
        if not ordered:
            return []
        found = self.credentials.existing_ids(ordered)
        missing = [uid for uid in ordered if uid not in found]
        if missing:
            raise ValidationError(
                f"Unknown user id(s): {', '.join(str(uid) for uid in missing)}"
            )
        return ordered

    def _replace_assignments(self, record_id: int, user_ids: list[int]) -> None:
        self.db.query(UserAccess).filter(UserAccess.record_id == record_id).delete(
            synchronize_session=False
        )
        for uid in user_ids:
            self.db.add(UserAccess(user_id=uid, record_id=record_id))

    def get_by_id(self, record_id: int) -> DataRecord | None:
        return self.db.get(DataRecord, record_id)

    def list_all(self) -> list[DataRecord]:
        """Every record, newest first."""
        return self.db.query(DataRecord).order_by(DataRecord.id.desc()).all()

    def list_for_user(self, user_id: int) -> list[DataRecord]:
        """Records assigned to user_id, newest first."""
        return (
            self.db.query(DataRecord)
            .join(UserAccess, UserAccess.record_id == DataRecord.id)
            .filter(UserAccess.user_id == user_id)
            .order_by(DataRecord.id.desc())
            .all()
        )

    def assigned_users(self, record_id: int) -> list[AssignedUser]:
        users = (
            self.db.query(User.id, User.username)
            .join(UserAccess, UserAccess.user_id == User.id)
            .filter(UserAccess.record_id == record_id)
            .order_by(UserAccess.id)
            .all()
        )
        return [AssignedUser(id=u.id, username=u.username) for u in users]

    def create(self, fields: RecordFields, assignees: list[int] | None = None) -> DataRecord:
        """Insert a record (status defaults to Pending) and one assignment per assignee."""
        user_ids = self._resolve_assignees(assignees or [])
        record = DataRecord(
            name=fields.name,
            aadhaar_number=fields.aadhaar_number,
            srn=fields.srn,
            status=fields.status or DEFAULT_RECORD_STATUS,
        )
        try:
            self.db.add(record)
            self.db.flush()
            for uid in user_ids:
                self.db.add(UserAccess(user_id=uid, record_id=record.id))
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(record)
        logger.info("Record created: id=%s assignees=%s", record.id, user_ids)
        return record

    def update(
        self, record_id: int, fields: RecordFields, assignees: list[int] | None = None
    ) -> DataRecord:
        """
        Replace the scalar fields and the whole assignment set of a record.

        An empty assignee list unassigns everyone. Raises NotFoundError if absent.
        """
        record = self.get_by_id(record_id)
        if record is None:
            raise NotFoundError("Record not found")
        user_ids = self._resolve_assignees(assignees or [])
        try:
            record.name = fields.name
            record.aadhaar_number = fields.aadhaar_number
            record.srn = fields.srn
            record.status = fields.status
            self._replace_assignments(record.id, user_ids)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(record)
        logger.info("Record updated: id=%s assignees=%s", record.id, user_ids)
        return record

    def delete(self, record_id: int) -> str | None:
        """
        Delete a record and its assignments. Returns the receipt filename it held
        (the caller removes the file). Raises NotFoundError if absent.
        """
        record = self.get_by_id(record_id)
        if record is None:
            raise NotFoundError("Record not found")
        receipt = record.receipt_filename
        self.db.delete(record)
        self.db.commit()
        logger.info("Record deleted: id=%s", record_id)
        return receipt

    def set_receipt(self, record_id: int, filename: str) -> str | None:
        """Point a record at a new receipt file; returns the previous filename."""
        record = self.get_by_id(record_id)
        if record is None:
            raise NotFoundError("Record not found")
        previous = record.receipt_filename
        try:
            record.receipt_filename = filename
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        return previous

    def user_can_access_receipt(self, user_id: int, filename: str) -> bool:
        """True if filename is the receipt of a record assigned to user_id."""
        row = (
            self.db.query(DataRecord.id)
            .join(UserAccess, UserAccess.record_id == DataRecord.id)
            .filter(
                UserAccess.user_id == user_id,
                DataRecord.receipt_filename == filename,
            )
            .first()
        )
        return row is not None

    def assignments_for(self, record_ids: list[int]) -> dict[int, list[AssignedUser]]:
        """Assigned users for many records in one query, keyed by record id."""
        result: dict[int, list[AssignedUser]] = {rid: [] for rid in record_ids}
        if not record_ids:
            return result
        rows = (
            self.db.query(UserAccess.record_id, User.id, User.username)
            .join(User, User.id == UserAccess.user_id)
            .filter(UserAccess.record_id.in_(record_ids))
            .order_by(UserAccess.id)
            .all()
        )
        for record_id, user_id, username in rows:
            result[record_id].append(AssignedUser(id=user_id, username=username))
        return result
