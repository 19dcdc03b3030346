"""FastAPI dependency providers: request-scoped stores built on the request's DB session."""

from datetime import timedelta
from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from app.core.config import Settings, get_settings
from app.core.database import get_db
from app.services.credential_store import CredentialStore
from app.services.receipts import ReceiptStorage
from app.services.record_store import RecordStore
from app.services.session_store import SessionStore

SettingsDep = Annotated[Settings, Depends(get_settings)]
DbDep = Annotated[Session, Depends(get_db)]


def get_credential_store(db: DbDep) -> CredentialStore:
    return CredentialStore(db)


CredentialStoreDep = Annotated[CredentialStore, Depends(get_credential_store)]


def get_record_store(db: DbDep, credentials: CredentialStoreDep) -> RecordStore:
    return RecordStore(db, credentials)


def get_session_store(db: DbDep, settings: SettingsDep) -> SessionStore:
    return SessionStore(db, ttl=timedelta(hours=settings.SESSION_TTL_HOURS))


def get_receipt_storage(settings: SettingsDep) -> ReceiptStorage:
    return ReceiptStorage(settings.RECEIPTS_DIR, settings.MAX_RECEIPT_BYTES)


RecordStoreDep = Annotated[RecordStore, Depends(get_record_store)]
SessionStoreDep = Annotated[SessionStore, Depends(get_session_store)]
ReceiptStorageDep = Annotated[ReceiptStorage, Depends(get_receipt_storage)]
