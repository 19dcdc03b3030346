"""Health check endpoint: database connectivity and receipts storage."""

from fastapi import APIRouter

from app.core.database import check_db_connected
from app.core.dependencies import DbDep, ReceiptStorageDep, SettingsDep
from app.schemas.health import HealthResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def get_health(db: DbDep, settings: SettingsDep, storage: ReceiptStorageDep) -> HealthResponse:
    """
    Return service health status, database connectivity and whether the
    receipts directory is in place. Used by load balancers and monitoring.
    """
    return HealthResponse(
        status="ok",
        environment=settings.APP_ENV,
        database="connected" if check_db_connected(db) else "disconnected",
        receipts_storage="ready" if storage.directory.is_dir() else "missing",
    )
