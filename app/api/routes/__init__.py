"""API routes."""

from fastapi import APIRouter

from app.api.routes import auth, health, records, user_data, users

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(users.router, prefix="/admin/users", tags=["admin"])
router.include_router(records.router, prefix="/admin/data", tags=["admin"])
router.include_router(user_data.router, prefix="/user", tags=["user"])
