"""SQLAlchemy ORM models."""

from app.models.base import Base
from app.models.record import DataRecord
from app.models.session import UserSession
from app.models.user import User
from app.models.user_access import UserAccess

__all__ = ["Base", "DataRecord", "User", "UserAccess", "UserSession"]
