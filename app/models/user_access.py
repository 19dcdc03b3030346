"""ORM model for the user <-> record assignment (many-to-many)."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, UniqueConstraint, func
from sqlalchemy.orm import relationship

from app.models.base import Base


class UserAccess(Base):
    """Grants one user read access to one record. Unique per (user_id, record_id)."""

    __tablename__ = "user_access"
    __table_args__ = (
        UniqueConstraint("user_id", "record_id", name="uq_user_access_user_record"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    record_id = Column(
        Integer,
        ForeignKey("data_records.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    user = relationship("User", back_populates="access_entries")
    record = relationship("DataRecord", back_populates="access_entries")
