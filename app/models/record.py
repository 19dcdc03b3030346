"""ORM model for identity-verification data records."""

from sqlalchemy import Column, DateTime, Integer, String, func
from sqlalchemy.orm import relationship

from app.models.base import Base

RECORD_STATUSES = ("Pending", "Approved", "Rejected")
DEFAULT_RECORD_STATUS = "Pending"


class DataRecord(Base):
    """
    One applicant entry: identity fields, review status and an optional receipt.

    receipt_filename is a generated name inside the receipts directory, never a path.
    """

    __tablename__ = "data_records"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    aadhaar_number = Column(String(12), nullable=False)
    srn = Column(String(50), nullable=False)
    status = Column(String(16), nullable=False, default=DEFAULT_RECORD_STATUS)
    receipt_filename = Column(String(255), nullable=True, index=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    access_entries = relationship(
        "UserAccess",
        back_populates="record",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
