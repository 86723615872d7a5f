"""
Parcel log entry database model.

Append-only trail of handling events (received, sent, delivered) for a parcel.
Rows are never updated or deleted.
"""

from datetime import datetime, timezone

from sqlalchemy import Column, Integer, DateTime, ForeignKey, Enum
from post_backend.app.db.session import Base
from post_backend.app.models.parcel_enums import ParcelLogAction


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ParcelLogEntry(Base):
    """
    Parcel handling event.
    
    Each entry ties an action to the parcel, the employee credited with it
    and the post office where it happened.
    """
    __tablename__ = "parcel_log_entries"
    
    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    
    timestamp = Column(DateTime(timezone=True), default=_utcnow, nullable=False, index=True)
    action_type = Column(Enum(ParcelLogAction), nullable=False, index=True)
    
    parcel_id = Column(Integer, ForeignKey('parcels.id'), nullable=False, index=True)
    employee_id = Column(Integer, ForeignKey('employees.id'), nullable=False, index=True)
    post_office_id = Column(Integer, ForeignKey('post_offices.id'), nullable=False, index=True)
    
    def __repr__(self):
        return (
            f"<ParcelLogEntry(id={self.id}, action='{self.action_type.value}', "
            f"parcel_id={self.parcel_id}, post_office_id={self.post_office_id})>"
        )
