"""
Post office database model.

Post offices are the origin and destination of every parcel.
"""

from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.sql import func
from post_backend.app.db.session import Base


class PostOffice(Base):
    """
    Post office model.
    
    Referenced by parcels (origin/destination), employees and audit entries.
    """
    __tablename__ = "post_offices"
    
    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    
    name = Column(String(255), nullable=False)
    city = Column(String(80), nullable=False, index=True)
    postcode = Column(String(10), nullable=False, index=True)
    street = Column(String(255), nullable=False)
    
    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
    
    def __repr__(self):
        return f"<PostOffice(id={self.id}, name='{self.name}', city='{self.city}')>"
