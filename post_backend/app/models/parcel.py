"""
Parcel database model.

A parcel moves from an origin post office to a destination post office.
Its price is computed from weight and delivery tier when it is created.
"""

from sqlalchemy import Column, Integer, String, Float, DateTime, ForeignKey, Enum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from post_backend.app.db.session import Base
from post_backend.app.models.parcel_enums import ParcelStatus, DeliveryType, ParcelDescription
from post_backend.app.models.post_office import PostOffice


class Parcel(Base):
    """
    Parcel model.
    
    The tracking number is generated on creation and never changes.
    Status only changes through the parcel lifecycle service.
    """
    __tablename__ = "parcels"
    
    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    
    # Parcel identification
    tracking_number = Column(String(64), unique=True, nullable=False, index=True)
    
    # Parties
    sender_client_id = Column(Integer, ForeignKey('clients.id'), nullable=False, index=True)
    recipient_client_id = Column(Integer, ForeignKey('clients.id'), nullable=False, index=True)
    
    # Physical properties and pricing
    weight = Column(Float, nullable=False)
    price = Column(Float, nullable=False)
    
    # Classification
    status = Column(Enum(ParcelStatus), default=ParcelStatus.CREATED, nullable=False, index=True)
    delivery_type = Column(Enum(DeliveryType), default=DeliveryType.DEFAULT, nullable=False, index=True)
    parcel_description = Column(Enum(ParcelDescription), nullable=False, index=True)
    
    # Route
    origin_post_office_id = Column(Integer, ForeignKey('post_offices.id'), nullable=False, index=True)
    destination_post_office_id = Column(Integer, ForeignKey('post_offices.id'), nullable=False, index=True)
    
    # Loaded eagerly so responses can embed both offices
    origin_post_office = relationship(PostOffice, foreign_keys=[origin_post_office_id], lazy="selectin")
    destination_post_office = relationship(PostOffice, foreign_keys=[destination_post_office_id], lazy="selectin")
    
    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
    
    def __repr__(self):
        return f"<Parcel(id={self.id}, tracking='{self.tracking_number}', status='{self.status.value}')>"
