"""
Employee database model.

Employees work at a single post office and are credited on parcel handling entries.
"""

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Enum
from sqlalchemy.sql import func
from post_backend.app.db.session import Base
from post_backend.app.models.enums import EmployeePosition


class Employee(Base):
    """Employee model."""
    __tablename__ = "employees"
    
    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    first_name = Column(String(64), nullable=False)
    last_name = Column(String(64), nullable=False)
    position = Column(Enum(EmployeePosition), nullable=False, index=True)
    
    # Assigned post office
    post_office_id = Column(Integer, ForeignKey('post_offices.id'), nullable=False, index=True)
    
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
    
    def __repr__(self):
        return f"<Employee(id={self.id}, position='{self.position.value}', post_office_id={self.post_office_id})>"
