from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from clinic_admin.database import Base
from clinic_admin.models.base import new_id


class Doctor(Base):
    __tablename__ = "doctors"

    id = Column(String(36), primary_key=True, default=new_id)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    email = Column(String(200), unique=True, nullable=False, index=True)
    specialty = Column(String(100), nullable=False)
    license_number = Column(String(50), unique=True, nullable=False, index=True)
    phone_number = Column(String(20), nullable=False)
    password = Column(String(255), nullable=False)  # bcrypt hash
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    appointments = relationship("Appointment", back_populates="doctor")
