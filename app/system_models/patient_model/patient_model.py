# app/system_models/patient_model/patient_model.py
from sqlalchemy import Column, Integer, String, DateTime, UniqueConstraint
from app.database.connection import Base
from app.helpers.time import utcnow

EMAIL_CONSTRAINT = "uk_patient_email"


class Patient(Base):
    __tablename__ = "patients"

    id = Column(Integer, primary_key=True, index=True)

    first_name = Column(String(255), nullable=False)
    last_name = Column(String(255), nullable=False)
    address = Column(String(255), nullable=False)
    city = Column(String(255), nullable=False)
    state = Column(String(255), nullable=False)
    zip_code = Column(String(10), nullable=False)
    phone_number = Column(String(20), nullable=False)
    email = Column(String(100), nullable=False)

    # The store sets both explicitly; defaults only cover raw inserts.
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    __table_args__ = (
        UniqueConstraint("email", name=EMAIL_CONSTRAINT),
        # ids are never handed out twice, even after deleting the newest row
        {"sqlite_autoincrement": True},
    )

    def __repr__(self):
        return f"<Patient {self.id}: {self.first_name} {self.last_name} <{self.email}>>"
