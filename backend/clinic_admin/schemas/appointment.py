from datetime import datetime
from typing import Optional
from clinic_admin.schemas.common import CamelModel


class PersonName(CamelModel):
    id: str
    first_name: str
    last_name: str


class AppointmentResponse(CamelModel):
    """Appointment with doctorId / patientId replaced by the referenced names."""
    id: str
    doctor_id: Optional[PersonName] = None
    patient_id: Optional[PersonName] = None
    date: datetime
    time: str
    status: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_appointment(cls, appointment) -> "AppointmentResponse":
        return cls(
            id=appointment.id,
            doctor_id=PersonName.model_validate(appointment.doctor) if appointment.doctor else None,
            patient_id=PersonName.model_validate(appointment.patient) if appointment.patient else None,
            date=appointment.date,
            time=appointment.time,
            status=appointment.status,
            created_at=appointment.created_at,
            updated_at=appointment.updated_at,
        )
