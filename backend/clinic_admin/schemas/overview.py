from pydantic import BaseModel


class DoctorOverview(BaseModel):
    name: str
    specialty: str
    patients: int


class PatientOverview(BaseModel):
    name: str
    appointments: int
