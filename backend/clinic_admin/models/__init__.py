from clinic_admin.models.admin import Admin
from clinic_admin.models.doctor import Doctor
from clinic_admin.models.user import User
from clinic_admin.models.appointment import Appointment, AppointmentStatus

__all__ = ["Admin", "Doctor", "User", "Appointment", "AppointmentStatus"]
