from datetime import datetime, time
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from clinic_admin.models.appointment import Appointment, AppointmentStatus
from clinic_admin.schemas.appointment import AppointmentResponse


def start_of_today() -> datetime:
    """Server-local midnight."""
    return datetime.combine(datetime.now().date(), time.min)


class AppointmentService:
    def _with_names(self, query):
        return query.options(selectinload(Appointment.doctor), selectinload(Appointment.patient))

    async def list_history(self, db: AsyncSession) -> list[AppointmentResponse]:
        """Completed and cancelled appointments, latest first."""
        query = self._with_names(
            select(Appointment)
            .where(Appointment.status.in_([AppointmentStatus.COMPLETED, AppointmentStatus.CANCELLED]))
            .order_by(Appointment.date.desc())
        )
        result = await db.execute(query)
        return [AppointmentResponse.from_appointment(a) for a in result.scalars().all()]

    async def list_upcoming(self, db: AsyncSession) -> list[AppointmentResponse]:
        """Scheduled appointments from today's midnight onwards, soonest first."""
        today = start_of_today()
        query = self._with_names(
            select(Appointment)
            .where(Appointment.status == AppointmentStatus.SCHEDULED, Appointment.date >= today)
            .order_by(Appointment.date.asc(), Appointment.time.asc())
        )
        result = await db.execute(query)
        return [AppointmentResponse.from_appointment(a) for a in result.scalars().all()]


appointment_service = AppointmentService()
