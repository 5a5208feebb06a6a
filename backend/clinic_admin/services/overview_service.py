import asyncio
from sqlalchemy import select, func, distinct
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from clinic_admin.models.appointment import Appointment
from clinic_admin.models.doctor import Doctor
from clinic_admin.models.user import User
from clinic_admin.schemas.overview import DoctorOverview, PatientOverview

PATIENT_ROLE = "patient"


class OverviewService:
    async def count_doctors(self, db: AsyncSession) -> int:
        return await db.scalar(select(func.count(Doctor.id))) or 0

    async def count_patients(self, db: AsyncSession) -> int:
        return await db.scalar(
            select(func.count(User.id)).where(User.role == PATIENT_ROLE)
        ) or 0

    async def _distinct_patient_count(self, session_factory: async_sessionmaker, doctor_id: str) -> int:
        async with session_factory() as session:
            return await session.scalar(
                select(func.count(distinct(Appointment.patient_id))).where(Appointment.doctor_id == doctor_id)
            ) or 0

    async def _appointment_count(self, session_factory: async_sessionmaker, patient_id: str) -> int:
        async with session_factory() as session:
            return await session.scalar(
                select(func.count(Appointment.id)).where(Appointment.patient_id == patient_id)
            ) or 0

    async def doctor_overview(self, db: AsyncSession, session_factory: async_sessionmaker) -> list[DoctorOverview]:
        result = await db.execute(
            select(Doctor.id, Doctor.first_name, Doctor.last_name, Doctor.specialty)
        )
        doctors = result.all()

        # One sub-query per doctor, each on its own session so they can run together.
        counts = await asyncio.gather(
            *(self._distinct_patient_count(session_factory, d.id) for d in doctors)
        )
        return [
            DoctorOverview(
                name=f"{d.first_name} {d.last_name}",
                specialty=d.specialty,
                patients=count,
            )
            for d, count in zip(doctors, counts)
        ]

    async def patient_overview(self, db: AsyncSession, session_factory: async_sessionmaker) -> list[PatientOverview]:
        result = await db.execute(
            select(User.id, User.first_name, User.last_name).where(User.role == PATIENT_ROLE)
        )
        patients = result.all()

        counts = await asyncio.gather(
            *(self._appointment_count(session_factory, p.id) for p in patients)
        )
        return [
            PatientOverview(name=f"{p.first_name} {p.last_name}", appointments=count)
            for p, count in zip(patients, counts)
        ]


overview_service = OverviewService()
