import logging
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from clinic_admin.auth import get_current_user, require_admin, Principal
from clinic_admin.database import get_db, get_session_factory
from clinic_admin.exceptions import DuplicateKeyError, RecordValidationError
from clinic_admin.schemas.account import (
    AdminCreate, AdminResponse, DoctorCreate, ProfileUpdate, ProfileUpdateResponse,
)
from clinic_admin.schemas.appointment import AppointmentResponse
from clinic_admin.schemas.common import MessageResponse
from clinic_admin.schemas.overview import DoctorOverview, PatientOverview
from clinic_admin.services.account_service import account_service
from clinic_admin.services.appointment_service import appointment_service
from clinic_admin.services.overview_service import overview_service

logger = logging.getLogger(__name__)

router = APIRouter()

SERVER_ERROR = "Server error"


@router.post("/add-doctor", response_model=MessageResponse, status_code=201)
async def add_doctor(
    data: DoctorCreate,
    db: AsyncSession = Depends(get_db),
    current_user: Principal = Depends(require_admin("Not authorized to add doctors")),
):
    try:
        await account_service.create_doctor(db, data)
    except DuplicateKeyError:
        raise HTTPException(status_code=400, detail="Email or license number already exists")
    except RecordValidationError as e:
        raise HTTPException(status_code=400, detail=e.reason)
    except SQLAlchemyError:
        logger.exception("Error adding doctor")
        raise HTTPException(status_code=500, detail=SERVER_ERROR)
    return {"message": "Doctor added successfully"}


@router.post("/add-admin", response_model=MessageResponse, status_code=201)
async def add_admin(
    data: AdminCreate,
    db: AsyncSession = Depends(get_db),
    current_user: Principal = Depends(require_admin("Not authorized to add admins")),
):
    try:
        await account_service.create_admin(db, data)
    except DuplicateKeyError:
        raise HTTPException(status_code=400, detail="Email already exists")
    except RecordValidationError as e:
        raise HTTPException(status_code=400, detail=e.reason)
    except SQLAlchemyError:
        logger.exception("Error adding admin")
        raise HTTPException(status_code=500, detail=SERVER_ERROR)
    return {"message": "Admin added successfully"}


@router.get("/profile", response_model=AdminResponse)
async def get_profile(
    db: AsyncSession = Depends(get_db),
    current_user: Principal = Depends(get_current_user),
):
    try:
        admin = await account_service.get_admin(db, current_user.id)
    except SQLAlchemyError:
        logger.exception("Error fetching admin profile")
        raise HTTPException(status_code=500, detail=SERVER_ERROR)
    if not admin:
        raise HTTPException(status_code=404, detail="Admin not found")
    return AdminResponse.model_validate(admin)


@router.put("/profile", response_model=ProfileUpdateResponse)
async def update_profile(
    data: ProfileUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: Principal = Depends(get_current_user),
):
    # The admin is always the token's subject; the body cannot pick another record.
    try:
        admin = await account_service.update_profile(db, current_user.id, data)
    except DuplicateKeyError:
        raise HTTPException(status_code=400, detail="Email already exists")
    except RecordValidationError as e:
        raise HTTPException(status_code=400, detail=e.reason)
    except SQLAlchemyError:
        logger.exception("Error updating admin profile")
        raise HTTPException(status_code=500, detail=SERVER_ERROR)
    if not admin:
        raise HTTPException(status_code=404, detail="Admin not found")
    return ProfileUpdateResponse(
        message="Profile updated successfully",
        admin=AdminResponse.model_validate(admin),
    )


@router.get("/total-doctors")
async def total_doctors(
    db: AsyncSession = Depends(get_db),
    current_user: Principal = Depends(get_current_user),
):
    try:
        total = await overview_service.count_doctors(db)
    except SQLAlchemyError:
        logger.exception("Error fetching total doctors")
        raise HTTPException(status_code=500, detail=SERVER_ERROR)
    return {"totalDoctors": total}


@router.get("/total-patients")
async def total_patients(
    db: AsyncSession = Depends(get_db),
    current_user: Principal = Depends(get_current_user),
):
    try:
        total = await overview_service.count_patients(db)
    except SQLAlchemyError:
        logger.exception("Error fetching total patients")
        raise HTTPException(status_code=500, detail=SERVER_ERROR)
    return {"totalPatients": total}


@router.get("/doctor-overview", response_model=list[DoctorOverview])
async def doctor_overview(
    db: AsyncSession = Depends(get_db),
    session_factory: async_sessionmaker = Depends(get_session_factory),
    current_user: Principal = Depends(get_current_user),
):
    try:
        return await overview_service.doctor_overview(db, session_factory)
    except SQLAlchemyError:
        logger.exception("Error fetching doctor overview")
        raise HTTPException(status_code=500, detail=SERVER_ERROR)


@router.get("/patient-overview", response_model=list[PatientOverview])
async def patient_overview(
    db: AsyncSession = Depends(get_db),
    session_factory: async_sessionmaker = Depends(get_session_factory),
    current_user: Principal = Depends(get_current_user),
):
    try:
        return await overview_service.patient_overview(db, session_factory)
    except SQLAlchemyError:
        logger.exception("Error fetching patient overview")
        raise HTTPException(status_code=500, detail=SERVER_ERROR)


@router.get("/appointment/completed-cancelled", response_model=list[AppointmentResponse])
async def completed_cancelled_appointments(
    db: AsyncSession = Depends(get_db),
    current_user: Principal = Depends(get_current_user),
):
    try:
        return await appointment_service.list_history(db)
    except SQLAlchemyError:
        logger.exception("Error fetching completed/cancelled appointments")
        raise HTTPException(status_code=500, detail=SERVER_ERROR)


@router.get("/appointments/upcoming", response_model=list[AppointmentResponse])
async def upcoming_appointments(
    db: AsyncSession = Depends(get_db),
    current_user: Principal = Depends(get_current_user),
):
    try:
        return await appointment_service.list_upcoming(db)
    except SQLAlchemyError:
        logger.exception("Error fetching upcoming appointments")
        raise HTTPException(status_code=500, detail=SERVER_ERROR)
