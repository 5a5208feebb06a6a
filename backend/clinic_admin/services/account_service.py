from typing import Optional
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from clinic_admin.exceptions import translate_integrity_error
from clinic_admin.models.admin import Admin
from clinic_admin.models.doctor import Doctor
from clinic_admin.passwords import hash_password_async, verify_password_async
from clinic_admin.schemas.account import AdminCreate, DoctorCreate, ProfileUpdate


class AccountService:
    async def _insert(self, db: AsyncSession, record):
        db.add(record)
        try:
            await db.flush()
        except IntegrityError as e:
            await db.rollback()
            raise translate_integrity_error(e) from e
        return record

    async def create_doctor(self, db: AsyncSession, data: DoctorCreate) -> Doctor:
        values = data.model_dump()
        values["password"] = await hash_password_async(data.password)
        return await self._insert(db, Doctor(**values))

    async def create_admin(self, db: AsyncSession, data: AdminCreate) -> Admin:
        values = data.model_dump()
        values["password"] = await hash_password_async(data.password)
        return await self._insert(db, Admin(**values))

    async def get_admin(self, db: AsyncSession, admin_id: str) -> Optional[Admin]:
        return await db.get(Admin, admin_id)

    async def update_profile(self, db: AsyncSession, admin_id: str, data: ProfileUpdate) -> Optional[Admin]:
        """Overwrite name and email of the admin. Last writer wins."""
        admin = await db.get(Admin, admin_id)
        if not admin:
            return None

        admin.first_name = data.first_name
        admin.last_name = data.last_name
        admin.email = data.email

        try:
            await db.flush()
        except IntegrityError as e:
            await db.rollback()
            raise translate_integrity_error(e) from e
        await db.refresh(admin)
        return admin

    async def authenticate_admin(self, db: AsyncSession, email: str, password: str) -> Optional[Admin]:
        admin = await db.scalar(select(Admin).where(Admin.email == email))
        if admin and await verify_password_async(password, admin.password):
            return admin
        return None


account_service = AccountService()
