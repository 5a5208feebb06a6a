from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from clinic_admin.auth import create_token
from clinic_admin.config import get_settings
from clinic_admin.database import get_db
from clinic_admin.schemas.auth import LoginRequest, TokenResponse
from clinic_admin.services.account_service import account_service

router = APIRouter()


@router.post("/token", response_model=TokenResponse)
async def get_token(body: LoginRequest, db: AsyncSession = Depends(get_db)):
    """Exchange an admin's email and password for a JWT."""
    admin = await account_service.authenticate_admin(db, body.email.strip(), body.password)
    if not admin:
        raise HTTPException(status_code=401, detail="Invalid credentials")

    settings = get_settings()
    token = create_token(
        admin.id,
        "admin",
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        expires_in=settings.token_expire_seconds,
    )
    return TokenResponse(access_token=token, id=admin.id, role="admin")
