import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import select
from starlette.exceptions import HTTPException as StarletteHTTPException
from clinic_admin.config import get_settings
from clinic_admin.passwords import hash_password_async
from clinic_admin.database import engine, Base, async_session
from clinic_admin.routers import admin as admin_router
from clinic_admin.routers import auth as auth_router

logger = logging.getLogger(__name__)

settings = get_settings()
logging.getLogger("clinic_admin").setLevel(settings.log_level.upper())


async def seed_bootstrap_admin(session_factory=async_session) -> bool:
    """Create the configured first admin if it doesn't exist. Idempotent."""
    from clinic_admin.models.admin import Admin

    settings = get_settings()
    if not settings.bootstrap_admin_email or not settings.bootstrap_admin_password:
        return False

    async with session_factory() as session:
        existing = await session.scalar(select(Admin).where(Admin.email == settings.bootstrap_admin_email))
        if existing:
            return False
        session.add(Admin(
            first_name=settings.bootstrap_admin_first_name,
            last_name=settings.bootstrap_admin_last_name,
            email=settings.bootstrap_admin_email,
            password=await hash_password_async(settings.bootstrap_admin_password),
        ))
        await session.commit()
    logger.info("Seeded bootstrap admin %s", settings.bootstrap_admin_email)
    return True


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: create tables then seed the first admin
    import clinic_admin.models  # noqa: F401  registers tables on Base.metadata

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    await seed_bootstrap_admin()
    yield
    # Shutdown
    await engine.dispose()


app = FastAPI(
    title="Clinic Admin API",
    description="Administrative API for the clinic: accounts, counts and appointment listings",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


def _format_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = [str(p) for p in err.get("loc", ()) if p != "body"]
        field = ".".join(loc) or "body"
        parts.append(f"{field}: {err.get('msg', 'invalid value')}")
    return "; ".join(parts) or "Invalid request"


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"error": _format_validation_errors(exc)})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Server error"})


app.include_router(auth_router.router, prefix="/api/auth", tags=["Auth"])
app.include_router(admin_router.router, prefix="/api/admin", tags=["Admin"])


@app.get("/api/health")
async def health_check():
    return {"status": "healthy", "service": "clinic-admin-api"}
