from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from contextlib import asynccontextmanager
from typing import Optional
import logging
import uvicorn

# Import routers
from conference_portal.api.routes import admin, fees, health, payments, register
from conference_portal.core.config import Settings, settings as default_settings
from conference_portal.core.errors import register_exception_handlers
from conference_portal.core.logging import setup_logging
from conference_portal.services.admin import AdminService
from conference_portal.services.payments import PaymentService
from conference_portal.services.record_store import RecordStore
from conference_portal.services.registrations import RegistrationService
from conference_portal.services.uploads import UploadHandler, paper_policy, proof_policy

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan events for startup and shutdown"""
    # Startup
    settings = app.state.settings
    logger.info("🚀 Starting Conference Portal API...")

    settings.upload_path.mkdir(parents=True, exist_ok=True)
    records = app.state.record_store.load()
    logger.info(f"📦 Registration store ready at {settings.db_path} ({len(records)} records)")
    logger.info(f"📎 Uploads served from {settings.upload_path.resolve()}")

    yield

    # Shutdown
    logger.info("👋 Shutting down...")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or default_settings

    app = FastAPI(
        title=settings.PROJECT_NAME,
        description="Conference registration, fee payment and admin API",
        version=settings.VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # Services are built once per app and shared through app.state
    store = RecordStore(settings.db_path)
    uploads = UploadHandler(settings.upload_path)

    app.state.settings = settings
    app.state.record_store = store
    app.state.registration_service = RegistrationService(
        store, uploads, paper_policy(settings.MAX_PAPER_SIZE_MB)
    )
    app.state.payment_service = PaymentService(
        store,
        uploads,
        proof_policy(settings.MAX_PROOF_SIZE_MB),
        proof_required=settings.PAYMENT_PROOF_REQUIRED,
    )
    app.state.admin_service = AdminService(store)

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.ALLOWED_ORIGIN],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Include routers
    app.include_router(health.router, prefix="/api", tags=["Health"])
    app.include_router(fees.router, prefix="/api", tags=["Fees"])
    app.include_router(register.router, prefix="/api", tags=["Registration"])
    app.include_router(payments.router, prefix="/api", tags=["Payment"])
    app.include_router(admin.router, prefix="/api/admin", tags=["Admin"])

    # Uploaded papers and payment proofs; the directory is created at startup
    app.mount(
        "/uploads",
        StaticFiles(directory=str(settings.upload_path), check_dir=False),
        name="uploads",
    )

    @app.get("/")
    async def root():
        """Root endpoint with API information"""
        return {
            "service": settings.PROJECT_NAME,
            "version": settings.VERSION,
            "status": "operational",
            "docs": "/docs",
            "endpoints": {
                "health": "/api/health",
                "fees": "/api/fees",
                "register": "/api/register",
                "confirm_payment": "/api/confirm-payment/{id}",
                "admin_registrations": "/api/admin/registrations",
                "admin_export": "/api/admin/export",
            },
        }

    return app


setup_logging(default_settings.LOG_LEVEL, default_settings.LOG_FILE)
app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host=default_settings.HOST, port=default_settings.PORT, reload=False)
