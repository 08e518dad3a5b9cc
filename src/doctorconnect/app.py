"""
FastAPI application factory for Doctor Connect.
"""

import logging
import traceback
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from .adapters.db.mongo.repositories import (
    MongoCertificateRepository,
    MongoDoctorRepository,
    MongoEnrollmentRepository,
    MongoHospitalRepository,
)
from .adapters.external.certificate_pdf_reportlab import ReportLabCertificateRenderer
from .adapters.storage.local_certificate_storage import LocalCertificateStorage
from .api.routers import admin, auth, certificates, doctors, enrollments, health, hospitals
from .api.utils.responses import fail
from .core.auth import AuthService
from .core.config import Settings, get_settings
from .core.container import Container, ServiceNames
from .core.exceptions import DoctorConnectException
from .core.security import PasswordHasher, TokenService
from .core.structured_logger import configure_logging
from .domain.errors import DomainError
from .middleware.performance_middleware import PerformanceMiddleware
from .middleware.request_id_middleware import RequestIDMiddleware

logger = logging.getLogger(__name__)


def build_container(settings: Settings) -> Container:
    """Wire the production adapters."""
    container = Container()
    container.register_singleton(ServiceNames.SETTINGS, settings)

    container.register_singleton(ServiceNames.DOCTOR_REPOSITORY, MongoDoctorRepository())
    container.register_singleton(ServiceNames.HOSPITAL_REPOSITORY, MongoHospitalRepository())
    container.register_singleton(ServiceNames.ENROLLMENT_REPOSITORY, MongoEnrollmentRepository())
    container.register_singleton(ServiceNames.CERTIFICATE_REPOSITORY, MongoCertificateRepository())

    register_security_services(container, settings)

    container.register_factory(
        ServiceNames.CERTIFICATE_RENDERER,
        lambda: ReportLabCertificateRenderer(
            settings.certificates.issuer_name, settings.certificates.contact_email
        ),
    )
    container.register_factory(
        ServiceNames.CERTIFICATE_STORAGE,
        lambda: LocalCertificateStorage(settings.certificates.storage_path),
    )
    return container


def register_security_services(container: Container, settings: Settings) -> None:
    """Hasher, token service and auth gate; requires the doctor repository."""
    container.register_factory(
        ServiceNames.PASSWORD_HASHER,
        lambda: PasswordHasher(rounds=settings.security.bcrypt_rounds),
    )
    container.register_factory(
        ServiceNames.TOKEN_SERVICE,
        lambda: TokenService.from_settings(settings.security),
    )
    container.register_factory(
        ServiceNames.AUTH_SERVICE,
        lambda: AuthService(
            container.get(ServiceNames.TOKEN_SERVICE),
            container.get(ServiceNames.DOCTOR_REPOSITORY),
        ),
    )


async def connect_database(settings: Settings):
    """Open the Motor client and register the Beanie documents."""
    from beanie import init_beanie
    from motor.motor_asyncio import AsyncIOMotorClient
    import certifi

    from .adapters.db.mongo.models import DOCUMENT_MODELS

    mongo_uri = settings.database.uri
    timeout_ms = settings.database.server_selection_timeout_ms

    # Enable TLS only for Atlas SRV URIs
    if mongo_uri.startswith("mongodb+srv://"):
        client = AsyncIOMotorClient(
            mongo_uri,
            serverSelectionTimeoutMS=timeout_ms,
            tls=True,
            tlsCAFile=certifi.where(),
            tlsAllowInvalidCertificates=False,
        )
    else:
        client = AsyncIOMotorClient(mongo_uri, serverSelectionTimeoutMS=timeout_ms)

    await init_beanie(database=client[settings.database.db_name], document_models=DOCUMENT_MODELS)
    return client


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    settings: Settings = app.state.settings
    container: Container = app.state.container

    logger.info(f"🚀 Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"📊 Environment: {settings.app_env}")
    logger.info(f"🔧 Debug mode: {settings.debug}")

    client = None
    if app.state.manage_database:
        try:
            client = await connect_database(settings)
            container.register_singleton(ServiceNames.DATABASE_CLIENT, client)
            logger.info("✅ Database connection established")
        except Exception as e:
            logger.error(f"❌ Database connection failed: {e}")
            logger.error(f"Traceback:\n{traceback.format_exc()}")
            raise

    logger.info("✅ Application startup completed successfully")

    yield

    logger.info(f"🛑 Shutting down {settings.app_name}")
    if client is not None:
        client.close()


def create_app(settings: Optional[Settings] = None, container: Optional[Container] = None) -> FastAPI:
    """Create and configure FastAPI application.

    Passing a prebuilt container skips the MongoDB connection; the caller
    owns whatever adapters it registered.
    """
    settings = settings or get_settings()
    configure_logging(settings.logging)

    app = FastAPI(
        title=settings.app_name,
        description="Volunteer doctor placements at hospitals, with service certificates",
        version=settings.app_version,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.manage_database = container is None
    app.state.container = container or build_container(settings)
    if not app.state.container.has(ServiceNames.SETTINGS):
        app.state.container.register_singleton(ServiceNames.SETTINGS, settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors.allowed_origins,
        allow_credentials=False,
        allow_methods=settings.cors.allowed_methods,
        allow_headers=settings.cors.allowed_headers,
        max_age=600,
        expose_headers=["X-Request-ID", "X-Process-Time", "Content-Disposition"],
    )
    app.add_middleware(PerformanceMiddleware)
    # Added last so it runs first and every later layer sees the id
    app.add_middleware(RequestIDMiddleware)

    app.include_router(health.router)
    for module in (auth, doctors, hospitals, enrollments, admin, certificates):
        app.include_router(module.router, prefix=settings.api_prefix)

    @app.get("/", include_in_schema=False)
    async def root():
        return {
            "service": settings.app_name,
            "version": settings.app_version,
            "status": "running",
            "docs": "/docs",
            "health": "/health",
        }

    @app.exception_handler(DomainError)
    async def domain_error_handler(request: Request, exc: DomainError):
        req_id = getattr(request.state, "request_id", None)
        logger.info(f"DomainError: {exc.error_code} ({exc.http_status}) {exc.message} | request_id={req_id}")
        return fail(request, exc.error_code, exc.message, status_code=exc.http_status, details=exc.details)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        error_details = exc.errors()
        error_messages = []
        for error in error_details:
            loc = " -> ".join(str(x) for x in error.get("loc", []))
            error_messages.append(f"{loc}: {error.get('msg', 'Validation error')}")
        logger.info(f"ValidationError on {request.method} {request.url.path}: {error_messages}")
        return fail(
            request,
            "VALIDATION_ERROR",
            f"Input validation failed: {'; '.join(error_messages)}",
            status_code=400,
            details={
                "errors": [{"loc": list(e.get("loc", [])), "msg": e.get("msg", "")} for e in error_details],
                "path": request.url.path,
            },
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        code = "NOT_FOUND" if exc.status_code == 404 else "HTTP_ERROR"
        return fail(request, code, str(exc.detail), status_code=exc.status_code)

    @app.exception_handler(DoctorConnectException)
    async def infrastructure_error_handler(request: Request, exc: DoctorConnectException):
        logger.error(f"{type(exc).__name__}: {exc.message}", exc_info=exc)
        message = exc.message if settings.expose_error_details else "An unexpected error has occurred. Please try again later."
        return fail(request, exc.error_code or "INTERNAL_ERROR", message, status_code=500)

    @app.exception_handler(Exception)
    async def internal_error_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled error: {type(exc).__name__}: {exc}", exc_info=exc)
        message = str(exc) if settings.expose_error_details else "An unexpected error has occurred. Please try again later."
        return fail(request, "INTERNAL_ERROR", message, status_code=500)

    return app


# Create the app instance
app = create_app()
